from __future__ import annotations

from .errors import *  # noqa: F401, F403
from .errors import ParseError, __all__ as _errorsAll
from .steps import *  # noqa: F401, F403
from .steps import __all__ as _stepsAll
from .pitch import *  # noqa: F401, F403
from .pitch import Interval, Pitch, __all__ as _pitchAll
from .scale import *  # noqa: F401, F403
from .scale import __all__ as _scaleAll
from .accidentals import *  # noqa: F401, F403
from .accidentals import __all__ as _accidentalsAll

__all__ = [
    *_errorsAll,
    *_stepsAll,
    *_pitchAll,
    *_scaleAll,
    *_accidentalsAll,
    "parse",
]


def parse(src: str) -> Pitch | Interval:
    """
    Parses either pitch notation (`"Eb4"`) or interval notation (`"m3"`), trying pitch notation
    first.

    Raises `ParseError` if the string is neither.
    """
    try:
        return Pitch.parse(src)
    except ParseError:
        pass
    try:
        return Interval.parse(src)
    except ParseError:
        raise ParseError(src, f"`{src}` is neither a pitch nor an interval") from None
