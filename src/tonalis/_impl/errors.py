"""
Exceptions raised when pitch, accidental, interval or scale notation cannot be parsed.

All of them derive from `ValueError`, so `except ValueError` keeps working for callers that
only care whether a string is valid notation.
"""

from __future__ import annotations

__all__ = [
    "ParseError",
    "ParsePitchError",
    "InvalidPitchName",
    "InvalidAccidental",
    "NoOctaveFound",
    "InvalidOctave",
    "ParseIntervalError",
    "InvalidNumber",
    "InvalidQuality",
    "Impossible",
]


class ParseError(ValueError):
    """Base class of all notation parsing errors."""

    def __init__(self, src: str, message: str | None = None):
        self.src = src
        super().__init__(message if message is not None else f"cannot parse `{src}`")


class ParsePitchError(ParseError):
    """Raised when pitch or accidental notation is malformed."""


class InvalidPitchName(ParsePitchError):
    def __init__(self, src: str):
        super().__init__(src, f"pitch name `{src}` is invalid")


class InvalidAccidental(ParsePitchError):
    def __init__(self, src: str):
        super().__init__(src, f"accidental `{src}` is invalid")


class NoOctaveFound(ParsePitchError):
    def __init__(self, src: str):
        super().__init__(src, f"no octave in `{src}`")


class InvalidOctave(ParsePitchError):
    def __init__(self, src: str):
        super().__init__(src, f"could not parse octave `{src}`")


class ParseIntervalError(ParseError):
    """Raised when interval notation is malformed."""


class InvalidNumber(ParseIntervalError):
    def __init__(self, src: str):
        super().__init__(src, f"could not parse interval number `{src}`")


class InvalidQuality(ParseIntervalError):
    def __init__(self, src: str):
        super().__init__(src, f"could not parse interval quality `{src}`")


class Impossible(ParseIntervalError):
    """
    Raised for an interval quality that the interval number cannot have, such as a minor
    unison or a perfect third. `quality` is `None` when the quality was left empty, which
    means perfect. `src` is the interval text as written.
    """

    def __init__(self, number: int, quality: str | None = None, src: str | None = None):
        self.number = number
        self.quality = quality
        simple = (abs(number) - 1) % 7 + 1
        if quality is None:
            message = (
                f"interval of number {number} (octave equivalent to {simple}) "
                "cannot be perfect"
            )
        else:
            message = (
                f"interval of number {number} (octave equivalent to {simple}) "
                f"cannot have quality `{quality}`"
            )
        if src is None:
            src = f"{quality or ''}{number}"
        super().__init__(src, message)
