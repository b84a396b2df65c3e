"""
Decides which notes need a written accidental, given a key signature and the accidentals
already written earlier in the same measure.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
import itertools as it
import logging
from typing import Self, overload

import pyrsistent as pyr

from .pitch import Accidental, Intervals, Pitch
from .scale import Scale, Scales
from .steps import PitchName

__all__ = [
    "KeyAccidental",
    "KeySignature",
    "ConcreteAccidental",
    "AccidentalCalculator",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyAccidental:
    """Accidental applied by a key signature to one letter in every octave."""

    step: int
    accidental: Accidental

    def __str__(self) -> str:
        return f"{PitchName(self.step)}{self.accidental}"


@dataclass(frozen=True)
class ConcreteAccidental:
    """Accidental written at one staff position, valid for that octave only."""

    staffPosition: int
    accidental: Accidental


class KeySignature(Sequence[KeyAccidental]):
    """
    The accidentals of a key, one entry per scale degree. Naturals are kept as entries as well,
    so a signature built from a seven note scale covers every letter.
    """

    __slots__ = ("_accidentals",)

    def __new__(cls, accidentals: Iterable[KeyAccidental] = ()) -> Self:
        self = object.__new__(cls)
        self._accidentals = pyr.pvector(accidentals)
        return self

    @classmethod
    def fromScale(cls, root: Pitch | str, scale: Scale) -> Self:
        if isinstance(root, str):
            root = Pitch(root)
        # degrees with a negative chromatic size sort before the unison; the root itself wins
        # over any other spelling of its letter
        start = scale.index(Intervals.UNISON)
        seen: set[int] = set()
        accidentals = []
        for interval in it.chain(scale[start:], scale[:start]):
            p = root + interval
            step = p.staffPosition % 7
            if step not in seen:
                seen.add(step)
                accidentals.append(KeyAccidental(step, p.accidental))
        return cls(accidentals)

    @classmethod
    def major(cls, root: Pitch | str) -> Self:
        return cls.fromScale(root, Scales.MAJOR)

    @classmethod
    def minor(cls, root: Pitch | str) -> Self:
        """The signature of the relative major, a minor third above `root`."""
        if isinstance(root, str):
            root = Pitch(root)
        return cls.fromScale(root + Intervals.MIN_THIRD, Scales.MAJOR)

    def lookup(self, step: int) -> Accidental | None:
        """Accidental the signature assigns to the letter at `step`, `None` if not covered."""
        step %= 7
        for keyAcci in self._accidentals:
            if keyAcci.step == step:
                return keyAcci.accidental
        return None

    def __len__(self) -> int:
        return len(self._accidentals)

    @overload
    def __getitem__(self, key: int) -> KeyAccidental: ...

    @overload
    def __getitem__(self, key: slice) -> Sequence[KeyAccidental]: ...

    def __getitem__(self, key):
        return self._accidentals[key]

    def __iter__(self) -> Iterator[KeyAccidental]:
        return iter(self._accidentals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySignature):
            return False
        return self._accidentals == other._accidentals

    def __hash__(self) -> int:
        return hash(self._accidentals)

    def __str__(self) -> str:
        return " ".join(map(str, self._accidentals))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'


class AccidentalCalculator:
    """
    Tracks the accidentals written so far in one voice. Feed it the notes in order with
    `getAndUpdate()` and call `clear()` at every barline.

    The result depends on call order, so each voice needs its own calculator.
    """

    __slots__ = ("_signature", "_accidentals")

    def __init__(self, signature: KeySignature | None = None):
        self._signature = KeySignature() if signature is None else signature
        self._accidentals: list[ConcreteAccidental] = []

    @property
    def signature(self) -> KeySignature:
        return self._signature

    @property
    def accidentals(self) -> tuple[ConcreteAccidental, ...]:
        """Accidentals written since the last `clear()`, oldest first."""
        return tuple(self._accidentals)

    def getAndUpdate(self, pitch: Pitch) -> Accidental | None:
        """
        Returns the accidental to write in front of `pitch`, or `None` if the note needs no
        accidental. A written accidental is remembered for later notes at the same staff
        position.

        The note is compared with the latest accidental written at its staff position, or
        with the key signature if there is none. Letters the signature does not cover count
        as natural.
        """
        position = pitch.staffPosition
        accidental = pitch.accidental
        current = self._lookup(position)
        if current is None:
            current = self._signature.lookup(position)
        if current is None:
            current = Accidental(0)

        if accidental == current:
            logger.debug("%s: no accidental needed", pitch)
            return None
        self._accidentals.append(ConcreteAccidental(position, accidental))
        logger.debug("%s: showing accidental %r", pitch, accidental)
        return accidental

    def _lookup(self, position: int) -> Accidental | None:
        for concrete in reversed(self._accidentals):
            if concrete.staffPosition == position:
                return concrete.accidental
        return None

    def clear(self) -> None:
        logger.debug("clearing %d accidentals", len(self._accidentals))
        self._accidentals.clear()

    def changeKeySignature(self, signature: KeySignature) -> None:
        logger.debug("changing key signature from %s to %s", self._signature, signature)
        self._signature = signature
        self._accidentals.clear()
