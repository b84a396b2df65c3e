"""
Constant tables and the quality classification functions that relate the diatonic size of an
interval to its chromatic size.

Diatonic sizes are zero-based staff-step counts: a unison is `0`, a third is `2`, an octave is
`7`. All divisions use floor semantics, so negative sizes fall into the same classes as their
positive counterparts.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

import numpy as np
import pyrsistent as pyr

from .errors import InvalidPitchName
from ..utils import noInstance

__all__ = [
    "MAJOR_SCALE_TONES",
    "PERFECTABLE_STEPS",
    "PitchName",
    "Accis",
    "hasPerfectQuality",
    "naturalChromaticForPerfect",
    "naturalChromaticForMinor",
    "naturalChromatic",
    "naturalTone",
]

MAJOR_SCALE_TONES: Sequence[int] = np.sort(np.arange(-1, 6) * 7 % 12)
"""
Major scale tones in increasing order, obtained by sorting a chain of fifths starting from F.

**Value**: `np.array([0, 2, 4, 5, 7, 9, 11])`
"""
MAJOR_SCALE_TONES.flags.writeable = False

PERFECTABLE_STEPS = frozenset((0, 3, 4))
"""Octave-reduced diatonic sizes whose quality family contains "perfect"."""

# chromatic size of the perfect / minor interval for each octave-reduced diatonic size
_perfectTones = pyr.pmap(
    {step: int(MAJOR_SCALE_TONES[step]) for step in sorted(PERFECTABLE_STEPS)}
)
_minorTones = pyr.pmap(
    {
        step: int(MAJOR_SCALE_TONES[step]) - 1
        for step in range(7)
        if step not in PERFECTABLE_STEPS
    }
)


class PitchName(IntEnum):
    """
    The seven letter names. The enum value is the diatonic offset from C.
    """

    C = 0
    D = 1
    E = 2
    F = 3
    G = 4
    A = 5
    B = 6

    @classmethod
    def fromDiatonic(cls, diatonic: int) -> PitchName:
        """Letter name of the given staff position, where `0` is a C."""
        return cls(diatonic % 7)

    @classmethod
    def parse(cls, src: str) -> PitchName:
        """Parses an upper case letter from `A` to `G`."""
        if len(src) != 1 or src not in cls.__members__:
            raise InvalidPitchName(src)
        return cls[src]

    @property
    def diatonic(self) -> int:
        return int(self)

    @property
    def chromatic(self) -> int:
        """Half steps from C up to the natural pitch of this letter."""
        return int(MAJOR_SCALE_TONES[self])

    def __str__(self) -> str:
        return self.name


@noInstance
class Accis:
    """
    Common accidental constants, in half steps.
    """

    TRIPLE_SHARP = SSS = 3
    DOUBLE_SHARP = SS = 2
    SHARP = S = 1
    NATURAL = N = 0
    FLAT = F = -1
    DOUBLE_FLAT = FF = -2
    TRIPLE_FLAT = FFF = -3


def hasPerfectQuality(diatonic: int) -> bool:
    """
    Whether an interval of the given diatonic size belongs to the perfect quality family
    (unisons, fourths, fifths and their compounds) rather than the minor / major family.
    """
    return diatonic % 7 in PERFECTABLE_STEPS


def naturalChromaticForPerfect(diatonic: int) -> int:
    """
    Chromatic size of the perfect interval with the given diatonic size. Negative sizes give
    the negated value of their positive counterpart.

    Raises `ValueError` if the size has no perfect quality. Callers are expected to check
    `hasPerfectQuality()` first.
    """
    if diatonic < 0:
        return -naturalChromaticForPerfect(-diatonic)
    octave, step = divmod(diatonic, 7)
    tone = _perfectTones.get(step)
    if tone is None:
        raise ValueError(
            f"interval of diatonic size {diatonic} cannot have perfect quality"
        )
    return octave * 12 + tone


def naturalChromaticForMinor(diatonic: int) -> int:
    """
    Chromatic size of the minor interval with the given diatonic size. Negative sizes give
    the negated value of their positive counterpart.

    Raises `ValueError` if the size has no minor quality. Callers are expected to check
    `hasPerfectQuality()` first.
    """
    if diatonic < 0:
        return -naturalChromaticForMinor(-diatonic)
    octave, step = divmod(diatonic, 7)
    tone = _minorTones.get(step)
    if tone is None:
        raise ValueError(
            f"interval of diatonic size {diatonic} cannot have minor quality"
        )
    return octave * 12 + tone


def naturalChromatic(diatonic: int) -> int:
    """
    Reference chromatic size of the quality family: perfect for perfect-family sizes, minor
    otherwise.
    """
    if hasPerfectQuality(diatonic):
        return naturalChromaticForPerfect(diatonic)
    else:
        return naturalChromaticForMinor(diatonic)


def naturalTone(diatonic: int) -> int:
    """
    Chromatic position of the natural pitch at a staff position relative to middle C.
    """
    octave, step = divmod(diatonic, 7)
    return octave * 12 + int(MAJOR_SCALE_TONES[step])
