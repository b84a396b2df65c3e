from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator, Sequence
import itertools as it
import typing as t
from typing import Self, overload

import numpy as np
from sortedcontainers import SortedSet

from .notation import parseScaleSteps
from .pitch import Interval, Intervals, Octave, Pitch
from ..utils import noInstance

__all__ = ["Scale", "Scales"]


class Scale(Sequence[Interval]):
    """
    A **scale** is a set of octave-reduced intervals above a root, kept in ascending order
    (chromatic size first, then diatonic size) and always containing the unison.

    The same interval sequence is also what music theory calls a *mode*: `nthMode()` re-roots
    the scale on one of its degrees.
    """

    __slots__ = ("_intervals", "_hash")

    if t.TYPE_CHECKING:

        @overload
        def __new__(cls, src: str) -> Self:
            """Creates a scale from space separated interval notation, e.g. `"1 2 m3 4 5"`."""
            ...

        @overload
        def __new__(cls, intervals: Iterable[Interval | str]) -> Self: ...

        @overload
        def __new__(cls, *intervals: Interval | str) -> Self: ...

    def __new__(cls, *args) -> Self:
        if len(args) == 1 and isinstance(args[0], str):
            return cls.parse(args[0])
        if len(args) == 1 and isinstance(args[0], Iterable):
            intervals = args[0]
        else:
            intervals = args
        return cls._newFromIntervals(
            i if isinstance(i, Interval) else Interval(i) for i in intervals
        )

    @classmethod
    def parse(cls, src: str) -> Self:
        return cls._newFromIntervals(
            Interval._newHelper(diatonic, chromatic)
            for diatonic, chromatic in parseScaleSteps(src)
        )

    @classmethod
    def _newFromIntervals(cls, intervals: Iterable[Interval]) -> Self:
        # octave reduction, deduplication and sorting
        return cls._newFromTrustedArray(
            np.array(
                SortedSet(it.chain((Intervals.UNISON,), (i % Octave for i in intervals))),
                dtype=object,
            )
        )

    @classmethod
    def _newFromTrustedArray(cls, intervals: np.ndarray) -> Self:
        self = object.__new__(cls)
        self._intervals = intervals
        self._intervals.flags.writeable = False
        return self

    def isNormal(self) -> bool:
        """
        Whether the intervals are octave-reduced, strictly ascending and include the unison.
        Scales built through the public constructors always are.
        """
        intervals = self._intervals
        return (
            all(0 <= i.diatonic < 7 for i in intervals)
            and all(a < b for a, b in it.pairwise(intervals))
            and Intervals.UNISON in intervals
        )

    def nthMode(self, n: int) -> Self:
        """
        Returns the mode starting on the `n`-th degree (counted cyclically from `0`). e.g.
        `Scales.MAJOR.nthMode(1)` is `Scales.DORIAN`.
        """
        if not self.isNormal():
            raise ValueError(f"cannot take modes of a scale that is not normal: {self!r}")
        root = self._intervals[n % len(self._intervals)]
        return self._newFromIntervals(i - root for i in self._intervals)

    def nextMode(self) -> Self:
        return self.nthMode(1)

    def iterFromRoot[T: (Pitch, Interval)](self, root: T) -> Iterator[T]:
        """
        Yields the scale degrees above `root` in ascending order, continuing into the octaves
        above without end. Use `itertools.islice()` to take a finite number of them.
        """
        while True:
            for interval in self._intervals:
                yield root + interval
            root = root + Intervals.OCTAVE

    def __len__(self) -> int:
        return len(self._intervals)

    @overload
    def __getitem__(self, key: int) -> Interval: ...

    @overload
    def __getitem__(self, key: slice) -> tuple[Interval, ...]: ...

    def __getitem__(self, key: int | slice) -> Interval | tuple[Interval, ...]:
        if isinstance(key, slice):
            return tuple(self._intervals[key])
        return self._intervals[key]

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __contains__(self, value: object) -> bool:
        # containment is by interval class, so compounds of a degree also match
        if not isinstance(value, Interval):
            return False
        value = value % Octave
        idx = bisect_left(self._intervals, value)
        return idx < len(self._intervals) and self._intervals[idx] == value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scale):
            return False
        return tuple(self._intervals) == tuple(other._intervals)

    def __hash__(self) -> int:
        if not hasattr(self, "_hash"):
            self._hash = hash(tuple(self._intervals))
        return self._hash

    def __str__(self) -> str:
        return " ".join(map(str, self._intervals))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'


@noInstance
class Scales:
    """Common scales in western music."""

    MAJOR = IONIAN = Scale("1 2 3 4 5 6 j7")
    DORIAN = MAJOR.nthMode(1)
    PHRYGIAN = MAJOR.nthMode(2)
    LYDIAN = MAJOR.nthMode(3)
    MIXOLYDIAN = MAJOR.nthMode(4)
    MINOR = AEOLIAN = NATURAL_MINOR = MAJOR.nthMode(5)
    LOCRIAN = MAJOR.nthMode(6)
    HARMONIC_MINOR = Scale("1 2 m3 4 5 m6 j7")
    MELODIC_MINOR = Scale("1 2 m3 4 5 6 j7")
