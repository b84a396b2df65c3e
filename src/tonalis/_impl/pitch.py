from __future__ import annotations

from bisect import bisect_left, bisect_right
from enum import Enum
from functools import total_ordering
from numbers import Integral
import typing as t
from typing import Self, overload
import warnings

from .notation import (
    accidentalToUnicode,
    formatAccidental,
    formatInterval,
    formatPitch,
    parseAccidental,
    parseIntervalSteps,
    parsePitchSteps,
)
from .steps import (
    MAJOR_SCALE_TONES,
    PitchName,
    hasPerfectQuality,
    naturalChromatic,
    naturalTone,
)
from ..utils import noInstance

__all__ = [
    "Accidental",
    "Octave",
    "ChromaticOctave",
    "AcciPrefs",
    "Interval",
    "Pitch",
    "ChromaticInterval",
    "ChromaticPitch",
    "Intervals",
]

type AcciPref = t.Callable[[int], int]
"""
Maps a pitch class from `0` to `11` to the letter (diatonic offset from C) used to spell it.
"""


class Accidental(int):
    """
    Chromatic displacement of a pitch from the natural pitch of its letter, in half steps.
    Behaves like an `int` but prints in accidental notation.
    """

    __slots__ = ()

    def __new__(cls, value: int | str = 0) -> Self:
        if isinstance(value, str):
            value = parseAccidental(value)
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, src: str) -> Self:
        return cls(parseAccidental(src))

    def toUnicode(self) -> str | None:
        """
        Returns the Unicode glyph (♮ ♯ ♭ 𝄪 𝄫) of the accidental, or `None` beyond double sharp
        or double flat.
        """
        return accidentalToUnicode(int(self))

    def __str__(self) -> str:
        return formatAccidental(int(self))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'


class _Modulus(Enum):
    OCTAVE = "octave"
    CHROMATIC_OCTAVE = "chromatic octave"

    def __repr__(self) -> str:
        return self.name


Octave = _Modulus.OCTAVE
"""
Modulus for `%` reducing a pitch or interval into a single staff octave: `x % Octave` keeps the
diatonic size within `0` to `6` and moves the chromatic size by the same number of octaves.
"""

ChromaticOctave = _Modulus.CHROMATIC_OCTAVE
"""
Modulus for `%` reducing a pitch or interval into a single chromatic octave: `x % ChromaticOctave`
keeps the chromatic size within `0` to `11` and moves the diatonic size by the same number of
octaves.
"""


@noInstance
class AcciPrefs:
    """See `AcciPref` for details."""

    @staticmethod
    def SHARP(tone: int) -> int:
        """
        Always use the lower letter and a sharp for tones outside the C major scale.

        | input | output | preferred name
        |:-:|:-:|:-|
        | `1` | `0` | C sharp |
        | `3` | `1` | D sharp |
        | `6` | `3` | F sharp |
        | `8` | `4` | G sharp |
        | `10` | `5` | A sharp |
        """
        return bisect_right(MAJOR_SCALE_TONES, tone) - 1

    @staticmethod
    def FLAT(tone: int) -> int:
        """
        Always use the upper letter and a flat for tones outside the C major scale.

        | input | output | preferred name
        |:-:|:-:|:-|
        | `1` | `1` | D flat |
        | `3` | `2` | E flat |
        | `6` | `4` | G flat |
        | `8` | `5` | A flat |
        | `10` | `6` | B flat |
        """
        return bisect_left(MAJOR_SCALE_TONES, tone)

    @staticmethod
    def DEFAULT(tone: int) -> int:
        """
        Spells the black keys as C sharp, E flat, F sharp, A flat and B flat.
        """
        if tone in (1, 6):
            return AcciPrefs.SHARP(tone)
        return AcciPrefs.FLAT(tone)


@total_ordering
class Interval:
    """
    Distance between two pitches, counted both in staff steps (`diatonic`, zero-based so that a
    unison is `0` and a third is `2`) and in half steps (`chromatic`).

    Intervals form an abelian group under `+` with `Intervals.UNISON` as identity. They are
    ordered by chromatic size first and diatonic size second.
    """

    __slots__ = ("_diatonic", "_chromatic")

    if t.TYPE_CHECKING:

        @overload
        def __new__(cls, src: str) -> Self:
            """
            Creates an interval from notation such as `"m3"`, `"P5"`, `"-j3"` or `"(-2)5"`.
            """
            ...

        @overload
        def __new__(cls, diatonic: int = 0, chromatic: int | None = None) -> Self:
            """
            Creates an interval from its sizes. When `chromatic` is omitted, the interval spans
            from C to the natural note `diatonic` steps away.
            """
            ...

    def __new__(
        cls, arg1: int | str = 0, arg2: int | None = None
    ) -> Self:
        if isinstance(arg1, str):
            if arg2 is not None:
                warnings.warn(
                    "The second argument is ignored when creating an interval from notation."
                )
            return cls.parse(arg1)
        diatonic = int(arg1)
        chromatic = naturalTone(diatonic) if arg2 is None else int(arg2)
        return cls._newHelper(diatonic, chromatic)

    @classmethod
    def _newHelper(cls, diatonic: int, chromatic: int) -> Self:
        self = object.__new__(cls)
        self._diatonic = diatonic
        self._chromatic = chromatic
        return self

    @classmethod
    def parse(cls, src: str) -> Self:
        return cls._newHelper(*parseIntervalSteps(src))

    @property
    def diatonic(self) -> int:
        return self._diatonic

    @property
    def chromatic(self) -> int:
        return self._chromatic

    @property
    def number(self) -> int:
        """
        Interval number as written in notation, e.g. `3` for a third and `-3` for a
        descending third.
        """
        if self._diatonic >= 0:
            return self._diatonic + 1
        return self._diatonic - 1

    @property
    def hasPerfectQuality(self) -> bool:
        return hasPerfectQuality(self._diatonic)

    @property
    def mismatch(self) -> int:
        """
        Half steps by which the interval differs from the perfect interval of the same number,
        or from the minor interval for seconds, thirds, sixths and sevenths. Major intervals
        have mismatch `1`.
        """
        return self._chromatic - naturalChromatic(self._diatonic)

    @property
    def isPerfect(self) -> bool:
        return self.hasPerfectQuality and self.mismatch == 0

    def toChromatic(self) -> ChromaticInterval:
        return ChromaticInterval(self._chromatic)

    def reduceToOctave(self) -> Self:
        octave, diatonic = divmod(self._diatonic, 7)
        return self._newHelper(diatonic, self._chromatic - octave * 12)

    def reduceToChromaticOctave(self) -> Self:
        octave, chromatic = divmod(self._chromatic, 12)
        return self._newHelper(self._diatonic - octave * 7, chromatic)

    def invert(self) -> Self:
        """
        Returns the octave complement of the octave-reduced interval, e.g. a major third
        inverts to a minor sixth and a unison to an octave.
        """
        reduced = self.reduceToOctave()
        return self._newHelper(7 - reduced._diatonic, 12 - reduced._chromatic)

    def __add__(self, other: Interval) -> Self:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._newHelper(
            self._diatonic + other._diatonic, self._chromatic + other._chromatic
        )

    def __neg__(self) -> Self:
        return self._newHelper(-self._diatonic, -self._chromatic)

    def __sub__(self, other: Interval) -> Self:
        if not isinstance(other, Interval):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: int) -> Self:
        if not isinstance(other, Integral):
            return NotImplemented
        return self._newHelper(self._diatonic * other, self._chromatic * other)

    __rmul__ = __mul__

    def __abs__(self) -> Self:
        if self._diatonic < 0 or (self._diatonic == 0 and self._chromatic < 0):
            return -self
        return self

    def __mod__(self, other: _Modulus) -> Self:
        if other is Octave:
            return self.reduceToOctave()
        if other is ChromaticOctave:
            return self.reduceToChromaticOctave()
        return NotImplemented

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (self._chromatic, self._diatonic) < (other._chromatic, other._diatonic)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return False
        return self._diatonic == other._diatonic and self._chromatic == other._chromatic

    def __hash__(self) -> int:
        return hash((self._diatonic, self._chromatic))

    def __str__(self) -> str:
        return formatInterval(self._diatonic, self._chromatic)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'


@total_ordering
class Pitch:
    """
    A spelled pitch, stored as staff steps (`diatonic`) and half steps (`chromatic`) from middle
    C. `Pitch("C4")` is `Pitch(0, 0)`.

    Subtracting two pitches gives an `Interval`; adding an interval to a pitch transposes it.
    Pitches are ordered by staff position first. Use `chromaticKey` or `cmpChromatic()` to
    compare by pitch height instead.
    """

    __slots__ = ("_diatonic", "_chromatic")

    if t.TYPE_CHECKING:

        @overload
        def __new__(cls, src: str) -> Self:
            """
            Creates a pitch from scientific pitch notation such as `"Eb4"` or `"C(3#)4"`.
            """
            ...

        @overload
        def __new__(cls, diatonic: int = 0, chromatic: int | None = None) -> Self:
            """
            Creates a pitch from its offsets from middle C. When `chromatic` is omitted, the
            natural pitch at the given staff position is returned.
            """
            ...

    def __new__(cls, arg1: int | str = 0, arg2: int | None = None) -> Self:
        if isinstance(arg1, str):
            if arg2 is not None:
                warnings.warn(
                    "The second argument is ignored when creating a pitch from notation."
                )
            return cls.parse(arg1)
        diatonic = int(arg1)
        chromatic = naturalTone(diatonic) if arg2 is None else int(arg2)
        return cls._newHelper(diatonic, chromatic)

    @classmethod
    def _newHelper(cls, diatonic: int, chromatic: int) -> Self:
        self = object.__new__(cls)
        self._diatonic = diatonic
        self._chromatic = chromatic
        return self

    @classmethod
    def parse(cls, src: str) -> Self:
        return cls._newHelper(*parsePitchSteps(src))

    @classmethod
    def compose(cls, name: PitchName | str, accidental: int | str, octave: int) -> Self:
        """
        Creates a pitch from a letter name, an accidental and an octave number in scientific
        pitch notation, where middle C is in octave `4`.
        """
        if isinstance(name, str):
            name = PitchName.parse(name)
        if isinstance(accidental, str):
            accidental = parseAccidental(accidental)
        diatonic = (octave - 4) * 7 + name.diatonic
        return cls._newHelper(diatonic, naturalTone(diatonic) + accidental)

    @classmethod
    def fromPitchClass(cls, name: PitchName | str, accidental: int | str = 0) -> Self:
        """Creates the pitch of the given pitch class in octave `4`."""
        return cls.compose(name, accidental, 4)

    @property
    def diatonic(self) -> int:
        return self._diatonic

    @property
    def chromatic(self) -> int:
        return self._chromatic

    @property
    def staffPosition(self) -> int:
        """Staff steps above middle C. Equal to `diatonic`."""
        return self._diatonic

    @property
    def pitchName(self) -> PitchName:
        return PitchName.fromDiatonic(self._diatonic)

    @property
    def accidental(self) -> Accidental:
        return Accidental(self._chromatic - naturalTone(self._diatonic))

    @property
    def octave(self) -> int:
        """
        Octave number in scientific pitch notation, determined by the letter only. e.g.
        `Pitch("B#3").octave` is `3` although it sounds as C4.
        """
        return self._diatonic // 7 + 4

    @property
    def chromaticKey(self) -> tuple[int, int]:
        """Sort key ordering pitches by height first and staff position second."""
        return self._chromatic, self._diatonic

    def decompose(self) -> tuple[PitchName, Accidental, int]:
        return self.pitchName, self.accidental, self.octave

    def cmpChromatic(self, other: Pitch) -> int:
        """
        Three-way comparison by pitch height, then staff position. Returns `-1`, `0` or `1`.
        """
        a, b = self.chromaticKey, other.chromaticKey
        return (a > b) - (a < b)

    def toChromatic(self) -> ChromaticPitch:
        return ChromaticPitch(self._chromatic)

    def isEnharmonic(self, other: Pitch) -> bool:
        return self._chromatic == other._chromatic

    def withAccidental(self, accidental: int | str = 0) -> Self:
        """Returns the pitch with the same letter and octave and the given accidental."""
        if isinstance(accidental, str):
            accidental = parseAccidental(accidental)
        return self._newHelper(self._diatonic, naturalTone(self._diatonic) + accidental)

    def hz(self, a4: float = 440.0) -> float:
        return self.toChromatic().hz(a4)

    def reduceToOctave(self) -> Self:
        """Moves the pitch into the octave starting at middle C, keeping its letter."""
        octave, diatonic = divmod(self._diatonic, 7)
        return self._newHelper(diatonic, self._chromatic - octave * 12)

    def reduceToChromaticOctave(self) -> Self:
        """Moves the pitch so that it sounds within the octave starting at middle C."""
        octave, chromatic = divmod(self._chromatic, 12)
        return self._newHelper(self._diatonic - octave * 7, chromatic)

    def __add__(self, other: Interval) -> Self:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._newHelper(
            self._diatonic + other.diatonic, self._chromatic + other.chromatic
        )

    __radd__ = __add__

    @overload
    def __sub__(self, other: Pitch) -> Interval: ...

    @overload
    def __sub__(self, other: Interval) -> Self: ...

    def __sub__(self, other: Pitch | Interval) -> Interval | Self:
        if isinstance(other, Pitch):
            return Interval._newHelper(
                self._diatonic - other._diatonic, self._chromatic - other._chromatic
            )
        if isinstance(other, Interval):
            return self + (-other)
        return NotImplemented

    def __mod__(self, other: _Modulus) -> Self:
        if other is Octave:
            return self.reduceToOctave()
        if other is ChromaticOctave:
            return self.reduceToChromaticOctave()
        return NotImplemented

    def __lt__(self, other: Pitch) -> bool:
        if not isinstance(other, Pitch):
            return NotImplemented
        return (self._diatonic, self._chromatic) < (other._diatonic, other._chromatic)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pitch):
            return False
        return self._diatonic == other._diatonic and self._chromatic == other._chromatic

    def __hash__(self) -> int:
        return hash((self._diatonic, self._chromatic))

    def __str__(self) -> str:
        return formatPitch(self._diatonic, self._chromatic)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}("{self!s}")'


@total_ordering
class ChromaticInterval:
    """An interval counted in half steps only."""

    __slots__ = ("_chromatic",)

    def __new__(cls, chromatic: int = 0) -> Self:
        return cls._newHelper(int(chromatic))

    @classmethod
    def _newHelper(cls, chromatic: int) -> Self:
        self = object.__new__(cls)
        self._chromatic = chromatic
        return self

    @property
    def chromatic(self) -> int:
        return self._chromatic

    def reduceToChromaticOctave(self) -> Self:
        return self._newHelper(self._chromatic % 12)

    def __add__(self, other: ChromaticInterval) -> Self:
        if not isinstance(other, ChromaticInterval):
            return NotImplemented
        return self._newHelper(self._chromatic + other._chromatic)

    def __neg__(self) -> Self:
        return self._newHelper(-self._chromatic)

    def __sub__(self, other: ChromaticInterval) -> Self:
        if not isinstance(other, ChromaticInterval):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: int) -> Self:
        if not isinstance(other, Integral):
            return NotImplemented
        return self._newHelper(self._chromatic * other)

    __rmul__ = __mul__

    def __mod__(self, other: _Modulus) -> Self:
        if other is ChromaticOctave:
            return self.reduceToChromaticOctave()
        return NotImplemented

    def __lt__(self, other: ChromaticInterval) -> bool:
        if not isinstance(other, ChromaticInterval):
            return NotImplemented
        return self._chromatic < other._chromatic

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChromaticInterval):
            return False
        return self._chromatic == other._chromatic

    def __hash__(self) -> int:
        return hash(self._chromatic)

    def __str__(self) -> str:
        return str(self._chromatic)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._chromatic})"


@total_ordering
class ChromaticPitch:
    """
    A pitch counted in half steps from middle C, without spelling. Convert to a spelled `Pitch`
    with `toPitch()` or `toPitchNamed()`.
    """

    __slots__ = ("_chromatic",)

    def __new__(cls, chromatic: int = 0) -> Self:
        return cls._newHelper(int(chromatic))

    @classmethod
    def _newHelper(cls, chromatic: int) -> Self:
        self = object.__new__(cls)
        self._chromatic = chromatic
        return self

    @classmethod
    def fromMidi(cls, midi: int) -> Self:
        return cls._newHelper(int(midi) - 60)

    @property
    def chromatic(self) -> int:
        return self._chromatic

    def toMidi(self) -> int | None:
        """MIDI note number, where middle C is `60`. `None` outside the MIDI range."""
        midi = self._chromatic + 60
        if 0 <= midi <= 127:
            return midi
        return None

    def hz(self, a4: float = 440.0) -> float:
        """Frequency in 12-tone equal temperament, tuned so that A4 sounds at `a4` Hz."""
        return a4 * 2 ** ((self._chromatic - 9) / 12)

    def toPitch(self, acciPref: AcciPref = AcciPrefs.DEFAULT) -> Pitch:
        """Spells the pitch, choosing the letter for each pitch class with `acciPref`."""
        octave, tone = divmod(self._chromatic, 12)
        step = acciPref(tone)
        return Pitch._newHelper(octave * 7 + step, self._chromatic)

    def toPitchNamed(self, name: PitchName | str) -> Pitch:
        """
        Spells the pitch with the given letter, in whichever octave keeps the accidental within
        six half steps of natural.
        """
        if isinstance(name, str):
            name = PitchName.parse(name)
        octave = (self._chromatic - name.chromatic + 6) // 12
        return Pitch._newHelper(octave * 7 + name.diatonic, self._chromatic)

    def reduceToChromaticOctave(self) -> Self:
        return self._newHelper(self._chromatic % 12)

    def __add__(self, other: ChromaticInterval) -> Self:
        if not isinstance(other, ChromaticInterval):
            return NotImplemented
        return self._newHelper(self._chromatic + other.chromatic)

    __radd__ = __add__

    @overload
    def __sub__(self, other: ChromaticPitch) -> ChromaticInterval: ...

    @overload
    def __sub__(self, other: ChromaticInterval) -> Self: ...

    def __sub__(
        self, other: ChromaticPitch | ChromaticInterval
    ) -> ChromaticInterval | Self:
        if isinstance(other, ChromaticPitch):
            return ChromaticInterval._newHelper(self._chromatic - other._chromatic)
        if isinstance(other, ChromaticInterval):
            return self._newHelper(self._chromatic - other.chromatic)
        return NotImplemented

    def __mod__(self, other: _Modulus) -> Self:
        if other is ChromaticOctave:
            return self.reduceToChromaticOctave()
        return NotImplemented

    def __lt__(self, other: ChromaticPitch) -> bool:
        if not isinstance(other, ChromaticPitch):
            return NotImplemented
        return self._chromatic < other._chromatic

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChromaticPitch):
            return False
        return self._chromatic == other._chromatic

    def __hash__(self) -> int:
        return hash(self._chromatic)

    def __str__(self) -> str:
        return str(self._chromatic)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._chromatic})"


@noInstance
class Intervals:
    """Common simple intervals."""

    UNISON = Interval._newHelper(0, 0)
    MIN_SECOND = Interval._newHelper(1, 1)
    MAJ_SECOND = Interval._newHelper(1, 2)
    MIN_THIRD = Interval._newHelper(2, 3)
    MAJ_THIRD = Interval._newHelper(2, 4)
    FOURTH = Interval._newHelper(3, 5)
    AUG_FOURTH = Interval._newHelper(3, 6)
    DIM_FIFTH = Interval._newHelper(4, 6)
    FIFTH = Interval._newHelper(4, 7)
    MIN_SIXTH = Interval._newHelper(5, 8)
    MAJ_SIXTH = Interval._newHelper(5, 9)
    MIN_SEVENTH = Interval._newHelper(6, 10)
    MAJ_SEVENTH = Interval._newHelper(6, 11)
    OCTAVE = Interval._newHelper(7, 12)
