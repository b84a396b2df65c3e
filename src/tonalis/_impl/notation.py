"""
Conversion between text notation and raw `(diatonic, chromatic)` step pairs.

The value types in `pitch` and `scale` wrap these functions for their `parse()` class methods
and `__str__()` implementations.

Interval qualities come in two families. Perfect-family intervals (unisons, fourths, fifths)
are spelled `d`, (blank or `p`), `a`; minor-family intervals (seconds, thirds, sixths,
sevenths) are spelled `d`, `m`, `j`, `a`. Any quality can also be written as a parenthesized
integer, where `(0)` is perfect, `(-1)` minor, `(1)` major, `(-2)` diminished and `(2)`
augmented. The numbers `(-1)` and `(1)` are therefore unavailable for perfect-family
intervals and `(0)` is unavailable for minor-family intervals.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from bidict import bidict
import pyrsistent as pyr

from .errors import (
    Impossible,
    InvalidAccidental,
    InvalidNumber,
    InvalidOctave,
    InvalidPitchName,
    InvalidQuality,
    NoOctaveFound,
)
from .steps import PitchName, hasPerfectQuality, naturalChromatic, naturalTone

__all__ = [
    "parseAccidental",
    "formatAccidental",
    "accidentalToUnicode",
    "parsePitchSteps",
    "formatPitch",
    "parseIntervalSteps",
    "formatInterval",
    "parseScaleSteps",
]

_UNICODE_MINUS = "−"
# octave numbers are 16-bit signed integers
_OCTAVE_MIN = -(2**15)
_OCTAVE_MAX = 2**15 - 1
_parenAcciRe = re.compile(r"\(([0-9]+)([#b])\)")
_numericQualityRe = re.compile(r"\(([+-]?[0-9]+)\)")
_trailingDigitsRe = re.compile(r"[0-9]+\Z")

_acciTokens = bidict(
    (
        (0, ""),
        (1, "#"),
        (-1, "b"),
        (2, "+"),  # double sharp
        (-2, "&"),  # double flat
    )
)
_unicodeAccis = bidict(
    (
        (-2, "\U0001d12b"),  # 𝄫
        (-1, "♭"),  # ♭
        (0, "♮"),  # ♮
        (1, "♯"),  # ♯
        (2, "\U0001d12a"),  # 𝄪
    )
)
_acciAliases = pyr.pmap({"n": 0, "##": 2, "bb": -2}).update(dict(_unicodeAccis.inverse))


@dataclass(frozen=True, slots=True)
class _QualityFamily:
    """
    Spelling table of one quality family.

    `letters` maps the mismatch (chromatic size minus the family's reference size) to its
    letter. Parenthesized numbers skip `reserved` and count outwards from `origin`, the number
    of the reference quality itself.
    """

    letters: bidict[int, str]
    origin: int
    reserved: tuple[int, ...]

    def toNumeric(self, mismatch: int) -> int:
        q = self.origin + mismatch
        if mismatch > 0:
            for r in self.reserved:
                if self.origin < r <= q:
                    q += 1
        elif mismatch < 0:
            for r in reversed(self.reserved):
                if q <= r < self.origin:
                    q -= 1
        return q

    def fromNumeric(self, q: int) -> int | None:
        if q in self.reserved:
            return None
        if q >= self.origin:
            return q - self.origin - sum(1 for r in self.reserved if self.origin < r < q)
        else:
            return q - self.origin + sum(1 for r in self.reserved if q < r < self.origin)

    def token(self, mismatch: int) -> str:
        letter = self.letters.get(mismatch)
        if letter is not None:
            return letter
        return f"({self.toNumeric(mismatch)})"


# keyed by `hasPerfectQuality()`
_qualityFamilies = pyr.pmap(
    {
        True: _QualityFamily(
            letters=bidict(((-1, "d"), (0, ""), (1, "a"))),
            origin=0,
            reserved=(-1, 1),
        ),
        False: _QualityFamily(
            letters=bidict(((-1, "d"), (0, "m"), (1, "j"), (2, "a"))),
            origin=-1,
            reserved=(0,),
        ),
    }
)
_qualityLetterAliases = pyr.pmap({"p": "", "P": "", "M": "j", "A": "a"})
_qualityLetters = frozenset(("d", "m", "", "j", "a"))

# bare interval numbers in scale notation
_scaleDefaults = pyr.pmap({"2": (1, 2), "3": (2, 4), "6": (5, 9), "7": (6, 10)})


def parseAccidental(src: str) -> int:
    """
    Parses an accidental into its chromatic displacement in half steps.

    Accepted forms are `""` or `"n"` (natural), `"#"`, `"b"`, `"+"` or `"##"` (double sharp),
    `"&"` or `"bb"` (double flat), the Unicode glyphs ♮ ♯ ♭ 𝄪 𝄫, any run of `#` or of `b`,
    and `"(N#)"` / `"(Nb)"` for `N` sharps or flats.
    """
    if (acci := _acciTokens.inverse.get(src)) is not None:
        return acci
    if (acci := _acciAliases.get(src)) is not None:
        return acci
    if match := _parenAcciRe.fullmatch(src):
        n = int(match.group(1))
        return n if match.group(2) == "#" else -n
    if src[0] in "#b" and src.count(src[0]) == len(src):
        return len(src) if src[0] == "#" else -len(src)
    raise InvalidAccidental(src)


def formatAccidental(acci: int) -> str:
    if (token := _acciTokens.get(acci)) is not None:
        return token
    if acci > 0:
        return f"({acci}#)"
    else:
        return f"({-acci}b)"


def accidentalToUnicode(acci: int) -> str | None:
    """Unicode glyph for accidentals from double flat to double sharp, `None` otherwise."""
    return _unicodeAccis.get(acci)


def parsePitchSteps(src: str) -> tuple[int, int]:
    """
    Parses scientific pitch notation such as `"Eb4"`, `"F###5"` or `"Bb-1"` into the steps
    from middle C.
    """
    end = len(src)
    start = end
    while start > 0 and "0" <= src[start - 1] <= "9":
        start -= 1
    if start == end:
        raise NoOctaveFound(src)
    if start > 0 and src[start - 1] in ("-", _UNICODE_MINUS):
        start -= 1
    octaveSrc = src[start:]
    octave = int(octaveSrc.replace(_UNICODE_MINUS, "-"))
    if not _OCTAVE_MIN <= octave <= _OCTAVE_MAX:
        raise InvalidOctave(octaveSrc)
    head = src[:start]
    if len(head) == 0:
        raise InvalidPitchName(head)
    name = PitchName.parse(head[0])
    acci = parseAccidental(head[1:])
    diatonic = (octave - 4) * 7 + name.diatonic
    chromatic = (octave - 4) * 12 + name.chromatic + acci
    return diatonic, chromatic


def formatPitch(diatonic: int, chromatic: int) -> str:
    octave, step = divmod(diatonic, 7)
    acci = chromatic - naturalTone(diatonic)
    return f"{PitchName(step)}{formatAccidental(acci)}{octave + 4}"


def parseIntervalSteps(src: str) -> tuple[int, int]:
    """
    Parses interval notation such as `"m3"`, `"-j3"`, `"a11"` or `"(-3)5"` into its diatonic
    and chromatic sizes.
    """
    if src[:1] in ("-", _UNICODE_MINUS):
        diatonic, chromatic = parseIntervalSteps(src[1:])
        return -diatonic, -chromatic
    src = src.replace(_UNICODE_MINUS, "-")
    numberMatch = _trailingDigitsRe.search(src)
    if numberMatch is None:
        raise InvalidNumber(src)
    number = int(numberMatch.group())
    if number == 0:
        raise InvalidNumber(numberMatch.group())
    diatonic = number - 1
    family = _qualityFamilies[hasPerfectQuality(diatonic)]

    qualSrc = src[: numberMatch.start()]
    if len(qualSrc) == 0:
        mismatch = family.letters.inverse.get("")
        if mismatch is None:
            raise Impossible(number, None, src)
    elif len(qualSrc) == 1:
        letter = _qualityLetterAliases.get(qualSrc, qualSrc)
        if letter not in _qualityLetters:
            raise InvalidQuality(qualSrc)
        mismatch = family.letters.inverse.get(letter)
        if mismatch is None:
            raise Impossible(number, qualSrc, src)
    elif numericMatch := _numericQualityRe.fullmatch(qualSrc):
        mismatch = family.fromNumeric(int(numericMatch.group(1)))
        if mismatch is None:
            raise Impossible(number, numericMatch.group(1), src)
    else:
        raise InvalidQuality(qualSrc)

    return diatonic, naturalChromatic(diatonic) + mismatch


def formatInterval(diatonic: int, chromatic: int) -> str:
    if diatonic < 0:
        return f"-{formatInterval(-diatonic, -chromatic)}"
    family = _qualityFamilies[hasPerfectQuality(diatonic)]
    mismatch = chromatic - naturalChromatic(diatonic)
    return f"{family.token(mismatch)}{diatonic + 1}"


def parseScaleSteps(src: str) -> list[tuple[int, int]]:
    """
    Parses whitespace separated interval tokens. Bare `2`, `3` and `6` are read as major and a
    bare `7` as minor.
    """
    return [
        _scaleDefaults[token] if token in _scaleDefaults else parseIntervalSteps(token)
        for token in src.split()
    ]
