import unittest
from pathlib import Path
import sys
import itertools as it

DIR = Path(__file__).parent if "__file__" in locals() else Path.cwd()
sys.path.append(str(DIR / "../src"))

import tonalis as tn  # noqa: E402
from tonalis import Interval, Pitch, ChromaticPitch, ChromaticInterval  # noqa: E402


class TestSlots(unittest.TestCase):
    def test_slots(self):
        types = (Interval, Pitch, ChromaticInterval, ChromaticPitch, tn.Scale)
        for t in types:  # the types with `__slots__` shouldn't have `__dict__`
            self.assertNotIn("__dict__", dir(t))
        with self.assertRaises(AttributeError):
            Pitch("C4").x = 1  # type: ignore


class TestInterval(unittest.TestCase):
    samples = tuple(
        map(Interval, ("1", "m2", "j3", "a4", "d5", "8", "-m3", "(-3)5", "j10", "-a11"))
    )

    def test_groupLaws(self):
        unison = tn.Intervals.UNISON
        for a, b in it.product(self.samples, repeat=2):
            self.assertEqual(a + b, b + a)
            self.assertEqual(a - b, a + (-b))
        for a, b, c in it.product(self.samples, repeat=3):
            self.assertEqual((a + b) + c, a + (b + c))
        for a in self.samples:
            self.assertEqual(a + unison, a)
            self.assertEqual(a + (-a), unison)
            self.assertEqual(-(-a), a)

    def test_constructor(self):
        self.assertEqual(Interval(2), Interval("j3"))
        self.assertEqual(Interval(3), Interval("4"))
        self.assertEqual(Interval(2, 3), Interval("m3"))
        self.assertEqual(Interval(), tn.Intervals.UNISON)
        with self.assertWarns(UserWarning):
            self.assertEqual(Interval("m3", 4), Interval(2, 3))

    def test_properties(self):
        testData = (
            ("1", 1, 0, True, True),
            ("m3", 3, 0, False, False),
            ("j3", 3, 1, False, False),
            ("a4", 4, 1, True, False),
            ("d5", 5, -1, True, False),
            ("-m3", -3, 0, False, False),
            ("-5", -5, 0, True, True),
            ("j10", 10, 1, False, False),
        )
        for src, number, mismatch, hasPerfectQuality, isPerfect in testData:
            with self.subTest(src=src):
                interval = Interval(src)
                self.assertEqual(interval.number, number)
                self.assertEqual(interval.mismatch, mismatch)
                self.assertEqual(interval.hasPerfectQuality, hasPerfectQuality)
                self.assertEqual(interval.isPerfect, isPerfect)

    def test_ordering(self):
        # chromatic size first, diatonic size second
        self.assertLess(Interval("a4"), Interval("d5"))
        self.assertLess(Interval("j3"), Interval("d4"))
        self.assertLess(Interval("a2"), Interval("j3"))
        self.assertLess(Interval("-m2"), Interval("1"))
        ordered = sorted(map(Interval, ("5", "d5", "a4", "1", "m2", "a1")))
        self.assertEqual(list(map(str, ordered)), ["1", "a1", "m2", "a4", "d5", "5"])

    def test_reduce(self):
        testData = (
            ("j10", "j3"),
            ("8", "1"),
            ("-m3", "j6"),
            ("-8", "1"),
            ("m3", "m3"),
        )
        for src, ans in testData:
            with self.subTest(src=src):
                self.assertEqual(Interval(src) % tn.Octave, Interval(ans))
                self.assertEqual(Interval(src).reduceToOctave(), Interval(ans))
        self.assertEqual(Interval("a7") % tn.ChromaticOctave, Interval(-1, 0))
        self.assertEqual(Interval("j10") % tn.ChromaticOctave, Interval("j3"))
        for interval in self.samples:
            reduced = interval % tn.Octave
            self.assertIn(reduced.diatonic, range(7))
            self.assertEqual(reduced % tn.Octave, reduced)
            chromaticReduced = interval % tn.ChromaticOctave
            self.assertIn(chromaticReduced.chromatic, range(12))
            self.assertEqual(chromaticReduced % tn.ChromaticOctave, chromaticReduced)

    def test_invert(self):
        testData = (("j3", "m6"), ("1", "8"), ("a4", "d5"), ("5", "4"), ("j10", "m6"))
        for src, ans in testData:
            with self.subTest(src=src):
                self.assertEqual(Interval(src).invert(), Interval(ans))

    def test_arithmetic(self):
        self.assertEqual(abs(Interval("-j3")), Interval("j3"))
        self.assertEqual(abs(Interval("j3")), Interval("j3"))
        self.assertEqual(Interval("j2") * 2, Interval("j3"))
        self.assertEqual(3 * Interval("j2"), Interval("a4"))
        self.assertEqual(Interval("5") * 0, tn.Intervals.UNISON)
        with self.assertRaises(TypeError):
            Interval("m3") * 1.5
        with self.assertRaises(TypeError):
            Interval("m3") + 1
        with self.assertRaises(TypeError):
            Interval("m3") % 7

    def test_constants(self):
        testData = (
            (tn.Intervals.UNISON, "1"),
            (tn.Intervals.MIN_SECOND, "m2"),
            (tn.Intervals.MAJ_SECOND, "j2"),
            (tn.Intervals.MIN_THIRD, "m3"),
            (tn.Intervals.MAJ_THIRD, "j3"),
            (tn.Intervals.FOURTH, "4"),
            (tn.Intervals.AUG_FOURTH, "a4"),
            (tn.Intervals.DIM_FIFTH, "d5"),
            (tn.Intervals.FIFTH, "5"),
            (tn.Intervals.MIN_SIXTH, "m6"),
            (tn.Intervals.MAJ_SIXTH, "j6"),
            (tn.Intervals.MIN_SEVENTH, "m7"),
            (tn.Intervals.MAJ_SEVENTH, "j7"),
            (tn.Intervals.OCTAVE, "8"),
        )
        for interval, ans in testData:
            with self.subTest(ans=ans):
                self.assertEqual(str(interval), ans)

    def test_hash(self):
        self.assertEqual(len({Interval("M3"), Interval("j3"), Interval(2, 4)}), 1)
        self.assertNotEqual(Interval(2, 4), Pitch(2, 4))

    def test_repr(self):
        self.assertEqual(repr(Interval("m3")), 'Interval("m3")')

    def test_toChromatic(self):
        self.assertEqual(Interval("m3").toChromatic(), ChromaticInterval(3))


class TestPitch(unittest.TestCase):
    def test_transposition(self):
        c4, e4, eb4, g4 = map(Pitch, ("C4", "E4", "Eb4", "G4"))
        self.assertEqual(c4 + Interval("j3"), e4)
        self.assertEqual(c4 + Interval("m3"), eb4)
        self.assertEqual(Interval("m3") + c4, eb4)
        self.assertEqual(e4 - c4, Interval("j3"))
        self.assertEqual(g4 - c4, Interval("5"))
        self.assertEqual(eb4 - Interval("m3"), c4)
        self.assertEqual(Pitch("B3") + Interval("m2"), c4)
        self.assertEqual(Pitch("F#4") + Interval("d5"), Pitch("C5"))

    def test_torsorLaws(self):
        pitches = tuple(map(Pitch, ("C4", "Eb4", "B#3", "Bb2", "F###5")))
        intervals = tuple(map(Interval, ("m3", "-j3", "a4", "8")))
        for p in pitches:
            for a, b in it.product(intervals, repeat=2):
                self.assertEqual(p + (a + b), (p + a) + b)
            for q in pitches:
                self.assertEqual((q - p) + p, q)

    def test_constructor(self):
        self.assertEqual(Pitch(), Pitch("C4"))
        self.assertEqual(Pitch(4), Pitch("G4"))
        self.assertEqual(Pitch(-1), Pitch("B3"))
        with self.assertWarns(UserWarning):
            self.assertEqual(Pitch("C4", 3), Pitch(0, 0))

    def test_decompose(self):
        testData = (
            ("Bb2", tn.PitchName.B, -1, 2),
            ("C4", tn.PitchName.C, 0, 4),
            ("F###5", tn.PitchName.F, 3, 5),
            ("B#3", tn.PitchName.B, 1, 3),
        )
        for src, name, accidental, octave in testData:
            with self.subTest(src=src):
                pitch = Pitch(src)
                self.assertEqual(pitch.decompose(), (name, accidental, octave))
                self.assertEqual(pitch.pitchName, name)
                self.assertEqual(pitch.accidental, accidental)
                self.assertIsInstance(pitch.accidental, tn.Accidental)
                self.assertEqual(pitch.octave, octave)
                self.assertEqual(Pitch.compose(name, accidental, octave), pitch)

    def test_compose(self):
        self.assertEqual(Pitch.compose("E", "b", 4), Pitch("Eb4"))
        self.assertEqual(Pitch.fromPitchClass(tn.PitchName.F, 1), Pitch("F#4"))
        self.assertEqual(Pitch.fromPitchClass("A"), Pitch("A4"))

    def test_accessors(self):
        pitch = Pitch("Eb5")
        self.assertEqual(pitch.staffPosition, 9)
        self.assertEqual(pitch.withAccidental(0), Pitch("E5"))
        self.assertEqual(pitch.withAccidental("#"), Pitch("E#5"))
        self.assertTrue(Pitch("B#3").isEnharmonic(Pitch("C4")))
        self.assertFalse(Pitch("B3").isEnharmonic(Pitch("C4")))
        self.assertEqual(Pitch("Eb4").toChromatic(), ChromaticPitch(3))

    def test_ordering(self):
        # staff position first
        self.assertLess(Pitch("B#3"), Pitch("C4"))
        self.assertLess(Pitch("Cb4"), Pitch("C4"))
        self.assertLess(Pitch("C#4"), Pitch("Dbb4"))
        self.assertEqual(Pitch("B#3").cmpChromatic(Pitch("Cb4")), 1)
        self.assertEqual(Pitch("B3").cmpChromatic(Pitch("Cb4")), -1)
        self.assertEqual(Pitch("C4").cmpChromatic(Pitch("C4")), 0)
        pitches = sorted(map(Pitch, ("C4", "B#3", "Dbb4", "Cb4")), key=lambda p: p.chromaticKey)
        self.assertEqual(list(map(str, pitches)), ["Cb4", "B#3", "C4", "D&4"])

    def test_reduce(self):
        self.assertEqual(Pitch("Bb2") % tn.Octave, Pitch("Bb4"))
        self.assertEqual(Pitch("E6") % tn.Octave, Pitch("E4"))
        self.assertEqual(Pitch("B#3") % tn.Octave, Pitch("B#4"))
        self.assertEqual(Pitch("B#3") % tn.ChromaticOctave, Pitch("B#3"))
        self.assertEqual(Pitch("C5") % tn.ChromaticOctave, Pitch("C4"))
        self.assertEqual(Pitch("Cb4") % tn.ChromaticOctave, Pitch("Cb5"))
        for src in ("Bb2", "F###5", "C−1", "B#3"):
            with self.subTest(src=src):
                reduced = Pitch(src) % tn.Octave
                self.assertIn(reduced.diatonic, range(7))
                self.assertEqual(reduced % tn.Octave, reduced)

    def test_typeErrors(self):
        with self.assertRaises(TypeError):
            Pitch("C4") + 1
        with self.assertRaises(TypeError):
            Pitch("C4") + Pitch("D4")
        with self.assertRaises(TypeError):
            Pitch("C4") % 7
        with self.assertRaises(TypeError):
            -Pitch("C4")

    def test_hz(self):
        self.assertEqual(Pitch("A4").hz(), 440.0)
        self.assertEqual(Pitch("A3").hz(), 220.0)
        self.assertEqual(Pitch("A4").hz(a4=442.0), 442.0)
        self.assertAlmostEqual(Pitch("C4").hz(), 261.6255653, places=5)

    def test_repr(self):
        self.assertEqual(repr(Pitch("Eb4")), 'Pitch("Eb4")')


class TestChromatic(unittest.TestCase):
    def test_arithmetic(self):
        self.assertEqual(ChromaticPitch(3) - ChromaticPitch(1), ChromaticInterval(2))
        self.assertEqual(ChromaticPitch(3) - ChromaticInterval(1), ChromaticPitch(2))
        self.assertEqual(ChromaticPitch(1) + ChromaticInterval(5), ChromaticPitch(6))
        self.assertEqual(ChromaticInterval(5) + ChromaticPitch(1), ChromaticPitch(6))
        self.assertEqual(-ChromaticInterval(5), ChromaticInterval(-5))
        self.assertEqual(ChromaticInterval(5) * 2, ChromaticInterval(10))
        self.assertEqual(ChromaticPitch(14) % tn.ChromaticOctave, ChromaticPitch(2))
        self.assertEqual(ChromaticInterval(-1) % tn.ChromaticOctave, ChromaticInterval(11))
        self.assertLess(ChromaticPitch(-1), ChromaticPitch(0))
        with self.assertRaises(TypeError):
            ChromaticPitch(0) % tn.Octave
        with self.assertRaises(TypeError):
            ChromaticPitch(0) + Interval("m3")

    def test_midi(self):
        self.assertEqual(ChromaticPitch(0).toMidi(), 60)
        self.assertEqual(ChromaticPitch(67).toMidi(), 127)
        self.assertEqual(ChromaticPitch(-60).toMidi(), 0)
        self.assertIsNone(ChromaticPitch(68).toMidi())
        self.assertIsNone(ChromaticPitch(-61).toMidi())
        self.assertEqual(ChromaticPitch.fromMidi(69), ChromaticPitch(9))

    def test_hz(self):
        self.assertEqual(ChromaticPitch(9).hz(), 440.0)
        self.assertEqual(ChromaticPitch(21).hz(), 880.0)
        self.assertEqual(ChromaticPitch(9).hz(a4=415.0), 415.0)

    def test_toPitch(self):
        default = ("C4", "C#4", "D4", "Eb4", "E4", "F4", "F#4", "G4", "Ab4", "A4", "Bb4", "B4")
        for chromatic, ans in enumerate(default):
            with self.subTest(chromatic=chromatic):
                self.assertEqual(str(ChromaticPitch(chromatic).toPitch()), ans)
        self.assertEqual(ChromaticPitch(10).toPitch(tn.AcciPrefs.SHARP), Pitch("A#4"))
        self.assertEqual(ChromaticPitch(1).toPitch(tn.AcciPrefs.FLAT), Pitch("Db4"))
        self.assertEqual(ChromaticPitch(6).toPitch(tn.AcciPrefs.FLAT), Pitch("Gb4"))
        self.assertEqual(ChromaticPitch(-1).toPitch(), Pitch("B3"))
        self.assertEqual(ChromaticPitch(15).toPitch(), Pitch("Eb5"))

    def test_toPitchNamed(self):
        testData = (
            (0, "B", "B#3"),
            (11, "C", "Cb5"),
            (3, "D", "D#4"),
            (-1, "B", "B3"),
            (1, "B", "B+3"),
            (13, "C", "C#5"),
            (15, tn.PitchName.E, "Eb5"),
        )
        for chromatic, name, ans in testData:
            with self.subTest(chromatic=chromatic, name=name):
                pitch = ChromaticPitch(chromatic).toPitchNamed(name)
                self.assertEqual(pitch, Pitch(ans))
                self.assertLessEqual(abs(pitch.accidental), 6)


if __name__ == "__main__":
    unittest.main()
