"""
Constants and enums for the theory engine.

No magic strings - letter names, accidental glyphs, interval tables and
scoring weights all live here.
"""

from enum import Enum


class Letter(str, Enum):
    """The seven diatonic letter names, in diatonic order."""

    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    A = "A"
    B = "B"

    @property
    def index(self) -> int:
        """Diatonic index, C=0 .. B=6."""
        return LETTERS.index(self)

    @property
    def number(self) -> int:
        """Chromatic number of the natural pitch (C=0 .. B=11)."""
        return NATURAL_NUMBERS[self]


LETTERS: tuple[Letter, ...] = tuple(Letter)

NATURAL_NUMBERS: dict[Letter, int] = {
    Letter.C: 0,
    Letter.D: 2,
    Letter.E: 4,
    Letter.F: 5,
    Letter.G: 7,
    Letter.A: 9,
    Letter.B: 11,
}

# Spellings that appear in ordinary key signatures
NORMAL_ACCIDENTALS: dict[Letter, tuple[int, ...]] = {
    Letter.C: (0, 1),
    Letter.D: (-1, 0, 1),
    Letter.E: (-1, 0),
    Letter.F: (0, 1),
    Letter.G: (-1, 0, 1),
    Letter.A: (-1, 0, 1),
    Letter.B: (-1, 0),
}

DEFAULT_MAX_ACCIDENTALS = 6

# Accidental glyphs: (ascii, unicode)
SHARP_GLYPHS: tuple[str, str] = ("#", "♯")
FLAT_GLYPHS: tuple[str, str] = ("b", "♭")
DOUBLE_SHARP = "\U0001d12a"
DOUBLE_FLAT = "\U0001d12b"

# Octave range of a Note
MIN_OCTAVE = 0
MAX_OCTAVE = 9
# Octave used for internal pitch arithmetic, independent of settings
REFERENCE_OCTAVE = 4

# Chromatic number of A4 (9 + 4 * 12)
A4_NUMBER = 57
# MIDI numbering puts C4 at 60
MIDI_OFFSET = 12


# Semitones of each (quality, size) pair within one octave
BASE_SEMITONES: dict[tuple[str, int], int] = {
    ("d", 1): -1,
    ("P", 1): 0,
    ("A", 1): 1,
    ("d", 2): 0,
    ("m", 2): 1,
    ("M", 2): 2,
    ("A", 2): 3,
    ("d", 3): 2,
    ("m", 3): 3,
    ("M", 3): 4,
    ("A", 3): 5,
    ("d", 4): 4,
    ("P", 4): 5,
    ("A", 4): 6,
    ("d", 5): 6,
    ("P", 5): 7,
    ("A", 5): 8,
    ("d", 6): 7,
    ("m", 6): 8,
    ("M", 6): 9,
    ("A", 6): 10,
    ("d", 7): 9,
    ("m", 7): 10,
    ("M", 7): 11,
    ("A", 7): 12,
    ("d", 8): 11,
    ("P", 8): 12,
    ("A", 8): 13,
}

# Quality symbols and their inversions; d/A may be repeated up to three times
QUALITY_INVERSE: dict[str, str] = {
    "P": "P",
    "m": "M",
    "M": "m",
    "d": "A",
    "A": "d",
    "dd": "AA",
    "AA": "dd",
    "ddd": "AAA",
    "AAA": "ddd",
}

# Whole/half step pattern of the major scale, rotated for the other modes
DIATONIC_STEPS: tuple[int, ...] = (2, 2, 1, 2, 2, 2, 1)

# Weighted pitch class profile scoring
WPCP_ROOT_WEIGHT = 1.05
WPCP_IN_SCALE_WEIGHT = 1.0
WPCP_OUT_OF_SCALE_WEIGHT = -0.5
WPCP_NATURAL_MINOR_BIAS = -0.01

# Plausibility of a chord reading by semitone distance from bass up to root
BASS_TO_ROOT_SCORES: dict[int, float] = {
    0: 1.0,
    1: 0.1,
    2: 0.4,
    3: 0.7,
    4: 0.7,
    5: 0.6,
    6: 0.1,
    7: 0.8,
    8: 0.3,
    9: 0.7,
    10: 0.3,
    11: 0.1,
}

DEFAULT_CHORD_RECIPE = "maj"


class ErrorMessages:
    """Centralized error message templates."""

    INVALID_LETTER = "Invalid letter name: {letter!r}"
    INVALID_ACCIDENTALS = "Accidentals must be an integer in [-{limit}, {limit}], got {value!r}"
    INVALID_PITCH_CLASS = "Invalid pitch class: {text!r}"
    INVALID_QUALITY = "Invalid interval quality: {quality!r}"
    INVALID_SIZE = "Interval size must be a positive integer, got {size!r}"
    INVALID_QUALITY_FOR_SIZE = "Quality {quality!r} is not valid for interval size {size}"
    INVALID_INTERVAL = "Invalid interval: {text!r}"
    INVALID_OCTAVE = "Octave must be an integer in [{low}, {high}], got {octave!r}"
    INVALID_NOTE = "Invalid note: {text!r}"
    INVALID_CHORD = "Invalid chord: {text!r}"
    UNKNOWN_CHORD_RECIPE = "Unknown chord recipe: {name!r}"
    UNKNOWN_SCALE_RECIPE = "Unknown scale recipe: {name!r}"
    INVALID_RECIPE = "Recipe must be a name or a sequence of intervals, got {value!r}"
    INVALID_INVERSION = "Inversion must be an integer in [0, {count}), got {value!r}"
    BASS_NOT_IN_CHORD = "Bass {bass} is not a tone of {chord}"
    EXPECTED_PITCH_CLASS = "Expected a PitchClass, got {value!r}"
    EXPECTED_NOTE = "Expected a Note, got {value!r}"
    EXPECTED_INTEGER = "Expected an integer, got {value!r}"
    UNSUPPORTED_OPERAND = "Unsupported operand for {operation}: {value!r}"
    COMPOUND_COMPLEMENT = "Cannot take the complement of compound interval {interval}"
    NEGATIVE_INTERVAL = "Cannot subtract {other} from smaller interval {interval}"
    DESCENDING_NOTES = "{upper} is below {lower}; intervals are ascending only"
    NO_MATCHING_INTERVAL = "No interval spans from {lower} to {upper}"
    NO_INTERVAL_SPAN = "No interval of size {size} spans {semitones} semitones"
    TOO_MANY_ACCIDENTALS = "{letter} needs {accidentals} accidentals to spell {target}"
    OCTAVE_OUT_OF_RANGE = "Result lies outside octaves {low}..{high}"
    INVALID_EXTENSION = "Chord extension must be one of {allowed}, got {value!r}"
    UNSUPPORTED_ITEM = "Unsupported item: {value!r}"
    INVALID_CATALOGUE = "Invalid recipe catalogue {source}: {detail}"


class Direction(str, Enum):
    """Transposition direction."""

    UP = "up"
    DOWN = "down"
