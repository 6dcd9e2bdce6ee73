"""
Tests for PitchClass.

Tests cover:
- Construction from parts and from text
- ASCII and unicode accidental parsing
- Enumeration, alteration and ordering
"""

import pytest

from chuk_mcp_theory.constants import Letter
from chuk_mcp_theory.core import Chord, Interval, Note, PitchClass, Scale
from chuk_mcp_theory.core.pitch import format_accidentals, is_int, parse_accidentals
from chuk_mcp_theory.errors import InvalidArgument, ParseError
from chuk_mcp_theory.settings import override_settings


class TestPitchClassCreation:
    """Tests for constructing pitch classes."""

    @pytest.mark.parametrize(
        "text,name,accidentals",
        [
            ("C", "C", 0),
            ("C#", "C", 1),
            ("C##", "C", 2),
            ("Cb", "C", -1),
            ("Cbb", "C", -2),
            ("D", "D", 0),
            ("Bbbb", "B", -3),
        ],
    )
    def test_from_text(self, text: str, name: str, accidentals: int) -> None:
        """Text splits into letter and accidental count."""
        pc = PitchClass(text)
        assert pc.name == name
        assert pc.accidentals == accidentals

    def test_from_parts(self) -> None:
        """Letter and accidentals can be given separately."""
        assert PitchClass("C", 1) == PitchClass("C#")
        assert PitchClass(Letter.B, -1) == PitchClass("Bb")

    @pytest.mark.parametrize("value", [1, True, None, 1.5, {}])
    def test_bad_letter(self, value) -> None:
        """Non-letter values are rejected."""
        with pytest.raises(InvalidArgument):
            PitchClass(value, 0)

    def test_unknown_letter(self) -> None:
        """Only A-G are letters."""
        with pytest.raises(InvalidArgument):
            PitchClass("Z", 0)

    @pytest.mark.parametrize("value", ["1", 1.5, {}, True])
    def test_bad_accidentals(self, value) -> None:
        """Accidentals must be an integer."""
        with pytest.raises(InvalidArgument):
            PitchClass("C", value)

    def test_too_many_accidentals(self) -> None:
        """Accidentals are bounded by the configured limit."""
        with pytest.raises(InvalidArgument):
            PitchClass("C", 2000)
        with pytest.raises(InvalidArgument):
            PitchClass("C", 7)

    def test_immutable(self) -> None:
        """Pitch classes cannot be modified."""
        pc = PitchClass("C")
        with pytest.raises(AttributeError):
            pc._accidentals = 1


class TestPitchClassParsing:
    """Tests for parsing pitch class text."""

    @pytest.mark.parametrize("letter", ["C", "D", "E", "F", "G", "A", "B"])
    def test_ascii_accidentals(self, letter: str) -> None:
        """Up to three sharps or flats parse for every letter."""
        for count in range(-3, 4):
            glyphs = "b" * -count if count < 0 else "#" * count
            assert PitchClass(letter + glyphs) == PitchClass(letter, count)

    @pytest.mark.parametrize(
        "unicode_text,ascii_text",
        [
            ("B♭", "Bb"),
            ("B𝄫", "Bbb"),
            ("B♭♭", "Bbb"),
            ("B♭♭♭", "Bbbb"),
            ("B♭♭♭♭", "Bbbbb"),
            ("C♯", "C#"),
            ("C𝄪", "C##"),
            ("C♯♯", "C##"),
            ("C♯♯♯", "C###"),
            ("C♯♯♯♯", "C####"),
        ],
    )
    def test_unicode_accidentals(self, unicode_text: str, ascii_text: str) -> None:
        """Unicode glyphs parse to the same value as ASCII ones."""
        assert PitchClass(unicode_text) == PitchClass(ascii_text)

    @pytest.mark.parametrize("text", ["C#######", "Dbbbbbbb", "H", "$", "", "Cb#", "c"])
    def test_bad_names(self, text: str) -> None:
        """Malformed text raises ParseError."""
        with pytest.raises(ParseError):
            PitchClass.parse(text)

    @pytest.mark.parametrize("value", [1, True, None, 1.5, {}])
    def test_bad_values(self, value) -> None:
        """Non-string input raises ParseError."""
        with pytest.raises(ParseError):
            PitchClass(value)

    def test_limit_follows_settings(self) -> None:
        """A lower accidental limit rejects longer spellings."""
        with override_settings(max_accidentals=2):
            assert PitchClass("C##").accidentals == 2
            with pytest.raises(ParseError):
                PitchClass("C###")

    def test_parse_errors_are_value_errors(self) -> None:
        """Callers can guard parsing with ValueError."""
        with pytest.raises(ValueError):
            PitchClass("H")


class TestAccidentalHelpers:
    """Tests for accidental rendering and parsing helpers."""

    def test_format_ascii(self) -> None:
        assert format_accidentals(0, False) == ""
        assert format_accidentals(2, False) == "##"
        assert format_accidentals(-3, False) == "bbb"

    def test_format_unicode(self) -> None:
        assert format_accidentals(1, True) == "♯"
        assert format_accidentals(2, True) == "𝄪"
        assert format_accidentals(-2, True) == "𝄫"
        assert format_accidentals(-3, True) == "♭♭♭"

    def test_parse(self) -> None:
        assert parse_accidentals("") == 0
        assert parse_accidentals("##") == 2
        assert parse_accidentals("♭") == -1
        with pytest.raises(ParseError):
            parse_accidentals("#b")

    def test_is_int(self) -> None:
        assert is_int(0)
        assert is_int(-3)
        assert not is_int(True)
        assert not is_int(2.0)
        assert not is_int("2")

    def test_bool_rejected_as_integer(self) -> None:
        """Integer arguments everywhere refuse bool."""
        with pytest.raises(InvalidArgument):
            Interval("P", True)
        with pytest.raises(InvalidArgument):
            Note(PitchClass("C"), True)
        with pytest.raises(InvalidArgument):
            Note.from_midi_note(True)
        with pytest.raises(InvalidArgument):
            Note.from_number(60, max_accidentals=True)
        with pytest.raises(InvalidArgument):
            Chord("C", "maj", True)
        with pytest.raises(InvalidArgument):
            Scale("C", "major")[True]
        with pytest.raises(InvalidArgument):
            Scale("C", "major").chord(True)


class TestPitchClassGeneration:
    """Tests for PitchClass.all."""

    def test_normal_spellings(self) -> None:
        """Default enumeration covers key-signature spellings only."""
        pitches = PitchClass.all()
        assert len(pitches) == 17
        for text in ["A#", "C#", "D#", "F#", "G#", "Ab", "Bb", "Db", "Eb", "Gb"]:
            assert PitchClass(text) in pitches
        for text in ["A", "B", "C", "D", "E", "F", "G"]:
            assert PitchClass(text) in pitches
        assert PitchClass("Cb") not in pitches
        assert PitchClass("E#") not in pitches

    def test_bounded(self) -> None:
        """A bound gives every letter with 0, +-1 .. +-bound accidentals."""
        pitches = PitchClass.all(2)
        assert len(pitches) == 35
        assert PitchClass("Cbb") in pitches
        assert PitchClass("E#") in pitches
        assert PitchClass("C###") not in pitches

    def test_bad_bound(self) -> None:
        with pytest.raises(InvalidArgument):
            PitchClass.all("")
        with pytest.raises(InvalidArgument):
            PitchClass.all(-1)


class TestPitchClassProperties:
    """Tests for derived values."""

    def test_numbers(self) -> None:
        """Chromatic numbers may fall outside 0..11."""
        assert PitchClass("C").number == 0
        assert PitchClass("Cb").number == -1
        assert PitchClass("B#").number == 12
        assert PitchClass("F#").chromatic_number == 6

    def test_index(self) -> None:
        assert PitchClass("C").index == 0
        assert PitchClass("Bb").index == 6

    def test_lilypond(self) -> None:
        assert PitchClass("C").lilypond_notation == "c"
        assert PitchClass("F#").lilypond_notation == "fis"
        assert PitchClass("Ebb").lilypond_notation == "eeses"

    def test_str(self) -> None:
        """ASCII output by default."""
        assert str(PitchClass("C")) == "C"
        assert str(PitchClass("C#")) == "C#"
        assert str(PitchClass("Cb")) == "Cb"
        assert str(PitchClass("C", -1)) == "Cb"

    def test_unicode_str(self) -> None:
        with override_settings(unicode_output=True):
            assert str(PitchClass("Bb")) == "B♭"
            assert str(PitchClass("F##")) == "F𝄪"

    @pytest.mark.parametrize("unicode_output", [False, True])
    def test_str_parse_every_pitch_class(self, unicode_output: bool) -> None:
        with override_settings(unicode_output=unicode_output):
            for pitch in PitchClass.all(6):
                assert PitchClass.parse(str(pitch)) == pitch

    def test_repr(self) -> None:
        assert repr(PitchClass("Db")) == "PitchClass('D', -1)"


class TestPitchClassAlteration:
    """Tests for sharp, flat and natural."""

    def test_sharp(self) -> None:
        assert PitchClass("C").sharp() == PitchClass("C#")
        assert PitchClass("C").sharp().sharp() == PitchClass("C##")
        assert PitchClass("C#").sharp() == PitchClass("C##")

    def test_flat(self) -> None:
        assert PitchClass("C#").flat() == PitchClass("C")
        assert PitchClass("B").flat() == PitchClass("Bb")

    def test_natural(self) -> None:
        assert PitchClass("C#").natural() == PitchClass("C")
        assert PitchClass("C##").natural() == PitchClass("C")
        assert PitchClass("Eb").natural() == PitchClass("E")

    def test_to_octave(self) -> None:
        assert PitchClass("Eb").to_octave(5) == Note("Eb5")


class TestPitchClassComparison:
    """Tests for equality, hashing and ordering."""

    def test_enharmonics_differ(self) -> None:
        """C# and Db are distinct values."""
        assert PitchClass("C#") != PitchClass("Db")
        assert PitchClass("C#").number == PitchClass("Db").number

    def test_hashable(self) -> None:
        pitches = {PitchClass("C#"), PitchClass("C", 1), PitchClass("Db")}
        assert len(pitches) == 2

    def test_ordering(self) -> None:
        """Letter first, then accidentals."""
        assert PitchClass("C") <= PitchClass("Dbbb")
        assert PitchClass("C###") <= PitchClass("Dbbb")

    def test_sort(self) -> None:
        pitches = [PitchClass(t) for t in ["C#", "Db", "Cb", "Dbb", "C"]]
        assert [str(p) for p in sorted(pitches)] == ["Cb", "C", "C#", "Dbb", "Db"]
