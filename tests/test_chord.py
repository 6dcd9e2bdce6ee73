"""
Tests for Chord.

Tests cover:
- Construction from recipes, interval lists and chord text
- Inversions and slash chords
- Membership
- Identification from notes, intervals and pitch classes
"""

import pytest

from chuk_mcp_theory.core import Chord, Interval, Note, PitchClass
from chuk_mcp_theory.core.index import ChordIndex
from chuk_mcp_theory.errors import InvalidArgument, InvalidOperation, ParseError


def pitch_names(chord: Chord) -> list[str]:
    return [str(p) for p in chord.pitches]


class TestChordCreation:
    """Tests for constructing chords."""

    @pytest.mark.parametrize("root", ["A", "A#", "Bb"])
    def test_from_recipe(self, root: str) -> None:
        chord = Chord(root, "maj")
        assert str(chord) == f"{root}maj"
        assert chord.root == PitchClass(root)
        assert chord.recipe == "maj"

    def test_from_pitch_class(self) -> None:
        assert Chord(PitchClass("C"), "min") == Chord("C", "min")

    def test_alias_recipe(self) -> None:
        """Aliases resolve to the canonical recipe name."""
        chord = Chord("C", "m7")
        assert chord.recipe == "min7"
        assert str(chord) == "Cmin7"

    def test_from_intervals(self) -> None:
        """Interval lists that match a recipe pick up its name."""
        chord = Chord("A", ["P1", "m3", "P5"])
        assert chord == Chord("A", "min")
        assert chord.recipe == "min"

    def test_custom_intervals(self) -> None:
        chord = Chord("C", [Interval("P1"), Interval("M3"), Interval("A4")])
        assert chord.recipe is None
        assert str(chord) == "C[P1,M3,A4]"
        assert pitch_names(chord) == ["C", "E", "F#"]

    @pytest.mark.parametrize("root", ["A$", "H", "C#1"])
    def test_bad_root(self, root: str) -> None:
        with pytest.raises(ParseError):
            Chord(root, "maj")

    @pytest.mark.parametrize("text", ["C#1maj", "C#maj1", "nice", "$", "diminished", "locrian"])
    def test_bad_text(self, text: str) -> None:
        with pytest.raises(ParseError):
            Chord(text)

    def test_bad_types(self) -> None:
        with pytest.raises(InvalidArgument):
            Chord(3.56)
        with pytest.raises(InvalidArgument):
            Chord(Note("F#4"), "maj")
        with pytest.raises(InvalidArgument):
            Chord("C", ["P1", "m3", 5.66])
        with pytest.raises(ParseError):
            Chord("C", ["Z1", Interval("m3")])

    def test_unknown_recipe(self) -> None:
        with pytest.raises(InvalidArgument):
            Chord("C", "nonsense")

    def test_empty_recipe(self) -> None:
        with pytest.raises(InvalidArgument):
            Chord("C", [])

    def test_recipes_and_aliases(self) -> None:
        recipes = Chord.recipes()
        assert recipes["maj"] == (Interval("P1"), Interval("M3"), Interval("P5"))
        assert recipes["min7dim5"][2] == Interval("d5")
        assert Chord.aliases()["m7b5"] == "min7dim5"

    def test_all_on_root(self) -> None:
        chords = Chord.all(PitchClass("C"))
        assert len(chords) == len(Chord.recipes())
        assert Chord("Cmaj") in chords
        assert chords == sorted(chords)


class TestChordParsing:
    """Tests for chord text."""

    @pytest.mark.parametrize(
        "text,root,recipe",
        [
            ("CM", "C", "maj"),
            ("Cmaj", "C", "maj"),
            ("Cmaj7", "C", "M7"),
            ("D#aug7", "D#", "aug7"),
            ("Cbdim", "Cb", "dim"),
            ("Eb9", "Eb", "dom9"),
            ("Ebm", "Eb", "min"),
            ("F#ø7", "F#", "min7dim5"),
            ("G", "G", "maj"),
            ("Bbm7b5", "Bb", "min7dim5"),
        ],
    )
    def test_parse(self, text: str, root: str, recipe: str) -> None:
        assert Chord(text) == Chord(root, recipe)

    def test_longest_suffix_wins(self) -> None:
        """'maj7' is not read as 'maj' plus junk, nor 'm7' as 'm' plus '7'."""
        assert Chord.parse("Cmaj7").recipe == "maj7"
        assert Chord.parse("Am7").recipe == "min7"
        assert Chord.parse("C7").recipe == "dom7"

    def test_slash_chords(self) -> None:
        assert pitch_names(Chord("Cmin/Eb")) == ["Eb", "G", "C"]
        assert pitch_names(Chord("Cmin/G")) == ["G", "C", "Eb"]
        assert Chord("C/E") == Chord("C", "maj", 1)

    def test_slash_bass_not_in_chord(self) -> None:
        with pytest.raises(ParseError):
            Chord.parse("C/F")

    @pytest.mark.parametrize("text", ["C/", "/E", ""])
    def test_incomplete_slash(self, text: str) -> None:
        with pytest.raises(ParseError):
            Chord.parse(text)

    @pytest.mark.parametrize("text", ["Cmin/Eb", "Cmin/G", "F#min7dim5/C", "Dbmaj7", "Cdom7"])
    def test_str_roundtrip(self, text: str) -> None:
        assert str(Chord(text)) == text


class TestChordInversion:
    """Tests for inversions."""

    @pytest.mark.parametrize(
        "text,inversion,pitches",
        [
            ("Cmaj", 0, ["C", "E", "G"]),
            ("Cmaj", 1, ["E", "G", "C"]),
            ("Cmaj", 2, ["G", "C", "E"]),
            ("Cmaj7", 0, ["C", "E", "G", "B"]),
            ("Cmaj7", 1, ["E", "G", "B", "C"]),
            ("Cmaj7", 2, ["G", "B", "C", "E"]),
            ("Cmaj7", 3, ["B", "C", "E", "G"]),
        ],
    )
    def test_invert(self, text: str, inversion: int, pitches: list[str]) -> None:
        chord = Chord(text).invert(inversion)
        assert pitch_names(chord) == pitches
        assert chord.inversion == inversion
        assert chord.bass == PitchClass(pitches[0])

    @pytest.mark.parametrize("text,n", [("Cmaj", 3), ("Cmaj7", 4), ("Cmaj7", 10), ("Cmaj7", -4)])
    def test_invalid_inversion(self, text: str, n: int) -> None:
        with pytest.raises(InvalidArgument):
            Chord(text).invert(n)

    def test_inversions_compose(self) -> None:
        """Inverting counts on from the current inversion."""
        chord = Chord("Cmaj")
        assert chord.invert(1).invert(1) == chord.invert(2)
        assert chord.invert(1).invert(1).invert(1) == chord

    def test_voicing_intervals(self) -> None:
        """Tones below the bass move up an octave."""
        chord = Chord("Cmaj", inversion=0).invert(1)
        assert chord.intervals == (Interval("M3"), Interval("P5"), Interval("P8"))
        assert chord.root_intervals == (Interval("P1"), Interval("M3"), Interval("P5"))

    def test_notes(self) -> None:
        assert Chord("Cmaj").notes() == [Note("C4"), Note("E4"), Note("G4")]
        assert Chord("Cmaj/E").notes(3) == [Note("E3"), Note("G3"), Note("C4")]

    def test_len(self) -> None:
        assert len(Chord("Cmaj")) == 3
        assert len(Chord("Cdom13")) == 7


class TestChordMembership:
    """Tests for contains / in."""

    def test_contains(self) -> None:
        chord = Chord("Cmaj")
        assert Interval("M3") in chord
        assert Interval("m3") not in chord
        assert PitchClass("E") in chord
        assert PitchClass("Fb") not in chord
        assert Note("G7") in chord

    def test_unsupported(self) -> None:
        with pytest.raises(InvalidOperation):
            "E" in Chord("Cmaj")


class TestChordIdentification:
    """Tests for naming chords from notes and intervals."""

    @pytest.mark.parametrize(
        "notes,expected",
        [
            (["C4", "E4", "G4"], "Cmaj"),
            (["C4", "Eb4", "G4"], "Cmin"),
            (["C4", "E4", "G4", "Bb4"], "C7"),
            (["C2", "Eb2", "Gb2"], "Cdim"),
            (["B0", "D1", "F1"], "Bdim"),
            (["F#3", "A3", "C4", "E4"], "F#min7dim5"),
        ],
    )
    def test_root_position_first(self, notes: list[str], expected: str) -> None:
        results = Chord.identify_from_notes([Note(n) for n in notes])
        assert results[0] == Chord(expected)

    def test_order_independent(self) -> None:
        results = Chord.identify_from_notes([Note("G4"), Note("C4"), Note("E4")])
        assert results[0] == Chord("Cmaj")

    def test_inverted(self) -> None:
        results = Chord.identify_from_notes([Note(n) for n in ["C3", "F#3", "A3", "E4"]])
        assert "F#min7dim5/C" in [str(c) for c in results]

    def test_open_voicing(self) -> None:
        results = Chord.identify_from_notes([Note(n) for n in ["C3", "G3", "E4"]])
        assert results[0] == Chord("Cmaj")

    def test_first_inversion(self) -> None:
        results = Chord.identify_from_notes([Note(n) for n in ["E3", "G3", "C4"]])
        assert Chord("C/E") in results

    def test_no_match(self) -> None:
        assert Chord.identify_from_notes([Note("C4"), Note("C#4"), Note("D4")]) == []
        assert Chord.identify_from_notes([]) == []

    def test_bad_notes(self) -> None:
        with pytest.raises(InvalidArgument):
            Chord.identify_from_notes(["C4", "E4", "G4"])

    def test_results_unique(self) -> None:
        results = Chord.identify_from_notes([Note(n) for n in ["C4", "E4", "G4", "C5"]])
        assert len(results) == len(set(results))

    @pytest.mark.parametrize(
        "intervals,recipe,inversion",
        [
            (["P1", "M3", "P5"], "maj", 0),
            (["P1", "m3", "P5"], "min", 0),
            (["P1", "m3", "d5", "m7"], "min7dim5", 0),
            (["P1", "m10", "d5", "m14"], "min7dim5", 0),
            (["P1", "M10", "P12", "m14", "M16"], "dom9", 0),
            (["P1", "M17", "P12"], "maj", 0),
            (["P1", "m3", "m6"], "maj", 1),
        ],
    )
    def test_from_intervals(self, intervals: list[str], recipe: str, inversion: int) -> None:
        results = Chord.identify_from_intervals([Interval(i) for i in intervals])
        assert any(c.recipe == recipe and c.inversion == inversion for c in results)

    def test_tones_two_octaves_up(self) -> None:
        """Tones more than an octave above their close position still match."""
        results = Chord.identify_from_notes([Note(n) for n in ["C2", "E3", "G3", "Bb3", "D5"]])
        assert Chord("C", "dom9") in results
        assert Chord("Cdom9") in Chord.identify_from_intervals(["P1", "M10", "P12", "m14", "M16"])

    def test_from_pitches(self) -> None:
        results = Chord.identify_from_pitches([PitchClass(p) for p in ["E", "G", "C"]])
        assert Chord("C/E") in results
        assert Chord.identify_from_pitches([]) == []

    def test_custom_index(self) -> None:
        """An empty index identifies nothing."""
        empty = ChordIndex({})
        assert Chord.identify_from_notes([Note("C4"), Note("E4"), Note("G4")], empty) == []


class TestChordComparison:
    """Tests for equality, hashing and ordering."""

    def test_equality(self) -> None:
        assert Chord("CM") == Chord("Cmaj")
        assert Chord("Cmaj") != Chord("C/E")
        assert Chord("C#maj") != Chord("Dbmaj")

    def test_hashable(self) -> None:
        chords = {str(Chord("Cmin")), str(Chord("Dmaj7"))}
        assert str(Chord("Cmin")) in chords
        assert str(Chord("Emin")) not in chords
        assert len({Chord("Cmin"), Chord("Cm"), Chord("Dmaj7")}) == 2

    def test_ordering(self) -> None:
        assert Chord("Cmaj") < Chord("Dmaj")
        assert sorted([Chord("Emin"), Chord("Cmaj")]) == [Chord("Cmaj"), Chord("Emin")]
