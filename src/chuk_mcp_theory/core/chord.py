"""
Chords - a root, a stack of intervals and an inversion.

Chords are built from named recipes (Cmaj, F#min7dim5) or explicit
interval lists, can be inverted, and can be identified from notes or
intervals. Identification tries every octave placement of the input so
that close and open voicings of the same chord are recognised.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence
from functools import total_ordering
from typing import TYPE_CHECKING

from chuk_mcp_theory.constants import (
    BASS_TO_ROOT_SCORES,
    DEFAULT_CHORD_RECIPE,
    REFERENCE_OCTAVE,
    ErrorMessages,
)
from chuk_mcp_theory.core.index import ChordIndex, chord_key, get_chord_index
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Note
from chuk_mcp_theory.core.pitch import PitchClass, is_int
from chuk_mcp_theory.errors import InvalidArgument, InvalidOperation, ParseError
from chuk_mcp_theory.settings import get_settings

if TYPE_CHECKING:
    from chuk_mcp_theory.models.recipe import RecipeCatalogue


def _catalogue() -> RecipeCatalogue:
    from chuk_mcp_theory.recipes import get_catalogue

    return get_catalogue()


def _coerce_intervals(values: Sequence[Interval | str]) -> tuple[Interval, ...]:
    intervals = []
    for value in values:
        if isinstance(value, Interval):
            intervals.append(value)
        elif isinstance(value, str):
            intervals.append(Interval.parse(value))
        else:
            raise InvalidArgument(ErrorMessages.INVALID_RECIPE.format(value=value))
    return tuple(intervals)


def _placements(interval: Interval) -> tuple[Interval, Interval]:
    """The close and open placements of a chord tone above the bass."""
    simple = interval.reduce()
    return simple, simple + Interval.P8


@total_ordering
class Chord:
    """
    A chord: root pitch class, recipe intervals and inversion.

    Construct from a recipe, an interval list or text:
        Chord("C", "maj")
        Chord(PitchClass("A"), ["P1", "m3", "P5"])
        Chord("F#min7dim5/C")

    intervals is the voiced stack measured from the root: in an inversion
    the tones below the bass move up by octaves, so the first interval
    always belongs to the bass. Immutable and hashable.
    """

    __slots__ = ("_root", "_recipe", "_root_intervals", "_inversion", "_intervals")
    _root: PitchClass
    _recipe: str | None
    _root_intervals: tuple[Interval, ...]
    _inversion: int
    _intervals: tuple[Interval, ...]

    def __init__(
        self,
        root: PitchClass | str,
        recipe: str | Sequence[Interval | str] | None = None,
        inversion: int = 0,
    ) -> None:
        if recipe is None and isinstance(root, str):
            parsed = Chord.parse(root)
            root, recipe = parsed._root, parsed._recipe or list(parsed._root_intervals)
            inversion = parsed._inversion

        if isinstance(root, str):
            root = PitchClass.parse(root)
        if not isinstance(root, PitchClass):
            raise InvalidArgument(ErrorMessages.EXPECTED_PITCH_CLASS.format(value=root))

        name: str | None
        if recipe is None:
            recipe = DEFAULT_CHORD_RECIPE
        if isinstance(recipe, str):
            found = _catalogue().chord(recipe)
            if found is None:
                raise InvalidArgument(ErrorMessages.UNKNOWN_CHORD_RECIPE.format(name=recipe))
            name, intervals = found.name, found.interval_objects()
        elif isinstance(recipe, Sequence) and recipe:
            intervals = tuple(sorted(_coerce_intervals(recipe)))
            name = self._recipe_named(intervals)
        else:
            raise InvalidArgument(ErrorMessages.INVALID_RECIPE.format(value=recipe))

        if not is_int(inversion) or not 0 <= inversion < len(intervals):
            raise InvalidArgument(
                ErrorMessages.INVALID_INVERSION.format(count=len(intervals), value=inversion)
            )

        object.__setattr__(self, "_root", root)
        object.__setattr__(self, "_recipe", name)
        object.__setattr__(self, "_root_intervals", intervals)
        object.__setattr__(self, "_inversion", inversion)
        object.__setattr__(self, "_intervals", self._voice(intervals, inversion))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @staticmethod
    def _recipe_named(intervals: tuple[Interval, ...]) -> str | None:
        for recipe in _catalogue().chords:
            if recipe.interval_objects() == intervals:
                return recipe.name
        return None

    @staticmethod
    def _voice(intervals: tuple[Interval, ...], inversion: int) -> tuple[Interval, ...]:
        """Raise the tones below the bass by octaves until they sit above it."""
        bass = intervals[inversion]
        moved = []
        for interval in intervals[:inversion]:
            while interval <= bass:
                interval = interval + Interval.P8
            moved.append(interval)
        return tuple(sorted(intervals[inversion:] + tuple(moved)))

    @classmethod
    def parse(cls, text: str) -> Chord:
        """
        Parse chord text.

        Accepts root + recipe name or alias ('Cmaj', 'Ebm7', 'F#ø7'), a bare
        root meaning a major triad ('G'), and slash chords naming the bass
        ('C/E', 'F#min7dim5/C').
        """
        if not isinstance(text, str) or not text:
            raise ParseError(ErrorMessages.INVALID_CHORD.format(text=text))

        if "/" in text:
            base_text, _, bass_text = text.partition("/")
            if not base_text or not bass_text:
                raise ParseError(ErrorMessages.INVALID_CHORD.format(text=text))
            chord = cls.parse(base_text)
            bass = PitchClass.parse(bass_text)
            pitches = chord.pitches
            if bass not in pitches:
                raise ParseError(ErrorMessages.BASS_NOT_IN_CHORD.format(bass=bass, chord=chord))
            return chord.invert(pitches.index(bass))

        for suffix, name in _catalogue().chord_suffixes():
            if len(text) > len(suffix) and text.endswith(suffix):
                try:
                    root = PitchClass.parse(text[: -len(suffix)])
                except ParseError:
                    continue
                return cls(root, name)

        try:
            root = PitchClass.parse(text)
        except ParseError:
            raise ParseError(ErrorMessages.INVALID_CHORD.format(text=text)) from None
        return cls(root, DEFAULT_CHORD_RECIPE)

    @classmethod
    def all(cls, root: PitchClass | Iterable[PitchClass] | None = None) -> list[Chord]:
        """Every catalogued chord on each root (default: every normal pitch class)."""
        if root is None:
            roots = PitchClass.all()
        elif isinstance(root, PitchClass):
            roots = [root]
        elif isinstance(root, Iterable) and not isinstance(root, str):
            roots = list(root)
        else:
            raise InvalidArgument(ErrorMessages.EXPECTED_PITCH_CLASS.format(value=root))

        names = [recipe.name for recipe in _catalogue().chords]
        return sorted(cls(r, name) for r in roots for name in names)

    @classmethod
    def recipes(cls) -> dict[str, tuple[Interval, ...]]:
        """Recipe name -> root-position intervals."""
        return {recipe.name: recipe.interval_objects() for recipe in _catalogue().chords}

    @classmethod
    def aliases(cls) -> dict[str, str]:
        """Alias -> canonical recipe name."""
        return {alias: recipe.name for recipe in _catalogue().chords for alias in recipe.aliases}

    @property
    def root(self) -> PitchClass:
        return self._root

    @property
    def recipe(self) -> str | None:
        """Canonical recipe name, or None for an uncatalogued interval stack."""
        return self._recipe

    @property
    def inversion(self) -> int:
        return self._inversion

    @property
    def root_intervals(self) -> tuple[Interval, ...]:
        """Intervals of the root-position chord."""
        return self._root_intervals

    @property
    def intervals(self) -> tuple[Interval, ...]:
        """Voiced intervals from the root, bass first."""
        return self._intervals

    @property
    def pitches(self) -> list[PitchClass]:
        """Pitch classes in voicing order, bass first."""
        return [note.pitch_class for note in self.notes(REFERENCE_OCTAVE)]

    @property
    def bass(self) -> PitchClass:
        return self.pitches[0]

    def notes(self, base_octave: int | None = None) -> list[Note]:
        """
        Realise the chord as notes, the root placed in base_octave.

        Inversions keep the root's octave; the tones moved above the bass
        go up accordingly.
        """
        if base_octave is None:
            base_octave = get_settings().default_octave
        root = Note(self._root, base_octave)
        return [root + interval for interval in self._intervals]

    def invert(self, n: int) -> Chord:
        """
        Invert n more times.

        n must be in [0, len(chord)); inverting an inverted chord counts on
        from its current inversion, so inverting a triad three times by one
        returns root position.
        """
        count = len(self._root_intervals)
        if not is_int(n) or not 0 <= n < count:
            raise InvalidArgument(ErrorMessages.INVALID_INVERSION.format(count=count, value=n))
        if n == 0:
            return self
        return Chord(
            self._root,
            self._recipe or list(self._root_intervals),
            (self._inversion + n) % count,
        )

    def contains(self, item: Interval | PitchClass | Note) -> bool:
        """True if the chord has this interval, pitch class or note's pitch class."""
        if isinstance(item, Interval):
            return item in self._root_intervals
        if isinstance(item, PitchClass):
            return item in self.pitches
        if isinstance(item, Note):
            return item.pitch_class in self.pitches
        raise InvalidOperation(ErrorMessages.UNSUPPORTED_ITEM.format(value=item))

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    @classmethod
    def identify_from_intervals(
        cls,
        intervals: Iterable[Interval | str],
        index: ChordIndex | None = None,
    ) -> list[Chord]:
        """
        Chords whose voicing has these intervals above the bass.

        Intervals are measured from a bass of C; any tone may be given in
        any octave (M3, M10 or M17). Results are ranked root position first.
        """
        return cls._identify(PitchClass("C", 0), _coerce_intervals(list(intervals)), index)

    @classmethod
    def identify_from_notes(
        cls,
        notes: Iterable[Note],
        index: ChordIndex | None = None,
    ) -> list[Chord]:
        """Chords matching a set of notes; the lowest note is the bass."""
        ordered = list(notes)
        for note in ordered:
            if not isinstance(note, Note):
                raise InvalidArgument(ErrorMessages.EXPECTED_NOTE.format(value=note))
        ordered.sort()
        if not ordered:
            return []

        bass = ordered[0]
        return cls._identify(bass.pitch_class, [note - bass for note in ordered], index)

    @classmethod
    def identify_from_pitches(
        cls,
        pitches: Sequence[PitchClass],
        index: ChordIndex | None = None,
    ) -> list[Chord]:
        """Chords matching pitch classes; the first pitch class is the bass."""
        if not pitches:
            return []
        for pitch in pitches:
            if not isinstance(pitch, PitchClass):
                raise InvalidArgument(ErrorMessages.EXPECTED_PITCH_CLASS.format(value=pitch))

        bass = Note(pitches[0], REFERENCE_OCTAVE)
        notes = [bass]
        for pitch in pitches[1:]:
            note = Note(pitch, bass.octave)
            if note.number <= bass.number:
                note = note.to_octave(bass.octave + 1)
            notes.append(note)
        return cls._identify(pitches[0], [note - bass for note in notes], index)

    @classmethod
    def _identify(
        cls,
        bass: PitchClass,
        intervals: Sequence[Interval],
        index: ChordIndex | None,
    ) -> list[Chord]:
        if index is None:
            index = get_chord_index()
        upper = [interval for interval in chord_key(intervals) if interval != Interval.P1]

        matches: list[tuple[str, int]] = []
        for placement in itertools.product(*[_placements(i) for i in upper]):
            for match in index.lookup((Interval.P1, *placement)):
                if match not in matches:
                    matches.append(match)

        recipes = cls.recipes()
        bass_note = Note(bass, REFERENCE_OCTAVE)
        chords = []
        for name, inversion in matches:
            offset = recipes[name][inversion].reduce()
            root = (bass_note - offset).pitch_class
            chord = Chord(root, name, inversion)
            if chord not in chords:
                chords.append(chord)

        return sorted(chords, key=lambda chord: -chord._plausibility())

    def _plausibility(self) -> float:
        """How likely this reading is, judged by the bass-to-root distance."""
        return BASS_TO_ROOT_SCORES[(self._root.number - self.bass.number) % 12]

    def __len__(self) -> int:
        return len(self._root_intervals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chord):
            return NotImplemented
        return self._root == other._root and self._intervals == other._intervals

    def __lt__(self, other: Chord) -> bool:
        if not isinstance(other, Chord):
            return NotImplemented
        return (self._root, self._intervals) < (other._root, other._intervals)

    def __hash__(self) -> int:
        return hash((self._root, self._intervals))

    def __str__(self) -> str:
        if self._recipe is not None:
            name = f"{self._root}{self._recipe}"
        else:
            name = f"{self._root}[{','.join(str(i) for i in self._root_intervals)}]"
        if self._inversion:
            name += f"/{self.bass}"
        return name

    def __repr__(self) -> str:
        if self._recipe is not None:
            return f"Chord({str(self)!r})"
        return f"Chord({self._root!r}, {[str(i) for i in self._root_intervals]!r}, {self._inversion})"
