"""
Lookup tables built once and shared read-only.

ChordIndex maps the interval content of every catalogued chord voicing
back to (recipe, inversion) pairs. NoteIndex maps note numbers to every
spelling of that number. Both are immutable after construction and are
memoised behind a lock, so concurrent readers see a single instance.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from chuk_mcp_theory.constants import MAX_OCTAVE, MIN_OCTAVE, REFERENCE_OCTAVE
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Note
from chuk_mcp_theory.settings import get_settings

if TYPE_CHECKING:
    from chuk_mcp_theory.models.recipe import RecipeCatalogue

logger = logging.getLogger(__name__)

ChordKey = tuple[Interval, ...]


def chord_key(intervals: Iterable[Interval]) -> ChordKey:
    """Canonical form of an interval set: distinct and sorted."""
    return tuple(sorted(set(intervals)))


@dataclass(frozen=True)
class ChordIndex:
    """Interval content of each chord voicing -> (recipe, inversion) pairs."""

    entries: Mapping[ChordKey, tuple[tuple[str, int], ...]]

    def lookup(self, intervals: Iterable[Interval]) -> tuple[tuple[str, int], ...]:
        """Return the (recipe, inversion) pairs whose voicing matches exactly."""
        return self.entries.get(chord_key(intervals), ())

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class NoteIndex:
    """Note number -> every spelling of that number."""

    max_accidentals: int
    by_number: Mapping[int, frozenset[Note]]

    def spellings(self, number: int) -> frozenset[Note]:
        return self.by_number.get(number, frozenset())


def build_chord_index(catalogue: RecipeCatalogue | None = None) -> ChordIndex:
    """
    Voice every chord recipe at every inversion and index it.

    Each voicing is built on C4 and keyed by the intervals measured from its
    bass note, so a lookup with intervals above any bass finds it.
    """
    from chuk_mcp_theory.core.chord import Chord
    from chuk_mcp_theory.core.pitch import PitchClass
    from chuk_mcp_theory.recipes import get_catalogue

    catalogue = catalogue or get_catalogue()
    root = PitchClass("C", 0)
    entries: dict[ChordKey, list[tuple[str, int]]] = {}

    for recipe in catalogue.chords:
        chord = Chord(root, recipe.interval_objects())
        for inversion in range(len(chord)):
            notes = chord.invert(inversion).notes(REFERENCE_OCTAVE)
            key = chord_key(note - notes[0] for note in notes)
            entries.setdefault(key, []).append((recipe.name, inversion))

    logger.debug(f"Built chord index: {len(entries)} voicings from {len(catalogue.chords)} recipes")
    return ChordIndex(MappingProxyType({key: tuple(value) for key, value in entries.items()}))


def build_note_index(max_accidentals: int) -> NoteIndex:
    """Index every note in octaves 0-9 with up to max_accidentals accidentals."""
    by_number: dict[int, set[Note]] = {}
    for note in Note.all(MIN_OCTAVE, MAX_OCTAVE, max_accidentals):
        by_number.setdefault(note.number, set()).add(note)

    logger.debug(f"Built note index: {len(by_number)} note numbers")
    return NoteIndex(
        max_accidentals,
        MappingProxyType({number: frozenset(notes) for number, notes in by_number.items()}),
    )


_lock = threading.Lock()
_chord_index: ChordIndex | None = None
_note_indexes: dict[int, NoteIndex] = {}


def get_chord_index() -> ChordIndex:
    """Return the shared chord index, building it on first use."""
    global _chord_index
    if _chord_index is None:
        with _lock:
            if _chord_index is None:
                _chord_index = build_chord_index()
    return _chord_index


def get_note_index(max_accidentals: int | None = None) -> NoteIndex:
    """Return the shared note index for an accidental bound (default: settings)."""
    if max_accidentals is None:
        max_accidentals = get_settings().max_accidentals

    index = _note_indexes.get(max_accidentals)
    if index is None:
        with _lock:
            index = _note_indexes.get(max_accidentals)
            if index is None:
                index = build_note_index(max_accidentals)
                _note_indexes[max_accidentals] = index
    return index


def reset_indexes() -> None:
    """Drop memoised tables (after the recipe catalogue changes)."""
    global _chord_index
    with _lock:
        _chord_index = None
        _note_indexes.clear()
