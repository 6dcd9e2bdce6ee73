"""
Core theory primitives.

These are the value types everything else composes on:
- PitchClass: Letter name plus accidentals (C#, Db, Bbb)
- Interval: Quality plus diatonic size (m3, P5, M10)
- Note: Pitch class in an octave (C#4)
- Chord: Root, recipe intervals and inversion (Cmaj7, F#min7dim5/C)
- Scale: Root and interval pattern (D dorian)
- ChordIndex / NoteIndex: Read-only lookup tables for identification
"""

from chuk_mcp_theory.core.pitch import PitchClass
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Note
from chuk_mcp_theory.core.index import (
    ChordIndex,
    NoteIndex,
    build_chord_index,
    build_note_index,
    get_chord_index,
    get_note_index,
)
from chuk_mcp_theory.core.chord import Chord
from chuk_mcp_theory.core.scale import Scale

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    "Note",
    # Harmony
    "Chord",
    "Scale",
    # Lookup tables
    "ChordIndex",
    "NoteIndex",
    "build_chord_index",
    "build_note_index",
    "get_chord_index",
    "get_note_index",
]
