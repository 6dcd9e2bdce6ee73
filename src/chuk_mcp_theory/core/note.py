"""
Notes - a pitch class placed in an octave.

Note arithmetic is spelling-preserving: adding a M3 to C4 gives E4 (never
Fb4), adding a d4 gives Fb4. The letter moves by the interval's size and
the accidentals are chosen to land on the right chromatic number.
"""

from __future__ import annotations

import re
from functools import total_ordering

from chuk_mcp_theory.constants import (
    A4_NUMBER,
    LETTERS,
    MAX_OCTAVE,
    MIDI_OFFSET,
    MIN_OCTAVE,
    ErrorMessages,
)
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.pitch import PitchClass, is_int
from chuk_mcp_theory.errors import InvalidArgument, InvalidOperation, ParseError
from chuk_mcp_theory.settings import get_settings

_NOTE_PATTERN = re.compile(r"^([^0-9]+)([0-9]+)$")


@total_ordering
class Note:
    """
    A pitch class in a specific octave, e.g. C#4.

    Octaves run 0-9 and change between B and C, so B#3 and C4 sound the
    same. Note numbers count semitones from C0; MIDI numbers put C4 at 60.

    Immutable and hashable.
    """

    __slots__ = ("_pitch_class", "_octave")
    _pitch_class: PitchClass
    _octave: int

    def __init__(self, pitch_class: PitchClass | str, octave: int | None = None) -> None:
        if octave is None:
            parsed = Note.parse(pitch_class)  # type: ignore[arg-type]
            pitch_class, octave = parsed._pitch_class, parsed._octave

        if not isinstance(pitch_class, PitchClass):
            raise InvalidArgument(ErrorMessages.EXPECTED_PITCH_CLASS.format(value=pitch_class))
        if not is_int(octave) or not MIN_OCTAVE <= octave <= MAX_OCTAVE:
            raise InvalidArgument(
                ErrorMessages.INVALID_OCTAVE.format(low=MIN_OCTAVE, high=MAX_OCTAVE, octave=octave)
            )

        object.__setattr__(self, "_pitch_class", pitch_class)
        object.__setattr__(self, "_octave", octave)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, text: str) -> Note:
        """Parse note text like 'C4', 'F#3', 'Bbb0' or 'E♭5'."""
        if not isinstance(text, str):
            raise ParseError(ErrorMessages.INVALID_NOTE.format(text=text))

        match = _NOTE_PATTERN.match(text)
        if match is None:
            raise ParseError(ErrorMessages.INVALID_NOTE.format(text=text))

        octave = int(match.group(2))
        if not MIN_OCTAVE <= octave <= MAX_OCTAVE:
            raise ParseError(ErrorMessages.INVALID_NOTE.format(text=text))

        try:
            pitch_class = PitchClass.parse(match.group(1))
        except ParseError:
            raise ParseError(ErrorMessages.INVALID_NOTE.format(text=text)) from None

        return cls(pitch_class, octave)

    @classmethod
    def all(
        cls,
        min_octave: int = 4,
        max_octave: int = 4,
        max_accidentals: int | None = None,
    ) -> list[Note]:
        """Every pitch class (see PitchClass.all) in each octave of the range."""
        pitch_classes = PitchClass.all(max_accidentals)
        return [
            cls(pitch_class, octave)
            for octave in range(min_octave, max_octave + 1)
            for pitch_class in pitch_classes
        ]

    @classmethod
    def from_number(
        cls,
        number: int,
        max_accidentals: int = 2,
        normal_only: bool = False,
    ) -> set[Note]:
        """
        All spellings of a note number.

        Args:
            number: Semitones above C0
            max_accidentals: Largest accidental count to consider
            normal_only: Only key-signature spellings (overrides max_accidentals)

        Returns:
            Set of notes, e.g. 60 -> {B#4, C5, Dbb5}
        """
        from chuk_mcp_theory.core.index import get_note_index

        if not is_int(number):
            raise InvalidArgument(ErrorMessages.EXPECTED_INTEGER.format(value=number))
        if not is_int(max_accidentals) or max_accidentals < 0:
            raise InvalidArgument(ErrorMessages.EXPECTED_INTEGER.format(value=max_accidentals))

        spellings = get_note_index().spellings(number)
        if normal_only:
            normal = set(PitchClass.all())
            return {note for note in spellings if note.pitch_class in normal}
        return {note for note in spellings if abs(note.pitch_class.accidentals) <= max_accidentals}

    @classmethod
    def from_midi_note(
        cls,
        midi_note: int,
        max_accidentals: int = 2,
        normal_only: bool = False,
    ) -> set[Note]:
        """All spellings of a MIDI note number (C4 = 60)."""
        if not is_int(midi_note):
            raise InvalidArgument(ErrorMessages.EXPECTED_INTEGER.format(value=midi_note))
        return cls.from_number(midi_note - MIDI_OFFSET, max_accidentals, normal_only)

    @property
    def pitch_class(self) -> PitchClass:
        return self._pitch_class

    @property
    def octave(self) -> int:
        return self._octave

    @property
    def number(self) -> int:
        """Semitones above C0."""
        return self._pitch_class.number + 12 * self._octave

    @property
    def midi_note(self) -> int:
        """MIDI note number (C4 = 60, A4 = 69)."""
        return self.number + MIDI_OFFSET

    @property
    def frequency(self) -> float:
        """Equal-tempered frequency in Hz relative to the configured A4."""
        reference = get_settings().reference_frequency
        return reference * 2 ** ((self.number - A4_NUMBER) / 12)

    @property
    def lilypond_notation(self) -> str:
        """LilyPond absolute pitch, e.g. C3 -> 'c', C#4 -> "cis'", Cb2 -> 'ces,'."""
        marks = "'" * (self._octave - 3) if self._octave > 3 else "," * (3 - self._octave)
        return self._pitch_class.lilypond_notation + marks

    def to_octave(self, octave: int) -> Note:
        """Same pitch class in another octave."""
        return Note(self._pitch_class, octave)

    def _transpose(self, steps: int, semitones: int) -> Note:
        """Move by diatonic steps and semitones, re-spelling the result."""
        position = self._pitch_class.index + steps
        letter = LETTERS[position % 7]
        octave = self._octave + position // 7
        target = self.number + semitones
        accidentals = target - (letter.number + 12 * octave)

        if abs(accidentals) > get_settings().max_accidentals:
            raise InvalidOperation(
                ErrorMessages.TOO_MANY_ACCIDENTALS.format(
                    letter=letter.value, accidentals=accidentals, target=target
                )
            )
        if not MIN_OCTAVE <= octave <= MAX_OCTAVE:
            raise InvalidOperation(
                ErrorMessages.OCTAVE_OUT_OF_RANGE.format(low=MIN_OCTAVE, high=MAX_OCTAVE)
            )
        return Note(PitchClass(letter, accidentals), octave)

    def __add__(self, other: Interval) -> Note:
        """Transpose up by an interval."""
        if not isinstance(other, Interval):
            raise InvalidOperation(
                ErrorMessages.UNSUPPORTED_OPERAND.format(operation="Note +", value=other)
            )
        return self._transpose(other.size - 1, other.semitones)

    def __sub__(self, other: Interval | Note) -> Note | Interval:  # type: ignore[override]
        """
        Transpose down by an interval, or measure the interval between notes.

        E4 - M3 = C4
        G4 - C4 = P5 (self must not be below other)
        """
        if isinstance(other, Interval):
            return self._transpose(1 - other.size, -other.semitones)
        if isinstance(other, Note):
            return self._interval_from(other)
        raise InvalidOperation(
            ErrorMessages.UNSUPPORTED_OPERAND.format(operation="Note -", value=other)
        )

    def _interval_from(self, lower: Note) -> Interval:
        semitones = self.number - lower.number
        steps = (self._octave * 7 + self._pitch_class.index) - (
            lower._octave * 7 + lower._pitch_class.index
        )
        # A diminished unison may sit one semitone below its lower note
        if semitones < -1 or steps < 0:
            raise InvalidOperation(ErrorMessages.DESCENDING_NOTES.format(upper=self, lower=lower))

        try:
            return Interval.from_semitones(steps + 1, semitones)
        except InvalidArgument:
            raise InvalidOperation(
                ErrorMessages.NO_MATCHING_INTERVAL.format(lower=lower, upper=self)
            ) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self._pitch_class == other._pitch_class and self._octave == other._octave

    def __lt__(self, other: Note) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return (self._octave, self._pitch_class) < (other._octave, other._pitch_class)

    def __hash__(self) -> int:
        return hash((self._pitch_class, self._octave))

    def __str__(self) -> str:
        return f"{self._pitch_class}{self._octave}"

    def __repr__(self) -> str:
        return f"Note({str(self)!r})"
