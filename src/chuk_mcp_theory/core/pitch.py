"""
Pitch classes - a letter name plus a signed accidental count.

PitchClass is spelling-aware: C# and Db are distinct values that share a
chromatic number. Equality and hashing use the spelling. Ordering uses the
natural letter's chromatic number, then the accidentals, so C### sorts
below Dbbb.
"""

from __future__ import annotations

from functools import total_ordering
from typing import TYPE_CHECKING

from chuk_mcp_theory.constants import (
    DOUBLE_FLAT,
    DOUBLE_SHARP,
    FLAT_GLYPHS,
    LETTERS,
    NORMAL_ACCIDENTALS,
    SHARP_GLYPHS,
    ErrorMessages,
    Letter,
)
from chuk_mcp_theory.errors import InvalidArgument, ParseError
from chuk_mcp_theory.settings import get_settings

if TYPE_CHECKING:
    from chuk_mcp_theory.core.note import Note


def is_int(value: object) -> bool:
    """True for ints, excluding bool."""
    return isinstance(value, int) and not isinstance(value, bool)


def format_accidentals(accidentals: int, unicode_output: bool | None = None) -> str:
    """Render an accidental count as glyphs (e.g. 2 -> '##' or '𝄪')."""
    if unicode_output is None:
        unicode_output = get_settings().unicode_output

    if unicode_output:
        if accidentals == 2:
            return DOUBLE_SHARP
        if accidentals == -2:
            return DOUBLE_FLAT

    glyph = int(unicode_output)
    if accidentals > 0:
        return SHARP_GLYPHS[glyph] * accidentals
    return FLAT_GLYPHS[glyph] * -accidentals


def parse_accidentals(text: str) -> int:
    """Parse an accidental string into a signed count; raises ParseError."""
    if text == "":
        return 0
    if text == DOUBLE_SHARP:
        return 2
    if text == DOUBLE_FLAT:
        return -2

    symbol = text[0]
    if symbol in SHARP_GLYPHS:
        sign = 1
    elif symbol in FLAT_GLYPHS:
        sign = -1
    else:
        raise ParseError(f"Invalid accidental {symbol!r}")

    if any(ch != symbol for ch in text):
        raise ParseError(f"Mixed accidentals in {text!r}")
    return sign * len(text)


@total_ordering
class PitchClass:
    """
    A spelled pitch class: letter name and accidentals.

    Construct from parts or from text:
        PitchClass("C", 1)      # C sharp
        PitchClass("Db")        # parsed

    Immutable and hashable.
    """

    __slots__ = ("_letter", "_accidentals")
    _letter: Letter
    _accidentals: int

    def __init__(self, letter: str | Letter, accidentals: int | None = None) -> None:
        if accidentals is None:
            parsed = PitchClass.parse(letter)
            letter, accidentals = parsed._letter, parsed._accidentals

        try:
            resolved = Letter(letter)
        except ValueError:
            raise InvalidArgument(ErrorMessages.INVALID_LETTER.format(letter=letter)) from None

        limit = get_settings().max_accidentals
        if not is_int(accidentals) or abs(accidentals) > limit:
            raise InvalidArgument(
                ErrorMessages.INVALID_ACCIDENTALS.format(limit=limit, value=accidentals)
            )

        object.__setattr__(self, "_letter", resolved)
        object.__setattr__(self, "_accidentals", accidentals)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, text: str) -> PitchClass:
        """
        Parse a pitch class like 'C', 'F#', 'Bbb', 'E♭' or 'G𝄪'.

        Accidentals must all use the same glyph. Raises ParseError for
        anything else, including more accidentals than the configured limit.
        """
        if not isinstance(text, str) or not text:
            raise ParseError(ErrorMessages.INVALID_PITCH_CLASS.format(text=text))

        try:
            letter = Letter(text[0])
            accidentals = parse_accidentals(text[1:])
        except ValueError:
            raise ParseError(ErrorMessages.INVALID_PITCH_CLASS.format(text=text)) from None

        if abs(accidentals) > get_settings().max_accidentals:
            raise ParseError(ErrorMessages.INVALID_PITCH_CLASS.format(text=text))

        return cls(letter, accidentals)

    @classmethod
    def all(cls, max_accidentals: int | None = None) -> list[PitchClass]:
        """
        Enumerate pitch classes.

        Without a bound, returns the 17 spellings found in ordinary key
        signatures. With a bound, returns every letter with 0, ±1 .. ±bound
        accidentals.
        """
        if max_accidentals is None:
            return [
                cls(letter, accidentals)
                for letter in LETTERS
                for accidentals in NORMAL_ACCIDENTALS[letter]
            ]

        if not is_int(max_accidentals) or max_accidentals < 0:
            raise InvalidArgument(ErrorMessages.EXPECTED_INTEGER.format(value=max_accidentals))

        result = []
        for letter in LETTERS:
            result.append(cls(letter, 0))
            for count in range(1, max_accidentals + 1):
                result.append(cls(letter, count))
                result.append(cls(letter, -count))
        return result

    @property
    def letter(self) -> Letter:
        """The letter name."""
        return self._letter

    @property
    def name(self) -> str:
        """The letter name as a plain string."""
        return self._letter.value

    @property
    def accidentals(self) -> int:
        """Signed accidental count (positive = sharps)."""
        return self._accidentals

    @property
    def index(self) -> int:
        """Diatonic index of the letter, C=0 .. B=6."""
        return self._letter.index

    @property
    def number(self) -> int:
        """Chromatic number; may fall outside 0..11 (Cb = -1, B# = 12)."""
        return self._letter.number + self._accidentals

    @property
    def chromatic_number(self) -> int:
        """Alias of number."""
        return self.number

    @property
    def accidentals_str(self) -> str:
        """Accidentals rendered in the configured glyph mode."""
        return format_accidentals(self._accidentals)

    @property
    def lilypond_notation(self) -> str:
        """LilyPond pitch name, e.g. 'cis', 'bes', 'feses'."""
        suffix = "is" if self._accidentals > 0 else "es"
        return self._letter.value.lower() + suffix * abs(self._accidentals)

    def sharp(self) -> PitchClass:
        """Raise by one accidental."""
        return PitchClass(self._letter, self._accidentals + 1)

    def flat(self) -> PitchClass:
        """Lower by one accidental."""
        return PitchClass(self._letter, self._accidentals - 1)

    def natural(self) -> PitchClass:
        """Drop all accidentals."""
        return PitchClass(self._letter, 0)

    def to_octave(self, octave: int) -> Note:
        """Place this pitch class in an octave."""
        from chuk_mcp_theory.core.note import Note

        return Note(self, octave)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PitchClass):
            return NotImplemented
        return self._letter == other._letter and self._accidentals == other._accidentals

    def __lt__(self, other: PitchClass) -> bool:
        if not isinstance(other, PitchClass):
            return NotImplemented
        return (self._letter.number, self._accidentals) < (other._letter.number, other._accidentals)

    def __hash__(self) -> int:
        return hash((self._letter.value, self._accidentals))

    def __str__(self) -> str:
        return self._letter.value + self.accidentals_str

    def __repr__(self) -> str:
        return f"PitchClass({self._letter.value!r}, {self._accidentals})"
