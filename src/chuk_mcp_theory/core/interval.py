"""
Diatonic intervals - quality plus size.

An interval is named, not just counted: a M3 and a d4 both span four
semitones but are different intervals. Semitones are derived from the
quality and size; compound intervals (size > 8) add 12 semitones per
octave folded out.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import ClassVar

from chuk_mcp_theory.constants import BASE_SEMITONES, QUALITY_INVERSE, ErrorMessages
from chuk_mcp_theory.core.pitch import is_int
from chuk_mcp_theory.errors import InvalidArgument, InvalidOperation, ParseError

_ALTERED_PATTERN = re.compile(r"^([dA]+)([0-9]+)$")
_PLAIN_PATTERN = re.compile(r"^([mPM])([0-9]+)$")


def _semitones_for(quality: str, size: int) -> int:
    """Semitone span of a (quality, size) pair; raises InvalidArgument."""
    if not isinstance(quality, str) or quality not in QUALITY_INVERSE:
        raise InvalidArgument(ErrorMessages.INVALID_QUALITY.format(quality=quality))
    if not is_int(size) or size < 1:
        raise InvalidArgument(ErrorMessages.INVALID_SIZE.format(size=size))

    octaves, reduced = 0, size
    while reduced > 8:
        reduced -= 7
        octaves += 1

    base = BASE_SEMITONES.get((quality[0], reduced))
    if base is None:
        raise InvalidArgument(
            ErrorMessages.INVALID_QUALITY_FOR_SIZE.format(quality=quality, size=size)
        )

    # Each extra d or A moves one more semitone away from the base
    extra = len(quality) - 1
    if quality[0] == "d":
        base -= extra
    elif quality[0] == "A":
        base += extra

    return base + 12 * octaves


@total_ordering
class Interval:
    """
    A diatonic interval such as m3, P5, A4 or M10.

    Construct from parts or from text:
        Interval("M", 3)
        Interval("M3")

    Equality and hashing use (quality, size); ordering uses
    (size, semitones). Immutable and hashable.
    """

    __slots__ = ("_quality", "_size", "_semitones")
    _quality: str
    _size: int
    _semitones: int

    # Named intervals (class constants)
    P1: ClassVar[Interval]
    m2: ClassVar[Interval]
    M2: ClassVar[Interval]
    m3: ClassVar[Interval]
    M3: ClassVar[Interval]
    P4: ClassVar[Interval]
    A4: ClassVar[Interval]
    d5: ClassVar[Interval]
    P5: ClassVar[Interval]
    m6: ClassVar[Interval]
    M6: ClassVar[Interval]
    m7: ClassVar[Interval]
    M7: ClassVar[Interval]
    P8: ClassVar[Interval]

    def __init__(self, quality: str, size: int | None = None) -> None:
        if size is None:
            parsed = Interval.parse(quality)
            quality, size = parsed._quality, parsed._size

        semitones = _semitones_for(quality, size)
        object.__setattr__(self, "_quality", quality)
        object.__setattr__(self, "_size", size)
        object.__setattr__(self, "_semitones", semitones)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, text: str) -> Interval:
        """
        Parse interval text like 'P5', 'm3', 'A4', 'dd7' or 'M10'.

        Raises ParseError for malformed text and for quality/size pairs
        that do not exist (e.g. 'P3', 'M5').
        """
        if not isinstance(text, str):
            raise ParseError(ErrorMessages.INVALID_INTERVAL.format(text=text))

        match = _ALTERED_PATTERN.match(text) or _PLAIN_PATTERN.match(text)
        if match is None:
            raise ParseError(ErrorMessages.INVALID_INTERVAL.format(text=text))

        try:
            return cls(match.group(1), int(match.group(2)))
        except InvalidArgument:
            raise ParseError(ErrorMessages.INVALID_INTERVAL.format(text=text)) from None

    @classmethod
    def all(cls, include_atypical: bool = False) -> list[Interval]:
        """
        Every simple interval (sizes 1-8), sorted.

        Atypical intervals, those spanning fewer than 0 or more than 12
        semitones or using doubled/tripled alterations, are only included
        when requested.
        """
        result = []
        for quality in QUALITY_INVERSE:
            if len(quality) > 1 and not include_atypical:
                continue
            for size in range(1, 9):
                if (quality[0], size) not in BASE_SEMITONES:
                    continue
                interval = cls(quality, size)
                if include_atypical or 0 <= interval.semitones <= 12:
                    result.append(interval)
        return sorted(result)

    @classmethod
    def from_semitones(cls, size: int, semitones: int) -> Interval:
        """
        Find the interval of a given size spanning the given semitones.

        from_semitones(3, 4) -> M3, from_semitones(3, 5) -> A3,
        from_semitones(10, 15) -> m10
        """
        if not is_int(size) or size < 1:
            raise InvalidArgument(ErrorMessages.INVALID_SIZE.format(size=size))

        octaves, reduced = 0, size
        while reduced > 8:
            reduced -= 7
            octaves += 1
        offset = semitones - 12 * octaves

        if ("P", reduced) in BASE_SEMITONES:
            delta = offset - BASE_SEMITONES[("P", reduced)]
            if delta == 0:
                return cls("P", size)
        else:
            delta = offset - BASE_SEMITONES[("M", reduced)]
            if delta == 0:
                return cls("M", size)
            if delta == -1:
                return cls("m", size)
            # Diminished counts down from minor
            if delta < 0:
                delta += 1

        quality = ("A" if delta > 0 else "d") * abs(delta)
        if quality not in QUALITY_INVERSE:
            raise InvalidArgument(
                ErrorMessages.NO_INTERVAL_SPAN.format(size=size, semitones=semitones)
            )
        return cls(quality, size)

    @property
    def quality(self) -> str:
        """Quality symbol: P, m, M, d, A, dd, AA, ddd or AAA."""
        return self._quality

    @property
    def size(self) -> int:
        """Diatonic size (1 = unison, 8 = octave)."""
        return self._size

    @property
    def semitones(self) -> int:
        """Number of semitones spanned."""
        return self._semitones

    def is_compound(self) -> bool:
        """True for intervals wider than an octave (size > 8)."""
        return self._size > 8

    def complement(self) -> Interval:
        """
        The interval that completes this one to an octave.

        M3 -> m6, P5 -> P4, A4 -> d5, P1 -> P8
        """
        if self.is_compound():
            raise InvalidOperation(ErrorMessages.COMPOUND_COMPLEMENT.format(interval=self))
        return Interval(QUALITY_INVERSE[self._quality], 9 - self._size)

    def reduce(self) -> Interval:
        """
        Fold out whole octaves so the size drops below 8.

        M10 -> M3, P15 -> P1, P8 -> P1
        """
        if self._size < 8:
            return self
        return Interval(self._quality, self._size - 7 * ((self._size - 1) // 7))

    def split(self) -> list[Interval]:
        """
        Decompose into octaves plus a simple remainder.

        M17 -> [P8, P8, M3], P15 -> [P8, P8]
        """
        parts = []
        size = self._size
        while size > 8:
            parts.append(Interval.P8)
            size -= 7
        parts.append(Interval(self._quality, size))
        return parts

    def __add__(self, other: Interval) -> Interval:
        """Stack two intervals: M3 + m3 = P5."""
        if not isinstance(other, Interval):
            raise InvalidOperation(
                ErrorMessages.UNSUPPORTED_OPERAND.format(operation="Interval +", value=other)
            )
        from chuk_mcp_theory.core.note import Note

        base = Note.parse("C0")
        return (base + self + other) - base

    def __sub__(self, other: Interval) -> Interval:
        """Remove a smaller interval: P5 - M3 = m3."""
        if not isinstance(other, Interval):
            raise InvalidOperation(
                ErrorMessages.UNSUPPORTED_OPERAND.format(operation="Interval -", value=other)
            )
        if other._size > self._size:
            raise InvalidOperation(
                ErrorMessages.NEGATIVE_INTERVAL.format(interval=self, other=other)
            )
        from chuk_mcp_theory.core.note import Note

        base = Note.parse("C0")
        return (base + self) - (base + other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._quality == other._quality and self._size == other._size

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return (self._size, self._semitones) < (other._size, other._semitones)

    def __hash__(self) -> int:
        return hash((self._quality, self._size))

    def __str__(self) -> str:
        return f"{self._quality}{self._size}"

    def __repr__(self) -> str:
        return f"Interval({str(self)!r})"


# Initialize class constants
Interval.P1 = Interval("P", 1)
Interval.m2 = Interval("m", 2)
Interval.M2 = Interval("M", 2)
Interval.m3 = Interval("m", 3)
Interval.M3 = Interval("M", 3)
Interval.P4 = Interval("P", 4)
Interval.A4 = Interval("A", 4)
Interval.d5 = Interval("d", 5)
Interval.P5 = Interval("P", 5)
Interval.m6 = Interval("m", 6)
Interval.M6 = Interval("M", 6)
Interval.m7 = Interval("m", 7)
Interval.M7 = Interval("M", 7)
Interval.P8 = Interval("P", 8)
