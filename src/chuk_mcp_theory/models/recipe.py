"""
Recipe models - named interval patterns for chords and scales.

Recipes are data, not code: they are loaded from YAML and validated here
so a malformed entry fails when the catalogue is loaded rather than when
a chord is first built from it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.errors import ParseError


def _parse_intervals(values: tuple[str, ...]) -> tuple[Interval, ...]:
    try:
        return tuple(Interval.parse(value) for value in values)
    except ParseError as e:
        raise ValueError(str(e)) from None


class ChordRecipe(BaseModel):
    """A chord type: intervals above the root plus alternative spellings."""

    name: str = Field(..., min_length=1, description="Canonical recipe name, e.g. 'min7'")
    intervals: tuple[str, ...] = Field(..., min_length=1, description="Intervals from the root")
    aliases: tuple[str, ...] = Field(default=(), description="Alternative suffixes, e.g. 'm7'")
    description: str = Field(default="", description="Human-readable name")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if "/" in v or any(ch.isspace() for ch in v):
            raise ValueError(f"Recipe name {v!r} may not contain '/' or whitespace")
        return v

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for alias in v:
            if not alias or "/" in alias:
                raise ValueError(f"Invalid alias {alias!r}")
        return v

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        parsed = _parse_intervals(v)
        if parsed[0] != Interval.P1:
            raise ValueError("Chord intervals must start with P1")
        if any(lower >= upper for lower, upper in zip(parsed, parsed[1:])):
            raise ValueError(f"Chord intervals must be strictly ascending: {list(v)}")
        return v

    def interval_objects(self) -> tuple[Interval, ...]:
        """The intervals as Interval values."""
        return _parse_intervals(self.intervals)


class ScaleRecipe(BaseModel):
    """A scale type: ordered intervals above the root."""

    name: str = Field(..., min_length=1, description="Canonical recipe name, e.g. 'dorian'")
    intervals: tuple[str, ...] = Field(..., min_length=1, description="Intervals from the root")
    greek_mode: int | None = Field(
        default=None,
        ge=1,
        le=7,
        description="Position among the greek modes (1 = ionian)",
    )
    description: str = Field(default="", description="Human-readable name")

    model_config = {"frozen": True}

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        parsed = _parse_intervals(v)
        if parsed[0] != Interval.P1:
            raise ValueError("Scale intervals must start with P1")
        if any(lower >= upper for lower, upper in zip(parsed, parsed[1:])):
            raise ValueError(f"Scale intervals must be strictly ascending: {list(v)}")
        return v

    def interval_objects(self) -> tuple[Interval, ...]:
        """The intervals as Interval values."""
        return _parse_intervals(self.intervals)


class RecipeCatalogue(BaseModel):
    """Every known chord and scale recipe."""

    chords: tuple[ChordRecipe, ...] = Field(default=())
    scales: tuple[ScaleRecipe, ...] = Field(default=())

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_names(self) -> RecipeCatalogue:
        chord_names = [recipe.name for recipe in self.chords]
        if len(set(chord_names)) != len(chord_names):
            raise ValueError("Duplicate chord recipe names")

        seen = set(chord_names)
        for recipe in self.chords:
            for alias in recipe.aliases:
                if alias in seen:
                    raise ValueError(f"Chord alias {alias!r} clashes with another name")
                seen.add(alias)

        scale_names = [recipe.name for recipe in self.scales]
        if len(set(scale_names)) != len(scale_names):
            raise ValueError("Duplicate scale recipe names")

        modes = [recipe.greek_mode for recipe in self.scales if recipe.greek_mode is not None]
        if len(set(modes)) != len(modes):
            raise ValueError("Duplicate greek mode numbers")
        return self

    def chord(self, name: str) -> ChordRecipe | None:
        """Find a chord recipe by name or alias."""
        for recipe in self.chords:
            if recipe.name == name or name in recipe.aliases:
                return recipe
        return None

    def scale(self, name: str) -> ScaleRecipe | None:
        """Find a scale recipe by name."""
        for recipe in self.scales:
            if recipe.name == name:
                return recipe
        return None

    def chord_suffixes(self) -> list[tuple[str, str]]:
        """
        Every (suffix, recipe name) pair, longest suffix first.

        Used when parsing chord text, where the longest matching suffix wins.
        """
        pairs = []
        for recipe in self.chords:
            pairs.append((recipe.name, recipe.name))
            pairs.extend((alias, recipe.name) for alias in recipe.aliases)
        return sorted(pairs, key=lambda pair: (-len(pair[0]), pair[0]))

    def greek_modes(self) -> list[ScaleRecipe]:
        """The greek mode recipes in mode order."""
        modes = [recipe for recipe in self.scales if recipe.greek_mode is not None]
        return sorted(modes, key=lambda recipe: recipe.greek_mode or 0)
