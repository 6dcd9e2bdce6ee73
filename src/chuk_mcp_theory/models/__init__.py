"""
Pydantic models for the theory engine.

This module provides:
- ChordRecipe: Named chord interval pattern with aliases
- ScaleRecipe: Named scale interval pattern
- RecipeCatalogue: Validated collection of chord and scale recipes
"""

from chuk_mcp_theory.models.recipe import ChordRecipe, RecipeCatalogue, ScaleRecipe

__all__ = [
    "ChordRecipe",
    "RecipeCatalogue",
    "ScaleRecipe",
]
