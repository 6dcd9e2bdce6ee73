"""
Recipe catalogue - chord and scale definitions loaded from YAML.

The built-in library lives in recipes/library/. A project directory can
add or override recipes by name.
"""

from chuk_mcp_theory.recipes.loader import RecipeLoader, get_catalogue, set_catalogue

__all__ = [
    "RecipeLoader",
    "get_catalogue",
    "set_catalogue",
]
