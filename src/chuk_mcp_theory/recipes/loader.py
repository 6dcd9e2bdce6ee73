"""
Recipe loader - discovers and loads chord and scale recipes.

Recipes can come from:
1. Built-in library (shipped with package)
2. Project recipes (a directory with chords.yaml and/or scales.yaml)

Project recipes override library recipes with the same name.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_theory.constants import ErrorMessages
from chuk_mcp_theory.errors import InvalidArgument
from chuk_mcp_theory.models.recipe import ChordRecipe, RecipeCatalogue, ScaleRecipe
from chuk_mcp_theory.settings import get_settings

logger = logging.getLogger(__name__)

CHORDS_FILE = "chords.yaml"
SCALES_FILE = "scales.yaml"


class RecipeLoader:
    """
    Loads recipe definitions into a validated catalogue.

    Unlike most loaders, a malformed entry is an error rather than
    something to skip: every later chord and scale depends on it.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the recipe loader.

        Args:
            library_path: Path to built-in recipe library
            project_path: Path to project recipes directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path

    def load(self) -> RecipeCatalogue:
        """Load and validate the merged catalogue."""
        chords: dict[str, dict[str, Any]] = {}
        scales: dict[str, dict[str, Any]] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            chords.update(self._load_section(directory / CHORDS_FILE, "chords"))
            scales.update(self._load_section(directory / SCALES_FILE, "scales"))

        try:
            catalogue = RecipeCatalogue(
                chords=tuple(ChordRecipe(name=name, **data) for name, data in chords.items()),
                scales=tuple(ScaleRecipe(name=name, **data) for name, data in scales.items()),
            )
        except (ValidationError, TypeError) as e:
            raise InvalidArgument(
                ErrorMessages.INVALID_CATALOGUE.format(source=self._describe(), detail=e)
            ) from e

        logger.debug(
            f"Loaded {len(catalogue.chords)} chord and {len(catalogue.scales)} "
            f"scale recipes from {self._describe()}"
        )
        return catalogue

    def _load_section(self, path: Path, section: str) -> dict[str, dict[str, Any]]:
        """Read one YAML file and return its name -> fields mapping."""
        if not path.exists():
            return {}

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        entries = data.get(section, {}) if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            raise InvalidArgument(
                ErrorMessages.INVALID_CATALOGUE.format(
                    source=path, detail=f"expected a '{section}' mapping"
                )
            )

        for name, fields in entries.items():
            if not isinstance(fields, dict):
                raise InvalidArgument(
                    ErrorMessages.INVALID_CATALOGUE.format(
                        source=path, detail=f"entry {name!r} must be a mapping"
                    )
                )
        return {str(name): fields for name, fields in entries.items()}

    def _describe(self) -> str:
        if self.project_path is None:
            return str(self.library_path)
        return f"{self.library_path} + {self.project_path}"


_lock = threading.Lock()
_catalogue: RecipeCatalogue | None = None


def get_catalogue() -> RecipeCatalogue:
    """
    Return the process-wide catalogue, loading it on first use.

    The project directory comes from the recipes_path setting active at
    that moment.
    """
    global _catalogue
    if _catalogue is None:
        with _lock:
            if _catalogue is None:
                _catalogue = RecipeLoader(project_path=get_settings().recipes_path).load()
    return _catalogue


def set_catalogue(catalogue: RecipeCatalogue | None) -> None:
    """
    Replace the process-wide catalogue (None reloads on next use).

    Lookup tables derived from the previous catalogue are dropped.
    """
    from chuk_mcp_theory.core.index import reset_indexes

    global _catalogue
    with _lock:
        _catalogue = catalogue
    reset_indexes()
