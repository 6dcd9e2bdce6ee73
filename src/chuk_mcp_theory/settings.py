"""
Process-wide settings for the theory engine.

Settings are a frozen pydantic model. The active instance is read at call
time by the core types, so changing it affects subsequent parsing and
rendering. Settings can be loaded from a YAML file:

    max_accidentals: 4
    unicode_output: true
    reference_frequency: 442.0
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from chuk_mcp_theory.constants import DEFAULT_MAX_ACCIDENTALS, MAX_OCTAVE, MIN_OCTAVE
from chuk_mcp_theory.errors import InvalidArgument

logger = logging.getLogger(__name__)


class TheorySettings(BaseModel):
    """Tunable behaviour of the theory engine."""

    max_accidentals: int = Field(
        default=DEFAULT_MAX_ACCIDENTALS,
        ge=0,
        le=11,
        description="Largest number of sharps or flats a pitch class may carry",
    )
    unicode_output: bool = Field(
        default=False,
        description="Render accidentals with ♯/♭/𝄪/𝄫 instead of #/b",
    )
    default_octave: int = Field(
        default=4,
        ge=MIN_OCTAVE,
        le=MAX_OCTAVE,
        description="Octave used when chords and scales are turned into notes for the caller",
    )
    reference_frequency: float = Field(
        default=440.0,
        gt=0,
        description="Frequency of A4 in Hz",
    )
    recipes_path: Path | None = Field(
        default=None,
        description="Directory of project recipe YAML files merged over the library",
    )

    model_config = {"frozen": True}


_lock = threading.Lock()
_settings = TheorySettings()


def get_settings() -> TheorySettings:
    """Return the active settings."""
    return _settings


def set_settings(settings: TheorySettings) -> TheorySettings:
    """Install a settings instance, returning the previous one."""
    global _settings
    with _lock:
        previous = _settings
        _settings = settings
    return previous


def configure(**changes: Any) -> TheorySettings:
    """
    Update individual settings.

    Args:
        **changes: Field values to change

    Returns:
        The new active settings
    """
    try:
        updated = TheorySettings(**{**_settings.model_dump(), **changes})
    except ValidationError as e:
        raise InvalidArgument(str(e)) from e
    set_settings(updated)
    return updated


@contextmanager
def override_settings(**changes: Any) -> Iterator[TheorySettings]:
    """Temporarily change settings inside a ``with`` block."""
    previous = _settings
    updated = configure(**changes)
    try:
        yield updated
    finally:
        set_settings(previous)


def load_settings(path: Path) -> TheorySettings:
    """
    Load settings from a YAML file.

    Missing keys keep their defaults. The loaded settings are returned,
    not installed; pass them to set_settings() to activate them.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise InvalidArgument(f"Settings file {path} must contain a mapping")

    try:
        settings = TheorySettings(**data)
    except ValidationError as e:
        raise InvalidArgument(f"Invalid settings file {path}: {e}") from e

    logger.debug(f"Loaded settings from {path}")
    return settings


__all__ = [
    "TheorySettings",
    "get_settings",
    "set_settings",
    "configure",
    "override_settings",
    "load_settings",
]
