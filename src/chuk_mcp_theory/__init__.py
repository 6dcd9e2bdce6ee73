"""
CHUK Music Theory - spelling-aware music theory engine with MCP tools.
"""

from chuk_mcp_theory.core import Chord, Interval, Note, PitchClass, Scale
from chuk_mcp_theory.errors import InvalidArgument, InvalidOperation, ParseError, TheoryError
from chuk_mcp_theory.settings import TheorySettings, configure, get_settings, override_settings

__version__ = "0.1.0"

__all__ = [
    "PitchClass",
    "Interval",
    "Note",
    "Chord",
    "Scale",
    "TheoryError",
    "ParseError",
    "InvalidArgument",
    "InvalidOperation",
    "TheorySettings",
    "configure",
    "get_settings",
    "override_settings",
]
