"""
MCP tool implementations.

Tools are organized by domain:
- notes - Note spelling, transposition and intervals
- harmony - Chord and scale description and identification
"""

from chuk_mcp_theory.tools.harmony import register_harmony_tools
from chuk_mcp_theory.tools.notes import register_note_tools

__all__ = [
    "register_harmony_tools",
    "register_note_tools",
]
