#!/usr/bin/env python3
"""
Async Music Theory MCP Server using chuk-mcp-server

This server exposes a spelling-aware music theory engine as MCP tools.
Notes, intervals, chords and scales keep their letter names, so C# and
Db are never confused and every answer comes back correctly spelled.

The server provides tools for:
- Describing notes, their MIDI numbers, frequencies and enharmonics
- Transposing notes and naming the interval between two notes
- Describing chords and identifying chords from notes
- Describing scales, building their chords and identifying the key of
  a passage
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_theory.recipes import get_catalogue
from chuk_mcp_theory.settings import get_settings
from chuk_mcp_theory.tools import register_harmony_tools, register_note_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-theory")

# Register all tools
note_tools = register_note_tools(mcp)
harmony_tools = register_harmony_tools(mcp)

# Export tool functions for direct access
theory_describe_note = note_tools["theory_describe_note"]
theory_transpose = note_tools["theory_transpose"]
theory_interval_between = note_tools["theory_interval_between"]
theory_spell_midi = note_tools["theory_spell_midi"]

theory_describe_chord = harmony_tools["theory_describe_chord"]
theory_identify_chord = harmony_tools["theory_identify_chord"]
theory_describe_scale = harmony_tools["theory_describe_scale"]
theory_diatonic_chords = harmony_tools["theory_diatonic_chords"]
theory_identify_scale = harmony_tools["theory_identify_scale"]
theory_rank_scales = harmony_tools["theory_rank_scales"]

catalogue = get_catalogue()
settings = get_settings()

logger.info("CHUK Music Theory MCP Server initialized")
logger.info(f"  Chord recipes: {len(catalogue.chords)}")
logger.info(f"  Scale recipes: {len(catalogue.scales)}")
logger.info(f"  Max accidentals: {settings.max_accidentals}")
