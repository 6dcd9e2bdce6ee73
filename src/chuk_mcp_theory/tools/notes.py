"""
Note tools - MCP tools for spelling, transposing and measuring notes.

Tools for describing a note, transposing it by an interval, measuring
the interval between two notes and listing the spellings of a MIDI note.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.constants import Direction
from chuk_mcp_theory.core import Interval, Note
from chuk_mcp_theory.errors import TheoryError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _error(e: Exception) -> str:
    return json.dumps({"status": "error", "error_type": type(e).__name__, "message": str(e)})


def register_note_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register note tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_describe_note(note: str) -> str:
        """
        Describe a note.

        Returns the note's pitch class, octave, MIDI number, frequency,
        LilyPond name and its enharmonic spellings.

        Args:
            note: Note name with octave, e.g. "C#4", "Bb3"

        Returns:
            JSON string with note details

        Example:
            theory_describe_note(note="F#4")
        """
        try:
            parsed = Note.parse(note)
            enharmonics = sorted(Note.from_number(parsed.number) - {parsed})

            return json.dumps(
                {
                    "status": "success",
                    "note": str(parsed),
                    "pitch_class": str(parsed.pitch_class),
                    "octave": parsed.octave,
                    "midi_note": parsed.midi_note,
                    "frequency": round(parsed.frequency, 3),
                    "lilypond": parsed.lilypond_notation,
                    "enharmonics": [str(n) for n in enharmonics],
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to describe note")
            return _error(e)

    tools["theory_describe_note"] = theory_describe_note

    @mcp.tool  # type: ignore[arg-type]
    async def theory_transpose(note: str, interval: str, direction: str = "up") -> str:
        """
        Transpose a note by an interval, keeping correct spelling.

        Args:
            note: Starting note, e.g. "C4"
            interval: Interval name, e.g. "M3", "P5", "m10"
            direction: "up" or "down"

        Returns:
            JSON string with the transposed note

        Example:
            theory_transpose(note="E4", interval="M3", direction="down")
        """
        try:
            start = Note.parse(note)
            step = Interval.parse(interval)
            way = Direction(direction)
            result = start + step if way == Direction.UP else start - step

            return json.dumps(
                {
                    "status": "success",
                    "note": str(start),
                    "interval": str(step),
                    "direction": way.value,
                    "result": str(result),
                    "midi_note": result.midi_note,
                }
            )
        except ValueError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to transpose note")
            return _error(e)

    tools["theory_transpose"] = theory_transpose

    @mcp.tool  # type: ignore[arg-type]
    async def theory_interval_between(lower: str, upper: str) -> str:
        """
        Name the interval from one note up to another.

        Args:
            lower: Lower note, e.g. "C4"
            upper: Upper note, e.g. "B#4"

        Returns:
            JSON string with the interval, its size in semitones and,
            for simple intervals, its complement

        Example:
            theory_interval_between(lower="C4", upper="G5")
        """
        try:
            interval = Note.parse(upper) - Note.parse(lower)

            return json.dumps(
                {
                    "status": "success",
                    "interval": str(interval),
                    "semitones": interval.semitones,
                    "compound": interval.is_compound(),
                    "reduced": str(interval.reduce()),
                    "complement": None if interval.is_compound() else str(interval.complement()),
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to measure interval")
            return _error(e)

    tools["theory_interval_between"] = theory_interval_between

    @mcp.tool  # type: ignore[arg-type]
    async def theory_spell_midi(midi_note: int, max_accidentals: int = 1) -> str:
        """
        List the spellings of a MIDI note number.

        Args:
            midi_note: MIDI note number (60 = C4)
            max_accidentals: Largest number of sharps or flats to allow

        Returns:
            JSON string with the spellings in note order

        Example:
            theory_spell_midi(midi_note=61)
        """
        try:
            spellings = sorted(Note.from_midi_note(midi_note, max_accidentals))

            return json.dumps(
                {
                    "status": "success",
                    "midi_note": midi_note,
                    "spellings": [str(n) for n in spellings],
                    "count": len(spellings),
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to spell MIDI note")
            return _error(e)

    tools["theory_spell_midi"] = theory_spell_midi

    return tools
