"""
Harmony tools - MCP tools for chords and scales.

Tools for describing and identifying chords, building the chords of a
scale, and finding the scales that fit a set of notes or chords.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.core import Chord, Note, PitchClass, Scale
from chuk_mcp_theory.errors import ParseError, TheoryError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _error(e: Exception) -> str:
    return json.dumps({"status": "error", "error_type": type(e).__name__, "message": str(e)})


def parse_item(text: str) -> Note | PitchClass | Chord:
    """
    Parse free text as a note, a pitch class or a chord, in that order.

    'C4' is a note, 'C' a pitch class, 'Am7' a chord. A chord written
    with a bare numeric suffix that also reads as a note ('E9') is taken
    as the note; spell the recipe out ('Edom9') to get the chord.
    """
    for parser in (Note.parse, PitchClass.parse, Chord.parse):
        try:
            return parser(text)  # type: ignore[no-any-return]
        except ParseError:
            continue
    raise ParseError(f"Not a note, pitch class or chord: {text!r}")


def describe_chord(chord: Chord) -> dict[str, Any]:
    """Serialize a chord for tool output."""
    return {
        "name": str(chord),
        "root": str(chord.root),
        "recipe": chord.recipe,
        "inversion": chord.inversion,
        "bass": str(chord.bass),
        "intervals": [str(i) for i in chord.intervals],
        "pitches": [str(p) for p in chord.pitches],
    }


def register_harmony_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register chord and scale tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_describe_chord(chord: str, octave: int = 4) -> str:
        """
        Describe a chord.

        Accepts chord symbols with recipe names or aliases and slash
        chords: "Cmaj7", "Ebm", "F#ø7", "C/E".

        Args:
            chord: Chord symbol
            octave: Octave of the root when listing notes

        Returns:
            JSON string with root, recipe, inversion, intervals, pitches
            and notes

        Example:
            theory_describe_chord(chord="Am7/G")
        """
        try:
            parsed = Chord.parse(chord)
            data = describe_chord(parsed)
            data["notes"] = [str(n) for n in parsed.notes(octave)]

            return json.dumps({"status": "success", "chord": data})
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to describe chord")
            return _error(e)

    tools["theory_describe_chord"] = theory_describe_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_identify_chord(notes: list[str]) -> str:
        """
        Name the chords formed by a set of notes.

        The lowest note is taken as the bass. Open and close voicings
        are both recognised. Candidates are ranked with root-position
        readings first.

        Args:
            notes: Notes with octaves, e.g. ["C3", "F#3", "A3", "E4"]

        Returns:
            JSON string with candidate chords

        Example:
            theory_identify_chord(notes=["E3", "G3", "C4"])
        """
        try:
            parsed = [Note.parse(n) for n in notes]
            candidates = Chord.identify_from_notes(parsed)

            return json.dumps(
                {
                    "status": "success",
                    "notes": [str(n) for n in parsed],
                    "chords": [describe_chord(c) for c in candidates],
                    "count": len(candidates),
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to identify chord")
            return _error(e)

    tools["theory_identify_chord"] = theory_identify_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_describe_scale(root: str, scale: str) -> str:
        """
        Describe a scale.

        Args:
            root: Root pitch class, e.g. "D", "Bb"
            scale: Scale name, e.g. "major", "dorian", "harmonic_minor"

        Returns:
            JSON string with intervals, pitches and whether the scale
            is diatonic

        Example:
            theory_describe_scale(root="D", scale="dorian")
        """
        try:
            parsed = Scale(root, scale)

            return json.dumps(
                {
                    "status": "success",
                    "scale": str(parsed),
                    "intervals": [str(i) for i in parsed.intervals],
                    "pitches": [str(p) for p in parsed.pitches],
                    "diatonic": parsed.is_diatonic(),
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to describe scale")
            return _error(e)

    tools["theory_describe_scale"] = theory_describe_scale

    @mcp.tool  # type: ignore[arg-type]
    async def theory_diatonic_chords(root: str, scale: str, extension: int = 5) -> str:
        """
        Build a chord on every degree of a scale.

        Args:
            root: Root pitch class, e.g. "C"
            scale: Scale name, e.g. "major"
            extension: 5 for triads, 7/9/11/13 for extended chords,
                4 or 6 to add the fourth or sixth

        Returns:
            JSON string with one chord per degree

        Example:
            theory_diatonic_chords(root="C", scale="major", extension=7)
        """
        try:
            parsed = Scale(root, scale)
            chords = [parsed.chord(degree, extension) for degree in range(1, len(parsed) + 1)]

            return json.dumps(
                {
                    "status": "success",
                    "scale": str(parsed),
                    "chords": [
                        {"degree": degree, **describe_chord(chord)}
                        for degree, chord in enumerate(chords, start=1)
                    ],
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to build diatonic chords")
            return _error(e)

    tools["theory_diatonic_chords"] = theory_diatonic_chords

    @mcp.tool  # type: ignore[arg-type]
    async def theory_identify_scale(items: list[str], include_greek_modes: bool = False) -> str:
        """
        Find every scale containing all of the given items.

        Items may be notes ("C4"), pitch classes ("F#") or chords ("Am7").

        Args:
            items: Notes, pitch classes or chord symbols
            include_greek_modes: Also report the greek modes

        Returns:
            JSON string with matching scales

        Example:
            theory_identify_scale(items=["C", "E", "G", "B", "D", "F", "A"])
        """
        try:
            parsed = [parse_item(item) for item in items]
            scales = Scale.identify(parsed, include_greek_modes)

            return json.dumps(
                {
                    "status": "success",
                    "scales": [str(s) for s in scales],
                    "count": len(scales),
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to identify scale")
            return _error(e)

    tools["theory_identify_scale"] = theory_identify_scale

    @mcp.tool  # type: ignore[arg-type]
    async def theory_rank_scales(
        weights: dict[str, float],
        limit: int = 5,
        include_greek_modes: bool = False,
    ) -> str:
        """
        Rank scales against weighted notes and chords.

        Weights typically count how long or how often each item sounds.
        The root scores slightly above other scale tones; tones outside
        the scale count against it.

        Args:
            weights: Item -> weight, e.g. {"C": 4, "E": 2, "G": 2, "Am": 1}
            limit: Number of scales to return
            include_greek_modes: Also rank the greek modes

        Returns:
            JSON string with the best scales and their scores

        Example:
            theory_rank_scales(weights={"A": 3, "C": 1, "E": 2})
        """
        try:
            parsed = [(parse_item(item), weight) for item, weight in weights.items()]
            ranked = Scale.identify_wpcp_all(parsed, include_greek_modes)[:limit]

            return json.dumps(
                {
                    "status": "success",
                    "scales": [
                        {"scale": str(scale), "score": round(score, 4)} for score, scale in ranked
                    ],
                }
            )
        except TheoryError as e:
            return _error(e)
        except Exception as e:
            logger.exception("Failed to rank scales")
            return _error(e)

    tools["theory_rank_scales"] = theory_rank_scales

    return tools
