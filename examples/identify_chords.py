#!/usr/bin/env python3
"""
Example: Spelling, Chords and Keys.

This demonstrates spelling-aware arithmetic, chord identification from
voicings, and ranking scales against a weighted set of chords to guess
the key of a progression.

Usage:
    python examples/identify_chords.py
"""

from chuk_mcp_theory import Chord, Interval, Note, Scale, override_settings


def main() -> None:
    """Demonstrate the theory engine."""
    print("CHUK Music Theory Demo")
    print("=" * 40)
    print()

    # Transposition keeps letter names
    print("Transposition:")
    for start, interval in [("C4", "M3"), ("C4", "d4"), ("A4", "d5"), ("B3", "M17")]:
        result = Note(start) + Interval(interval)
        print(f"  {start} + {interval} = {result}")
    print()

    # Intervals between notes
    print("Intervals:")
    for lower, upper in [("C4", "E4"), ("C4", "B#4"), ("C4", "E5")]:
        print(f"  {lower} -> {upper}: {Note(upper) - Note(lower)}")
    print()

    # Identify voicings; the lowest note is the bass
    print("Chord identification:")
    voicings = [
        ["C4", "E4", "G4"],
        ["E3", "G3", "C4"],
        ["F#3", "A3", "C4", "E4"],
        ["C3", "F#3", "A3", "E4"],
    ]
    for voicing in voicings:
        candidates = Chord.identify_from_notes([Note(n) for n in voicing])
        names = ", ".join(str(c) for c in candidates[:3]) or "-"
        print(f"  {' '.join(voicing)}: {names}")
    print()

    # Chords of a scale
    scale = Scale("D", "dorian")
    print(f"Seventh chords of {scale}:")
    for degree in range(1, len(scale) + 1):
        print(f"  {degree}: {scale.chord(degree, 7)}")
    print()

    # Guess the key of a progression, weighting by bars held
    progression = {Chord("Am"): 4.0, Chord("Dm"): 2.0, Chord("E7"): 2.0}
    print("Key of Am | Dm | E7:")
    for score, candidate in Scale.identify_wpcp_all(progression)[:3]:
        print(f"  {candidate}: {score:.2f}")
    print()

    # Unicode rendering
    minor = Scale("Db", "natural_minor")
    with override_settings(unicode_output=True):
        print("Unicode output:")
        print(f"  {minor}: {' '.join(str(p) for p in minor.pitches)}")


if __name__ == "__main__":
    main()
