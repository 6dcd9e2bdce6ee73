"""
Scales - a root and an ordered interval pattern.

Scale degrees are 1-based and extend past the octave (degree 8 of a
seven-note scale is the root an octave up). Scales answer membership
questions, build chords on their degrees and can be ranked against a
weighted set of pitches to guess the key of a passage.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping, Sequence
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Union

from chuk_mcp_theory.constants import (
    DIATONIC_STEPS,
    REFERENCE_OCTAVE,
    WPCP_IN_SCALE_WEIGHT,
    WPCP_NATURAL_MINOR_BIAS,
    WPCP_OUT_OF_SCALE_WEIGHT,
    WPCP_ROOT_WEIGHT,
    ErrorMessages,
)
from chuk_mcp_theory.core.chord import Chord
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Note
from chuk_mcp_theory.core.pitch import PitchClass, is_int
from chuk_mcp_theory.errors import InvalidArgument, InvalidOperation
from chuk_mcp_theory.settings import get_settings

if TYPE_CHECKING:
    from chuk_mcp_theory.models.recipe import RecipeCatalogue

ScaleItem = Union[PitchClass, Note, Chord, "Scale"]

# Extra degrees stacked above the triad (degree offsets from the chord root)
_EXTENSIONS: dict[int, tuple[int, ...]] = {
    3: (),
    4: (3,),
    5: (),
    6: (5,),
    7: (6,),
    9: (6, 8),
    11: (6, 8, 10),
    13: (6, 8, 10, 12),
}


def _catalogue() -> RecipeCatalogue:
    from chuk_mcp_theory.recipes import get_catalogue

    return get_catalogue()


def _expand(item: Any) -> list[PitchClass]:
    """Pitch classes carried by a weighted-profile item."""
    if isinstance(item, PitchClass):
        return [item]
    if isinstance(item, Note):
        return [item.pitch_class]
    if isinstance(item, (Chord, Scale)):
        return item.pitches
    raise InvalidArgument(ErrorMessages.UNSUPPORTED_ITEM.format(value=item))


@total_ordering
class Scale:
    """
    A scale: root pitch class and intervals above it.

        Scale("C", "major")
        Scale(PitchClass("D"), "dorian")
        Scale("C", ["P1", "M2", "A4", "P5"])

    Immutable and hashable.
    """

    __slots__ = ("_root", "_recipe", "_intervals", "_pitches")
    _root: PitchClass
    _recipe: str | None
    _intervals: tuple[Interval, ...]
    _pitches: tuple[PitchClass, ...] | None

    def __init__(
        self,
        root: PitchClass | str,
        recipe: str | Sequence[Interval | str],
    ) -> None:
        if isinstance(root, str):
            root = PitchClass.parse(root)
        if not isinstance(root, PitchClass):
            raise InvalidArgument(ErrorMessages.EXPECTED_PITCH_CLASS.format(value=root))

        name: str | None = None
        if isinstance(recipe, str):
            found = _catalogue().scale(recipe)
            if found is None:
                raise InvalidArgument(ErrorMessages.UNKNOWN_SCALE_RECIPE.format(name=recipe))
            name, intervals = found.name, found.interval_objects()
        elif isinstance(recipe, Sequence) and recipe:
            values = []
            for value in recipe:
                if isinstance(value, str):
                    value = Interval.parse(value)
                if not isinstance(value, Interval):
                    raise InvalidArgument(ErrorMessages.INVALID_RECIPE.format(value=value))
                values.append(value)
            intervals = tuple(values)
        else:
            raise InvalidArgument(ErrorMessages.INVALID_RECIPE.format(value=recipe))

        object.__setattr__(self, "_root", root)
        object.__setattr__(self, "_recipe", name)
        object.__setattr__(self, "_intervals", intervals)
        object.__setattr__(self, "_pitches", None)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def recipes(cls) -> dict[str, tuple[Interval, ...]]:
        """Recipe name -> intervals."""
        return {recipe.name: recipe.interval_objects() for recipe in _catalogue().scales}

    @classmethod
    def greek_modes(cls) -> list[str]:
        """Names of the greek modes, ionian first."""
        return [recipe.name for recipe in _catalogue().greek_modes()]

    @classmethod
    def all(cls, include_greek_modes: bool = False) -> list[Scale]:
        """Every catalogued scale on every normal pitch class, sorted."""
        modes = set(cls.greek_modes())
        names = [
            recipe.name
            for recipe in _catalogue().scales
            if include_greek_modes or recipe.name not in modes
        ]
        return sorted(cls(root, name) for root in PitchClass.all() for name in names)

    @property
    def root(self) -> PitchClass:
        return self._root

    @property
    def recipe(self) -> str | None:
        """Recipe name, or None for a custom interval list."""
        return self._recipe

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return self._intervals

    @property
    def pitches(self) -> list[PitchClass]:
        """Pitch classes of degrees 1..n."""
        if self._pitches is None:
            pitches = tuple(
                self._degree(degree, REFERENCE_OCTAVE).pitch_class
                for degree in range(1, len(self) + 1)
            )
            object.__setattr__(self, "_pitches", pitches)
        return list(self._pitches)  # type: ignore[arg-type]

    def notes(self, octave: int | None = None) -> list[Note]:
        """Degrees 1..n as notes, the root placed in octave."""
        if octave is None:
            octave = get_settings().default_octave
        root = Note(self._root, octave)
        return [root + interval for interval in self._intervals]

    def __getitem__(self, degree: int) -> Note:
        """
        The note at a 1-based degree, rooted in the default octave.

        Degrees wrap into neighbouring octaves: in C major, scale[8] is C5
        and scale[0] is B3.
        """
        if not is_int(degree):
            raise InvalidArgument(ErrorMessages.EXPECTED_INTEGER.format(value=degree))
        return self._degree(degree, get_settings().default_octave)

    def _degree(self, degree: int, octave: int) -> Note:
        octaves, offset = divmod(degree - 1, len(self._intervals))
        root = Note(self._root, octave + octaves)
        return root + self._intervals[offset]

    def chord(self, degree: int, extension: int = 5) -> Chord:
        """
        Build a chord by stacking thirds on a degree.

        extension 5 gives the triad, 7/9/11/13 stack further thirds,
        4 and 6 add the fourth or sixth to the triad.
        """
        if extension not in _EXTENSIONS:
            raise InvalidArgument(
                ErrorMessages.INVALID_EXTENSION.format(allowed=sorted(_EXTENSIONS), value=extension)
            )
        if not is_int(degree):
            raise InvalidArgument(ErrorMessages.EXPECTED_INTEGER.format(value=degree))
        root = self._degree(degree, REFERENCE_OCTAVE)
        offsets = (0, 2, 4) + _EXTENSIONS[extension]
        return Chord(
            root.pitch_class,
            [self._degree(degree + offset, REFERENCE_OCTAVE) - root for offset in offsets],
        )

    def contains(self, item: Any) -> bool:
        """
        True if every pitch of item is in the scale.

        item may be a Note, PitchClass, Chord, Scale or any collection of
        these (checked recursively).
        """
        if isinstance(item, Note):
            return item.pitch_class in self.pitches
        if isinstance(item, PitchClass):
            return item in self.pitches
        if isinstance(item, (Chord, Scale)):
            return all(pitch in self.pitches for pitch in item.pitches)
        if isinstance(item, Iterable) and not isinstance(item, (str, bytes)):
            return all(self.contains(element) for element in item)
        raise InvalidOperation(ErrorMessages.UNSUPPORTED_ITEM.format(value=item))

    def __contains__(self, item: object) -> bool:
        return self.contains(item)

    def is_diatonic(self) -> bool:
        """True for seven-note scales whose steps are a rotation of the major scale's."""
        if len(self._intervals) != 7:
            return False
        semitones = sorted(interval.semitones for interval in self._intervals)
        steps = [upper - lower for lower, upper in zip(semitones, semitones[1:])]
        steps.append(semitones[0] + 12 - semitones[-1])
        return any(
            tuple(steps[i:] + steps[:i]) == DIATONIC_STEPS for i in range(len(steps))
        )

    def distance(self, other: Scale) -> int:
        """Number of this scale's pitches missing from other."""
        theirs = set(other.pitches)
        return len(self._intervals) - sum(1 for pitch in self.pitches if pitch in theirs)

    def find_similar(
        self,
        max_distance: int,
        include_greek_modes: bool | None = None,
    ) -> list[Scale]:
        """
        Other catalogued scales within max_distance of this one.

        Greek modes are searched by default only when this scale is one.
        """
        if include_greek_modes is None:
            include_greek_modes = self._recipe in self.greek_modes()
        return [
            scale
            for scale in Scale.all(include_greek_modes)
            if scale != self and self.distance(scale) <= max_distance
        ]

    def wpcp_score(
        self,
        weighted_items: Mapping[ScaleItem, float] | Iterable[tuple[ScaleItem, float]],
    ) -> float:
        """
        Score how well weighted pitches fit this scale.

        Each item's pitches are collected with its weight; a pitch given
        more than once uses its average weight. The root earns 1.05 per
        unit of weight, other scale tones 1.0 and outside tones -0.5.
        """
        pairs = weighted_items.items() if isinstance(weighted_items, Mapping) else weighted_items
        collected: dict[PitchClass, list[float]] = defaultdict(list)
        for item, weight in pairs:
            for pitch in _expand(item):
                collected[pitch].append(weight)

        # Prefer the relative major when the pitch content is identical
        score = WPCP_NATURAL_MINOR_BIAS if self._recipe == "natural_minor" else 0.0
        pitches = set(self.pitches)
        for pitch, weights in collected.items():
            weight = sum(weights) / len(weights)
            if pitch == self._root:
                score += WPCP_ROOT_WEIGHT * weight
            elif pitch in pitches:
                score += WPCP_IN_SCALE_WEIGHT * weight
            else:
                score += WPCP_OUT_OF_SCALE_WEIGHT * weight
        return score

    @classmethod
    def identify(cls, items: Iterable[Any], include_greek_modes: bool = False) -> list[Scale]:
        """Every catalogued scale containing all of items, sorted."""
        items = list(items)
        return [scale for scale in cls.all(include_greek_modes) if scale.contains(items)]

    @classmethod
    def identify_wpcp_all(
        cls,
        weighted_items: Mapping[ScaleItem, float] | Iterable[tuple[ScaleItem, float]],
        include_greek_modes: bool = False,
    ) -> list[tuple[float, Scale]]:
        """Every catalogued scale with its weighted score, best first."""
        if not isinstance(weighted_items, Mapping):
            weighted_items = list(weighted_items)
        scored = [
            (scale.wpcp_score(weighted_items), scale) for scale in cls.all(include_greek_modes)
        ]
        return sorted(scored, key=lambda pair: -pair[0])

    @classmethod
    def identify_wpcp(
        cls,
        weighted_items: Mapping[ScaleItem, float] | Iterable[tuple[ScaleItem, float]],
        include_greek_modes: bool = False,
    ) -> tuple[Scale, float] | None:
        """The best-scoring scale and its score, or None if nothing was given."""
        if not isinstance(weighted_items, Mapping):
            weighted_items = list(weighted_items)
        if not weighted_items:
            return None
        score, scale = cls.identify_wpcp_all(weighted_items, include_greek_modes)[0]
        return scale, score

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scale):
            return NotImplemented
        return self._root == other._root and self._intervals == other._intervals

    def __lt__(self, other: Scale) -> bool:
        if not isinstance(other, Scale):
            return NotImplemented
        return (self._root, self._intervals) < (other._root, other._intervals)

    def __hash__(self) -> int:
        return hash((self._root, self._intervals))

    def __str__(self) -> str:
        if self._recipe is not None:
            return f"{self._root} {self._recipe}"
        return f"{self._root} <{'-'.join(str(i) for i in self._intervals)}>"

    def __repr__(self) -> str:
        if self._recipe is not None:
            return f"Scale({str(self._root)!r}, {self._recipe!r})"
        return f"Scale({str(self._root)!r}, {[str(i) for i in self._intervals]!r})"
