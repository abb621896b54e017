"""Spelling categories and the tendency model.

Each pitch class belongs to one spelling category, which fixes the modifier
used for each `ModifierDirection`. A pitch's two tendency nodes land on the
two sides of a minimum cut; the resulting `TendencyPair` selects the
direction:

    (Down, Down) -> DOWN    (Up, Down) -> NEUTRAL    (Up, Up) -> UP

where the pair lists the side of the ``Up`` node first. The pair
``(Down, Up)`` never occurs in a valid cut.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, NamedTuple

from spellnet.exceptions import UnspellableError
from spellnet.graph.nodes import Tendency
from spellnet.logging import get_logger
from spellnet.notation.pitch import Modifier, Spelling

logger = get_logger(__name__)


class ModifierDirection(Enum):
    DOWN = "down"
    NEUTRAL = "neutral"
    UP = "up"


class TendencyPair(NamedTuple):
    """Cut sides of a pitch's ``Up`` node and ``Down`` node."""

    up: Tendency
    down: Tendency


TENDENCIES_TO_DIRECTION: Mapping[TendencyPair, ModifierDirection] = MappingProxyType(
    {
        TendencyPair(Tendency.DOWN, Tendency.DOWN): ModifierDirection.DOWN,
        TendencyPair(Tendency.UP, Tendency.DOWN): ModifierDirection.NEUTRAL,
        TendencyPair(Tendency.UP, Tendency.UP): ModifierDirection.UP,
    }
)

DIRECTION_TO_TENDENCIES: Mapping[ModifierDirection, TendencyPair] = MappingProxyType(
    {direction: pair for pair, direction in TENDENCIES_TO_DIRECTION.items()}
)


@dataclass(frozen=True)
class SpellingCategory:
    """Pitch classes sharing one direction-to-modifier table."""

    name: str
    pitch_classes: FrozenSet[int]
    modifiers: Mapping[ModifierDirection, Modifier]

    def modifier_for(self, direction: ModifierDirection) -> Modifier:
        try:
            return self.modifiers[direction]
        except KeyError:
            raise UnspellableError(
                f"Category {self.name} has no {direction.name} modifier"
            ) from None

    def direction_of(self, modifier: Modifier) -> ModifierDirection:
        for direction, candidate in self.modifiers.items():
            if candidate == modifier:
                return direction
        raise UnspellableError(
            f"Modifier {modifier.name} is not used by category {self.name}"
        )

    def tendencies_for(self, spelling: Spelling) -> TendencyPair:
        """Tendency pair that produces ``spelling`` in this category."""
        return DIRECTION_TO_TENDENCIES[self.direction_of(spelling.modifier)]


def _category(name, pitch_classes, down, neutral, up) -> SpellingCategory:
    table = {ModifierDirection.DOWN: down, ModifierDirection.UP: up}
    if neutral is not None:
        table[ModifierDirection.NEUTRAL] = neutral
    return SpellingCategory(name, frozenset(pitch_classes), MappingProxyType(table))


_M = Modifier
CATEGORIES = (
    _category("zero", (0, 5), _M.DOUBLE_FLAT, _M.NATURAL, _M.SHARP),
    _category("one", (1, 6), _M.FLAT, _M.SHARP, _M.DOUBLE_SHARP),
    _category("two", (2, 7, 9), _M.DOUBLE_FLAT, _M.NATURAL, _M.DOUBLE_SHARP),
    _category("three", (3, 10), _M.DOUBLE_FLAT, _M.FLAT, _M.SHARP),
    _category("four", (4, 11), _M.FLAT, _M.NATURAL, _M.DOUBLE_SHARP),
    _category("five", (8,), _M.FLAT, None, _M.SHARP),
)

_CATEGORY_BY_PITCH_CLASS: Mapping[int, SpellingCategory] = MappingProxyType(
    {pc: category for category in CATEGORIES for pc in category.pitch_classes}
)

#: Pitch class with no edges to the source or sink.
TERMINAL_FREE_PITCH_CLASS = 8

#: Pitch-class pairs whose neutral spellings lean in opposite directions.
DIFFERENT_TENDENCY_PITCH_CLASSES: FrozenSet[FrozenSet[int]] = frozenset(
    frozenset(pair)
    for pair in (
        (0, 1), (0, 4), (0, 8), (1, 3), (1, 5), (1, 10),
        (3, 4), (3, 6), (3, 8), (3, 11), (4, 5), (5, 6),
        (5, 8), (5, 11), (6, 10), (7, 8), (8, 10), (10, 11),
    )
)


def category_for(pitch_class: int) -> SpellingCategory:
    return _CATEGORY_BY_PITCH_CLASS[pitch_class % 12]


def requires_different_tendencies(a: int, b: int) -> bool:
    """True if pitch classes ``a`` and ``b`` appear in the heterogeneity table."""
    return frozenset((a % 12, b % 12)) in DIFFERENT_TENDENCY_PITCH_CLASSES


def tendencies_for(spelling: Spelling) -> TendencyPair:
    """Tendency pair under which ``spelling`` is produced for its pitch class.

    Raises:
        UnspellableError: If the modifier is foreign to the pitch class category.
    """
    return category_for(spelling.pitch_class).tendencies_for(spelling)


def spelling_for(
    pitch_class: int,
    tendencies: TendencyPair,
    fallback: Tendency = Tendency.UP,
) -> Spelling:
    """Spell ``pitch_class`` from the cut sides of its two tendency nodes.

    A category without a neutral modifier resolves ``(Up, Down)`` toward
    ``fallback``.

    Raises:
        UnspellableError: For the pair ``(Down, Up)``.
    """
    category = category_for(pitch_class)
    try:
        direction = TENDENCIES_TO_DIRECTION[tendencies]
    except KeyError:
        raise UnspellableError(
            f"Tendency pair {tuple(tendencies)!r} does not denote a spelling"
        ) from None
    if direction not in category.modifiers:
        logger.debug(
            "Pitch class %d has no %s spelling; leaning %s",
            pitch_class,
            direction.name,
            fallback.name,
        )
        direction = ModifierDirection.UP if fallback is Tendency.UP else ModifierDirection.DOWN
    return Spelling.from_pitch_class(pitch_class, category.modifier_for(direction))
