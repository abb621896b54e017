"""Notation model: pitches, spellings and spelling categories."""

from spellnet.notation.categories import (
    CATEGORIES,
    DIFFERENT_TENDENCY_PITCH_CLASSES,
    TERMINAL_FREE_PITCH_CLASS,
    ModifierDirection,
    SpellingCategory,
    TendencyPair,
    category_for,
    requires_different_tendencies,
    spelling_for,
    tendencies_for,
)
from spellnet.notation.pitch import LetterName, Modifier, Pitch, SpelledPitch, Spelling

__all__ = [
    "CATEGORIES",
    "DIFFERENT_TENDENCY_PITCH_CLASSES",
    "TERMINAL_FREE_PITCH_CLASS",
    "LetterName",
    "Modifier",
    "ModifierDirection",
    "Pitch",
    "SpelledPitch",
    "Spelling",
    "SpellingCategory",
    "TendencyPair",
    "category_for",
    "requires_different_tendencies",
    "spelling_for",
    "tendencies_for",
]
