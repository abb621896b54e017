"""Pitches, letter names, modifiers and spellings."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from spellnet.exceptions import UnspellableError


class LetterName(Enum):
    """Diatonic letter names with the pitch class of their natural form."""

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11

    @property
    def pitch_class(self) -> int:
        return self.value

    @classmethod
    def for_pitch_class(cls, pitch_class: int) -> "LetterName":
        """Return the letter whose natural form has ``pitch_class``.

        Raises:
            ValueError: If ``pitch_class`` is not a natural pitch class.
        """
        return cls(pitch_class % 12)


class Modifier(IntEnum):
    """Accidental, valued by its offset in semitones."""

    DOUBLE_FLAT = -2
    FLAT = -1
    NATURAL = 0
    SHARP = 1
    DOUBLE_SHARP = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Modifier.DOUBLE_FLAT: "𝄫",
    Modifier.FLAT: "♭",
    Modifier.NATURAL: "",
    Modifier.SHARP: "♯",
    Modifier.DOUBLE_SHARP: "𝄪",
}

_MODIFIER_TOKENS = {
    "": Modifier.NATURAL,
    "♮": Modifier.NATURAL,
    "n": Modifier.NATURAL,
    "b": Modifier.FLAT,
    "♭": Modifier.FLAT,
    "bb": Modifier.DOUBLE_FLAT,
    "♭♭": Modifier.DOUBLE_FLAT,
    "𝄫": Modifier.DOUBLE_FLAT,
    "#": Modifier.SHARP,
    "♯": Modifier.SHARP,
    "##": Modifier.DOUBLE_SHARP,
    "♯♯": Modifier.DOUBLE_SHARP,
    "x": Modifier.DOUBLE_SHARP,
    "𝄪": Modifier.DOUBLE_SHARP,
}

_SPELLING_RE = re.compile(r"^\s*([A-Ga-g])(.*?)\s*$")


@dataclass(frozen=True)
class Spelling:
    """A letter name with a modifier, e.g. ``E♭``."""

    letter: LetterName
    modifier: Modifier = Modifier.NATURAL

    @property
    def pitch_class(self) -> int:
        return (self.letter.pitch_class + int(self.modifier)) % 12

    def __str__(self) -> str:
        return f"{self.letter.name}{self.modifier.symbol}"

    @classmethod
    def parse(cls, text: Union[str, "Spelling"]) -> "Spelling":
        """Parse names such as ``C``, ``Eb``, ``E♭``, ``C#``, ``Cx`` or ``Bbb``.

        Raises:
            ValueError: If ``text`` is not a spelling name.
        """
        if isinstance(text, Spelling):
            return text
        match = _SPELLING_RE.match(str(text))
        if match is None or match.group(2) not in _MODIFIER_TOKENS:
            raise ValueError(f"Invalid spelling {text!r}")
        return cls(LetterName[match.group(1).upper()], _MODIFIER_TOKENS[match.group(2)])

    @classmethod
    def from_pitch_class(cls, pitch_class: int, modifier: Modifier) -> "Spelling":
        """Return the spelling of ``pitch_class`` that uses ``modifier``.

        Raises:
            UnspellableError: If no letter name yields ``pitch_class`` with it.
        """
        try:
            letter = LetterName.for_pitch_class(pitch_class - int(modifier))
        except ValueError:
            raise UnspellableError(
                f"Pitch class {pitch_class} cannot be spelled with {modifier.name}"
            ) from None
        return cls(letter, modifier)


@dataclass(frozen=True)
class Pitch:
    """An unspelled pitch given as a note number (60 is middle C)."""

    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError(f"Pitch must be a finite note number, got {self.value!r}")

    @property
    def pitch_class(self) -> int:
        return int(round(self.value)) % 12

    def spelled(self, spelling: Spelling) -> "SpelledPitch":
        """Attach ``spelling`` to this pitch.

        Raises:
            UnspellableError: If the spelling denotes a different pitch class.
        """
        if spelling.pitch_class != self.pitch_class:
            raise UnspellableError(
                f"{spelling} (pitch class {spelling.pitch_class}) does not spell "
                f"pitch class {self.pitch_class}"
            )
        return SpelledPitch(self, spelling)


@dataclass(frozen=True)
class SpelledPitch:
    pitch: Pitch
    spelling: Spelling

    def __str__(self) -> str:
        return str(self.spelling)
