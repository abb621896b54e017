"""Exception types raised by spellnet.

Structural problems (a graph operation naming a node that was never inserted)
indicate a construction bug and are raised as ``StructuralViolationError``.
Problems with caller-supplied inputs get their own types so callers can catch
them selectively. All types derive from the builtin they most resemble so that
``except ValueError`` keeps working for callers that do not care.
"""

from __future__ import annotations

from typing import Any, Hashable, List, Sequence, Tuple


class SpellingNetworkError(Exception):
    """Base class for all spellnet errors."""


class StructuralViolationError(SpellingNetworkError, ValueError):
    """A graph operation assumed a node or edge that does not exist."""


class MissingWeightError(SpellingNetworkError, KeyError):
    """A weight scheme produced no capacity for an edge the topology requires."""

    def __init__(self, edge: Tuple[Hashable, Hashable], detail: str = "") -> None:
        self.edge = edge
        message = f"Incomplete weight scheme: no capacity for required edge {edge!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class InconsistentPresetError(SpellingNetworkError, ValueError):
    """Preset weights contradict a discovered dependency ordering."""

    def __init__(self, violations: Sequence[Tuple[Any, Any, float, float]]) -> None:
        self.violations: List[Tuple[Any, Any, float, float]] = list(violations)
        preview = "; ".join(
            f"{a!r} ({wa:g}) must exceed {b!r} ({wb:g})"
            for a, b, wa, wb in self.violations[:3]
        )
        more = len(self.violations) - 3
        if more > 0:
            preview = f"{preview}; ... and {more} more"
        super().__init__(
            f"{len(self.violations)} dependency ordering(s) violated by presets: {preview}"
        )


class UnspellableError(SpellingNetworkError, ValueError):
    """The notation model cannot express a requested spelling."""
