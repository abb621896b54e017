"""Spelling a concrete set of pitches with a minimum cut.

Each pitch index ``i`` gets two nodes, ``Internal(i, UP)`` and
``Internal(i, DOWN)``. The ``Up`` node has an infinite edge to the ``Down``
node of the same pitch, so no finite cut places ``Up`` on the source side and
``Down`` on the sink side. Every other capacity comes from a weight scheme over
``Internal(pitch_class, tendency)`` nodes, pulled back through each pitch's
pitch class.

After the cut, source-side nodes read as ``DOWN`` and sink-side nodes as
``UP``; the pair of readings for a pitch selects its spelling.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Callable, Dict, Hashable, Mapping, Optional, Union

from spellnet.algorithms.base import CutBias
from spellnet.config import SolverConfig
from spellnet.exceptions import MissingWeightError
from spellnet.graph.nodes import Internal, Tendency, lift
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.logging import get_logger
from spellnet.network.flow import FlowNetwork
from spellnet.notation.categories import TendencyPair, spelling_for
from spellnet.notation.pitch import Pitch, SpelledPitch
from spellnet.spelling.adjacency import Connect

logger = get_logger(__name__)

MaskScheme = Union[AdjacencyScheme, WeightScheme]


class Preference(IntEnum):
    """Which way to lean when the network leaves a choice."""

    SHARPS = 1
    FLATS = 2

    @property
    def bias(self) -> CutBias:
        """Cut variant realising this preference."""
        if self is Preference.SHARPS:
            return CutBias.SINK_WEIGHTED
        return CutBias.SOURCE_WEIGHTED

    @property
    def tendency(self) -> Tendency:
        return Tendency.UP if self is Preference.SHARPS else Tendency.DOWN

    @classmethod
    def from_string(cls, value: str) -> "Preference":
        """Parse ``sharps``/``flats`` (also ``up``/``down``), case-insensitive.

        Raises:
            ValueError: If the string is not recognised.
        """
        key = value.strip().upper()
        key = {"UP": "SHARPS", "DOWN": "FLATS", "SHARP": "SHARPS", "FLAT": "FLATS"}.get(
            key, key
        )
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(e.name.lower() for e in cls)
            raise ValueError(
                f"Invalid preference '{value}'. Valid values are: {valid}"
            ) from None

    @classmethod
    def coerce(cls, value: Union["Preference", Tendency, str]) -> "Preference":
        if isinstance(value, Preference):
            return value
        if isinstance(value, Tendency):
            return cls.SHARPS if value is Tendency.UP else cls.FLATS
        return cls.from_string(value)


class PitchSpellingNetwork:
    """Flow network over one collection of indexed pitches.

    Attributes:
        pitches: The pitches to spell, by index.
        flow_network: The underlying `FlowNetwork`.
    """

    def __init__(
        self,
        pitches: Mapping[int, Pitch],
        weight_scheme: WeightScheme,
        config: Optional[SolverConfig] = None,
    ) -> None:
        """Build the network.

        Raises:
            MissingWeightError: If ``weight_scheme`` has no capacity for the
                source or sink edge of some pitch.
        """
        self.pitches: Dict[int, Pitch] = dict(pitches)
        self._pending_mask: Optional[MaskScheme] = None

        nodes = [
            Internal(index, tendency)
            for index in self.pitches
            for tendency in (Tendency.DOWN, Tendency.UP)
        ]
        terminal_edges = (Connect.source_to_down + Connect.up_to_sink).pullback(
            self.pitched
        )
        different_index_scheme = weight_scheme.pullback(self.pitched) * (
            Connect.different_indices + terminal_edges
        )
        same_index_scheme = math.inf * (Connect.same_indices * Connect.up_to_down)

        try:
            self.flow_network = FlowNetwork(
                nodes,
                same_index_scheme + different_index_scheme,
                required=terminal_edges,
                config=config,
            )
        except MissingWeightError as exc:
            pitched = tuple(lift(self.pitched)(node) for node in exc.edge)
            raise MissingWeightError(exc.edge, f"pitched edge {pitched!r}") from exc

    def pitched(self, node: Internal) -> Internal:
        """Project an index-level node to its pitch class."""
        return Internal(self.pitches[node.index].pitch_class, node.tendency)

    def mask(
        self,
        scheme: MaskScheme,
        lens: Optional[Callable[[int], Hashable]] = None,
    ) -> None:
        """Queue a mask for the next `spell`.

        The infinite edge between the two nodes of one pitch is never masked.

        Args:
            scheme: Adjacency or weight scheme over ``lens(index)`` values.
                Weight factors must lie in ``[0, 1]``.
            lens: Map from pitch index to the values ``scheme`` reads.
                Defaults to the index itself.
        """
        view = lens or (lambda index: index)
        pulled = scheme.pullback(lambda node: view(node.index))
        if isinstance(pulled, WeightScheme):
            factors = pulled
            pulled = WeightScheme(
                lambda a, b: 1.0 if Connect.same_indices(a, b) else factors(a, b),
                name=f"({factors.name} + same_indices)",
            )
        else:
            pulled = pulled + Connect.same_indices
        if self._pending_mask is None:
            self._pending_mask = pulled
        else:
            self._pending_mask = self._pending_mask * pulled

    def spell(
        self, preference: Union[Preference, Tendency, str] = Preference.SHARPS
    ) -> Dict[int, SpelledPitch]:
        """Spell every pitch.

        Args:
            preference: ``SHARPS`` takes the sink-weighted cut, ``FLATS`` the
                source-weighted one.

        Returns:
            Spelled pitch for every index, in input order.
        """
        preference = Preference.coerce(preference)
        if self._pending_mask is not None:
            self.flow_network.mask(self._pending_mask)
            self._pending_mask = None

        cut = self.flow_network.minimum_cut(preference.bias)
        side: Dict[Internal, Tendency] = {}
        for node in cut.source_side:
            side[node] = Tendency.DOWN
        for node in cut.sink_side:
            side[node] = Tendency.UP

        spelled: Dict[int, SpelledPitch] = {}
        for index, pitch in self.pitches.items():
            pair = TendencyPair(
                up=side[Internal(index, Tendency.UP)],
                down=side[Internal(index, Tendency.DOWN)],
            )
            spelling = spelling_for(pitch.pitch_class, pair, preference.tendency)
            spelled[index] = pitch.spelled(spelling)

        logger.debug(
            "Spelled %d pitches preferring %s: %s",
            len(spelled),
            preference.name.lower(),
            " ".join(str(s) for s in spelled.values()),
        )
        return spelled
