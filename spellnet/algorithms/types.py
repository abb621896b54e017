"""Immutable result containers for the flow algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Hashable, Tuple

from spellnet.algorithms.base import CutBias

# Edge identifier: (source_node, destination_node). Flow graphs are simple
# digraphs, so the endpoint pair is unique.
Edge = Tuple[Hashable, Hashable]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value achieved.
        edge_flow: Flow amount per edge.
        residual_cap: Remaining forward capacity per edge.
        reachable: Nodes reachable from the source in the residual graph.
        reaching: Nodes that can reach the sink in the residual graph.
        min_cut: Saturated edges leaving ``reachable``.
    """

    total_flow: float
    edge_flow: Dict[Edge, float]
    residual_cap: Dict[Edge, float]
    reachable: FrozenSet[Hashable]
    reaching: FrozenSet[Hashable]
    min_cut: Tuple[Edge, ...]


@dataclass(frozen=True)
class MinimumCut:
    """A source/sink partition of the non-terminal nodes.

    Attributes:
        source_side: Nodes on the source side, terminals excluded.
        sink_side: Nodes on the sink side, terminals excluded.
        value: Total capacity of the edges crossing from source side to sink side.
        edges: The crossing edges.
        bias: Tie-break used to place ambiguous nodes.
    """

    source_side: FrozenSet[Hashable]
    sink_side: FrozenSet[Hashable]
    value: float
    edges: Tuple[Edge, ...]
    bias: CutBias

    def side_of(self, node: Hashable) -> str:
        """Return ``"source"`` or ``"sink"`` for a non-terminal node.

        Raises:
            KeyError: If the node is on neither side.
        """
        if node in self.source_side:
            return "source"
        if node in self.sink_side:
            return "sink"
        raise KeyError(node)
