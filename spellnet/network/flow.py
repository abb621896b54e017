"""Capacitated source/sink network.

Capacities come from a `WeightScheme` evaluated once per candidate edge at
construction time: every internal node is offered an edge from ``SOURCE``, an
edge to ``SINK``, and an edge to every other internal node; the scheme's value
becomes the capacity, and ``None`` leaves the edge out.
"""

from __future__ import annotations

import math
from typing import Hashable, Iterable, Iterator, Optional, Union

from spellnet.algorithms.base import CutBias
from spellnet.algorithms.max_flow import calc_max_flow, calc_min_cut
from spellnet.algorithms.types import Edge, FlowSummary, MinimumCut
from spellnet.config import SOLVER_CONFIG, SolverConfig
from spellnet.exceptions import MissingWeightError
from spellnet.graph.nodes import SINK, SOURCE, is_terminal
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.graph.strict_digraph import EdgeFilter, StrictDiGraph
from spellnet.logging import get_logger

logger = get_logger(__name__)

CAPACITY = "capacity"


def _candidate_edges(nodes: Iterable[Hashable]) -> Iterator[Edge]:
    nodes = list(nodes)
    for node in nodes:
        yield SOURCE, node
        yield node, SINK
        for other in nodes:
            if other != node:
                yield node, other


def _check_capacity(edge: Edge, value: float) -> float:
    value = float(value)
    if math.isnan(value) or value < 0:
        raise ValueError(f"Capacity for edge {edge!r} must be non-negative, got {value}")
    return value


class FlowNetwork(StrictDiGraph):
    """Weighted directed graph with designated ``SOURCE`` and ``SINK``.

    Attributes:
        config: Solver settings (residual tolerance).
    """

    def __init__(
        self,
        nodes: Iterable[Hashable],
        scheme: WeightScheme,
        required: Optional[EdgeFilter] = None,
        config: Optional[SolverConfig] = None,
    ) -> None:
        """Build the network.

        Args:
            nodes: Internal nodes.
            scheme: Capacity for each candidate edge, or None to omit it.
            required: Edges that must receive a capacity.
            config: Solver settings; defaults to ``SOLVER_CONFIG``.

        Raises:
            MissingWeightError: If ``scheme`` yields None for a required edge.
            ValueError: If ``scheme`` yields a negative or NaN capacity.
        """
        super().__init__()
        self.config = config or SOLVER_CONFIG
        super().add_node(SOURCE)
        super().add_node(SINK)

        nodes = list(nodes)
        for node in nodes:
            self.add_node(node)
        for u, v in _candidate_edges(nodes):
            value = scheme(u, v)
            if value is None:
                if required is not None and required(u, v):
                    raise MissingWeightError((u, v))
                continue
            self.add_edge(u, v, **{CAPACITY: _check_capacity((u, v), value)})

        logger.debug(
            "Flow network: %d internal nodes, %d edges",
            len(nodes),
            self.number_of_edges(),
        )

    def capacity(self, u: Hashable, v: Hashable) -> Optional[float]:
        """Capacity of ``u -> v``, or None if the edge is absent."""
        if not self.has_edge(u, v):
            return None
        return self[u][v][CAPACITY]

    @property
    def internal_nodes(self):
        return [n for n in self.nodes if not is_terminal(n)]

    def mask(self, scheme: Union[AdjacencyScheme, WeightScheme, EdgeFilter]) -> int:
        """Scale capacities by ``scheme`` and drop rejected edges.

        An adjacency scheme (or plain predicate) keeps only accepted edges. A
        weight scheme multiplies each capacity by a factor in ``[0, 1]``; a
        factor of ``None`` or ``0`` removes the edge. Capacities never grow.

        Returns:
            Number of edges removed.

        Raises:
            ValueError: If a weight factor lies outside ``[0, 1]``.
        """
        if not isinstance(scheme, WeightScheme):
            removed = super().mask(scheme)
            logger.debug("Masked out %d edges", removed)
            return removed

        kept = []
        for u, v, data in self.edges(data=True):
            factor = scheme(u, v)
            if factor is None:
                continue
            factor = float(factor)
            if not 0.0 <= factor <= 1.0:
                raise ValueError(
                    f"Mask factor for edge {(u, v)!r} must lie in [0, 1], got {factor}"
                )
            if factor == 0.0:
                continue
            kept.append((u, v, {**data, CAPACITY: data[CAPACITY] * factor}))

        removed = self.number_of_edges() - len(kept)
        self.clear_edges()
        StrictDiGraph.add_edges_from(self, kept)
        logger.debug("Masked out %d edges, rescaled %d", removed, len(kept))
        return removed

    def max_flow(self) -> FlowSummary:
        """Saturate the network and return the flow summary."""
        _, summary = calc_max_flow(
            self,
            SOURCE,
            SINK,
            return_summary=True,
            capacity_attr=CAPACITY,
            tolerance=self.config.tolerance,
        )
        return summary

    def minimum_cut(self, bias: Union[CutBias, str] = CutBias.SINK_WEIGHTED) -> MinimumCut:
        return calc_min_cut(
            self,
            SOURCE,
            SINK,
            bias,
            capacity_attr=CAPACITY,
            tolerance=self.config.tolerance,
        )

    def source_weighted_minimum_cut(self) -> MinimumCut:
        """Minimum cut keeping ambiguous nodes on the source side."""
        return self.minimum_cut(CutBias.SOURCE_WEIGHTED)

    def sink_weighted_minimum_cut(self) -> MinimumCut:
        """Minimum cut pushing ambiguous nodes to the sink side."""
        return self.minimum_cut(CutBias.SINK_WEIGHTED)
