"""Maximum flow and minimum cut via shortest augmenting paths.

Implements Edmonds-Karp on a `StrictDiGraph` whose edges carry a capacity
attribute (``float("inf")`` allowed). Flow is tracked per edge; pushing flow
against an existing edge first cancels flow on it, so the residual graph is
the textbook one: forward arcs carry ``capacity - flow`` and reverse arcs carry
``flow``.

After saturation two canonical minimum cuts exist and may differ:

- ``CutBias.SINK_WEIGHTED``: the source side is exactly the set of nodes
  reachable from the source in the residual graph.
- ``CutBias.SOURCE_WEIGHTED``: the sink side is exactly the set of nodes that
  can reach the sink in the residual graph.

Both cut the same total capacity, equal to the max-flow value.
"""

from __future__ import annotations

import math
from typing import Dict, Hashable, Iterator, Literal, Tuple, Union, overload

from spellnet.algorithms.base import MIN_CAP, CutBias
from spellnet.algorithms.bfs import bfs_path, reachable_from
from spellnet.algorithms.types import Edge, FlowSummary, MinimumCut
from spellnet.exceptions import StructuralViolationError
from spellnet.graph.strict_digraph import StrictDiGraph
from spellnet.logging import get_logger

logger = get_logger(__name__)


class _Residual:
    """Residual view of a capacitated graph under a mutable flow assignment."""

    def __init__(
        self, graph: StrictDiGraph, capacity_attr: str, tolerance: float
    ) -> None:
        self.graph = graph
        self.tolerance = tolerance
        self.capacity: Dict[Edge, float] = {
            (u, v): float(d.get(capacity_attr, 0.0))
            for u, v, d in graph.edges(data=True)
        }
        self.flow: Dict[Edge, float] = dict.fromkeys(self.capacity, 0.0)

    def residual(self, u: Hashable, v: Hashable) -> float:
        forward = self.capacity.get((u, v))
        amount = 0.0 if forward is None else forward - self.flow[(u, v)]
        return amount + self.flow.get((v, u), 0.0)

    def successors(self, node: Hashable) -> Iterator[Hashable]:
        seen = set()
        for nbr in self.graph.succ[node]:
            seen.add(nbr)
            if self.residual(node, nbr) > self.tolerance:
                yield nbr
        for nbr in self.graph.pred[node]:
            if nbr not in seen and self.residual(node, nbr) > self.tolerance:
                yield nbr

    def predecessors(self, node: Hashable) -> Iterator[Hashable]:
        seen = set()
        for nbr in self.graph.pred[node]:
            seen.add(nbr)
            if self.residual(nbr, node) > self.tolerance:
                yield nbr
        for nbr in self.graph.succ[node]:
            if nbr not in seen and self.residual(nbr, node) > self.tolerance:
                yield nbr

    def push(self, u: Hashable, v: Hashable, amount: float) -> None:
        # Cancel opposing flow before adding forward flow.
        backward = self.flow.get((v, u), 0.0)
        if backward > 0.0:
            cancelled = min(backward, amount)
            self.flow[(v, u)] = backward - cancelled
            amount -= cancelled
        if amount > 0.0:
            self.flow[(u, v)] += amount


@overload
def calc_max_flow(
    graph: StrictDiGraph,
    src_node: Hashable,
    dst_node: Hashable,
    *,
    return_summary: Literal[False] = False,
    capacity_attr: str = "capacity",
    tolerance: float = MIN_CAP,
) -> float: ...


@overload
def calc_max_flow(
    graph: StrictDiGraph,
    src_node: Hashable,
    dst_node: Hashable,
    *,
    return_summary: Literal[True],
    capacity_attr: str = "capacity",
    tolerance: float = MIN_CAP,
) -> Tuple[float, FlowSummary]: ...


def calc_max_flow(
    graph: StrictDiGraph,
    src_node: Hashable,
    dst_node: Hashable,
    *,
    return_summary: bool = False,
    capacity_attr: str = "capacity",
    tolerance: float = MIN_CAP,
) -> Union[float, Tuple[float, FlowSummary]]:
    """Compute the maximum flow from ``src_node`` to ``dst_node``.

    The input graph is not modified.

    Args:
        graph: Graph whose edges carry ``capacity_attr``. Missing attributes
            count as zero capacity.
        src_node: Flow source.
        dst_node: Flow sink.
        return_summary: If True, also return a `FlowSummary`.
        capacity_attr: Name of the capacity edge attribute.
        tolerance: Residual capacities at or below this are treated as zero.

    Returns:
        The flow value, or ``(flow, summary)`` when ``return_summary`` is set.

    Raises:
        StructuralViolationError: If a terminal is missing from the graph, or
            an augmenting path consists solely of infinite-capacity edges.

    Examples:
        >>> g = StrictDiGraph()
        >>> g.add_nodes_from("ABC")
        >>> g.add_edge("A", "B", capacity=10.0)
        >>> g.add_edge("B", "C", capacity=5.0)
        >>> calc_max_flow(g, "A", "C")
        5.0
    """
    for terminal in (src_node, dst_node):
        if terminal not in graph:
            raise StructuralViolationError(f"Node {terminal!r} does not exist.")

    residual = _Residual(graph, capacity_attr, tolerance)
    total_flow = 0.0
    augmentations = 0

    if src_node != dst_node:
        while True:
            path = bfs_path(residual.successors, src_node, dst_node)
            if path is None:
                break
            hops = list(zip(path, path[1:]))
            amount = min(residual.residual(u, v) for u, v in hops)
            if math.isinf(amount):
                raise StructuralViolationError(
                    f"Unbounded flow: every edge on path {path!r} has infinite capacity."
                )
            for u, v in hops:
                residual.push(u, v, amount)
            total_flow += amount
            augmentations += 1

    logger.debug(
        "Max flow %s -> %s: %g after %d augmenting paths",
        src_node,
        dst_node,
        total_flow,
        augmentations,
    )

    if not return_summary:
        return total_flow
    return total_flow, _build_flow_summary(total_flow, residual, src_node, dst_node)


def _build_flow_summary(
    total_flow: float,
    residual: _Residual,
    src_node: Hashable,
    dst_node: Hashable,
) -> FlowSummary:
    """Construct a ``FlowSummary`` from the final residual state."""
    reachable = reachable_from(residual.successors, src_node)
    reaching = reachable_from(residual.predecessors, dst_node)
    residual_cap = {
        edge: cap - residual.flow[edge] for edge, cap in residual.capacity.items()
    }
    min_cut = tuple(
        (u, v)
        for (u, v), remaining in residual_cap.items()
        if u in reachable and v not in reachable and remaining <= residual.tolerance
    )
    return FlowSummary(
        total_flow=total_flow,
        edge_flow=dict(residual.flow),
        residual_cap=residual_cap,
        reachable=reachable,
        reaching=reaching,
        min_cut=min_cut,
    )


def calc_min_cut(
    graph: StrictDiGraph,
    src_node: Hashable,
    dst_node: Hashable,
    bias: Union[CutBias, str] = CutBias.SINK_WEIGHTED,
    *,
    capacity_attr: str = "capacity",
    tolerance: float = MIN_CAP,
) -> MinimumCut:
    """Compute a minimum ``src_node``/``dst_node`` cut.

    Args:
        graph: Capacitated graph.
        src_node: Flow source.
        dst_node: Flow sink.
        bias: Which canonical cut to return (see module docstring).
        capacity_attr: Name of the capacity edge attribute.
        tolerance: Residual capacities at or below this are treated as zero.

    Returns:
        `MinimumCut` with both terminals excluded from the two sides.
    """
    if isinstance(bias, str):
        bias = CutBias.from_string(bias)

    _, summary = calc_max_flow(
        graph,
        src_node,
        dst_node,
        return_summary=True,
        capacity_attr=capacity_attr,
        tolerance=tolerance,
    )
    if bias is CutBias.SINK_WEIGHTED:
        source_side = summary.reachable
    else:
        source_side = frozenset(n for n in graph.nodes if n not in summary.reaching)

    crossing = tuple(
        (u, v) for u, v in graph.edges if u in source_side and v not in source_side
    )
    value = sum(float(graph[u][v].get(capacity_attr, 0.0)) for u, v in crossing)
    terminals = {src_node, dst_node}
    cut = MinimumCut(
        source_side=frozenset(n for n in source_side if n not in terminals),
        sink_side=frozenset(
            n for n in graph.nodes if n not in source_side and n not in terminals
        ),
        value=value,
        edges=crossing,
        bias=bias,
    )
    logger.debug(
        "%s cut: %d source-side, %d sink-side nodes, value %g",
        bias.name,
        len(cut.source_side),
        len(cut.sink_side),
        value,
    )
    return cut
