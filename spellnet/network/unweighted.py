"""Unweighted source/sink network.

`UnweightedNetwork` is a `StrictDiGraph` that always contains ``SOURCE`` and
``SINK``. Its constructor wires every internal node to both terminals and to
every other internal node, then optionally masks the result down to the edges
an adjacency scheme accepts.
"""

from __future__ import annotations

from typing import Hashable, Iterable, List, Optional

from spellnet.algorithms.bfs import bfs_path
from spellnet.graph.nodes import SINK, SOURCE, Node, is_terminal
from spellnet.graph.strict_digraph import EdgeFilter, StrictDiGraph
from spellnet.logging import get_logger

logger = get_logger(__name__)


class UnweightedNetwork(StrictDiGraph):
    """Directed graph with designated ``SOURCE`` and ``SINK`` nodes."""

    def __init__(
        self,
        internal_nodes: Iterable[Hashable] = (),
        scheme: Optional[EdgeFilter] = None,
    ) -> None:
        super().__init__()
        super().add_node(SOURCE)
        super().add_node(SINK)

        nodes = list(internal_nodes)
        for node in nodes:
            self.insert(node)
        for node in nodes:
            self.source_edge(node)
            self.sink_edge(node)
            for other in nodes:
                if other != node:
                    self.internal_edge(node, other)

        removed = self.mask(scheme) if scheme is not None else 0
        logger.debug(
            "Unweighted network: %d internal nodes, %d edges (%d masked out)",
            len(nodes),
            self.number_of_edges(),
            removed,
        )

    def insert(self, node: Hashable) -> None:
        """Insert an internal node."""
        self.add_node(node)

    def source_edge(self, node: Hashable) -> None:
        self.add_edge(SOURCE, node)

    def sink_edge(self, node: Hashable) -> None:
        self.add_edge(node, SINK)

    def internal_edge(self, source: Hashable, target: Hashable) -> None:
        self.add_edge(source, target)

    def contains(self, node: Node) -> bool:
        return node in self

    def contains_source_edge(self, node: Hashable) -> bool:
        return self.has_edge(SOURCE, node)

    def contains_sink_edge(self, node: Hashable) -> bool:
        return self.has_edge(node, SINK)

    @property
    def internal_nodes(self) -> List[Hashable]:
        """Non-terminal nodes in insertion order."""
        return [n for n in self.nodes if not is_terminal(n)]

    def augmenting_path(self) -> Optional[List[Node]]:
        """Breadth-first ``SOURCE -> SINK`` path over present edges, or None."""
        return bfs_path(self.succ.__getitem__, SOURCE, SINK)
