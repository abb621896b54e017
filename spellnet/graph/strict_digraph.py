"""Strict directed graph with masking and component contraction.

`StrictDiGraph` extends `networkx.DiGraph` so that graph construction bugs
surface immediately: nodes are never created implicitly, duplicates are
rejected, and removing something that is not there raises. Queries stay
lenient: asking about an absent node or edge simply answers ``False``.
"""

from __future__ import annotations

from pickle import dumps, loads
from typing import Any, Callable, Dict, FrozenSet, Hashable, Iterable, Mapping, Tuple

import networkx as nx

from spellnet.exceptions import StructuralViolationError

NodeID = Hashable
Clump = FrozenSet[Hashable]
EdgeFilter = Callable[[NodeID, NodeID], bool]


class StrictDiGraph(nx.DiGraph):
    """A directed graph with strict insertion rules.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes.
      - Removing non-existent nodes or edges raises.
      - ``mask`` replaces the edge set wholesale and never adds edges.
      - ``copy()`` performs a pickle-based deep copy by default.

    All violations raise ``StructuralViolationError`` (a ``ValueError``).
    Successor order follows insertion order, so traversals are deterministic
    for a fixed construction sequence.
    """

    def copy(self, as_view: bool = False, pickle: bool = True) -> "StrictDiGraph":
        """Create a copy of this graph.

        Args:
            as_view: Return a view instead of a copy; only used if ``pickle=False``.
            pickle: If True, perform a pickle-based deep copy.
        """
        if not pickle:
            return super().copy(as_view=as_view)  # type: ignore[return-value]
        return loads(dumps(self))

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Add a single node, disallowing duplicates.

        Raises:
            StructuralViolationError: If the node already exists.
        """
        if node_for_adding in self:
            raise StructuralViolationError(
                f"Node {node_for_adding!r} already exists in this graph."
            )
        super().add_node(node_for_adding, **attr)

    def remove_node(self, n: NodeID) -> None:
        if n not in self:
            raise StructuralViolationError(f"Node {n!r} does not exist.")
        super().remove_node(n)

    #
    # Edge management
    #
    def add_edge(self, u_of_edge: NodeID, v_of_edge: NodeID, **attr: Any) -> None:
        """Add a directed edge between two existing nodes.

        Adding an edge that is already present updates its attributes.

        Raises:
            StructuralViolationError: If either endpoint is absent.
        """
        if u_of_edge not in self:
            raise StructuralViolationError(f"Source node {u_of_edge!r} does not exist.")
        if v_of_edge not in self:
            raise StructuralViolationError(f"Target node {v_of_edge!r} does not exist.")
        super().add_edge(u_of_edge, v_of_edge, **attr)

    def add_edges_from(self, ebunch_to_add: Iterable, **attr: Any) -> None:
        for edge in ebunch_to_add:
            u, v, *rest = edge
            data = dict(rest[0]) if rest else {}
            data.update(attr)
            self.add_edge(u, v, **data)

    def remove_edge(self, u: NodeID, v: NodeID) -> None:
        """Remove the edge ``u -> v``.

        Raises:
            StructuralViolationError: If the edge does not exist.
        """
        if not self.has_edge(u, v):
            raise StructuralViolationError(f"No edge from {u!r} to {v!r} to remove.")
        super().remove_edge(u, v)

    def reverse_edge(self, u: NodeID, v: NodeID) -> None:
        """Replace ``u -> v`` by ``v -> u``, carrying the edge attributes over."""
        data = dict(self[u][v]) if self.has_edge(u, v) else None
        if data is None:
            raise StructuralViolationError(f"No edge from {u!r} to {v!r} to reverse.")
        self.remove_edge(u, v)
        self.add_edge(v, u, **data)

    def contains_edge(self, u: NodeID, v: NodeID) -> bool:
        """Lenient membership test; absent nodes are simply not adjacent."""
        return self.has_edge(u, v)

    def mask(self, scheme: EdgeFilter) -> int:
        """Keep only the edges accepted by ``scheme``.

        The current edge set is filtered and installed in one step, so masking
        can only remove edges. Reapplying the same scheme is a no-op.

        Args:
            scheme: Predicate ``scheme(u, v) -> bool``; an ``AdjacencyScheme``
                works directly.

        Returns:
            Number of edges removed.
        """
        kept = [(u, v, d) for u, v, d in self.edges(data=True) if scheme(u, v)]
        removed = self.number_of_edges() - len(kept)
        if removed:
            self.clear_edges()
            nx.DiGraph.add_edges_from(self, kept)
        return removed

    #
    # Structure
    #
    def contains_cycle(self) -> bool:
        """Return True if the graph has a directed cycle (self-loops count)."""
        return not nx.is_directed_acyclic_graph(self)

    def strongly_connected_components(self) -> Dict[NodeID, Clump]:
        """Map every node to the strongly connected component containing it.

        A node that is on no cycle maps to a singleton.
        """
        components: Dict[NodeID, Clump] = {}
        for component in nx.strongly_connected_components(self):
            clump = frozenset(component)
            for node in clump:
                components[node] = clump
        return components

    def clumpify(self, clumps: Mapping[NodeID, Clump]) -> "StrictDiGraph":
        """Contract the graph over ``clumps``.

        Args:
            clumps: Mapping from node to the clump it belongs to. Nodes that
                are not mentioned form singleton clumps.

        Returns:
            New graph whose nodes are clumps. An edge ``A -> B`` exists when
            some member of ``A`` has an edge to some member of ``B``; edges
            inside one clump are dropped.
        """
        contracted = StrictDiGraph()

        def clump_of(node: NodeID) -> Clump:
            return clumps.get(node) or frozenset((node,))

        for node in self.nodes:
            clump = clump_of(node)
            if clump not in contracted:
                contracted.add_node(clump)

        for u, v in self.edges:
            a, b = clump_of(u), clump_of(v)
            if a != b:
                contracted.add_edge(a, b)
        return contracted

    def edge_list(self) -> Tuple[Tuple[NodeID, NodeID], ...]:
        """Edges as an ordered tuple of ``(u, v)`` pairs."""
        return tuple(self.edges)
