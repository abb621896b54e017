"""Weight solving over a dependency graph.

A dependency graph has an edge ``A -> B`` when the weight of ``A`` must
strictly exceed the weight of ``B``. Solving assigns

    weight(A) = base_weight + sum(weight(B) for every direct dependency B)

bottom-up, so every node outweighs the sum of its dependencies. A preset weight
for a node replaces this computation for that node and cuts the recursion
below it.

Cyclic dependency graphs cannot be solved directly. `solve_clumped_weights`
first contracts strongly connected components (merged with any caller-supplied
groups) into clumps that share one weight, and solves the acyclic quotient.
"""

from __future__ import annotations

from typing import (
    Callable,
    Dict,
    FrozenSet,
    Hashable,
    Iterable,
    List,
    Optional,
    Tuple,
)

from networkx.utils import UnionFind

from spellnet.config import SOLVER_CONFIG, SolverConfig
from spellnet.exceptions import InconsistentPresetError, StructuralViolationError
from spellnet.graph.strict_digraph import StrictDiGraph
from spellnet.logging import get_logger

logger = get_logger(__name__)

Preset = Callable[[Hashable], Optional[float]]
Clump = FrozenSet[Hashable]


def solve_weights(
    dependencies: StrictDiGraph,
    preset: Optional[Preset] = None,
    config: Optional[SolverConfig] = None,
) -> Dict[Hashable, float]:
    """Solve weights on an acyclic dependency graph.

    Uses an explicit stack, so deep dependency chains do not touch the
    interpreter recursion limit.

    Args:
        dependencies: Acyclic graph; ``A -> B`` means ``weight(A) > weight(B)``.
        preset: Optional function giving a fixed weight for a node, or None.
        config: Solver settings; defaults to ``SOLVER_CONFIG``.

    Returns:
        Weight for every node of ``dependencies``.

    Raises:
        StructuralViolationError: If the graph contains a cycle.
        InconsistentPresetError: If ``config.validate_presets`` is set and a
            preset breaks the ordering of some dependency edge.
    """
    config = config or SOLVER_CONFIG
    if dependencies.contains_cycle():
        raise StructuralViolationError(
            "Dependency graph contains a cycle; contract it before solving."
        )

    weights: Dict[Hashable, float] = {}
    for root in dependencies.nodes:
        if root in weights:
            continue
        stack: List[Tuple[Hashable, bool]] = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if node in weights:
                continue
            fixed = preset(node) if preset is not None else None
            if fixed is not None:
                weights[node] = float(fixed)
                continue
            if expanded:
                weights[node] = config.base_weight + sum(
                    weights[dep] for dep in dependencies.succ[node]
                )
                continue
            stack.append((node, True))
            for dep in dependencies.succ[node]:
                if dep not in weights:
                    stack.append((dep, False))

    if config.validate_presets:
        check_dependency_order(dependencies, weights)
    return weights


def check_dependency_order(
    dependencies: StrictDiGraph, weights: Dict[Hashable, float]
) -> None:
    """Raise `InconsistentPresetError` if some edge ``A -> B`` has weight(A) <= weight(B)."""
    violations = [
        (a, b, weights[a], weights[b])
        for a, b in dependencies.edges
        if not weights[a] > weights[b]
    ]
    if violations:
        raise InconsistentPresetError(violations)


def merge_clumps(
    components: Iterable[Iterable[Hashable]],
    groups: Iterable[Iterable[Hashable]] = (),
) -> Dict[Hashable, Clump]:
    """Merge overlapping node sets into a partition.

    Sets that share a member end up in the same clump, transitively.

    Returns:
        Mapping from every mentioned node to its clump.
    """
    union_find = UnionFind()
    for members in list(components) + [list(g) for g in groups]:
        members = list(members)
        if members:
            union_find.union(*members)

    partition: Dict[Hashable, Clump] = {}
    for members in union_find.to_sets():
        clump = frozenset(members)
        for node in clump:
            partition[node] = clump
    return partition


def clump_dependencies(
    dependencies: StrictDiGraph,
    groups: Iterable[Iterable[Hashable]] = (),
) -> Tuple[StrictDiGraph, Dict[Hashable, Clump]]:
    """Contract ``dependencies`` into an acyclic graph of clumps.

    Strongly connected components are merged with ``groups``. Group members
    that never occur in ``dependencies`` are added as isolated nodes so they
    still receive a weight. If grouping creates a new cycle between clumps,
    the cyclic clumps are merged again until the quotient is acyclic.

    Returns:
        ``(contracted_graph, partition)``.
    """
    groups = [frozenset(g) for g in groups]
    graph = dependencies
    missing = [n for g in groups for n in g if n not in dependencies]
    if missing:
        graph = dependencies.copy()
        for node in dict.fromkeys(missing):
            graph.add_node(node)

    components = set(graph.strongly_connected_components().values())
    partition = merge_clumps(components, groups)
    contracted = graph.clumpify(partition)

    while contracted.contains_cycle():
        cyclic = [
            clump_set
            for clump_set in set(contracted.strongly_connected_components().values())
            if len(clump_set) > 1
        ]
        logger.warning(
            "Grouping constraints created %d cycle(s) between clumps; merging them",
            len(cyclic),
        )
        merged = [frozenset().union(*clump_set) for clump_set in cyclic]
        partition = merge_clumps(set(partition.values()), merged)
        contracted = graph.clumpify(partition)

    logger.debug(
        "Contracted %d dependency nodes into %d clumps",
        graph.number_of_nodes(),
        contracted.number_of_nodes(),
    )
    return contracted, partition


def solve_clumped_weights(
    dependencies: StrictDiGraph,
    preset: Optional[Preset] = None,
    groups: Iterable[Iterable[Hashable]] = (),
    config: Optional[SolverConfig] = None,
) -> Dict[Hashable, float]:
    """Solve weights so that every clump's members share one weight.

    A clump's preset is the largest preset among its members.

    Returns:
        Weight for every node of ``dependencies`` and every group member.
    """
    contracted, _ = clump_dependencies(dependencies, groups)

    clump_preset: Optional[Preset] = None
    if preset is not None:

        def clump_preset(clump: Clump) -> Optional[float]:
            values = [v for v in (preset(member) for member in clump) if v is not None]
            return max(values) if values else None

    clump_weights = solve_weights(contracted, clump_preset, config)
    return {
        member: weight for clump, weight in clump_weights.items() for member in clump
    }


def generate_weights(
    dependencies: StrictDiGraph,
    preset: Optional[Preset] = None,
    groups: Iterable[Iterable[Hashable]] = (),
    config: Optional[SolverConfig] = None,
) -> Dict[Hashable, float]:
    """Solve weights, clumping only when the graph is cyclic or groups are given."""
    groups = [frozenset(g) for g in groups]
    if groups or dependencies.contains_cycle():
        return solve_clumped_weights(dependencies, preset, groups, config)
    return solve_weights(dependencies, preset, config)
