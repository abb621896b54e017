"""Breadth-first search over an arbitrary successor function.

The search visits successors in the order the successor function yields them,
so results are deterministic whenever that order is (``networkx`` adjacency
follows insertion order).
"""

from collections import deque
from typing import Callable, Dict, FrozenSet, Hashable, Iterable, List, Optional

Successors = Callable[[Hashable], Iterable[Hashable]]


def bfs(
    successors: Successors,
    src_node: Hashable,
    dst_node: Optional[Hashable] = None,
) -> Dict[Hashable, Optional[Hashable]]:
    """
    Breadth-first search returning the predecessor tree.

    The search stops early once ``dst_node`` is discovered.
    """
    pred: Dict[Hashable, Optional[Hashable]] = {src_node: None}
    queue = deque([src_node])
    while queue:
        node_id = queue.popleft()
        for neighbor_id in successors(node_id):
            if neighbor_id in pred:
                continue
            pred[neighbor_id] = node_id
            if neighbor_id == dst_node:
                return pred
            queue.append(neighbor_id)
    return pred


def bfs_path(
    successors: Successors, src_node: Hashable, dst_node: Hashable
) -> Optional[List[Hashable]]:
    """Shortest (fewest-edge) path from ``src_node`` to ``dst_node``, or None."""
    pred = bfs(successors, src_node, dst_node)
    if dst_node not in pred:
        return None
    path = [dst_node]
    while path[-1] != src_node:
        path.append(pred[path[-1]])
    path.reverse()
    return path


def reachable_from(successors: Successors, src_node: Hashable) -> FrozenSet[Hashable]:
    """All nodes reachable from ``src_node``, including itself."""
    return frozenset(bfs(successors, src_node))
