"""Node vocabulary shared by every network in spellnet.

A network node is either one of the two terminals (``SOURCE``, ``SINK``) or an
internal value. Internal values are usually ``Internal(index, tendency)``
tuples, where ``index`` identifies a pitch occurrence (or, after projection, a
pitch class) and ``tendency`` is one of the two competing notational leanings.
Networks built for weight inference carry ``Assigned`` nodes, which pair an
``Internal`` node with the cut side it is known to land on.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Callable, Hashable, NamedTuple, Tuple, Union


class Terminal(Enum):
    """The designated source and sink of a network.

    Plain ``Enum`` so terminals never compare equal to integer indices.
    """

    SOURCE = "source"
    SINK = "sink"

    def __repr__(self) -> str:
        return self.name


SOURCE = Terminal.SOURCE
SINK = Terminal.SINK


class Tendency(IntEnum):
    """One of two notational leanings; also names the two sides of a cut.

    ``DOWN`` is the source side of a cut, ``UP`` the sink side.
    """

    DOWN = 0
    UP = 1

    def __repr__(self) -> str:
        return self.name

    @property
    def opposite(self) -> "Tendency":
        return Tendency.UP if self is Tendency.DOWN else Tendency.DOWN


class Internal(NamedTuple):
    """An internal node: a logical slot paired with a tendency."""

    index: Hashable
    tendency: Tendency


class Assigned(NamedTuple):
    """An internal node annotated with the cut side it must end up on."""

    node: Internal
    assignment: Tendency

    @property
    def index(self) -> Hashable:
        return self.node.index

    @property
    def tendency(self) -> Tendency:
        return self.node.tendency


#: Any node of a network: a terminal or an internal value.
Node = Union[Terminal, Hashable]

#: Directed edge as an ordered pair of nodes.
Edge = Tuple[Node, Node]


def is_terminal(node: Any) -> bool:
    """Return True for ``SOURCE`` and ``SINK``."""
    return isinstance(node, Terminal)


def lift(f: Callable[[Any], Any]) -> Callable[[Node], Node]:
    """Extend a map on internal values to whole nodes, fixing the terminals."""

    def lifted(node: Node) -> Node:
        if isinstance(node, Terminal):
            return node
        return f(node)

    return lifted


def assignment_of(node: Node) -> Tendency:
    """Return the cut side of a node in an assigned network.

    ``SOURCE`` is always on the ``DOWN`` (source) side and ``SINK`` on the
    ``UP`` (sink) side.

    Raises:
        TypeError: If ``node`` is neither a terminal nor an ``Assigned`` node.
    """
    if node is SOURCE:
        return Tendency.DOWN
    if node is SINK:
        return Tendency.UP
    if isinstance(node, Assigned):
        return node.assignment
    raise TypeError(f"Node {node!r} carries no assignment")


def unassigned(node: Node) -> Node:
    """Strip the assignment from an ``Assigned`` node (terminals pass through)."""
    if isinstance(node, Assigned):
        return node.node
    return node
