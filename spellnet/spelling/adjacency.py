"""Adjacency schemes for spelling networks.

Schemes here are written against internal nodes exposing ``index`` and
``tendency`` (``Internal`` and ``Assigned`` both do). Index-level schemes
compare ``index`` directly. Pitched schemes expect ``index`` to be a pitch
class, so callers pull them back through a map from pitch occurrence to
pitch class before use.
"""

from __future__ import annotations

from operator import attrgetter

from spellnet.graph.nodes import SINK, SOURCE, Tendency, is_terminal
from spellnet.graph.schemes import AdjacencyScheme
from spellnet.notation.categories import (
    TERMINAL_FREE_PITCH_CLASS,
    requires_different_tendencies,
)

_index = attrgetter("index")
_tendency = attrgetter("tendency")


def _between_internal(predicate, name: str) -> AdjacencyScheme:
    """Scheme accepting only internal pairs that satisfy ``predicate``."""
    return AdjacencyScheme(
        lambda a, b: not is_terminal(a) and not is_terminal(b) and predicate(a, b),
        name=name,
    )


class Connect:
    """Namespace of the adjacency schemes used to wire spelling networks."""

    #: ``Up`` node to ``Down`` node.
    up_to_down = _between_internal(
        lambda a, b: a is Tendency.UP and b is Tendency.DOWN, "up_to_down"
    ).pullback(_tendency)

    #: Internal nodes sharing an index.
    same_indices = _between_internal(lambda a, b: a == b, "same_indices").pullback(
        _index
    )

    #: Internal nodes with different indices.
    different_indices = _between_internal(
        lambda a, b: a != b, "different_indices"
    ).pullback(_index)

    #: ``SOURCE`` to a ``Down`` node, except for pitch class 8.
    source_to_down = AdjacencyScheme(
        lambda a, b: (
            a is SOURCE
            and not is_terminal(b)
            and b.tendency is Tendency.DOWN
            and b.index != TERMINAL_FREE_PITCH_CLASS
        ),
        name="source_to_down",
    )

    #: An ``Up`` node to ``SINK``, except for pitch class 8.
    up_to_sink = AdjacencyScheme(
        lambda a, b: (
            b is SINK
            and not is_terminal(a)
            and a.tendency is Tendency.UP
            and a.index != TERMINAL_FREE_PITCH_CLASS
        ),
        name="up_to_sink",
    )

    #: Pitch-class pairs listed in the heterogeneity table.
    pitch_classes_for_different_tendencies = _between_internal(
        lambda a, b: requires_different_tendencies(a.index, b.index),
        "pitch_classes_for_different_tendencies",
    )

    #: Pitch-class pairs absent from the heterogeneity table.
    pitch_classes_for_same_tendencies = _between_internal(
        lambda a, b: not requires_different_tendencies(a.index, b.index),
        "pitch_classes_for_same_tendencies",
    )

    #: Opposite tendencies between heterogeneous pitch classes.
    different_tendencies = (
        _between_internal(lambda a, b: a.tendency != b.tendency, "tendencies_differ")
        * pitch_classes_for_different_tendencies
    )

    #: Equal tendencies between homogeneous pitch classes.
    same_tendencies = (
        _between_internal(lambda a, b: a.tendency == b.tendency, "tendencies_agree")
        * pitch_classes_for_same_tendencies
    )

    #: Every edge touching a terminal.
    terminal_edges = AdjacencyScheme(
        lambda a, b: is_terminal(a) or is_terminal(b), name="terminal_edges"
    )
