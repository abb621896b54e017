"""Graph primitives.

This package provides the node vocabulary (`nodes`), composable edge schemes
(`schemes`), and the strict directed graph type `StrictDiGraph`.
"""

from spellnet.graph.nodes import (
    SINK,
    SOURCE,
    Assigned,
    Internal,
    Tendency,
    Terminal,
    assignment_of,
    is_terminal,
    lift,
    unassigned,
)
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.graph.strict_digraph import StrictDiGraph

__all__ = [
    "SOURCE",
    "SINK",
    "Terminal",
    "Tendency",
    "Internal",
    "Assigned",
    "assignment_of",
    "is_terminal",
    "lift",
    "unassigned",
    "AdjacencyScheme",
    "WeightScheme",
    "StrictDiGraph",
]
