"""Flow and weight-solving algorithms."""

from spellnet.algorithms.base import MIN_CAP, CutBias
from spellnet.algorithms.max_flow import calc_max_flow, calc_min_cut
from spellnet.algorithms.types import FlowSummary, MinimumCut
from spellnet.algorithms.weights import (
    clump_dependencies,
    generate_weights,
    merge_clumps,
    solve_clumped_weights,
    solve_weights,
)

__all__ = [
    "MIN_CAP",
    "CutBias",
    "calc_max_flow",
    "calc_min_cut",
    "FlowSummary",
    "MinimumCut",
    "clump_dependencies",
    "generate_weights",
    "merge_clumps",
    "solve_clumped_weights",
    "solve_weights",
]
