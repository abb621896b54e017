"""spellnet: enharmonic pitch spelling with flow networks.

Pitches are spelled by a minimum cut through a network whose capacities are
learned from correctly spelled examples.

Primary API:
    spell() - Spell indexed pitches with a weight scheme
    build_weight_scheme() - Learn a weight scheme from example spellings
    default_weight_scheme() - Weight scheme learned from the bundled dyad corpus

Example:
    from spellnet import default_weight_scheme, spell

    weights = default_weight_scheme()
    spelled = spell({0: 63, 1: 67}, weights)   # {0: E♭, 1: G}
"""

from __future__ import annotations

from spellnet import cli, logging
from spellnet._version import __version__
from spellnet.api import build_weight_scheme, default_weight_scheme, spell
from spellnet.config import SOLVER_CONFIG, SolverConfig
from spellnet.exceptions import (
    InconsistentPresetError,
    MissingWeightError,
    SpellingNetworkError,
    StructuralViolationError,
    UnspellableError,
)
from spellnet.graph.nodes import SINK, SOURCE, Internal, Tendency
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.notation.pitch import Pitch, SpelledPitch, Spelling
from spellnet.spelling.inverting import InvertingSpellingNetwork
from spellnet.spelling.pitch_network import PitchSpellingNetwork, Preference

__all__ = [
    # Version
    "__version__",
    # API
    "spell",
    "build_weight_scheme",
    "default_weight_scheme",
    # Networks
    "InvertingSpellingNetwork",
    "PitchSpellingNetwork",
    "Preference",
    # Schemes and nodes
    "AdjacencyScheme",
    "WeightScheme",
    "Internal",
    "Tendency",
    "SOURCE",
    "SINK",
    # Notation
    "Pitch",
    "Spelling",
    "SpelledPitch",
    # Config
    "SolverConfig",
    "SOLVER_CONFIG",
    # Errors
    "SpellingNetworkError",
    "StructuralViolationError",
    "MissingWeightError",
    "InconsistentPresetError",
    "UnspellableError",
    # Modules
    "cli",
    "logging",
]
