"""Source/sink networks built from edge schemes."""

from spellnet.network.flow import FlowNetwork
from spellnet.network.unweighted import UnweightedNetwork

__all__ = ["FlowNetwork", "UnweightedNetwork"]
