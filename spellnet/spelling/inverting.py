"""Learning edge weights from example spellings.

`InvertingSpellingNetwork` runs the spelling procedure backwards. Given
spellings that are known to be right, each pitch's ``Up`` and ``Down`` nodes
are annotated with the cut side they must land on (``Assigned`` nodes). Every
``SOURCE -> SINK`` path in this unweighted network has to be blocked by the
cut, and the edge that blocks it is the one leaving the last ``Down``-assigned
node on the path. For the cut to choose that edge, it must be lighter than
every other edge on the path, which yields a dependency ``other -> cut edge``.

Dependencies are collected between *pitched edges*: edges projected onto
``Internal(pitch_class, tendency)`` nodes, so that one weight serves every
occurrence of the same pitch-class relationship. The weights are then solved
by `spellnet.algorithms.weights.generate_weights`.
"""

from __future__ import annotations

from functools import partial
from typing import (
    Callable,
    Dict,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from spellnet.algorithms import weights as weight_solver
from spellnet.config import SolverConfig
from spellnet.graph.nodes import (
    Assigned,
    Internal,
    Node,
    Tendency,
    assignment_of,
    lift,
    unassigned,
)
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.graph.strict_digraph import StrictDiGraph
from spellnet.logging import get_logger, log_duration
from spellnet.network.unweighted import UnweightedNetwork
from spellnet.notation.categories import tendencies_for
from spellnet.notation.pitch import Pitch, Spelling
from spellnet.spelling.adjacency import Connect
from spellnet.spelling.pitch_network import PitchSpellingNetwork

logger = get_logger(__name__)

PitchedEdge = Tuple[Node, Node]
Preset = Union[Mapping[PitchedEdge, float], Callable[[PitchedEdge], Optional[float]]]
SpellingLike = Union[Spelling, str]

_TENDENCIES = (Tendency.DOWN, Tendency.UP)


def _assigned_nodes(index: int, spelling: Spelling) -> List[Assigned]:
    pair = tendencies_for(spelling)
    return [
        Assigned(Internal(index, Tendency.DOWN), pair.down),
        Assigned(Internal(index, Tendency.UP), pair.up),
    ]


def _preset_function(preset: Optional[Preset]):
    if preset is None or callable(preset):
        return preset
    return preset.get


class InvertingSpellingNetwork:
    """Unweighted network over assigned nodes for a set of example spellings.

    Attributes:
        spellings: Example spellings by index.
        network: The masked `UnweightedNetwork` over ``Assigned`` nodes.
    """

    def __init__(
        self, spellings: Union[Mapping[int, SpellingLike], Sequence[SpellingLike]]
    ) -> None:
        if not isinstance(spellings, Mapping):
            spellings = dict(enumerate(spellings))
        self.spellings: Dict[int, Spelling] = {
            index: Spelling.parse(spelling) for index, spelling in spellings.items()
        }

        nodes = [
            node
            for index, spelling in self.spellings.items()
            for node in _assigned_nodes(index, spelling)
        ]
        specific_edges = (
            Connect.same_tendencies + Connect.different_tendencies
        ).pullback(self.pitched) * Connect.different_indices
        same_index_edges = Connect.up_to_down * Connect.same_indices
        source_edges = Connect.source_to_down.pullback(self.pitched)
        sink_edges = Connect.up_to_sink.pullback(self.pitched)
        scheme = (
            specific_edges + same_index_edges + source_edges + sink_edges
        ).pullback(unassigned)

        self.network = UnweightedNetwork(nodes, scheme)

    @classmethod
    def from_groups(
        cls, groups: Iterable[Iterable[SpellingLike]]
    ) -> "InvertingSpellingNetwork":
        """Build from groups of spellings; only spellings in one group connect."""
        flattened: List[SpellingLike] = []
        labels: Dict[int, int] = {}
        for label, group in enumerate(groups):
            for spelling in group:
                labels[len(flattened)] = label
                flattened.append(spelling)
        network = cls(flattened)
        network.partition(labels)
        return network

    #
    # Projection
    #
    def pitched(self, node: Internal) -> Internal:
        """Project an index-level node to ``Internal(pitch_class, tendency)``."""
        return Internal(self.spellings[node.index].pitch_class, node.tendency)

    def pitched_edge(self, source: Node, target: Node) -> PitchedEdge:
        """Project an edge of ``network`` to pitch-class space."""
        project = lift(self.pitched)
        return project(unassigned(source)), project(unassigned(target))

    #
    # Connectivity
    #
    def connect(self, scheme: AdjacencyScheme) -> int:
        """Keep internal edges between indices accepted by ``scheme``.

        ``scheme`` is evaluated on pitch indices. Edges between the two nodes
        of one pitch and edges touching a terminal are always kept.

        Returns:
            Number of edges removed.
        """
        same_index = AdjacencyScheme(lambda a, b: a == b, name="same_index")
        by_index = (scheme + same_index).pullback(lambda node: node.index)
        return self.network.mask(by_index + Connect.terminal_edges)

    def partition(self, labels: Mapping[int, Hashable]) -> int:
        """Keep internal edges only between indices that share a label."""
        return self.connect(
            AdjacencyScheme(
                lambda a, b: a in labels and labels[a] == labels.get(b),
                name="partition",
            )
        )

    #
    # Dependencies and weights
    #
    def find_dependencies(self) -> StrictDiGraph:
        """Discover the weight ordering the example spellings require.

        Returns:
            Graph over pitched edges with ``A -> B`` meaning weight(A) > weight(B).
            Every pitched edge of the network is a node, dependent or not.
        """
        dependencies = StrictDiGraph()
        for u, v in self.network.edges:
            edge = self.pitched_edge(u, v)
            if edge not in dependencies:
                dependencies.add_node(edge)

        residual = self.network.copy()
        paths = 0
        while True:
            path = residual.augmenting_path()
            if path is None:
                break
            paths += 1
            last_down = max(
                i for i, node in enumerate(path) if assignment_of(node) is Tendency.DOWN
            )
            cut = (path[last_down], path[last_down + 1])
            cut_edge = self.pitched_edge(*cut)
            for hop in zip(path, path[1:]):
                if hop == cut:
                    continue
                dependent = self.pitched_edge(*hop)
                # A pitched edge never has to outweigh itself.
                if dependent != cut_edge:
                    dependencies.add_edge(dependent, cut_edge)
            residual.reverse_edge(*cut)

        logger.debug(
            "Found %d dependencies among %d pitched edges from %d augmenting paths",
            dependencies.number_of_edges(),
            dependencies.number_of_nodes(),
            paths,
        )
        return dependencies

    def generate_weights(
        self,
        preset: Optional[Preset] = None,
        groups: Iterable[Iterable[PitchedEdge]] = (),
        config: Optional[SolverConfig] = None,
    ) -> Dict[PitchedEdge, float]:
        """Solve a weight for every pitched edge.

        Args:
            preset: Fixed weights, as a mapping or a function returning None
                for edges without a preset. Presets are not checked against
                the dependencies unless ``config.validate_presets`` is set.
            groups: Sets of pitched edges that must share one weight.
            config: Solver settings.
        """
        with log_duration(logger, "Weight generation"):
            dependencies = self.find_dependencies()
            return weight_solver.generate_weights(
                dependencies, _preset_function(preset), groups, config
            )

    def weight_scheme(
        self,
        preset: Optional[Preset] = None,
        groups: Iterable[Iterable[PitchedEdge]] = (),
        config: Optional[SolverConfig] = None,
    ) -> WeightScheme:
        """Solved weights as a `WeightScheme` over pitched nodes."""
        return WeightScheme.from_mapping(
            self.generate_weights(preset, groups, config), name="learned"
        )

    def pitch_spelling_network_factory(
        self,
        preset: Optional[Preset] = None,
        groups: Iterable[Iterable[PitchedEdge]] = (),
        config: Optional[SolverConfig] = None,
    ) -> Callable[[Mapping[int, Pitch]], PitchSpellingNetwork]:
        """Return a callable building a `PitchSpellingNetwork` from a pitch map."""
        scheme = self.weight_scheme(preset, groups, config)
        return partial(PitchSpellingNetwork, weight_scheme=scheme, config=config)

    #
    # Membership queries
    #
    def _candidates(
        self, index: int, tendency: Tendency, assignment: Optional[Tendency]
    ) -> List[Assigned]:
        assignments = _TENDENCIES if assignment is None else (assignment,)
        return [Assigned(Internal(index, tendency), a) for a in assignments]

    def contains(
        self, index: int, tendency: Tendency, assignment: Optional[Tendency] = None
    ) -> bool:
        return any(
            self.network.contains(node)
            for node in self._candidates(index, tendency, assignment)
        )

    def contains_edge(
        self,
        source: Tuple[int, Tendency],
        target: Tuple[int, Tendency],
        assignments: Optional[Tuple[Tendency, Tendency]] = None,
    ) -> bool:
        """True if an edge joins the two ``(index, tendency)`` nodes.

        Assignments are ignored unless given as ``(source, target)``.
        """
        source_assignment, target_assignment = assignments or (None, None)
        return any(
            self.network.contains_edge(u, v)
            for u in self._candidates(*source, source_assignment)
            for v in self._candidates(*target, target_assignment)
        )

    def contains_source_edge(
        self, target: Tuple[int, Tendency], assignment: Optional[Tendency] = None
    ) -> bool:
        return any(
            self.network.contains_source_edge(node)
            for node in self._candidates(*target, assignment)
        )

    def contains_sink_edge(
        self, source: Tuple[int, Tendency], assignment: Optional[Tendency] = None
    ) -> bool:
        return any(
            self.network.contains_sink_edge(node)
            for node in self._candidates(*source, assignment)
        )
