import pytest

from spellnet.graph.nodes import SINK, SOURCE, Assigned, Internal, Tendency
from spellnet.graph.schemes import AdjacencyScheme
from spellnet.notation.pitch import Pitch
from spellnet.spelling.inverting import InvertingSpellingNetwork
from spellnet.spelling.pitch_network import PitchSpellingNetwork

DOWN, UP = Tendency.DOWN, Tendency.UP


def pc(pitch_class, tendency):
    return Internal(pitch_class, tendency)


@pytest.fixture
def db_eb():
    return InvertingSpellingNetwork(["Db", "Eb"])


class TestConstruction:
    def test_nodes_carry_assignments(self, db_eb):
        # D-flat leans down on both nodes; E-flat is neutral.
        assert db_eb.contains(0, UP, DOWN)
        assert db_eb.contains(0, DOWN, DOWN)
        assert db_eb.contains(1, UP, UP)
        assert db_eb.contains(1, DOWN, DOWN)
        assert not db_eb.contains(1, UP, DOWN)
        assert db_eb.contains(1, UP)

    def test_edges(self, db_eb):
        assert db_eb.contains_source_edge((0, DOWN))
        assert db_eb.contains_source_edge((1, DOWN))
        assert not db_eb.contains_source_edge((0, UP))
        assert db_eb.contains_sink_edge((0, UP))
        assert db_eb.contains_sink_edge((1, UP), UP)
        assert not db_eb.contains_sink_edge((1, UP), DOWN)
        # Up to Down within one pitch.
        assert db_eb.contains_edge((0, UP), (0, DOWN))
        assert not db_eb.contains_edge((0, DOWN), (0, UP))
        # Pitch classes 1 and 3 lean apart: only opposite tendencies connect.
        assert db_eb.contains_edge((0, DOWN), (1, UP))
        assert db_eb.contains_edge((1, UP), (0, DOWN), (UP, DOWN))
        assert not db_eb.contains_edge((0, DOWN), (1, DOWN))

    def test_spellings_parsed(self):
        network = InvertingSpellingNetwork({5: "F#", 9: "Gb"})
        assert str(network.spellings[5]) == "F♯"
        assert network.contains(9, DOWN)
        assert not network.contains(0, DOWN)

    def test_pitched_edge(self, db_eb):
        u = Assigned(Internal(0, DOWN), DOWN)
        v = Assigned(Internal(1, UP), UP)
        assert db_eb.pitched_edge(u, v) == (pc(1, DOWN), pc(3, UP))
        assert db_eb.pitched_edge(SOURCE, u) == (SOURCE, pc(1, DOWN))


class TestPartition:
    def test_groups_do_not_connect(self):
        network = InvertingSpellingNetwork.from_groups([["C", "Db"], ["D", "Eb"]])
        assert network.contains_edge((0, UP), (1, DOWN))
        assert not network.contains_edge((0, UP), (3, DOWN))
        assert not network.contains_edge((1, DOWN), (2, UP))
        # Terminal and same-pitch edges survive the partition.
        assert network.contains_source_edge((2, DOWN))
        assert network.contains_edge((3, UP), (3, DOWN))

    def test_connect_with_index_scheme(self):
        network = InvertingSpellingNetwork(["C", "Db", "D"])
        removed = network.connect(AdjacencyScheme(lambda a, b: abs(a - b) == 1))
        assert removed > 0
        assert not network.contains_edge((0, UP), (2, UP))
        assert network.contains_edge((0, UP), (1, DOWN))


class TestDependencies:
    def test_single_dyad(self, db_eb):
        dependencies = db_eb.find_dependencies()
        assert set(dependencies.edges) == {
            ((SOURCE, pc(1, DOWN)), (pc(1, DOWN), pc(3, UP))),
            ((pc(3, UP), SINK), (pc(1, DOWN), pc(3, UP))),
            ((SOURCE, pc(3, DOWN)), (pc(1, UP), SINK)),
            ((pc(3, DOWN), pc(1, UP)), (pc(1, UP), SINK)),
        }

    def test_every_pitched_edge_is_a_node(self, db_eb):
        dependencies = db_eb.find_dependencies()
        for u, v in db_eb.network.edges:
            assert db_eb.pitched_edge(u, v) in dependencies
        assert dependencies.number_of_nodes() == 10

    def test_network_is_left_intact(self, db_eb):
        before = set(db_eb.network.edges)
        db_eb.find_dependencies()
        assert set(db_eb.network.edges) == before

    def test_deterministic(self, db_eb):
        first = db_eb.find_dependencies()
        second = db_eb.find_dependencies()
        assert first.edge_list() == second.edge_list()

    def test_repeated_pitch_class_has_no_self_dependency(self):
        network = InvertingSpellingNetwork(["Db", "Db", "Eb", "Eb"])
        dependencies = network.find_dependencies()
        assert all(a != b for a, b in dependencies.edges)


class TestWeights:
    def test_single_dyad_weights(self, db_eb):
        weights = db_eb.generate_weights()
        assert weights[(pc(1, DOWN), pc(3, UP))] == 1.0
        assert weights[(pc(1, UP), SINK)] == 1.0
        for edge in [
            (SOURCE, pc(1, DOWN)),
            (pc(3, UP), SINK),
            (SOURCE, pc(3, DOWN)),
            (pc(3, DOWN), pc(1, UP)),
        ]:
            assert weights[edge] == 2.0
        for edge in [
            (pc(1, UP), pc(1, DOWN)),
            (pc(1, UP), pc(3, DOWN)),
            (pc(3, UP), pc(1, DOWN)),
            (pc(3, UP), pc(3, DOWN)),
        ]:
            assert weights[edge] == 1.0

    def test_preset_mapping(self, db_eb):
        weights = db_eb.generate_weights(preset={(pc(1, UP), SINK): 10.0})
        assert weights[(pc(1, UP), SINK)] == 10.0
        assert weights[(SOURCE, pc(3, DOWN))] == 11.0

    def test_preset_function(self, db_eb):
        weights = db_eb.generate_weights(preset=lambda edge: 4.0 if SINK in edge else None)
        assert weights[(pc(3, UP), SINK)] == 4.0
        assert weights[(pc(3, DOWN), pc(1, UP))] == 5.0

    def test_groups(self, db_eb):
        group = {(SOURCE, pc(1, DOWN)), (SOURCE, pc(3, DOWN))}
        weights = db_eb.generate_weights(groups=[group])
        assert weights[(SOURCE, pc(1, DOWN))] == weights[(SOURCE, pc(3, DOWN))] == 3.0

    def test_weight_scheme_reproduces_training_spelling(self, db_eb):
        scheme = db_eb.weight_scheme()
        assert scheme(SOURCE, pc(1, DOWN)) == 2.0
        assert scheme(SOURCE, pc(5, DOWN)) is None
        network = PitchSpellingNetwork({0: Pitch(61), 1: Pitch(63)}, scheme)
        for preference in ("sharps", "flats"):
            spelled = network.spell(preference)
            assert [str(s) for s in spelled.values()] == ["D♭", "E♭"]

    def test_factory(self, db_eb):
        make = db_eb.pitch_spelling_network_factory()
        network = make({0: Pitch(73), 1: Pitch(75)})
        assert isinstance(network, PitchSpellingNetwork)
        assert [str(s) for s in network.spell().values()] == ["D♭", "E♭"]
        assert network.flow_network.minimum_cut().value == 2.0
