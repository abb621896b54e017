import pytest

from spellnet.exceptions import StructuralViolationError
from spellnet.graph.strict_digraph import StrictDiGraph


def make_graph(nodes, edges):
    g = StrictDiGraph()
    for node in nodes:
        g.add_node(node)
    for u, v in edges:
        g.add_edge(u, v)
    return g


class TestStrictInsertion:
    def test_duplicate_node_raises(self):
        g = make_graph("A", [])
        with pytest.raises(StructuralViolationError):
            g.add_node("A")

    def test_edge_to_missing_node_raises(self):
        g = make_graph("A", [])
        with pytest.raises(StructuralViolationError, match="does not exist"):
            g.add_edge("A", "B")
        with pytest.raises(ValueError):
            g.add_edge("B", "A")
        assert "B" not in g

    def test_add_edges_from_is_strict(self):
        g = make_graph("AB", [])
        g.add_edges_from([("A", "B", {"capacity": 2.0})])
        assert g["A"]["B"]["capacity"] == 2.0
        with pytest.raises(StructuralViolationError):
            g.add_edges_from([("A", "C")])

    def test_remove_missing_edge_raises(self):
        g = make_graph("AB", [("A", "B")])
        with pytest.raises(StructuralViolationError):
            g.remove_edge("B", "A")
        g.remove_edge("A", "B")
        assert not g.has_edge("A", "B")

    def test_remove_missing_node_raises(self):
        g = make_graph("A", [])
        with pytest.raises(StructuralViolationError):
            g.remove_node("Z")

    def test_queries_on_absent_nodes_are_lenient(self):
        g = make_graph("A", [])
        assert not g.contains_edge("X", "Y")
        assert not g.has_edge("A", "Y")

    def test_reverse_edge_keeps_attributes(self):
        g = make_graph("AB", [])
        g.add_edge("A", "B", capacity=3.0)
        g.reverse_edge("A", "B")
        assert not g.has_edge("A", "B")
        assert g["B"]["A"] == {"capacity": 3.0}
        with pytest.raises(StructuralViolationError):
            g.reverse_edge("A", "B")

    def test_copy_is_independent(self):
        g = make_graph("AB", [("A", "B")])
        clone = g.copy()
        clone.remove_edge("A", "B")
        assert g.has_edge("A", "B")
        assert isinstance(clone, StrictDiGraph)


class TestMask:
    def test_mask_keeps_accepted_edges(self):
        g = make_graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")])
        removed = g.mask(lambda u, v: u < v)
        assert removed == 1
        assert g.edge_list() == (("A", "B"), ("B", "C"))

    def test_mask_is_idempotent(self):
        g = make_graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")])
        g.mask(lambda u, v: u < v)
        assert g.mask(lambda u, v: u < v) == 0
        assert g.number_of_edges() == 2

    def test_mask_never_adds_edges(self):
        g = make_graph("AB", [("A", "B")])
        g.mask(lambda u, v: True)
        assert g.edge_list() == (("A", "B"),)
        assert not g.has_edge("B", "A")

    def test_mask_keeps_nodes_and_attributes(self):
        g = make_graph("ABC", [])
        g.add_edge("A", "B", capacity=1.5)
        g.add_edge("B", "C", capacity=2.5)
        g.mask(lambda u, v: v == "C")
        assert set(g.nodes) == {"A", "B", "C"}
        assert g["B"]["C"]["capacity"] == 2.5


class TestComponents:
    def test_strongly_connected_components(self):
        g = make_graph("ABCD", [("A", "B"), ("B", "C"), ("C", "A"), ("C", "D")])
        components = g.strongly_connected_components()
        assert components["A"] == frozenset("ABC")
        assert components["B"] == components["A"]
        assert components["D"] == frozenset("D")

    def test_contains_cycle(self):
        assert not make_graph("AB", [("A", "B")]).contains_cycle()
        assert make_graph("AB", [("A", "B"), ("B", "A")]).contains_cycle()
        assert make_graph("A", [("A", "A")]).contains_cycle()

    def test_clumpify_contracts_and_drops_self_edges(self):
        g = make_graph("ABCD", [("A", "B"), ("B", "A"), ("B", "C"), ("C", "D")])
        clumps = g.strongly_connected_components()
        contracted = g.clumpify(clumps)
        ab, c, d = frozenset("AB"), frozenset("C"), frozenset("D")
        assert set(contracted.nodes) == {ab, c, d}
        assert set(contracted.edges) == {(ab, c), (c, d)}
        assert not contracted.contains_cycle()

    def test_clumpify_with_partial_mapping(self):
        g = make_graph("ABC", [("A", "B"), ("B", "C")])
        ac = frozenset("AC")
        contracted = g.clumpify({"A": ac, "C": ac})
        b = frozenset("B")
        assert set(contracted.edges) == {(ac, b), (b, ac)}
        assert contracted.contains_cycle()
