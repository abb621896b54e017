import math

import pytest
from pytest import approx

from spellnet.algorithms.base import CutBias
from spellnet.config import SolverConfig
from spellnet.exceptions import MissingWeightError
from spellnet.graph.nodes import SINK, SOURCE
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.network.flow import FlowNetwork

# S ─[2]─► a ─[1]─► b ─[2]─► T
CHAIN = WeightScheme.from_mapping(
    {(SOURCE, "a"): 2.0, ("a", "b"): 1.0, ("b", SINK): 2.0}, name="chain"
)

TOUCHES_TERMINAL = AdjacencyScheme(lambda u, v: u is SOURCE or v is SINK)


class TestConstruction:
    def test_capacities_from_scheme(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        assert net.capacity(SOURCE, "a") == 2.0
        assert net.capacity("a", "b") == 1.0
        assert net.capacity("b", "a") is None
        assert net.number_of_edges() == 3
        assert net.internal_nodes == ["a", "b"]

    def test_zero_capacity_edge_is_kept(self):
        net = FlowNetwork(["a"], WeightScheme.from_mapping({(SOURCE, "a"): 0.0}))
        assert net.has_edge(SOURCE, "a")
        assert net.capacity(SOURCE, "a") == 0.0

    def test_missing_required_edge_raises(self):
        with pytest.raises(MissingWeightError) as exc_info:
            FlowNetwork(["a", "b"], CHAIN, required=TOUCHES_TERMINAL)
        assert exc_info.value.edge == ("a", SINK)
        assert "Incomplete weight scheme" in str(exc_info.value)

    def test_negative_capacity_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            FlowNetwork(["a"], WeightScheme.constant(-1.0))

    def test_nan_capacity_raises(self):
        with pytest.raises(ValueError):
            FlowNetwork(["a"], WeightScheme.constant(math.nan))


class TestMask:
    def test_adjacency_mask_removes_edges(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        removed = net.mask(AdjacencyScheme(lambda u, v: u != "a"))
        assert removed == 1
        assert not net.has_edge("a", "b")
        assert net.max_flow().total_flow == 0.0

    def test_weight_mask_scales(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        net.mask(WeightScheme(lambda u, v: 0.5 if u is SOURCE else 1.0))
        assert net.capacity(SOURCE, "a") == 1.0
        assert net.capacity("a", "b") == 1.0
        assert net.max_flow().total_flow == approx(1.0)

    def test_weight_mask_drops_none_and_zero(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        factors = {(SOURCE, "a"): 1.0, ("a", "b"): 0.0}
        removed = net.mask(WeightScheme.from_mapping(factors))
        assert removed == 2
        assert net.edge_list() == ((SOURCE, "a"),)

    def test_weight_mask_factor_out_of_range(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            net.mask(WeightScheme.constant(1.5))
        assert net.capacity("a", "b") == 1.0

    def test_mask_never_increases_capacity(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        before = {(u, v): d["capacity"] for u, v, d in net.edges(data=True)}
        net.mask(WeightScheme.constant(1.0))
        after = {(u, v): d["capacity"] for u, v, d in net.edges(data=True)}
        assert after == before


class TestCuts:
    def test_max_flow(self):
        summary = FlowNetwork(["a", "b"], CHAIN).max_flow()
        assert summary.total_flow == approx(1.0)

    def test_cut_variants(self):
        net = FlowNetwork(["a", "b"], CHAIN)
        sink_cut = net.sink_weighted_minimum_cut()
        source_cut = net.source_weighted_minimum_cut()
        assert sink_cut.source_side == frozenset({"a"})
        assert sink_cut.sink_side == frozenset({"b"})
        assert source_cut.source_side == frozenset({"a"})
        assert sink_cut.value == source_cut.value == approx(1.0)
        assert net.minimum_cut(CutBias.SINK_WEIGHTED) == sink_cut

    def test_unique_cut_agrees_across_biases(self):
        weights = WeightScheme.from_mapping(
            {(SOURCE, "a"): 1.0, ("a", SINK): 3.0, (SOURCE, "b"): 3.0, ("b", SINK): 1.0}
        )
        net = FlowNetwork(["a", "b"], weights)
        for bias in CutBias:
            cut = net.minimum_cut(bias)
            assert cut.source_side == frozenset({"b"})
            assert cut.sink_side == frozenset({"a"})

    def test_tolerance_from_config(self):
        tiny = WeightScheme.from_mapping({(SOURCE, "a"): 1e-3, ("a", SINK): 1e-3})
        coarse = FlowNetwork(["a"], tiny, config=SolverConfig(tolerance=1e-2))
        fine = FlowNetwork(["a"], tiny, config=SolverConfig(tolerance=0.0))
        assert coarse.max_flow().total_flow == 0.0
        assert fine.max_flow().total_flow == approx(1e-3)
