"""
Tests for combine, fusion and contraction.

Validates that:
1. combine pads operators and merges graphs with relabelled nodes and
   disjoint tensor indices, even when a code is combined with itself.
2. fusion keeps the code valid, removes two qubits per pair, preserves the
   number of logical qubits and refuses to measure a logical.
3. Sequential and one-shot fusion agree once pairs are renumbered.
4. contract_by_coords finds the coincident qubits.
5. Self-contraction is reported with a RuntimeWarning.
"""
import warnings

import pytest

from tncodes.codes import (
    SimpleCode,
    TensorNetworkCode,
    five_qubit_code,
    steane_code,
    verify_code,
)
from tncodes.graph import index_tag, make_edge
from tncodes.graph.surgery import (
    FusionError,
    _update_qubit_pairs,
    combine,
    contract,
    contract_by_coords,
    fusion,
)


# ============================================================================
# Fixtures
# ============================================================================

def _make_five() -> TensorNetworkCode:
    return TensorNetworkCode.from_code(five_qubit_code())


def _make_steane() -> TensorNetworkCode:
    return TensorNetworkCode.from_code(steane_code())


def _make_positioned_pair():
    five = _make_five().with_coords([[0, 0], [0, 1], [0, 2], [0, 3], [0, 4], [0, 5]])
    steane = _make_steane().with_coords(
        [[1, 0], [1, 1], [0, 1], [1, 3], [1, 4], [1, 5], [1, 6], [0, 2]]
    )
    return five, steane


# ============================================================================
# Combine
# ============================================================================

class TestCombine:
    """Disjoint union of codes."""

    def test_simple_codes(self):
        combined = combine(five_qubit_code(), steane_code())
        assert (combined.n, combined.k, combined.r) == (12, 2, 10)
        assert combined.stabilizers[0] == (1, 3, 3, 1, 0) + (0,) * 7
        assert combined.stabilizers[4] == (0,) * 5 + (1, 0, 0, 1, 0, 1, 1)
        assert combined.name == ""
        assert verify_code(combined)

    def test_network_graph(self):
        combined = combine(_make_five(), _make_steane())
        graph = combined.code_graph
        assert graph.virtual_nodes() == [-1, -2]
        assert graph.physical_nodes() == list(range(1, 13))
        assert graph.physical_neighbours(-2) == list(range(6, 13))
        assert set(combined.seed_codes) == {"Five qubit code", "Steane code"}

    def test_self_combine_gets_fresh_indices(self):
        five = _make_five()
        combined = combine(five, five)
        graph = combined.code_graph
        legs_a = set(graph.node_index_list(-1))
        legs_b = set(graph.node_index_list(-2))
        assert len(legs_a) == len(legs_b) == 5
        assert not legs_a & legs_b
        assert len(combined.seed_codes) == 1

    def test_conflicting_seed_names(self):
        a = TensorNetworkCode.from_code(SimpleCode("seed", [[3, 3]], [[1, 1], [3, 0]]))
        b = TensorNetworkCode.from_code(SimpleCode("seed", [[1, 1]], [[3, 3], [1, 0]]))
        with pytest.raises(ValueError):
            combine(a, b)

    def test_mixed_types(self):
        with pytest.raises(TypeError):
            combine(_make_five(), steane_code())


# ============================================================================
# Fusion
# ============================================================================

class TestFusion:
    """Pairwise qubit fusion."""

    def test_self_contraction_of_five_qubit_codes(self):
        five = _make_five()
        code = contract(five, five, [(0, 0), (2, 2)])
        assert (code.n, code.k) == (6, 2)
        assert verify_code(code)

    def test_contract_matches_fusion_of_combination(self):
        contracted = contract(_make_five(), _make_steane(), [(0, 1), (1, 6)])
        fused = fusion(combine(_make_five(), _make_steane()), [(0, 6), (1, 11)])
        assert contracted.stabilizers == fused.stabilizers
        assert contracted.logicals == fused.logicals
        assert (contracted.n, contracted.k) == (8, 2)
        assert verify_code(contracted)

    def test_sequential_fusion_agrees(self):
        combined = combine(five_qubit_code(), steane_code())
        one_shot = fusion(combined, [(0, 6), (1, 11)])
        stepwise = fusion(fusion(combined, [(0, 6)]), [(0, 9)])
        assert one_shot.stabilizers == stepwise.stabilizers
        assert one_shot.pure_errors == stepwise.pure_errors

    def test_single_pair_argument(self):
        combined = combine(five_qubit_code(), steane_code())
        assert fusion(combined, (0, 6)).stabilizers == fusion(combined, [(0, 6)]).stabilizers

    def test_input_untouched(self):
        combined = combine(five_qubit_code(), steane_code())
        before = combined.stabilizers
        fusion(combined, [(0, 6)])
        assert combined.stabilizers == before

    def test_fusing_a_logical_raises(self):
        code = SimpleCode("ZZ code", [[3, 3]], [[1, 1], [3, 0]])
        with pytest.raises(FusionError):
            fusion(code, (0, 1))

    @pytest.mark.parametrize("pairs", [[(0, 0)], [(0, 12)], [(0, 6), (0, 7)]])
    def test_invalid_pairs(self, pairs):
        combined = combine(five_qubit_code(), steane_code())
        with pytest.raises(ValueError):
            fusion(combined, pairs)

    def test_update_qubit_pairs(self):
        assert _update_qubit_pairs([(0, 6), (1, 11)]) == [(0, 6), (0, 9)]
        assert _update_qubit_pairs([(4, 2), (5, 0), (3, 1)]) == [(4, 2), (3, 0), (1, 0)]


# ============================================================================
# Graph side of fusion
# ============================================================================

class TestFusionGraph:
    """CodeGraph updates mirrored by fusion."""

    def test_bond_between_seeds(self):
        code = contract(_make_five(), _make_steane(), [(0, 1), (1, 6)])
        graph = code.code_graph
        assert graph.physical_nodes() == list(range(1, 9))
        bond = make_edge(-1, -2)
        assert graph.edge_type(bond) == "bond"
        bond_indices = graph.edge_index_list(bond)
        assert len(bond_indices) == 2
        assert all(index_tag(ix) == "bond" for ix in bond_indices)
        for node in (-1, -2):
            assert set(bond_indices) <= set(graph.node_index_list(node))

    def test_labels_follow_qubits(self):
        code = contract(_make_five(), _make_steane(), [(0, 1), (1, 6)])
        graph = code.code_graph
        assert graph.physical_neighbours(-1) == [1, 2, 3]
        assert graph.physical_neighbours(-2) == [4, 5, 6, 7, 8]
        # every remaining physical leg still appears in its seed's index list
        for node in (-1, -2):
            for q in graph.physical_neighbours(node):
                (ix,) = graph.edge_index_list(make_edge(node, q))
                assert ix in graph.node_index_list(node)

    def test_self_contraction_warns(self):
        with pytest.warns(RuntimeWarning, match="Self contraction"):
            code = fusion(_make_five(), (0, 1))
        assert code.n == 3
        assert code.code_graph.physical_nodes() == [1, 2, 3]
        assert all(code.code_graph.edge_type(e) == "physical" for e in code.code_graph.edges())


# ============================================================================
# Contraction by coordinates
# ============================================================================

class TestContractByCoords:
    """Coincident qubits are fused."""

    def test_coincident_qubits(self):
        five, steane = _make_positioned_pair()
        by_coords = contract_by_coords(five, steane)
        explicit = contract(five, steane, [(0, 1), (1, 6)])
        assert by_coords.stabilizers == explicit.stabilizers
        assert by_coords.n == 8
        assert verify_code(by_coords)

    def test_no_coincident_qubits(self):
        five, steane = _make_positioned_pair()
        far = steane.shift_coords((100, 100))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            code = contract_by_coords(five, far)
        assert code.n == 12
        assert code.code_graph.virtual_nodes() == [-1, -2]
