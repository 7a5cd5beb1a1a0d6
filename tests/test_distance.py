"""
Tests for tensor-network weight enumerators and distances.

Validates that:
1. Single seeds reproduce their known weight enumerators.
2. Contracted networks reproduce the enumerators of the glued code.
3. Distances agree with the brute-force search.
"""
import numpy as np
import pytest

from tncodes.codes import (
    TensorNetworkCode,
    find_distance_logicals,
    five_qubit_code,
    rotated_surface_code,
    steane_code,
)
from tncodes.distance import OperatorWeights, tn_distance, tn_operator_weights
from tncodes.graph.surgery import contract


def _make_self_contracted(seed):
    code = TensorNetworkCode.from_code(seed)
    return contract(code, code, [(0, 0), (2, 2)])


class TestOperatorWeights:
    """The dataclass derives the distance."""

    def test_distance(self):
        weights = OperatorWeights([1, 0, 0, 0, 15, 0], [1, 0, 0, 30, 15, 18])
        assert weights.distance == 3

    def test_no_logical(self):
        weights = OperatorWeights([1, 0, 3], [1, 0, 3])
        assert weights.distance == 0


class TestSeedEnumerators:
    """Single-seed networks."""

    def test_five_qubit_code(self):
        weights = tn_operator_weights(TensorNetworkCode.from_code(five_qubit_code()))
        np.testing.assert_array_equal(weights.stabilizer_weights, [1, 0, 0, 0, 15, 0])
        np.testing.assert_array_equal(weights.all_operator_weights, [1, 0, 0, 30, 15, 18])
        assert weights.distance == 3

    def test_steane_matches_brute_force(self):
        code = TensorNetworkCode.from_code(steane_code())
        distance, _ = find_distance_logicals(steane_code())
        assert tn_distance(code) == distance == 3

    def test_truncation(self):
        weights = tn_operator_weights(TensorNetworkCode.from_code(five_qubit_code()), truncate_to=3)
        assert len(weights.all_operator_weights) == 3
        assert weights.distance == 0

    def test_invalid_truncation(self):
        with pytest.raises(ValueError):
            tn_operator_weights(TensorNetworkCode.from_code(five_qubit_code()), truncate_to=0)


class TestContractedEnumerators:
    """Networks of several seeds."""

    def test_five_qubit_self_contraction(self):
        weights = tn_operator_weights(_make_self_contracted(five_qubit_code()))
        np.testing.assert_array_equal(weights.stabilizer_weights, [1, 0, 0, 0, 9, 0, 6])
        np.testing.assert_array_equal(weights.all_operator_weights, [1, 0, 9, 24, 99, 72, 51])
        assert weights.distance == 2

    def test_enumerator_totals(self):
        code = _make_self_contracted(five_qubit_code())
        weights = tn_operator_weights(code)
        assert weights.stabilizer_weights.sum() == 2 ** code.r
        assert weights.all_operator_weights.sum() == 2 ** code.r * 4 ** code.k

    def test_steane_self_contraction(self):
        assert tn_distance(_make_self_contracted(steane_code())) == 2

    @pytest.mark.slow
    def test_rotated_surface_code(self):
        assert tn_distance(rotated_surface_code(3)) == 3
