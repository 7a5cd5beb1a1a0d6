"""
Tests for tensor network decoding.

Validates that:
1. Exact and boundary-MPS contraction return corrections consistent with
   the syndrome and a probability in [0, 1].
2. With a generous bond dimension MPS contraction matches exact
   contraction.
3. Single-qubit errors on the distance-3 rotated code are corrected.
4. Truncated boundary contraction stays close to exact contraction on the
   distance-5 rotated code.
5. Incompatible codes and parameters are rejected.
6. Two codes can be compared under identical sampled errors.
"""
import numpy as np
import pytest
import quimb.tensor as qtn

from tncodes.codes import (
    TensorNetworkCode,
    find_syndrome,
    five_qubit_code,
    rotated_surface_code,
)
from tncodes.decoders import (
    TNDecoder,
    TNDecoderIncompatibleError,
    basic_contract,
    compare_code_success_empirical,
    compare_code_success_predicted,
    do_nothing_decoder,
    min_weight_brute_force,
    monte_carlo_simulation,
    mps_contract,
    tn_coset_probabilities,
    tn_decode,
)
from tncodes.decoders.simple import is_logical_failure
from tncodes.decoders.tn_decoder import _right_canonicalize
from tncodes.pauli import pauli_delta, pauli_product


@pytest.fixture(scope="module")
def rotated_code():
    return rotated_surface_code(3)


@pytest.fixture(scope="module")
def rotated_code_5():
    return rotated_surface_code(5)


# ============================================================================
# tn_decode
# ============================================================================

class TestTNDecode:
    """Functional decoding interface."""

    @pytest.mark.parametrize("contract_fn", [basic_contract(), mps_contract(8)],
                             ids=["basic", "mps"])
    def test_correction_matches_syndrome(self, rotated_code, contract_fn):
        error = (1, 0, 0, 0, 3, 0, 0, 2, 0)
        syndrome = find_syndrome(rotated_code, error)
        correction, probability = tn_decode(rotated_code, syndrome, 0.2, contract_fn)
        assert find_syndrome(rotated_code, correction) == syndrome
        assert 0.0 <= probability <= 1.0

    def test_mps_converges_to_exact(self, rotated_code):
        error = (0, 2, 0, 0, 0, 1, 0, 0, 3)
        syndrome = find_syndrome(rotated_code, error)
        exact = tn_coset_probabilities(rotated_code, syndrome, 0.1, basic_contract())
        approx = tn_coset_probabilities(rotated_code, syndrome, 0.1, mps_contract(256))
        np.testing.assert_allclose(approx, exact, rtol=1e-8, atol=1e-12)
        assert exact.sum() == pytest.approx(1.0)

    @pytest.mark.parametrize("qubit", range(9))
    @pytest.mark.parametrize("pauli", [1, 2, 3])
    def test_single_errors_corrected(self, rotated_code, qubit, pauli):
        error = pauli_delta(9, qubit, pauli)
        correction, _ = tn_decode(rotated_code, find_syndrome(rotated_code, error), 0.05)
        assert not is_logical_failure(rotated_code, error, correction)

    def test_trivial_syndrome(self, rotated_code):
        correction, probability = tn_decode(rotated_code, (0,) * 8, 0.01)
        assert correction == (0,) * 9
        assert probability > 0.5


class TestIncompatibleCodes:
    """Scope checks."""

    def test_non_square(self):
        code = TensorNetworkCode.from_code(five_qubit_code())
        with pytest.raises(TNDecoderIncompatibleError):
            tn_decode(code, (0, 0, 0, 0), 0.1)

    def test_plain_code(self):
        with pytest.raises(TNDecoderIncompatibleError):
            tn_decode(five_qubit_code(), (0, 0, 0, 0), 0.1)

    def test_bad_probability(self, rotated_code):
        with pytest.raises(ValueError):
            tn_decode(rotated_code, (0,) * 8, 1.5)

    def test_bad_bond_dimension(self):
        with pytest.raises(ValueError):
            mps_contract(0)


# ============================================================================
# TNDecoder
# ============================================================================

class TestTNDecoder:
    """Dataclass decoder."""

    def test_decode_batch(self, rotated_code):
        decoder = TNDecoder(rotated_code, 0.1, bond_dim=16)
        errors = [pauli_delta(9, 4, 1), pauli_delta(9, 0, 3)]
        syndromes = np.array([find_syndrome(rotated_code, e) for e in errors])
        corrections = decoder.decode_batch(syndromes)
        assert corrections.shape == (2, 9)
        for error, correction in zip(errors, corrections):
            assert not is_logical_failure(rotated_code, error, tuple(int(a) for a in correction))

    def test_success_probability(self, rotated_code):
        decoder = TNDecoder(rotated_code, 0.1)
        assert 0.25 <= decoder.success_probability((0,) * 8) <= 1.0

    def test_invalid_configuration(self, rotated_code):
        with pytest.raises(ValueError):
            TNDecoder(rotated_code, -0.1)
        with pytest.raises(TNDecoderIncompatibleError):
            TNDecoder(TensorNetworkCode.from_code(five_qubit_code()), 0.1)


# ============================================================================
# Reference decoders and Monte Carlo
# ============================================================================

class TestReferenceDecoders:
    """Brute-force and baseline decoders."""

    def test_min_weight_single_error(self):
        code = five_qubit_code()
        syndrome = find_syndrome(code, (1, 0, 0, 0, 0))
        assert min_weight_brute_force(code, syndrome) == (1, 0, 0, 0, 0)

    def test_min_weight_trivial(self):
        assert min_weight_brute_force(five_qubit_code(), (0, 0, 0, 0)) == (0,) * 5

    def test_do_nothing_matches_syndrome(self):
        code = five_qubit_code()
        syndrome = (1, 0, 1, 1)
        assert find_syndrome(code, do_nothing_decoder(code, syndrome)) == syndrome

    def test_monte_carlo_noiseless(self):
        rng = np.random.default_rng(3)
        rates = monte_carlo_simulation(five_qubit_code(), [0.0], 20, min_weight_brute_force, rng)
        assert rates == [1.0]

    def test_monte_carlo_with_tn_decoder(self, rotated_code):
        rng = np.random.default_rng(4)
        rates = monte_carlo_simulation(rotated_code, [0.0, 0.05], 5, tn_decode, rng)
        assert rates[0] == 1.0
        assert 0.0 <= rates[1] <= 1.0

    def test_monte_carlo_invalid_samples(self):
        with pytest.raises(ValueError):
            monte_carlo_simulation(five_qubit_code(), [0.1], 0, do_nothing_decoder)


# ============================================================================
# Truncated boundary contraction
# ============================================================================

def _make_random_mps(rng):
    return [
        qtn.Tensor(rng.random((4, 3)), inds=("p0", "b01")),
        qtn.Tensor(rng.random((3, 4, 5)), inds=("b01", "p1", "b12")),
        qtn.Tensor(rng.random((5, 4)), inds=("b12", "p2")),
    ]


class TestTruncatedContraction:
    """Boundary-MPS accuracy is governed by the bond dimension."""

    def test_canonical_form_keeps_state(self):
        mps = _make_random_mps(np.random.default_rng(21))
        canonical = _right_canonicalize(mps)
        out = ["p0", "p1", "p2"]
        before = qtn.TensorNetwork(mps).contract(output_inds=out).transpose(*out).data
        after = qtn.TensorNetwork(canonical).contract(output_inds=out).transpose(*out).data
        np.testing.assert_allclose(after, before, rtol=1e-10)

    def test_sites_become_right_isometries(self):
        canonical = _right_canonicalize(_make_random_mps(np.random.default_rng(22)))
        for j in (1, 2):
            site = canonical[j]
            left = [ix for ix in site.inds if ix in canonical[j - 1].inds]
            rest = [ix for ix in site.inds if ix not in left]
            matrix = site.to_dense(left, rest)
            np.testing.assert_allclose(
                matrix @ matrix.conj().T, np.eye(matrix.shape[0]), atol=1e-10
            )

    def _two_error_syndrome(self, code):
        error = pauli_product(pauli_delta(25, 3, 1), pauli_delta(25, 17, 3))
        return find_syndrome(code, error)

    def test_moderate_bond_matches_exact(self, rotated_code_5):
        syndrome = self._two_error_syndrome(rotated_code_5)
        exact = tn_coset_probabilities(rotated_code_5, syndrome, 0.05, basic_contract())
        approx = tn_coset_probabilities(rotated_code_5, syndrome, 0.05, mps_contract(8))
        np.testing.assert_allclose(approx, exact, rtol=1e-4, atol=1e-6)

    def test_small_bond_picks_exact_coset(self, rotated_code_5):
        syndrome = self._two_error_syndrome(rotated_code_5)
        exact, _ = tn_decode(rotated_code_5, syndrome, 0.05, basic_contract())
        approx, _ = tn_decode(rotated_code_5, syndrome, 0.05, mps_contract(4))
        assert approx == exact


# ============================================================================
# Code comparison
# ============================================================================

class TestCompareCodes:
    """Side-by-side success rates of two codes."""

    def test_empirical_noiseless(self, rotated_code):
        rates1, rates2 = compare_code_success_empirical(
            rotated_code, rotated_code, [0.0], 2, bond_dim=4, rng=np.random.default_rng(8)
        )
        np.testing.assert_array_equal(rates1, [1.0])
        np.testing.assert_array_equal(rates2, [1.0])

    def test_empirical_rates_in_range(self, rotated_code):
        rates1, rates2 = compare_code_success_empirical(
            rotated_code, rotated_code, [0.05, 0.1], 3, rng=np.random.default_rng(9)
        )
        assert rates1.shape == rates2.shape == (2,)
        assert ((0.0 <= rates1) & (rates1 <= 1.0)).all()
        assert ((0.0 <= rates2) & (rates2 <= 1.0)).all()

    def test_predicted_noiseless(self, rotated_code):
        mean1, stderr1, mean2, stderr2 = compare_code_success_predicted(
            rotated_code, rotated_code, [0.0], 2, rng=np.random.default_rng(10)
        )
        np.testing.assert_allclose(mean1, [1.0])
        np.testing.assert_allclose(mean2, [1.0])
        np.testing.assert_allclose(stderr1, [0.0], atol=1e-12)
        np.testing.assert_allclose(stderr2, [0.0], atol=1e-12)

    def test_predicted_same_code_agrees(self, rotated_code):
        mean1, _, mean2, _ = compare_code_success_predicted(
            rotated_code, rotated_code, [0.1], 4, rng=np.random.default_rng(11)
        )
        np.testing.assert_allclose(mean1, mean2)
        assert 0.25 <= mean1[0] <= 1.0

    def test_size_mismatch(self, rotated_code):
        other = TensorNetworkCode.from_code(five_qubit_code())
        with pytest.raises(ValueError):
            compare_code_success_empirical(rotated_code, other, [0.1], 1)
        with pytest.raises(ValueError):
            compare_code_success_predicted(rotated_code, other, [0.1], 1)
