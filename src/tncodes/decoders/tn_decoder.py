# src/tncodes/decoders/tn_decoder.py
"""
Maximum-likelihood coset decoding by tensor network contraction.

For a code whose seeds form an L x L grid (virtual node ``-(L*i + j + 1)``
at row ``i``, column ``j``) the decoder attaches depolarizing weights,
taken relative to the pure error of the syndrome, to every physical leg and
contracts the network down to the single open logical leg. The result is
the (unnormalised) probability of each of the four logical cosets; the
most likely coset fixes the correction.

Two contraction strategies are provided:
- basic_contract: exact contraction of the whole network
- mps_contract: row-by-row boundary contraction with every horizontal
  bond truncated to a maximum bond dimension

The compare_code_success_* helpers sweep error probabilities for two codes
of the same size under identical sampled errors.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
import quimb.tensor as qtn

from tncodes.codes.simple_code import find_pure_error, find_syndrome
from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.decoders.base import Decoder
from tncodes.decoders.simple import is_logical_failure
from tncodes.graph.code_graph import new_index
from tncodes.pauli import PauliOp, pauli_product, pauli_product_pow, random_pauli_operator
from tncodes.tensors import (
    contract_to_array,
    create_virtual_tensor,
    physical_index,
    physical_tensor,
)

logger = logging.getLogger(__name__)

TensorGrid = List[List[qtn.Tensor]]
ContractFn = Callable[[TensorGrid, Sequence[str]], np.ndarray]


class TNDecoderIncompatibleError(Exception):
    """Raised when a code cannot be decoded by the grid tensor network decoder."""


# ============================================================================
# Contraction strategies
# ============================================================================

def basic_contract() -> ContractFn:
    """Exact contraction of the full grid."""
    def contract(grid: TensorGrid, output_inds: Sequence[str]) -> np.ndarray:
        tn = qtn.TensorNetwork([t for row in grid for t in row])
        result = tn.contract(output_inds=list(output_inds))
        return contract_to_array(result, output_inds)

    return contract


def _right_canonicalize(mps: List[qtn.Tensor]) -> List[qtn.Tensor]:
    """
    Right-to-left sweep leaving every site but the first a right isometry.

    Each site is split, untruncated, across the legs it shares with its
    left neighbour; the non-isometric factor is absorbed into that
    neighbour. Several shared legs are fused into one bond on the way.
    """
    mps = list(mps)
    for j in range(len(mps) - 1, 0, -1):
        shared = [ix for ix in mps[j].inds if ix in mps[j - 1].inds]
        if not shared or len(shared) == mps[j].ndim:
            continue
        factor, isometry = mps[j].split(
            shared,
            max_bond=None,
            cutoff=0.0,
            absorb="left",
            get="tensors",
            bond_ind=new_index("bond"),
        )
        mps[j - 1] = mps[j - 1] @ factor
        mps[j] = isometry
    return mps


def _compress_row(mps: List[qtn.Tensor], bond_dim: int) -> List[qtn.Tensor]:
    """
    Truncate the bonds of a boundary MPS to ``bond_dim``.

    The MPS is first brought to right-canonical form so that each
    truncating split in the left-to-right sweep acts on the orthogonality
    centre and discards the smallest singular values of the whole state.
    """
    mps = _right_canonicalize(mps)
    for j in range(len(mps) - 1):
        merged = mps[j] @ mps[j + 1]
        left_inds = [ix for ix in mps[j].inds if ix not in mps[j + 1].inds]
        left, right = merged.split(
            left_inds,
            max_bond=bond_dim,
            cutoff=0.0,
            absorb="right",
            get="tensors",
            bond_ind=new_index("bond"),
        )
        mps[j], mps[j + 1] = left, right
    return mps


def mps_contract(bond_dim: int) -> ContractFn:
    """
    Boundary-MPS contraction with bonds truncated to ``bond_dim``.

    The first row is the initial boundary; each middle row is absorbed
    column by column and the boundary is then compressed. The last row is
    contracted exactly with the final boundary.
    """
    if bond_dim <= 0:
        raise ValueError(f"Bond dimension must be positive, got {bond_dim}")
    exact = basic_contract()

    def contract(grid: TensorGrid, output_inds: Sequence[str]) -> np.ndarray:
        if len(grid) == 1:
            return exact(grid, output_inds)
        mps = list(grid[0])
        for row in grid[1:-1]:
            mps = [boundary @ tensor for boundary, tensor in zip(mps, row)]
            mps = _compress_row(mps, bond_dim)
        tn = qtn.TensorNetwork(mps + list(grid[-1]))
        result = tn.contract(output_inds=list(output_inds))
        return contract_to_array(result, output_inds)

    return contract


# ============================================================================
# Decoding
# ============================================================================

def _grid_size(code: TensorNetworkCode) -> int:
    if not isinstance(code, TensorNetworkCode):
        raise TNDecoderIncompatibleError("Only tensor network codes can be decoded")
    L = math.isqrt(code.n)
    if L * L != code.n or len(code.code_graph.virtual_nodes()) != code.n:
        raise TNDecoderIncompatibleError(
            f"Code with {code.n} qubits and {len(code.code_graph.virtual_nodes())} "
            f"seeds is not an L x L grid with one qubit per seed"
        )
    return L


def _build_grid(
    code: TensorNetworkCode,
    L: int,
    pure_error: PauliOp,
    error_probability: float,
) -> Tuple[TensorGrid, List[str]]:
    graph = code.code_graph
    grid: TensorGrid = []
    logical_inds: List[str] = []
    for i in range(L):
        row = []
        for j in range(L):
            node = -(L * i + j + 1)
            tensor, logical = create_virtual_tensor(code, node)
            logical_inds.extend(logical)
            for qubit in graph.physical_neighbours(node):
                leg = physical_tensor(
                    physical_index(code, node, qubit),
                    error_probability,
                    pure_error[qubit - 1],
                )
                tensor = tensor @ leg
            row.append(tensor)
        grid.append(row)
    return grid, logical_inds


def tn_coset_probabilities(
    code: TensorNetworkCode,
    syndrome: Sequence[int],
    error_probability: float,
    contract_fn: Optional[ContractFn] = None,
) -> np.ndarray:
    """
    Normalised probabilities of the I, X, Y, Z logical cosets given ``syndrome``.

    Raises
    ------
    TNDecoderIncompatibleError
        If the code is not an L x L grid or does not have exactly four
        logical cosets.
    """
    if not 0.0 <= error_probability <= 1.0:
        raise ValueError(f"Error probability must lie in [0, 1], got {error_probability}")
    L = _grid_size(code)
    contract_fn = contract_fn if contract_fn is not None else basic_contract()

    pure_error = find_pure_error(code, syndrome)
    grid, logical_inds = _build_grid(code, L, pure_error, error_probability)
    if len(logical_inds) != 1:
        raise TNDecoderIncompatibleError(
            f"Decoder needs exactly 4 logical cosets, code has {4 ** len(logical_inds)}"
        )

    weights = np.abs(contract_fn(grid, logical_inds)).reshape(-1)
    logger.debug("Coset weights for syndrome %s: %s", list(syndrome), weights)
    total = weights.sum()
    if total == 0:
        raise ValueError("All cosets have zero probability; check the error probability")
    return weights / total


def tn_decode(
    code: TensorNetworkCode,
    syndrome: Sequence[int],
    error_probability: float,
    contract_fn: Optional[ContractFn] = None,
) -> Tuple[PauliOp, float]:
    """
    Most likely recovery operator for ``syndrome``.

    Returns
    -------
    correction : PauliOp
        Pure error of the syndrome times the most likely logical.
    success_probability : float
        Probability of the chosen coset.
    """
    probabilities = tn_coset_probabilities(code, syndrome, error_probability, contract_fn)
    best = int(np.argmax(probabilities))
    powers = (int(best in (1, 2)), int(best in (2, 3)))
    logical = pauli_product_pow(code.logicals, powers)
    correction = pauli_product(logical, find_pure_error(code, syndrome))
    return correction, float(probabilities[best])


@dataclass
class TNDecoder(Decoder):
    """
    Tensor network decoder bound to one code and noise strength.

    Parameters
    ----------
    code : TensorNetworkCode
        L x L grid code with a single logical qubit.
    error_probability : float
        Depolarizing probability per qubit.
    bond_dim : int, optional
        Use boundary-MPS contraction with this bond dimension; exact
        contraction when omitted.
    """

    code: TensorNetworkCode
    error_probability: float
    bond_dim: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.error_probability <= 1.0:
            raise ValueError(
                f"Error probability must lie in [0, 1], got {self.error_probability}"
            )
        _grid_size(self.code)
        if self.code.k != 1:
            raise TNDecoderIncompatibleError(
                f"TNDecoder supports one logical qubit, code has k={self.code.k}"
            )
        self._contract_fn = (
            basic_contract() if self.bond_dim is None else mps_contract(self.bond_dim)
        )

    def decode(self, syndrome: Sequence[int]) -> PauliOp:
        correction, _ = tn_decode(
            self.code, syndrome, self.error_probability, self._contract_fn
        )
        return correction

    def success_probability(self, syndrome: Sequence[int]) -> float:
        _, probability = tn_decode(
            self.code, syndrome, self.error_probability, self._contract_fn
        )
        return probability


# ============================================================================
# Code comparison
# ============================================================================

def _check_same_size(code1: TensorNetworkCode, code2: TensorNetworkCode) -> None:
    if code1.n != code2.n:
        raise ValueError(f"Codes have different sizes: {code1.n} and {code2.n} qubits")


def compare_code_success_empirical(
    code1: TensorNetworkCode,
    code2: TensorNetworkCode,
    probabilities: Sequence[float],
    num_samples: int,
    bond_dim: int = 10,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Empirical success rates of two codes under the same sampled errors.

    ``code1`` is decoded by exact contraction and ``code2`` by boundary-MPS
    contraction with ``bond_dim``. Each sampled error is applied to both
    codes.

    Returns
    -------
    (rates1, rates2) : tuple of np.ndarray
        Fraction of successful decodings per error probability.
    """
    _check_same_size(code1, code2)
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")
    rng = rng if rng is not None else np.random.default_rng()
    exact, approx = basic_contract(), mps_contract(bond_dim)

    rates1 = np.zeros(len(probabilities))
    rates2 = np.zeros(len(probabilities))
    for alpha, p in enumerate(probabilities):
        for _ in range(num_samples):
            error = random_pauli_operator(code1.n, p, rng)
            for code, contract_fn, rates in ((code1, exact, rates1), (code2, approx, rates2)):
                correction, _ = tn_decode(code, find_syndrome(code, error), p, contract_fn)
                if not is_logical_failure(code, error, correction):
                    rates[alpha] += 1
        logger.debug(
            "p=%s: success %d/%d vs %d/%d",
            p, rates1[alpha], num_samples, rates2[alpha], num_samples,
        )
    return rates1 / num_samples, rates2 / num_samples


def compare_code_success_predicted(
    code1: TensorNetworkCode,
    code2: TensorNetworkCode,
    probabilities: Sequence[float],
    num_samples: int,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Mean predicted success probabilities of two codes with standard errors.

    For every sampled error the probability of the coset chosen by exact
    decoding is recorded for each code; these are averaged per error
    probability.

    Returns
    -------
    (mean1, stderr1, mean2, stderr2) : tuple of np.ndarray
    """
    _check_same_size(code1, code2)
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")
    rng = rng if rng is not None else np.random.default_rng()
    ddof = 1 if num_samples > 1 else 0

    results = np.zeros((4, len(probabilities)))
    for alpha, p in enumerate(probabilities):
        data = np.zeros((2, num_samples))
        for beta in range(num_samples):
            error = random_pauli_operator(code1.n, p, rng)
            for c, code in enumerate((code1, code2)):
                _, data[c, beta] = tn_decode(code, find_syndrome(code, error), p)
        results[0::2, alpha] = data.mean(axis=1)
        results[1::2, alpha] = data.std(axis=1, ddof=ddof) / math.sqrt(num_samples)
    mean1, stderr1, mean2, stderr2 = results
    return mean1, stderr1, mean2, stderr2
