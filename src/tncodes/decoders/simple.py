# src/tncodes/decoders/simple.py
"""
Reference decoders and a Monte Carlo driver.

Decoders here are plain functions ``decoder(code, syndrome, p)`` returning
a correction; ``tn_decode`` fits the same shape once its success
probability is dropped (see :func:`monte_carlo_simulation`).
"""
from __future__ import annotations

import itertools
import logging
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from tncodes.codes.abstract_code import QuantumCode
from tncodes.codes.simple_code import find_pure_error, find_syndrome
from tncodes.pauli import (
    PauliOp,
    pauli_commutation,
    pauli_identity,
    pauli_product,
    paulis_to_symplectic,
    random_pauli_operator,
)

logger = logging.getLogger(__name__)

DecoderFn = Callable[[QuantumCode, Sequence[int], float], Union[PauliOp, Tuple[PauliOp, float]]]


def do_nothing_decoder(
    code: QuantumCode,
    syndrome: Sequence[int],
    error_probability: float = 0.0,
) -> PauliOp:
    """Return the pure error of the syndrome without guessing a logical."""
    return find_pure_error(code, syndrome)


def min_weight_brute_force(
    code: QuantumCode,
    syndrome: Sequence[int],
    error_probability: float = 0.0,
) -> PauliOp:
    """Lowest-weight operator with the given syndrome, by exhaustive search."""
    n = code.n
    target = np.asarray(syndrome, dtype=np.int64)
    if not target.any():
        return pauli_identity(n)
    stab_matrix = paulis_to_symplectic(code.stabilizers, n).astype(np.int64)

    for weight in range(1, n + 1):
        symbols = np.array(list(itertools.product((1, 2, 3), repeat=weight)), dtype=np.uint8)
        for support in itertools.combinations(range(n), weight):
            ops = np.zeros((len(symbols), n), dtype=np.uint8)
            ops[:, list(support)] = symbols
            x = np.isin(ops, (1, 2)).astype(np.int64)
            z = np.isin(ops, (2, 3)).astype(np.int64)
            syndromes = (x @ stab_matrix[:, n:].T + z @ stab_matrix[:, :n].T) % 2
            matches = np.flatnonzero((syndromes == target).all(axis=1))
            if len(matches):
                return tuple(int(a) for a in ops[matches[0]])
    raise ValueError(f"No operator has syndrome {list(syndrome)}")


def is_logical_failure(code: QuantumCode, error: Sequence[int], correction: Sequence[int]) -> bool:
    """True when ``correction`` leaves a non-trivial logical or a syndrome behind."""
    residual = pauli_product(error, correction)
    if any(find_syndrome(code, residual)):
        return True
    return any(pauli_commutation(residual, logical) for logical in code.logicals)


def monte_carlo_simulation(
    code: QuantumCode,
    probabilities: Sequence[float],
    num_samples: int,
    decoder: DecoderFn,
    rng: Optional[np.random.Generator] = None,
) -> List[float]:
    """
    Estimate the logical success rate of ``decoder`` under depolarizing noise.

    Parameters
    ----------
    code : QuantumCode
        Code to simulate.
    probabilities : sequence of float
        Physical error probabilities to sweep.
    num_samples : int
        Samples per probability.
    decoder : callable
        ``decoder(code, syndrome, p)`` returning a correction, or a
        ``(correction, probability)`` tuple as :func:`tn_decode` does.
    rng : np.random.Generator, optional
        Source of randomness.

    Returns
    -------
    List[float]
        Fraction of successful decodings for each probability.
    """
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")
    rng = rng if rng is not None else np.random.default_rng()
    rates: List[float] = []
    for p in probabilities:
        successes = 0
        for _ in range(num_samples):
            error = random_pauli_operator(code.n, p, rng)
            correction = decoder(code, find_syndrome(code, error), p)
            if isinstance(correction, tuple) and len(correction) == 2 and isinstance(correction[0], tuple):
                correction = correction[0]
            if not is_logical_failure(code, error, correction):
                successes += 1
        rates.append(successes / num_samples)
        logger.debug("p=%s: success rate %s over %d samples", p, rates[-1], num_samples)
    return rates
