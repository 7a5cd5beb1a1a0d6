# src/tncodes/codes/small.py
"""
Small seed codes and random stabilizer codes.

Includes:
- five_qubit_code: [[5,1,3]] perfect code
- five_qubit_surface_code: [[5,1,2]] surface-code fragment used as a bulk seed
- steane_code: [[7,1,3]] Steane code
- random_stabilizer_state / random_code: uniformly drawn generators
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np

from tncodes.codes.simple_code import SimpleCode, find_pure_errors
from tncodes.pauli import (
    PauliOp,
    pauli_are_independent,
    pauli_commutation,
    pauli_product,
    pauli_weight,
)


def five_qubit_code() -> SimpleCode:
    """[[5,1,3]] perfect code with stabilizers generated by XZZXI."""
    return SimpleCode(
        "Five qubit code",
        stabilizers=[
            [1, 3, 3, 1, 0],
            [0, 1, 3, 3, 1],
            [1, 0, 1, 3, 3],
            [3, 1, 0, 1, 3],
        ],
        logicals=[[1, 1, 1, 1, 1], [3, 3, 3, 3, 3]],
        pure_errors=[
            [0, 1, 0, 0, 0],
            [0, 0, 0, 0, 3],
            [0, 0, 3, 0, 0],
            [1, 0, 0, 0, 0],
        ],
    )


def five_qubit_surface_code() -> SimpleCode:
    """Distance-2 surface-code patch with the centre qubit shared by all checks."""
    return SimpleCode(
        "Five qubit surface code",
        stabilizers=[
            [1, 1, 1, 0, 0],
            [0, 0, 1, 1, 1],
            [3, 0, 3, 3, 0],
            [0, 3, 3, 0, 3],
        ],
        logicals=[[1, 0, 0, 1, 0], [3, 3, 0, 0, 0]],
        pure_errors=[
            [3, 0, 0, 0, 0],
            [0, 0, 0, 3, 0],
            [1, 0, 0, 0, 0],
            [0, 1, 0, 0, 0],
        ],
    )


def steane_code() -> SimpleCode:
    return SimpleCode(
        "Steane code",
        stabilizers=[
            [1, 0, 0, 1, 0, 1, 1],
            [0, 1, 0, 1, 1, 0, 1],
            [0, 0, 1, 0, 1, 1, 1],
            [3, 0, 0, 3, 0, 3, 3],
            [0, 3, 0, 3, 3, 0, 3],
            [0, 0, 3, 0, 3, 3, 3],
        ],
        logicals=[[1] * 7, [3] * 7],
        pure_errors=[
            [3, 0, 0, 0, 0, 0, 0],
            [0, 3, 0, 0, 0, 0, 0],
            [0, 0, 3, 0, 0, 0, 0],
            [1, 0, 0, 0, 0, 0, 0],
            [0, 1, 0, 0, 0, 0, 0],
            [0, 0, 1, 0, 0, 0, 0],
        ],
    )


# =============================================================================
# Random codes
# =============================================================================

def _random_generators(n: int, rng: np.random.Generator) -> List[PauliOp]:
    """Draw n independent commuting operators, rejecting bad draws."""
    generators: List[PauliOp] = []
    while len(generators) < n:
        candidate = tuple(int(a) for a in rng.integers(0, 4, size=n))
        if pauli_weight(candidate) == 0:
            continue
        if any(pauli_commutation(candidate, g) for g in generators):
            continue
        if not pauli_are_independent(generators + [candidate]):
            continue
        generators.append(candidate)
    return generators


def random_stabilizer_state(
    n: int,
    rng: Optional[np.random.Generator] = None,
) -> SimpleCode:
    """Random [[n,0]] code (a stabilizer state) with derived pure errors."""
    if n < 1:
        raise ValueError(f"A stabilizer state needs at least one qubit, got n={n}")
    rng = rng if rng is not None else np.random.default_rng()
    return SimpleCode(f"Random [[{n},0]] state", _random_generators(n, rng), ())


def random_code(
    n: int,
    k: int,
    rng: Optional[np.random.Generator] = None,
) -> SimpleCode:
    """
    Random [[n,k]] stabilizer code.

    A random stabilizer state is drawn and ``k`` of its generators are
    demoted to logical X operators, with their pure errors (made mutually
    commuting) serving as the logical Z partners.

    Parameters
    ----------
    n : int
        Number of physical qubits.
    k : int
        Number of logical qubits, ``0 <= k <= n``.
    rng : np.random.Generator, optional
        Source of randomness; a fresh generator is used when omitted.
    """
    if not 0 <= k <= n:
        raise ValueError(f"Need 0 <= k <= n, got n={n}, k={k}")
    state = random_stabilizer_state(n, rng)
    stabilizers = list(state.stabilizers)
    partners = list(find_pure_errors(stabilizers))

    chosen = list(range(n - k, n))
    for a, i in enumerate(chosen):
        for j in chosen[:a]:
            if pauli_commutation(partners[i], partners[j]):
                partners[i] = pauli_product(partners[i], stabilizers[j])

    logicals: List[PauliOp] = []
    for i in chosen:
        logicals.extend([stabilizers[i], partners[i]])
    return SimpleCode(f"Random [[{n},{k}]] code", stabilizers[:n - k], logicals)
