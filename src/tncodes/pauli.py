# src/tncodes/pauli.py
"""
Pauli operator algebra on integer symbols.

Single-qubit Paulis are encoded as integers ``I=0, X=1, Y=2, Z=3`` and an
n-qubit operator is a tuple of such symbols. Phases are ignored throughout,
so the algebra is that of the Pauli group modulo phase (equivalently the
binary symplectic space of dimension 2n).

This module provides:
- Symbol and operator products, commutation, powers and weights
- Folded products over lists of operators
- Commutation and linear-independence tests for operator sets
- Conversions to strings and to binary symplectic vectors
- Sampling of depolarizing errors
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

PauliOp = Tuple[int, ...]
PauliLike = Union[int, Sequence[int], np.ndarray]

PAULI_CHARS = "IXYZ"
PAULI_SYMBOLS = (0, 1, 2, 3)


# ============================================================================
# Single symbol and elementwise operations
# ============================================================================

def _check_symbol(a: int) -> int:
    a = int(a)
    if a not in PAULI_SYMBOLS:
        raise ValueError(f"Invalid Pauli symbol {a!r}; expected one of 0, 1, 2, 3")
    return a


def _symbol_product(a: int, b: int) -> int:
    if a == b:
        return 0
    if a == 0 or b == 0:
        return a + b
    return 6 - (a + b)


def _symbol_commutation(a: int, b: int) -> int:
    if a == 0 or b == 0 or a == b:
        return 0
    return 1


def _is_symbol(a: PauliLike) -> bool:
    return isinstance(a, (int, np.integer))


def as_pauli(op: Iterable[int]) -> PauliOp:
    """Normalise an integer sequence into an immutable Pauli operator."""
    return tuple(_check_symbol(a) for a in op)


def pauli_product(a: PauliLike, b: PauliLike) -> Union[int, PauliOp]:
    """
    Product of two Paulis, ignoring phase.

    Symbols multiply as I*P = P, P*P = I and two distinct non-identity
    symbols give the third one. Sequences are multiplied elementwise and
    must have equal length.

    Examples
    --------
    >>> pauli_product(1, 3)
    2
    >>> pauli_product((1, 0, 3), (1, 2, 0))
    (0, 2, 3)
    """
    if _is_symbol(a) and _is_symbol(b):
        return _symbol_product(_check_symbol(a), _check_symbol(b))
    if len(a) != len(b):
        raise ValueError(
            f"Cannot multiply operators of different lengths {len(a)} and {len(b)}"
        )
    return tuple(_symbol_product(_check_symbol(x), _check_symbol(y)) for x, y in zip(a, b))


def pauli_commutation(a: PauliLike, b: PauliLike) -> int:
    """
    Commutation of two Paulis: 0 if they commute, 1 if they anticommute.

    For operators this is the parity of the number of qubits on which the
    two symbols anticommute. Empty operators commute.
    """
    if _is_symbol(a) and _is_symbol(b):
        return _symbol_commutation(_check_symbol(a), _check_symbol(b))
    if len(a) != len(b):
        raise ValueError(
            f"Cannot compare operators of different lengths {len(a)} and {len(b)}"
        )
    return sum(_symbol_commutation(int(x), int(y)) for x, y in zip(a, b)) % 2


def pauli_pow(a: PauliLike, power: int) -> Union[int, PauliOp]:
    """Raise a Pauli to an integer power: ``a`` for odd powers, identity for even."""
    odd = int(power) % 2 == 1
    if _is_symbol(a):
        return _check_symbol(a) if odd else 0
    return as_pauli(a) if odd else tuple(0 for _ in a)


def pauli_weight(op: Sequence[int]) -> int:
    """Number of qubits on which ``op`` acts non-trivially."""
    return sum(1 for a in op if int(a) != 0)


def pauli_identity(n: int) -> PauliOp:
    return (0,) * n


def pauli_delta(n: int, qubit: int, pauli: int) -> PauliOp:
    """Operator that is ``pauli`` on ``qubit`` and identity elsewhere."""
    op = [0] * n
    op[qubit] = _check_symbol(pauli)
    return tuple(op)


# ============================================================================
# Operations on lists of operators
# ============================================================================

def pauli_product_list(operators: Sequence[Sequence[int]]) -> PauliOp:
    """Left fold of :func:`pauli_product` over a non-empty list of operators."""
    if len(operators) == 0:
        raise ValueError("Cannot take the product of an empty list of operators")
    result = as_pauli(operators[0])
    for op in operators[1:]:
        result = pauli_product(result, op)
    return result


def pauli_product_pow(
    operators: Sequence[Sequence[int]],
    powers: Sequence[int],
) -> PauliOp:
    """
    Product of ``operators[i] ** powers[i]`` folded left.

    Only the parity of each power matters. The fold runs over the shorter
    of the two inputs.
    """
    m = min(len(operators), len(powers))
    if m == 0:
        raise ValueError("Cannot take the product of an empty list of operators")
    result = pauli_pow(operators[0], powers[0])
    for op, power in zip(operators[1:m], powers[1:m]):
        result = pauli_product(result, pauli_pow(op, power))
    return result


def pauli_are_commuting(operators: Sequence[Sequence[int]]) -> bool:
    """True when every pair of operators in the list commutes."""
    for i, a in enumerate(operators):
        for b in operators[i + 1:]:
            if pauli_commutation(a, b) == 1:
                return False
    return True


def _find_pivots(
    operators: Sequence[PauliOp],
    qubit: int,
) -> Tuple[List[int], List[int]]:
    """
    Scan ``operators`` for up to two pivots on ``qubit``.

    A pivot is an operator whose symbol on ``qubit`` is non-identity and not
    yet covered by an earlier pivot. Returns the pivot positions and the
    symbols that remain uncovered.
    """
    paulis = [1, 2, 3]
    indices: List[int] = []
    for i, op in enumerate(operators):
        if op[qubit] in paulis:
            paulis.remove(op[qubit])
            indices.append(i)
        if len(paulis) == 1:
            break
    return indices, paulis


def _eliminate_qubit(
    operators: Sequence[PauliOp],
    qubit: int,
    pivots: Sequence[PauliOp],
) -> List[PauliOp]:
    """Clear ``qubit`` on every operator using products of the pivots."""
    candidates: List[PauliOp] = [pivot for pivot in pivots]
    if len(pivots) == 2:
        candidates.append(pauli_product(pivots[0], pivots[1]))

    cleared = []
    for op in operators:
        if op[qubit] != 0:
            for candidate in candidates:
                product = pauli_product(op, candidate)
                if product[qubit] == 0:
                    op = product
                    break
            else:
                raise ValueError(f"Could not clear qubit {qubit} of operator {op}")
        cleared.append(op)
    return cleared


def _pivot_sweep(operators: Sequence[Sequence[int]]):
    """
    Per-qubit Gaussian elimination over the group generated by ``operators``.

    Yields ``(qubit, pivot_ops, uncovered_symbols, remaining)`` for each qubit,
    where ``remaining`` holds the non-pivot operators after the qubit has
    been cleared from them.
    """
    remaining = [as_pauli(op) for op in operators]
    n = len(remaining[0]) if remaining else 0
    for qubit in range(n):
        if not remaining:
            return
        indices, paulis = _find_pivots(remaining, qubit)
        pivots = [remaining[i] for i in indices]
        rest = [op for i, op in enumerate(remaining) if i not in indices]
        remaining = _eliminate_qubit(rest, qubit, pivots)
        yield qubit, pivots, paulis, remaining


def pauli_are_independent(operators: Sequence[Sequence[int]]) -> bool:
    """
    True when no operator is a product of a subset of the others.

    Qubits are processed left to right. On each qubit up to two pivots
    with distinct symbols are selected and used to clear that qubit from
    every other operator; the set is dependent as soon as a remaining
    operator becomes the identity.
    """
    if len(operators) == 0:
        return True
    if any(pauli_weight(op) == 0 for op in operators):
        return False
    for _, _, _, remaining in _pivot_sweep(operators):
        if any(pauli_weight(op) == 0 for op in remaining):
            return False
    return True


# ============================================================================
# Representation changes
# ============================================================================

def pauli_rep_change(p: Union[int, str]) -> Union[int, str]:
    """Convert between the integer and character forms of a single Pauli."""
    if isinstance(p, str):
        if p not in PAULI_CHARS or len(p) != 1:
            raise ValueError(f"Invalid Pauli character {p!r}")
        return PAULI_CHARS.index(p)
    return PAULI_CHARS[_check_symbol(p)]


def pauli_from_string(s: str) -> PauliOp:
    """``"XZZXI"`` -> ``(1, 3, 3, 1, 0)``."""
    return tuple(pauli_rep_change(c) for c in s.upper())


def pauli_to_string(op: Sequence[int]) -> str:
    """``(1, 3, 3, 1, 0)`` -> ``"XZZXI"``."""
    return "".join(pauli_rep_change(int(a)) for a in op)


def pauli_to_symplectic(op: Sequence[int]) -> np.ndarray:
    """
    Convert an operator to its binary symplectic vector.

    Parameters
    ----------
    op : Sequence[int]
        Operator of length n.

    Returns
    -------
    np.ndarray
        Vector of length 2n: [x_0, ..., x_{n-1}, z_0, ..., z_{n-1}].
    """
    arr = np.asarray(op, dtype=np.uint8)
    x = np.isin(arr, (1, 2)).astype(np.uint8)
    z = np.isin(arr, (2, 3)).astype(np.uint8)
    return np.concatenate([x, z])


def symplectic_to_pauli(vec: np.ndarray) -> PauliOp:
    """Inverse of :func:`pauli_to_symplectic`."""
    vec = np.asarray(vec, dtype=np.uint8) % 2
    n = len(vec) // 2
    lookup = np.array([0, 1, 3, 2])
    return tuple(int(a) for a in lookup[vec[:n] + 2 * vec[n:]])


def paulis_to_symplectic(operators: Sequence[Sequence[int]], n: int) -> np.ndarray:
    """Stack operators into a symplectic matrix of shape ``(len(operators), 2n)``."""
    if len(operators) == 0:
        return np.zeros((0, 2 * n), dtype=np.uint8)
    return np.array([pauli_to_symplectic(op) for op in operators], dtype=np.uint8)


# ============================================================================
# Noise
# ============================================================================

def random_pauli_operator(
    n: int,
    p: float,
    rng: Optional[np.random.Generator] = None,
) -> PauliOp:
    """
    Sample an n-qubit depolarizing error.

    Each qubit independently carries I with probability ``1 - p`` and each
    of X, Y, Z with probability ``p / 3``.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Error probability must lie in [0, 1], got {p}")
    rng = rng if rng is not None else np.random.default_rng()
    draws = rng.choice(4, size=n, p=[1.0 - p, p / 3, p / 3, p / 3])
    return tuple(int(a) for a in draws)
