# src/tncodes/codes/simple_code.py
"""
Standalone stabilizer codes and the transforms defined on them.

This module provides:
- SimpleCode: an immutable (name, stabilizers, logicals, pure_errors) record
- Pure-error (destabilizer) derivation from stabilizer generators
- Syndrome extraction and syndrome-to-pure-error lookup
- Code validation
- Gauge, permute and purify transforms
- Brute-force distance search for small codes

Qubit and logical-qubit indices are 0-based throughout.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from tncodes.codes.abstract_code import (
    InvalidCodeError,
    QuantumCode,
    normalize_operators,
)
from tncodes.pauli import (
    PAULI_CHARS,
    PauliOp,
    _pivot_sweep,
    pauli_are_commuting,
    pauli_are_independent,
    pauli_commutation,
    pauli_delta,
    pauli_identity,
    pauli_product,
    pauli_product_list,
    pauli_product_pow,
    paulis_to_symplectic,
)

logger = logging.getLogger(__name__)


class DistanceSearchError(Exception):
    """Raised when the brute-force distance search exceeds its weight limit."""


@dataclass(frozen=True, repr=False)
class SimpleCode(QuantumCode):
    """
    A stabilizer code given directly by its operators.

    Parameters
    ----------
    name : str
        Human-readable label; also used as the seed-code key in tensor
        network codes.
    stabilizers : sequence of Pauli operators
        Independent, pairwise commuting generators.
    logicals : sequence of Pauli operators
        Logical operators in X/Z pairs, one pair per logical qubit.
    pure_errors : sequence of Pauli operators, optional
        Destabilizers; derived with :func:`find_pure_errors` when omitted.
    """

    name: str = ""
    stabilizers: Tuple[PauliOp, ...] = ()
    logicals: Tuple[PauliOp, ...] = ()
    pure_errors: Optional[Tuple[PauliOp, ...]] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stabilizers", normalize_operators(self.stabilizers))
        object.__setattr__(self, "logicals", normalize_operators(self.logicals))
        if self.pure_errors is None:
            pure_errors = find_pure_errors(self.stabilizers)
        else:
            pure_errors = normalize_operators(self.pure_errors)
        object.__setattr__(self, "pure_errors", pure_errors)

    @classmethod
    def empty(cls) -> "SimpleCode":
        return cls("", (), (), ())

    @classmethod
    def from_code(cls, code: QuantumCode, name: str = "") -> "SimpleCode":
        """Drop any structure beyond the operators of ``code``."""
        return cls(name, code.stabilizers, code.logicals, code.pure_errors)


# ============================================================================
# Pure errors
# ============================================================================

def _find_pure_errors_disordered(stabilizers: Sequence[PauliOp]) -> List[PauliOp]:
    """
    One single-qubit pure-error candidate per independent stabilizer.

    Each pivot found by the qubit sweep contributes a delta operator on the
    pivot qubit that anticommutes with exactly one of the pivots on that
    qubit. The candidates are not yet matched to stabilizer order.
    """
    if len(stabilizers) == 0:
        return []
    n = len(stabilizers[0])
    pure_errors: List[PauliOp] = []
    for qubit, pivots, paulis, _ in _pivot_sweep(stabilizers):
        if len(pivots) == 2:
            pure_errors.append(pauli_delta(n, qubit, pivots[-1][qubit]))
            pure_errors.append(pauli_delta(n, qubit, pivots[-2][qubit]))
        elif len(pivots) == 1:
            pure_errors.append(pauli_delta(n, qubit, paulis[0]))
    return pure_errors


def _fix_pure_errors(
    stabilizers: Sequence[PauliOp],
    pure_errors: Sequence[PauliOp],
) -> Tuple[PauliOp, ...]:
    """
    Reorder and multiply ``pure_errors`` into destabilizers of ``stabilizers``.

    After the pass ``pure_errors[a]`` anticommutes with ``stabilizers[a]``
    and commutes with every other stabilizer.

    Raises
    ------
    InvalidCodeError
        If fewer than ``len(stabilizers)`` matches exist, which happens when
        the stabilizers are dependent.
    """
    fixed = [tuple(pe) for pe in pure_errors]
    r = len(stabilizers)
    successes = 0
    for alpha in range(r):
        stab = stabilizers[alpha]
        match = None
        for beta in range(alpha, len(fixed)):
            if pauli_commutation(fixed[beta], stab) == 1:
                match = beta
                break
        if match is None:
            continue
        fixed[alpha], fixed[match] = fixed[match], fixed[alpha]
        successes += 1
        for gamma in range(len(fixed)):
            if gamma != alpha and pauli_commutation(fixed[gamma], stab) == 1:
                fixed[gamma] = pauli_product(fixed[gamma], fixed[alpha])

    if successes < r:
        raise InvalidCodeError(
            f"Only {successes} of {r} pure errors could be matched; "
            f"the stabilizers are not independent"
        )
    return tuple(fixed[:r])


def find_pure_errors(stabilizers: Sequence[Sequence[int]]) -> Tuple[PauliOp, ...]:
    """
    Derive destabilizers for a list of stabilizer generators.

    Examples
    --------
    >>> find_pure_errors([(1, 3, 3, 1, 0), (0, 1, 3, 3, 1),
    ...                   (1, 0, 1, 3, 3), (3, 1, 0, 1, 3)])
    ((0, 1, 0, 0, 0), (1, 3, 0, 0, 0), (3, 1, 0, 0, 0), (1, 0, 0, 0, 0))
    """
    stabilizers = normalize_operators(stabilizers)
    disordered = _find_pure_errors_disordered(stabilizers)
    return _fix_pure_errors(stabilizers, disordered)


# ============================================================================
# Syndromes
# ============================================================================

def find_syndrome(code: QuantumCode, error: Sequence[int]) -> Tuple[int, ...]:
    """Commutation of ``error`` with each stabilizer, in stabilizer order."""
    if len(error) != code.n:
        raise ValueError(f"Error acts on {len(error)} qubits, code has {code.n}")
    return tuple(pauli_commutation(error, s) for s in code.stabilizers)


def find_pure_error(code: QuantumCode, syndrome: Sequence[int]) -> PauliOp:
    """Product of the pure errors selected by ``syndrome``."""
    if len(syndrome) != code.r:
        raise ValueError(
            f"Syndrome has {len(syndrome)} bits, code has {code.r} stabilizers"
        )
    if code.r == 0:
        return pauli_identity(code.n)
    return pauli_product_pow(code.pure_errors, syndrome)


# ============================================================================
# Validation
# ============================================================================

def verify_code(code: QuantumCode, log_warn: bool = True) -> bool:
    """
    Check every stabilizer-code invariant of ``code``.

    The first failing check is reported through the module logger when
    ``log_warn`` is set.
    """
    def fail(message: str) -> bool:
        if log_warn:
            logger.warning("Invalid code %r: %s", getattr(code, "name", ""), message)
        return False

    stabilizers, logicals, pure_errors = code.stabilizers, code.logicals, code.pure_errors
    r = len(stabilizers)

    if len(pure_errors) != r:
        return fail(f"{len(pure_errors)} pure errors for {r} stabilizers")
    if 2 * code.n != 2 * r + len(logicals):
        return fail(f"n={code.n} does not equal r + k = {r} + {len(logicals) / 2}")
    if not pauli_are_independent(stabilizers):
        return fail("stabilizers are not independent")
    if not pauli_are_commuting(stabilizers):
        return fail("stabilizers do not commute")
    for i, (stab, pe) in enumerate(zip(stabilizers, pure_errors)):
        if pauli_commutation(stab, pe) != 1:
            return fail(f"pure error {i} does not anticommute with its stabilizer")
    for i, pe in enumerate(pure_errors):
        for j, stab in enumerate(stabilizers):
            if i != j and pauli_commutation(stab, pe) != 0:
                return fail(f"pure error {i} anticommutes with stabilizer {j}")
    for i, logical in enumerate(logicals):
        for stab in stabilizers:
            if pauli_commutation(stab, logical) != 0:
                return fail(f"logical {i} anticommutes with a stabilizer")
    return True


# ============================================================================
# Transforms
# ============================================================================

# Powers of the (X, Z) logical pair producing the gauged stabilizer and its
# pure error, indexed by the gauged Pauli symbol.
_GAUGE_STABILIZER_POWERS = ((0, 0), (1, 0), (1, 1), (0, 1))
_GAUGE_PURE_ERROR_POWERS = ((0, 0), (1, 1), (0, 1), (1, 1))


def gauge_code(code: QuantumCode, logical_qubit: int, logical_pauli: int) -> SimpleCode:
    """
    Fix logical qubit ``logical_qubit`` into the ``logical_pauli`` eigenstate.

    The chosen logical is appended as a stabilizer with a matching pure
    error and the remaining logical pairs are kept in order.

    Raises
    ------
    IndexError
        If ``logical_qubit`` is not a logical qubit of ``code``.
    ValueError
        If ``logical_pauli`` is not one of X, Y, Z.
    """
    if not 0 <= logical_qubit < code.k:
        raise IndexError(f"Logical qubit {logical_qubit} out of range for k={code.k}")
    if logical_pauli not in (1, 2, 3):
        raise ValueError(f"Can only gauge X, Y or Z, got {logical_pauli}")

    pair = code.logicals[2 * logical_qubit:2 * logical_qubit + 2]
    logicals = code.logicals[:2 * logical_qubit] + code.logicals[2 * logical_qubit + 2:]
    stabilizers = code.stabilizers + (
        pauli_product_pow(pair, _GAUGE_STABILIZER_POWERS[logical_pauli]),
    )
    pure_errors = code.pure_errors + (
        pauli_product_pow(pair, _GAUGE_PURE_ERROR_POWERS[logical_pauli]),
    )
    name = f"{logical_qubit}/{PAULI_CHARS[logical_pauli]} gauged {getattr(code, 'name', '')}"
    return SimpleCode(name, stabilizers, logicals, _fix_pure_errors(stabilizers, pure_errors))


def permute_code(code: QuantumCode, permutation: Sequence[int]) -> SimpleCode:
    """Reorder qubits so that new qubit ``i`` is old qubit ``permutation[i]``."""
    permutation = [int(p) for p in permutation]
    if sorted(permutation) != list(range(code.n)):
        raise ValueError(f"{permutation} is not a permutation of {code.n} qubits")

    def permute(ops):
        return tuple(tuple(op[p] for p in permutation) for op in ops)

    return SimpleCode(
        f"{getattr(code, 'name', '')} {permutation}",
        permute(code.stabilizers),
        permute(code.logicals),
        permute(code.pure_errors),
    )


def purify_code(code: QuantumCode) -> SimpleCode:
    """
    Turn ``code`` into a stabilizer state on ``n + k`` qubits.

    One leading qubit is added per logical qubit and each logical is
    promoted to a stabilizer entangled with its new qubit.
    """
    k = code.k
    pad = (0,) * k

    stabilizers = [pad + s for s in code.stabilizers]
    pure_errors = [pad + pe for pe in code.pure_errors]
    for alpha, logical in enumerate(code.logicals):
        extra = list(pad)
        partner = list(pad)
        if alpha % 2 == 0:
            extra[alpha // 2], partner[alpha // 2] = 1, 3
        else:
            extra[alpha // 2], partner[alpha // 2] = 3, 1
        stabilizers.append(tuple(extra) + logical)
        pure_errors.append(tuple(partner) + (0,) * code.n)

    return SimpleCode(
        f"Purified {getattr(code, 'name', '')}",
        stabilizers,
        (),
        _fix_pure_errors(stabilizers, pure_errors),
    )


# ============================================================================
# Distance
# ============================================================================

def _symplectic_commutation(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Pairwise commutation matrix of two stacks of symplectic vectors."""
    n = a.shape[1] // 2
    return (a[:, :n].astype(np.int64) @ b[:, n:].T + a[:, n:].astype(np.int64) @ b[:, :n].T) % 2


def find_distance_logicals(
    code: QuantumCode,
    max_distance: int = 5,
) -> Tuple[int, List[PauliOp]]:
    """
    Brute-force the code distance and the minimum-weight logical operators.

    Operators are enumerated by increasing weight; those commuting with
    every stabilizer while anticommuting with some logical are non-trivial
    logical operators.

    Returns
    -------
    distance : int
        Weight of the lightest non-trivial logical.
    logicals : List[PauliOp]
        All non-trivial logicals of that weight.

    Raises
    ------
    DistanceSearchError
        If no logical of weight up to ``max_distance`` exists.
    """
    if code.k == 0:
        raise ValueError("A code without logical qubits has no distance")
    n = code.n
    stab_matrix = paulis_to_symplectic(code.stabilizers, n)
    logical_matrix = paulis_to_symplectic(code.logicals, n)
    assignments = {}

    for weight in range(1, min(max_distance, n) + 1):
        if weight not in assignments:
            assignments[weight] = np.array(
                list(itertools.product((1, 2, 3), repeat=weight)), dtype=np.uint8
            )
        symbols = assignments[weight]
        found: List[PauliOp] = []
        for support in itertools.combinations(range(n), weight):
            ops = np.zeros((len(symbols), n), dtype=np.uint8)
            ops[:, list(support)] = symbols
            sym = np.concatenate(
                [np.isin(ops, (1, 2)), np.isin(ops, (2, 3))], axis=1
            ).astype(np.uint8)
            commutes = ~_symplectic_commutation(sym, stab_matrix).any(axis=1)
            nontrivial = _symplectic_commutation(sym, logical_matrix).any(axis=1)
            for row in ops[commutes & nontrivial]:
                found.append(tuple(int(a) for a in row))
        if found:
            return weight, found

    raise DistanceSearchError(
        f"No logical operator of weight <= {max_distance} found for {code!r}"
    )


def _find_product_indices(
    operators: Sequence[PauliOp],
    target: Sequence[int],
) -> Optional[List[int]]:
    """
    Smallest set of indices whose operators multiply to ``target``.

    Returns ``None`` when ``target`` is not in the group generated by
    ``operators``.
    """
    target = tuple(target)
    if all(a == 0 for a in target):
        return []
    for size in range(1, len(operators) + 1):
        for subset in itertools.combinations(range(len(operators)), size):
            if pauli_product_list([operators[i] for i in subset]) == target:
                return list(subset)
    return None


def in_stabilizer_group(code: QuantumCode, operator: Sequence[int]) -> bool:
    """True when ``operator`` is a product of stabilizers (up to phase)."""
    if any(pauli_commutation(operator, s) for s in code.stabilizers):
        return False
    if any(pauli_commutation(operator, lg) for lg in code.logicals):
        return False
    return _find_product_indices(code.stabilizers, operator) is not None
