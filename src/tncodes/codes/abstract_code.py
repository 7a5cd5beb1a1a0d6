# src/tncodes/codes/abstract_code.py
"""
Common base class for stabilizer codes.

Class Hierarchy:
    QuantumCode - stabilizers, logicals and pure errors as Pauli tuples
    ├── SimpleCode - a standalone stabilizer code
    └── TensorNetworkCode - a code plus the tensor network it was glued from

Key Design Principles:
1. Operators are immutable tuples of integer symbols (I=0, X=1, Y=2, Z=3)
2. Logicals are stored in X/Z pairs, one pair per logical qubit
3. pure_errors[i] is the destabilizer of stabilizers[i]
4. Symplectic views are derived on demand for simulation adapters
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np

from tncodes.pauli import PauliOp, pauli_rep_change, paulis_to_symplectic

PauliString = Dict[int, str]  # e.g. {0: 'X', 3: 'Z'} means X on qubit0, Z on qubit3


class InvalidCodeError(Exception):
    """Raised when a set of operators cannot form a valid stabilizer code."""


def normalize_operators(operators: Sequence[Sequence[int]]) -> Tuple[PauliOp, ...]:
    """Convert any nested integer sequence into a tuple of Pauli tuples."""
    return tuple(tuple(int(a) for a in op) for op in operators)


def _to_pauli_string(op: Sequence[int]) -> PauliString:
    return {q: pauli_rep_change(int(a)) for q, a in enumerate(op) if int(a) != 0}


class QuantumCode:
    """
    Stabilizer code base.

    Subclasses provide the three operator lists as attributes (normally
    dataclass fields); everything else (qubit counts, symplectic matrices,
    logical Pauli strings) is derived here.
    """

    stabilizers: Tuple[PauliOp, ...]
    logicals: Tuple[PauliOp, ...]
    pure_errors: Tuple[PauliOp, ...]

    @property
    def n(self) -> int:
        """Number of physical qubits (0 for the empty code)."""
        for ops in (self.stabilizers, self.logicals, self.pure_errors):
            if len(ops) > 0:
                return len(ops[0])
        return 0

    @property
    def k(self) -> int:
        """Number of logical qubits."""
        return len(self.logicals) // 2

    @property
    def r(self) -> int:
        """Number of stabilizer generators."""
        return len(self.stabilizers)

    @property
    def logical_xs(self) -> Tuple[PauliOp, ...]:
        return tuple(self.logicals[0::2])

    @property
    def logical_zs(self) -> Tuple[PauliOp, ...]:
        return tuple(self.logicals[1::2])

    @property
    def stabilizer_matrix(self) -> np.ndarray:
        """Stabilizers in symplectic form, shape (r, 2n)."""
        return paulis_to_symplectic(self.stabilizers, self.n)

    @property
    def logical_x_matrix(self) -> np.ndarray:
        return paulis_to_symplectic(self.logical_xs, self.n)

    @property
    def logical_z_matrix(self) -> np.ndarray:
        return paulis_to_symplectic(self.logical_zs, self.n)

    @property
    def logical_x_ops(self) -> List[PauliString]:
        return [_to_pauli_string(op) for op in self.logical_xs]

    @property
    def logical_z_ops(self) -> List[PauliString]:
        return [_to_pauli_string(op) for op in self.logical_zs]

    def __repr__(self) -> str:
        name = getattr(self, "name", "")
        return f"{type(self).__name__}(name={name!r}, n={self.n}, k={self.k})"
