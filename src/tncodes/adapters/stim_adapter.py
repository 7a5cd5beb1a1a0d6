# src/tncodes/adapters/stim_adapter.py
"""
Conversions between tncodes operators and stim objects.

stim uses the same integer encoding for Paulis (0=I, 1=X, 2=Y, 3=Z), so
operators map one-to-one onto ``stim.PauliString`` up to sign.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import stim

from tncodes.codes.abstract_code import QuantumCode
from tncodes.codes.simple_code import purify_code
from tncodes.pauli import PauliOp, pauli_to_string


def pauli_to_stim(op: Sequence[int]) -> stim.PauliString:
    """``(1, 3, 3, 1, 0)`` -> ``stim.PauliString("+XZZX_")``."""
    return stim.PauliString(pauli_to_string(op))


def stim_to_pauli(pauli_string: stim.PauliString) -> PauliOp:
    """Drop the sign of a stim Pauli string."""
    return tuple(int(pauli_string[q]) for q in range(len(pauli_string)))


def code_to_stim_stabilizers(code: QuantumCode) -> List[stim.PauliString]:
    return [pauli_to_stim(s) for s in code.stabilizers]


def stim_syndrome(code: QuantumCode, error: Sequence[int]) -> Tuple[int, ...]:
    """Syndrome of ``error`` computed with stim's commutation check."""
    err = pauli_to_stim(error)
    return tuple(0 if err.commutes(s) else 1 for s in code_to_stim_stabilizers(code))


def code_to_tableau(code: QuantumCode) -> stim.Tableau:
    """
    Tableau preparing the purified code state from |0...0>.

    The first ``k`` qubits are the reference qubits added by purification,
    so the tableau encodes logical qubit ``i`` maximally entangled with
    reference qubit ``i``.
    """
    purified = purify_code(code)
    return stim.Tableau.from_stabilizers(
        [pauli_to_stim(s) for s in purified.stabilizers],
        allow_redundant=False,
        allow_underconstrained=False,
    )
