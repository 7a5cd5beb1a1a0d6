# src/tncodes/adapters/__init__.py
"""Adapters to external simulation libraries."""
from tncodes.adapters.stim_adapter import (
    code_to_stim_stabilizers,
    code_to_tableau,
    pauli_to_stim,
    stim_syndrome,
    stim_to_pauli,
)

__all__ = [
    "code_to_stim_stabilizers",
    "code_to_tableau",
    "pauli_to_stim",
    "stim_syndrome",
    "stim_to_pauli",
]
