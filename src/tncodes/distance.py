# src/tncodes/distance.py
"""
Weight enumerators and code distance by tensor network contraction.

Each seed tensor is closed on its logical legs (identity coset for the
stabilizer enumerator, all cosets for the normalizer enumerator) and
multiplied by a tensor that counts the non-identity symbols on its physical
legs. Addition tensors chain these counts into a single weight index, so
contracting the network yields the number of operators of each weight.
The distance is the lowest weight at which the normalizer has more
operators than the stabilizer group.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import quimb.tensor as qtn

from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.graph.code_graph import new_index
from tncodes.tensors import (
    all_cosets,
    contract_to_array,
    create_virtual_tensor,
    identity_coset,
    physical_index,
)


@dataclass
class OperatorWeights:
    """
    Weight distributions of a code.

    Attributes
    ----------
    stabilizer_weights : np.ndarray
        Number of stabilizer-group elements of each weight.
    all_operator_weights : np.ndarray
        Number of normalizer elements (stabilizers times logicals) of each
        weight.
    distance : int
        First weight with a non-trivial logical; 0 if none was found
        within the enumerated range.
    """

    stabilizer_weights: np.ndarray
    all_operator_weights: np.ndarray
    distance: int = field(init=False)

    def __post_init__(self) -> None:
        self.stabilizer_weights = np.asarray(self.stabilizer_weights, dtype=np.int64)
        self.all_operator_weights = np.asarray(self.all_operator_weights, dtype=np.int64)
        logical_counts = self.all_operator_weights - self.stabilizer_weights
        nonzero = np.flatnonzero(logical_counts > 0)
        self.distance = int(nonzero[0]) if len(nonzero) else 0


def _weight_counter(indices: List[str], weight_ind: str) -> qtn.Tensor:
    """``W[s_1..s_m, w] = 1`` when exactly ``w`` of the ``s_i`` are non-identity."""
    m = len(indices)
    data = np.zeros((4,) * m + (m + 1,))
    for symbols in itertools.product(range(4), repeat=m):
        data[symbols + (sum(1 for s in symbols if s != 0),)] = 1.0
    return qtn.Tensor(data, inds=tuple(indices) + (weight_ind,))


def _adder(a: str, da: int, b: str, db: int, c: str, dc: int) -> qtn.Tensor:
    """``A[x, y, z] = 1`` when ``x + y == z``, with ``z`` truncated to ``dc`` values."""
    data = np.zeros((da, db, dc))
    for x in range(da):
        for y in range(db):
            if x + y < dc:
                data[x, y, x + y] = 1.0
    return qtn.Tensor(data, inds=(a, b, c))


def _enumerator(code: TensorNetworkCode, truncate_to: int, stabilizers_only: bool) -> np.ndarray:
    graph = code.code_graph
    tensors: List[qtn.Tensor] = []
    total_ind: Optional[str] = None
    total_dim = 0

    for node in graph.virtual_nodes():
        tensor, logical = create_virtual_tensor(code, node)
        tensor = identity_coset(tensor, logical) if stabilizers_only else all_cosets(tensor, logical)
        tensors.append(tensor)

        qubits = graph.physical_neighbours(node)
        if not qubits:
            continue
        weight_ind = new_index("weight")
        tensors.append(
            _weight_counter([physical_index(code, node, q) for q in qubits], weight_ind)
        )
        dim = len(qubits) + 1
        if total_ind is None:
            total_ind, total_dim = weight_ind, dim
            continue
        summed = new_index("weight")
        summed_dim = min(total_dim + dim - 1, truncate_to)
        tensors.append(_adder(total_ind, total_dim, weight_ind, dim, summed, summed_dim))
        total_ind, total_dim = summed, summed_dim

    if total_ind is None:
        raise ValueError("Code has no physical qubits to enumerate")
    result = qtn.TensorNetwork(tensors).contract(output_inds=[total_ind])
    counts = np.rint(np.real(contract_to_array(result, [total_ind]))).astype(np.int64)
    padded = np.zeros(truncate_to, dtype=np.int64)
    padded[:min(len(counts), truncate_to)] = counts[:truncate_to]
    return padded


def tn_operator_weights(
    code: TensorNetworkCode,
    truncate_to: Optional[int] = None,
) -> OperatorWeights:
    """
    Stabilizer and normalizer weight enumerators of ``code``.

    Parameters
    ----------
    code : TensorNetworkCode
        Code whose graph has no self-contractions.
    truncate_to : int, optional
        Number of weights to keep (0 up to ``truncate_to - 1``); all
        ``n + 1`` weights by default.
    """
    truncate_to = code.n + 1 if truncate_to is None else truncate_to
    if truncate_to < 1:
        raise ValueError(f"truncate_to must be positive, got {truncate_to}")
    return OperatorWeights(
        _enumerator(code, truncate_to, stabilizers_only=True),
        _enumerator(code, truncate_to, stabilizers_only=False),
    )


def tn_distance(code: TensorNetworkCode, truncate_to: Optional[int] = None) -> int:
    """Code distance from the weight enumerators; 0 if no logical was found."""
    return tn_operator_weights(code, truncate_to).distance
