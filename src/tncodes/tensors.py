# src/tncodes/tensors.py
"""
Seed codes as tensors.

A code with ``n`` physical and ``k`` logical qubits becomes a rank ``n + k``
tensor of dimension 4 per leg: entry ``T[l_1..l_k, p_1..p_n]`` is 1 when the
Pauli ``l (x) p`` belongs to the stabilizer group of the purified code and 0
otherwise. Logical legs come first. Contracting seed tensors along fused
legs gives the tensor of the glued code, which is what the decoder and the
weight enumerators evaluate.

Labelled tensors are ``quimb.tensor.Tensor`` objects whose index names come
from the CodeGraph.
"""
from __future__ import annotations

import functools
import itertools
from typing import List, Sequence, Tuple, Union

import numpy as np
import quimb.tensor as qtn

from tncodes.codes.abstract_code import QuantumCode
from tncodes.codes.simple_code import SimpleCode, purify_code
from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.graph.code_graph import make_edge, new_index
from tncodes.pauli import pauli_product_pow


@functools.lru_cache(maxsize=128)
def _coset_indicator(code: SimpleCode) -> np.ndarray:
    purified = purify_code(code)
    m = purified.n
    data = np.zeros((4,) * m, dtype=float)
    for powers in itertools.product((0, 1), repeat=len(purified.stabilizers)):
        data[pauli_product_pow(purified.stabilizers, powers)] = 1.0
    data.flags.writeable = False
    return data


def code_to_tensor(code: QuantumCode) -> np.ndarray:
    """Dense coset-indicator tensor of ``code``, shape ``(4,) * (n + k)``."""
    if code.n == 0:
        raise ValueError("Cannot build the tensor of an empty code")
    seed = code if isinstance(code, SimpleCode) else SimpleCode.from_code(code)
    return _coset_indicator(seed).copy()


def code_to_labelled_tensor(
    code: QuantumCode,
    logical_indices: Sequence[str],
    physical_indices: Sequence[str],
) -> qtn.Tensor:
    """:func:`code_to_tensor` with named legs, logical legs first."""
    if len(logical_indices) != code.k:
        raise ValueError(f"Expected {code.k} logical indices, got {len(logical_indices)}")
    if len(physical_indices) != code.n:
        raise ValueError(f"Expected {code.n} physical indices, got {len(physical_indices)}")
    return qtn.Tensor(
        code_to_tensor(code), inds=tuple(logical_indices) + tuple(physical_indices)
    )


def identity_coset(tensor: qtn.Tensor, logical_indices: Sequence[str]) -> qtn.Tensor:
    """Project every logical leg onto the identity: the stabilizer group itself."""
    return _close_logical_legs(tensor, logical_indices, np.array([1.0, 0.0, 0.0, 0.0]))


def all_cosets(tensor: qtn.Tensor, logical_indices: Sequence[str]) -> qtn.Tensor:
    """Sum over every logical leg: all logical cosets of the stabilizer group."""
    return _close_logical_legs(tensor, logical_indices, np.ones(4))


def _close_logical_legs(
    tensor: qtn.Tensor,
    logical_indices: Sequence[str],
    vector: np.ndarray,
) -> qtn.Tensor:
    if not logical_indices:
        return tensor
    caps = [qtn.Tensor(vector, inds=(ix,)) for ix in logical_indices]
    output = [ix for ix in tensor.inds if ix not in logical_indices]
    return qtn.tensor_contract(tensor, *caps, output_inds=output, preserve_tensor=True)


def physical_tensor(index: str, error_probability: float, pauli: int) -> qtn.Tensor:
    """
    Depolarizing weights on one physical leg, relative to a reference error.

    The entry at ``pauli`` (the reference Pauli on this qubit) is
    ``1 - p``; the three others are ``p / 3``.
    """
    data = np.full(4, error_probability / 3)
    data[pauli] = 1 - error_probability
    return qtn.Tensor(data, inds=(index,))


def physical_index(code: TensorNetworkCode, node: int, qubit: int) -> str:
    """Index on the leg joining virtual ``node`` to physical label ``qubit``."""
    return code.code_graph.edge_index_list(make_edge(node, qubit))[0]


def create_virtual_tensor(
    code: TensorNetworkCode,
    node: int,
) -> Tuple[qtn.Tensor, List[str]]:
    """
    Tensor of the seed code at virtual ``node`` with its graph indices.

    Logical legs get fresh indices, returned alongside the tensor.
    """
    seed = code.seed_code_at(node)
    logical = [new_index("logical") for _ in range(seed.k)]
    tensor = code_to_labelled_tensor(seed, logical, code.code_graph.node_index_list(node))
    return tensor, logical


def contract_to_array(
    result: Union[qtn.Tensor, float, complex],
    output_inds: Sequence[str],
) -> np.ndarray:
    """Dense data of a contraction result with legs in ``output_inds`` order."""
    if isinstance(result, qtn.Tensor):
        if output_inds:
            result = result.transpose(*output_inds)
        return np.asarray(result.data)
    return np.asarray(result)
