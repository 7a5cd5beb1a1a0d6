# src/tncodes/graph/surgery.py
"""
Gluing codes together: combine, fusion and contraction.

``combine`` places two codes side by side. ``fusion`` removes pairs of
physical qubits of one code by simulating a joint XX/ZZ measurement on each
pair followed by discarding both qubits, which is the stabilizer-code
counterpart of contracting two tensor legs. ``contract`` and
``contract_by_coords`` compose the two.

Operator-level updates act on 0-based qubit indices. For tensor network
codes the same updates are mirrored on the CodeGraph, whose physical labels
are the qubit indices plus one.
"""
from __future__ import annotations

import logging
import warnings
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from tncodes.codes.abstract_code import QuantumCode
from tncodes.codes.simple_code import SimpleCode, find_pure_errors
from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.graph.code_graph import CodeGraph, make_edge, new_index
from tncodes.pauli import (
    PauliOp,
    pauli_are_independent,
    pauli_commutation,
    pauli_product,
    pauli_weight,
)

logger = logging.getLogger(__name__)

QubitPair = Tuple[int, int]
PairsLike = Union[QubitPair, Sequence[QubitPair]]


class FusionError(Exception):
    """Raised when a pair of qubits cannot be fused without destroying a logical."""


# ============================================================================
# Combine
# ============================================================================

def _pad_operators(ops: Sequence[PauliOp], before: int, after: int) -> List[PauliOp]:
    return [(0,) * before + tuple(op) + (0,) * after for op in ops]


def _merge_seed_codes(
    a: Dict[str, SimpleCode],
    b: Dict[str, SimpleCode],
) -> Dict[str, SimpleCode]:
    merged = dict(a)
    for name, seed in b.items():
        if name in merged and merged[name] != seed:
            raise ValueError(f"Two different seed codes share the name {name!r}")
        merged[name] = seed
    return merged


def _shares_indices(a: CodeGraph, b: CodeGraph) -> bool:
    return bool(set(a.all_indices()) & set(b.all_indices()))


def combine(a: QuantumCode, b: QuantumCode) -> QuantumCode:
    """
    Disjoint union of two codes.

    The qubits of ``b`` follow those of ``a``. For tensor network codes the
    graphs are merged with ``b``'s physical labels shifted past ``a``'s and
    its virtual labels shifted below ``a``'s; ``b`` gets fresh tensor indices
    when it is ``a`` itself or shares an index with it.
    """
    na, nb = a.n, b.n
    stabilizers = _pad_operators(a.stabilizers, 0, nb) + _pad_operators(b.stabilizers, na, 0)
    logicals = _pad_operators(a.logicals, 0, nb) + _pad_operators(b.logicals, na, 0)
    pure_errors = _pad_operators(a.pure_errors, 0, nb) + _pad_operators(b.pure_errors, na, 0)

    if isinstance(a, TensorNetworkCode) and isinstance(b, TensorNetworkCode):
        if b is a or _shares_indices(a.code_graph, b.code_graph):
            b = b.with_new_indices()
        graph_a = a.code_graph
        graph_b = b.code_graph.relabelled(
            physical_offset=len(graph_a.physical_nodes()),
            virtual_offset=len(graph_a.virtual_nodes()),
        )
        return TensorNetworkCode(
            stabilizers,
            logicals,
            pure_errors,
            code_graph=graph_a.merged(graph_b),
            seed_codes=_merge_seed_codes(a.seed_codes, b.seed_codes),
        )
    if isinstance(a, TensorNetworkCode) or isinstance(b, TensorNetworkCode):
        raise TypeError("Cannot combine a tensor network code with a plain code")
    return SimpleCode("", stabilizers, logicals, pure_errors)


# ============================================================================
# Fusion on operators
# ============================================================================

def _annoying_operators(
    stabilizers: Sequence[PauliOp],
    n: int,
    pair: QubitPair,
) -> List[PauliOp]:
    """Up to two weight-2 operators sigma x sigma on ``pair`` commuting with all stabilizers."""
    i, j = pair
    annoying: List[PauliOp] = []
    for sigma in (1, 2, 3):
        op = [0] * n
        op[i] = op[j] = sigma
        op = tuple(op)
        if all(pauli_commutation(op, s) == 0 for s in stabilizers):
            annoying.append(op)
        if len(annoying) == 2:
            break
    return annoying


def _find_useful_stabilizer_indices(
    stabilizers: Sequence[PauliOp],
    pair: QubitPair,
) -> List[int]:
    """
    Indices of up to two stabilizers that differ on the two qubits of ``pair``.

    The second one is only taken if its product with the first still
    differs on the pair, so together they can equalise any stabilizer.
    """
    i, j = pair
    useful: List[int] = []
    for index, stab in enumerate(stabilizers):
        if stab[i] == stab[j]:
            continue
        if not useful:
            useful.append(index)
            continue
        product = pauli_product(stab, stabilizers[useful[0]])
        if product[i] != product[j]:
            useful.append(index)
            break
    return useful


def _make_ready(op: PauliOp, useful: Sequence[PauliOp], pair: QubitPair) -> PauliOp:
    """Multiply ``op`` by useful stabilizers until it is equal on both qubits of ``pair``."""
    i, j = pair
    candidates = [op] + [pauli_product(op, u) for u in useful]
    if len(useful) == 2:
        candidates.append(pauli_product(pauli_product(op, useful[0]), useful[1]))
    for candidate in candidates:
        if candidate[i] == candidate[j]:
            return candidate
    raise FusionError(f"Operator {op} cannot be made symmetric on qubits {pair}")


def _remove_positions(ops: Sequence[PauliOp], pair: QubitPair) -> List[PauliOp]:
    return [tuple(a for q, a in enumerate(op) if q not in pair) for op in ops]


def _fuse_operators(
    stabilizers: Sequence[PauliOp],
    logicals: Sequence[PauliOp],
    pure_errors: Sequence[PauliOp],
    n: int,
    pair: QubitPair,
) -> Tuple[List[PauliOp], List[PauliOp], List[PauliOp]]:
    annoying = _annoying_operators(stabilizers, n, pair)
    if annoying:
        logger.debug("Fusing qubits %s: annoying operators %s", pair, annoying)
    for logical in logicals:
        if any(pauli_commutation(logical, op) for op in annoying):
            raise FusionError(
                f"Fusing qubits {pair} would measure logical operator {logical}"
            )

    useful_indices = _find_useful_stabilizer_indices(stabilizers, pair)
    useful = [stabilizers[u] for u in useful_indices]
    kept = [a for a in range(len(stabilizers)) if a not in useful_indices]

    new_stabilizers = [_make_ready(stabilizers[a], useful, pair) for a in kept]
    new_logicals = [_make_ready(lg, useful, pair) for lg in logicals]

    new_stabilizers = _remove_positions(new_stabilizers, pair)
    new_logicals = _remove_positions(new_logicals, pair)

    if len(useful) == 2:
        new_pure_errors = [_make_ready(pure_errors[a], useful, pair) for a in kept]
        return new_stabilizers, new_logicals, _remove_positions(new_pure_errors, pair)

    independent: List[PauliOp] = []
    for stab in new_stabilizers:
        if pauli_weight(stab) > 0 and pauli_are_independent(independent + [stab]):
            independent.append(stab)
    return independent, new_logicals, list(find_pure_errors(independent))


# ============================================================================
# Fusion on the graph
# ============================================================================

def _shift_keys(mapping: Dict, removed: int) -> Dict:
    """Renumber physical labels above ``removed`` down by one."""
    def move(v: int) -> int:
        return v - 1 if v > removed else v

    shifted = {}
    for key, value in mapping.items():
        if isinstance(key, frozenset):
            shifted[frozenset(move(v) for v in key)] = value
        else:
            shifted[move(key)] = value
    return shifted


def _remove_node(graph: CodeGraph, label: int) -> CodeGraph:
    """Delete a physical node and its edges, closing the gap in the labels."""
    edge_types = {e: t for e, t in graph.edge_types.items() if label not in e}
    edge_indices = {e: ix for e, ix in graph.edge_indices.items() if label not in e}
    coords = {v: xy for v, xy in graph.coords.items() if v != label}
    node_types = {v: t for v, t in graph.node_types.items() if v != label}
    return CodeGraph(
        coords=_shift_keys(coords, label),
        node_types=_shift_keys(node_types, label),
        node_indices=dict(graph.node_indices),
        edge_types=_shift_keys(edge_types, label),
        edge_indices=_shift_keys(edge_indices, label),
    )


def _fusion_graph(graph: CodeGraph, pair: QubitPair) -> CodeGraph:
    """Replace the legs of two physical nodes by a single bond between their seeds."""
    a, b = pair[0] + 1, pair[1] + 1
    edge_a, edge_b = graph.edges_of(a)[0], graph.edges_of(b)[0]
    v1 = next(iter(edge_a - {a}))
    v2 = next(iter(edge_b - {b}))

    if v1 == v2:
        warnings.warn(
            f"Self contraction occurred on node {v1}; the resulting tensor network "
            f"cannot be used for decoding or distance calculations",
            RuntimeWarning,
            stacklevel=3,
        )
    else:
        ix = new_index("bond")
        bond = make_edge(v1, v2)
        if graph.has_edge(v1, v2):
            graph = graph.with_edge_indices(bond, graph.edge_index_list(bond) + (ix,))
        else:
            graph = graph.with_edge_type(bond, "bond").with_edge_indices(bond, (ix,))
        old_a = set(graph.edge_index_list(edge_a))
        old_b = set(graph.edge_index_list(edge_b))
        graph = graph.with_node_indices(
            v1, [ix if i in old_a else i for i in graph.node_index_list(v1)]
        )
        graph = graph.with_node_indices(
            v2, [ix if i in old_b else i for i in graph.node_index_list(v2)]
        )

    for label in sorted((a, b), reverse=True):
        graph = _remove_node(graph, label)
    return graph


# ============================================================================
# Public surgery operations
# ============================================================================

def _as_pairs(qubit_pairs: PairsLike) -> List[QubitPair]:
    pairs = list(qubit_pairs)
    if len(pairs) == 2 and all(isinstance(q, (int, np.integer)) for q in pairs):
        pairs = [pairs]
    return [(int(p[0]), int(p[1])) for p in pairs]


def _validate_pairs(pairs: Sequence[QubitPair], n: int) -> None:
    used = set()
    for i, j in pairs:
        for q in (i, j):
            if not 0 <= q < n:
                raise ValueError(f"Qubit {q} out of range for a code on {n} qubits")
            if q in used:
                raise ValueError(f"Qubit {q} appears in more than one pair")
            used.add(q)
        if i == j:
            raise ValueError(f"Cannot fuse qubit {i} with itself")


def _update_qubit_pairs(pairs: Sequence[QubitPair]) -> List[QubitPair]:
    """
    Renumber pairs for sequential fusion.

    Each pair is expressed in the qubit numbering left after all earlier
    pairs have been removed.
    """
    updated: List[QubitPair] = []
    removed: List[int] = []
    for i, j in pairs:
        updated.append(
            (i - sum(1 for q in removed if q < i), j - sum(1 for q in removed if q < j))
        )
        removed.extend((i, j))
    return updated


def fusion(code: QuantumCode, qubit_pairs: PairsLike) -> QuantumCode:
    """
    Fuse pairs of physical qubits of ``code``.

    Parameters
    ----------
    code : SimpleCode or TensorNetworkCode
        The code to act on.
    qubit_pairs : pair or sequence of pairs
        0-based qubit indices in the numbering of ``code``.

    Returns
    -------
    QuantumCode
        A code of the same kind on ``n - 2 * len(qubit_pairs)`` qubits with
        the same number of logical qubits.

    Raises
    ------
    FusionError
        If a fused pair supports a logical operator.
    """
    pairs = _as_pairs(qubit_pairs)
    _validate_pairs(pairs, code.n)

    stabilizers = list(code.stabilizers)
    logicals = list(code.logicals)
    pure_errors = list(code.pure_errors)
    graph = code.code_graph if isinstance(code, TensorNetworkCode) else None

    n = code.n
    for pair in _update_qubit_pairs(pairs):
        stabilizers, logicals, pure_errors = _fuse_operators(
            stabilizers, logicals, pure_errors, n, pair
        )
        if graph is not None:
            graph = _fusion_graph(graph, pair)
        n -= 2

    if graph is not None:
        return TensorNetworkCode(
            stabilizers, logicals, pure_errors, graph, dict(code.seed_codes)
        )
    return SimpleCode("", stabilizers, logicals, pure_errors)


def contract(a: QuantumCode, b: QuantumCode, qubit_pairs: PairsLike) -> QuantumCode:
    """Combine ``a`` and ``b`` and fuse qubit ``i`` of ``a`` with qubit ``j`` of ``b`` per pair."""
    pairs = [(i, j + a.n) for i, j in _as_pairs(qubit_pairs)]
    return fusion(combine(a, b), pairs)


def contract_by_coords(a: TensorNetworkCode, b: TensorNetworkCode) -> TensorNetworkCode:
    """Contract every pair of physical qubits of ``a`` and ``b`` sitting at the same point."""
    graph_a, graph_b = a.code_graph, b.code_graph
    pairs = [
        (pa - 1, pb - 1)
        for pa in graph_a.physical_nodes()
        for pb in graph_b.physical_nodes()
        if np.allclose(graph_a.coord(pa), graph_b.coord(pb))
    ]
    if not pairs:
        return combine(a, b)
    return contract(a, b, pairs)
