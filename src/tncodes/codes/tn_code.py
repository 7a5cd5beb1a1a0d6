# src/tncodes/codes/tn_code.py
"""
Stabilizer codes that remember the tensor network they were built from.

A TensorNetworkCode is a stabilizer code together with its CodeGraph and a
registry of the seed codes sitting at its virtual nodes. Virtual node types
are seed-code names, so ``seed_codes[graph.node_type(v)]`` is the code whose
tensor lives at node ``v``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple

import numpy as np

from tncodes.codes.abstract_code import QuantumCode, normalize_operators
from tncodes.codes.simple_code import SimpleCode
from tncodes.graph.code_graph import CodeGraph, make_edge, new_index
from tncodes.pauli import PauliOp


@dataclass(frozen=True, repr=False)
class TensorNetworkCode(QuantumCode):
    stabilizers: Tuple[PauliOp, ...] = ()
    logicals: Tuple[PauliOp, ...] = ()
    pure_errors: Tuple[PauliOp, ...] = ()
    code_graph: CodeGraph = field(default_factory=CodeGraph)
    seed_codes: Dict[str, SimpleCode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "stabilizers", normalize_operators(self.stabilizers))
        object.__setattr__(self, "logicals", normalize_operators(self.logicals))
        object.__setattr__(self, "pure_errors", normalize_operators(self.pure_errors))

    @property
    def name(self) -> str:
        return " + ".join(self.code_graph.node_type(v) for v in self.code_graph.virtual_nodes())

    @classmethod
    def from_code(cls, code: QuantumCode) -> "TensorNetworkCode":
        """
        Wrap a single seed code as a one-node tensor network.

        The seed sits at the origin as node -1 and its qubits lie on the
        unit circle, starting at (0, -1) and turning by 2*pi/n per qubit.
        """
        seed = code if isinstance(code, SimpleCode) else SimpleCode.from_code(code)
        n = seed.n
        theta = 2 * math.pi / n if n else 0.0
        rotation = np.array(
            [[math.cos(theta), math.sin(theta)], [-math.sin(theta), math.cos(theta)]]
        )

        coords = {-1: (0.0, 0.0)}
        node_types = {-1: seed.name}
        edge_types = {}
        edge_indices = {}
        physical = []
        point = np.array([0.0, -1.0])
        for label in range(1, n + 1):
            coords[label] = (float(point[0]), float(point[1]))
            node_types[label] = "physical"
            edge = make_edge(-1, label)
            ix = new_index("physical")
            edge_types[edge] = "physical"
            edge_indices[edge] = (ix,)
            physical.append(ix)
            point = rotation @ point

        graph = CodeGraph(
            coords=coords,
            node_types=node_types,
            node_indices={-1: tuple(physical)},
            edge_types=edge_types,
            edge_indices=edge_indices,
        )
        return cls(
            seed.stabilizers,
            seed.logicals,
            seed.pure_errors,
            code_graph=graph,
            seed_codes={seed.name: seed},
        )

    # ------------------------------------------------------------------
    # Graph snapshots
    # ------------------------------------------------------------------

    def with_graph(self, graph: CodeGraph) -> "TensorNetworkCode":
        return TensorNetworkCode(
            self.stabilizers, self.logicals, self.pure_errors, graph, dict(self.seed_codes)
        )

    def with_coords(self, coords: Sequence[Sequence[float]]) -> "TensorNetworkCode":
        """Set all node coordinates, ascending label order (virtual nodes first)."""
        return self.with_graph(self.code_graph.with_coords(coords))

    def with_coord(self, label: int, xy: Sequence[float]) -> "TensorNetworkCode":
        return self.with_graph(self.code_graph.with_coord(label, xy))

    def shift_coords(self, shift: Sequence[float]) -> "TensorNetworkCode":
        return self.with_graph(self.code_graph.shifted(shift))

    def with_new_indices(self) -> "TensorNetworkCode":
        return self.with_graph(self.code_graph.with_new_indices())

    def seed_code_at(self, label: int) -> SimpleCode:
        return self.seed_codes[self.code_graph.node_type(label)]
