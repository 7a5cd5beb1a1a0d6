# src/tncodes/graph/code_graph.py
"""
Geometry and tensor-index bookkeeping of a tensor network code.

Nodes are integer labels: positive labels ``1..n`` are physical qubits
(label = qubit index + 1) and negative labels ``-1, -2, ...`` are virtual
nodes, one per seed code. Every edge joins two nodes, carries a type
("physical" for seed-to-qubit legs, "bond" for contracted legs) and the
names of the tensor indices that live on it. Virtual nodes additionally
record the ordered list of indices of their tensor, matching the qubit
order of their seed code.

A CodeGraph is immutable: every update returns a new graph.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np
import quimb.tensor as qtn

Coord2D = Tuple[float, float]
Edge = FrozenSet[int]

INDEX_TAGS = ("physical", "bond", "logical", "weight")


def new_index(tag: str) -> str:
    """Fresh tensor index name carrying ``tag`` as its prefix."""
    if tag not in INDEX_TAGS:
        raise ValueError(f"Unknown index tag {tag!r}; expected one of {INDEX_TAGS}")
    return qtn.rand_uuid(tag)


def index_tag(ix: str) -> str:
    """Recover the tag an index was created with."""
    return ix.split("_", 1)[0]


def make_edge(a: int, b: int) -> Edge:
    return frozenset((int(a), int(b)))


@dataclass(frozen=True)
class CodeGraph:
    coords: Dict[int, Coord2D] = field(default_factory=dict)
    node_types: Dict[int, str] = field(default_factory=dict)
    node_indices: Dict[int, Tuple[str, ...]] = field(default_factory=dict)
    edge_types: Dict[Edge, str] = field(default_factory=dict)
    edge_indices: Dict[Edge, Tuple[str, ...]] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def nodes(self) -> List[int]:
        return sorted(self.node_types)

    def physical_nodes(self) -> List[int]:
        return [v for v in self.nodes() if v > 0]

    def virtual_nodes(self) -> List[int]:
        """Virtual labels in the order -1, -2, ..."""
        return sorted((v for v in self.node_types if v < 0), reverse=True)

    def num_nodes(self) -> int:
        return len(self.node_types)

    def edges(self) -> List[Edge]:
        return list(self.edge_types)

    def has_edge(self, a: int, b: int) -> bool:
        return make_edge(a, b) in self.edge_types

    def coord(self, label: int) -> Coord2D:
        return self.coords[label]

    def node_type(self, label: int) -> str:
        return self.node_types[label]

    def node_index_list(self, label: int) -> Tuple[str, ...]:
        return self.node_indices.get(label, ())

    def edge_type(self, edge: Edge) -> str:
        return self.edge_types[edge]

    def edge_index_list(self, edge: Edge) -> Tuple[str, ...]:
        return self.edge_indices.get(edge, ())

    def edges_of(self, label: int) -> List[Edge]:
        return [e for e in self.edge_types if label in e]

    def neighbours(self, label: int) -> List[int]:
        return sorted(next(iter(e - {label})) for e in self.edges_of(label) if len(e) == 2)

    def physical_neighbours(self, label: int) -> List[int]:
        """Physical qubits attached to the virtual node ``label``."""
        return [v for v in self.neighbours(label) if v > 0]

    def all_indices(self) -> List[str]:
        seen: List[str] = []
        for ixs in self.node_indices.values():
            for ix in ixs:
                if ix not in seen:
                    seen.append(ix)
        for ixs in self.edge_indices.values():
            for ix in ixs:
                if ix not in seen:
                    seen.append(ix)
        return seen

    # ------------------------------------------------------------------
    # Snapshot updates
    # ------------------------------------------------------------------

    def _replace(self, **changes) -> "CodeGraph":
        fields = dict(
            coords=self.coords,
            node_types=self.node_types,
            node_indices=self.node_indices,
            edge_types=self.edge_types,
            edge_indices=self.edge_indices,
        )
        fields.update(changes)
        return CodeGraph(**fields)

    def with_coord(self, label: int, xy: Sequence[float]) -> "CodeGraph":
        if label not in self.node_types:
            raise KeyError(f"No node {label} in graph")
        coords = dict(self.coords)
        coords[label] = (float(xy[0]), float(xy[1]))
        return self._replace(coords=coords)

    def with_coords(self, coords: Sequence[Sequence[float]]) -> "CodeGraph":
        """Assign coordinates to all nodes in ascending label order."""
        labels = self.nodes()
        if len(coords) != len(labels):
            raise ValueError(f"Got {len(coords)} coordinates for {len(labels)} nodes")
        return self._replace(
            coords={v: (float(xy[0]), float(xy[1])) for v, xy in zip(labels, coords)}
        )

    def shifted(self, shift: Sequence[float]) -> "CodeGraph":
        dx, dy = float(shift[0]), float(shift[1])
        return self._replace(
            coords={v: (x + dx, y + dy) for v, (x, y) in self.coords.items()}
        )

    def with_node_type(self, label: int, node_type: str) -> "CodeGraph":
        node_types = dict(self.node_types)
        node_types[label] = node_type
        return self._replace(node_types=node_types)

    def with_node_indices(self, label: int, indices: Sequence[str]) -> "CodeGraph":
        node_indices = dict(self.node_indices)
        node_indices[label] = tuple(indices)
        return self._replace(node_indices=node_indices)

    def with_edge_type(self, edge: Edge, edge_type: str) -> "CodeGraph":
        edge_types = dict(self.edge_types)
        edge_types[frozenset(edge)] = edge_type
        return self._replace(edge_types=edge_types)

    def with_edge_indices(self, edge: Edge, indices: Sequence[str]) -> "CodeGraph":
        edge_indices = dict(self.edge_indices)
        edge_indices[frozenset(edge)] = tuple(indices)
        return self._replace(edge_indices=edge_indices)

    def with_new_indices(self) -> "CodeGraph":
        """Rename every tensor index, keeping node and edge references consistent."""
        renaming = {ix: new_index(index_tag(ix)) for ix in self.all_indices()}
        return self._replace(
            node_indices={
                v: tuple(renaming[ix] for ix in ixs) for v, ixs in self.node_indices.items()
            },
            edge_indices={
                e: tuple(renaming[ix] for ix in ixs) for e, ixs in self.edge_indices.items()
            },
        )

    def relabelled(self, physical_offset: int = 0, virtual_offset: int = 0) -> "CodeGraph":
        """Shift physical labels up and virtual labels down by the given offsets."""
        def move(v: int) -> int:
            return v + physical_offset if v > 0 else v - virtual_offset

        return CodeGraph(
            coords={move(v): xy for v, xy in self.coords.items()},
            node_types={move(v): t for v, t in self.node_types.items()},
            node_indices={move(v): ixs for v, ixs in self.node_indices.items()},
            edge_types={frozenset(move(v) for v in e): t for e, t in self.edge_types.items()},
            edge_indices={
                frozenset(move(v) for v in e): ixs for e, ixs in self.edge_indices.items()
            },
        )

    def merged(self, other: "CodeGraph") -> "CodeGraph":
        """Union of two graphs whose labels do not overlap."""
        overlap = set(self.node_types) & set(other.node_types)
        if overlap:
            raise ValueError(f"Cannot merge graphs sharing node labels {sorted(overlap)}")
        return CodeGraph(
            coords={**self.coords, **other.coords},
            node_types={**self.node_types, **other.node_types},
            node_indices={**self.node_indices, **other.node_indices},
            edge_types={**self.edge_types, **other.edge_types},
            edge_indices={**self.edge_indices, **other.edge_indices},
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def coord_array(self, labels: Optional[Iterable[int]] = None) -> np.ndarray:
        labels = self.nodes() if labels is None else list(labels)
        return np.array([self.coords[v] for v in labels], dtype=float).reshape(-1, 2)

    def to_networkx(self) -> nx.Graph:
        """Undirected networkx view with ``pos``, ``type`` and ``indices`` attributes."""
        g = nx.Graph()
        for v in self.nodes():
            g.add_node(
                v,
                pos=self.coords.get(v, (0.0, 0.0)),
                type=self.node_types[v],
                indices=self.node_index_list(v),
            )
        for e, t in self.edge_types.items():
            if len(e) == 2:
                a, b = sorted(e)
                g.add_edge(a, b, type=t, indices=self.edge_index_list(e))
        return g
