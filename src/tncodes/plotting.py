# src/tncodes/plotting.py
"""
Drawing tensor network codes with matplotlib.

Usage
-----
>>> from tncodes.plotting import plot_code
>>> ax = plot_code(rotated_surface_code(3))
"""
from __future__ import annotations

from typing import Dict, Optional, Sequence

import networkx as nx
import numpy as np

from tncodes.codes.tn_code import TensorNetworkCode
from tncodes.distance import OperatorWeights

PAULI_COLORS = {0: "lightgrey", 1: "red", 2: "purple", 3: "blue"}
EDGE_COLORS = {"physical": "grey", "bond": "black"}


def _positions(graph: nx.Graph) -> Dict[int, np.ndarray]:
    return {v: np.asarray(data["pos"], dtype=float) for v, data in graph.nodes(data=True)}


def plot_code(
    code: TensorNetworkCode,
    ax=None,
    show_labels: bool = False,
    node_size: int = 120,
    title: Optional[str] = None,
):
    """Draw seeds as squares, physical qubits as circles, bonds as black edges.

    Returns
    -------
    matplotlib.axes.Axes
        The axes with the plot.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    g = code.code_graph.to_networkx()
    pos = _positions(g)
    virtual = [v for v in g.nodes if v < 0]
    physical = [v for v in g.nodes if v > 0]

    nx.draw_networkx_edges(
        g, pos, ax=ax,
        edge_color=[EDGE_COLORS.get(d["type"], "black") for _, _, d in g.edges(data=True)],
    )
    nx.draw_networkx_nodes(
        g, pos, nodelist=virtual, ax=ax, node_shape="s", node_color="orange",
        node_size=node_size,
    )
    nx.draw_networkx_nodes(
        g, pos, nodelist=physical, ax=ax, node_color="lightgrey", node_size=node_size,
    )
    if show_labels:
        nx.draw_networkx_labels(g, pos, ax=ax, font_size=7)

    ax.set_aspect("equal")
    ax.set_title(title if title is not None else code.name)
    ax.axis("off")
    return ax


def plot_operator(
    code: TensorNetworkCode,
    operator: Sequence[int],
    ax=None,
    node_size: int = 160,
    title: Optional[str] = None,
):
    """Draw ``code`` with each physical qubit coloured by its Pauli in ``operator``."""
    import matplotlib.pyplot as plt
    from matplotlib.lines import Line2D

    if len(operator) != code.n:
        raise ValueError(f"Operator acts on {len(operator)} qubits, code has {code.n}")
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    plot_code(code, ax=ax, node_size=node_size // 2, title=title)
    g = code.code_graph.to_networkx()
    pos = _positions(g)
    physical = [v for v in g.nodes if v > 0]
    nx.draw_networkx_nodes(
        g, pos, nodelist=physical, ax=ax, node_size=node_size,
        node_color=[PAULI_COLORS[int(operator[v - 1])] for v in physical],
    )
    ax.legend(
        handles=[
            Line2D([], [], marker="o", linestyle="", color=c, label=p)
            for p, c in zip("IXYZ", PAULI_COLORS.values())
        ],
        loc="upper right",
    )
    return ax


def plot_operator_weights(weights: OperatorWeights, ax=None, log_scale: bool = True):
    """Bar chart of the stabilizer and normalizer weight enumerators."""
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 4))

    w = np.arange(len(weights.all_operator_weights))
    ax.bar(w - 0.2, weights.all_operator_weights, width=0.4, label="All operators")
    ax.bar(w + 0.2, weights.stabilizer_weights, width=0.4, label="Stabilizers")
    if weights.distance:
        ax.axvline(weights.distance, color="k", linestyle="--", label=f"d = {weights.distance}")
    if log_scale:
        ax.set_yscale("symlog")
    ax.set_xlabel("Weight")
    ax.set_ylabel("Number of operators")
    ax.legend()
    return ax
