# src/tncodes/graph/__init__.py
"""
Code graphs and the surgery that glues codes together.

The surgery operations (combine, fusion, contract, contract_by_coords) live
in ``tncodes.graph.surgery``; they depend on the code classes, which in
turn depend on CodeGraph, so only the graph itself is exported here.
"""
from tncodes.graph.code_graph import CodeGraph, index_tag, make_edge, new_index

__all__ = ["CodeGraph", "index_tag", "make_edge", "new_index"]
