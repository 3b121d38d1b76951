"""Intermediate representation: the generic graph description of a model."""

from mermaid_peg.ir.graph import EdgeData, GraphIR, NodeData, estimate_text_width

__all__ = [
    "EdgeData",
    "GraphIR",
    "NodeData",
    "estimate_text_width",
]
