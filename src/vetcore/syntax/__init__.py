"""Syntax trees: node kinds, read-only node views, and the Go parser."""

from .kinds import GO_NODE_KINDS, NodeKind, classify
from .parser import GoParser
from .tree import Position, SyntaxNode, SyntaxTree

__all__ = [
    "NodeKind",
    "GO_NODE_KINDS",
    "classify",
    "GoParser",
    "Position",
    "SyntaxNode",
    "SyntaxTree",
]
