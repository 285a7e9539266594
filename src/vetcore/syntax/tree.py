"""Read-only views over tree-sitter trees.

Checkers only ever see these wrappers, never the raw tree-sitter objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Optional

from .kinds import NodeKind, classify


@dataclass(frozen=True)
class Position:
    """A 1-based source location."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


class SyntaxNode:
    """One node of a parsed file."""

    def __init__(self, node: Any, tree: SyntaxTree):
        self._node = node
        self._tree = tree

    @cached_property
    def kind(self) -> Optional[NodeKind]:
        return classify(self._node)

    @property
    def type(self) -> str:
        """The grammar's node type, e.g. ``call_expression``."""
        return self._node.type

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def position(self) -> Position:
        row, column = self._node.start_point
        return Position(self._tree.path, row + 1, column + 1)

    @property
    def children(self) -> list[SyntaxNode]:
        return [SyntaxNode(child, self._tree) for child in self._node.children]

    def child_by_field(self, name: str) -> Optional[SyntaxNode]:
        """Child under a grammar field name (``function``, ``left``, ...)."""
        child = self._node.child_by_field_name(name)
        if child is None:
            return None
        return SyntaxNode(child, self._tree)

    @property
    def text(self) -> str:
        return self._tree.source[self._node.start_byte : self._node.end_byte].decode(
            "utf-8", errors="replace"
        )

    def __repr__(self) -> str:
        return f"SyntaxNode({self.type} at {self.position})"


class SyntaxTree:
    """The parsed representation of one source file."""

    def __init__(self, path: str, source: bytes, ts_tree: Any):
        self.path = path
        self.source = source
        self._ts_tree = ts_tree

    @property
    def root(self) -> SyntaxNode:
        return SyntaxNode(self._ts_tree.root_node, self)

    def __repr__(self) -> str:
        return f"SyntaxTree(path='{self.path}')"
