"""Pre-order traversal that feeds nodes to their checkers.

Works on any node exposing ``kind`` and ``children``, so the walk does not
depend on tree-sitter and can be exercised with plain objects.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..syntax.kinds import NodeKind
from .registry import DispatchTable


class WalkableNode(Protocol):
    @property
    def kind(self) -> Optional[NodeKind]: ...

    @property
    def children(self) -> Sequence["WalkableNode"]: ...


def walk(root: WalkableNode, table: DispatchTable, context: Any) -> int:
    """Visit every node under ``root`` once, parent before children.

    Each node's handlers run in table order before its first child is
    visited. Nodes without a kind, or without handlers, dispatch nothing
    but are still descended into.

    Returns:
        Number of nodes visited
    """
    visited = 0
    stack: list[WalkableNode] = [root]
    while stack:
        node = stack.pop()
        visited += 1
        for binding in table.handlers_for(node.kind):
            _set_checker(context, binding.name)
            try:
                binding.handler(context, node)
            finally:
                _set_checker(context, None)
        stack.extend(reversed(node.children))
    return visited


def _set_checker(context: Any, name: Optional[str]) -> None:
    hook = getattr(context, "_dispatching", None)
    if hook is not None:
        hook(name)
