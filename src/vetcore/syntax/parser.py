"""Tree-sitter parser for Go sources.

The parser is the one black box of the pipeline: it turns a file into a
SyntaxTree or raises a positioned ParsingError. Tree-sitter recovers from
syntax errors on its own, so any ERROR or MISSING node in the result is
treated as a failed parse.
"""

from __future__ import annotations

from typing import Any, Optional

import tree_sitter
import tree_sitter_go

from ..exceptions import FileAccessError, ParsingError
from ..logging_config import get_logger
from .tree import Position, SyntaxTree

logger = get_logger(__name__)

# Longest snippet of offending source quoted in a syntax error
_SNIPPET_LIMIT = 20


class GoParser:
    """Parses Go source files into SyntaxTrees."""

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_go.language())
        self._parser = tree_sitter.Parser(self._language)

    def parse_file(self, path: str) -> SyntaxTree:
        """Read and parse one file.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the file is not valid Go
        """
        try:
            with open(path, "rb") as f:
                source = f.read()
        except OSError as e:
            raise FileAccessError(path, e.strerror or str(e))
        return self.parse(source, path)

    def parse_tree(self, source: bytes) -> Any:
        """Raw tree-sitter parse. Never raises; malformed regions become ERROR nodes."""
        return self._parser.parse(source)

    def parse(self, source: bytes, path: str = "<input>") -> SyntaxTree:
        """Parse in-memory source attributed to ``path``.

        Raises:
            ParsingError: If the source is not valid Go
        """
        ts_tree = self.parse_tree(source)
        root = ts_tree.root_node
        if root.has_error:
            bad = _first_error(root)
            if bad is None:
                raise ParsingError(path, "syntax error")
            row, column = bad.start_point
            position = Position(path, row + 1, column + 1)
            raise ParsingError(path, _describe(bad, source), position=str(position))
        first = next((c for c in root.named_children if c.type != "comment"), None)
        if first is None or first.type != "package_clause":
            raise ParsingError(path, "expected 'package'", position=str(Position(path, 1, 1)))
        logger.debug(f"Parsed {path} ({len(source)} bytes)")
        return SyntaxTree(path, source, ts_tree)


def _first_error(root: Any) -> Optional[Any]:
    """First ERROR or MISSING node in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _describe(node: Any, source: bytes) -> str:
    if node.is_missing:
        return f"syntax error: missing {node.type}"
    snippet = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    snippet = snippet.strip().splitlines()[0] if snippet.strip() else ""
    if not snippet:
        return "syntax error"
    if len(snippet) > _SNIPPET_LIMIT:
        snippet = snippet[:_SNIPPET_LIMIT] + "..."
    return f"syntax error near {snippet!r}"
