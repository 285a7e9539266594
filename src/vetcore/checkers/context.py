"""The per-file view handed to checker handlers."""

from __future__ import annotations

from typing import Optional

from ..reporting import Diagnostic, Reporter
from ..syntax.tree import Position, SyntaxNode, SyntaxTree


class FileContext:
    """What a handler may see and do while its file is walked.

    Handlers read ``path`` and ``tree`` and emit findings through
    :meth:`report`; nothing else on the context is writable. Findings go
    to the reporter and, when given, are also appended to ``diagnostics``.
    """

    def __init__(
        self,
        tree: SyntaxTree,
        reporter: Reporter,
        diagnostics: Optional[list[Diagnostic]] = None,
    ):
        self._tree = tree
        self._reporter = reporter
        self._diagnostics = diagnostics
        self._checker: Optional[str] = None

    @property
    def path(self) -> str:
        return self._tree.path

    @property
    def tree(self) -> SyntaxTree:
        return self._tree

    @property
    def checker(self) -> Optional[str]:
        """Name of the checker currently being dispatched."""
        return self._checker

    def report(self, node: SyntaxNode, message: str) -> Diagnostic:
        return self.report_at(node.position, message)

    def reportf(self, node: SyntaxNode, fmt: str, *args: object) -> Diagnostic:
        return self.report_at(node.position, fmt % args)

    def report_at(self, position: Position, message: str) -> Diagnostic:
        diagnostic = Diagnostic(position=position, message=message, checker=self._checker or "")
        if self._diagnostics is not None:
            self._diagnostics.append(diagnostic)
        self._reporter.diagnostic(diagnostic)
        return diagnostic

    def _dispatching(self, name: Optional[str]) -> None:
        self._checker = name
