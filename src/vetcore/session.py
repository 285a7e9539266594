"""Analysis of one unit: parse its files and walk them with the checkers.

A unit stops at its first file that fails to parse. Files before it have
already been walked and keep their diagnostics; files after it are never
read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .checkers.context import FileContext
from .checkers.registry import CheckerRegistry, DispatchTable
from .checkers.walker import walk
from .exceptions import AnalysisError
from .logging_config import get_logger
from .reporting import Diagnostic, Reporter
from .syntax.parser import GoParser
from .syntax.tree import SyntaxTree

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A successfully parsed file of a unit."""

    path: str
    tree: SyntaxTree


@dataclass
class UnitResult:
    """Outcome of analyzing one unit.

    Attributes:
        walked: Files parsed and walked, in listing order
        error: First parse or read failure, if any
        diagnostics: Diagnostics emitted while walking, in order
        skipped: Listed files that were not parseable sources
    """

    walked: list[SourceFile] = field(default_factory=list)
    error: Optional[AnalysisError] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def truncated(self) -> bool:
        return self.error is not None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.diagnostics


class AnalysisSession:
    """Runs the registry's enabled checkers over units of files.

    Args:
        registry: Checker registry; read only from here on
        reporter: Output sink and run status
        parser: Go parser, shared across units
        source_suffix: Only names with this suffix are parsed
    """

    def __init__(
        self,
        registry: CheckerRegistry,
        reporter: Reporter,
        parser: Optional[GoParser] = None,
        source_suffix: str = ".go",
    ):
        self.registry = registry
        self.reporter = reporter
        self.parser = parser if parser is not None else GoParser()
        self.source_suffix = source_suffix

    def analyze(self, file_names: Iterable[str]) -> UnitResult:
        """Parse and walk ``file_names`` in order."""
        result = UnitResult()
        table: Optional[DispatchTable] = None

        for name in file_names:
            if not name.endswith(self.source_suffix):
                result.skipped.append(name)
                continue
            try:
                tree = self.parser.parse_file(name)
            except AnalysisError as e:
                self.reporter.warn(f"error: {name}: {e.message}")
                result.error = e
                break
            if table is None:
                table = self.registry.dispatch_table()
            source = SourceFile(path=name, tree=tree)
            self._walk(source, table, result)
            result.walked.append(source)

        if result.truncated:
            logger.debug(
                f"Unit stopped after {len(result.walked)} file(s): {result.error}"
            )
        return result

    def _walk(self, source: SourceFile, table: DispatchTable, result: UnitResult) -> None:
        self.reporter.start_file(source.path)
        context = FileContext(source.tree, self.reporter, result.diagnostics)
        visited = walk(source.tree.root, table, context)
        logger.debug(f"Walked {source.path}: {visited} nodes")
