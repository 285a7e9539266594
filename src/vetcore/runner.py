"""Top-level run: classify path arguments and dispatch them.

    all files        one ad-hoc unit, analyzed as given
    all directories  each traversed, in argument order
    mixed            rejected before any analysis

Paths that cannot be inspected are reported and dropped.
"""

from __future__ import annotations

import os
import stat
from typing import Optional, Sequence

from .checkers.registry import CheckerRegistry
from .config import VetConfig
from .discovery.resolver import PackageResolver
from .discovery.traversal import DirectoryTraversal
from .exceptions import ArgumentMixError, PathStatError
from .logging_config import get_logger
from .reporting import Reporter, RunStatus
from .session import AnalysisSession
from .syntax.parser import GoParser

logger = get_logger(__name__)


def classify_paths(paths: Sequence[str], reporter: Reporter) -> tuple[list[str], list[str]]:
    """Split ``paths`` into directories and files, keeping argument order.

    Unreadable or missing paths are reported and left out.

    Raises:
        ArgumentMixError: If both directories and files remain
    """
    directories: list[str] = []
    files: list[str] = []
    for path in paths:
        try:
            info = os.stat(path)
        except OSError as e:
            error = PathStatError(path, e.strerror or str(e))
            reporter.warn(f"error: {error.message}")
            continue
        if stat.S_ISDIR(info.st_mode):
            directories.append(path)
        else:
            files.append(path)
    if directories and files:
        raise ArgumentMixError()
    return directories, files


def run(
    paths: Sequence[str],
    registry: CheckerRegistry,
    config: Optional[VetConfig] = None,
    reporter: Optional[Reporter] = None,
    parser: Optional[GoParser] = None,
) -> RunStatus:
    """Analyze ``paths`` with the checkers in ``registry``.

    The registry is restricted to ``config.enabled_checkers`` (when set) and
    sealed before anything is read.

    Returns:
        The run's status; FAILED if anything was reported
    """
    config = config if config is not None else VetConfig()
    reporter = reporter if reporter is not None else Reporter(config.tool_name)

    if config.enabled_checkers is not None:
        registry.restrict(config.enabled_checkers)
    registry.seal()

    try:
        directories, files = classify_paths(paths, reporter)
    except ArgumentMixError as e:
        reporter.fatal(e.message)
        return reporter.status

    session = AnalysisSession(
        registry, reporter, parser=parser, source_suffix=config.source_suffix
    )

    if directories:
        resolver = PackageResolver(source_suffix=config.source_suffix, parser=session.parser)
        traversal = DirectoryTraversal(
            resolver,
            on_unit=lambda unit: session.analyze(unit.files),
            reporter=reporter,
            exclude_dirs=config.exclude_dirs,
        )
        for root in directories:
            logger.debug(f"Traversing {root}")
            traversal.traverse(root)
    elif files:
        session.analyze(files)

    return reporter.status
