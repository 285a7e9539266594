"""Recursive directory traversal feeding units to a session.

Order is fixed: a directory is resolved and analyzed before its
subdirectories, and subdirectories are entered in name order. Symlinked
directories are not followed.
"""

from __future__ import annotations

import fnmatch
import os
from typing import Callable, Iterable, Optional

from ..exceptions import DirectoryReadError, PackageResolutionError
from ..logging_config import get_logger
from ..reporting import Reporter
from .resolver import PackageResolver, Unit

logger = get_logger(__name__)

UnitSink = Callable[[Unit], object]


def _join(parent: str, name: str) -> str:
    if parent == ".":
        return name
    return os.path.join(parent, name)


class DirectoryTraversal:
    """Walks a directory tree, resolving each directory into a unit.

    Args:
        resolver: Resolves one directory
        on_unit: Called with each resolved unit, immediately
        reporter: Receives directory and resolution errors
        exclude_dirs: fnmatch patterns of directory names to skip (not
            applied to the root itself)
    """

    def __init__(
        self,
        resolver: PackageResolver,
        on_unit: UnitSink,
        reporter: Reporter,
        exclude_dirs: Iterable[str] = (),
    ):
        self.resolver = resolver
        self.on_unit = on_unit
        self.reporter = reporter
        self.exclude_dirs = tuple(exclude_dirs)

    def traverse(self, root: str) -> None:
        """Visit ``root`` and every directory below it."""
        root = os.path.normpath(root)
        stack = [root]
        while stack:
            directory = stack.pop()
            try:
                subdirs = self._subdirectories(directory)
            except DirectoryReadError as e:
                self.reporter.warn(f"directory walk error: {e.message}")
                continue
            self._process(directory)
            stack.extend(reversed([_join(directory, name) for name in subdirs]))

    def _subdirectories(self, directory: str) -> list[str]:
        try:
            with os.scandir(directory) as entries:
                names = [
                    entry.name
                    for entry in entries
                    if entry.is_dir(follow_symlinks=False) and not self._excluded(entry.name)
                ]
        except OSError as e:
            raise DirectoryReadError(directory, e.strerror or str(e))
        return sorted(names)

    def _excluded(self, name: str) -> bool:
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.exclude_dirs)

    def _process(self, directory: str) -> Optional[Unit]:
        try:
            unit = self.resolver.resolve(directory)
        except PackageResolutionError as e:
            self.reporter.warn(f"error processing directory {directory}, {e.message}")
            return None
        if unit is None:
            logger.debug(f"No source in {directory}")
            return None
        self.on_unit(unit)
        return unit
