"""Package resolution: which files in one directory form an analyzable unit.

Only the directory's immediate entries are considered. Each candidate file's
header (package clause and imports) is read to classify it:

    ordinary   package files that do not import "C"
    cgo        package files that import "C"
    test       ``_test.go`` files in the package itself
    external   ``_test.go`` files in the ``<pkg>_test`` package (not analyzed)

Build tags are not evaluated.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import PackageResolutionError
from ..logging_config import get_logger
from ..syntax.parser import GoParser

logger = get_logger(__name__)

TEST_SUFFIX = "_test"

_BOM = b"\xef\xbb\xbf"


@dataclass(frozen=True)
class FileHeader:
    package: str
    imports: tuple[str, ...] = ()

    @property
    def uses_cgo(self) -> bool:
        return "C" in self.imports


@dataclass
class Unit:
    """The source files of one package directory, in analysis order.

    Attributes:
        directory: Directory the files were found in
        package: Package name from the files' package clauses
        go_files: Ordinary file names, sorted
        cgo_files: File names importing "C", sorted
        test_files: In-package test file names, sorted
        external_test_files: ``<pkg>_test`` file names; never analyzed
    """

    directory: str
    package: str
    go_files: list[str] = field(default_factory=list)
    cgo_files: list[str] = field(default_factory=list)
    test_files: list[str] = field(default_factory=list)
    external_test_files: list[str] = field(default_factory=list)

    @property
    def files(self) -> list[str]:
        """Ordinary, cgo, then test files, qualified by the directory unless it is '.'."""
        names = self.go_files + self.cgo_files + self.test_files
        if self.directory == ".":
            return list(names)
        return [os.path.join(self.directory, name) for name in names]

    def __len__(self) -> int:
        return len(self.go_files) + len(self.cgo_files) + len(self.test_files)


def read_header(path: str, parser: GoParser) -> FileHeader:
    """Read the package clause and imports at the top of a source file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If there is no package clause
    """
    with open(path, "rb") as f:
        source = f.read()
    return parse_header(source, parser)


def parse_header(source: bytes, parser: GoParser) -> FileHeader:
    """Take the header from the file's syntax tree.

    Only the package clause and the import declarations right after it are
    read, so syntax errors further down do not affect resolution.
    """
    if source.startswith(_BOM):
        source = source[len(_BOM) :]
    root = parser.parse_tree(source).root_node

    package: Optional[str] = None
    imports: list[str] = []
    for node in root.named_children:
        if node.type == "comment":
            continue
        if package is None:
            if node.type == "package_clause":
                package = _package_name(node, source)
            if package is None:
                break
            continue
        if node.type != "import_declaration":
            break
        imports.extend(_import_paths(node, source))

    if package is None:
        raise ValueError("expected 'package' clause")
    return FileHeader(package=package, imports=tuple(imports))


def _text(node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _package_name(clause, source: bytes) -> Optional[str]:
    for child in clause.named_children:
        if child.type == "package_identifier" and not child.is_missing:
            return _text(child, source)
    return None


def _import_paths(declaration, source: bytes) -> list[str]:
    specs = []
    for child in declaration.named_children:
        if child.type == "import_spec_list":
            specs.extend(c for c in child.named_children if c.type == "import_spec")
        elif child.type == "import_spec":
            specs.append(child)
    paths = []
    for spec in specs:
        path = spec.child_by_field_name("path")
        if path is not None and not path.is_missing:
            # strip the quotes or backticks
            paths.append(_text(path, source)[1:-1])
    return paths


class PackageResolver:
    """Finds the unit, if any, in a single directory.

    Args:
        source_suffix: Suffix of candidate files
        parser: Go parser used to read file headers
    """

    def __init__(self, source_suffix: str = ".go", parser: Optional[GoParser] = None):
        self.source_suffix = source_suffix
        self.parser = parser if parser is not None else GoParser()

    def candidates(self, directory: str) -> list[str]:
        """Candidate file names in ``directory``, sorted.

        Raises:
            OSError: If the directory cannot be listed
        """
        names = []
        with os.scandir(directory) as entries:
            for entry in entries:
                if not entry.name.endswith(self.source_suffix):
                    continue
                if entry.name.startswith(("_", ".")):
                    continue
                if not entry.is_file():
                    continue
                names.append(entry.name)
        return sorted(names)

    def resolve(self, directory: str) -> Optional[Unit]:
        """Resolve ``directory`` into a Unit.

        Returns:
            The unit, or None when the directory holds no source files

        Raises:
            PackageResolutionError: If the directory cannot be read, a file
                has no package clause, or the files disagree on the package
        """
        try:
            names = self.candidates(directory)
        except OSError as e:
            raise PackageResolutionError(directory, e.strerror or str(e))
        if not names:
            return None

        test_file_suffix = TEST_SUFFIX + self.source_suffix
        package: Optional[str] = None
        first_file = ""
        external: list[tuple[str, str]] = []
        unit = Unit(directory=directory, package="")

        for name in names:
            path = os.path.join(directory, name)
            try:
                header = read_header(path, self.parser)
            except OSError as e:
                raise PackageResolutionError(directory, f"{path}: {e.strerror or e}")
            except ValueError as e:
                raise PackageResolutionError(directory, f"{path}: {e}")

            is_test = name.endswith(test_file_suffix)
            if is_test and header.package.endswith(TEST_SUFFIX):
                external.append((name, header.package))
                continue

            if package is None:
                package, first_file = header.package, name
            elif header.package != package:
                raise PackageResolutionError(
                    directory,
                    f"found packages {package} ({first_file}) and "
                    f"{header.package} ({name}) in {directory}",
                )

            if is_test:
                unit.test_files.append(name)
            elif header.uses_cgo:
                unit.cgo_files.append(name)
            else:
                unit.go_files.append(name)

        if package is None:
            # Only external test files: the package name comes from them
            package = external[0][1][: -len(TEST_SUFFIX)]
            first_file = external[0][0]
        for name, pkg in external:
            if pkg != package + TEST_SUFFIX:
                raise PackageResolutionError(
                    directory,
                    f"found packages {package} ({first_file}) and {pkg} ({name}) in {directory}",
                )
            unit.external_test_files.append(name)

        unit.package = package
        logger.debug(
            f"Resolved {directory}: package {package}, {len(unit.go_files)} go, "
            f"{len(unit.cgo_files)} cgo, {len(unit.test_files)} test"
        )
        return unit
