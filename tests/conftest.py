"""Shared test fixtures for vetcore tests."""

import io
import logging
import textwrap
from pathlib import Path

import pytest
from rich.console import Console

from vetcore.checkers.registry import CheckerRegistry
from vetcore.reporting import Reporter
from vetcore.syntax.parser import GoParser


class CapturedReporter(Reporter):
    """Reporter writing to in-memory buffers instead of the terminal."""

    def __init__(self, tool_name: str = "vet"):
        self._out_buffer = io.StringIO()
        self._err_buffer = io.StringIO()
        super().__init__(
            tool_name,
            out=Console(file=self._out_buffer, highlight=False, color_system=None),
            err=Console(file=self._err_buffer, highlight=False, color_system=None),
        )

    @property
    def stdout(self) -> str:
        return self._out_buffer.getvalue()

    @property
    def stderr(self) -> str:
        return self._err_buffer.getvalue()

    @property
    def stdout_lines(self) -> list[str]:
        return self.stdout.splitlines()

    @property
    def stderr_lines(self) -> list[str]:
        return self.stderr.splitlines()


def _write_go(directory: Path, name: str, source: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo setup_logging() calls made by a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    vetcore_level = logging.getLogger("vetcore").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("vetcore").setLevel(vetcore_level)


@pytest.fixture
def write_go():
    """Write a dedented Go source file: write_go(directory, name, source) -> path."""
    return _write_go


@pytest.fixture(scope="session")
def go_parser():
    """One tree-sitter Go parser for the whole test session."""
    return GoParser()


@pytest.fixture
def reporter():
    """A reporter capturing stdout and stderr."""
    return CapturedReporter()


@pytest.fixture
def reporter_factory():
    """Build extra capturing reporters, e.g. one per run."""
    return CapturedReporter


@pytest.fixture
def registry():
    """An empty checker registry."""
    return CheckerRegistry()


@pytest.fixture
def call_recorder():
    """Registry handler that records (checker, node type) for every call."""
    calls = []

    def make(name):
        def handler(ctx, node):
            calls.append((name, node.type))

        return handler

    make.calls = calls
    return make


@pytest.fixture
def sample_source():
    """Go source with at least one node of most kinds."""
    return textwrap.dedent(
        """
        package main

        import "fmt"

        type Point struct {
            X, Y int
        }

        type Shape interface {
            Area() float64
        }

        func (p Point) Sum() int {
            return p.X + p.Y
        }

        func main() {
            p := Point{X: 1, Y: 2}
            fmt.Println(p.Sum())
            for i := 0; i < 3; i++ {
            }
            for _, v := range []int{1, 2} {
                _ = v
            }
            f := func() {}
            f()
        }
        """
    ).lstrip()
