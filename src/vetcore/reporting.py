"""Run status, diagnostics, and the output contract.

Two streams:
    stdout: ``Checking <file>`` immediately before a file is walked
    stderr: every warning and diagnostic, prefixed with the tool name

Any line written to stderr fails the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console

from .syntax.tree import Position


class Status(Enum):
    OK = "ok"
    FAILED = "failed"


class RunStatus:
    """Monotonic success flag for one run: OK until the first warning."""

    def __init__(self) -> None:
        self._status = Status.OK

    def fail(self) -> None:
        self._status = Status.FAILED

    @property
    def value(self) -> Status:
        return self._status

    @property
    def ok(self) -> bool:
        return self._status is Status.OK

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def __repr__(self) -> str:
        return f"RunStatus({self._status.value})"


@dataclass(frozen=True)
class Diagnostic:
    """A finding emitted by a checker."""

    position: Position
    message: str
    checker: str = ""

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"


class Reporter:
    """Writes markers and warnings, and flips the run status on warnings.

    Args:
        tool_name: Prefix for stderr lines
        status: The run's status; created fresh when omitted
        out: Console for the ``Checking`` markers (stdout by default)
        err: Console for warnings and diagnostics (stderr by default)
    """

    def __init__(
        self,
        tool_name: str = "vet",
        status: Optional[RunStatus] = None,
        out: Optional[Console] = None,
        err: Optional[Console] = None,
    ):
        self.tool_name = tool_name
        self.status = status if status is not None else RunStatus()
        self.out = out if out is not None else Console(highlight=False)
        self.err = err if err is not None else Console(stderr=True, highlight=False)

    def start_file(self, path: str) -> None:
        self.out.out(f"Checking {path}", highlight=False)

    def warn(self, message: str) -> None:
        """Write ``<tool>: <message>`` to stderr and fail the run."""
        self.err.out(f"{self.tool_name}: {message}", highlight=False)
        self.status.fail()

    def diagnostic(self, diagnostic: Diagnostic) -> None:
        self.warn(str(diagnostic))

    def fatal(self, message: str) -> None:
        """Write an unprefixed error line and fail the run.

        Used only for problems that reject the invocation as a whole.
        """
        self.err.out(f"error: {message}", highlight=False)
        self.status.fail()
