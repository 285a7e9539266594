"""Analysis-related exceptions: file access, parsing, package discovery.

All of these are recovered at the narrowest scope that contains them: a
parse failure truncates its own unit, a bad directory is skipped, and the
run keeps going.
"""

from typing import Optional

from .base import VetError


class AnalysisError(VetError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be read."""

    def __init__(self, filepath: str, reason: str):
        super().__init__(
            f"cannot read {filepath}: {reason}",
            details={"filepath": filepath, "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when a source file does not parse.

    ``position`` is the ``file:line:col`` of the first malformed construct,
    or None when the parser gave no usable location.
    """

    def __init__(self, filepath: str, reason: str, position: Optional[str] = None):
        where = position or filepath
        super().__init__(
            f"{where}: {reason}",
            details={"filepath": filepath, "reason": reason},
        )
        self.filepath = filepath
        self.position = position
        self.reason = reason


class PackageResolutionError(AnalysisError):
    """Raised when a directory's source files do not form one package."""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            reason,
            details={"directory": directory},
        )
        self.directory = directory
        self.reason = reason


class DirectoryReadError(AnalysisError):
    """Raised when a directory cannot be listed during traversal."""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            f"{directory}: {reason}",
            details={"directory": directory, "reason": reason},
        )
        self.directory = directory
        self.reason = reason
