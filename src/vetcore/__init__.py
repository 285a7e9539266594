"""
vetcore - a pluggable checker engine for Go source trees.

Discovers the packages under the given paths, parses every file with
tree-sitter, and runs registered checkers on the node kinds they subscribe
to. Checkers themselves live outside the core and are loaded as plugins.
"""

__version__ = "0.1.0"

from .checkers import CheckerRegistry, DispatchTable, FileContext, walk
from .config import VetConfig, load_config
from .reporting import Diagnostic, Reporter, RunStatus
from .runner import run
from .session import AnalysisSession, UnitResult
from .syntax import NodeKind, SyntaxNode, SyntaxTree

__all__ = [
    "run",  # Main entry point
    "CheckerRegistry",
    "DispatchTable",
    "FileContext",
    "walk",
    "AnalysisSession",
    "UnitResult",
    "Reporter",
    "RunStatus",
    "Diagnostic",
    "NodeKind",
    "SyntaxNode",
    "SyntaxTree",
    "VetConfig",
    "load_config",
]
