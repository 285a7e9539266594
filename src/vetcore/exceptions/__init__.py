"""Exception hierarchy for vetcore."""

from .analysis import (
    AnalysisError,
    DirectoryReadError,
    FileAccessError,
    PackageResolutionError,
    ParsingError,
)
from .base import VetError
from .config import (
    ArgumentMixError,
    ConfigurationError,
    InvalidConfigError,
    PathStatError,
    PluginLoadError,
    RegistryError,
)

__all__ = [
    "VetError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "PackageResolutionError",
    "DirectoryReadError",
    "ConfigurationError",
    "ArgumentMixError",
    "PathStatError",
    "InvalidConfigError",
    "PluginLoadError",
    "RegistryError",
]
