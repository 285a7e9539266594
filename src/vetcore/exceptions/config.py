"""Configuration and invocation exceptions: arguments, settings, plugins."""

from typing import Any

from .base import VetError


class ConfigurationError(VetError):
    """Base class for configuration-related errors."""

    pass


class ArgumentMixError(ConfigurationError):
    """Raised when files and directories are mixed on one command line."""

    def __init__(self) -> None:
        super().__init__("input arguments must not be both directories and files")


class PathStatError(ConfigurationError):
    """Raised when a path argument cannot be inspected."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}", details={"path": path, "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class PluginLoadError(ConfigurationError):
    """Raised when a checker plugin cannot be imported or fails to register."""

    def __init__(self, name: str, reason: str):
        super().__init__(
            f"Cannot load checker plugin {name}",
            details={"plugin": name, "reason": reason},
        )
        self.name = name
        self.reason = reason


class RegistryError(ConfigurationError):
    """Raised on misuse of the checker registry, e.g. registering after sealing."""

    pass
