"""Configuration loading and management for vetcore.

Configuration sources are merged in priority order:
    1. Defaults (defined in VetConfig)
    2. Project config (./vetcore.toml)
    3. Explicit config file
    4. Environment variables (VETCORE_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, enabled_checkers=["printf"])
    >>> config.verbosity
    'verbose'
    >>> config.enabled_checkers
    ['printf']
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, VetError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILE_NAME = "vetcore.toml"
ENV_PREFIX = "VETCORE_"


@dataclass(frozen=True)
class VetConfig:
    """Configuration for one vetcore run.

    Attributes:
        tool_name: Prefix written before every diagnostic on stderr
        source_suffix: File suffix of parseable source files
        enabled_checkers: Allow-set of checker names; None enables all
        plugins: Modules to import for their ``register(registry)`` hook
        load_entry_points: Also load the ``vetcore.checkers`` entry points
        exclude_dirs: fnmatch patterns of directory names to skip while traversing
        verbosity: Logging verbosity level
        log_file: Also append log records to this file
    """

    tool_name: str = "vet"
    source_suffix: str = ".go"
    enabled_checkers: Optional[list[str]] = None
    plugins: list[str] = field(default_factory=list)
    load_entry_points: bool = True
    exclude_dirs: list[str] = field(default_factory=list)
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.tool_name:
            raise InvalidConfigError("tool_name", self.tool_name, "must not be empty")
        if not self.source_suffix.startswith("."):
            raise InvalidConfigError(
                "source_suffix", self.source_suffix, "must start with '.'"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        for pattern in self.exclude_dirs:
            if not pattern or os.sep in pattern:
                raise InvalidConfigError(
                    "exclude_dirs", pattern, "patterns match a single directory name"
                )


def load_config(config_file: Optional[Path] = None, **overrides) -> VetConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated VetConfig instance

    Raises:
        VetError: If a config file is invalid or missing
    """
    merged: dict = {}

    project_config = Path.cwd() / CONFIG_FILE_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise VetError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise VetError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise VetError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return VetConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise VetError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from VETCORE_* environment variables.

    Supported environment variables:
        VETCORE_TOOL_NAME: str
        VETCORE_SOURCE_SUFFIX: str
        VETCORE_ENABLED_CHECKERS: comma-separated names
        VETCORE_PLUGINS: comma-separated module names
        VETCORE_LOAD_ENTRY_POINTS: bool (true/false/1/0)
        VETCORE_EXCLUDE_DIRS: comma-separated patterns
        VETCORE_VERBOSITY: quiet/normal/verbose
        VETCORE_LOG_FILE: str

    Returns:
        Dict of field_name -> parsed_value for any VETCORE_* vars found.
    """
    type_hints = get_type_hints(VetConfig)

    result: dict[str, Any] = {}

    for field_name in VetConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise VetError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]; unwrap to X
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return the ``[vetcore]`` table, or the whole file
    when it has no such table."""
    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("vetcore")
    if isinstance(section, dict):
        return section
    return data
