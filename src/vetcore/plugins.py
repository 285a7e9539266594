"""Loading checkers from outside the core.

Two sources, loaded in this order:
    1. Entry points in the ``vetcore.checkers`` group; each resolves to a
       callable taking the registry.
    2. Modules named explicitly; each must define ``register(registry)``.
"""

from __future__ import annotations

import importlib
from importlib.metadata import entry_points
from typing import Iterable

from .checkers.registry import CheckerRegistry
from .exceptions import PluginLoadError
from .logging_config import get_logger

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "vetcore.checkers"


def load_entry_point_plugins(registry: CheckerRegistry, group: str = ENTRY_POINT_GROUP) -> int:
    """Load every installed checker entry point.

    Returns:
        Number of registrations added

    Raises:
        PluginLoadError: If an entry point fails to load or register
    """
    before = len(registry)
    for ep in sorted(entry_points(group=group), key=lambda ep: ep.name):
        try:
            hook = ep.load()
        except Exception as e:
            raise PluginLoadError(ep.name, f"{e.__class__.__name__}: {e}")
        _call_hook(ep.name, hook, registry)
    return len(registry) - before


def load_module_plugins(registry: CheckerRegistry, modules: Iterable[str]) -> int:
    """Import each module and call its ``register(registry)``.

    Returns:
        Number of registrations added

    Raises:
        PluginLoadError: If a module cannot be imported or has no ``register``
    """
    before = len(registry)
    for module_name in modules:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise PluginLoadError(module_name, str(e))
        hook = getattr(module, "register", None)
        if not callable(hook):
            raise PluginLoadError(module_name, "module defines no register(registry) function")
        _call_hook(module_name, hook, registry)
    return len(registry) - before


def load_plugins(
    registry: CheckerRegistry, modules: Iterable[str] = (), use_entry_points: bool = True
) -> int:
    """Load entry-point plugins (optionally) and then the named modules."""
    count = 0
    if use_entry_points:
        count += load_entry_point_plugins(registry)
    count += load_module_plugins(registry, modules)
    logger.debug(f"Loaded {count} checker registration(s) from plugins")
    return count


def _call_hook(name: str, hook, registry: CheckerRegistry) -> None:
    before = len(registry)
    try:
        hook(registry)
    except PluginLoadError:
        raise
    except Exception as e:
        raise PluginLoadError(name, f"{e.__class__.__name__}: {e}")
    logger.debug(f"Plugin {name} registered {len(registry) - before} checker(s)")
