"""Checker registration, dispatch, and tree walking."""

from .context import FileContext
from .registry import Binding, CheckerRegistration, CheckerRegistry, DispatchTable, Handler
from .walker import walk

__all__ = [
    "CheckerRegistry",
    "CheckerRegistration",
    "DispatchTable",
    "Binding",
    "Handler",
    "FileContext",
    "walk",
]
