"""
Registry of checkers and the dispatch tables derived from it.

A checker is a named handler bound to one or more node kinds. The registry
keeps one record per ``register`` call, in call order, and each record holds
its own enabled flag. Sessions never read the records directly: they ask for
a DispatchTable, which lists only enabled handlers, per kind, in registration
order.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional, Union

from ..exceptions import RegistryError
from ..logging_config import get_logger
from ..syntax.kinds import NodeKind

if TYPE_CHECKING:
    from ..syntax.tree import SyntaxNode
    from .context import FileContext

logger = get_logger(__name__)

Handler = Callable[["FileContext", "SyntaxNode"], None]


@dataclass
class CheckerRegistration:
    """One registered checker.

    Attributes:
        name: Identifier used for enablement; not unique across records
        kinds: Node kinds the handler runs on
        handler: Called as ``handler(context, node)``
        usage: One-line description shown by ``--list``
        enabled: Whether the handler is included in dispatch tables
    """

    name: str
    kinds: frozenset[NodeKind]
    handler: Handler
    usage: str = ""
    enabled: bool = True


@dataclass(frozen=True)
class Binding:
    """A handler as placed in a dispatch table, tagged with its checker name."""

    name: str
    handler: Handler


class DispatchTable:
    """Immutable mapping from node kind to the handlers bound to it."""

    def __init__(self, bindings: Mapping[NodeKind, tuple[Binding, ...]]):
        self._bindings = MappingProxyType(dict(bindings))

    def handlers_for(self, kind: Optional[NodeKind]) -> tuple[Binding, ...]:
        if kind is None:
            return ()
        return self._bindings.get(kind, ())

    def kinds(self) -> frozenset[NodeKind]:
        return frozenset(self._bindings)

    def __len__(self) -> int:
        return sum(len(b) for b in self._bindings.values())

    def __bool__(self) -> bool:
        return bool(self._bindings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DispatchTable):
            return NotImplemented
        return dict(self._bindings) == dict(other._bindings)

    def __repr__(self) -> str:
        summary = ", ".join(
            f"{kind.value}: [{', '.join(b.name for b in bindings)}]"
            for kind, bindings in self._bindings.items()
        )
        return f"DispatchTable({summary})"


class CheckerRegistry:
    """Central registry for checkers.

    Built once at startup, then sealed before the first session runs.
    """

    def __init__(self) -> None:
        self._registrations: list[CheckerRegistration] = []
        self._allowed: Optional[set[str]] = None
        self._denied: set[str] = set()
        self._sealed = False

    def register(
        self,
        name: str,
        kinds: Iterable[Union[NodeKind, str]],
        handler: Handler,
        usage: str = "",
    ) -> CheckerRegistration:
        """Register ``handler`` to run on every node whose kind is in ``kinds``.

        Kinds may be given as NodeKind members or by name (``"call-expression"``).
        Registering a name twice keeps both records. A registration with no
        kinds is accepted and never dispatched. Earlier restrict, enable and
        disable calls decide whether the new record starts enabled.

        Raises:
            RegistryError: If the registry is sealed or a kind is unknown
        """
        self._check_unsealed(f"register checker '{name}'")
        kind_set = frozenset(_as_kind(name, kind) for kind in kinds)
        registration = CheckerRegistration(
            name=name,
            kinds=kind_set,
            handler=handler,
            usage=usage,
            enabled=self._admits(name),
        )
        self._registrations.append(registration)
        logger.debug(
            f"Registered checker {name} for "
            f"{sorted(k.value for k in kind_set) or 'no kinds'}"
        )
        return registration

    def checker(self, name: str, *kinds: NodeKind, usage: str = "") -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`register`.

        Example:
            >>> @registry.checker("calls", NodeKind.CALL_EXPRESSION)
            ... def check_call(ctx, node):
            ...     ctx.report(node, "call")
        """

        def decorator(handler: Handler) -> Handler:
            self.register(name, kinds, handler, usage=usage)
            return handler

        return decorator

    def restrict(self, names: Iterable[str]) -> None:
        """Enable exactly the checkers named in ``names``; disable the rest.

        The allow-set also applies to checkers registered later, and replaces
        any earlier enable or disable calls.
        """
        self._check_unsealed("restrict checkers")
        allowed = set(names)
        self._allowed = allowed
        self._denied.clear()
        known = set(self.names())
        for unknown in sorted(allowed - known):
            logger.warning(f"Checker '{unknown}' is not registered")
        for registration in self._registrations:
            registration.enabled = registration.name in allowed

    def enable(self, name: str) -> None:
        self._set_enabled(name, True)

    def disable(self, name: str) -> None:
        self._set_enabled(name, False)

    def _set_enabled(self, name: str, enabled: bool) -> None:
        self._check_unsealed(f"{'enable' if enabled else 'disable'} checker '{name}'")
        if enabled:
            self._denied.discard(name)
            if self._allowed is not None:
                self._allowed.add(name)
        else:
            self._denied.add(name)
        found = False
        for registration in self._registrations:
            if registration.name == name:
                registration.enabled = enabled
                found = True
        if not found:
            logger.warning(f"Checker '{name}' is not registered")

    def _admits(self, name: str) -> bool:
        if name in self._denied:
            return False
        return self._allowed is None or name in self._allowed

    def is_enabled(self, name: str) -> bool:
        return any(r.enabled for r in self._registrations if r.name == name)

    def dispatch_table(self) -> DispatchTable:
        """Build the per-kind handler lists from the enabled registrations."""
        bindings: dict[NodeKind, list[Binding]] = {}
        for registration in self._registrations:
            if not registration.enabled:
                continue
            # Iterate kinds in enum order so the table's own key order is stable
            for kind in NodeKind:
                if kind in registration.kinds:
                    bindings.setdefault(kind, []).append(
                        Binding(registration.name, registration.handler)
                    )
        return DispatchTable({kind: tuple(b) for kind, b in bindings.items()})

    def names(self) -> list[str]:
        """Registered checker names in first-registration order, without repeats."""
        seen: dict[str, None] = {}
        for registration in self._registrations:
            seen.setdefault(registration.name, None)
        return list(seen)

    def registrations(self) -> list[CheckerRegistration]:
        return self._registrations.copy()

    def seal(self) -> None:
        """Freeze registrations and enablement for the rest of the run."""
        self._sealed = True

    def _check_unsealed(self, action: str) -> None:
        if self._sealed:
            raise RegistryError(f"cannot {action}: registry is sealed")

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._registrations)


def _as_kind(name: str, kind: object) -> NodeKind:
    if isinstance(kind, NodeKind):
        return kind
    if isinstance(kind, str):
        try:
            return NodeKind.parse(kind)
        except ValueError as e:
            raise RegistryError(f"checker '{name}' declares {e}")
    raise RegistryError(f"checker '{name}' declares {kind!r}, which is not a NodeKind")
