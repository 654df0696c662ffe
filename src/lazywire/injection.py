from __future__ import annotations

import logging
from typing import Any

from lazywire.exceptions import LazyWireInvalidOperationError
from lazywire.keys import ContainerKey, validate_key_part
from lazywire.properties import ComputedProperty, PropertyKind, meta

logger = logging.getLogger(__name__)


class InjectedProperty(ComputedProperty):
    """Read-only property that looks up a service in the instance's container.

    On first read the property resolves ``"<kind>:<name>"`` through
    ``instance.container.lookup`` where ``name`` is the explicit name given at
    construction or, when omitted, the attribute name the property is declared
    under. The result is cached on the instance until the property is torn
    down; later reads never touch the container.

    Lookup failures (including a missing ``container`` attribute) propagate
    unchanged. Run ``verify_injection_dependencies`` after construction to
    reject instances whose injections cannot be satisfied.

    Args:
        kind: Container key namespace, for example ``"controller"``.
        name: Optional service name overriding the attribute name.

    Examples:
        .. code-block:: python

            class PostsController:
                session = InjectedProperty("service")
                application = InjectedProperty("controller", "application")

    """

    descriptor_kind = PropertyKind.INJECTED

    def __init__(self, kind: str, name: str | None = None) -> None:
        self._kind = validate_key_part(kind, part="kind")
        self._explicit_name = validate_key_part(name, part="name") if name else None
        super().__init__(self._lookup, read_only=True)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def explicit_name(self) -> str | None:
        return self._explicit_name

    def container_key(self, key_name: str) -> str:
        """Return the container key this property resolves when declared as ``key_name``."""
        return str(ContainerKey(self._kind, self._explicit_name or key_name))

    def set(self, obj: Any, key: str, value: Any) -> None:
        raise LazyWireInvalidOperationError(key, obj, description="injected")

    def teardown(self, obj: Any, key: str) -> None:
        cache = meta(obj).cache
        if key in cache:
            del cache[key]
            logger.debug("Tore down injected property %r on %s", key, type(obj).__qualname__)

    def _lookup(self, obj: Any, key_name: str) -> Any:
        container_key = self.container_key(key_name)
        logger.debug(
            "Resolving injected property %r on %s from %r",
            key_name,
            type(obj).__qualname__,
            container_key,
        )
        return obj.container.lookup(container_key)

    def __repr__(self) -> str:
        if self._explicit_name is None:
            return f"InjectedProperty({self._kind!r})"
        return f"InjectedProperty({self._kind!r}, {self._explicit_name!r})"


class _InjectNamespace:
    """Shortcuts for declaring injected properties by container namespace."""

    def controller(self, name: str | None = None) -> InjectedProperty:
        """Create a property that lazily looks up a ``controller:`` entry."""
        return InjectedProperty("controller", name)

    def service(self, name: str | None = None) -> InjectedProperty:
        """Create a property that lazily looks up a ``service:`` entry."""
        return InjectedProperty("service", name)

    def by_kind(self, kind: str, name: str | None = None) -> InjectedProperty:
        """Create a property that lazily looks up an entry in namespace ``kind``."""
        return InjectedProperty(kind, name)


inject = _InjectNamespace()
"""Namespace of injected property factories: ``inject.controller("posts")``."""


__all__ = ["InjectedProperty", "inject"]
