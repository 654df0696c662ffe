from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, cast, runtime_checkable

from lazywire.exceptions import (
    LazyWireInvalidRegistrationError,
    LazyWireServiceNotRegisteredError,
)
from lazywire.keys import parse_container_key
from lazywire.properties import descriptor_table
from lazywire.settings import LazyWireSettings
from lazywire.verification import injected_properties, verify_injection_dependencies

T = TypeVar("T")

logger = logging.getLogger(__name__)


@runtime_checkable
class ContainerProtocol(Protocol):
    """Contract injected properties and the verifier rely on."""

    def has(self, key: str) -> bool:
        """Return True when ``key`` can be resolved.

        Args:
            key: Container key in ``"<kind>:<name>"`` form.

        """

    def lookup(self, key: str) -> Any:
        """Resolve ``key`` to a service instance.

        Args:
            key: Container key in ``"<kind>:<name>"`` form.

        """


@dataclass(frozen=True, slots=True)
class _Registration:
    key: str
    factory: Callable[[], Any] | type[Any]
    singleton: bool


class Registry:
    """In-memory, string-keyed service container.

    Services are registered under ``"<kind>:<name>"`` keys either as ready
    instances or as factories. A class factory that declares injected
    properties is built through ``create``, so its own injections resolve from
    this registry; any other factory is simply called.

    Args:
        settings: Registry defaults. Defaults to ``LazyWireSettings()``, which
            reads ``LAZYWIRE_*`` environment variables.

    Examples:
        .. code-block:: python

            registry = Registry()
            registry.register("service:session", Session)
            controller = registry.create(PostsController)
            controller.session  # resolved and cached on first read

    """

    def __init__(self, *, settings: LazyWireSettings | None = None) -> None:
        self._settings = settings if settings is not None else LazyWireSettings()
        self._registrations: dict[str, _Registration] = {}
        self._instances: dict[str, Any] = {}

    @property
    def settings(self) -> LazyWireSettings:
        return self._settings

    def register(
        self,
        key: str,
        factory: Callable[[], Any] | type[Any],
        *,
        singleton: bool | None = None,
    ) -> None:
        """Register a factory for ``key``, replacing any previous registration.

        Args:
            key: Container key in ``"<kind>:<name>"`` form.
            factory: Zero-argument callable or class. Classes declaring
                injected properties are built with ``create``.
            singleton: Cache the first built instance. Defaults to
                ``settings.singleton_by_default``.

        Raises:
            LazyWireInvalidKeyError: If ``key`` is malformed.
            LazyWireInvalidRegistrationError: If ``factory`` is not callable.

        """
        container_key = str(parse_container_key(key))
        if not callable(factory):
            msg = f"Factory for '{container_key}' must be a class or callable, got {factory!r}."
            raise LazyWireInvalidRegistrationError(msg)

        if singleton is None:
            singleton = self._settings.singleton_by_default
        self._registrations[container_key] = _Registration(
            key=container_key,
            factory=factory,
            singleton=singleton,
        )
        self._instances.pop(container_key, None)
        logger.debug("Registered %r (singleton=%s)", container_key, singleton)

    def register_instance(self, key: str, instance: Any) -> None:
        """Register a ready ``instance`` for ``key``."""
        container_key = str(parse_container_key(key))
        self._registrations[container_key] = _Registration(
            key=container_key,
            factory=lambda: instance,
            singleton=True,
        )
        self._instances[container_key] = instance
        logger.debug("Registered instance for %r", container_key)

    def unregister(self, key: str) -> None:
        """Remove the registration and any cached instance for ``key``.

        Raises:
            LazyWireServiceNotRegisteredError: If ``key`` is not registered.

        """
        if self._registrations.pop(key, None) is None:
            raise LazyWireServiceNotRegisteredError(key)
        self._instances.pop(key, None)
        logger.debug("Unregistered %r", key)

    def has(self, key: str) -> bool:
        return key in self._registrations

    def keys(self) -> tuple[str, ...]:
        """Return registered keys in registration order."""
        return tuple(self._registrations)

    def lookup(self, key: str) -> Any:
        """Resolve ``key``, building and caching the service as registered.

        Raises:
            LazyWireServiceNotRegisteredError: If ``key`` is not registered.

        """
        if key in self._instances:
            return self._instances[key]

        registration = self._registrations.get(key)
        if registration is None:
            raise LazyWireServiceNotRegisteredError(key)

        factory = registration.factory
        if inspect.isclass(factory) and injected_properties(descriptor_table(factory)):
            instance = self.create(factory)
        else:
            instance = factory()
        if registration.singleton:
            self._instances[key] = instance
        return instance

    def create(self, cls: type[T], /, **kwargs: Any) -> T:
        """Instantiate ``cls``, attach this registry as its container and verify it.

        Args:
            cls: Class to instantiate.
            **kwargs: Keyword arguments passed to ``cls``.

        Raises:
            LazyWireUnresolvedDependenciesError: If verification is enabled and
                the instance declares injections this registry cannot satisfy.

        """
        instance = cls(**kwargs)
        cast("Any", instance).container = self
        if self._settings.verify_on_create:
            verify_injection_dependencies(instance)
        return instance


__all__ = ["ContainerProtocol", "Registry"]
