from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from lazywire._internal.inspection import inspect_object


class LazyWireError(Exception):
    """Represent a base class for all lazywire-specific failures.

    Catch this type when you want to handle any lazywire error path without
    matching each concrete exception class individually.
    """


class LazyWireInvalidOperationError(LazyWireError):
    """Signal an assignment to a read-only property.

    Raised by ``InjectedProperty`` for every assignment and by read-only
    ``ComputedProperty`` descriptors. The cached value, if any, is left
    untouched.

    Typical fix is registering a different service in the container instead
    of overriding the attribute on the instance.
    """

    def __init__(self, key: str, target: Any, *, description: str = "read-only") -> None:
        self.key = key
        self.target = target
        super().__init__(
            f'Cannot set {description} property "{key}" on object: {inspect_object(target)}',
        )


class LazyWireMissingContainerError(LazyWireError):
    """Signal an instance that declares injections but has no container.

    Raised by ``verify_injection_dependencies`` before any container access.
    It indicates the object was created outside the container-aware
    construction path.

    Typical fix is creating the object with ``Registry.create`` or assigning
    ``instance.container`` before verification.
    """

    def __init__(self, target: Any) -> None:
        self.target = target
        super().__init__(
            f"{inspect_object(target)} defines an injected property, but does not have "
            "a container. Ensure that the object was instantiated via a container.",
        )


class LazyWireUnresolvedDependenciesError(LazyWireError):
    """Signal that one or more injected properties cannot be satisfied.

    ``missing`` holds every missing container key in the order the injected
    properties were declared.
    """

    def __init__(self, target: Any, missing: Iterable[str]) -> None:
        self.target = target
        self.missing = tuple(missing)
        pronoun = "they" if len(self.missing) > 1 else "it"
        super().__init__(
            f"{inspect_object(target)} needs [ {', '.join(self.missing)} ] "
            f"but {pronoun} could not be found",
        )


class LazyWireInvalidKeyError(LazyWireError, ValueError):
    """Signal a malformed ``"<kind>:<name>"`` container key or key part."""


class LazyWireInvalidRegistrationError(LazyWireError):
    """Signal an invalid ``Registry.register`` call.

    Raised when the factory is neither a class nor a callable.
    """


class LazyWireServiceNotRegisteredError(LazyWireError, LookupError):
    """Signal a ``Registry.lookup`` for a key that has no registration.

    Typical fixes include registering the key with ``Registry.register`` or
    ``Registry.register_instance`` before the first read of the injected
    property, or running ``verify_injection_dependencies`` up front.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Service '{key}' is not registered.")
