from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, cast

from typing_extensions import assert_never

from lazywire.exceptions import LazyWireMissingContainerError, LazyWireUnresolvedDependenciesError
from lazywire.injection import InjectedProperty
from lazywire.properties import ObjectMeta, PropertyDescriptor, PropertyKind, descriptor_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InjectionAudit:
    """Outcome of one dependency audit of an instance.

    ``has_container`` is ``None`` when the instance declares no injections,
    because the container is not consulted in that case. ``missing`` lists the
    unresolvable container keys in declaration order.
    """

    target: Any
    injections: tuple[tuple[str, InjectedProperty], ...]
    has_container: bool | None
    missing: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.injections or (bool(self.has_container) and not self.missing)

    def raise_for_problems(self) -> None:
        """Raise the error describing this audit's failure, if any.

        Raises:
            LazyWireMissingContainerError: If injections are declared but the
                instance has no container.
            LazyWireUnresolvedDependenciesError: If any injected key is
                missing from the container.

        """
        if not self.injections:
            return
        if not self.has_container:
            raise LazyWireMissingContainerError(self.target)
        if self.missing:
            raise LazyWireUnresolvedDependenciesError(self.target, self.missing)


def is_injection(descriptor: PropertyDescriptor) -> bool:
    """Return True when ``descriptor`` is an injected property."""
    descriptor_kind = descriptor.descriptor_kind
    if descriptor_kind is PropertyKind.INJECTED:
        return True
    if descriptor_kind is PropertyKind.PLAIN or descriptor_kind is PropertyKind.COMPUTED:
        return False
    assert_never(descriptor_kind)


def injected_properties(
    descriptors: Mapping[str, PropertyDescriptor],
) -> tuple[tuple[str, InjectedProperty], ...]:
    """Return ``(name, descriptor)`` pairs of declared injections in table order."""
    return tuple(
        (name, cast("InjectedProperty", descriptor))
        for name, descriptor in descriptors.items()
        if is_injection(descriptor)
    )


def audit_injection_dependencies(
    obj: Any,
    object_meta: ObjectMeta | None = None,
) -> InjectionAudit:
    """Check that every injected property of ``obj`` can be resolved.

    Only ``container.has`` is called, once per injection and never when the
    container is absent. Nothing is cached.

    Args:
        obj: Instance to audit.
        object_meta: Metadata of ``obj``. Defaults to the descriptor table of
            ``type(obj)``; no metadata is allocated on ``obj``.

    Returns:
        The audit outcome. Call ``raise_for_problems`` to turn failures into
        errors.

    """
    descriptors = (
        descriptor_table(type(obj)) if object_meta is None else object_meta.descriptors
    )
    injections = injected_properties(descriptors)
    if not injections:
        return InjectionAudit(target=obj, injections=(), has_container=None, missing=())

    container = getattr(obj, "container", None)
    if container is None:
        return InjectionAudit(target=obj, injections=injections, has_container=False, missing=())

    missing: list[str] = []
    for key_name, descriptor in injections:
        container_key = descriptor.container_key(key_name)
        if not container.has(container_key):
            missing.append(container_key)

    return InjectionAudit(
        target=obj,
        injections=injections,
        has_container=True,
        missing=tuple(missing),
    )


def verify_injection_dependencies(obj: Any, object_meta: ObjectMeta | None = None) -> None:
    """Fail fast when ``obj`` declares injections its container cannot satisfy.

    Instances without injected properties pass without a container.

    Raises:
        LazyWireMissingContainerError: If injections are declared but ``obj``
            has no container.
        LazyWireUnresolvedDependenciesError: If one or more injected keys are
            missing; the error lists all of them.

    """
    audit = audit_injection_dependencies(obj, object_meta)
    if not audit.ok:
        logger.debug(
            "Injection audit failed for %s: has_container=%s missing=%s",
            type(obj).__qualname__,
            audit.has_container,
            audit.missing,
        )
    audit.raise_for_problems()
    logger.debug(
        "Verified %d injected properties of %s",
        len(audit.injections),
        type(obj).__qualname__,
    )


__all__ = [
    "InjectionAudit",
    "audit_injection_dependencies",
    "injected_properties",
    "is_injection",
    "verify_injection_dependencies",
]
