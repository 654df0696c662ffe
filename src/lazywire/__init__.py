from lazywire.container import ContainerProtocol, Registry
from lazywire.exceptions import (
    LazyWireError,
    LazyWireInvalidKeyError,
    LazyWireInvalidOperationError,
    LazyWireInvalidRegistrationError,
    LazyWireMissingContainerError,
    LazyWireServiceNotRegisteredError,
    LazyWireUnresolvedDependenciesError,
)
from lazywire.injection import InjectedProperty, inject
from lazywire.keys import ContainerKey, format_container_key, parse_container_key
from lazywire.properties import (
    ComputedProperty,
    ObjectMeta,
    PlainProperty,
    PropertyDescriptor,
    PropertyKind,
    computed,
    define_property,
    destroy,
    meta,
    notify_property_change,
    teardown,
)
from lazywire.settings import LazyWireSettings
from lazywire.verification import (
    InjectionAudit,
    audit_injection_dependencies,
    verify_injection_dependencies,
)

__all__ = [
    "ComputedProperty",
    "ContainerKey",
    "ContainerProtocol",
    "InjectedProperty",
    "InjectionAudit",
    "LazyWireError",
    "LazyWireInvalidKeyError",
    "LazyWireInvalidOperationError",
    "LazyWireInvalidRegistrationError",
    "LazyWireMissingContainerError",
    "LazyWireServiceNotRegisteredError",
    "LazyWireSettings",
    "LazyWireUnresolvedDependenciesError",
    "ObjectMeta",
    "PlainProperty",
    "PropertyDescriptor",
    "PropertyKind",
    "Registry",
    "audit_injection_dependencies",
    "computed",
    "define_property",
    "destroy",
    "format_container_key",
    "inject",
    "meta",
    "notify_property_change",
    "parse_container_key",
    "teardown",
    "verify_injection_dependencies",
]
