from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar
from weakref import WeakKeyDictionary

from lazywire.exceptions import LazyWireInvalidOperationError
from lazywire.keys import validate_key_part

logger = logging.getLogger(__name__)

_META_ATTR = "__lazywire_meta__"
_MISSING = object()

Getter = Callable[[Any, str], Any]
"""Derivation rule ``(instance, property_name) -> value``."""

Setter = Callable[[Any, str, Any], Any]
"""Write rule ``(instance, property_name, value) -> stored_value``."""


class PropertyKind(str, Enum):
    """Tag identifying the variant of a declared property descriptor."""

    PLAIN = "plain"
    """Stores assigned values on the instance."""

    COMPUTED = "computed"
    """Derives its value lazily and caches it per instance."""

    INJECTED = "injected"
    """Resolves its value from the instance's container."""


class PropertyDescriptor:
    """Base class for declared properties.

    A descriptor is shared by every instance of the declaring type. Values live
    in the per-instance ``ObjectMeta.cache``, never on the descriptor itself.
    Subclasses set ``descriptor_kind`` and implement ``get``/``set``; the
    default ``teardown`` drops the instance's cache entry for the property.
    """

    descriptor_kind: ClassVar[PropertyKind]
    dependent_keys: tuple[str, ...] = ()

    def __init__(self) -> None:
        self.name: str | None = None

    def __set_name__(self, owner: type[Any], name: str) -> None:
        if self.name is None:
            self.name = name
        elif self.name != name:
            msg = (
                f"Cannot assign the same {type(self).__name__} to two different names "
                f"({self.name!r} and {name!r})."
            )
            raise TypeError(msg)

    def __get__(self, obj: Any, objtype: type[Any] | None = None) -> Any:
        if obj is None:
            return self
        return self.get(obj, self._bound_name())

    def __set__(self, obj: Any, value: Any) -> None:
        self.set(obj, self._bound_name(), value)

    def __delete__(self, obj: Any) -> None:
        self.teardown(obj, self._bound_name())

    def get(self, obj: Any, key: str) -> Any:
        """Return the value of property ``key`` on ``obj``."""
        raise NotImplementedError

    def set(self, obj: Any, key: str, value: Any) -> None:
        """Assign ``value`` to property ``key`` on ``obj``."""
        raise NotImplementedError

    def teardown(self, obj: Any, key: str) -> None:
        """Forget the value stored for ``key`` on ``obj``."""
        meta(obj).cache.pop(key, None)

    def _bound_name(self) -> str:
        if self.name is None:
            msg = (
                f"{type(self).__name__} is not bound to an attribute name. "
                "Declare it in a class body or install it with define_property()."
            )
            raise TypeError(msg)
        return self.name


class PlainProperty(PropertyDescriptor):
    """Property that stores whatever is assigned and returns ``default`` until then.

    Assignments notify computed properties that list this property among their
    dependent keys.
    """

    descriptor_kind = PropertyKind.PLAIN

    def __init__(self, default: Any = None) -> None:
        super().__init__()
        self.default = default

    def get(self, obj: Any, key: str) -> Any:
        return meta(obj).cache.get(key, self.default)

    def set(self, obj: Any, key: str, value: Any) -> None:
        meta(obj).cache[key] = value
        notify_property_change(obj, key)

    def __repr__(self) -> str:
        return f"PlainProperty(default={self.default!r})"


class ComputedProperty(PropertyDescriptor):
    """Lazily derived property cached per instance.

    The getter runs on the first read of each instance and its result is kept
    in the instance cache until the property is torn down, either explicitly
    (``del obj.attr`` / ``teardown``) or because one of its ``dependent_keys``
    changed. The value is fully computed before it is stored.

    Args:
        getter: Derivation rule called as ``getter(instance, property_name)``.
        *dependent_keys: Names of properties whose change invalidates this one.
        setter: Optional write rule called as ``setter(instance, property_name,
            value)``; its return value is cached. Without a setter an assigned
            value is cached as-is and overrides the getter until teardown.
        read_only: Reject every assignment with
            ``LazyWireInvalidOperationError``.
        cacheable: When ``False`` the getter runs on every read.

    """

    descriptor_kind = PropertyKind.COMPUTED

    def __init__(
        self,
        getter: Getter,
        *dependent_keys: str,
        setter: Setter | None = None,
        read_only: bool = False,
        cacheable: bool = True,
    ) -> None:
        super().__init__()
        self._getter = getter
        self._setter = setter
        self.dependent_keys = dependent_keys
        self.read_only = read_only
        self.cacheable = cacheable

    def get(self, obj: Any, key: str) -> Any:
        cache = meta(obj).cache
        cached = cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cached

        value = self._getter(obj, key)
        if self.cacheable:
            cache[key] = value
        return value

    def set(self, obj: Any, key: str, value: Any) -> None:
        if self.read_only:
            raise LazyWireInvalidOperationError(key, obj)

        if self._setter is not None:
            value = self._setter(obj, key, value)
        if self.cacheable:
            meta(obj).cache[key] = value
        notify_property_change(obj, key)

    def setter(self, fn: Callable[[Any, Any], Any]) -> ComputedProperty:
        """Attach a setter written as a method ``fn(self, value) -> stored_value``.

        Examples:
            .. code-block:: python

                class Person:
                    first = PlainProperty("")

                    @computed("first")
                    def greeting(self) -> str:
                        return f"Hello, {self.first}"

                    @greeting.setter
                    def greeting(self, value: str) -> str:
                        return value.strip()

        """
        if self.read_only:
            msg = f"Cannot attach a setter to read-only {type(self).__name__}."
            raise TypeError(msg)
        self._setter = lambda obj, _key, value: fn(obj, value)
        return self


def computed(
    *dependent_keys: str,
    read_only: bool = False,
    cacheable: bool = True,
) -> Callable[[Callable[[Any], Any]], ComputedProperty]:
    """Build a ``ComputedProperty`` from a method ``fn(self) -> value``."""

    def decorator(fn: Callable[[Any], Any]) -> ComputedProperty:
        prop = ComputedProperty(
            lambda obj, _key: fn(obj),
            *dependent_keys,
            read_only=read_only,
            cacheable=cacheable,
        )
        prop.__doc__ = fn.__doc__
        return prop

    return decorator


@dataclass(slots=True)
class ObjectMeta:
    """Per-instance property state.

    ``descriptors`` is the owner type's shared, read-only descriptor table;
    ``cache`` maps property names to values stored for this instance only.
    """

    owner: type[Any]
    cache: dict[str, Any] = field(default_factory=dict)

    @property
    def descriptors(self) -> Mapping[str, PropertyDescriptor]:
        return descriptor_table(self.owner)


_DESCRIPTOR_TABLES: WeakKeyDictionary[type[Any], Mapping[str, PropertyDescriptor]] = (
    WeakKeyDictionary()
)


def descriptor_table(cls: type[Any]) -> Mapping[str, PropertyDescriptor]:
    """Return the declared properties of ``cls`` including inherited ones.

    Entries are ordered base classes first, each in definition order. A
    subclass overriding a property keeps the overridden entry's position; a
    subclass shadowing it with a non-descriptor attribute removes it.
    """
    table = _DESCRIPTOR_TABLES.get(cls)
    if table is not None:
        return table

    entries: dict[str, PropertyDescriptor] = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, PropertyDescriptor):
                entries[name] = value
            elif name in entries:
                del entries[name]

    table = MappingProxyType(entries)
    _DESCRIPTOR_TABLES[cls] = table
    return table


def meta(obj: Any) -> ObjectMeta:
    """Return the metadata of ``obj``, creating it on first use.

    Raises:
        TypeError: If ``obj`` has no instance ``__dict__``.

    """
    namespace = vars(obj)
    object_meta = namespace.get(_META_ATTR)
    if object_meta is None:
        object_meta = ObjectMeta(owner=type(obj))
        namespace[_META_ATTR] = object_meta
    return object_meta


def define_property(target: type[Any], name: str, descriptor: PropertyDescriptor) -> None:
    """Install ``descriptor`` as property ``name`` on an already created class.

    Raises:
        TypeError: If ``target`` is not a class or ``descriptor`` is already
            bound to another name.
        LazyWireInvalidKeyError: If ``descriptor`` is an injected property and
            ``name`` cannot be used as a container key name.

    """
    if not isinstance(target, type):
        msg = f"define_property() expects a class, got {target!r}."
        raise TypeError(msg)

    if descriptor.descriptor_kind is PropertyKind.INJECTED:
        validate_key_part(name, part="name")
    descriptor.__set_name__(target, name)
    setattr(target, name, descriptor)
    _DESCRIPTOR_TABLES.clear()
    logger.debug("Defined %s property %r on %s", descriptor.descriptor_kind.value, name, target)


def teardown(obj: Any, key: str) -> None:
    """Tear down declared property ``key`` on ``obj`` through its descriptor.

    Raises:
        AttributeError: If ``obj`` declares no property named ``key``.

    """
    descriptor = meta(obj).descriptors.get(key)
    if descriptor is None:
        msg = f"{type(obj).__qualname__!r} object has no declared property {key!r}"
        raise AttributeError(msg)
    descriptor.teardown(obj, key)


def destroy(obj: Any) -> None:
    """Tear down every declared property of ``obj`` and drop its metadata."""
    object_meta = meta(obj)
    for key, descriptor in object_meta.descriptors.items():
        descriptor.teardown(obj, key)
    vars(obj).pop(_META_ATTR, None)
    logger.debug("Destroyed property state of %s", type(obj).__qualname__)


def notify_property_change(obj: Any, key: str) -> None:
    """Invalidate cached properties of ``obj`` that depend on ``key``.

    Invalidation follows ``dependent_keys`` transitively. The changed property
    itself is left alone.
    """
    descriptors = meta(obj).descriptors
    pending = [key]
    invalidated = {key}
    while pending:
        changed = pending.pop()
        for name, descriptor in descriptors.items():
            if name in invalidated or changed not in descriptor.dependent_keys:
                continue
            invalidated.add(name)
            descriptor.teardown(obj, name)
            pending.append(name)


__all__ = [
    "ComputedProperty",
    "Getter",
    "ObjectMeta",
    "PlainProperty",
    "PropertyDescriptor",
    "PropertyKind",
    "Setter",
    "computed",
    "define_property",
    "descriptor_table",
    "destroy",
    "meta",
    "notify_property_change",
    "teardown",
]
