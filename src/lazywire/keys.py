from __future__ import annotations

from typing import NamedTuple

from lazywire.exceptions import LazyWireInvalidKeyError

CONTAINER_KEY_SEPARATOR = ":"


class ContainerKey(NamedTuple):
    """Two-part ``"<kind>:<name>"`` key used to address services in a container.

    Examples:
        .. code-block:: python

            key = ContainerKey("controller", "session")
            assert str(key) == "controller:session"

    """

    kind: str
    name: str

    def __str__(self) -> str:
        return f"{self.kind}{CONTAINER_KEY_SEPARATOR}{self.name}"


def validate_key_part(value: str, *, part: str) -> str:
    """Return ``value`` unchanged when it is usable as one side of a container key.

    Raises:
        LazyWireInvalidKeyError: If ``value`` is not a non-empty string or
            contains the ``":"`` separator.

    """
    if not isinstance(value, str) or not value:
        msg = f"Container key {part} must be a non-empty string, got {value!r}."
        raise LazyWireInvalidKeyError(msg)
    if CONTAINER_KEY_SEPARATOR in value:
        msg = (
            f"Container key {part} {value!r} must not contain the "
            f"{CONTAINER_KEY_SEPARATOR!r} separator."
        )
        raise LazyWireInvalidKeyError(msg)
    return value


def format_container_key(kind: str, name: str) -> str:
    """Build the ``"<kind>:<name>"`` string for a validated kind and name."""
    return str(
        ContainerKey(
            validate_key_part(kind, part="kind"),
            validate_key_part(name, part="name"),
        ),
    )


def parse_container_key(key: str) -> ContainerKey:
    """Split a ``"<kind>:<name>"`` string into its parts.

    Raises:
        LazyWireInvalidKeyError: If ``key`` does not contain exactly one
            separator or either part is empty.

    """
    if not isinstance(key, str) or key.count(CONTAINER_KEY_SEPARATOR) != 1:
        msg = f"Container key must have the form '<kind>:<name>', got {key!r}."
        raise LazyWireInvalidKeyError(msg)
    kind, name = key.split(CONTAINER_KEY_SEPARATOR)
    return ContainerKey(
        validate_key_part(kind, part="kind"),
        validate_key_part(name, part="name"),
    )


__all__ = [
    "CONTAINER_KEY_SEPARATOR",
    "ContainerKey",
    "format_container_key",
    "parse_container_key",
    "validate_key_part",
]
