import pytest

from lazywire.exceptions import LazyWireInvalidKeyError
from lazywire.keys import (
    CONTAINER_KEY_SEPARATOR,
    ContainerKey,
    format_container_key,
    parse_container_key,
    validate_key_part,
)


def test_container_key_renders_with_separator() -> None:
    key = ContainerKey("controller", "session")

    assert str(key) == "controller:session"
    assert CONTAINER_KEY_SEPARATOR == ":"


def test_format_container_key() -> None:
    assert format_container_key("service", "store") == "service:store"


def test_parse_container_key() -> None:
    assert parse_container_key("service:store") == ContainerKey(kind="service", name="store")


@pytest.mark.parametrize(
    "key",
    ["", "service", "service:", ":store", "a:b:c", 42],
)
def test_parse_rejects_malformed_keys(key: object) -> None:
    with pytest.raises(LazyWireInvalidKeyError):
        parse_container_key(key)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("kind", "name"),
    [("con:troller", "session"), ("controller", "ses:sion"), ("", "session"), ("service", "")],
)
def test_format_rejects_invalid_parts(kind: str, name: str) -> None:
    with pytest.raises(LazyWireInvalidKeyError):
        format_container_key(kind, name)


def test_validate_key_part_error_names_the_part() -> None:
    with pytest.raises(LazyWireInvalidKeyError, match="Container key kind"):
        validate_key_part("a:b", part="kind")


def test_invalid_key_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="separator"):
        validate_key_part("a:b", part="name")
