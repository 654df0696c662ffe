"""Tests for custom exception hierarchy."""

import pytest

from lazywire.exceptions import (
    LazyWireError,
    LazyWireInvalidKeyError,
    LazyWireInvalidOperationError,
    LazyWireInvalidRegistrationError,
    LazyWireMissingContainerError,
    LazyWireServiceNotRegisteredError,
    LazyWireUnresolvedDependenciesError,
)


class Widget:
    pass


class Named:
    def __repr__(self) -> str:
        return "<Named widget>"


class Verbose:
    def __repr__(self) -> str:
        return "x" * 500


class Unrepresentable:
    def __repr__(self) -> str:
        raise RuntimeError("no repr")


@pytest.mark.parametrize(
    "error",
    [
        LazyWireInvalidOperationError("session", Widget()),
        LazyWireMissingContainerError(Widget()),
        LazyWireUnresolvedDependenciesError(Widget(), ["controller:foo"]),
        LazyWireInvalidKeyError("bad key"),
        LazyWireInvalidRegistrationError("bad registration"),
        LazyWireServiceNotRegisteredError("service:store"),
    ],
)
def test_every_error_is_a_lazywire_error(error: Exception) -> None:
    assert isinstance(error, LazyWireError)
    assert isinstance(error, Exception)


class TestMessages:
    def test_default_object_description(self) -> None:
        widget = Widget()

        message = str(LazyWireMissingContainerError(widget))

        assert message.startswith(f"<{__name__}.Widget:{id(widget):#x}> defines an injected")
        assert message.endswith("Ensure that the object was instantiated via a container.")

    def test_custom_repr_is_used(self) -> None:
        error = LazyWireInvalidOperationError("session", Named(), description="injected")

        assert str(error) == 'Cannot set injected property "session" on object: <Named widget>'

    def test_long_repr_is_truncated(self) -> None:
        message = str(LazyWireMissingContainerError(Verbose()))

        assert message.startswith("x" * 117 + "...")
        assert "x" * 121 not in message

    def test_failing_repr_falls_back(self) -> None:
        message = str(LazyWireMissingContainerError(Unrepresentable()))

        assert message.startswith("<Unrepresentable (unrepresentable):0x")

    def test_unresolved_plural_and_singular(self) -> None:
        plural = LazyWireUnresolvedDependenciesError(Named(), ["a:b", "c:d"])
        singular = LazyWireUnresolvedDependenciesError(Named(), iter(["a:b"]))

        assert str(plural) == "<Named widget> needs [ a:b, c:d ] but they could not be found"
        assert str(singular) == "<Named widget> needs [ a:b ] but it could not be found"
        assert singular.missing == ("a:b",)

    def test_service_not_registered(self) -> None:
        error = LazyWireServiceNotRegisteredError("service:store")

        assert error.key == "service:store"
        assert str(error) == "Service 'service:store' is not registered."
