"""Shared pytest fixtures for lazywire tests."""

import pytest

from lazywire.container import Registry
from lazywire.settings import LazyWireSettings

pytest_plugins = ["lazywire.integrations.pytest_plugin.plugin"]


@pytest.fixture()
def registry() -> Registry:
    """Registry with verification on create and singleton registrations."""
    return Registry(settings=LazyWireSettings(verify_on_create=True, singleton_by_default=True))


@pytest.fixture()
def registry_unverified() -> Registry:
    """Registry that skips verification in create()."""
    return Registry(settings=LazyWireSettings(verify_on_create=False))
