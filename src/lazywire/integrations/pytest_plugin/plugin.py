from __future__ import annotations

import pytest

from lazywire.container import Registry
from lazywire.settings import LazyWireSettings

_SETTINGS_MARKER = "lazywire_settings"


@pytest.fixture()
def lazywire_settings(request: pytest.FixtureRequest) -> LazyWireSettings:
    """Return the settings used by ``lazywire_registry``.

    Values come from ``LAZYWIRE_*`` environment variables, overridden by the
    keyword arguments of the closest ``@pytest.mark.lazywire_settings(...)``
    marker.

    Returns:
        A new ``LazyWireSettings`` instance.

    """
    marker = request.node.get_closest_marker(_SETTINGS_MARKER)
    overrides = dict(marker.kwargs) if marker is not None else {}
    return LazyWireSettings(**overrides)


@pytest.fixture()
def lazywire_registry(lazywire_settings: LazyWireSettings) -> Registry:
    """Create a per-test service registry.

    The fixture is function-scoped, so registrations are isolated between
    tests unless users override fixture scope explicitly.

    Returns:
        A new empty ``Registry``.

    """
    return Registry(settings=lazywire_settings)


def pytest_configure(config: pytest.Config) -> None:
    """Register the ``lazywire_settings`` marker."""
    config.addinivalue_line(
        "markers",
        f"{_SETTINGS_MARKER}(**overrides): override LazyWireSettings fields for one test",
    )
