from __future__ import annotations

import pytest

from lazywire import Registry, inject
from lazywire.exceptions import LazyWireUnresolvedDependenciesError
from lazywire.settings import LazyWireSettings


class _Store:
    pass


class _Controller:
    store = inject.service()


def test_registry_fixture_is_available(lazywire_registry: Registry) -> None:
    assert isinstance(lazywire_registry, Registry)
    assert lazywire_registry.keys() == ()


def test_registry_fixture_uses_settings_fixture(
    lazywire_registry: Registry,
    lazywire_settings: LazyWireSettings,
) -> None:
    assert lazywire_registry.settings is lazywire_settings


@pytest.mark.lazywire_settings(verify_on_create=True)
def test_registry_fixture_verifies_on_create(lazywire_registry: Registry) -> None:
    with pytest.raises(LazyWireUnresolvedDependenciesError):
        lazywire_registry.create(_Controller)

    lazywire_registry.register("service:store", _Store)
    assert isinstance(lazywire_registry.create(_Controller).store, _Store)


@pytest.mark.lazywire_settings(verify_on_create=False, singleton_by_default=False)
def test_marker_overrides_settings(lazywire_registry: Registry) -> None:
    assert lazywire_registry.settings.verify_on_create is False
    assert lazywire_registry.settings.singleton_by_default is False

    controller = lazywire_registry.create(_Controller)
    assert controller.container is lazywire_registry
