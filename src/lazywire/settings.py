from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class LazyWireSettings(BaseSettings):
    """Registry defaults, read from ``LAZYWIRE_*`` environment variables.

    Examples:
        .. code-block:: python

            # LAZYWIRE_VERIFY_ON_CREATE=false disables verification in Registry.create
            registry = Registry(settings=LazyWireSettings(singleton_by_default=False))

    """

    model_config = SettingsConfigDict(env_prefix="LAZYWIRE_", frozen=True)

    verify_on_create: bool = True
    """Run ``verify_injection_dependencies`` on every ``Registry.create``."""

    singleton_by_default: bool = True
    """Cache factory results in ``Registry`` unless a registration opts out."""


__all__ = ["LazyWireSettings"]
