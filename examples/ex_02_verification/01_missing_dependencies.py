"""Verification: every missing dependency is reported at once.

``Registry.create`` audits the injected properties before returning the
instance, so a misconfigured registry fails at construction time instead of at
the first read.
"""

from __future__ import annotations

from lazywire import LazyWireUnresolvedDependenciesError, Registry, inject


class Dashboard:
    store = inject.service()
    router = inject.service()
    posts = inject.controller("posts")


def main() -> None:
    registry = Registry()
    registry.register_instance("service:router", object())

    try:
        registry.create(Dashboard)
    except LazyWireUnresolvedDependenciesError as error:
        print(f"missing={list(error.missing)}")  # => missing=['service:store', 'controller:posts']


if __name__ == "__main__":
    main()
