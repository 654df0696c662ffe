"""Quickstart: declare injected properties and let the registry wire them.

Nothing is resolved until a property is read; the first read looks up the
service and later reads reuse the cached value.
"""

from __future__ import annotations

from lazywire import Registry, inject


class Session:
    def __init__(self) -> None:
        self.user = "ada"


class PostsController:
    session = inject.service()
    application = inject.controller("application")


class ApplicationController:
    title = "blog"


def main() -> None:
    registry = Registry()
    registry.register("service:session", Session)
    registry.register("controller:application", ApplicationController)

    controller = registry.create(PostsController)

    print(f"user={controller.session.user}")  # => user=ada
    print(f"same={controller.session is controller.session}")  # => same=True
    print(f"title={controller.application.title}")  # => title=blog


if __name__ == "__main__":
    main()
