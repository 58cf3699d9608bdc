"""Custom Dishka scopes for Digital Surprise."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, blob store, hasher, QR generator)
    - UOW: Unit of Work (one HTTP request: session, repository, handlers)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
