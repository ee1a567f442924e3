"""Custom Dishka scopes for solrbridge."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, engine, HTTP client, index registry)
    - UOW: Unit of Work (one HTTP request or one change-hook invocation)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
