"""Custom Dishka scopes for Cutout."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Cutout dependency injection scopes.

    Hierarchy: APP -> REQUEST

    - APP: Process lifetime (config, HTTP clients, blob store)
    - REQUEST: One HTTP request, carrying the caller's resolved identity
    """

    APP = new_scope("APP")
    REQUEST = new_scope("REQUEST")
