"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from infrastructure.configuration import Settings
from infrastructure.intl import Intl, RequestScope
from infrastructure.services.providers import get_intl, get_settings


def get_request_scope(request: Request) -> RequestScope:
    """Return the RequestScope of the current request.

    IntlMiddleware normally creates it; without the middleware a scope is
    created on first use and stored on the request so it stays unique.
    """
    scope = getattr(request.state, "intl_scope", None)
    if scope is None:
        scope = RequestScope()
        request.state.intl_scope = scope
    return scope


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Intl runtime dependency (application-scoped)
IntlDep = Annotated[Intl, Depends(get_intl)]

# Per-request scope holding the intl cache state
RequestScopeDep = Annotated[RequestScope, Depends(get_request_scope)]

__all__ = [
    "SettingsDep",
    "IntlDep",
    "RequestScopeDep",
    "get_request_scope",
]
