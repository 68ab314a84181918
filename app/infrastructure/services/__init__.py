"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    IntlDep,
    RequestScopeDep,
    SettingsDep,
    get_request_scope,
)
from infrastructure.services.providers import (
    get_intl,
    get_settings,
)

__all__ = [
    "SettingsDep",
    "IntlDep",
    "RequestScopeDep",
    "get_request_scope",
    "get_settings",
    "get_intl",
]
