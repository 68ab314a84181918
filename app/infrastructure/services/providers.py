"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.intl import Intl, create_intl_from_settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_intl() -> Intl:
    """
    Get the application-scoped intl runtime.

    Reads compiled messages from INTL_MESSAGES_DIR. Per-request state is not
    held here; it lives on the RequestScope of each request.

    Returns:
        Intl: Cached intl runtime built from settings.

    Usage:
        @router.get("/{locale}/home")
        async def home(intl: IntlDep, scope: RequestScopeDep):
            await intl.bind_locale(scope, {"locale": locale})
            return intl.get_translations(scope, "home").call("title")
    """
    return create_intl_from_settings(get_settings())
