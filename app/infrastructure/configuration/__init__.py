"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    IntlSettings: Intl runtime settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    locales = settings.intl.locales
    messages_dir = settings.intl.INTL_MESSAGES_DIR
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure.intl import IntlSettings

__all__ = ["Settings", "IntlSettings", "settings"]
