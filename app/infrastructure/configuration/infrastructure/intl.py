"""Intl runtime infrastructure settings."""

from typing import List

from pydantic import Field, model_validator

from infrastructure.configuration.base import InfrastructureSettings


class IntlSettings(InfrastructureSettings):
    """Locale and message-file configuration for the intl runtime.

    Environment Variables:
        INTL_LOCALES: Comma-separated supported locales (default: "en")
        INTL_DEFAULT_LOCALE: Locale used when a request selects none (default: "en")
        INTL_LOCALE_PARAM: Route parameter carrying the locale (default: "locale")
        INTL_REF_PROP: Property marking reference leaves (default: "$ref")
        INTL_MESSAGES_DIR: Directory of compiled message files (default: "messages")
        INTL_SOURCE_DIR: Directory of per-locale source files (default: "locales")

    Example:
        ```python
        from infrastructure.configuration import settings

        locales = settings.intl.locales
        default = settings.intl.INTL_DEFAULT_LOCALE
        ```
    """

    INTL_LOCALES: str = Field(default="en", alias="INTL_LOCALES")
    INTL_DEFAULT_LOCALE: str = Field(default="en", alias="INTL_DEFAULT_LOCALE")
    INTL_LOCALE_PARAM: str = Field(default="locale", alias="INTL_LOCALE_PARAM")
    INTL_REF_PROP: str = Field(default="$ref", alias="INTL_REF_PROP")
    INTL_MESSAGES_DIR: str = Field(default="messages", alias="INTL_MESSAGES_DIR")
    INTL_SOURCE_DIR: str = Field(default="locales", alias="INTL_SOURCE_DIR")

    @property
    def locales(self) -> List[str]:
        """Supported locales parsed from INTL_LOCALES."""
        return [part.strip() for part in self.INTL_LOCALES.split(",") if part.strip()]

    @model_validator(mode="after")
    def validate_locales(self) -> "IntlSettings":
        locales = self.locales
        if not locales:
            raise ValueError("INTL_LOCALES must list at least one locale")
        if self.INTL_DEFAULT_LOCALE not in locales:
            raise ValueError(
                f"INTL_DEFAULT_LOCALE {self.INTL_DEFAULT_LOCALE!r} is not in INTL_LOCALES"
            )
        return self
