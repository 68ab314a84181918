"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.intl import IntlSettings

__all__ = [
    "IntlSettings",
]
