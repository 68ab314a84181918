"""Locale resolution for incoming requests.

Picks the locale of a request from its route parameters, then from the
Accept-Language header, then falls back to the configured default.
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple

import structlog

logger = structlog.get_logger().bind(component="intl.resolver")


class LocaleResolver:
    """Resolves the request locale from route params and headers.

    Resolution order:
    1. Route parameter named ``locale_param`` (if supported)
    2. Accept-Language header (quality-ordered, exact then language-only match)
    3. Default locale
    """

    def __init__(
        self,
        locales: Sequence[str],
        default_locale: str,
        locale_param: str = "locale",
    ):
        """Initialize locale resolver.

        Args:
            locales: Supported locale identifiers.
            default_locale: Fallback locale when no preference found.
            locale_param: Name of the route parameter carrying the locale.
        """
        self.locales = tuple(locales)
        self.default_locale = default_locale
        self.locale_param = locale_param
        self.log = logger.bind(default_locale=default_locale)

    def has_locale(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.locales

    def resolve_from_params(self, params: Optional[Mapping[str, Any]]) -> Optional[str]:
        """Return the supported locale named by the route params, if any."""
        if not params:
            return None
        value = params.get(self.locale_param)
        if self.has_locale(value):
            return value
        if value is not None:
            self.log.info("unsupported_locale_param", requested=str(value))
        return None

    def resolve_from_header(self, accept_language: Optional[str]) -> Optional[str]:
        """Resolve locale from an HTTP Accept-Language header.

        Parses "en-US,en;q=0.9,fr-CA;q=0.8" into ranges ordered by quality and
        returns the first supported match.

        Returns:
            Matching locale, or None if nothing matches.
        """
        if not accept_language:
            return None

        ranges = [lang for lang, _ in self._parse_header(accept_language)]
        match = LanguageNegotiator.find_best_match(ranges, list(self.locales))
        if match:
            self.log.info("resolved_from_header", locale=match)
        else:
            self.log.info("no_matching_locale_in_header")
        return match

    def resolve(
        self,
        params: Optional[Mapping[str, Any]] = None,
        accept_language: Optional[str] = None,
    ) -> str:
        """Resolve the best locale for a request."""
        return (
            self.resolve_from_params(params)
            or self.resolve_from_header(accept_language)
            or self.default_locale
        )

    @staticmethod
    def _parse_header(accept_language: str) -> List[Tuple[str, float]]:
        preferences = []
        for part in accept_language.split(","):
            lang_range = part.split(";")[0].strip()
            if not lang_range or lang_range == "*":
                continue
            quality = 1.0

            if ";" in part and "q=" in part:
                try:
                    quality = float(part.split("q=")[1])
                except ValueError:
                    quality = 1.0

            preferences.append((lang_range, quality))

        # sorted() is stable, so equal qualities keep header order
        return sorted(preferences, key=lambda x: x[1], reverse=True)


class LanguageNegotiator:
    """Language range matching (e.g., "pt-BR" requested, "pt" available)."""

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if available language matches requested language.

        Args:
            requested: Requested language tag (e.g., "en-US").
            available: Available language tag (e.g., "en").
            strict: If True, requires exact match. If False, allows language-only match.
        """
        if requested.lower() == available.lower():
            return True

        if strict:
            return False

        requested_lang = requested.split("-")[0].lower()
        available_lang = available.split("-")[0].lower()
        return requested_lang == available_lang

    @staticmethod
    def find_best_match(
        requested: list,
        available: list,
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find best matching language from available options.

        Args:
            requested: List of requested language tags in preference order.
            available: List of available language tags.
            default: Default if no match found.
        """
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(
                    req_lang, avail_lang, strict=True
                ):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(
                    req_lang, avail_lang, strict=False
                ):
                    return avail_lang

        return default
