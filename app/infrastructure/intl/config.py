"""Intl runtime configuration."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from infrastructure.intl.exceptions import IntlConfigError
from infrastructure.intl.models import LocaleLoader, RefLoader

DEFAULT_LOCALE_PARAM = "locale"
DEFAULT_REF_PROP = "$ref"


@dataclass(frozen=True)
class IntlConfig:
    """Configuration fixed for the lifetime of an Intl instance.

    Attributes:
        locales: Supported locale identifiers (non-empty).
        default_locale: Locale used when a request does not select one.
        loader: Collaborator returning the full message tree for a locale.
        locale_param: Name of the route parameter carrying the locale.
        ref_prop: Property marking a reference leaf in message trees.
        ref_loader: Collaborator loading referenced assets (privileged side only).
    """

    locales: Tuple[str, ...]
    default_locale: str
    loader: LocaleLoader
    locale_param: str = DEFAULT_LOCALE_PARAM
    ref_prop: str = DEFAULT_REF_PROP
    ref_loader: Optional[RefLoader] = None

    def __post_init__(self):
        if not self.locales:
            raise IntlConfigError("At least one locale must be configured")
        if self.default_locale not in self.locales:
            raise IntlConfigError(
                f'Default locale "{self.default_locale}" is not one of {list(self.locales)}'
            )
        if not callable(self.loader):
            raise IntlConfigError('"loader" must be callable')
        if self.ref_loader is not None and not callable(self.ref_loader):
            raise IntlConfigError('"ref_loader" must be callable')
        if not self.ref_prop:
            raise IntlConfigError('"ref_prop" must not be empty')

    def has_locale(self, value: object) -> bool:
        return isinstance(value, str) and value in self.locales


def create_config(
    locales: Iterable[str],
    default_locale: str,
    loader: LocaleLoader,
    locale_param: Optional[str] = None,
    ref_prop: Optional[str] = None,
    ref_loader: Optional[RefLoader] = None,
) -> IntlConfig:
    """Create an IntlConfig, filling defaults for optional fields.

    Raises:
        IntlConfigError: If the options are inconsistent.
    """
    return IntlConfig(
        locales=tuple(locales),
        default_locale=default_locale,
        loader=loader,
        locale_param=locale_param or DEFAULT_LOCALE_PARAM,
        ref_prop=ref_prop or DEFAULT_REF_PROP,
        ref_loader=ref_loader,
    )
