"""Factory functions for creating the intl runtime."""

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

import structlog
from infrastructure.intl.config import create_config
from infrastructure.intl.loader import CompiledMessageLoader, DocumentRefLoader
from infrastructure.intl.models import LocaleLoader, RefLoader
from infrastructure.intl.runtime import Intl

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()


def create_intl(
    locales: Iterable[str],
    default_locale: str,
    loader: LocaleLoader,
    locale_param: Optional[str] = None,
    ref_prop: Optional[str] = None,
    ref_loader: Optional[RefLoader] = None,
) -> Intl:
    """Create an Intl runtime from explicit options.

    Usage:
        intl = create_intl(
            locales=["en", "fr"],
            default_locale="en",
            loader=lambda locale: {"home": {"title": "Home"}},
        )

    Raises:
        IntlConfigError: If the options are inconsistent.
    """
    config = create_config(
        locales=locales,
        default_locale=default_locale,
        loader=loader,
        locale_param=locale_param,
        ref_prop=ref_prop,
        ref_loader=ref_loader,
    )
    return Intl(config)


def create_intl_from_settings(
    settings: Optional["Settings"] = None,
    messages_dir: Optional[Path] = None,
    ref_loader: Optional[RefLoader] = None,
) -> Intl:
    """Create an Intl runtime reading the compiler's output directory.

    Compiled ``<locale>.json`` files are loaded through CompiledMessageLoader
    and referenced documents through DocumentRefLoader, unless another
    ``ref_loader`` is given.

    Args:
        settings: Settings instance (default: configuration singleton).
        messages_dir: Override for INTL_MESSAGES_DIR.
        ref_loader: Override for the document reference loader.

    Raises:
        ValueError: If the messages directory does not exist.
    """
    if settings is None:
        from infrastructure.configuration import settings as default_settings

        settings = default_settings

    intl_settings = settings.intl
    messages_dir = Path(messages_dir or intl_settings.INTL_MESSAGES_DIR)

    intl = create_intl(
        locales=intl_settings.locales,
        default_locale=intl_settings.INTL_DEFAULT_LOCALE,
        loader=CompiledMessageLoader(messages_dir),
        locale_param=intl_settings.INTL_LOCALE_PARAM,
        ref_prop=intl_settings.INTL_REF_PROP,
        ref_loader=ref_loader or DocumentRefLoader(messages_dir),
    )
    logger.info("intl_created_from_settings", messages_dir=str(messages_dir))
    return intl
