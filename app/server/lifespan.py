from contextlib import asynccontextmanager
import sys
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_intl, get_settings

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _activate_intl(app: FastAPI, logger: BoundLogger) -> None:
    # Tests override get_intl with in-memory collaborators.
    if _is_test_environment():
        logger.info("intl_activation_skipped", reason="test_environment")
        return

    try:
        intl = get_intl()
    except Exception as exc:
        logger.error("intl_activation_failed", error=str(exc))
        raise

    app.state.intl = intl
    logger.info(
        "intl_activated",
        locales=list(intl.config.locales),
        default_locale=intl.config.default_locale,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    _activate_intl(app, logger)

    yield

    logger.info("application_shutdown")
