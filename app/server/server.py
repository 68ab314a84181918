from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.router import api_router
from infrastructure.configuration import settings
from infrastructure.intl import (
    IntlError,
    LocaleLoadError,
    LocaleNotLoadedError,
    MissingParameterError,
    NamespaceNotFoundError,
    TranslationNotFoundError,
)
from infrastructure.logging import get_module_logger
from server.intl_middleware import IntlMiddleware
from server.lifespan import lifespan

logger = get_module_logger()

# Most specific classes first; the first isinstance match wins.
ERROR_STATUS_CODES: list[tuple[type[IntlError], int]] = [
    (NamespaceNotFoundError, 404),
    (TranslationNotFoundError, 404),
    (MissingParameterError, 400),
    (LocaleLoadError, 503),
    (LocaleNotLoadedError, 500),
]


def status_code_for(exc: IntlError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def intl_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_code_for(exc) if isinstance(exc, IntlError) else 500
    log = logger.warning if status_code < 500 else logger.error
    log(
        "intl_request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


handler = FastAPI(lifespan=lifespan)

allow_origins = (
    ["*"]
    if settings.is_production
    else [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
handler.add_middleware(IntlMiddleware)
handler.add_exception_handler(IntlError, intl_error_handler)

handler.include_router(api_router)
