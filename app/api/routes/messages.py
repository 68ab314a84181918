"""Message endpoints backed by the request-scoped intl runtime.

Both endpoints select the request locale from the ``{locale}`` route segment
(falling back to Accept-Language, then the default locale) before resolving
anything, so the locale is loaded once per request.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Header, Request

from infrastructure.intl import Intl, LazyComponent, RequestScope
from infrastructure.intl.models import to_raw
from infrastructure.logging import get_module_logger
from infrastructure.services import IntlDep, RequestScopeDep

logger = get_module_logger()

router = APIRouter(tags=["Messages"])


async def _bind_locale(
    intl: Intl,
    scope: RequestScope,
    locale: str,
    accept_language: Optional[str],
) -> str:
    return await intl.bind_locale(
        scope,
        params={intl.config.locale_param: locale},
        accept_language=accept_language,
    )


@router.get("/{locale}/messages/{namespace}")
async def get_messages(
    locale: str,
    namespace: str,
    intl: IntlDep,
    scope: RequestScopeDep,
    accept_language: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    """Render context payload holding the client view of ``namespace``."""
    await _bind_locale(intl, scope, locale, accept_language)
    context = intl.render_context(scope, [namespace])
    return context.to_payload()


@router.get("/{locale}/translate/{namespace}/{key}")
async def translate(
    locale: str,
    namespace: str,
    key: str,
    request: Request,
    intl: IntlDep,
    scope: RequestScopeDep,
    accept_language: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    """Translate one key; query parameters become interpolation parameters.

    Reference leaves are loaded with the configured reference loader.
    """
    selected = await _bind_locale(intl, scope, locale, accept_language)
    t = intl.get_translations(scope, namespace)
    value = t.call(key, dict(request.query_params))

    if isinstance(value, LazyComponent):
        logger.debug("rendering_reference", namespace=namespace, key=key)
        value = await value()
    else:
        value = to_raw(value, intl.config.ref_prop)

    return {"locale": selected, "namespace": namespace, "key": key, "value": value}
