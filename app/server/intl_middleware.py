from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.intl import RequestScope
from infrastructure.logging import bind_request_context

REQUEST_ID_HEADER = "X-Request-ID"


class IntlMiddleware(BaseHTTPMiddleware):
    """Creates one RequestScope per request and binds it to the log context."""

    async def dispatch(self, request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get(REQUEST_ID_HEADER),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            request.state.intl_scope = RequestScope(correlation_id=correlation_id)
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
