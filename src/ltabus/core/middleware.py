import logging
import uuid
from time import perf_counter

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from ltabus.core.config import get_settings
from ltabus.core.logging import request_id_ctx

logger = logging.getLogger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation ID and log its outcome.

    Fetches to DataMall can take several seconds for the full network, so the
    completion line carries the elapsed time.
    """

    def __init__(self, app) -> None:  # type: ignore[override]
        super().__init__(app)
        self.header_name = get_settings().request_id_header

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        token = request_id_ctx.set(request_id)
        request.state.request_id = request_id
        started = perf_counter()

        try:
            response = await call_next(request)
            logger.info(
                "Request completed in %.3fs",
                perf_counter() - started,
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                },
            )
        finally:
            request_id_ctx.reset(token)

        response.headers[self.header_name] = request_id
        return response
