"""LoggingMiddleware -- 请求级日志

每个请求绑定 request_id / method / path / caller 到 structlog contextvars。
客户端带了 X-Request-ID 时沿用，否则生成 ULID；响应头回写同一个值。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

log = structlog.get_logger()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            caller=request.headers.get("x-user-id"),
        )

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception("request_failed", duration_ms=_elapsed_ms(started))
            raise

        emit = log.awarning if response.status_code >= 500 else log.ainfo
        await emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
