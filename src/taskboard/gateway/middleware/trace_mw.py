"""TraceMiddleware -- 任务级日志上下文

请求路径形如 /api/tasks/{task_id}[/...] 时，把 task_id 绑定到 structlog contextvars，
该请求内服务层的日志都带上 task_id。
"""

import re

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

_TASK_PATH = re.compile(r"^/api/tasks/(\d+)(?:/|$)")


def extract_task_id(path: str) -> int | None:
    """从路径中提取数字 task_id，/api/tasks/all 等子路由返回 None"""
    match = _TASK_PATH.match(path)
    return int(match.group(1)) if match else None


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件 -- 为单任务操作绑定 task_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id is not None:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
