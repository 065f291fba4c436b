"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + NotificationHub + 路由注册 + 异常映射。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import aiosqlite
import structlog
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from taskboard.core.config import get_db_path
from taskboard.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    EntityNotFoundError,
    TaskboardError,
)
from taskboard.core.store import create_store_group

from .config import load_gateway_config
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, notifications, tasks
from .services.notification_hub import NotificationHub

log = structlog.get_logger()

# 领域异常 -> HTTP 状态码，按 MRO 顺序匹配
_STATUS_BY_ERROR: list[tuple[type[TaskboardError], int]] = [
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (EntityNotFoundError, 404),
]


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    """领域异常统一映射为 {"error": {"code", "message"}}"""
    status_code = 400
    for error_type, mapped in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = mapped
            break

    log.info(
        "request_rejected",
        error_code=exc.code,
        status_code=status_code,
        message=exc.message,
    )
    return _error_response(status_code, exc.code, exc.message)


async def integrity_error_handler(
    request: Request, exc: aiosqlite.IntegrityError
) -> JSONResponse:
    """约束冲突（如被分配人不存在）返回 409"""
    log.warning("integrity_error", error=str(exc))
    return _error_response(409, "INTEGRITY_ERROR", str(exc))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 与 NotificationHub，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.notification_hub = NotificationHub()
    log.info("store_group_initialized", db_path=db_path)

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    config = load_gateway_config()

    app = FastAPI(
        title=config.app_title,
        version="0.1.0",
        description="Taskboard 任务管理 API",
        lifespan=lifespan,
    )
    app.state.gateway_config = config

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 在最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    # 初始化日志
    setup_logging()
    setup_logfire()

    # 异常映射
    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(aiosqlite.IntegrityError, integrity_error_handler)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(notifications.router, tags=["notifications"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
