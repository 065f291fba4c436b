"""structlog 配置模块

dev 模式：ConsoleRenderer 可读输出
json 模式：每行一条 JSON，异常堆栈展开为 exception 字段
Logfire APM：LOGFIRE_SEND_TO_LOGFIRE=true 时启用，否则只输出本地日志。
"""

import logging
import os

import structlog

_configured = False


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(force: bool = False) -> None:
    """初始化 structlog，并把标准库 logging 输出接到同一个 formatter

    环境变量:
        TASKBOARD_LOG_FORMAT: "json" 或 "dev"（默认）
        TASKBOARD_LOG_LEVEL: 日志级别，默认 INFO

    Args:
        force: 已配置过时是否重新配置
    """
    global _configured
    if _configured and not force:
        return

    log_format = os.environ.get("TASKBOARD_LOG_FORMAT", "dev").lower()
    log_level = os.environ.get("TASKBOARD_LOG_LEVEL", "INFO").upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_format == "json":
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_build_renderer(log_format),
        foreign_pre_chain=shared_processors,
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # aiosqlite 的 DEBUG 日志逐条打印 SQL 调用
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    _configured = True


def setup_logfire() -> None:
    """Logfire 可选初始化

    LOGFIRE_SEND_TO_LOGFIRE 环境变量控制：
    - "true": 启用 Logfire APM（需要 LOGFIRE_TOKEN，安装 apm extra）
    - 其他值 (默认 "false"): 只输出本地日志
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi()
    except Exception:
        # Logfire 初始化失败不影响系统运行
        structlog.get_logger().warning(
            "logfire_init_failed",
            message="Logfire init failed, falling back to local logging",
            exc_info=True,
        )
