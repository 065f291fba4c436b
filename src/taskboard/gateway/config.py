"""GatewayConfig -- Gateway 配置加载

从环境变量加载配置，格式错误时记录警告并沿用默认值。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        TASKBOARD_APP_TITLE: OpenAPI 标题
        TASKBOARD_DEFAULT_USER_ID: 请求未携带 X-User-Id 时使用的调用者 ID
    """

    app_title: str = Field(default="Taskboard Gateway", description="应用标题")
    default_user_id: int | None = Field(
        default=None,
        gt=0,
        description="未携带 X-User-Id 时的调用者；None 表示匿名",
    )


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    Returns:
        GatewayConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKBOARD_APP_TITLE"):
        kwargs["app_title"] = val

    if val := os.environ.get("TASKBOARD_DEFAULT_USER_ID"):
        try:
            user_id = int(val)
        except ValueError:
            user_id = 0
        if user_id > 0:
            kwargs["default_user_id"] = user_id
        else:
            log.warning(
                "invalid_default_user_config",
                env_var="TASKBOARD_DEFAULT_USER_ID",
                value=val,
                fallback=None,
            )

    return GatewayConfig(**kwargs)
