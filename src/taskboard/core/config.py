"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、分页默认值、SSE 心跳间隔等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


# 分页默认每页条数（GetTasksInput.max_result_count 默认值）
DEFAULT_MAX_RESULT_COUNT: int = int(
    os.environ.get("TASKBOARD_DEFAULT_MAX_RESULT_COUNT", "10")
)

# 单页最大条数上限
MAX_RESULT_COUNT_LIMIT: int = int(
    os.environ.get("TASKBOARD_MAX_RESULT_COUNT_LIMIT", "1000")
)

# SSE 心跳间隔（秒）
SSE_HEARTBEAT_INTERVAL: int = int(
    os.environ.get("TASKBOARD_SSE_HEARTBEAT_INTERVAL", "15")
)

# 通知收件箱单次查询条数
NOTIFICATION_LIST_LIMIT: int = 100
