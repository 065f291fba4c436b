"""枚举定义

包含 TaskState 任务状态、NotificationSeverity 通知级别，以及排序方向。
"""

from enum import IntEnum, StrEnum


class TaskState(IntEnum):
    """任务状态（持久化为整数，排序按数值）"""

    OPEN = 0
    COMPLETED = 1


class NotificationSeverity(StrEnum):
    """通知级别"""

    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class SortDirection(StrEnum):
    """排序方向"""

    ASC = "ASC"
    DESC = "DESC"
