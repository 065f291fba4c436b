"""Taskboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .dtos import (
    CreateTaskInput,
    GetTasksInput,
    GetTasksOutput,
    PagedResult,
    TaskCacheItem,
    TaskDto,
    UpdateTaskInput,
)
from .enums import NotificationSeverity, SortDirection, TaskState
from .notification import MessageNotificationData, Notification
from .task import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH, Task
from .user import User, UserIdentifier

__all__ = [
    # 枚举
    "TaskState",
    "NotificationSeverity",
    "SortDirection",
    # Task
    "Task",
    "MAX_TITLE_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    # User
    "User",
    "UserIdentifier",
    # Notification
    "Notification",
    "MessageNotificationData",
    # DTO
    "TaskDto",
    "TaskCacheItem",
    "CreateTaskInput",
    "UpdateTaskInput",
    "GetTasksInput",
    "GetTasksOutput",
    "PagedResult",
]
