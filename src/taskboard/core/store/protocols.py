"""Store Protocol 接口定义

定义 TaskStore、UserStore、NotificationStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol

from ..models.notification import Notification
from ..models.task import Task
from ..models.user import User
from ..query import TaskQuery


class TaskStore(Protocol):
    """Task 存储接口"""

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 creation_time 倒序"""
        ...

    async def query_tasks(
        self,
        query: TaskQuery,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Task]:
        """按筛选、排序条件查询，可选分页"""
        ...

    async def count_tasks(self, query: TaskQuery | None = None) -> int:
        """统计符合筛选条件的任务数（不受分页影响）"""
        ...

    async def insert_task(self, task: Task) -> int:
        """插入任务并返回生成的 id"""
        ...

    async def update_task(self, task: Task) -> None:
        """覆盖任务的可变字段"""
        ...

    async def delete_task(self, task_id: int) -> None:
        """删除任务"""
        ...


class UserStore(Protocol):
    """User 存储接口"""

    async def get_user(self, user_id: int) -> User | None:
        """根据 id 查询用户"""
        ...

    async def load_user(self, user_id: int) -> User:
        """根据 id 加载用户，不存在时抛出 UserNotFoundError"""
        ...

    async def create_user(self, user_name: str, email_address: str | None = None) -> int:
        """创建用户并返回 id"""
        ...

    async def get_granted_permissions(self, user_id: int) -> set[str]:
        """查询用户已被授予的权限名"""
        ...

    async def grant_permission(self, user_id: int, permission: str) -> None:
        """授予权限（重复授予无副作用）"""
        ...


class NotificationStore(Protocol):
    """Notification 存储接口"""

    async def append_notification(self, notification: Notification) -> None:
        """写入一条用户通知"""
        ...

    async def list_notifications_for_user(
        self, user_id: int, limit: int = 100
    ) -> list[Notification]:
        """查询用户通知，按 created_at 倒序"""
        ...
