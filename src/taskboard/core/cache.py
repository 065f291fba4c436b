"""任务缓存接口

TaskCache 只约定按 ID 取缓存项；默认实现 StoreTaskCache 每次直接读 Store，
不做填充与淘汰。
"""

from typing import Protocol

from .exceptions import TaskNotFoundError
from .mapping import to_task_cache_item
from .models import TaskCacheItem
from .store.protocols import TaskStore


class TaskCache(Protocol):
    async def get(self, task_id: int) -> TaskCacheItem:
        """按 ID 取缓存项，不存在时抛出 TaskNotFoundError"""
        ...


class StoreTaskCache:
    """直读 TaskStore 的 TaskCache"""

    def __init__(self, task_store: TaskStore) -> None:
        self._task_store = task_store

    async def get(self, task_id: int) -> TaskCacheItem:
        task = await self._task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return to_task_cache_item(task)
