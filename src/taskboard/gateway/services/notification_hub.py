"""NotificationHub -- 内存中通知广播器

每个订阅者持有一个 asyncio.Queue，按收件人 user_id 分组，
支持 subscribe/unsubscribe/broadcast。队列已满的订阅者会被移除。
"""

import asyncio
from collections import defaultdict

from taskboard.core.models import Notification


class NotificationHub:
    """通知广播器 -- 基于 asyncio.Queue 的发布/订阅模式"""

    def __init__(self, queue_maxsize: int = 100) -> None:
        # user_id -> set of asyncio.Queue
        self._subscribers: dict[int, set[asyncio.Queue]] = defaultdict(set)
        self._queue_maxsize = queue_maxsize

    def subscriber_count(self, user_id: int) -> int:
        return len(self._subscribers.get(user_id, ()))

    async def subscribe(self, user_id: int) -> asyncio.Queue:
        """订阅指定用户的通知流

        Args:
            user_id: 收件人 ID

        Returns:
            asyncio.Queue 实例，新通知会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers[user_id].add(queue)
        return queue

    async def unsubscribe(self, user_id: int, queue: asyncio.Queue) -> None:
        """取消订阅"""
        subscribers = self._subscribers.get(user_id)
        if subscribers is None:
            return
        subscribers.discard(queue)
        if not subscribers:
            del self._subscribers[user_id]

    async def broadcast(self, notification: Notification) -> None:
        """向收件人的所有订阅者广播通知"""
        user_id = notification.user_id
        dead_queues = []
        for queue in self._subscribers.get(user_id, set()):
            try:
                queue.put_nowait(notification)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 清理已满的队列
        for q in dead_queues:
            self._subscribers[user_id].discard(q)
        if user_id in self._subscribers and not self._subscribers[user_id]:
            del self._subscribers[user_id]
