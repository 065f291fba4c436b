"""StoreNotificationPublisher -- 通知落盘 + 实时广播

每个收件人写入一条 Notification 记录，再推送给 NotificationHub 的在线订阅者。
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import BaseModel
from taskboard.core.models import Notification, NotificationSeverity, UserIdentifier
from taskboard.core.store.protocols import NotificationStore
from ulid import ULID

from .notification_hub import NotificationHub

log = structlog.get_logger()


class StoreNotificationPublisher:
    """NotificationPublisher 实现"""

    def __init__(
        self,
        notification_store: NotificationStore,
        hub: NotificationHub | None = None,
    ) -> None:
        self._store = notification_store
        self._hub = hub

    async def publish(
        self,
        notification_name: str,
        data: BaseModel | dict[str, Any],
        severity: NotificationSeverity = NotificationSeverity.INFO,
        user_ids: Sequence[UserIdentifier] = (),
    ) -> None:
        """向 user_ids 中每个用户发布通知

        Args:
            notification_name: 通知名称
            data: 通知数据（pydantic 模型或 dict）
            severity: 通知级别
            user_ids: 收件人列表
        """
        payload = data.model_dump(mode="json") if isinstance(data, BaseModel) else dict(data)
        now = datetime.now(UTC)

        for identifier in user_ids:
            notification = Notification(
                notification_id=str(ULID()),
                user_id=identifier.user_id,
                notification_name=notification_name,
                data=payload,
                severity=severity,
                created_at=now,
            )
            await self._store.append_notification(notification)

            if self._hub is not None:
                await self._hub.broadcast(notification)

            log.info(
                "notification_published",
                notification_name=notification_name,
                user_id=identifier.user_id,
                severity=severity.value,
            )
