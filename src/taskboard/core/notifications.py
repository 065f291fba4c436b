"""通知发布接口"""

from collections.abc import Sequence
from typing import Any, Protocol

from pydantic import BaseModel

from .models import NotificationSeverity, UserIdentifier

NEW_TASK_NOTIFICATION = "NewTask"


class NotificationPublisher(Protocol):
    async def publish(
        self,
        notification_name: str,
        data: BaseModel | dict[str, Any],
        severity: NotificationSeverity = NotificationSeverity.INFO,
        user_ids: Sequence[UserIdentifier] = (),
    ) -> None:
        """向指定用户发布通知"""
        ...
