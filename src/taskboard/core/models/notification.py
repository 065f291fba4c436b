"""Notification 模型

每个收件人一条收件箱记录，data 以 JSON 形式持久化。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import NotificationSeverity


class MessageNotificationData(BaseModel):
    """纯文本消息通知数据"""

    message: str = Field(description="消息内容")


class Notification(BaseModel):
    """用户通知记录"""

    notification_id: str = Field(description="唯一标识，ULID 格式")
    user_id: int = Field(description="收件人 User ID")
    notification_name: str = Field(description="通知名称，如 NewTask")
    data: dict[str, Any] = Field(default_factory=dict, description="通知数据")
    severity: NotificationSeverity = Field(
        default=NotificationSeverity.INFO, description="通知级别"
    )
    created_at: datetime = Field(description="创建时间")
