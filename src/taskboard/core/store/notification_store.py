"""NotificationStore SQLite 实现

通知表 append-only：只允许插入，不允许更新。
"""

import json
from datetime import datetime

import aiosqlite

from ..models.enums import NotificationSeverity
from ..models.notification import Notification
from .transaction import write_transaction


class SqliteNotificationStore:
    """NotificationStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_notification(self, notification: Notification) -> None:
        """写入一条用户通知"""
        async with write_transaction(self._conn):
            await self._conn.execute(
                """
                INSERT INTO notifications (notification_id, user_id, notification_name,
                                           data, severity, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    notification.notification_id,
                    notification.user_id,
                    notification.notification_name,
                    json.dumps(notification.data, ensure_ascii=False),
                    notification.severity.value,
                    notification.created_at.isoformat(),
                ),
            )

    async def list_notifications_for_user(
        self, user_id: int, limit: int = 100
    ) -> list[Notification]:
        """查询用户通知，按 created_at 倒序"""
        cursor = await self._conn.execute(
            """
            SELECT notification_id, user_id, notification_name, data, severity, created_at
            FROM notifications
            WHERE user_id = ?
            ORDER BY created_at DESC, notification_id DESC
            LIMIT ?
            """,
            (user_id, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_notification(row) for row in rows]

    @staticmethod
    def _row_to_notification(row: aiosqlite.Row) -> Notification:
        """将数据库行转换为 Notification 模型"""
        return Notification(
            notification_id=row[0],
            user_id=row[1],
            notification_name=row[2],
            data=json.loads(row[3]) if row[3] else {},
            severity=NotificationSeverity(row[4]),
            created_at=datetime.fromisoformat(row[5]),
        )
