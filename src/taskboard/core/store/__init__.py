"""Taskboard Core Store -- SQLite 持久化

三个 Store 共用一个 aiosqlite 连接，写操作各自在 write_transaction 中提交。
"""

from pathlib import Path

import aiosqlite

from .notification_store import SqliteNotificationStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .transaction import write_transaction
from .user_store import SqliteUserStore


class StoreGroup:
    """task / user / notification 三个 Store 的组合"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.task_store = SqliteTaskStore(conn)
        self.user_store = SqliteUserStore(conn)
        self.notification_store = SqliteNotificationStore(conn)


async def create_store_group(db_path: str) -> StoreGroup:
    """打开数据库（父目录不存在时创建），初始化 schema 并返回 StoreGroup"""
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteTaskStore",
    "SqliteUserStore",
    "SqliteNotificationStore",
    "init_db",
    "write_transaction",
]
