"""UserStore SQLite 实现

用户与权限授权记录的读写。TaskService 只调用 load_user，
其余写方法供维护 CLI 与测试使用。
"""

import aiosqlite

from ..exceptions import UserNotFoundError
from ..models.user import User
from .transaction import write_transaction


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get_user(self, user_id: int) -> User | None:
        """根据 id 查询用户"""
        cursor = await self._conn.execute(
            "SELECT id, user_name, email_address FROM users WHERE id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return User(id=row[0], user_name=row[1], email_address=row[2])

    async def load_user(self, user_id: int) -> User:
        """根据 id 加载用户，不存在时抛出 UserNotFoundError"""
        user = await self.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def list_users(self) -> list[User]:
        cursor = await self._conn.execute(
            "SELECT id, user_name, email_address FROM users ORDER BY id ASC"
        )
        rows = await cursor.fetchall()
        return [User(id=r[0], user_name=r[1], email_address=r[2]) for r in rows]

    async def create_user(self, user_name: str, email_address: str | None = None) -> int:
        """创建用户并返回 id"""
        async with write_transaction(self._conn):
            cursor = await self._conn.execute(
                "INSERT INTO users (user_name, email_address) VALUES (?, ?)",
                (user_name, email_address),
            )
        return int(cursor.lastrowid or 0)

    async def get_granted_permissions(self, user_id: int) -> set[str]:
        """查询用户已被授予的权限名"""
        cursor = await self._conn.execute(
            "SELECT name FROM user_permissions WHERE user_id = ?",
            (user_id,),
        )
        rows = await cursor.fetchall()
        return {row[0] for row in rows}

    async def grant_permission(self, user_id: int, permission: str) -> None:
        """授予权限（重复授予无副作用）"""
        async with write_transaction(self._conn):
            await self._conn.execute(
                "INSERT OR IGNORE INTO user_permissions (user_id, name) VALUES (?, ?)",
                (user_id, permission),
            )
