"""写事务封装

Store 的每个写操作在独立事务内提交：成功 commit，失败 rollback 后原样抛出。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite


@asynccontextmanager
async def write_transaction(conn: aiosqlite.Connection) -> AsyncIterator[None]:
    """在同一连接上提交一次写操作

    Args:
        conn: 数据库连接

    Raises:
        Exception: 提交失败时自动回滚并重新抛出
    """
    try:
        yield
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise
