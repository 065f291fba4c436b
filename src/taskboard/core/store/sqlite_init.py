"""SQLite 数据库初始化

PRAGMA 配置 + 四张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# users 表 DDL
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    user_name      TEXT NOT NULL UNIQUE,
    email_address  TEXT
);
"""

# user_permissions 表 DDL
_USER_PERMISSIONS_DDL = """
CREATE TABLE IF NOT EXISTS user_permissions (
    user_id  INTEGER NOT NULL,
    name     TEXT NOT NULL,

    PRIMARY KEY (user_id, name),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);
"""

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    title               TEXT NOT NULL,
    description         TEXT,
    state               INTEGER NOT NULL DEFAULT 0,
    assigned_person_id  INTEGER,
    creation_time       TEXT NOT NULL,

    FOREIGN KEY (assigned_person_id) REFERENCES users(id) ON DELETE SET NULL
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_state ON tasks(state);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_assigned_person ON tasks(assigned_person_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_creation_time ON tasks(creation_time DESC);",
]

# notifications 表 DDL
_NOTIFICATIONS_DDL = """
CREATE TABLE IF NOT EXISTS notifications (
    notification_id    TEXT PRIMARY KEY,
    user_id            INTEGER NOT NULL,
    notification_name  TEXT NOT NULL,
    data               TEXT NOT NULL DEFAULT '{}',
    severity           TEXT NOT NULL DEFAULT 'info',
    created_at         TEXT NOT NULL,

    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);
"""

_NOTIFICATIONS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id, created_at DESC);",
]


# 建表顺序满足外键依赖：users 先于引用它的表
_SCHEMA: tuple[str, ...] = (
    _USERS_DDL,
    _USER_PERMISSIONS_DDL,
    _TASKS_DDL,
    _NOTIFICATIONS_DDL,
    *_TASKS_INDEXES,
    *_NOTIFICATIONS_INDEXES,
)

_PRAGMAS: tuple[str, ...] = (
    "PRAGMA journal_mode = WAL;",
    "PRAGMA foreign_keys = ON;",
    "PRAGMA busy_timeout = 5000;",
)


async def init_db(conn: aiosqlite.Connection) -> None:
    """设置连接 PRAGMA 并幂等创建 schema

    foreign_keys 是连接级设置，每个新连接都必须经过 init_db。
    """
    for pragma in _PRAGMAS:
        await conn.execute(pragma)
    for statement in _SCHEMA:
        await conn.execute(statement)
    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """当前连接的 journal_mode 是否为 WAL（内存库或只读介质上会回退）"""
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return bool(row) and str(row[0]).lower() == "wal"
