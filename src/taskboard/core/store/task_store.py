"""TaskStore SQLite 实现

查询通过 LEFT JOIN users 一并取出被分配人，填充 Task.assigned_person。
筛选/排序条件由 TaskQuery 生成，计数与分页各自执行一次查询。
"""

from datetime import UTC, datetime

import aiosqlite

from ..exceptions import TaskNotFoundError
from ..models.enums import TaskState
from ..models.task import Task
from ..models.user import User
from ..query import TaskQuery
from .transaction import write_transaction

_SELECT_TASKS = """
SELECT t.id, t.title, t.description, t.state, t.assigned_person_id, t.creation_time,
       u.id, u.user_name, u.email_address
FROM tasks t
LEFT JOIN users u ON u.id = t.assigned_person_id
"""


def _to_utc_iso(value: datetime) -> str:
    """统一存为 UTC ISO 字符串，保证按文本排序即按时间排序"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        cursor = await self._conn.execute(
            _SELECT_TASKS + "WHERE t.id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 creation_time 倒序"""
        return await self.query_tasks(TaskQuery())

    async def query_tasks(
        self,
        query: TaskQuery,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[Task]:
        """按 TaskQuery 筛选排序，skip/take 给出时分页"""
        where_sql, params = query.where_clause()
        sql = f"{_SELECT_TASKS} {where_sql} {query.order_by_clause()}"

        if skip is not None or take is not None:
            # SQLite 的 OFFSET 必须跟在 LIMIT 之后，-1 表示不限条数
            sql += " LIMIT ? OFFSET ?"
            params = [*params, take if take is not None else -1, skip or 0]

        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def count_tasks(self, query: TaskQuery | None = None) -> int:
        """统计符合筛选条件的任务数"""
        where_sql, params = (query or TaskQuery()).where_clause()
        cursor = await self._conn.execute(
            f"SELECT COUNT(*) FROM tasks t {where_sql}",
            params,
        )
        row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def insert_task(self, task: Task) -> int:
        """插入任务并返回生成的 id"""
        async with write_transaction(self._conn):
            cursor = await self._conn.execute(
                """
                INSERT INTO tasks (title, description, state, assigned_person_id, creation_time)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    task.title,
                    task.description,
                    int(task.state),
                    task.assigned_person_id,
                    _to_utc_iso(task.creation_time),
                ),
            )
        return int(cursor.lastrowid or 0)

    async def update_task(self, task: Task) -> None:
        """覆盖 title/description/state/assigned_person_id，creation_time 不变"""
        if task.id is None:
            raise ValueError("task.id is required for update")

        async with write_transaction(self._conn):
            cursor = await self._conn.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, state = ?, assigned_person_id = ?
                WHERE id = ?
                """,
                (
                    task.title,
                    task.description,
                    int(task.state),
                    task.assigned_person_id,
                    task.id,
                ),
            )
            if cursor.rowcount == 0:
                raise TaskNotFoundError(task.id)

    async def delete_task(self, task_id: int) -> None:
        """删除任务（不存在时无操作）"""
        async with write_transaction(self._conn):
            await self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        assigned_person = None
        if row[6] is not None:
            assigned_person = User(id=row[6], user_name=row[7], email_address=row[8])
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            state=TaskState(row[3]),
            assigned_person_id=row[4],
            creation_time=datetime.fromisoformat(row[5]),
            assigned_person=assigned_person,
        )
