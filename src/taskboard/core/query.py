"""任务查询构建 -- 筛选 + 排序

get_tasks 与 get_paged_tasks 共用 build_task_query，
TaskQuery 只产出固定列名和参数占位符，排序表达式中的文本不会拼入 SQL。

排序表达式格式: "<field> [ASC|DESC][, <field> [ASC|DESC] ...]"
字段名不区分大小写，CamelCase 与 snake_case 均可；无法识别的子句被忽略。
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from .models.dtos import GetTasksInput
from .models.enums import SortDirection, TaskState

log = structlog.get_logger()

# 可排序字段 -> SQL 列（键为去掉下划线后的小写字段名）
SORTABLE_COLUMNS: dict[str, str] = {
    "id": "t.id",
    "title": "t.title",
    "state": "t.state",
    "creationtime": "t.creation_time",
    "assignedpersonid": "t.assigned_person_id",
}

_DIRECTIONS: dict[str, SortDirection] = {
    "asc": SortDirection.ASC,
    "ascending": SortDirection.ASC,
    "desc": SortDirection.DESC,
    "descending": SortDirection.DESC,
}


@dataclass(frozen=True)
class SortClause:
    """单个排序子句"""

    column: str
    direction: SortDirection = SortDirection.ASC

    def to_sql(self) -> str:
        return f"{self.column} {self.direction.value}"


DEFAULT_SORTING: tuple[SortClause, ...] = (
    SortClause(SORTABLE_COLUMNS["creationtime"], SortDirection.DESC),
)


def _normalize_field(name: str) -> str:
    return name.replace("_", "").lower()


def parse_sorting(expression: str | None) -> tuple[SortClause, ...]:
    """解析排序表达式

    Returns:
        识别出的排序子句；表达式为空或没有可识别子句时返回空元组
    """
    if not expression or not expression.strip():
        return ()

    clauses: list[SortClause] = []
    for raw_clause in expression.split(","):
        parts = raw_clause.split()
        if not parts or len(parts) > 2:
            if parts:
                log.debug("sorting_clause_ignored", clause=raw_clause.strip())
            continue

        column = SORTABLE_COLUMNS.get(_normalize_field(parts[0]))
        if column is None:
            log.debug("sorting_field_ignored", field=parts[0])
            continue

        direction = SortDirection.ASC
        if len(parts) == 2:
            direction = _DIRECTIONS.get(parts[1].lower())
            if direction is None:
                log.debug("sorting_direction_ignored", clause=raw_clause.strip())
                continue

        clauses.append(SortClause(column, direction))

    return tuple(clauses)


@dataclass(frozen=True)
class TaskQuery:
    """任务查询条件：各筛选条件仅在给出时以 AND 组合"""

    state: TaskState | None = None
    title_filter: str | None = None
    assigned_person_id: int | None = None
    sorting: tuple[SortClause, ...] = field(default=DEFAULT_SORTING)

    def where_clause(self) -> tuple[str, list[Any]]:
        """生成 WHERE 子句（不含 WHERE 关键字时返回空串）和参数"""
        conditions: list[str] = []
        params: list[Any] = []

        if self.state is not None:
            conditions.append("t.state = ?")
            params.append(int(self.state))

        if self.title_filter:
            # instr 区分大小写，LIKE 对 ASCII 不区分
            conditions.append("instr(t.title, ?) > 0")
            params.append(self.title_filter)

        if self.assigned_person_id is not None:
            conditions.append("t.assigned_person_id = ?")
            params.append(self.assigned_person_id)

        if not conditions:
            return "", params
        return "WHERE " + " AND ".join(conditions), params

    def order_by_clause(self) -> str:
        """生成 ORDER BY 子句，末尾以 id 升序保持插入顺序"""
        clauses = [c.to_sql() for c in self.sorting or DEFAULT_SORTING]
        if not any(c.column == SORTABLE_COLUMNS["id"] for c in self.sorting):
            clauses.append("t.id ASC")
        return "ORDER BY " + ", ".join(clauses)


def build_task_query(input: GetTasksInput) -> TaskQuery:
    """根据查询输入构建 TaskQuery

    sorting 非空且可识别时原样应用，否则按 creation_time 倒序。
    """
    sorting = parse_sorting(input.sorting) or DEFAULT_SORTING
    return TaskQuery(
        state=input.state,
        title_filter=input.filter or None,
        assigned_person_id=input.assigned_person_id,
        sorting=sorting,
    )
