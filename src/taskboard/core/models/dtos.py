"""传输层 DTO

Task 与 DTO 之间的转换集中在 taskboard.core.mapping。
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_MAX_RESULT_COUNT, MAX_RESULT_COUNT_LIMIT
from .enums import TaskState
from .task import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH

T = TypeVar("T")


class TaskDto(BaseModel):
    """任务输出"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    state: TaskState
    assigned_person_id: int | None = None
    assigned_person_name: str | None = None
    creation_time: datetime


class TaskCacheItem(BaseModel):
    """任务缓存项"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    state: TaskState
    assigned_person_id: int | None = None


class CreateTaskInput(BaseModel):
    """创建任务输入"""

    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH, description="任务标题")
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    state: TaskState = Field(default=TaskState.OPEN)
    assigned_person_id: int | None = Field(default=None, description="被分配人 User ID")


class UpdateTaskInput(BaseModel):
    """更新任务输入

    title/description/assigned_person_id 总是覆盖；state 为 None 时保留原值。
    """

    id: int = Field(gt=0)
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    state: TaskState | None = None
    assigned_person_id: int | None = None


class GetTasksInput(BaseModel):
    """任务查询输入：筛选 + 排序 + 分页"""

    state: TaskState | None = Field(default=None, description="按状态精确筛选")
    filter: str | None = Field(default=None, description="标题子串筛选（区分大小写）")
    assigned_person_id: int | None = Field(default=None, description="按被分配人筛选")
    sorting: str | None = Field(
        default=None, description="排序表达式，如 'CreationTime DESC, Title'"
    )
    skip_count: int = Field(default=0, ge=0)
    max_result_count: int = Field(
        default=DEFAULT_MAX_RESULT_COUNT, ge=1, le=MAX_RESULT_COUNT_LIMIT
    )


class GetTasksOutput(BaseModel):
    """任务列表输出"""

    tasks: list[TaskDto]


class PagedResult(BaseModel, Generic[T]):
    """分页结果：筛选后的总数 + 当前页"""

    total_count: int
    items: list[T]
