"""Task Domain Model

tasks 表的规范记录由 Store 持有，服务层不缓存副本。
assigned_person_id 为空或引用已存在的 User（由外键约束保证）。
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import TaskState
from .user import User

MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 64 * 1024


class Task(BaseModel):
    """Task 数据模型"""

    id: int | None = Field(default=None, description="主键，插入后由 Store 分配")
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH, description="任务标题")
    description: str | None = Field(
        default=None, max_length=MAX_DESCRIPTION_LENGTH, description="任务描述"
    )
    state: TaskState = Field(default=TaskState.OPEN, description="任务状态")
    assigned_person_id: int | None = Field(default=None, description="被分配人 User ID")
    creation_time: datetime = Field(description="创建时间（UTC）")

    # 查询时通过 LEFT JOIN users 填充，不参与持久化
    assigned_person: User | None = Field(default=None, exclude=True)
