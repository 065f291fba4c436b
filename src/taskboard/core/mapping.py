"""对象映射 -- Task 与传输 DTO 之间的转换

基于 pydantic from_attributes / model_validate 完成字段一一映射。
"""

from collections.abc import Iterable
from datetime import datetime

from .models import (
    CreateTaskInput,
    Task,
    TaskCacheItem,
    TaskDto,
    UpdateTaskInput,
)


def to_task_dto(task: Task) -> TaskDto:
    """Task -> TaskDto，被分配人姓名来自 JOIN 出的 User"""
    data = task.model_dump()
    data["assigned_person_name"] = (
        task.assigned_person.user_name if task.assigned_person is not None else None
    )
    return TaskDto.model_validate(data)


def to_task_dtos(tasks: Iterable[Task]) -> list[TaskDto]:
    return [to_task_dto(t) for t in tasks]


def to_task_cache_item(task: Task) -> TaskCacheItem:
    return TaskCacheItem.model_validate(task)


def task_from_create_input(input: CreateTaskInput, creation_time: datetime) -> Task:
    """CreateTaskInput -> 未持久化的 Task（id 由 Store 分配）"""
    return Task(
        title=input.title,
        description=input.description,
        state=input.state,
        assigned_person_id=input.assigned_person_id,
        creation_time=creation_time,
    )


def apply_update_input(task: Task, input: UpdateTaskInput) -> Task:
    """把 UpdateTaskInput 映射到已有 Task 上

    title/description/assigned_person_id 总是覆盖；
    state 为 None 时保留原值；id 与 creation_time 不变。
    """
    update = {
        "title": input.title,
        "description": input.description,
        "assigned_person_id": input.assigned_person_id,
        "assigned_person": None,
    }
    if input.state is not None:
        update["state"] = input.state
    return task.model_copy(update=update)
