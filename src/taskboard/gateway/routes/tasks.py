"""任务路由

GET    /api/tasks/all: 全部任务，按 creation_time 倒序
GET    /api/tasks: 筛选 + 排序，不分页
GET    /api/tasks/paged: 筛选 + 排序 + 分页
GET    /api/tasks/{task_id}: 任务详情
GET    /api/tasks/{task_id}/cache: 任务缓存项
POST   /api/tasks: 创建任务
PUT    /api/tasks/{task_id}: 更新任务
DELETE /api/tasks/{task_id}: 删除任务（不存在时同样返回 204）
"""

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field
from starlette.responses import Response
from taskboard.core.config import DEFAULT_MAX_RESULT_COUNT, MAX_RESULT_COUNT_LIMIT
from taskboard.core.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    CreateTaskInput,
    GetTasksInput,
    GetTasksOutput,
    PagedResult,
    TaskCacheItem,
    TaskDto,
    TaskState,
    UpdateTaskInput,
)

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


class CreateTaskResponse(BaseModel):
    """创建任务响应"""

    id: int


class UpdateTaskRequest(BaseModel):
    """更新任务请求体（id 取自路径）"""

    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    state: TaskState | None = None
    assigned_person_id: int | None = None


def get_tasks_input(
    state: TaskState | None = Query(default=None, description="按状态筛选"),
    filter: str | None = Query(default=None, description="标题子串筛选"),
    assigned_person_id: int | None = Query(default=None, description="按被分配人筛选"),
    sorting: str | None = Query(default=None, description="排序表达式"),
    skip_count: int = Query(default=0, ge=0),
    max_result_count: int = Query(
        default=DEFAULT_MAX_RESULT_COUNT, ge=1, le=MAX_RESULT_COUNT_LIMIT
    ),
) -> GetTasksInput:
    """把查询参数组装为 GetTasksInput"""
    return GetTasksInput(
        state=state,
        filter=filter,
        assigned_person_id=assigned_person_id,
        sorting=sorting,
        skip_count=skip_count,
        max_result_count=max_result_count,
    )


@router.get("/api/tasks/all", response_model=list[TaskDto])
async def get_all_tasks(service: TaskService = Depends(get_task_service)):
    return await service.get_all_tasks()


@router.get("/api/tasks", response_model=GetTasksOutput)
async def get_tasks(
    input: GetTasksInput = Depends(get_tasks_input),
    service: TaskService = Depends(get_task_service),
):
    """筛选 + 排序，忽略分页参数"""
    return await service.get_tasks(input)


@router.get("/api/tasks/paged", response_model=PagedResult[TaskDto])
async def get_paged_tasks(
    input: GetTasksInput = Depends(get_tasks_input),
    service: TaskService = Depends(get_task_service),
):
    """筛选 + 排序 + 分页，total_count 为分页前的总数"""
    return await service.get_paged_tasks(input)


@router.get("/api/tasks/{task_id}", response_model=TaskDto)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    return await service.get_task_by_id_async(task_id)


@router.get("/api/tasks/{task_id}/cache", response_model=TaskCacheItem)
async def get_task_from_cache(
    task_id: int, service: TaskService = Depends(get_task_service)
):
    return await service.get_task_from_cache_by_id(task_id)


@router.post("/api/tasks", response_model=CreateTaskResponse, status_code=201)
async def create_task(
    body: CreateTaskInput,
    service: TaskService = Depends(get_task_service),
):
    """创建任务，分配给他人需要 Pages.Tasks.AssignPerson 权限"""
    task_id = await service.create_task(body)
    return CreateTaskResponse(id=task_id)


@router.put("/api/tasks/{task_id}", status_code=204)
async def update_task(
    body: UpdateTaskRequest,
    task_id: int = Path(gt=0),
    service: TaskService = Depends(get_task_service),
):
    """更新任务，分配给他人需要 Pages.Tasks.AssignPerson 权限"""
    await service.update_task(UpdateTaskInput(id=task_id, **body.model_dump()))
    return Response(status_code=204)


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """删除任务，需要 Pages.Tasks.Delete 权限"""
    await service.delete_task(task_id)
    return Response(status_code=204)
