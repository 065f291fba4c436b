"""TaskService -- 任务查询/创建/更新/删除业务逻辑

查询流程（get_tasks / get_paged_tasks 共用 build_task_query）：
1. 按 state、标题子串、被分配人 AND 组合筛选（仅在给出时生效）
2. 按 sorting 排序，未给出时按 creation_time 倒序
3. get_paged_tasks 先统计筛选后的总数，再取 skip/take 分页

写操作的权限检查都放在方法开头，任何写入之前完成。
"""

import structlog
from taskboard.core.cache import StoreTaskCache, TaskCache
from taskboard.core.clock import Clock, SystemClock
from taskboard.core.exceptions import AuthorizationError, TaskNotFoundError
from taskboard.core.mail import EmailSender, NullEmailSender
from taskboard.core.mapping import (
    apply_update_input,
    task_from_create_input,
    to_task_dto,
    to_task_dtos,
)
from taskboard.core.models import (
    CreateTaskInput,
    GetTasksInput,
    GetTasksOutput,
    MessageNotificationData,
    NotificationSeverity,
    PagedResult,
    Task,
    TaskCacheItem,
    TaskDto,
    UpdateTaskInput,
)
from taskboard.core.notifications import NEW_TASK_NOTIFICATION, NotificationPublisher
from taskboard.core.permissions import PermissionChecker, PermissionNames
from taskboard.core.query import build_task_query
from taskboard.core.session import CallerSession
from taskboard.core.store import StoreGroup

log = structlog.get_logger()

NEW_TASK_MESSAGE = "You have been assigned one task into your todo list."
NEW_TASK_EMAIL_SUBJECT = "New Todo item"


class TaskService:
    """任务业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        session: CallerSession,
        permission_checker: PermissionChecker,
        notification_publisher: NotificationPublisher | None = None,
        clock: Clock | None = None,
        task_cache: TaskCache | None = None,
        email_sender: EmailSender | None = None,
    ) -> None:
        self._stores = store_group
        self._session = session
        self._permissions = permission_checker
        self._publisher = notification_publisher
        self._clock = clock or SystemClock()
        self._task_cache = task_cache or StoreTaskCache(store_group.task_store)
        self._email_sender = email_sender or NullEmailSender()

    async def get_task_from_cache_by_id(self, task_id: int) -> TaskCacheItem:
        return await self._task_cache.get(task_id)

    async def get_all_tasks(self) -> list[TaskDto]:
        """全部任务，按 creation_time 倒序"""
        tasks = await self._stores.task_store.list_tasks()
        return to_task_dtos(tasks)

    async def get_tasks(self, input: GetTasksInput) -> GetTasksOutput:
        """筛选 + 排序，不分页"""
        query = build_task_query(input)
        tasks = await self._stores.task_store.query_tasks(query)
        return GetTasksOutput(tasks=to_task_dtos(tasks))

    async def get_paged_tasks(self, input: GetTasksInput) -> PagedResult[TaskDto]:
        """筛选 + 排序 + 分页

        total_count 为分页前筛选结果的总数，与当前页分别查询。
        """
        query = build_task_query(input)
        total_count = await self._stores.task_store.count_tasks(query)
        tasks = await self._stores.task_store.query_tasks(
            query,
            skip=input.skip_count,
            take=input.max_result_count,
        )
        return PagedResult[TaskDto](total_count=total_count, items=to_task_dtos(tasks))

    async def get_task_by_id_async(self, task_id: int) -> TaskDto:
        """按 id 查询任务，不存在时抛出 TaskNotFoundError"""
        task = await self._get_task_or_raise(task_id)
        return to_task_dto(task)

    async def get_task_by_id(self, task_id: int) -> TaskDto:
        """与 get_task_by_id_async 行为一致"""
        return await self.get_task_by_id_async(task_id)

    async def update_task(self, input: UpdateTaskInput) -> None:
        """更新任务

        分配给他人（非调用者本人）且无 AssignPerson 权限时抛出 AuthorizationError。
        """
        log.info("task_update_requested", input=input.model_dump(mode="json"))

        if input.assigned_person_id is not None:
            can_assign_to_others = self._permissions.is_granted(
                PermissionNames.TASKS_ASSIGN_PERSON
            )
            if (
                input.assigned_person_id != self._session.get_user_id()
                and not can_assign_to_others
            ):
                raise AuthorizationError(
                    "Not allowed to assign tasks to other users",
                    permission=PermissionNames.TASKS_ASSIGN_PERSON,
                )

        task = await self._get_task_or_raise(input.id)
        await self._stores.task_store.update_task(apply_update_input(task, input))
        log.info("task_updated", task_id=input.id)

    async def create_task(self, input: CreateTaskInput) -> int:
        """创建任务

        Returns:
            生成的任务 id；非正数表示插入失败，此时不发送通知
        """
        log.info("task_create_requested", input=input.model_dump(mode="json"))

        assigned_to_other = (
            input.assigned_person_id is not None
            and input.assigned_person_id != self._session.get_user_id()
        )
        if assigned_to_other:
            self._permissions.authorize(PermissionNames.TASKS_ASSIGN_PERSON)

        task = task_from_create_input(input, creation_time=self._clock.now())
        task_id = await self._stores.task_store.insert_task(task)

        # 只有创建成功才发送通知
        if task_id > 0:
            task = task.model_copy(update={"id": task_id})
            log.info(
                "task_created",
                task_id=task_id,
                assigned_person_id=input.assigned_person_id,
            )
            if input.assigned_person_id is not None:
                try:
                    await self._notify_assignee(task)
                except Exception:
                    # 通知失败不回滚已提交的任务
                    log.warning(
                        "task_assignment_notify_failed",
                        task_id=task_id,
                        assigned_person_id=input.assigned_person_id,
                        exc_info=True,
                    )

        return task_id

    async def delete_task(self, task_id: int) -> None:
        """删除任务，需要 Delete 权限；任务不存在时无操作"""
        self._permissions.authorize(PermissionNames.TASKS_DELETE)

        task = await self._stores.task_store.get_task(task_id)
        if task is not None:
            await self._stores.task_store.delete_task(task_id)
            log.info("task_deleted", task_id=task_id)

    async def _get_task_or_raise(self, task_id: int) -> Task:
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def _notify_assignee(self, task: Task) -> None:
        """向被分配人发布 NewTask 通知，有邮箱时再发邮件"""
        assigned_person = await self._stores.user_store.load_user(task.assigned_person_id)

        if self._publisher is not None:
            await self._publisher.publish(
                NEW_TASK_NOTIFICATION,
                MessageNotificationData(message=NEW_TASK_MESSAGE),
                severity=NotificationSeverity.INFO,
                user_ids=[assigned_person.to_user_identifier()],
            )

        if assigned_person.email_address:
            await self._email_sender.send(
                assigned_person.email_address,
                NEW_TASK_EMAIL_SUBJECT,
                NEW_TASK_MESSAGE,
            )
