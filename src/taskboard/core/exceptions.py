"""Taskboard 异常体系

服务层抛出的领域异常，由 gateway 的异常处理器统一映射为 HTTP 错误响应。
"""


class TaskboardError(Exception):
    """Taskboard 基础异常"""

    code: str = "TASKBOARD_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(TaskboardError):
    """操作需要调用者身份，但当前会话为匿名"""

    code = "AUTHENTICATION_REQUIRED"

    def __init__(self, message: str = "Current session has no user id") -> None:
        super().__init__(message)


class AuthorizationError(TaskboardError):
    """缺少执行操作所需的权限

    在任何写操作之前抛出，不会留下部分状态。
    """

    code = "AUTHORIZATION_FAILED"

    def __init__(self, message: str, permission: str | None = None) -> None:
        """
        Args:
            message: 错误描述
            permission: 缺失的权限名
        """
        super().__init__(message)
        self.permission = permission


class EntityNotFoundError(TaskboardError):
    """实体不存在"""

    code = "ENTITY_NOT_FOUND"
    entity_name = "Entity"

    def __init__(self, entity_id: int) -> None:
        super().__init__(f"{self.entity_name} with id {entity_id} does not exist")
        self.entity_id = entity_id


class TaskNotFoundError(EntityNotFoundError):
    code = "TASK_NOT_FOUND"
    entity_name = "Task"


class UserNotFoundError(EntityNotFoundError):
    code = "USER_NOT_FOUND"
    entity_name = "User"
