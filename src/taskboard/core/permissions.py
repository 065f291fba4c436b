"""权限检查

权限以名称标识，授权记录保存在 user_permissions 表，
每个请求根据调用者的授权集合构建一个 GrantedPermissionChecker。
"""

from collections.abc import Iterable
from typing import Protocol

import structlog

from .exceptions import AuthorizationError

log = structlog.get_logger()


class PermissionNames:
    """权限名常量"""

    TASKS_ASSIGN_PERSON = "Pages.Tasks.AssignPerson"
    TASKS_DELETE = "Pages.Tasks.Delete"

    ALL = (TASKS_ASSIGN_PERSON, TASKS_DELETE)


class PermissionChecker(Protocol):
    """权限检查接口"""

    def is_granted(self, permission: str) -> bool:
        """是否已授予权限"""
        ...

    def authorize(self, permission: str) -> None:
        """未授予时抛出 AuthorizationError"""
        ...


class GrantedPermissionChecker:
    """基于授权集合的 PermissionChecker 实现"""

    def __init__(self, granted: Iterable[str] = ()) -> None:
        self._granted = frozenset(granted)

    @property
    def granted(self) -> frozenset[str]:
        return self._granted

    def is_granted(self, permission: str) -> bool:
        return permission in self._granted

    def authorize(self, permission: str) -> None:
        if not self.is_granted(permission):
            log.info("permission_denied", permission=permission)
            raise AuthorizationError(
                f"Required permission is not granted: {permission}",
                permission=permission,
            )
