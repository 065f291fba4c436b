"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store、会话与 TaskService

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
调用者身份来自 X-User-Id 请求头，缺省时使用 GatewayConfig.default_user_id。
"""

from fastapi import Depends, Request
from taskboard.core.exceptions import AuthenticationError
from taskboard.core.permissions import GrantedPermissionChecker
from taskboard.core.session import CallerSession
from taskboard.core.store import StoreGroup

from .config import GatewayConfig
from .services.notification_hub import NotificationHub
from .services.notification_publisher import StoreNotificationPublisher
from .services.task_service import TaskService

USER_ID_HEADER = "X-User-Id"


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_notification_hub(request: Request) -> NotificationHub:
    """从 app.state 获取 NotificationHub 实例"""
    return request.app.state.notification_hub


def get_gateway_config(request: Request) -> GatewayConfig:
    return request.app.state.gateway_config


def get_session(
    request: Request,
    config: GatewayConfig = Depends(get_gateway_config),
) -> CallerSession:
    """从 X-User-Id 请求头解析调用者会话"""
    raw = request.headers.get(USER_ID_HEADER)
    if raw is None or not raw.strip():
        return CallerSession(user_id=config.default_user_id)

    try:
        user_id = int(raw)
    except ValueError:
        raise AuthenticationError(f"Invalid {USER_ID_HEADER} header: {raw!r}") from None
    if user_id <= 0:
        raise AuthenticationError(f"Invalid {USER_ID_HEADER} header: {raw!r}")
    return CallerSession(user_id=user_id)


async def get_permission_checker(
    session: CallerSession = Depends(get_session),
    store_group: StoreGroup = Depends(get_store_group),
) -> GrantedPermissionChecker:
    """按调用者的授权记录构建 PermissionChecker，匿名会话无任何权限"""
    if session.user_id is None:
        return GrantedPermissionChecker()
    granted = await store_group.user_store.get_granted_permissions(session.user_id)
    return GrantedPermissionChecker(granted)


def get_task_service(
    store_group: StoreGroup = Depends(get_store_group),
    hub: NotificationHub = Depends(get_notification_hub),
    session: CallerSession = Depends(get_session),
    permission_checker: GrantedPermissionChecker = Depends(get_permission_checker),
) -> TaskService:
    """为当前请求构建 TaskService"""
    return TaskService(
        store_group,
        session,
        permission_checker,
        notification_publisher=StoreNotificationPublisher(
            store_group.notification_store, hub
        ),
    )
