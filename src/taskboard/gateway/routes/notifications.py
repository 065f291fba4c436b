"""通知路由

GET /api/notifications: 当前调用者的通知收件箱，按 created_at 倒序。
GET /api/stream/notifications: SSE 实时推送发给当前调用者的新通知，带心跳保活。
"""

import asyncio
import json

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse
from taskboard.core.config import NOTIFICATION_LIST_LIMIT, SSE_HEARTBEAT_INTERVAL
from taskboard.core.models import Notification
from taskboard.core.session import CallerSession
from taskboard.core.store import StoreGroup

from ..deps import get_notification_hub, get_session, get_store_group
from ..services.notification_hub import NotificationHub

router = APIRouter()


class NotificationListResponse(BaseModel):
    """通知列表响应"""

    notifications: list[Notification]


def _notification_to_sse(notification: Notification) -> dict:
    return {
        "id": notification.notification_id,
        "event": notification.notification_name,
        "data": json.dumps(notification.model_dump(mode="json"), ensure_ascii=False),
    }


@router.get("/api/notifications", response_model=NotificationListResponse)
async def list_notifications(
    session: CallerSession = Depends(get_session),
    store_group: StoreGroup = Depends(get_store_group),
):
    """查询当前调用者的通知"""
    user_id = session.get_user_id()
    notifications = await store_group.notification_store.list_notifications_for_user(
        user_id, limit=NOTIFICATION_LIST_LIMIT
    )
    return NotificationListResponse(notifications=notifications)


@router.get("/api/stream/notifications")
async def stream_notifications(
    session: CallerSession = Depends(get_session),
    hub: NotificationHub = Depends(get_notification_hub),
):
    """SSE 通知流端点

    只推送订阅之后发布的通知，历史通知通过 /api/notifications 查询。
    """
    user_id = session.get_user_id()

    async def event_generator():
        # subscribe 与 unsubscribe 在同一生成器内成对执行
        queue = await hub.subscribe(user_id)
        try:
            while True:
                try:
                    notification = await asyncio.wait_for(
                        queue.get(), timeout=SSE_HEARTBEAT_INTERVAL
                    )
                    yield _notification_to_sse(notification)
                except TimeoutError:
                    # 心跳保活
                    yield {"comment": "heartbeat"}
        finally:
            await hub.unsubscribe(user_id, queue)

    return EventSourceResponse(event_generator())
