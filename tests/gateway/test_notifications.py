"""通知发布与推送测试

测试内容：
1. StoreNotificationPublisher 落盘 + 广播
2. NotificationHub 订阅/取消订阅/满队列清理
3. SSE 流只在迭代期间持有订阅
4. 通知接口要求调用者身份
"""

import asyncio
from datetime import UTC, datetime

from httpx import AsyncClient
from taskboard.core.models import (
    MessageNotificationData,
    Notification,
    NotificationSeverity,
    UserIdentifier,
)
from taskboard.core.session import CallerSession
from taskboard.gateway.routes.notifications import stream_notifications
from taskboard.gateway.services.notification_hub import NotificationHub
from taskboard.gateway.services.notification_publisher import StoreNotificationPublisher


def _notification(user_id: int, notification_id: str = "n1") -> Notification:
    return Notification(
        notification_id=notification_id,
        user_id=user_id,
        notification_name="NewTask",
        created_at=datetime.now(UTC),
    )


class TestStoreNotificationPublisher:
    async def test_publish_persists_and_broadcasts(self, seeded_store_group):
        hub = NotificationHub()
        queue = await hub.subscribe(9)
        publisher = StoreNotificationPublisher(seeded_store_group.notification_store, hub)

        await publisher.publish(
            "NewTask",
            MessageNotificationData(message="hello"),
            severity=NotificationSeverity.WARN,
            user_ids=[UserIdentifier(user_id=9)],
        )

        stored = await seeded_store_group.notification_store.list_notifications_for_user(9)
        assert len(stored) == 1
        assert stored[0].data == {"message": "hello"}
        assert stored[0].severity == NotificationSeverity.WARN
        assert len(stored[0].notification_id) == 26  # ULID 长度

        received = await asyncio.wait_for(queue.get(), timeout=2.0)
        assert received.notification_id == stored[0].notification_id

    async def test_publish_to_multiple_users(self, seeded_store_group):
        publisher = StoreNotificationPublisher(seeded_store_group.notification_store)
        await publisher.publish(
            "Broadcast",
            {"message": "hi"},
            user_ids=[UserIdentifier(user_id=7), UserIdentifier(user_id=9)],
        )
        for user_id in (7, 9):
            items = await seeded_store_group.notification_store.list_notifications_for_user(
                user_id
            )
            assert [n.notification_name for n in items] == ["Broadcast"]

    async def test_no_recipients(self, seeded_store_group):
        publisher = StoreNotificationPublisher(seeded_store_group.notification_store)
        await publisher.publish("NewTask", {"message": "nobody"})
        assert await seeded_store_group.notification_store.list_notifications_for_user(7) == []


class TestNotificationHub:
    async def test_subscribe_unsubscribe(self):
        hub = NotificationHub()
        queue = await hub.subscribe(7)
        assert hub.subscriber_count(7) == 1

        await hub.unsubscribe(7, queue)
        assert hub.subscriber_count(7) == 0
        await hub.unsubscribe(7, queue)

    async def test_broadcast_only_to_recipient(self):
        hub = NotificationHub()
        alice = await hub.subscribe(7)
        bob = await hub.subscribe(9)

        await hub.broadcast(_notification(9))
        assert bob.qsize() == 1
        assert alice.empty()

    async def test_full_queue_dropped(self):
        hub = NotificationHub(queue_maxsize=1)
        await hub.subscribe(7)
        await hub.broadcast(_notification(7, "n1"))
        assert hub.subscriber_count(7) == 1

        await hub.broadcast(_notification(7, "n2"))
        assert hub.subscriber_count(7) == 0


class TestNotificationStream:
    """SSE 通知流的订阅生命周期"""

    async def test_subscribes_only_while_streaming(self):
        """响应创建时不订阅，生成器开始迭代才订阅，关闭后取消"""
        hub = NotificationHub()
        response = await stream_notifications(session=CallerSession(user_id=7), hub=hub)
        assert hub.subscriber_count(7) == 0

        stream = response.body_iterator
        pending = asyncio.create_task(stream.__anext__())
        await asyncio.sleep(0)
        assert hub.subscriber_count(7) == 1

        await hub.broadcast(_notification(7))
        event = await asyncio.wait_for(pending, timeout=2.0)
        assert event["event"] == "NewTask"
        assert event["id"] == "n1"

        await stream.aclose()
        assert hub.subscriber_count(7) == 0

    async def test_unstarted_stream_leaves_no_subscriber(self):
        hub = NotificationHub()
        await stream_notifications(session=CallerSession(user_id=7), hub=hub)
        assert hub.subscriber_count(7) == 0


class TestNotificationApi:
    async def test_inbox_requires_identity(self, client: AsyncClient):
        resp = await client.get("/api/notifications")
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    async def test_stream_requires_identity(self, client: AsyncClient):
        resp = await client.get("/api/stream/notifications")
        assert resp.status_code == 401

    async def test_empty_inbox(self, client: AsyncClient):
        resp = await client.get("/api/notifications", headers={"X-User-Id": "11"})
        assert resp.status_code == 200
        assert resp.json() == {"notifications": []}
