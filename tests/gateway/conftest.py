"""gateway 测试配置 -- 测试用协作者替身 + FastAPI app/AsyncClient fixture"""

import os
from collections.abc import AsyncGenerator, Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
from taskboard.core.models import NotificationSeverity, UserIdentifier
from taskboard.core.store import StoreGroup, create_store_group, write_transaction
from taskboard.gateway.services.notification_hub import NotificationHub

ALICE_ID = 7
BOB_ID = 9
CAROL_ID = 11


class FixedClock:
    """每次调用前进一分钟的测试时钟"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)) -> None:
        self.current = start

    def now(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


class RecordingPublisher:
    """记录 publish 调用的 NotificationPublisher"""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    async def publish(
        self,
        notification_name: str,
        data: BaseModel | dict[str, Any],
        severity: NotificationSeverity = NotificationSeverity.INFO,
        user_ids: Sequence[UserIdentifier] = (),
    ) -> None:
        self.calls.append(
            {
                "notification_name": notification_name,
                "data": data,
                "severity": severity,
                "user_ids": [u.user_id for u in user_ids],
            }
        )


class RecordingEmailSender:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, body: str) -> None:
        self.sent.append((to, subject, body))


async def seed_users(store_group: StoreGroup) -> None:
    """写入固定 id 的用户：alice(7) 与 bob(9) 有邮箱，carol(11) 没有"""
    async with write_transaction(store_group.conn):
        await store_group.conn.executemany(
            "INSERT INTO users (id, user_name, email_address) VALUES (?, ?, ?)",
            [
                (ALICE_ID, "alice", "alice@example.com"),
                (BOB_ID, "bob", "bob@example.com"),
                (CAROL_ID, "carol", None),
            ],
        )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def seeded_store_group(store_group: StoreGroup) -> StoreGroup:
    await seed_users(store_group)
    return store_group


@pytest_asyncio.fixture
async def test_app(tmp_path: Path):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from taskboard.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    store_group = await create_store_group(str(tmp_path / "test.db"))
    await seed_users(store_group)
    app.state.store_group = store_group
    app.state.notification_hub = NotificationHub()

    yield app

    await store_group.conn.close()
    os.environ.pop("TASKBOARD_DB_PATH", None)
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
