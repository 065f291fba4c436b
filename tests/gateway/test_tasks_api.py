"""任务 HTTP 接口测试

测试内容：
1. 创建任务的权限映射（403）与成功（201）
2. 查询接口：全部、筛选、分页、详情、缓存项
3. 更新与删除（204），不存在的任务返回 404 / 删除无副作用
4. 调用者身份解析与错误格式
"""

from httpx import AsyncClient
from taskboard.core.permissions import PermissionNames

ALICE = {"X-User-Id": "7"}
BOB = {"X-User-Id": "9"}


async def _grant(test_app, user_id: int, *permissions: str) -> None:
    for permission in permissions:
        await test_app.state.store_group.user_store.grant_permission(user_id, permission)


async def _create(client: AsyncClient, headers=ALICE, **body) -> int:
    resp = await client.post("/api/tasks", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


class TestCreateTaskApi:
    async def test_create_self_assigned(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks",
            json={"title": "Fix bug", "assigned_person_id": 7},
            headers=ALICE,
        )
        assert resp.status_code == 201
        assert resp.json()["id"] > 0

        resp = await client.get("/api/notifications", headers=ALICE)
        notifications = resp.json()["notifications"]
        assert [n["notification_name"] for n in notifications] == ["NewTask"]

    async def test_assign_other_forbidden(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks",
            json={"title": "Fix bug", "assigned_person_id": 9},
            headers=ALICE,
        )
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "AUTHORIZATION_FAILED"

        resp = await client.get("/api/tasks/all")
        assert resp.json() == []

    async def test_assign_other_with_grant_notifies(self, client: AsyncClient, test_app):
        await _grant(test_app, 7, PermissionNames.TASKS_ASSIGN_PERSON)
        await _create(client, title="Fix bug", assigned_person_id=9)

        resp = await client.get("/api/notifications", headers=BOB)
        assert resp.status_code == 200
        notifications = resp.json()["notifications"]
        assert len(notifications) == 1
        assert notifications[0]["notification_name"] == "NewTask"
        assert notifications[0]["data"]["message"].startswith("You have been assigned")

        resp = await client.get("/api/notifications", headers=ALICE)
        assert resp.json()["notifications"] == []

    async def test_unknown_assignee_conflict(self, client: AsyncClient, test_app):
        await _grant(test_app, 7, PermissionNames.TASKS_ASSIGN_PERSON)
        resp = await client.post(
            "/api/tasks",
            json={"title": "Orphan", "assigned_person_id": 4242},
            headers=ALICE,
        )
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "INTEGRITY_ERROR"

    async def test_invalid_title(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"title": ""}, headers=ALICE)
        assert resp.status_code == 422

    async def test_anonymous_assignment_unauthenticated(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks", json={"title": "t", "assigned_person_id": 9}
        )
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    async def test_invalid_user_header(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks", json={"title": "t"}, headers={"X-User-Id": "abc"}
        )
        assert resp.status_code == 401


class TestQueryApi:
    async def test_listing(self, client: AsyncClient):
        first = await _create(client, title="Alpha docs", assigned_person_id=7)
        second = await _create(client, title="Beta", state=1)
        third = await _create(client, title="Gamma docs")

        resp = await client.get("/api/tasks/all")
        assert [t["id"] for t in resp.json()] == [third, second, first]
        assert resp.json()[2]["assigned_person_name"] == "alice"

        resp = await client.get("/api/tasks", params={"filter": "docs"})
        assert [t["id"] for t in resp.json()["tasks"]] == [third, first]

        resp = await client.get("/api/tasks", params={"state": 1})
        assert [t["id"] for t in resp.json()["tasks"]] == [second]

        resp = await client.get("/api/tasks", params={"sorting": "title asc"})
        assert [t["title"] for t in resp.json()["tasks"]] == [
            "Alpha docs",
            "Beta",
            "Gamma docs",
        ]

    async def test_paged(self, client: AsyncClient):
        ids = [await _create(client, title=f"Task {i}") for i in range(5)]

        resp = await client.get(
            "/api/tasks/paged",
            params={"skip_count": 1, "max_result_count": 2, "sorting": "Id DESC"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_count"] == 5
        assert [t["id"] for t in data["items"]] == [ids[3], ids[2]]

    async def test_paged_bounds(self, client: AsyncClient):
        resp = await client.get("/api/tasks/paged", params={"max_result_count": 0})
        assert resp.status_code == 422

    async def test_get_by_id_and_cache(self, client: AsyncClient):
        task_id = await _create(client, title="Detail", description="body")

        resp = await client.get(f"/api/tasks/{task_id}")
        assert resp.status_code == 200
        assert resp.json()["description"] == "body"
        assert resp.json()["state"] == 0

        resp = await client.get(f"/api/tasks/{task_id}/cache")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Detail"

    async def test_get_missing(self, client: AsyncClient):
        resp = await client.get("/api/tasks/404")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "TASK_NOT_FOUND"


class TestUpdateDeleteApi:
    async def test_update(self, client: AsyncClient):
        task_id = await _create(client, title="Old", state=1)
        resp = await client.put(
            f"/api/tasks/{task_id}",
            json={"title": "New", "assigned_person_id": 7},
            headers=ALICE,
        )
        assert resp.status_code == 204

        data = (await client.get(f"/api/tasks/{task_id}")).json()
        assert data["title"] == "New"
        assert data["state"] == 1
        assert data["assigned_person_id"] == 7

    async def test_reassign_forbidden(self, client: AsyncClient):
        task_id = await _create(client, title="Mine", assigned_person_id=7)
        resp = await client.put(
            f"/api/tasks/{task_id}",
            json={"title": "Mine", "assigned_person_id": 9},
            headers=ALICE,
        )
        assert resp.status_code == 403

    async def test_update_missing(self, client: AsyncClient):
        resp = await client.put("/api/tasks/404", json={"title": "x"}, headers=ALICE)
        assert resp.status_code == 404

    async def test_delete_requires_permission(self, client: AsyncClient, test_app):
        task_id = await _create(client, title="Doomed")

        resp = await client.delete(f"/api/tasks/{task_id}", headers=ALICE)
        assert resp.status_code == 403

        await _grant(test_app, 7, PermissionNames.TASKS_DELETE)
        resp = await client.delete(f"/api/tasks/{task_id}", headers=ALICE)
        assert resp.status_code == 204
        assert (await client.get(f"/api/tasks/{task_id}")).status_code == 404

        resp = await client.delete(f"/api/tasks/{task_id}", headers=ALICE)
        assert resp.status_code == 204
