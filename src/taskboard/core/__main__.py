"""CLI 入口模块 -- python -m taskboard.core <command>

支持的命令：
  init-db                          初始化数据库表结构
  add-user <user_name> [email]     创建用户
  grant <user_id> <permission>     授予权限
  list-tasks                       按 creation_time 倒序列出全部任务
"""

import asyncio
import sys

from .config import get_db_path
from .permissions import PermissionNames

USAGE = """用法: python -m taskboard.core <command>
命令:
  init-db                          初始化数据库表结构
  add-user <user_name> [email]     创建用户
  grant <user_id> <permission>     授予权限
  list-tasks                       列出全部任务"""


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口，返回进程退出码"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 1

    command, rest = args[0], args[1:]

    if command == "init-db" and not rest:
        asyncio.run(init_db_command())
    elif command == "add-user" and 1 <= len(rest) <= 2:
        asyncio.run(add_user_command(rest[0], rest[1] if len(rest) > 1 else None))
    elif command == "grant" and len(rest) == 2 and rest[0].isdigit():
        if rest[1] not in PermissionNames.ALL:
            print(f"未知权限: {rest[1]}")
            print("可用权限: " + ", ".join(PermissionNames.ALL))
            return 1
        asyncio.run(grant_command(int(rest[0]), rest[1]))
    elif command == "list-tasks" and not rest:
        asyncio.run(list_tasks_command())
    else:
        print(f"未知命令或参数错误: {' '.join(args)}")
        print(USAGE)
        return 1
    return 0


async def init_db_command() -> None:
    from .store import create_store_group

    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print(f"数据库已初始化: {db_path}")


async def add_user_command(user_name: str, email_address: str | None) -> None:
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        user_id = await store_group.user_store.create_user(user_name, email_address)
        print(f"已创建用户 {user_name}，id={user_id}")
    finally:
        await store_group.conn.close()


async def grant_command(user_id: int, permission: str) -> None:
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        await store_group.user_store.load_user(user_id)
        await store_group.user_store.grant_permission(user_id, permission)
        print(f"已授予用户 {user_id} 权限 {permission}")
    finally:
        await store_group.conn.close()


async def list_tasks_command() -> None:
    from .mapping import to_task_dtos
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        tasks = to_task_dtos(await store_group.task_store.list_tasks())
    finally:
        await store_group.conn.close()

    for t in tasks:
        assignee = t.assigned_person_name or "-"
        print(
            f"{t.id:>6}  {t.state.name:<9}  {t.creation_time.isoformat()}  "
            f"{assignee:<16}  {t.title}"
        )
    print(f"共 {len(tasks)} 条任务")


if __name__ == "__main__":
    sys.exit(main())
