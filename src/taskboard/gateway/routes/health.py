"""健康检查路由

GET /health: 存活探针
GET /ready: 就绪探针，检查数据库 schema 可读、WAL 模式与数据目录所在磁盘空间
"""

import shutil
from pathlib import Path

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse
from taskboard.core.config import get_db_path
from taskboard.core.store.sqlite_init import verify_wal_mode

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


async def _check_database(request: Request) -> dict:
    conn = request.app.state.store_group.conn
    cursor = await conn.execute("SELECT COUNT(*) FROM tasks")
    row = await cursor.fetchone()
    return {
        "sqlite": "ok",
        "wal_mode": await verify_wal_mode(conn),
        "task_count": int(row[0]) if row else 0,
    }


def _free_disk_mb() -> int:
    db_dir = Path(get_db_path()).parent
    target = db_dir if db_dir.exists() else Path.cwd()
    return shutil.disk_usage(target).free // (1024 * 1024)


@router.get("/ready")
async def ready(request: Request):
    """就绪检查

    wal_mode 仅报告，不影响就绪状态；sqlite 查询失败或磁盘空间无法读取时返回 503。
    """
    checks: dict = {}
    ready_ok = True

    try:
        checks.update(await _check_database(request))
    except Exception as exc:
        log.warning("readiness_sqlite_failed", error=str(exc))
        checks["sqlite"] = f"error: {exc}"
        ready_ok = False

    try:
        checks["disk_space_mb"] = _free_disk_mb()
    except OSError as exc:
        log.warning("readiness_disk_check_failed", error=str(exc))
        checks["disk_space_mb"] = 0
        ready_ok = False

    return JSONResponse(
        status_code=200 if ready_ok else 503,
        content={"status": "ready" if ready_ok else "not_ready", "checks": checks},
    )
