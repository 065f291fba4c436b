"""维护 CLI 测试 -- python -m taskboard.core"""

from pathlib import Path

import pytest
from taskboard.core.__main__ import main


@pytest.fixture
def cli_db(tmp_path: Path, monkeypatch) -> Path:
    db_path = tmp_path / "cli" / "taskboard.db"
    monkeypatch.setenv("TASKBOARD_DB_PATH", str(db_path))
    return db_path


class TestCli:
    def test_no_args_prints_usage(self, capsys):
        assert main([]) == 1
        assert "用法" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert main(["frobnicate"]) == 1

    def test_init_db(self, cli_db: Path, capsys):
        assert main(["init-db"]) == 0
        assert cli_db.exists()

    def test_add_user_grant_and_list(self, cli_db: Path, capsys):
        assert main(["add-user", "alice", "alice@example.com"]) == 0
        assert "id=1" in capsys.readouterr().out

        assert main(["grant", "1", "Pages.Tasks.Delete"]) == 0
        assert "Pages.Tasks.Delete" in capsys.readouterr().out

        assert main(["list-tasks"]) == 0
        assert "共 0 条任务" in capsys.readouterr().out

    def test_grant_unknown_permission(self, cli_db: Path, capsys):
        assert main(["grant", "1", "Pages.Nope"]) == 1
        assert "未知权限" in capsys.readouterr().out

    def test_grant_bad_user_id(self, cli_db: Path):
        assert main(["grant", "abc", "Pages.Tasks.Delete"]) == 1
