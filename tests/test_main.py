"""Tests for the snippet-vault command line (non-interactive paths only)."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from snippet_vault.__main__ import main
from snippet_vault.core.persistence import FileSlots, SnippetPersistence
from snippet_vault.core.store import SnippetStore
from snippet_vault.log import logger


@pytest.fixture(autouse=True)
def _no_log_env(monkeypatch):
    monkeypatch.delenv("SNIPPET_VAULT_LOG", raising=False)


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    store = SnippetStore(SnippetPersistence(FileSlots(path)))
    store.create({"title": "Greeting", "lang": "python", "content": "print('hi')\n"})
    return path


class TestMain:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])
        assert info.value.code == 0
        assert "snippet-vault" in capsys.readouterr().out

    def test_list(self, data_dir, capsys):
        assert main(["--data-dir", str(data_dir), "--list"]) == 0
        out = capsys.readouterr().out
        assert "Greeting" in out
        assert "python" in out

    def test_list_empty(self, tmp_path, capsys):
        assert main(["--data-dir", str(tmp_path / "empty"), "--list"]) == 0
        assert "No snippets." in capsys.readouterr().out

    def test_export(self, data_dir, tmp_path, capsys):
        snippet_id = SnippetStore(SnippetPersistence(FileSlots(data_dir))).get_all()[0].id
        out_dir = tmp_path / "out"
        assert main(["--data-dir", str(data_dir), "--export", snippet_id, "--out", str(out_dir)]) == 0
        assert (out_dir / "Greeting.py").read_text() == "print('hi')\n"

    def test_export_unknown_id(self, data_dir, capsys):
        assert main(["--data-dir", str(data_dir), "--export", "s_missing"]) == 1
        assert "s_missing" in capsys.readouterr().err

    def test_export_all_writes_backup(self, data_dir, tmp_path, capsys):
        backup = tmp_path / "backups" / "vault.json"
        assert main(["--data-dir", str(data_dir), "--export-all", str(backup)]) == 0
        data = json.loads(backup.read_text(encoding="utf-8"))
        assert [entry["title"] for entry in data] == ["Greeting"]
        assert "1 snippets written" in capsys.readouterr().out

    def test_export_all_backup_restores(self, data_dir, tmp_path):
        backup = tmp_path / "vault.json"
        main(["--data-dir", str(data_dir), "--export-all", str(backup)])
        restored = tmp_path / "restored"
        restored.mkdir()
        (restored / "snippetVault_v1.json").write_text(backup.read_text(encoding="utf-8"), encoding="utf-8")
        original = SnippetStore(SnippetPersistence(FileSlots(data_dir))).get_all()
        assert SnippetStore(SnippetPersistence(FileSlots(restored))).get_all() == original

    def test_export_all_failure(self, data_dir, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        assert main(["--data-dir", str(data_dir), "--export-all", str(blocker / "vault.json")]) == 1
        assert "Backup failed" in capsys.readouterr().err

    def test_log_file(self, data_dir, tmp_path):
        log_path = tmp_path / "logs" / "vault.log"
        before = list(logger.handlers)
        try:
            main(["--data-dir", str(data_dir), "--list", "--log-file", str(log_path)])
            assert log_path.exists()
        finally:
            for handler in logger.handlers[:]:
                if handler not in before:
                    logger.removeHandler(handler)
                    handler.close()

    def test_no_args_launches_app(self, tmp_path):
        with patch("snippet_vault.app.run_app") as run_app:
            assert main(["--data-dir", str(tmp_path)]) == 0
        run_app.assert_called_once_with(data_dir=tmp_path)
