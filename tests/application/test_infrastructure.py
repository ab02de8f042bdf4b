"""Tests for logging setup, schema management and the manage CLI."""

import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest
import structlog
from protean import current_domain
from storefront.utils.db import rdbms_providers, setup_db
from storefront.utils.logging import add_context, clear_context, configure_logging, get_log_level


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()


class TestLogLevel:
    @pytest.mark.parametrize(
        "env, expected",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("unknown", "INFO")],
    )
    def test_level_by_environment(self, monkeypatch, env, expected):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", env)
        assert get_log_level() == expected

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"


class TestConfigureLogging:
    def test_no_log_files_under_test(self, monkeypatch, tmp_path, restore_logging):
        monkeypatch.setenv("PROTEAN_ENV", "test")
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        configure_logging(log_dir=str(tmp_path / "logs"))

        assert not (tmp_path / "logs").exists()
        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)

    def test_rotating_files_outside_test(self, monkeypatch, tmp_path, restore_logging):
        monkeypatch.setenv("ENV", "development")

        configure_logging(log_dir=str(tmp_path / "logs"), log_file_prefix="shop")

        files = sorted(
            h.baseFilename for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)
        )
        assert [name.rsplit("/", 1)[-1] for name in files] == ["shop.log", "shop_error.log"]

    def test_context_is_bound_and_cleared(self, restore_logging):
        add_context(request_id="req-1")
        assert structlog.contextvars.get_contextvars()["request_id"] == "req-1"
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestSchemaManagement:
    def test_setup_touches_only_relational_providers(self):
        expected = [provider.name for provider in rdbms_providers(current_domain)]
        assert setup_db(current_domain) == expected


class TestManageCli:
    def test_setup_db(self, capsys, monkeypatch):
        from manage import main
        from storefront.domain import storefront

        # Already initialized by the session fixture
        monkeypatch.setattr(storefront, "init", lambda: None)

        main(["setup-db"])
        assert "Initializing storefront domain" in capsys.readouterr().out

    def test_unknown_command(self):
        from manage import main

        with pytest.raises(SystemExit):
            main(["migrate"])


class TestAsgiEntryPoint:
    def test_app_module_imports_in_a_fresh_interpreter(self, tmp_path):
        src = Path(__file__).resolve().parents[2] / "src"
        env = {**os.environ, "PYTHONPATH": str(src), "PROTEAN_ENV": "test"}

        completed = subprocess.run(
            [sys.executable, "-c", "import app; print(type(app.app).__name__)"],
            cwd=tmp_path,
            env=env,
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert completed.returncode == 0, completed.stderr
        assert completed.stdout.strip().endswith("FastAPI")
