"""End-to-end CLI commands against a temporary SQLite file."""

from loguru import logger
import pytest
from typer.testing import CliRunner

from customer_posts.config import settings
from customer_posts.infrastructure.cli.app import app
from customer_posts.infrastructure.cli.ui import DOMAIN_ERROR_EXIT_CODE
from customer_posts.infrastructure.persistence.database import db_connection


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner pointed at a throwaway database and log file."""
    monkeypatch.setattr(
        settings.database, "url", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    )
    monkeypatch.setattr(settings.logging, "log_file", tmp_path / "cli.log")
    monkeypatch.setattr(settings.logging, "console_level", "ERROR")
    monkeypatch.setattr(db_connection, "_engine", None)
    monkeypatch.setattr(db_connection, "_session_factory", None)

    runner = CliRunner()
    assert runner.invoke(app, ["db", "init"]).exit_code == 0
    yield runner
    logger.remove()


class TestCustomerAndPostCommands:
    def test_full_lifecycle(self, runner):
        result = runner.invoke(app, ["customers", "add", "Ann", "--email", "ann@example.com"])
        assert result.exit_code == 0, result.stdout
        assert "Created customer 1" in result.stdout

        result = runner.invoke(app, ["posts", "add", "1", "Match report", "--type", "3"])
        assert result.exit_code == 0, result.stdout
        assert "Sports" in result.stdout

        result = runner.invoke(app, ["posts", "list", "--customer", "1"])
        assert result.exit_code == 0
        assert "Match report" in result.stdout

        result = runner.invoke(app, ["customers", "delete", "1"])
        assert result.exit_code == 0, result.stdout

        result = runner.invoke(app, ["customers", "list"])
        assert "No customers found" in result.stdout
        result = runner.invoke(app, ["posts", "list"])
        assert "No posts found" in result.stdout

    def test_duplicate_customer_name_fails(self, runner):
        assert runner.invoke(app, ["customers", "add", "Ann"]).exit_code == 0

        result = runner.invoke(app, ["customers", "add", "Ann"])

        assert result.exit_code == DOMAIN_ERROR_EXIT_CODE
        assert "already taken" in result.stdout

    def test_post_for_unknown_customer_fails(self, runner):
        result = runner.invoke(app, ["posts", "add", "42", "hello"])

        assert result.exit_code == DOMAIN_ERROR_EXIT_CODE
        assert "does not exist" in result.stdout

    def test_delete_missing_post_fails(self, runner):
        result = runner.invoke(app, ["posts", "delete", "5"])

        assert result.exit_code == DOMAIN_ERROR_EXIT_CODE
        assert "not found" in result.stdout
