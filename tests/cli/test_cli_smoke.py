"""Smoke tests for CLI command structure - high value, low maintenance."""

import pytest
from typer.testing import CliRunner

from customer_posts.infrastructure.cli.app import app


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


class TestCommandStructure:
    """Test that command groups exist and are accessible."""

    def test_main_help_shows_command_groups(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for group in ("db", "customers", "posts", "version"):
            assert group in result.stdout

    @pytest.mark.parametrize(
        ("group", "commands"),
        [
            ("db", ["init"]),
            ("customers", ["list", "add", "delete"]),
            ("posts", ["list", "add", "delete"]),
        ],
    )
    def test_group_help_lists_commands(self, runner, group, commands):
        result = runner.invoke(app, [group, "--help"])

        assert result.exit_code == 0
        for command in commands:
            assert command in result.stdout

    def test_delete_customer_offers_non_atomic_flag(self, runner):
        result = runner.invoke(app, ["customers", "delete", "--help"])

        assert result.exit_code == 0
        assert "--non-atomic" in result.stdout
