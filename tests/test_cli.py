"""CLI tests.

Learn: create-user runs the same validation as the signup endpoint, so
bad input is reported field by field before any database work happens.
"""

from click.testing import CliRunner

from taskboard.cli.main import cli


def test_create_user_reports_every_invalid_field():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["create-user", "not-an-email", "--name", "J", "--password", "abc"]
    )
    assert result.exit_code == 1
    assert "fullName" in result.output
    assert "email" in result.output
    assert "password" in result.output


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "init-db" in result.output
    assert "create-user" in result.output
