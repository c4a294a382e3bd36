"""Tests for the uxkit command-line interface."""

import asyncio
import json

import pytest
from typer.testing import CliRunner

from uxkit import __version__
from uxkit.cli import app, dispatch_shell_input
from uxkit.slash import create_handler

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every command from an empty project with an empty home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("UXKIT_OUTPUT_FORMAT", "UXKIT_LOG_LEVEL", "UXKIT_PROJECT_ROOT", "UXKIT_AI_AGENT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_success():
    result = runner.invoke(app, ["run", "/study:list"])
    assert result.exit_code == 0
    assert "Studies listed successfully" in result.output


def test_run_failure_exit_code():
    result = runner.invoke(app, ["run", '/study:delete --name="s"'])
    assert result.exit_code == 1
    assert "Deletion requires confirmation" in result.output


def test_run_json_output():
    result = runner.invoke(app, ["run", "/study:list", "--format", "json"])
    assert result.exit_code == 0
    assert '"command": "study:list"' in result.output
    assert '"success": true' in result.output


def test_run_markdown_output():
    result = runner.invoke(app, ["run", "/study:show --name=demo", "-f", "markdown"])
    assert result.exit_code == 0
    assert "study:show" in result.output
    assert "Execution Time" in result.output


def test_run_rejects_unknown_format():
    result = runner.invoke(app, ["run", "/study:list", "--format", "xml"])
    assert result.exit_code == 1
    assert "Output format must be one of" in result.output


def test_ide_command():
    result = runner.invoke(app, ["ide", "/study:create", "--workspace", "/ws", "--line", "3", "-f", "json"])
    assert result.exit_code == 0
    assert '"workspace": "/ws"' in result.output
    assert "Study created successfully" in result.output


def test_commands_lists_catalog():
    result = runner.invoke(app, ["commands"])
    assert result.exit_code == 0
    assert "research:questions" in result.output
    assert "study:delete" in result.output


def test_help_for_command():
    result = runner.invoke(app, ["help", "study:delete"])
    assert result.exit_code == 0
    assert "Delete a research study" in result.output


def test_help_for_unknown_command():
    result = runner.invoke(app, ["help", "study:archive"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_register():
    result = runner.invoke(app, ["register", "study:list", "study:show"])
    assert result.exit_code == 0
    assert "Successfully registered 2 commands" in result.output


def test_register_unknown():
    result = runner.invoke(app, ["register", "bogus"])
    assert result.exit_code == 1
    assert "Unknown command: bogus" in result.output


def test_init_creates_uxkit(isolated_env):
    result = runner.invoke(app, ["init", "--ai-agent", "codex"])
    assert result.exit_code == 0
    assert (isolated_env / ".uxkit" / "config.yaml").exists()

    again = runner.invoke(app, ["init"])
    assert again.exit_code == 0
    assert "already initialized" in again.output


def test_init_rejects_unknown_agent():
    result = runner.invoke(app, ["init", "-a", "copilot"])
    assert result.exit_code == 1
    assert "AI agent must be one of" in result.output


def test_output_format_from_project_config(isolated_env):
    (isolated_env / ".uxkit").mkdir()
    (isolated_env / ".uxkit" / "config.yaml").write_text("output:\n  format: json\n")
    result = runner.invoke(app, ["run", "/study:list"])
    assert result.exit_code == 0
    assert '"executionTime"' in result.output


def test_broken_config_reported(isolated_env):
    (isolated_env / ".uxkit").mkdir()
    (isolated_env / ".uxkit" / "config.yaml").write_text("output: [unclosed\n")
    result = runner.invoke(app, ["commands"])
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_config_command():
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "Output format: display" in result.output


def test_shell_session():
    result = runner.invoke(app, ["shell"], input="/study:list\n/commands\nexit\n")
    assert result.exit_code == 0
    assert "Studies listed successfully" in result.output
    assert "Goodbye" in result.output


def test_setup_writes_user_config(isolated_env):
    result = runner.invoke(app, ["setup"])
    assert result.exit_code == 0
    assert "Created default config file" in result.output

    config_path = isolated_env / "home" / ".uxkitrc"
    assert config_path.exists()
    assert "provider: cursor" in config_path.read_text()


def test_shell_runs_each_line_and_skips_blank_input():
    result = runner.invoke(app, ["shell"], input="\n/study:delete --name=s\n/study:show --name=s\nquit\n")
    assert result.exit_code == 0
    assert "Deletion requires confirmation" in result.output
    assert 'Study details for "s"' in result.output
    assert "Goodbye" in result.output


class TestShellDispatch:
    """Routing of interactive input lines."""

    def test_help_line(self):
        response = asyncio.run(dispatch_shell_input(create_handler(), "/help study:list"))
        assert response.command == "help"
        assert response.parameters == {"command": "study:list"}

    def test_commands_line(self):
        response = asyncio.run(dispatch_shell_input(create_handler(), "/commands"))
        assert response.command == "list"

    def test_slash_command_line(self):
        response = asyncio.run(dispatch_shell_input(create_handler(), "/study:show --name=x"))
        assert response.success is True
        assert json.loads(create_handler().formatter.format_as_json(response))["command"] == "study:show"
