"""Tests for the slash-command handler."""

import asyncio
import sys

import pytest

from uxkit.slash import CommandExecutionError, IDECommandRequest, SlashCommandHandler, create_handler


@pytest.fixture
def handler():
    return create_handler()


def run(coro):
    return asyncio.run(coro)


class TestHandleCommand:
    """Raw command strings through parse, validate and execute."""

    def test_study_list_succeeds(self, handler):
        response = run(handler.handle_command("/study:list"))
        assert response.success is True
        assert response.command == "study:list"
        assert "Studies listed successfully" in response.response
        assert response.execution_time >= 0

    def test_defaults_applied(self, handler):
        response = run(handler.handle_command('/research:questions --study="x" --topic="checkout"'))
        assert response.response == (
            'Research questions generated for study "x" on topic "checkout" (5 questions, markdown format)'
        )

    def test_explicit_parameters_used(self, handler):
        response = run(handler.handle_command(
            '/research:sources --study=s --keywords="ux, mobile" --limit=20 --format=json'
        ))
        assert response.response == (
            'Research sources gathered for study "s" with keywords "ux, mobile" (20 sources, json format)'
        )
        assert response.parameters == {"study": "s", "keywords": "ux, mobile", "limit": 20, "format": "json"}

    @pytest.mark.parametrize("command, expected", [
        ('/research:summarize --study=s', 'Research summary created for study "s" (medium length, markdown format)'),
        ('/research:interview --study=s --participant=P001',
         'Interview data processed for study "s" participant "P001" (standard template, markdown format)'),
        ('/research:synthesize --study=s --insights=patterns',
         'Research synthesis completed for study "s" with insights "patterns" (report output, markdown format)'),
        ('/study:create --name=demo --description="Checkout flow"',
         'Study "demo" created successfully: Checkout flow (standard template, markdown format)'),
        ('/study:list --filter=active', 'Studies listed successfully (table format with filter "active")'),
        ('/study:show --name=demo', 'Study details for "demo" (detailed format)'),
        ('/study:show --name=demo --details', 'Study details for "demo" (detailed format with full details)'),
        ('/study:delete --name=demo --confirm', 'Study "demo" deleted successfully'),
        ('/study:delete --name=demo --confirm --force', 'Study "demo" deleted successfully (forced)'),
    ])
    def test_every_command_routine(self, handler, command, expected):
        response = run(handler.handle_command(command))
        assert response.success is True, response.error
        assert response.response == expected

    def test_missing_required_parameter(self, handler):
        response = run(handler.handle_command('/research:questions --study="x"'))
        assert response.success is False
        assert response.command == "research:questions"
        assert "Required parameter missing: topic" in response.error
        assert response.error.startswith("Validation failed:")
        assert response.metadata == {"category": "validation"}

    def test_wrong_parameter_type(self, handler):
        response = run(handler.handle_command('/research:questions --study=x --topic=y --count=lots'))
        assert response.success is False
        assert "Invalid parameter type for count: expected number, got string" in response.error

    @pytest.mark.parametrize("command", [
        '/study:delete --name="s"',
        '/study:delete --name=s --confirm=false',
    ])
    def test_unconfirmed_delete(self, handler, command):
        response = run(handler.handle_command(command))
        assert response.success is False
        assert response.command == "study:delete"
        assert response.error == "Execution error: Deletion requires confirmation. Use --confirm flag."
        assert response.metadata == {"category": "execution"}

    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
    def test_oversized_integer_is_treated_as_text(self, handler):
        digits = "1" * 5000
        response = run(handler.handle_command(f"/study:list --filter={digits}"))
        assert response.success is True, response.error
        assert response.parameters == {"filter": digits}

    def test_whitespace_only(self, handler):
        response = run(handler.handle_command("   "))
        assert response.success is False
        assert response.command == "unknown"
        assert response.error == "Parsing error: Empty command"
        assert response.parameters == {"original": "   "}
        assert response.metadata == {"category": "parsing"}

    def test_slash_only(self, handler):
        response = run(handler.handle_command("/"))
        assert response.error == "Parsing error: Invalid command format"

    def test_missing_slash(self, handler):
        response = run(handler.handle_command("study:list"))
        assert response.error == "Parsing error: Command must start with /"

    def test_unknown_command(self, handler):
        response = run(handler.handle_command("/study:archive --name=x"))
        assert response.success is False
        assert "Unknown command" in response.error


class TestPluggableRoutines:
    """Custom routines replace the simulated ones."""

    def test_custom_routine_is_called(self):
        calls = []

        async def list_studies(parameters):
            calls.append(parameters)
            return "3 studies"

        handler = create_handler({"study:list": list_studies})
        response = run(handler.handle_command("/study:list --format=table"))
        assert response.response == "3 studies"
        assert calls == [{"format": "table"}]

    def test_missing_routine_reports_unknown_command(self):
        handler = create_handler({})
        response = run(handler.handle_command("/study:list"))
        assert response.success is False
        assert response.command == "unknown"
        assert response.error == "Unknown command: study:list"
        assert response.metadata == {"category": "unknown_command"}

    def test_routine_error_becomes_execution_error(self):
        async def refuse(parameters):
            raise CommandExecutionError("Study is locked")

        handler = create_handler({"study:show": refuse})
        response = run(handler.handle_command("/study:show --name=x"))
        assert response.error == "Execution error: Study is locked"
        assert response.parameters == {"name": "x"}

    def test_unexpected_exception_does_not_escape(self):
        async def broken(parameters):
            raise RuntimeError("disk full")

        handler = create_handler({"study:list": broken})
        response = run(handler.handle_command("/study:list"))
        assert response.success is False
        assert response.error == "Execution error: disk full"


class TestIDECommands:

    def test_success_wraps_context(self, handler):
        context = {"workspace": "/ws", "file": "plan.md"}
        response = run(handler.handle_ide_command(IDECommandRequest("/study:list", context)))
        assert response.success is True
        assert response.command == "ide-command"
        assert response.parameters == {"originalCommand": "/study:list"}
        assert response.response == "Studies listed successfully"
        assert response.metadata == {"context": context}

    def test_failure_wraps_context(self, handler):
        response = run(handler.handle_ide_command(IDECommandRequest("", {"line": 1})))
        assert response.success is False
        assert response.error == "Command is required"
        assert response.metadata == {"context": {"line": 1}}


class TestHelpListRegister:

    def test_help_for_command(self, handler):
        response = run(handler.get_help("research:questions"))
        assert response.success is True
        assert response.command == "help"
        assert response.parameters == {"command": "research:questions"}
        assert "Generate research questions for a study" in response.response
        for example in handler.ide_integration.get_command_registration("research:questions").examples:
            assert example in response.response

    def test_help_for_all(self, handler):
        response = run(handler.get_help())
        assert response.parameters == {"command": "all"}
        assert "# Available Commands" in response.response

    def test_help_for_unknown_command(self, handler):
        response = run(handler.get_help("nope"))
        assert response.success is False
        assert response.command == "help"
        assert response.error == "Command 'nope' not found"

    def test_list_commands(self, handler):
        response = run(handler.list_commands())
        assert response.command == "list"
        assert response.response.startswith("Available commands:\n- research:questions")
        assert response.response.count("\n- ") == 9

    def test_register_commands(self, handler):
        response = run(handler.register_commands(["study:list", "study:show"]))
        assert response.success is True
        assert response.response == "Successfully registered 2 commands"
        assert response.metadata == {"registeredCommands": ["study:list", "study:show"]}
        assert handler.ide_integration.is_command_registered("study:show")

    def test_register_unknown_commands(self, handler):
        response = run(handler.register_commands(["study:list", "bogus"]))
        assert response.success is False
        assert response.error == "Registration failed: Unknown command: bogus"
        assert response.metadata == {"errors": ["Unknown command: bogus"]}

    def test_register_twice(self, handler):
        run(handler.register_commands(["study:list"]))
        response = run(handler.register_commands(["study:list"]))
        assert response.success is True
        assert handler.ide_integration.get_registered_commands() == ["study:list"]


def test_handlers_do_not_share_registrations():
    first, second = create_handler(), create_handler()
    run(first.register_commands(["study:list"]))
    assert second.ide_integration.get_registered_commands() == []


def test_default_construction():
    handler = SlashCommandHandler()
    assert handler.ide_integration.formatter is handler.formatter
    assert set(handler.routines) == set(handler.parser.get_available_commands())
