"""
Slash command handler for UX-Kit.

Drives a command string through parsing, validation, execution and
formatting. Every public method returns a CommandResponse; failures are
reported in the record and never raised to the caller.
"""

import logging
import time
from typing import Dict, List, Optional

from .command_parser import CommandParser
from .errors import ErrorCategory, ParseError, SlashCommandError, UnknownCommandError
from .ide_integration import HelpRequest, IDEIntegration
from .response_formatter import CommandResponse, IDECommandRequest, ResponseFormatter
from .routines import CommandRoutine, simulated_routines
from .types import ParsedCommand


class SlashCommandHandler:
    """Top-level dispatcher for slash commands and IDE requests."""

    def __init__(self, parser: Optional[CommandParser] = None,
                 formatter: Optional[ResponseFormatter] = None,
                 ide_integration: Optional[IDEIntegration] = None,
                 routines: Optional[Dict[str, CommandRoutine]] = None):
        self.parser = parser or CommandParser()
        self.formatter = formatter or ResponseFormatter()
        self.ide_integration = ide_integration or IDEIntegration(self.formatter)
        self.routines = routines if routines is not None else simulated_routines()
        self.logger = logging.getLogger("uxkit.slash.handler")

    async def handle_command(self, command_string: str) -> CommandResponse:
        """Parse, validate and execute a raw slash-command string."""
        start_time = time.perf_counter()
        parsed: Optional[ParsedCommand] = None

        try:
            parsed = self.parser.parse(command_string)

            validation = self.parser.validate(parsed)
            if not validation.is_valid:
                self.logger.info(f"Validation failed for /{parsed.command}: {validation.errors}")
                response = self.formatter.format_validation_error(
                    parsed.command, parsed.parameters, validation.errors, self._elapsed_ms(start_time)
                )
                return self._categorize(response, ErrorCategory.VALIDATION)

            self.logger.info(f"Executing command: {parsed.command}")
            result = await self._execute(parsed)

            execution_time = self._elapsed_ms(start_time)
            self.logger.info(f"Command '{parsed.command}' completed in {execution_time}ms")
            return self.formatter.format_success(parsed.command, parsed.parameters, result, execution_time)

        except ParseError as e:
            message = str(e)
            execution_time = self._elapsed_ms(start_time)
            if any(known in message for known in ParseError.KNOWN_MESSAGES):
                response = self.formatter.format_parsing_error(command_string, message, execution_time)
            else:
                response = self.formatter.format_execution_error("unknown", {}, message, execution_time)
            return self._categorize(response, ErrorCategory.PARSING)

        except UnknownCommandError as e:
            response = self.formatter.format_error("unknown", {}, str(e), self._elapsed_ms(start_time))
            return self._categorize(response, ErrorCategory.UNKNOWN_COMMAND)

        except SlashCommandError as e:
            self.logger.warning(f"Command failed: {e}")
            response = self.formatter.format_execution_error(
                parsed.command if parsed else "unknown",
                parsed.parameters if parsed else {},
                str(e),
                self._elapsed_ms(start_time),
            )
            return self._categorize(response, e.category)

        except Exception as e:
            self.logger.exception(f"Unexpected error while handling {command_string!r}")
            response = self.formatter.format_execution_error(
                parsed.command if parsed else "unknown",
                parsed.parameters if parsed else {},
                str(e) or e.__class__.__name__,
                self._elapsed_ms(start_time),
            )
            return self._categorize(response, ErrorCategory.EXECUTION)

    async def handle_ide_command(self, request: IDECommandRequest) -> CommandResponse:
        """Run an IDE request and wrap the outcome as a CommandResponse."""
        start_time = time.perf_counter()
        parameters = {"originalCommand": request.command}

        try:
            ide_response = await self.ide_integration.execute_command(request)
            execution_time = self._elapsed_ms(start_time)
            metadata = {"context": ide_response.context}

            if ide_response.success:
                return self.formatter.format_success(
                    "ide-command", parameters,
                    ide_response.response or "Command executed successfully",
                    execution_time, metadata,
                )
            return self.formatter.format_error(
                "ide-command", parameters,
                ide_response.error or "Command execution failed",
                execution_time, metadata,
            )
        except Exception as e:
            self.logger.exception("IDE command failed")
            return self.formatter.format_execution_error(
                "ide-command", parameters, str(e), self._elapsed_ms(start_time)
            )

    async def get_help(self, command: Optional[str] = None) -> CommandResponse:
        start_time = time.perf_counter()

        try:
            help_response = await self.ide_integration.get_help(HelpRequest("help", command))
            execution_time = self._elapsed_ms(start_time)

            if help_response.success:
                return self.formatter.format_help_response(command or "all", help_response.help, execution_time)
            return self.formatter.format_error("help", {"command": command}, help_response.help, execution_time)
        except Exception as e:
            self.logger.exception("Help lookup failed")
            return self.formatter.format_execution_error(
                "help", {"command": command}, str(e), self._elapsed_ms(start_time)
            )

    async def list_commands(self) -> CommandResponse:
        start_time = time.perf_counter()

        try:
            commands = self.parser.get_available_commands()
            return self.formatter.format_command_list_response(commands, self._elapsed_ms(start_time))
        except Exception as e:
            self.logger.exception("Listing commands failed")
            return self.formatter.format_execution_error("list", {}, str(e), self._elapsed_ms(start_time))

    async def register_commands(self, commands: List[str]) -> CommandResponse:
        start_time = time.perf_counter()
        parameters = {"commands": list(commands)}

        try:
            result = await self.ide_integration.register_commands(commands)
            execution_time = self._elapsed_ms(start_time)

            if result.success:
                return self.formatter.format_success(
                    "register", parameters,
                    f"Successfully registered {len(result.registered_commands)} commands",
                    execution_time,
                    {"registeredCommands": result.registered_commands},
                )
            return self.formatter.format_error(
                "register", parameters,
                f"Registration failed: {', '.join(result.errors)}",
                execution_time,
                {"errors": result.errors},
            )
        except Exception as e:
            self.logger.exception("Command registration failed")
            return self.formatter.format_execution_error(
                "register", parameters, str(e), self._elapsed_ms(start_time)
            )

    async def _execute(self, parsed: ParsedCommand) -> str:
        routine = self.routines.get(parsed.command)
        if routine is None:
            raise UnknownCommandError(parsed.command)
        return await routine(dict(parsed.parameters))

    def _categorize(self, response: CommandResponse, category: ErrorCategory) -> CommandResponse:
        return self.formatter.add_metadata(response, {"category": category.value})

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)
