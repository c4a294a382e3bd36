"""
IDE integration for UX-Kit slash commands.

This is the facade an IDE host (Cursor, VS Code extensions and the like) talks
to: it discovers commands, registers the ones the host wants to expose, runs
them and returns help text.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .. import catalog
from .response_formatter import IDECommandRequest, IDECommandResponse, ResponseFormatter
from .types import CommandRegistration


@dataclass(frozen=True)
class HelpRequest:
    """Help request sent by an IDE host."""
    type: str
    command: Optional[str] = None


@dataclass
class HelpResponse:
    """Help text plus the commands and examples it covers."""
    success: bool
    help: str
    commands: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)


@dataclass
class RegistrationResult:
    """Outcome of registering commands with the IDE host."""
    success: bool
    registered_commands: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


# Canned outcomes keyed by the command name they are matched against.
SIMULATED_RESPONSES: Dict[str, str] = {
    "research:questions": "Research questions generated successfully",
    "research:sources": "Research sources gathered successfully",
    "research:summarize": "Research summary created successfully",
    "research:interview": "Interview data processed successfully",
    "research:synthesize": "Research synthesis completed successfully",
    "study:create": "Study created successfully",
    "study:list": "Studies listed successfully",
    "study:show": "Study details retrieved successfully",
    "study:delete": "Study deleted successfully",
}


class IDEIntegration:
    """Registry, executor and help source for IDE hosts."""

    def __init__(self, formatter: Optional[ResponseFormatter] = None):
        self.formatter = formatter or ResponseFormatter()
        self.logger = logging.getLogger("uxkit.slash.ide")

        self.registered_commands: Set[str] = set()
        self.command_registry: Dict[str, CommandRegistration] = {
            spec.name: spec.to_registration() for spec in catalog.COMMANDS
        }

    async def register_commands(self, commands: List[str]) -> RegistrationResult:
        """Register known commands with the host; unknown names are reported, not raised."""
        registered = []
        errors = []

        for command in commands:
            if command in self.command_registry:
                self.registered_commands.add(command)
                registered.append(command)
            else:
                errors.append(f"Unknown command: {command}")

        if errors:
            self.logger.warning(f"Command registration rejected: {', '.join(errors)}")
        else:
            self.logger.info(f"Registered {len(registered)} commands with IDE host")

        return RegistrationResult(not errors, registered, errors)

    async def execute_command(self, request: IDECommandRequest) -> IDECommandResponse:
        """Run an IDE request against the simulated command handlers."""
        start_time = time.perf_counter()

        try:
            if not request.command:
                raise ValueError("Command is required")

            result = await self._simulate_command_execution(request.command)
            return self.formatter.format_ide_response(
                request, True, response=result, execution_time=self._elapsed_ms(start_time)
            )
        except ValueError as e:
            return self.formatter.format_ide_response(
                request, False, error=str(e), execution_time=self._elapsed_ms(start_time)
            )

    async def get_help(self, request: HelpRequest) -> HelpResponse:
        if request.type != "help":
            return HelpResponse(False, "Invalid help request")
        if request.command:
            return self._get_command_help(request.command)
        return self._get_all_commands_help()

    def is_command_registered(self, command: str) -> bool:
        return command in self.registered_commands

    def get_registered_commands(self) -> List[str]:
        return sorted(self.registered_commands)

    def get_command_registration(self, command: str) -> Optional[CommandRegistration]:
        return self.command_registry.get(command)

    async def _simulate_command_execution(self, command: str) -> str:
        # matched by containment so hosts may send the full "/cmd --flag" string
        for name, outcome in SIMULATED_RESPONSES.items():
            if name in command:
                await asyncio.sleep(0.001)
                return outcome
        raise ValueError(f"Unknown command: {command}")

    def _get_command_help(self, command: str) -> HelpResponse:
        registration = self.command_registry.get(command)
        if registration is None:
            return HelpResponse(False, f"Command '{command}' not found")

        parameters = "\n".join(f"- {parameter}" for parameter in registration.parameters)
        examples = "\n".join(f"- {example}" for example in registration.examples)
        help_text = (
            f"# {command}\n\n{registration.description}\n\n"
            f"**Parameters:**\n{parameters}\n\n"
            f"**Examples:**\n{examples}"
        )
        return HelpResponse(True, help_text, [command], list(registration.examples))

    def _get_all_commands_help(self) -> HelpResponse:
        commands = list(self.command_registry.keys())
        listing = "\n".join(f"- {command}" for command in commands)
        help_text = (
            f"# Available Commands\n\n{listing}\n\n"
            "Use `/help <command>` for detailed information about a specific command."
        )
        return HelpResponse(True, help_text, commands)

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.perf_counter() - start_time) * 1000)
