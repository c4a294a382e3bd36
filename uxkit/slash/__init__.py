"""
Slash command system for UX-Kit.
"""

from typing import Dict, Optional

from .command_parser import CommandParser
from .errors import (
    CommandExecutionError,
    ErrorCategory,
    ParseError,
    SlashCommandError,
    UnknownCommandError,
)
from .handler import SlashCommandHandler
from .ide_integration import HelpRequest, HelpResponse, IDEIntegration, RegistrationResult
from .response_formatter import CommandResponse, IDECommandRequest, IDECommandResponse, ResponseFormatter
from .routines import CommandRoutine, simulated_routines
from .types import CommandRegistration, CommandSchema, ParameterType, ParsedCommand, ValidationResult


def create_handler(routines: Optional[Dict[str, CommandRoutine]] = None) -> SlashCommandHandler:
    """Build a handler with its own parser, formatter and IDE integration."""
    formatter = ResponseFormatter()
    return SlashCommandHandler(
        parser=CommandParser(),
        formatter=formatter,
        ide_integration=IDEIntegration(formatter),
        routines=routines,
    )


__all__ = [
    "CommandParser",
    "CommandExecutionError",
    "CommandRegistration",
    "CommandResponse",
    "CommandRoutine",
    "CommandSchema",
    "ErrorCategory",
    "HelpRequest",
    "HelpResponse",
    "IDECommandRequest",
    "IDECommandResponse",
    "IDEIntegration",
    "ParameterType",
    "ParseError",
    "ParsedCommand",
    "RegistrationResult",
    "ResponseFormatter",
    "SlashCommandError",
    "SlashCommandHandler",
    "UnknownCommandError",
    "ValidationResult",
    "create_handler",
    "simulated_routines",
]
