"""
Errors raised inside the slash-command subsystem.

None of these escape SlashCommandHandler; they are converted into failed
CommandResponse records there.
"""

from enum import Enum


class ErrorCategory(Enum):
    """Failure classes attached to failed responses as metadata."""
    PARSING = "parsing"
    UNKNOWN_COMMAND = "unknown_command"
    VALIDATION = "validation"
    EXECUTION = "execution"


class SlashCommandError(Exception):
    """Base class for slash-command failures."""
    category = ErrorCategory.EXECUTION


class ParseError(SlashCommandError):
    """Command string does not follow the slash-command grammar."""
    category = ErrorCategory.PARSING

    EMPTY_COMMAND = "Empty command"
    MISSING_SLASH_PREFIX = "Command must start with /"
    INVALID_COMMAND_FORMAT = "Invalid command format"
    MALFORMED_COMMAND = "Malformed command"

    KNOWN_MESSAGES = (
        EMPTY_COMMAND,
        MISSING_SLASH_PREFIX,
        INVALID_COMMAND_FORMAT,
        MALFORMED_COMMAND,
    )


class UnknownCommandError(SlashCommandError):
    """Command name is not in the catalog."""
    category = ErrorCategory.UNKNOWN_COMMAND

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Unknown command: {command}")


class CommandExecutionError(SlashCommandError):
    """A command routine refused to run or failed while running."""
    category = ErrorCategory.EXECUTION
