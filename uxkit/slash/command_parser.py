"""
Command parser for UX-Kit slash commands.
"""

import logging
import math
import re
from typing import Dict, List, Optional

from .. import catalog
from .errors import ParseError
from .types import CommandSchema, ParameterType, ParameterValue, ParsedCommand, ValidationResult

QUOTE_CHARS = ('"', "'")


class CommandParser:
    """Parser and validator for `/command --key=value` strings."""

    def __init__(self):
        self.integer_pattern = re.compile(r'[+-]?\d+')
        self.float_pattern = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
        self.logger = logging.getLogger("uxkit.slash.parser")

        self.command_schemas: Dict[str, CommandSchema] = {
            spec.name: spec.to_schema() for spec in catalog.COMMANDS
        }

    def parse(self, command_string: str) -> ParsedCommand:
        """Parse a slash-command string into a command name and typed parameters."""
        if not command_string or not command_string.strip():
            raise ParseError(ParseError.EMPTY_COMMAND)

        trimmed = command_string.strip()

        if not trimmed.startswith('/'):
            raise ParseError(ParseError.MISSING_SLASH_PREFIX)

        parts = self._split_parts(trimmed[1:])
        if not parts:
            raise ParseError(ParseError.INVALID_COMMAND_FORMAT)

        command = parts[0]
        parameters = self._parse_parameters(parts[1:])

        self.logger.debug(f"Parsed /{command} with parameters {sorted(parameters)}")
        return ParsedCommand(command=command, parameters=parameters)

    def validate(self, parsed_command: ParsedCommand) -> ValidationResult:
        """Validate a parsed command against its schema, collecting every error."""
        schema = self.command_schemas.get(parsed_command.command)
        if schema is None:
            return ValidationResult(False, ["Unknown command"])

        errors = []

        for name in schema.required:
            if name not in parsed_command.parameters:
                errors.append(f"Required parameter missing: {name}")

        for key, value in parsed_command.parameters.items():
            expected = schema.types.get(key)
            if expected is not None and not expected.matches(value):
                actual = ParameterType.of(value)
                errors.append(
                    f"Invalid parameter type for {key}: expected {expected.value}, got {actual.value}"
                )

        return ValidationResult(not errors, errors)

    def _split_parts(self, text: str) -> List[str]:
        """Split on spaces, keeping quoted spans together and dropping the quote marks."""
        parts = []
        current = []
        quote_char = None

        for char in text:
            if quote_char is None and char in QUOTE_CHARS:
                quote_char = char
            elif quote_char is not None and char == quote_char:
                quote_char = None
            elif quote_char is None and char == ' ':
                self._flush(current, parts)
            else:
                current.append(char)

        self._flush(current, parts)
        return parts

    @staticmethod
    def _flush(current: List[str], parts: List[str]) -> None:
        token = "".join(current).strip()
        if token:
            parts.append(token)
        current.clear()

    def _parse_parameters(self, parts: List[str]) -> Dict[str, ParameterValue]:
        """Turn `--key=value`, `--key value` and `--flag` tokens into a parameter map."""
        parameters: Dict[str, ParameterValue] = {}

        i = 0
        while i < len(parts):
            part = parts[i]
            i += 1

            # stray positional tokens are ignored
            if not part.startswith('--'):
                continue

            key, has_value, raw_value = part[2:].partition("=")
            if not key:
                continue

            if has_value:
                parameters[key] = self._parse_value(raw_value)
                continue

            if i < len(parts) and not parts[i].startswith('--'):
                parameters[key] = self._parse_value(parts[i])
                i += 1
            else:
                parameters[key] = True

        return parameters

    def _parse_value(self, value: str) -> ParameterValue:
        """Coerce a raw value: number first, then true/false, else string."""
        if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
            return value[1:-1]

        if self.integer_pattern.fullmatch(value):
            try:
                return int(value)
            except ValueError:
                # past the interpreter's int digit limit
                return value
        if self.float_pattern.fullmatch(value):
            number = float(value)
            if math.isfinite(number):
                return number

        if value == "true":
            return True
        if value == "false":
            return False

        return value

    def get_available_commands(self) -> List[str]:
        """Names of every command with a schema."""
        return list(self.command_schemas.keys())

    def get_command_schema(self, command: str) -> Optional[CommandSchema]:
        return self.command_schemas.get(command)
