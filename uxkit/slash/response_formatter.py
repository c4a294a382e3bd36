"""
Response formatter for UX-Kit slash commands.

Every command outcome, successful or not, is returned to the caller as a
CommandResponse. The formatter stamps the current time on each record but
never measures elapsed time: callers pass in the execution time they measured.
"""

import json
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CommandResponse:
    """Uniform result record for a slash-command invocation."""
    success: bool
    command: str
    parameters: Dict[str, Any]
    response: Optional[str] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    execution_time: int = 0
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation shared with IDE hosts."""
        data = {
            "success": self.success,
            "command": self.command,
            "parameters": dict(self.parameters),
            "timestamp": self.timestamp.isoformat(),
            "executionTime": self.execution_time,
        }
        if self.response is not None:
            data["response"] = self.response
        if self.error is not None:
            data["error"] = self.error
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data


@dataclass(frozen=True)
class IDECommandRequest:
    """Command request coming from an IDE host."""
    command: str
    context: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class IDECommandResponse:
    """Result of executing an IDE request."""
    success: bool
    response: Optional[str] = None
    error: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=datetime.now)
    execution_time: int = 0


class ResponseFormatter:
    """Builds and renders CommandResponse records."""

    def format_success(self, command: str, parameters: Dict[str, Any], response: str,
                       execution_time: int, metadata: Optional[Dict[str, Any]] = None) -> CommandResponse:
        return CommandResponse(
            success=True,
            command=command,
            parameters=parameters,
            response=response,
            execution_time=execution_time,
            metadata=metadata,
        )

    def format_error(self, command: str, parameters: Dict[str, Any], error: str,
                     execution_time: int, metadata: Optional[Dict[str, Any]] = None) -> CommandResponse:
        return CommandResponse(
            success=False,
            command=command,
            parameters=parameters,
            error=error,
            execution_time=execution_time,
            metadata=metadata,
        )

    def format_ide_response(self, request: IDECommandRequest, success: bool,
                            response: Optional[str] = None, error: Optional[str] = None,
                            execution_time: int = 0) -> IDECommandResponse:
        """IDE-flavoured result that carries the request context through unchanged."""
        return IDECommandResponse(
            success=success,
            response=response,
            error=error,
            context=request.context,
            execution_time=execution_time,
        )

    def format_help_response(self, command: str, help_text: str, execution_time: int) -> CommandResponse:
        return CommandResponse(
            success=True,
            command="help",
            parameters={"command": command},
            response=help_text,
            execution_time=execution_time,
        )

    def format_command_list_response(self, commands: List[str], execution_time: int) -> CommandResponse:
        listing = "\n".join(f"- {command}" for command in commands)
        return CommandResponse(
            success=True,
            command="list",
            parameters={},
            response=f"Available commands:\n{listing}",
            execution_time=execution_time,
        )

    def format_validation_error(self, command: str, parameters: Dict[str, Any],
                                errors: List[str], execution_time: int) -> CommandResponse:
        lines = "\n".join(f"- {error}" for error in errors)
        return self.format_error(command, parameters, f"Validation failed:\n{lines}", execution_time)

    def format_parsing_error(self, command_string: str, error: str, execution_time: int) -> CommandResponse:
        return self.format_error(
            "unknown", {"original": command_string}, f"Parsing error: {error}", execution_time
        )

    def format_execution_error(self, command: str, parameters: Dict[str, Any],
                               error: str, execution_time: int) -> CommandResponse:
        return self.format_error(command, parameters, f"Execution error: {error}", execution_time)

    # Rendering

    def format_for_display(self, response: CommandResponse) -> str:
        if response.success:
            return f"✅ {response.command}\n{response.response or 'Command executed successfully'}"
        return f"❌ {response.command}\n{response.error or 'Command failed'}"

    def format_as_json(self, response: CommandResponse) -> str:
        return json.dumps(response.to_dict(), indent=2, ensure_ascii=False, default=str)

    def format_as_markdown(self, response: CommandResponse) -> str:
        if response.success:
            icon, body = "✅", response.response or "Command executed successfully"
        else:
            icon, body = "❌", response.error or "Command failed"

        return (
            f"## {icon} {response.command}\n\n{body}\n\n"
            f"**Parameters:**\n{self._format_parameters_as_markdown(response.parameters)}\n\n"
            f"**Execution Time:** {response.execution_time}ms"
        )

    def _format_parameters_as_markdown(self, parameters: Dict[str, Any]) -> str:
        if not parameters:
            return "None"
        return "\n".join(f"- **{key}:** {self._display_value(value)}" for key, value in parameters.items())

    @staticmethod
    def _display_value(value: Any) -> str:
        # booleans render the way they were typed on the command line
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def add_metadata(self, response: CommandResponse, metadata: Dict[str, Any]) -> CommandResponse:
        """Copy of the response with metadata shallow-merged; new keys win."""
        merged = dict(response.metadata or {})
        merged.update(metadata)
        return replace(response, metadata=merged)

    def get_response_summary(self, response: CommandResponse) -> str:
        status = "SUCCESS" if response.success else "FAILED"
        return f"{status} - {response.command} ({response.execution_time}ms)"
