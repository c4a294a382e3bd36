"""
Value types shared by the slash-command components.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

ParameterValue = Union[str, int, float, bool]


class ParameterType(Enum):
    """Declared type of a slash-command parameter."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"

    @classmethod
    def of(cls, value: ParameterValue) -> "ParameterType":
        """Runtime type of a parsed value."""
        # bool is a subclass of int, so it has to be checked first
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        return cls.STRING

    def matches(self, value: ParameterValue) -> bool:
        return ParameterType.of(value) is self


@dataclass(frozen=True)
class ParsedCommand:
    """Result of parsing a slash-command string."""
    command: str
    parameters: Dict[str, ParameterValue] = field(default_factory=dict)

    def get(self, key: str, default: Optional[ParameterValue] = None) -> Optional[ParameterValue]:
        return self.parameters.get(key, default)


@dataclass(frozen=True)
class CommandSchema:
    """Validation schema for one command."""
    name: str
    required: Tuple[str, ...]
    optional: Tuple[str, ...]
    types: Dict[str, ParameterType]


@dataclass
class ValidationResult:
    """Outcome of validating a parsed command against its schema."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommandRegistration:
    """Catalog entry an IDE host uses for discovery and help."""
    command: str
    description: str
    parameters: Tuple[str, ...]
    examples: Tuple[str, ...]
