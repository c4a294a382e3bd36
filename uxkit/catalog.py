"""
Command catalog for the UX-Kit slash commands.

This table is the one place a command is declared. CommandParser derives its
validation schemas from it and IDEIntegration derives its registration and
help entries from it, so the two can never disagree about what exists.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .slash.types import CommandRegistration, CommandSchema, ParameterType


S = ParameterType.STRING
N = ParameterType.NUMBER
B = ParameterType.BOOLEAN


@dataclass(frozen=True)
class CommandSpec:
    """Declaration of one slash command."""
    name: str
    description: str
    required: Tuple[str, ...]
    optional: Tuple[str, ...]
    types: Dict[str, ParameterType] = field(default_factory=dict)
    examples: Tuple[str, ...] = ()

    def __post_init__(self):
        missing = [name for name in self.required if name not in self.types]
        if missing:
            raise ValueError(
                f"Command '{self.name}' declares required parameters without a type: {', '.join(missing)}"
            )

    def to_schema(self) -> CommandSchema:
        return CommandSchema(
            name=self.name,
            required=self.required,
            optional=self.optional,
            types=dict(self.types),
        )

    def to_registration(self) -> CommandRegistration:
        parameters = [f"{name} (required)" for name in self.required]
        parameters.extend(f"{name} (optional)" for name in self.optional)
        return CommandRegistration(
            command=self.name,
            description=self.description,
            parameters=tuple(parameters),
            examples=self.examples,
        )


COMMANDS: Tuple[CommandSpec, ...] = (
    # Research commands
    CommandSpec(
        name="research:questions",
        description="Generate research questions for a study",
        required=("study", "topic"),
        optional=("count", "format"),
        types={"study": S, "topic": S, "count": N, "format": S},
        examples=(
            '/research:questions --study="user-interviews" --topic="e-commerce checkout"',
            '/research:questions --study="usability-test" --topic="mobile app" --count=10 --format="markdown"',
        ),
    ),
    CommandSpec(
        name="research:sources",
        description="Gather research sources and references",
        required=("study", "keywords"),
        optional=("format", "limit"),
        types={"study": S, "keywords": S, "format": S, "limit": N},
        examples=(
            '/research:sources --study="user-interviews" --keywords="UX, usability, e-commerce"',
            '/research:sources --study="usability-test" --keywords="mobile, app, design" --limit=20',
        ),
    ),
    CommandSpec(
        name="research:summarize",
        description="Create a summary of research findings",
        required=("study",),
        optional=("format", "length"),
        types={"study": S, "format": S, "length": S},
        examples=(
            '/research:summarize --study="user-interviews"',
            '/research:summarize --study="usability-test" --format="markdown" --length="brief"',
        ),
    ),
    CommandSpec(
        name="research:interview",
        description="Process and format interview data",
        required=("study", "participant"),
        optional=("format", "template"),
        types={"study": S, "participant": S, "format": S, "template": S},
        examples=(
            '/research:interview --study="user-interviews" --participant="P001"',
            '/research:interview --study="usability-test" --participant="P002" --template="standard"',
        ),
    ),
    CommandSpec(
        name="research:synthesize",
        description="Synthesize research insights and findings",
        required=("study", "insights"),
        optional=("format", "output"),
        types={"study": S, "insights": S, "format": S, "output": S},
        examples=(
            '/research:synthesize --study="user-interviews" --insights="key-findings"',
            '/research:synthesize --study="usability-test" --insights="patterns" --format="report"',
        ),
    ),
    # Study commands
    CommandSpec(
        name="study:create",
        description="Create a new research study",
        required=("name", "description"),
        optional=("template", "format"),
        types={"name": S, "description": S, "template": S, "format": S},
        examples=(
            '/study:create --name="e-commerce-usability" --description="Usability study for checkout flow"',
            '/study:create --name="mobile-app-test" --description="Mobile app usability testing" --template="standard"',
        ),
    ),
    CommandSpec(
        name="study:list",
        description="List all available studies",
        required=(),
        optional=("format", "filter"),
        types={"format": S, "filter": S},
        examples=(
            "/study:list",
            '/study:list --format="table" --filter="active"',
        ),
    ),
    CommandSpec(
        name="study:show",
        description="Show details of a specific study",
        required=("name",),
        optional=("format", "details"),
        types={"name": S, "format": S, "details": B},
        examples=(
            '/study:show --name="e-commerce-usability"',
            '/study:show --name="mobile-app-test" --format="detailed" --details',
        ),
    ),
    CommandSpec(
        name="study:delete",
        description="Delete a research study",
        required=("name",),
        optional=("confirm", "force"),
        types={"name": S, "confirm": B, "force": B},
        examples=(
            '/study:delete --name="old-study" --confirm',
            '/study:delete --name="test-study" --confirm --force',
        ),
    ),
)

_BY_NAME: Dict[str, CommandSpec] = {spec.name: spec for spec in COMMANDS}


def command_names() -> List[str]:
    """Command names in catalog order."""
    return [spec.name for spec in COMMANDS]


def get_spec(name: str) -> Optional[CommandSpec]:
    return _BY_NAME.get(name)
