"""
Execution routines behind the slash commands.

A routine is an async callable taking the validated parameter map and
returning a human-readable summary. SlashCommandHandler looks routines up by
command name, so a host with a real research or study backend can pass its own
mapping instead of the simulated one defined here.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict

from .errors import CommandExecutionError

CommandRoutine = Callable[[Dict[str, Any]], Awaitable[str]]

# Nominal delay so measured execution times are non-zero.
SIMULATED_DELAY = 0.001


async def research_questions(parameters: Dict[str, Any]) -> str:
    study = parameters.get("study")
    topic = parameters.get("topic")
    count = parameters.get("count", 5)
    format = parameters.get("format", "markdown")
    await asyncio.sleep(SIMULATED_DELAY)
    return f'Research questions generated for study "{study}" on topic "{topic}" ({count} questions, {format} format)'


async def research_sources(parameters: Dict[str, Any]) -> str:
    study = parameters.get("study")
    keywords = parameters.get("keywords")
    format = parameters.get("format", "markdown")
    limit = parameters.get("limit", 10)
    await asyncio.sleep(SIMULATED_DELAY)
    return f'Research sources gathered for study "{study}" with keywords "{keywords}" ({limit} sources, {format} format)'


async def research_summarize(parameters: Dict[str, Any]) -> str:
    study = parameters.get("study")
    format = parameters.get("format", "markdown")
    length = parameters.get("length", "medium")
    await asyncio.sleep(SIMULATED_DELAY)
    return f'Research summary created for study "{study}" ({length} length, {format} format)'


async def research_interview(parameters: Dict[str, Any]) -> str:
    study = parameters.get("study")
    participant = parameters.get("participant")
    format = parameters.get("format", "markdown")
    template = parameters.get("template", "standard")
    await asyncio.sleep(SIMULATED_DELAY)
    return (
        f'Interview data processed for study "{study}" participant "{participant}" '
        f'({template} template, {format} format)'
    )


async def research_synthesize(parameters: Dict[str, Any]) -> str:
    study = parameters.get("study")
    insights = parameters.get("insights")
    format = parameters.get("format", "markdown")
    output = parameters.get("output", "report")
    await asyncio.sleep(SIMULATED_DELAY)
    return (
        f'Research synthesis completed for study "{study}" with insights "{insights}" '
        f'({output} output, {format} format)'
    )


async def study_create(parameters: Dict[str, Any]) -> str:
    name = parameters.get("name")
    description = parameters.get("description")
    template = parameters.get("template", "standard")
    format = parameters.get("format", "markdown")
    await asyncio.sleep(SIMULATED_DELAY)
    return f'Study "{name}" created successfully: {description} ({template} template, {format} format)'


async def study_list(parameters: Dict[str, Any]) -> str:
    format = parameters.get("format", "table")
    filter_text = parameters.get("filter")
    suffix = f' with filter "{filter_text}"' if filter_text else ""
    await asyncio.sleep(SIMULATED_DELAY)
    return f"Studies listed successfully ({format} format{suffix})"


async def study_show(parameters: Dict[str, Any]) -> str:
    name = parameters.get("name")
    format = parameters.get("format", "detailed")
    details = parameters.get("details", False)
    suffix = " with full details" if details else ""
    await asyncio.sleep(SIMULATED_DELAY)
    return f'Study details for "{name}" ({format} format{suffix})'


async def study_delete(parameters: Dict[str, Any]) -> str:
    name = parameters.get("name")
    confirm = parameters.get("confirm", False)
    force = parameters.get("force", False)
    if not confirm:
        raise CommandExecutionError("Deletion requires confirmation. Use --confirm flag.")
    suffix = " (forced)" if force else ""
    await asyncio.sleep(SIMULATED_DELAY)
    return f'Study "{name}" deleted successfully{suffix}'


def simulated_routines() -> Dict[str, CommandRoutine]:
    """Routines that describe what each command would do without touching disk."""
    return {
        "research:questions": research_questions,
        "research:sources": research_sources,
        "research:summarize": research_summarize,
        "research:interview": research_interview,
        "research:synthesize": research_synthesize,
        "study:create": study_create,
        "study:list": study_list,
        "study:show": study_show,
        "study:delete": study_delete,
    }
