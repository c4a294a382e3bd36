"""Project initialization: scaffolds the .uxkit/ working directory."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List

import yaml

from .config import AI_AGENTS

logger = logging.getLogger("uxkit.project")

UXKIT_DIR = ".uxkit"
SUBDIRECTORIES = ("memory", "templates", "studies")

PRINCIPLES_CONTENT = """# UX-Kit Principles

## Spec-Driven Development
UX-Kit follows a specification-driven approach to UX research, ensuring that all research activities are guided by clear objectives and structured methodologies.

## AI Agent Integration
Leverage AI agents (Cursor, Codex, etc.) to enhance research workflows while maintaining human oversight and critical thinking.

## File-Based Approach
All research artifacts are stored as text files, making them easily accessible to AI agents and version control systems.

## Template-Driven Consistency
Use standardized templates to ensure consistent research outputs and facilitate AI agent understanding.

## Lightweight Implementation
Focus on essential functionality without complex data models or inference engines.
"""


@dataclass
class InitResult:
    """Outcome of initializing a project."""
    project_root: Path
    ai_agent: str
    already_initialized: bool = False
    created: List[Path] = field(default_factory=list)


def is_initialized(project_root: Path) -> bool:
    return (Path(project_root) / UXKIT_DIR).exists()


def initialize_project(project_root: Path, ai_agent: str = "cursor") -> InitResult:
    """Create .uxkit/ with its subdirectories, config.yaml and memory/principles.md."""
    if ai_agent not in AI_AGENTS:
        raise ValueError(f"AI agent must be one of: {', '.join(AI_AGENTS)}")

    root = Path(project_root)
    if is_initialized(root):
        logger.info(f"UX-Kit already initialized in {root}")
        return InitResult(root, ai_agent, already_initialized=True)

    uxkit_dir = root / UXKIT_DIR
    result = InitResult(root, ai_agent)

    for name in SUBDIRECTORIES:
        path = uxkit_dir / name
        path.mkdir(parents=True, exist_ok=True)
        result.created.append(path)

    config_path = uxkit_dir / "config.yaml"
    config = {
        "version": "1.0.0",
        "createdAt": datetime.now().isoformat(timespec="seconds"),
        "aiAgent": {
            "provider": ai_agent,
            "settings": {},
        },
        "storage": {
            "basePath": f"./{UXKIT_DIR}/studies",
            "format": "markdown",
        },
    }
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    result.created.append(config_path)

    principles_path = uxkit_dir / "memory" / "principles.md"
    with open(principles_path, "w", encoding="utf-8") as f:
        f.write(PRINCIPLES_CONTENT)
    result.created.append(principles_path)

    logger.info(f"Initialized UX-Kit in {root} for {ai_agent}")
    return result
