"""Configuration management for UX-Kit."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

OUTPUT_FORMATS = ("display", "json", "markdown")
AI_AGENTS = ("cursor", "codex", "custom")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """A configuration file or value could not be used."""


class Config:
    """Configuration manager for UX-Kit.

    Values are resolved from environment variables, then the project's
    ``.uxkit/config.yaml``, then the user's ``~/.uxkitrc``, then defaults.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """Initialize configuration with environment variables and config files."""
        # Load environment variables from .env file if it exists
        load_dotenv()

        root = project_root or os.getenv("UXKIT_PROJECT_ROOT")
        self.project_root = Path(root) if root else Path.cwd()

        self.default_output_format = "display"
        self.default_log_level = "WARNING"
        self.default_ai_agent = "cursor"

        self.user_config = self._load_yaml(self.user_config_path())
        self.project_config = self._load_yaml(self.project_config_path())

    @staticmethod
    def user_config_path() -> Path:
        return Path.home() / ".uxkitrc"

    def project_config_path(self) -> Path:
        return self.project_root / ".uxkit" / "config.yaml"

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load a YAML mapping, or an empty dict when the file does not exist."""
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(content, dict):
            raise ConfigError(f"Expected a mapping in {path}, got {type(content).__name__}")
        return content

    def _lookup(self, env_var: str, *keys: str) -> Optional[Any]:
        value = os.getenv(env_var)
        if value:
            return value

        for source in (self.project_config, self.user_config):
            node: Any = source
            for key in keys:
                node = node.get(key) if isinstance(node, dict) else None
            if node is not None:
                return node
        return None

    def get_output_format(self) -> str:
        """Rendering used for command responses: display, json or markdown."""
        value = str(self._lookup("UXKIT_OUTPUT_FORMAT", "output", "format") or self.default_output_format)
        if value not in OUTPUT_FORMATS:
            raise ConfigError(f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}")
        return value

    def get_log_level(self) -> str:
        value = str(self._lookup("UXKIT_LOG_LEVEL", "logging", "level") or self.default_log_level).upper()
        if value not in LOG_LEVELS:
            raise ConfigError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
        return value

    def get_ai_agent(self) -> str:
        """AI agent provider the project was initialized for."""
        value = str(self._lookup("UXKIT_AI_AGENT", "aiAgent", "provider") or self.default_ai_agent)
        if value not in AI_AGENTS:
            raise ConfigError(f"AI agent must be one of: {', '.join(AI_AGENTS)}")
        return value

    def as_dict(self) -> Dict[str, Any]:
        return {
            "project_root": str(self.project_root),
            "output_format": self.get_output_format(),
            "log_level": self.get_log_level(),
            "ai_agent": self.get_ai_agent(),
        }

    def create_default_config(self) -> Path:
        """Create a default ~/.uxkitrc for the user."""
        config_path = self.user_config_path()
        default_config = {
            "output": {
                "format": self.default_output_format,
            },
            "logging": {
                "level": self.default_log_level,
            },
            "aiAgent": {
                "provider": self.default_ai_agent,
            },
        }

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(default_config, f, default_flow_style=False)

        self.user_config = default_config
        return config_path
