"""
Configuration management for logpeek.

Loads settings from environment variables and .env file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..models.view_state import Action


# Actions the user can rebind, with their env var and default textual key
KEY_SETTINGS = {
    Action.QUIT: ("LOGPEEK_KEY_QUIT", "q"),
    Action.MOVE_UP: ("LOGPEEK_KEY_UP", "k"),
    Action.MOVE_DOWN: ("LOGPEEK_KEY_DOWN", "j"),
    Action.OPEN_SEARCH: ("LOGPEEK_KEY_SEARCH", "question_mark"),
    Action.CONFIRM: ("LOGPEEK_KEY_CONFIRM", "enter"),
    Action.DISMISS: ("LOGPEEK_KEY_DISMISS", "escape"),
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """
    Configuration manager for the viewer.

    Loads configuration from environment variables, with fallback to .env file.
    """

    _instance: Optional["Config"] = None

    def __new__(cls) -> "Config":
        """Singleton pattern to ensure single config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize configuration (only runs once due to singleton)."""
        if self._initialized:
            return

        self._load_env()

        # Diagnostic log file; empty string disables it
        self.log_file: str = os.getenv("LOGPEEK_LOG_FILE", "logpeek.log")
        self.log_level: str = os.getenv("LOGPEEK_LOG_LEVEL", "INFO").upper()

        # Expanded view indentation
        self.indent_raw: str = os.getenv("LOGPEEK_INDENT", "2")

        # Key bindings (textual key names)
        self.keys: dict[Action, str] = {
            action: os.getenv(env_var, default).strip()
            for action, (env_var, default) in KEY_SETTINGS.items()
        }

        self._initialized = True

    def _load_env(self) -> None:
        """Load .env file if it exists."""
        current = Path.cwd()
        for _ in range(5):  # Search up to 5 levels up
            env_path = current / ".env"
            if env_path.exists():
                load_dotenv(env_path)
                return
            current = current.parent

    @property
    def indent(self) -> int:
        try:
            return int(self.indent_raw)
        except ValueError:
            return 2

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    @property
    def has_log_file(self) -> bool:
        return bool(self.log_file)

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of problems.

        Returns:
            List of problems (empty if all valid)
        """
        problems = []

        if self.log_level not in LOG_LEVELS:
            problems.append(f"LOGPEEK_LOG_LEVEL - must be one of {', '.join(LOG_LEVELS)}")

        try:
            if int(self.indent_raw) < 0:
                problems.append("LOGPEEK_INDENT - must not be negative")
        except ValueError:
            problems.append("LOGPEEK_INDENT - must be an integer")

        seen: dict[str, Action] = {}
        for action, key in self.keys.items():
            env_var = KEY_SETTINGS[action][0]
            if not key:
                problems.append(f"{env_var} - key binding is empty")
            elif key in seen:
                problems.append(f"{env_var} - '{key}' is already bound to {seen[key].value}")
            else:
                seen[key] = action

        return problems

    def __repr__(self) -> str:
        keys = ", ".join(f"{action.value}={key}" for action, key in self.keys.items())
        return (
            f"Config(\n"
            f"  log_file={self.log_file or 'DISABLED'},\n"
            f"  log_level={self.log_level},\n"
            f"  indent={self.indent_raw},\n"
            f"  keys=({keys})\n"
            f")"
        )


def get_config() -> Config:
    """Get the configuration singleton."""
    return Config()


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads it."""
    Config._instance = None
