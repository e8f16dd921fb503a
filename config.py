from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from core import is_priority_level

logger = logging.getLogger("todotui.config")

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "todotui" / "config.yaml"
DEFAULT_THEME = "catppuccin"
VALID_THEMES = ("catppuccin", "nord", "everforest-dark", "everforest-light")
DEFAULT_PRIORITY_LEVELS = ["", "A", "B", "C", "D"]
DEFAULT_LOG_LEVEL = "WARN"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "WARNING", "ERROR")


class ConfigError(Exception):
    """The config file exists but cannot be read or parsed."""


@dataclass
class CompletedTaskTransitionConfig:
    delay_days: int = 0
    transition_hour: int = 5


@dataclass
class UIConfig:
    left_pane_ratio: float = 0.33
    min_left_pane_width: int = 18
    min_right_pane_width: int = 28
    vertical_padding: int = 2
    completed_task_transition: CompletedTaskTransitionConfig = field(default_factory=CompletedTaskTransitionConfig)


@dataclass
class LoggingConfig:
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass
class AppConfig:
    theme: str = DEFAULT_THEME
    priority_levels: List[str] = field(default_factory=lambda: list(DEFAULT_PRIORITY_LEVELS))
    default_todo_file: str = ""
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def expand_home(path: str) -> str:
    if path == "~" or path.startswith("~/"):
        return str(Path(path).expanduser())
    return path


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def from_dict(data: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig from parsed YAML; missing keys keep their defaults."""
    defaults = AppConfig()
    ui_data = _section(data, "ui")
    transition_data = _section(ui_data, "completed_task_transition")
    logging_data = _section(data, "logging")

    levels = data.get("priority_levels", defaults.priority_levels)
    if not isinstance(levels, list):
        levels = defaults.priority_levels
    levels = ["" if level is None else str(level) for level in levels]

    ui_defaults = defaults.ui
    transition_defaults = ui_defaults.completed_task_transition
    return AppConfig(
        theme=str(data.get("theme") or defaults.theme),
        priority_levels=levels,
        default_todo_file=str(data.get("default_todo_file") or ""),
        ui=UIConfig(
            left_pane_ratio=_as_float(ui_data.get("left_pane_ratio"), ui_defaults.left_pane_ratio),
            min_left_pane_width=_as_int(ui_data.get("min_left_pane_width"), ui_defaults.min_left_pane_width),
            min_right_pane_width=_as_int(ui_data.get("min_right_pane_width"), ui_defaults.min_right_pane_width),
            vertical_padding=_as_int(ui_data.get("vertical_padding"), ui_defaults.vertical_padding),
            completed_task_transition=CompletedTaskTransitionConfig(
                delay_days=_as_int(transition_data.get("delay_days"), transition_defaults.delay_days),
                transition_hour=_as_int(transition_data.get("transition_hour"), transition_defaults.transition_hour),
            ),
        ),
        logging=LoggingConfig(log_level=str(logging_data.get("log_level") or DEFAULT_LOG_LEVEL)),
    )


def _priority_levels(levels: List[str]) -> List[str]:
    """Upper-case single letters, drop anything else, keep "" first."""
    letters: List[str] = []
    for raw in levels:
        level = raw.strip().upper()
        if level == "":
            continue
        if not is_priority_level(level):
            logger.warning("ignoring priority level %r, expected a single letter A-Z", raw)
            continue
        if level not in letters:
            letters.append(level)
    if not letters:
        return list(DEFAULT_PRIORITY_LEVELS)
    return [""] + letters


def validate(config: AppConfig) -> AppConfig:
    """Replace invalid values with defaults in place and return the config."""
    defaults = AppConfig()
    if config.theme not in VALID_THEMES:
        logger.warning("unknown theme %r, using %s", config.theme, DEFAULT_THEME)
        config.theme = DEFAULT_THEME

    config.priority_levels = _priority_levels(config.priority_levels)

    ui = config.ui
    if not 0 < ui.left_pane_ratio < 1:
        ui.left_pane_ratio = defaults.ui.left_pane_ratio
    if ui.min_left_pane_width <= 0:
        ui.min_left_pane_width = defaults.ui.min_left_pane_width
    if ui.min_right_pane_width <= 0:
        ui.min_right_pane_width = defaults.ui.min_right_pane_width
    if ui.vertical_padding < 1:
        ui.vertical_padding = defaults.ui.vertical_padding

    transition = ui.completed_task_transition
    if transition.delay_days < 0:
        transition.delay_days = 0
    if not 0 <= transition.transition_hour <= 23:
        transition.transition_hour = defaults.ui.completed_task_transition.transition_hour

    level = (config.logging.log_level or "").upper()
    config.logging.log_level = level if level in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL

    if config.default_todo_file:
        config.default_todo_file = expand_home(config.default_todo_file)
    return config


def load_config_file(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return from_dict(data)


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load the explicit config, else the default location, else defaults.

    A broken file never stops start-up: it is reported and defaults are used.
    """
    candidate = Path(path).expanduser() if path else DEFAULT_CONFIG_PATH
    if not path and not candidate.exists():
        return AppConfig()
    try:
        return validate(load_config_file(candidate))
    except ConfigError as exc:
        logger.warning("config loading failed, using defaults: %s", exc)
        print(f"Warning: {exc}\nUsing default configuration.", file=sys.stderr)
        return AppConfig()


def save_config(config: AppConfig, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.to_dict(), allow_unicode=True, sort_keys=False), encoding="utf-8")


__all__ = [
    "AppConfig",
    "UIConfig",
    "LoggingConfig",
    "CompletedTaskTransitionConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "VALID_THEMES",
    "load_config",
    "load_config_file",
    "save_config",
    "validate",
    "from_dict",
]
