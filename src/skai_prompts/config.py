"""Configuration for skai-prompts.

Defaults can be overridden by an optional YAML file and by environment
variables (later wins):

    defaults -> $XDG_CONFIG_HOME/skai/prompts.yaml (or $SKAI_PROMPTS_CONFIG)
             -> SKAI_MAX_VISIBLE / SKAI_TUI_THEME
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .themes import Theme, get_theme

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "SKAI_PROMPTS_CONFIG"
ENV_MAX_VISIBLE = "SKAI_MAX_VISIBLE"
ENV_THEME = "SKAI_TUI_THEME"

MAX_SEARCH_LENGTH = 50


@dataclass(frozen=True)
class PromptConfig:
    """Layout and behaviour settings for prompts.

    Attributes:
        max_visible: Rows shown before a list scrolls.
        tab_bar_width: Width of the tab bar, search box and separators.
        label_width: Label column width in pick-many rows.
        flash_delay: Seconds the clear-search acknowledgement stays visible.
        theme: Name of the color palette.
    """

    max_visible: int = 10
    tab_bar_width: int = 50
    label_width: int = 30
    flash_delay: float = 0.15
    theme: str = "default"

    def build_theme(self) -> Theme:
        """Return the named theme with this config's layout applied."""
        return get_theme(
            self.theme,
            max_visible_items=self.max_visible,
            tab_bar_width=self.tab_bar_width,
            label_width=self.label_width,
        )


DEFAULT_CONFIG = PromptConfig()


def get_config_dir() -> Path:
    """Get the skai config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "skai"


def get_config_path() -> Path:
    """Get the prompts config file path (env override first)."""
    override = os.environ.get(ENV_CONFIG_PATH)
    if override:
        return Path(os.path.expanduser(override))
    return get_config_dir() / "prompts.yaml"


def _coerce(name: str, raw: Any, expected: type) -> Any:
    """Coerce a raw config value to the field type, or raise ValueError."""
    if expected is int:
        value = int(raw)
        if value < 1:
            raise ValueError(f"{name} must be positive")
        return value
    if expected is float:
        value = float(raw)
        if value < 0:
            raise ValueError(f"{name} must not be negative")
        return value
    return str(raw).strip()


def _apply(config: PromptConfig, values: Mapping[str, Any], source: str) -> PromptConfig:
    types = {f.name: type(getattr(DEFAULT_CONFIG, f.name)) for f in fields(PromptConfig)}
    updates: dict[str, Any] = {}
    for key, raw in values.items():
        name = str(key).replace("-", "_")
        if name not in types:
            logger.warning("Ignoring unknown setting %r in %s", key, source)
            continue
        try:
            updates[name] = _coerce(name, raw, types[name])
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring invalid %s=%r in %s: %s", name, raw, source, e)
    return replace(config, **updates) if updates else config


def load_file_settings(path: Path) -> dict[str, Any]:
    """Read the YAML config file; missing or malformed files yield {}."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s, using defaults: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping", path)
        return {}
    return data


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> PromptConfig:
    """Load prompt configuration from file and environment."""
    env = os.environ if env is None else env
    path = path if path is not None else get_config_path()

    config = _apply(DEFAULT_CONFIG, load_file_settings(path), str(path))

    env_values: dict[str, str] = {}
    if env.get(ENV_MAX_VISIBLE):
        env_values["max_visible"] = env[ENV_MAX_VISIBLE]
    if env.get(ENV_THEME):
        env_values["theme"] = env[ENV_THEME]
    return _apply(config, env_values, "environment")
