"""Picker configuration. Stores settings at ~/.clitree/settings.json.

Precedence: CLI overrides > settings file > defaults.  Keys in the file are
camelCase (``enterActivates``, ``keybindings``, ``cursor``, ``color``).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from clitree.keybindings import (
    ENTER_ACTIVATES_KEYBINDINGS,
    TREE_ACTIONS,
    TreeKeybindingsConfig,
    TreeKeybindingsManager,
)
from clitree.theme import TreeTheme, default_theme, plain_theme

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".clitree"
SETTINGS_FILE = "settings.json"


@dataclass
class TreeConfig:
    """Runtime options for one picker session."""

    enter_activates: bool = False
    keybindings: TreeKeybindingsConfig = field(default_factory=dict)
    cursor: str = ">"
    color: bool = True

    def keybindings_manager(self) -> TreeKeybindingsManager:
        """Build the keybindings, applying the enter preset before overrides."""
        config: dict[str, Any] = {}
        if self.enter_activates:
            config.update(ENTER_ACTIVATES_KEYBINDINGS)
        config.update(self.keybindings)
        return TreeKeybindingsManager(config)  # type: ignore[arg-type]

    def theme(self) -> TreeTheme:
        if self.color:
            return default_theme(self.cursor)
        return plain_theme(self.cursor)


def _settings_defaults() -> dict[str, Any]:
    return {
        "enterActivates": False,
        "keybindings": {},
        "cursor": ">",
        "color": True,
    }


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overrides* into *base*.

    Nested dicts merge key by key; other values replace.  ``None`` values in
    *overrides* are skipped so unset CLI flags do not clobber the file.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


def get_config_dir() -> Path:
    return Path(os.environ.get("CLITREE_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def _load_from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not an object", path)
        return {}
    return data


def _is_key_list(keys: Any) -> bool:
    if isinstance(keys, str):
        return True
    return isinstance(keys, list) and all(isinstance(k, str) for k in keys)


def _valid_keybindings(raw: Any) -> TreeKeybindingsConfig:
    """Keep the entries that name a known action and a key or list of keys."""
    if not isinstance(raw, dict):
        logger.warning("Ignoring keybindings setting: expected an object")
        return {}
    valid: TreeKeybindingsConfig = {}
    for action, keys in raw.items():
        if action not in TREE_ACTIONS:
            logger.warning("Ignoring keybinding for unknown action %r", action)
        elif not _is_key_list(keys):
            logger.warning("Ignoring keybinding for %r: expected a key or list of keys", action)
        else:
            valid[action] = keys
    return valid


def config_from_dict(data: dict[str, Any]) -> TreeConfig:
    return TreeConfig(
        enter_activates=bool(data.get("enterActivates", False)),
        keybindings=_valid_keybindings(data.get("keybindings") or {}),
        cursor=str(data.get("cursor") or ">"),
        color=bool(data.get("color", True)),
    )


def load_config(
    overrides: dict[str, Any] | None = None,
    settings_path: Path | None = None,
) -> TreeConfig:
    """Load settings from disk and apply *overrides* on top."""
    path = settings_path or get_config_dir() / SETTINGS_FILE
    settings = deep_merge_settings(_settings_defaults(), _load_from_file(path))
    if overrides:
        settings = deep_merge_settings(settings, overrides)
    return config_from_dict(settings)
