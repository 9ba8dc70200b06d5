"""Session options and persisted JSON defaults.

Options are built once at startup and passed explicitly to the prompt.
The config file only supplies option defaults; selection state is never
persisted. All access is defensive: malformed or missing config falls back
safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .matching import Predicate, contains, contains_ignore_case

APP_NAME = "linepick"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

BOOL_OPTION_KEYS = ("autoselect", "insensitive", "multiselect", "numbers")
DEFAULT_PROMPT = ""


@dataclass(frozen=True)
class SelectorOptions:
    """Read-only session configuration consumed by the prompt controller."""

    autoselect: bool = False
    insensitive: bool = False
    multiselect: bool = False
    numbers: bool = False
    prompt: str = DEFAULT_PROMPT

    @property
    def predicate(self) -> Predicate:
        return contains_ignore_case if self.insensitive else contains

    @property
    def effective_autoselect(self) -> bool:
        """Autoselect only applies in single-selection mode."""
        return self.autoselect and not self.multiselect


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_option_defaults() -> dict[str, object]:
    """Return validated option defaults from config.

    Only explicit booleans are accepted for flags and only non-blank strings
    for ``prompt``; anything else is dropped.
    """
    data = load_config()
    defaults: dict[str, object] = {}
    for key in BOOL_OPTION_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            defaults[key] = value
    prompt = data.get("prompt")
    if isinstance(prompt, str) and prompt.strip():
        defaults["prompt"] = prompt
    return defaults


def build_options(
    *,
    autoselect: bool = False,
    insensitive: bool = False,
    multiselect: bool = False,
    numbers: bool = False,
    prompt: str | None = None,
    defaults: dict[str, object] | None = None,
) -> SelectorOptions:
    """Merge command-line flags over config defaults.

    Flags can only switch a default on. ``multiselect`` forces autoselect off.
    """
    base = load_option_defaults() if defaults is None else defaults
    multi = multiselect or bool(base.get("multiselect", False))
    resolved_prompt = prompt if prompt is not None else base.get("prompt", DEFAULT_PROMPT)
    return SelectorOptions(
        autoselect=(autoselect or bool(base.get("autoselect", False))) and not multi,
        insensitive=insensitive or bool(base.get("insensitive", False)),
        multiselect=multi,
        numbers=numbers or bool(base.get("numbers", False)),
        prompt=str(resolved_prompt),
    )
