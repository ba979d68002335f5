"""Human-readable log templates keyed by ``(domain, action)``.

The catalog lives in ``event_templates.json`` next to this module, one object
per domain (``irc``, ``presence``, ``session``, ``notify``) mapping action
names to ``str.format`` templates.
"""

from __future__ import annotations

import json
from pathlib import Path

CATALOG_PATH = Path(__file__).with_name("event_templates.json")
LOAD_ERROR_KEY = ("app", "load_error")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(catalog: object) -> dict[tuple[str, str], str]:
    if not isinstance(catalog, dict):
        raise ValueError("catalog root must be a JSON object")
    return {
        (domain, action): text
        for domain, actions in catalog.items()
        if isinstance(actions, dict)
        for action, text in actions.items()
        if isinstance(text, str)
    }


def read_catalog(path: Path = CATALOG_PATH) -> dict[tuple[str, str], str]:
    """Read and flatten a catalog file.

    Never raises: a missing or broken file yields a single ``app/load_error``
    entry so logging keeps working with derived messages.
    """
    try:
        return _flatten(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return {LOAD_ERROR_KEY: f"Event templates file missing: {path.name}"}
    except (OSError, ValueError) as e:
        return {LOAD_ERROR_KEY: f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    # In place: BotLogger holds a reference to this dict.
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(read_catalog(path or CATALOG_PATH))


reload_event_templates()

__all__ = ["CATALOG_PATH", "EVENT_TEMPLATES", "read_catalog", "reload_event_templates"]
