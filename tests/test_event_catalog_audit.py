"""Every ``log_event`` call in the package must have a catalog template, and vice versa."""

from __future__ import annotations

import ast
import json
from collections.abc import Iterator
from pathlib import Path

import notifybot
from notifybot.logs import EVENT_TEMPLATES

PACKAGE_ROOT = Path(notifybot.__file__).resolve().parent
TEMPLATES_JSON = PACKAGE_ROOT / "logs" / "event_templates.json"


def _string_values(node: ast.expr) -> list[str]:
    # Ternaries such as "peer_online" if x else "peer_offline" yield both branches.
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return [node.value]
    if isinstance(node, ast.IfExp):
        return _string_values(node.body) + _string_values(node.orelse)
    return []


def iter_event_keys(root: Path) -> Iterator[tuple[str, str, Path]]:
    for path in sorted(root.rglob("*.py")):
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if not (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr == "log_event"
                and len(node.args) >= 2
            ):
                continue
            for domain in _string_values(node.args[0]):
                for action in _string_values(node.args[1]):
                    yield domain, action, path


def test_all_logged_events_have_templates() -> None:
    missing = sorted(
        f"{domain}/{action} ({path.name})"
        for domain, action, path in iter_event_keys(PACKAGE_ROOT)
        if (domain, action) not in EVENT_TEMPLATES
    )
    assert missing == []


def test_no_unused_templates() -> None:
    used = {(domain, action) for domain, action, _ in iter_event_keys(PACKAGE_ROOT)}
    catalog = json.loads(TEMPLATES_JSON.read_text(encoding="utf-8"))
    declared = {(d, a) for d, actions in catalog.items() for a in actions}
    assert sorted(declared - used) == []
