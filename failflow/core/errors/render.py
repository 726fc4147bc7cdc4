# failflow/core/errors/render.py
"""
Deterministic rendering of failure data.

Rules:
- mappings  -> {k v, k2 v2}   (iteration order, keys bare)
- sequences -> [a b]
- sets      -> #{a b}         (sorted by repr)
- strings   -> "quoted" when used as a value
- None      -> nil, bools -> true / false
- anything else -> str(), or <unstringifiable>

Every key/value pair is always rendered; nothing is truncated.
"""

from __future__ import annotations

from typing import Any, Mapping, Set


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unstringifiable>"


def _render(value: Any, seen: Set[int], *, as_key: bool = False) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value if as_key else '"' + value.replace('"', '\\"') + '"'

    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        if id(value) in seen:
            return "<cycle>"
        seen.add(id(value))
        try:
            if isinstance(value, Mapping):
                pairs = (
                    f"{_render(k, seen, as_key=True)} {_render(v, seen)}"
                    for k, v in value.items()
                )
                return "{" + ", ".join(pairs) + "}"
            if isinstance(value, (set, frozenset)):
                items = sorted((_render(v, seen) for v in value))
                return "#{" + " ".join(items) + "}"
            return "[" + " ".join(_render(v, seen) for v in value) + "]"
        finally:
            seen.discard(id(value))

    return _safe_str(value)


def render_data(value: Any) -> str:
    """Render a data payload (usually a mapping) as a stable one-line string."""
    return _render(value, set())
