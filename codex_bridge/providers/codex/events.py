"""Codex output line normalization."""

from __future__ import annotations

import json

from codex_bridge.providers.models import CompletionEvent, Text, ToolUse

_TOOL_TYPES = {"tool", "tool_use"}


def extract_tool_name(record: dict) -> str | None:
    for key in ("name", "tool"):
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def coerce_tool_use(record: dict) -> ToolUse | None:
    if record.get("type") not in _TOOL_TYPES:
        return None

    tool_id = record.get("id")
    name = extract_tool_name(record)
    if not isinstance(tool_id, str) or not tool_id or not name or "input" not in record:
        return None

    raw_input = record.get("raw_input")
    complete = record.get("is_input_complete", True)
    return ToolUse(
        id=tool_id,
        name=name,
        input=record["input"],
        raw_input=raw_input if isinstance(raw_input, str) else "",
        is_input_complete=complete if isinstance(complete, bool) else True,
    )


def parse_line(line: str) -> CompletionEvent:
    """Decode one stdout line.

    Anything that is not a recognised JSON record comes back as the raw line.
    """
    try:
        record = json.loads(line)
    except json.JSONDecodeError:
        return Text(line)

    if not isinstance(record, dict):
        return Text(line)

    tool_use = coerce_tool_use(record)
    if tool_use is not None:
        return tool_use

    for key in ("content", "text"):
        value = record.get(key)
        if isinstance(value, str):
            return Text(value)

    return Text(line)
