"""Log markers for tool calls seen in codex output.

Every tool call is logged as ``[tool:<name>]``. With ``CODEX_LOG_TOOL_INPUT``
switched on, a preview of the call's input is appended, e.g.
``[tool:shell git status]`` or ``[tool:apply_patch src/app.py]``. Previews
are capped at ``CODEX_LOG_TOOL_INPUT_MAX`` characters and never show values
under secret-looking keys.
"""

from __future__ import annotations

import json
import logging
import os
import re
import shlex

log = logging.getLogger("codex.tools")

DEFAULT_PREVIEW_LIMIT = 2000

_SECRET_KEY = re.compile(r"key|token|secret|password|auth|cookie", re.IGNORECASE)
_SHELL_TOOLS = frozenset({"shell", "local_shell", "exec"})
_PATCH_HEADER = re.compile(r"^\*\*\* (?:Add|Update|Delete) File: (.+)$", re.MULTILINE)


def input_logging_enabled() -> bool:
    return os.getenv("CODEX_LOG_TOOL_INPUT", "").strip().lower() in {"1", "true", "yes", "on"}


def preview_limit() -> int:
    raw = os.getenv("CODEX_LOG_TOOL_INPUT_MAX", "").strip()
    if not raw:
        return DEFAULT_PREVIEW_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit < 1:
        log.warning(
            f"Ignoring CODEX_LOG_TOOL_INPUT_MAX={raw!r}, using {DEFAULT_PREVIEW_LIMIT}"
        )
        return DEFAULT_PREVIEW_LIMIT
    return limit


def scrub_secrets(value: object) -> object:
    """Copy of ``value`` with secret-looking keys masked at any depth."""
    if isinstance(value, dict):
        return {
            k: "[REDACTED]" if _SECRET_KEY.search(str(k)) else scrub_secrets(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [scrub_secrets(v) for v in value]
    return value


def _shell_preview(tool_input: dict) -> str | None:
    command = tool_input.get("command")
    if isinstance(command, list) and all(isinstance(part, str) for part in command):
        # codex wraps scripts as ["bash", "-lc", "<script>"]
        if len(command) == 3 and command[1] in {"-c", "-lc"}:
            return command[2].strip() or None
        return shlex.join(command)
    if isinstance(command, str):
        return command.strip() or None
    return None


def _patch_preview(tool_input: dict) -> str | None:
    patch = tool_input.get("input") or tool_input.get("patch")
    if isinstance(patch, str):
        files = _PATCH_HEADER.findall(patch)
        if files:
            return " ".join(f.strip() for f in files)
    path = tool_input.get("path")
    return path if isinstance(path, str) and path else None


def preview_tool_input(tool: str, tool_input: object) -> str | None:
    """Short human-readable summary of a tool call's input, or None."""
    if tool_input is None or tool_input == {}:
        return None
    if isinstance(tool_input, dict):
        if tool in _SHELL_TOOLS:
            preview = _shell_preview(tool_input)
        elif tool == "apply_patch":
            preview = _patch_preview(tool_input)
        else:
            preview = None
        if preview:
            return preview
    return json.dumps(scrub_secrets(tool_input), ensure_ascii=True, separators=(",", ":"), default=str)


def describe_tool_use(tool: str, tool_input: object) -> str:
    if not input_logging_enabled():
        return f"[tool:{tool}]"
    preview = preview_tool_input(tool, tool_input)
    if not preview:
        return f"[tool:{tool}]"
    limit = preview_limit()
    if len(preview) > limit:
        preview = preview[:limit] + "..."
    return f"[tool:{tool} {preview}]"
