"""Tests for tool-call log markers."""

import json
import logging

from codex_bridge.providers.tool_logging import (
    DEFAULT_PREVIEW_LIMIT,
    describe_tool_use,
    preview_limit,
    preview_tool_input,
    scrub_secrets,
)

PATCH = """*** Begin Patch
*** Update File: src/app.py
@@
-a
+b
*** Add File: docs/notes.md
+hello
*** End Patch
"""


def test_scrubs_secret_keys_at_any_depth():
    data = {"api_key": "x", "nested": [{"Auth-Token": "y", "path": "a"}]}

    assert scrub_secrets(data) == {
        "api_key": "[REDACTED]",
        "nested": [{"Auth-Token": "[REDACTED]", "path": "a"}],
    }


def test_shell_argv_is_quoted():
    assert preview_tool_input("shell", {"command": ["ls", "-la", "my dir"]}) == "ls -la 'my dir'"


def test_shell_script_wrapper_shows_script():
    assert preview_tool_input("shell", {"command": ["bash", "-lc", "git status"]}) == "git status"


def test_apply_patch_lists_touched_files():
    assert preview_tool_input("apply_patch", {"input": PATCH}) == "src/app.py docs/notes.md"


def test_apply_patch_falls_back_to_path():
    assert preview_tool_input("apply_patch", {"path": "src/a.py"}) == "src/a.py"


def test_other_tools_get_scrubbed_json():
    preview = preview_tool_input("fetch", {"url": "u", "token": "t"})
    assert json.loads(preview) == {"token": "[REDACTED]", "url": "u"}


def test_empty_input_has_no_preview():
    assert preview_tool_input("run", None) is None
    assert preview_tool_input("run", {}) is None


def test_marker_without_input_logging():
    assert describe_tool_use("shell", {"command": "rm -rf /tmp/x"}) == "[tool:shell]"


def test_marker_with_input_logging(monkeypatch):
    monkeypatch.setenv("CODEX_LOG_TOOL_INPUT", "1")
    monkeypatch.setenv("CODEX_LOG_TOOL_INPUT_MAX", "5")

    assert describe_tool_use("shell", {"command": "echo hello"}) == "[tool:shell echo ...]"


def test_unparseable_limit_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("CODEX_LOG_TOOL_INPUT_MAX", "lots")

    with caplog.at_level(logging.WARNING, logger="codex.tools"):
        assert preview_limit() == DEFAULT_PREVIEW_LIMIT

    assert "CODEX_LOG_TOOL_INPUT_MAX='lots'" in caplog.text


def test_non_positive_limit_falls_back(monkeypatch):
    monkeypatch.setenv("CODEX_LOG_TOOL_INPUT_MAX", "0")
    assert preview_limit() == DEFAULT_PREVIEW_LIMIT


def test_bad_limit_still_describes(monkeypatch):
    monkeypatch.setenv("CODEX_LOG_TOOL_INPUT", "1")
    monkeypatch.setenv("CODEX_LOG_TOOL_INPUT_MAX", "lots")

    assert describe_tool_use("shell", {"command": ["ls"]}) == "[tool:shell ls]"
