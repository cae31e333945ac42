"""Shared test fixtures for codex-bridge tests."""

import os
import stat
from pathlib import Path

import pytest

from codex_bridge.providers.models import CompletionRequest, Message, Role


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Home directory and credentials
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def home_dir(tmp_path, monkeypatch):
    """Point HOME at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def codex_config(home_dir):
    """Write ~/.codex/config.toml; returns a writer taking the file contents."""

    def write(contents: str = 'api_key = "test"\n') -> Path:
        config_dir = home_dir / ".codex"
        config_dir.mkdir(exist_ok=True)
        path = config_dir / "config.toml"
        path.write_text(contents)
        return path

    return write


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Fake codex binary
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def test_out(tmp_path, monkeypatch):
    """Directory where fake codex scripts leave their observations."""
    out = tmp_path / "out"
    out.mkdir()
    monkeypatch.setenv("CODEX_TEST_OUT", str(out))
    return out


@pytest.fixture
def fake_codex(tmp_path, monkeypatch, test_out):
    """Install a fake ``codex`` script first on PATH; returns an installer."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', os.defpath)}")

    def install(script: str, name: str = "codex") -> Path:
        path = bin_dir / name
        path.write_text(script)
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return install


@pytest.fixture
def empty_path(tmp_path, monkeypatch):
    """A PATH on which nothing can be found."""
    empty = tmp_path / "empty-bin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return empty


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Requests
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def user_request():
    return CompletionRequest(messages=[Message(Role.USER, "hello")])


@pytest.fixture(autouse=True)
def _clean_codex_env(monkeypatch):
    for name in ("CODEX_BINARY_PATH", "CODEX_API_KEY", "CODEX_LOG_TOOL_INPUT", "CODEX_LOG_TOOL_INPUT_MAX"):
        monkeypatch.delenv(name, raising=False)
