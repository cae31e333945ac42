"""Codex command line construction.

Only describes the invocation (argv, extra env and stdio wiring); spawning is
process.py's job.
"""

from __future__ import annotations

import json
import re
import subprocess
from dataclasses import dataclass, field
from typing import Mapping

from codex_bridge.providers.codex.config import McpServer, ProviderSettings

API_KEY_ENV = "CODEX_API_KEY"
SUBCOMMAND = "exec"

_BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class Command:
    argv: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)
    stdin: int = subprocess.PIPE
    stdout: int = subprocess.PIPE
    stderr: int = subprocess.DEVNULL

    @property
    def program(self) -> str:
        return self.argv[0]

    def redacted(self) -> str:
        """argv for logging; env values (the api key) are never included."""
        return " ".join(self.argv)


def toml_string(value: str) -> str:
    # JSON escapes are a subset of TOML basic-string escapes, except DEL.
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def toml_key(key: str) -> str:
    return key if _BARE_KEY.match(key) else toml_string(key)


def toml_array(values: tuple[str, ...]) -> str:
    return "[" + ", ".join(toml_string(v) for v in values) + "]"


def toml_inline_table(values: Mapping[str, str]) -> str:
    return "{" + ", ".join(f"{toml_key(k)} = {toml_string(v)}" for k, v in values.items()) + "}"


def mcp_server_overrides(name: str, server: McpServer) -> list[str]:
    """Return ``--config`` arguments describing one MCP server."""
    prefix = f"mcp_servers.{toml_key(name)}"
    args = ["--config", f"{prefix}.command={toml_string(server.command)}"]
    if server.args:
        args.extend(["--config", f"{prefix}.args={toml_array(server.args)}"])
    if server.env:
        args.extend(["--config", f"{prefix}.env={toml_inline_table(server.env)}"])
    return args


def build_command(model_name: str, settings: ProviderSettings, api_key: str) -> Command:
    """Build the codex command line for one completion."""
    argv = [settings.binary_path, SUBCOMMAND, "--model", model_name]
    for name, server in settings.mcp_servers.items():
        argv.extend(mcp_server_overrides(name, server))
    return Command(argv=tuple(argv), env={API_KEY_ENV: api_key})
