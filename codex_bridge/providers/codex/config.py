"""Codex provider configuration.

Settings live at the adapter boundary: the host hands over a plain mapping
(or nothing, in which case env defaults apply) and every call works from an
immutable snapshot.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from codex_bridge.errors import ConfigError

DEFAULT_BINARY = "codex"
DEFAULT_MODEL = "default"


@dataclass(frozen=True)
class McpServer:
    """An auxiliary MCP server forwarded to the codex binary."""

    command: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "McpServer":
        if not isinstance(data, Mapping):
            raise ConfigError(f"mcp_servers.{name} must be a table")
        command = data.get("command")
        if not isinstance(command, str) or not command:
            raise ConfigError(f"mcp_servers.{name}.command must be a non-empty string")
        args = data.get("args") or []
        if not isinstance(args, (list, tuple)) or not all(isinstance(a, str) for a in args):
            raise ConfigError(f"mcp_servers.{name}.args must be a list of strings")
        env = data.get("env") or {}
        if not isinstance(env, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in env.items()
        ):
            raise ConfigError(f"mcp_servers.{name}.env must map strings to strings")
        return cls(command=command, args=tuple(args), env=dict(env))


@dataclass(frozen=True)
class ProviderSettings:
    binary_path: str = DEFAULT_BINARY
    mcp_servers: Mapping[str, McpServer] = field(default_factory=dict)
    available_models: tuple[str, ...] = (DEFAULT_MODEL,)

    def __post_init__(self) -> None:
        if not self.binary_path:
            raise ConfigError("binary_path must not be empty")
        if not self.available_models:
            raise ConfigError("available_models must list at least one model")
        object.__setattr__(self, "mcp_servers", MappingProxyType(dict(self.mcp_servers)))
        object.__setattr__(self, "available_models", tuple(self.available_models))

    @classmethod
    def from_env(cls) -> "ProviderSettings":
        return cls(binary_path=os.getenv("CODEX_BINARY_PATH") or DEFAULT_BINARY)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ProviderSettings":
        """Build settings from the host's plain mapping; missing keys use env defaults."""
        if not data:
            return cls.from_env()
        if not isinstance(data, Mapping):
            raise ConfigError("settings must be a mapping")

        binary_path = data.get("binary_path") or os.getenv("CODEX_BINARY_PATH") or DEFAULT_BINARY
        if not isinstance(binary_path, str):
            raise ConfigError("binary_path must be a string")

        raw_servers = data.get("mcp_servers") or {}
        if not isinstance(raw_servers, Mapping):
            raise ConfigError("mcp_servers must be a table")
        servers = {name: McpServer.from_dict(name, entry) for name, entry in raw_servers.items()}

        models = data.get("available_models") or [DEFAULT_MODEL]
        if isinstance(models, str) or not all(isinstance(m, str) and m for m in models):
            raise ConfigError("available_models must be a list of model names")

        return cls(binary_path=binary_path, mcp_servers=servers, available_models=tuple(models))
