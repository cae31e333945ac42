"""Codex CLI provider package."""

from codex_bridge.providers.codex.config import McpServer, ProviderSettings
from codex_bridge.providers.codex.credentials import CredentialStore
from codex_bridge.providers.codex.provider import CodexCliModel, CodexCliProvider, ConfigurationView

__all__ = [
    "CodexCliModel",
    "CodexCliProvider",
    "ConfigurationView",
    "CredentialStore",
    "McpServer",
    "ProviderSettings",
]
