"""Completion providers backed by local CLI assistants."""

from codex_bridge.providers.codex import CodexCliModel, CodexCliProvider
from codex_bridge.providers.ports import LanguageModel, LanguageModelProvider
from codex_bridge.providers.registry import ProviderRegistry, create_provider

__all__ = [
    "CodexCliModel",
    "CodexCliProvider",
    "LanguageModel",
    "LanguageModelProvider",
    "ProviderRegistry",
    "create_provider",
]
