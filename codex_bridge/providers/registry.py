"""Provider registry.

This provides a single place to map a provider name to its concrete
implementation, and a minimal registry hosts can hold providers in. Callers
should depend on the `LanguageModelProvider` port.
"""

from __future__ import annotations

from typing import Any

from codex_bridge.providers.ports import LanguageModel, LanguageModelProvider


def create_provider(engine: str, **kwargs: Any) -> LanguageModelProvider:
    engine = (engine or "").strip().lower()

    if engine in {"codex", "codex-cli"}:
        from codex_bridge.providers.codex.provider import CodexCliProvider

        unknown = set(kwargs) - {"settings", "credentials"}
        if unknown:
            # Keep the surface area explicit; pass-through kwargs make it too easy
            # to accidentally couple callers to a specific provider.
            raise TypeError(f"CodexCliProvider does not accept extra args: {sorted(unknown)}")
        provider = CodexCliProvider(**kwargs)
        if not isinstance(provider, LanguageModelProvider):
            raise TypeError("Codex provider does not satisfy LanguageModelProvider port")
        return provider

    raise ValueError(f"Unknown engine: {engine}")


class ProviderRegistry:
    """Providers keyed by their unique id, in registration order."""

    def __init__(self) -> None:
        self._providers: dict[str, LanguageModelProvider] = {}

    def register_provider(self, provider: LanguageModelProvider) -> None:
        if provider.id in self._providers:
            raise ValueError(f"Provider already registered: {provider.id}")
        self._providers[provider.id] = provider

    def unregister_provider(self, provider_id: str) -> None:
        self._providers.pop(provider_id, None)

    def providers(self) -> list[LanguageModelProvider]:
        return list(self._providers.values())

    def provider(self, provider_id: str) -> LanguageModelProvider | None:
        return self._providers.get(provider_id)

    def available_models(self) -> list[LanguageModel]:
        """Models of every authenticated provider."""
        models: list[LanguageModel] = []
        for provider in self._providers.values():
            if provider.is_authenticated():
                models.extend(provider.provided_models())
        return models
