"""Ports (interfaces) for provider implementations.

Hosts (registries, CLIs, editors) should depend on these contracts rather
than on the concrete Codex classes.
"""

from __future__ import annotations

from typing import AsyncIterator, Callable, Protocol, runtime_checkable

from codex_bridge.providers.models import CompletionEvent, CompletionRequest, ToolChoice


@runtime_checkable
class LanguageModel(Protocol):
    """A streaming completion model."""

    id: str
    name: str
    provider_id: str
    provider_name: str

    @property
    def telemetry_id(self) -> str:
        ...

    def supports_images(self) -> bool:
        ...

    def supports_tools(self) -> bool:
        ...

    def supports_tool_choice(self, choice: ToolChoice) -> bool:
        ...

    def max_token_count(self) -> int:
        ...

    async def count_tokens(self, request: CompletionRequest) -> int:
        ...

    async def stream_completion(self, request: CompletionRequest) -> AsyncIterator[CompletionEvent]:
        ...


@runtime_checkable
class LanguageModelProvider(Protocol):
    """A named source of models with its own authentication state."""

    id: str
    name: str
    icon: str

    def is_authenticated(self) -> bool:
        ...

    async def authenticate(self) -> None:
        ...

    def reset_credentials(self) -> None:
        ...

    def default_model(self) -> LanguageModel | None:
        ...

    def default_fast_model(self) -> LanguageModel | None:
        ...

    def provided_models(self) -> list[LanguageModel]:
        ...

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        ...
