"""Codex CLI language model provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncIterator, Callable

from codex_bridge.errors import NoApiKey
from codex_bridge.providers.codex.command import build_command
from codex_bridge.providers.codex.config import ProviderSettings
from codex_bridge.providers.codex.credentials import CredentialStore
from codex_bridge.providers.codex.events import parse_line
from codex_bridge.providers.codex.process import serialize_prompt, spawn_and_feed
from codex_bridge.providers.models import CompletionEvent, CompletionRequest, ToolChoice
from codex_bridge.providers.pipeline import iter_completion_events

log = logging.getLogger("codex")

PROVIDER_ID = "codex-cli"
PROVIDER_NAME = "Codex CLI"
PROVIDER_ICON = "ai"
CODEX_CLI_SITE = "https://github.com/openai/codex"


@dataclass(frozen=True)
class ConfigurationView:
    """What a host needs to render the provider's setup instructions."""

    message: str
    instructions: tuple[str, ...]
    site_url: str
    authenticated: bool


class CodexCliModel:
    """One model served by the codex binary."""

    def __init__(
        self,
        model: str,
        credentials: CredentialStore,
        settings: Callable[[], ProviderSettings],
        *,
        tools: bool = True,
    ):
        self.id = PROVIDER_ID if model == "default" else f"{PROVIDER_ID}/{model}"
        self.name = PROVIDER_NAME if model == "default" else f"{PROVIDER_NAME} ({model})"
        self.provider_id = PROVIDER_ID
        self.provider_name = PROVIDER_NAME
        self.model = model
        self._credentials = credentials
        self._settings = settings
        self._tools = tools

    def __repr__(self) -> str:
        return f"CodexCliModel({self.model!r})"

    @property
    def telemetry_id(self) -> str:
        return f"codex-cli/{self.model}"

    def supports_images(self) -> bool:
        return False

    def supports_tools(self) -> bool:
        return self._tools

    def supports_tool_choice(self, choice: ToolChoice) -> bool:
        return self._tools and ToolChoice(choice) in (ToolChoice.AUTO, ToolChoice.NONE)

    def max_token_count(self) -> int:
        # codex manages its own context budget.
        return 0

    async def count_tokens(self, request: CompletionRequest) -> int:
        return 0

    async def stream_completion(self, request: CompletionRequest) -> AsyncIterator[CompletionEvent]:
        """Start codex for ``request`` and return its event stream.

        Raises NoApiKey before anything is spawned when unauthenticated, and
        InvocationError when the binary cannot be started or fed.
        """
        api_key = self._credentials.api_key
        if api_key is None:
            raise NoApiKey(provider=PROVIDER_NAME)

        settings = self._settings()
        command = build_command(self.model, settings, api_key)
        prompt = serialize_prompt(request)

        log.info(f"Codex [{self.model}]: {prompt[:50]!r}...")
        child = await spawn_and_feed(command, prompt)
        return iter_completion_events(child, parse_line)


class CodexCliProvider:
    """Registry-facing entry point for the codex binary."""

    id = PROVIDER_ID
    name = PROVIDER_NAME
    icon = PROVIDER_ICON

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        credentials: CredentialStore | None = None,
    ):
        self._settings = settings or ProviderSettings.from_env()
        self.credentials = credentials or CredentialStore()

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    def update_settings(self, settings: ProviderSettings) -> None:
        """Replace the settings; calls already running keep their snapshot."""
        self._settings = settings

    def _create_model(self, model: str) -> CodexCliModel:
        return CodexCliModel(model, self.credentials, lambda: self._settings)

    def is_authenticated(self) -> bool:
        return self.credentials.is_authenticated()

    async def authenticate(self) -> None:
        await self.credentials.authenticate()

    def reset_credentials(self) -> None:
        self.credentials.reset()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self.credentials.subscribe(callback)

    def default_model(self) -> CodexCliModel:
        return self._create_model(self._settings.available_models[0])

    def default_fast_model(self) -> CodexCliModel:
        return self.default_model()

    def provided_models(self) -> list[CodexCliModel]:
        return [self._create_model(m) for m in self._settings.available_models]

    def configuration_view(self) -> ConfigurationView:
        path = self.credentials.config_path
        return ConfigurationView(
            message=f"Codex CLI uses `{path}` for authentication.",
            instructions=(
                f"Install the `{self._settings.binary_path}` binary and ensure it is available on your PATH.",
                f"Authenticate by running `codex auth login` or by adding `api_key` to `{path}`.",
            ),
            site_url=CODEX_CLI_SITE,
            authenticated=self.is_authenticated(),
        )
