"""Expose the local codex CLI as a streaming completion provider."""

from codex_bridge.errors import (
    AuthenticateError,
    CodexBridgeError,
    CompletionError,
    ConfigError,
    CredentialsNotFound,
    InvocationError,
    NoApiKey,
    StreamReadError,
)
from codex_bridge.providers.codex import (
    CodexCliModel,
    CodexCliProvider,
    CredentialStore,
    McpServer,
    ProviderSettings,
)
from codex_bridge.providers.models import (
    CompletionEvent,
    CompletionRequest,
    Message,
    Role,
    Stop,
    StopReason,
    Text,
    ToolChoice,
    ToolUse,
)
from codex_bridge.providers.registry import ProviderRegistry, create_provider

__all__ = [
    "AuthenticateError",
    "CodexBridgeError",
    "CodexCliModel",
    "CodexCliProvider",
    "CompletionError",
    "CompletionEvent",
    "CompletionRequest",
    "ConfigError",
    "CredentialStore",
    "CredentialsNotFound",
    "InvocationError",
    "McpServer",
    "Message",
    "NoApiKey",
    "ProviderRegistry",
    "ProviderSettings",
    "Role",
    "Stop",
    "StopReason",
    "StreamReadError",
    "Text",
    "ToolChoice",
    "ToolUse",
    "create_provider",
]
