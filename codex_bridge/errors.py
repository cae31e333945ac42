"""codex-bridge exception hierarchy.

Everything raised on purpose by this package inherits from CodexBridgeError,
so hosts can catch provider failures without trapping unrelated bugs.
"""

from __future__ import annotations


class CodexBridgeError(Exception):
    """Base exception for all codex-bridge errors."""


class ConfigError(CodexBridgeError):
    """Invalid provider settings."""


class AuthenticateError(CodexBridgeError):
    """Authentication failed for a reason other than missing credentials."""


class CredentialsNotFound(AuthenticateError):
    """No usable api_key in the Codex configuration file."""

    def __init__(self, message: str = "Codex credentials not found") -> None:
        super().__init__(message)


class CompletionError(CodexBridgeError):
    """A single completion call failed."""

    def __init__(self, message: str = "", *, provider: str = "Codex CLI") -> None:
        super().__init__(message)
        self.provider = provider


class NoApiKey(CompletionError):
    """Completion attempted before the provider was authenticated."""

    def __init__(self, *, provider: str = "Codex CLI") -> None:
        super().__init__(f"{provider}: no API key configured", provider=provider)


class InvocationError(CompletionError):
    """The external binary could not be spawned or fed its prompt."""


class StreamReadError(CompletionError):
    """Reading the external binary's output failed mid-stream."""
