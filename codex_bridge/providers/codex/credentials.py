"""Codex credential state.

The store starts empty, is filled from ``~/.codex/config.toml`` by
``authenticate()`` and emptied by ``reset()``. Reads and writes of the secret
happen under one lock so a concurrent reader never sees a half-applied change.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import tomllib
from pathlib import Path
from typing import Callable

from codex_bridge.errors import AuthenticateError, CredentialsNotFound

log = logging.getLogger("codex.credentials")

CONFIG_DIR = ".codex"
CONFIG_FILE = "config.toml"


def default_config_path() -> Path:
    return Path.home() / CONFIG_DIR / CONFIG_FILE


class CredentialStore:
    """Holds the optional api_key for one provider instance."""

    def __init__(self, config_path: Path | None = None):
        self._config_path = config_path
        self._api_key: str | None = None
        self._lock = threading.Lock()
        self._observers: list[Callable[[], None]] = []

    @property
    def config_path(self) -> Path:
        # Resolved lazily so HOME changes after construction are honoured.
        return self._config_path or default_config_path()

    @property
    def api_key(self) -> str | None:
        with self._lock:
            return self._api_key

    def is_authenticated(self) -> bool:
        return self.api_key is not None

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a change observer; returns a function that unregisters it."""
        with self._lock:
            self._observers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            observers = list(self._observers)
        for callback in observers:
            callback()

    async def authenticate(self) -> None:
        if self.is_authenticated():
            return

        path = self.config_path
        try:
            contents = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            log.info(f"No Codex config at {path}")
            raise CredentialsNotFound(f"{path} does not exist") from None
        except (OSError, UnicodeDecodeError) as e:
            raise AuthenticateError(f"Failed to read {path}: {e}") from e

        try:
            config = tomllib.loads(contents)
        except tomllib.TOMLDecodeError as e:
            raise AuthenticateError(f"Failed to parse {path}: {e}") from e

        api_key = config.get("api_key")
        if api_key is None:
            raise CredentialsNotFound(f"{path} has no api_key")
        if not isinstance(api_key, str):
            raise AuthenticateError(f"{path}: api_key must be a string")

        # Concurrent callers may all get here; only the first one stores.
        with self._lock:
            stored = self._api_key is None
            if stored:
                self._api_key = api_key
        if stored:
            log.info("Codex credentials loaded")
            self._notify()

    def reset(self) -> None:
        with self._lock:
            self._api_key = None
        self._notify()
