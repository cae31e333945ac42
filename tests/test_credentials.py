"""Tests for the codex credential store."""

import asyncio

import pytest

from codex_bridge.errors import AuthenticateError, CredentialsNotFound
from codex_bridge.providers.codex.credentials import CredentialStore


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_loads_api_key(self, codex_config):
        codex_config('api_key = "test"\n')
        store = CredentialStore()

        await store.authenticate()

        assert store.is_authenticated()
        assert store.api_key == "test"

    @pytest.mark.asyncio
    async def test_missing_file(self, home_dir):
        store = CredentialStore()

        with pytest.raises(CredentialsNotFound):
            await store.authenticate()
        assert not store.is_authenticated()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, codex_config):
        codex_config('model = "o3"\n')
        store = CredentialStore()

        with pytest.raises(CredentialsNotFound):
            await store.authenticate()
        assert not store.is_authenticated()

    @pytest.mark.asyncio
    async def test_malformed_toml_is_generic_error(self, codex_config):
        codex_config("api_key = \n")
        store = CredentialStore()

        with pytest.raises(AuthenticateError) as excinfo:
            await store.authenticate()
        assert not isinstance(excinfo.value, CredentialsNotFound)
        assert excinfo.value.__cause__ is not None
        assert not store.is_authenticated()

    @pytest.mark.asyncio
    async def test_non_string_api_key(self, codex_config):
        codex_config("api_key = 12\n")
        with pytest.raises(AuthenticateError):
            await CredentialStore().authenticate()

    @pytest.mark.asyncio
    async def test_idempotent(self, codex_config):
        path = codex_config('api_key = "first"\n')
        store = CredentialStore()
        await store.authenticate()

        path.write_text('api_key = "second"\n')
        await store.authenticate()

        assert store.api_key == "first"

    @pytest.mark.asyncio
    async def test_explicit_config_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('api_key = "custom"\n')
        store = CredentialStore(config_path=path)

        await store.authenticate()

        assert store.config_path == path
        assert store.api_key == "custom"

    def test_config_path_follows_home(self, home_dir):
        assert CredentialStore().config_path == home_dir / ".codex" / "config.toml"

    @pytest.mark.asyncio
    async def test_concurrent_authenticate(self, codex_config):
        codex_config('api_key = "test"\n')
        store = CredentialStore()
        changes = []
        store.subscribe(lambda: changes.append(store.api_key))

        await asyncio.gather(*(store.authenticate() for _ in range(5)))

        assert store.api_key == "test"
        assert changes == ["test"]


class TestResetAndObservers:
    @pytest.mark.asyncio
    async def test_reset_clears_key(self, codex_config):
        codex_config()
        store = CredentialStore()
        await store.authenticate()

        store.reset()

        assert not store.is_authenticated()
        assert store.api_key is None

    def test_reset_when_empty(self):
        store = CredentialStore()
        store.reset()
        assert not store.is_authenticated()

    @pytest.mark.asyncio
    async def test_observers_notified(self, codex_config):
        codex_config()
        store = CredentialStore()
        seen = []
        store.subscribe(lambda: seen.append(store.is_authenticated()))

        await store.authenticate()
        await store.authenticate()
        store.reset()

        assert seen == [True, False]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, codex_config):
        codex_config()
        store = CredentialStore()
        seen = []
        unsubscribe = store.subscribe(lambda: seen.append("changed"))
        unsubscribe()

        await store.authenticate()

        assert seen == []

    @pytest.mark.asyncio
    async def test_failed_authenticate_does_not_notify(self, home_dir):
        store = CredentialStore()
        seen = []
        store.subscribe(lambda: seen.append("changed"))

        with pytest.raises(CredentialsNotFound):
            await store.authenticate()

        assert seen == []
