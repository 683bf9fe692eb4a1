"""Tests for SDK wiring."""

from pathlib import Path
from tempfile import TemporaryDirectory

import httpx
import pytest

from lib.whyleloop.device import StaticProvider
from lib.whyleloop.storage import JsonFileStore, MemoryStore
from services.whyleloop.config import WhyleloopConfig
from services.whyleloop.identity import STORAGE_KEY
from services.whyleloop.sdk import WhyleloopSDK


class TestWhyleloopSDK:
    def test_defaults(self):
        sdk = WhyleloopSDK(app_id="app-1")
        assert sdk.app_id == "app-1"
        assert sdk.base_url == "https://whyleloop.app"
        assert isinstance(sdk.identity.storage, MemoryStore)

    def test_requires_app_id(self):
        with pytest.raises(ValueError):
            WhyleloopSDK(app_id="")

    def test_from_config_uses_file_store(self, android_provider):
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "store.json"
            config = WhyleloopConfig(app_id="app-1", storage_path=str(path))

            sdk = WhyleloopSDK.from_config(config, provider=android_provider)
            token = sdk.device_fingerprint()

            assert isinstance(sdk.identity.storage, JsonFileStore)
            assert JsonFileStore(path).get(STORAGE_KEY) == token
            # A new SDK on the same store sees the same identity
            assert WhyleloopSDK.from_config(config, provider=StaticProvider()).device_fingerprint() == token

    @pytest.mark.asyncio
    async def test_context_manager_closes_owned_client(self):
        async with WhyleloopSDK(app_id="app-1") as sdk:
            client = sdk.api.initialize()
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_shared_client_left_open(self):
        shared = httpx.AsyncClient()
        async with WhyleloopSDK(app_id="app-1", http_client=shared):
            pass
        assert not shared.is_closed
        await shared.aclose()
