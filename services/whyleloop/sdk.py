"""SDK facade: one object wiring storage, identity, HTTP client and services.

Usage:
    async with WhyleloopSDK(app_id="my-app") as sdk:
        for link in await sdk.restore_anonymous():
            print(link.destination_url, link.utm_source)
"""

from typing import Optional

import httpx

from lib.whyleloop.api_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, WhyleloopApiClient
from lib.whyleloop.device import AttributeProvider
from lib.whyleloop.models import CreatedLink, LinkDetails, RestoredLink
from lib.whyleloop.storage import JsonFileStore, KeyValueStore, MemoryStore
from services.whyleloop.config import WhyleloopConfig
from services.whyleloop.identity import DeviceIdentity
from services.whyleloop.links import LinkService
from services.whyleloop.restoration import RestorationClient


class WhyleloopSDK:
    """Deferred deep linking client.

    Args:
        app_id: App id from the Whyleloop dashboard
        base_url: API host (default https://whyleloop.app)
        storage: Where the device fingerprint is cached (default: in memory)
        provider: Device attribute source (default: detected platform)
        timeout: HTTP timeout in seconds
        http_client: Optional shared httpx.AsyncClient (not closed by the SDK)
    """

    def __init__(
        self,
        app_id: str,
        base_url: str = DEFAULT_BASE_URL,
        storage: Optional[KeyValueStore] = None,
        provider: Optional[AttributeProvider] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api = WhyleloopApiClient(
            app_id=app_id, base_url=base_url, timeout=timeout, http_client=http_client
        )
        self.identity = DeviceIdentity(storage if storage is not None else MemoryStore(), provider)
        self.restoration = RestorationClient(self.api, self.identity)
        self.links = LinkService(self.api)

    @classmethod
    def from_config(
        cls,
        config: WhyleloopConfig,
        provider: Optional[AttributeProvider] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "WhyleloopSDK":
        return cls(
            app_id=config.app_id,
            base_url=config.base_url,
            storage=JsonFileStore(config.storage_path),
            provider=provider,
            timeout=config.timeout,
            http_client=http_client,
        )

    @property
    def app_id(self) -> str:
        return self.api.app_id

    @property
    def base_url(self) -> str:
        return self.api.base_url

    async def __aenter__(self):
        self.api.initialize()
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self):
        await self.api.close()

    def device_fingerprint(self) -> str:
        return self.identity.resolve()

    async def restore(self, user_email: Optional[str] = None) -> list[RestoredLink]:
        return await self.restoration.restore(user_email)

    async def restore_anonymous(self) -> list[RestoredLink]:
        return await self.restoration.restore_anonymous()

    async def create_link(self, destination: str, metadata: Optional[dict] = None) -> CreatedLink:
        return await self.links.create_link(destination, metadata)

    async def resolve_slug(self, slug: str, hostname: Optional[str] = None) -> LinkDetails:
        return await self.links.resolve_slug(slug, hostname)

    async def resolve_url(self, url: str) -> LinkDetails:
        return await self.links.resolve_url(url)
