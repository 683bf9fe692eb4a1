"""Tests for link creation and slug resolution."""

import json
from unittest.mock import patch

import httpx
import pytest

from lib.whyleloop.errors import (
    LinkCreationError,
    LinkCreationServerError,
    LinkResolutionError,
    LinkResolutionParseError,
    LinkResolutionServerError,
    TransportError,
)
from lib.whyleloop.storage import MemoryStore
from services.whyleloop.links import slug_from_url
from services.whyleloop.sdk import WhyleloopSDK

CREATED = {
    "id": "c1",
    "slug": "1734567890-abc123",
    "url": "https://whyleloop.app/1734567890-abc123",
    "destination": "/product/123",
    "metadata": {"utm_source": "share"},
}

DETAILS = {
    "id": "d1",
    "slug": "1734567890-abc123",
    "destination_web_url": "https://shop.example.com/product/123",
    "destination_path": "/product/123",
    "destination": "/product/123?ref=home",
    "parameters": {"ref": "home"},
    "metadata": {"utm_campaign": "launch"},
}


def _sdk(handler, base_url="https://whyleloop.app") -> WhyleloopSDK:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WhyleloopSDK(app_id="app-1", base_url=base_url, storage=MemoryStore(), http_client=client)


def _recorder(status=200, payload=None):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json=payload)

    return handler, requests


# --- create_link ---


class TestCreateLink:
    @pytest.mark.asyncio
    async def test_without_metadata_omits_field(self):
        handler, requests = _recorder(payload={"success": True, "link": CREATED})
        sdk = _sdk(handler)

        await sdk.create_link("/p/1")

        body = json.loads(requests[0].content)
        assert body == {"appId": "app-1", "destination": "/p/1"}
        assert "metadata" not in body

    @pytest.mark.asyncio
    async def test_empty_metadata_omitted(self):
        handler, requests = _recorder(payload={"success": True, "link": CREATED})
        sdk = _sdk(handler)

        await sdk.create_link("/p/1", metadata={})

        assert "metadata" not in json.loads(requests[0].content)

    @pytest.mark.asyncio
    async def test_with_metadata(self):
        handler, requests = _recorder(payload={"success": True, "link": CREATED})
        sdk = _sdk(handler)

        link = await sdk.create_link("/product/123", metadata={"utm_source": "share"})

        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/links/create-sdk"
        assert json.loads(request.content)["metadata"] == {"utm_source": "share"}
        assert link.slug == "1734567890-abc123"
        assert link.utm_source == "share"

    @pytest.mark.asyncio
    async def test_server_error_message(self):
        handler, _ = _recorder(status=400, payload={"success": False, "error": "destination is invalid"})
        sdk = _sdk(handler)

        with pytest.raises(LinkCreationServerError) as exc:
            await sdk.create_link("/p/1")

        assert exc.value.message == "destination is invalid"

    @pytest.mark.asyncio
    async def test_missing_link_object(self):
        handler, _ = _recorder(payload={"success": True})
        sdk = _sdk(handler)

        with pytest.raises(LinkCreationError):
            await sdk.create_link("/p/1")

    @pytest.mark.asyncio
    async def test_missing_link_object_is_logged(self):
        handler, _ = _recorder(payload={"success": True})
        sdk = _sdk(handler)

        with patch("services.whyleloop.links.logger") as log:
            with pytest.raises(LinkCreationError):
                await sdk.create_link("/p/1")

        log.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        sdk = _sdk(handler)

        with pytest.raises(TransportError) as exc:
            await sdk.create_link("/p/1")

        assert isinstance(exc.value, LinkCreationError)

    @pytest.mark.asyncio
    async def test_empty_destination(self):
        handler, requests = _recorder()
        with pytest.raises(ValueError):
            await _sdk(handler).create_link("")
        assert requests == []


# --- resolve_slug ---


class TestResolveSlug:
    @pytest.mark.asyncio
    async def test_query_params(self):
        handler, requests = _recorder(payload={"success": True, "link": DETAILS})
        sdk = _sdk(handler)

        details = await sdk.resolve_slug("1734567890-abc123")

        request = requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/links/get-by-slug"
        assert dict(request.url.params) == {"slug": "1734567890-abc123", "appId": "app-1"}
        assert details.destination_path == "/product/123"
        assert details.parameters == {"ref": "home"}
        assert details.utm_campaign == "launch"

    @pytest.mark.asyncio
    async def test_hostname(self):
        handler, requests = _recorder(payload={"success": True, "link": DETAILS})
        sdk = _sdk(handler)

        await sdk.resolve_slug("abc", hostname="go.example.com")

        assert requests[0].url.params["hostname"] == "go.example.com"

    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        handler, requests = _recorder(payload={"success": True, "link": DETAILS})
        sdk = _sdk(handler, base_url="https://staging.whyleloop.app/")

        await sdk.resolve_slug("abc")

        assert requests[0].url.host == "staging.whyleloop.app"

    @pytest.mark.asyncio
    async def test_not_found(self):
        handler, _ = _recorder(status=404, payload={"success": False, "error": "Link not found"})
        sdk = _sdk(handler)

        with pytest.raises(LinkResolutionServerError) as exc:
            await sdk.resolve_slug("missing")

        assert exc.value.message == "Link not found"
        assert exc.value.status_code == 404

    @pytest.mark.asyncio
    async def test_link_not_an_object(self):
        handler, _ = _recorder(payload={"success": True, "link": "abc"})
        sdk = _sdk(handler)

        with pytest.raises(LinkResolutionParseError):
            await sdk.resolve_slug("abc")

    @pytest.mark.asyncio
    async def test_resolve_url(self):
        handler, requests = _recorder(payload={"success": True, "link": DETAILS})
        sdk = _sdk(handler)

        await sdk.resolve_url("https://go.example.com/1734567890-abc123?utm_source=x")

        params = requests[0].url.params
        assert params["slug"] == "1734567890-abc123"
        assert params["hostname"] == "go.example.com"

    @pytest.mark.asyncio
    async def test_error_family(self):
        handler, _ = _recorder(status=500, payload=None)
        sdk = _sdk(handler)

        with pytest.raises(LinkResolutionError) as exc:
            await sdk.resolve_slug("abc")

        assert exc.value.message == "HTTP error: 500"


class TestSlugFromUrl:
    def test_plain(self):
        assert slug_from_url("https://whyleloop.app/abc123") == ("abc123", "whyleloop.app")

    def test_nested_path_and_trailing_slash(self):
        assert slug_from_url("https://go.example.com/l/abc123/") == ("abc123", "go.example.com")

    def test_no_path(self):
        with pytest.raises(ValueError):
            slug_from_url("https://go.example.com/")
