"""HTTP client for the Whyleloop link API.

Every endpoint answers with a JSON envelope:

    {"success": true, ...payload}
    {"success": false, "error": "app not found"}

This module owns the httpx session and turns each exchange into either the
payload dict or one of the errors in lib.whyleloop.errors.

Usage:
    async with WhyleloopApiClient(app_id="my-app") as api:
        data = await api.post_json(RESTORE_PATH, body, errors=RESTORE_ERRORS)
"""

from typing import Any, Optional

import httpx
from loguru import logger

from lib.whyleloop.errors import ErrorFamily

DEFAULT_BASE_URL = "https://whyleloop.app"
DEFAULT_TIMEOUT = 30.0

RESTORE_PATH = "/api/deferred-deep-linking/restore"
CREATE_LINK_PATH = "/api/links/create-sdk"
GET_BY_SLUG_PATH = "/api/links/get-by-slug"

JSON_HEADERS = {"Content-Type": "application/json"}


def _server_message(resp: httpx.Response) -> Optional[str]:
    """Pull the "error" string out of a response body, if there is one."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return None


class WhyleloopApiClient:
    """Async client bound to one app id and base URL.

    Pass http_client to share an existing httpx.AsyncClient; it is then left
    open on close(). Otherwise a client is created lazily and owned here.
    """

    def __init__(
        self,
        app_id: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not app_id:
            raise ValueError("app_id is required")
        self.app_id = app_id
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        self.initialize()
        return self

    async def __aexit__(self, *args):
        await self.close()

    def initialize(self) -> httpx.AsyncClient:
        """Create the HTTP client if needed."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._http_client

    async def close(self):
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def request_json(
        self,
        method: str,
        path: str,
        errors: ErrorFamily,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict[str, Any]:
        """Run one exchange and return the decoded success envelope.

        Raises:
            errors.transport: request failed or body could not be read
            errors.server: non-200, or success is false
            errors.parse: body is not a JSON object with a "success" field
        """
        client = self.initialize()
        url = self.url(path)
        logger.debug(f"{method} {url}")

        try:
            resp = await client.request(
                method,
                url,
                json=json,
                params=params,
                headers=JSON_HEADERS if json is not None else None,
            )
        except httpx.HTTPError as e:
            logger.warning(f"Whyleloop request failed: {method} {path}: {e}")
            raise errors.transport(f"Request failed: {e}") from e

        if resp.status_code != 200:
            message = _server_message(resp) or f"HTTP error: {resp.status_code}"
            logger.warning(f"Whyleloop {path} returned {resp.status_code}: {message}")
            raise errors.server(message, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning(f"Whyleloop {path} returned invalid JSON: {resp.text[:200]}")
            raise errors.parse("Response body is not valid JSON", status_code=200) from e

        if not isinstance(data, dict) or "success" not in data:
            logger.warning(f"Whyleloop {path} returned no 'success' field: {resp.text[:200]}")
            raise errors.parse("Response is missing the 'success' field", status_code=200)

        if data["success"] is not True:
            error = data.get("error")
            message = error if isinstance(error, str) and error else f"HTTP error: {resp.status_code}"
            logger.warning(f"Whyleloop {path} rejected request: {message}")
            raise errors.server(message, status_code=resp.status_code)

        return data

    async def post_json(self, path: str, body: dict, errors: ErrorFamily) -> dict[str, Any]:
        return await self.request_json("POST", path, errors, json=body)

    async def get_json(self, path: str, params: dict, errors: ErrorFamily) -> dict[str, Any]:
        return await self.request_json("GET", path, errors, params=params)
