"""Create shareable links and resolve inbound slugs."""

from typing import Optional
from urllib.parse import urlparse

from loguru import logger
from pydantic import ValidationError

from lib.whyleloop.api_client import CREATE_LINK_PATH, GET_BY_SLUG_PATH, WhyleloopApiClient
from lib.whyleloop.errors import (
    CREATE_ERRORS,
    RESOLVE_ERRORS,
    ErrorFamily,
)
from lib.whyleloop.models import CreatedLink, LinkDetails


def slug_from_url(url: str) -> tuple[str, Optional[str]]:
    """Split an inbound deep-link URL into (slug, hostname).

    The slug is the last non-empty path segment:
        https://go.example.com/l/1734567890-abc123 -> ("1734567890-abc123", "go.example.com")
    """
    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]
    if not segments:
        raise ValueError(f"No slug in URL: {url}")
    return segments[-1], parsed.hostname


def _parse_link(data: dict, model, errors: ErrorFamily):
    raw = data.get("link")
    if not isinstance(raw, dict):
        logger.warning("Whyleloop link response has no 'link' object")
        raise errors.parse("Response is missing the 'link' object", status_code=200)
    try:
        return model.from_wire(raw)
    except ValidationError as e:
        logger.warning(f"Whyleloop 'link' failed validation: {e}")
        raise errors.parse(f"'link' is malformed: {e}", status_code=200) from e


class LinkService:
    def __init__(self, api: WhyleloopApiClient):
        self.api = api

    async def create_link(self, destination: str, metadata: Optional[dict] = None) -> CreatedLink:
        """Register a link that opens `destination` (e.g. "/product/123").

        metadata (UTM parameters, custom data) is left out of the body when
        None or empty.

        Raises:
            LinkCreationError: transport, server or parse failure
        """
        if not destination:
            raise ValueError("destination is required")

        body = {"appId": self.api.app_id, "destination": destination}
        if metadata:
            body["metadata"] = metadata

        data = await self.api.post_json(CREATE_LINK_PATH, body, errors=CREATE_ERRORS)
        link = _parse_link(data, CreatedLink, CREATE_ERRORS)
        logger.info(f"Created link {link.url} -> {link.destination}")
        return link

    async def resolve_slug(self, slug: str, hostname: Optional[str] = None) -> LinkDetails:
        """Look up the destination configured for a slug.

        hostname selects the custom domain when the same slug exists on
        several.

        Raises:
            LinkResolutionError: transport, server or parse failure
        """
        if not slug:
            raise ValueError("slug is required")

        params = {"slug": slug, "appId": self.api.app_id}
        if hostname is not None:
            params["hostname"] = hostname

        data = await self.api.get_json(GET_BY_SLUG_PATH, params, errors=RESOLVE_ERRORS)
        return _parse_link(data, LinkDetails, RESOLVE_ERRORS)

    async def resolve_url(self, url: str) -> LinkDetails:
        """resolve_slug() for a full inbound URL."""
        slug, hostname = slug_from_url(url)
        return await self.resolve_slug(slug, hostname)
