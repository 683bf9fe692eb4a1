"""Restore pending deep links after install.

Identity selection: an account email when the caller has one, otherwise the
anonymous device fingerprint. The server decides which pending links match
and in what order; this client returns them exactly as delivered.
"""

from typing import Optional

from loguru import logger
from pydantic import ValidationError

from lib.whyleloop.api_client import RESTORE_PATH, WhyleloopApiClient
from lib.whyleloop.errors import RESTORE_ERRORS, RestoreParseError
from lib.whyleloop.models import RestoredLink, RestoreRequest
from services.whyleloop.identity import DeviceIdentity


def parse_restored_links(data: dict) -> list[RestoredLink]:
    """Map the restoredLinks array of a success envelope, keeping order."""
    raw_links = data.get("restoredLinks")
    if not isinstance(raw_links, list):
        logger.warning("Whyleloop restore response has no 'restoredLinks' array")
        raise RestoreParseError("Response is missing the 'restoredLinks' array", status_code=200)

    links = []
    for index, raw in enumerate(raw_links):
        if not isinstance(raw, dict):
            logger.warning(f"Whyleloop restoredLinks[{index}] is not an object: {raw!r}")
            raise RestoreParseError(f"restoredLinks[{index}] is not an object", status_code=200)
        try:
            link = RestoredLink.from_wire(raw)
        except ValidationError as e:
            logger.warning(f"Whyleloop restoredLinks[{index}] failed validation: {e}")
            raise RestoreParseError(f"restoredLinks[{index}] is malformed: {e}", status_code=200) from e
        if not link.pending_link_id or not link.link_id:
            logger.warning(f"Whyleloop restoredLinks[{index}] has no pending_link_id or link_id")
            raise RestoreParseError(
                f"restoredLinks[{index}] has no pending_link_id or link_id", status_code=200
            )
        links.append(link)
    return links


class RestorationClient:
    def __init__(self, api: WhyleloopApiClient, identity: DeviceIdentity):
        self.api = api
        self.identity = identity

    async def build_request(self, user_email: Optional[str] = None) -> RestoreRequest:
        if user_email is not None:
            return RestoreRequest(app_id=self.api.app_id, user_email=user_email)
        fingerprint = await self.identity.resolve_async()
        return RestoreRequest(app_id=self.api.app_id, device_fingerprint=fingerprint)

    async def restore(self, user_email: Optional[str] = None) -> list[RestoredLink]:
        """Fetch pending links for this user or device.

        Args:
            user_email: Account email; omit for anonymous users.

        Returns:
            Restored links in server order (often empty).

        Raises:
            RestoreError: transport, server or parse failure
        """
        request = await self.build_request(user_email)
        mode = "anonymous" if request.is_anonymous else "email"

        data = await self.api.post_json(RESTORE_PATH, request.to_wire(), errors=RESTORE_ERRORS)
        links = parse_restored_links(data)

        logger.info(f"Restored {len(links)} pending link(s) ({mode})")
        return links

    async def restore_anonymous(self) -> list[RestoredLink]:
        return await self.restore()
