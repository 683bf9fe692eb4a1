"""Desktop/server attribute provider (Linux, macOS, Windows)."""

import platform
import uuid
from pathlib import Path
from typing import Optional

from lib.whyleloop.device.base import AttributeProvider, DeviceAttributes, ProviderResult

MACHINE_ID_PATHS = ("/etc/machine-id", "/var/lib/dbus/machine-id")


def read_machine_id() -> Optional[str]:
    """systemd machine id if readable, else the MAC-derived node id."""
    for candidate in MACHINE_ID_PATHS:
        try:
            value = Path(candidate).read_text(encoding="utf-8").strip()
        except (OSError, ValueError):
            continue
        if value:
            return value
    node = uuid.getnode()
    # getnode() sets the multicast bit when it had to invent a random value
    if node >> 40 & 1:
        return None
    return f"{node:012x}"


class HostProvider(AttributeProvider):
    def __init__(self):
        self.platform = platform.system().lower() or "unknown"

    def read(self) -> ProviderResult:
        attributes = DeviceAttributes(
            platform=self.platform,
            install_id=read_machine_id(),
            model=platform.machine() or None,
            os_name=platform.system() or None,
            os_version=platform.release() or None,
        )
        if not attributes.seed():
            return ProviderResult.failure("no host attributes available")
        return ProviderResult.success(attributes)
