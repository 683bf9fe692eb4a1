"""Android attribute provider.

Reads build properties through the `getprop` tool. The install-scoped
identifier (Settings.Secure.ANDROID_ID) is not reachable from a plain Python
process, so the host app passes it in when it has one.
"""

import subprocess
from typing import Optional

from lib.whyleloop.device.base import AttributeProvider, DeviceAttributes, ProviderResult

GETPROP_TIMEOUT = 2.0


def getprop(name: str) -> Optional[str]:
    """Return an Android system property, or None if unavailable."""
    try:
        proc = subprocess.run(
            ["getprop", name],
            capture_output=True,
            text=True,
            timeout=GETPROP_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    value = proc.stdout.strip()
    return value or None


class AndroidProvider(AttributeProvider):
    platform = "android"

    def __init__(self, install_id: Optional[str] = None):
        self.install_id = install_id

    def read(self) -> ProviderResult:
        model = getprop("ro.product.model")
        manufacturer = getprop("ro.product.manufacturer")
        release = getprop("ro.build.version.release")

        if not any([self.install_id, model, manufacturer, release]):
            return ProviderResult.failure("getprop returned no build properties")

        return ProviderResult.success(
            DeviceAttributes(
                platform=self.platform,
                install_id=self.install_id,
                model=model,
                manufacturer=manufacturer,
                os_name="Android",
                os_version=release,
            )
        )
