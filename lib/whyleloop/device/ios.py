"""iOS attribute provider.

Model and OS version come from platform.ios_ver() (Python 3.13+ on iOS).
identifierForVendor must be supplied by the host app.
"""

import platform
from typing import Optional

from lib.whyleloop.device.base import AttributeProvider, DeviceAttributes, ProviderResult


class IosProvider(AttributeProvider):
    platform = "ios"

    def __init__(self, vendor_id: Optional[str] = None):
        self.vendor_id = vendor_id

    def read(self) -> ProviderResult:
        ios_ver = getattr(platform, "ios_ver", None)
        if ios_ver is None:
            if self.vendor_id:
                return ProviderResult.success(
                    DeviceAttributes(platform=self.platform, install_id=self.vendor_id)
                )
            return ProviderResult.failure("platform.ios_ver() not available")

        info = ios_ver()
        return ProviderResult.success(
            DeviceAttributes(
                platform=self.platform,
                install_id=self.vendor_id,
                model=info.model or None,
                os_name=info.system or None,
                os_version=info.release or None,
            )
        )
