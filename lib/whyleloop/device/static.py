"""Provider for attributes handed over by the embedding app.

Use when a native bridge (Flutter, Kivy, BeeWare) already has the device
info, or in tests.
"""

from typing import Optional

from lib.whyleloop.device.base import AttributeProvider, DeviceAttributes, ProviderResult


class StaticProvider(AttributeProvider):
    def __init__(self, attributes: Optional[DeviceAttributes] = None, error: Optional[str] = None):
        self.attributes = attributes
        self.error = error
        self.platform = attributes.platform if attributes else "unknown"

    def read(self) -> ProviderResult:
        if self.attributes is None:
            return ProviderResult.failure(self.error or "no attributes supplied")
        return ProviderResult.success(self.attributes)
