"""Device attribute provider registry."""

import os
import sys
from typing import Optional

from lib.whyleloop.device.android import AndroidProvider
from lib.whyleloop.device.base import (
    AttributeProvider,
    DeviceAttributes,
    ProviderResult,
)
from lib.whyleloop.device.host import HostProvider
from lib.whyleloop.device.ios import IosProvider
from lib.whyleloop.device.static import StaticProvider

PROVIDERS = {
    "android": AndroidProvider,
    "ios": IosProvider,
}


def detect_platform() -> str:
    """"android", "ios", or "host"."""
    if sys.platform in ("android", "ios"):
        return sys.platform
    # Python builds on Android before 3.13 report "linux"
    if "ANDROID_ROOT" in os.environ and "ANDROID_DATA" in os.environ:
        return "android"
    return "host"


def get_provider(platform: Optional[str] = None, install_id: Optional[str] = None) -> AttributeProvider:
    """Pick the provider for a platform (auto-detected when not given)."""
    provider_cls = PROVIDERS.get(platform or detect_platform())
    if provider_cls is None:
        return HostProvider()
    return provider_cls(install_id)


__all__ = [
    "AttributeProvider",
    "DeviceAttributes",
    "ProviderResult",
    "AndroidProvider",
    "IosProvider",
    "HostProvider",
    "StaticProvider",
    "PROVIDERS",
    "detect_platform",
    "get_provider",
]
