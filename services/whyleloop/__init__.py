"""Whyleloop deferred deep linking: public interface."""

from services.whyleloop.callbacks import (
    create_link_with_callback,
    resolve_slug_with_callback,
    restore_anonymous_with_callback,
    restore_with_callback,
    with_callback,
)
from services.whyleloop.config import WhyleloopConfig, load_config
from services.whyleloop.identity import STORAGE_KEY, DeviceIdentity
from services.whyleloop.links import LinkService, slug_from_url
from services.whyleloop.restoration import RestorationClient
from services.whyleloop.sdk import WhyleloopSDK

__all__ = [
    "WhyleloopSDK",
    "WhyleloopConfig",
    "load_config",
    "DeviceIdentity",
    "STORAGE_KEY",
    "RestorationClient",
    "LinkService",
    "slug_from_url",
    "with_callback",
    "restore_with_callback",
    "restore_anonymous_with_callback",
    "create_link_with_callback",
    "resolve_slug_with_callback",
]
