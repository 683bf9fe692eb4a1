"""Pytest configuration and shared fixtures."""

import os

import pytest

from lib.whyleloop.device import DeviceAttributes, StaticProvider
from lib.whyleloop.storage import MemoryStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "online: mark test as online test (hits the real Whyleloop API)")


def pytest_collection_modifyitems(config, items):
    """Skip online tests unless WHYLELOOP_ONLINE_TESTS=1."""
    if os.getenv("WHYLELOOP_ONLINE_TESTS") == "1":
        return
    skip_online = pytest.mark.skip(reason="set WHYLELOOP_ONLINE_TESTS=1 to run")
    for item in items:
        if "online" in item.keywords:
            item.add_marker(skip_online)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def android_attributes():
    return DeviceAttributes(
        platform="android",
        install_id="a1b2c3d4e5f60718",
        model="Pixel 8",
        manufacturer="Google",
        os_name="Android",
        os_version="14",
    )


@pytest.fixture
def android_provider(android_attributes):
    return StaticProvider(android_attributes)
