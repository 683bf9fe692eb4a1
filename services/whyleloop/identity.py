"""Anonymous device identity.

The fingerprint is derived once from device attributes, cached in local
storage and reused on every later call. resolve() never raises: restore
calls for anonymous users depend on it.
"""

import asyncio
import hashlib
import time
from typing import Callable, Optional

from loguru import logger

from lib.whyleloop.device import AttributeProvider, get_provider
from lib.whyleloop.storage import KeyValueStore

STORAGE_KEY = "whyleloop_device_fingerprint"

# Bump when the derivation changes; old cached tokens stay valid.
FINGERPRINT_VERSION = "v1"
FINGERPRINT_HEX_CHARS = 32


def hash_seed(seed: str) -> str:
    """Fixed-width, runtime-independent token for a seed string."""
    digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()
    return f"{FINGERPRINT_VERSION}-{digest[:FINGERPRINT_HEX_CHARS]}"


def _now_millis() -> int:
    return int(time.time() * 1000)


class DeviceIdentity:
    """Resolve-or-generate the device fingerprint.

    No locking: two concurrent first-time resolves may both generate and
    write; the last write wins.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        provider: Optional[AttributeProvider] = None,
        clock: Callable[[], int] = _now_millis,
    ):
        self.storage = storage
        self.provider = provider or get_provider()
        self.clock = clock

    def cached(self) -> Optional[str]:
        try:
            value = self.storage.get(STORAGE_KEY)
        except OSError as e:
            logger.warning(f"Could not read cached device fingerprint: {e}")
            return None
        return value or None

    def generate(self) -> str:
        """Derive a fresh fingerprint without touching storage."""
        result = self.provider.read()
        seed = result.attributes.seed() if result.ok else ""

        if not seed:
            # Last resort: still unique per install, just not reproducible
            logger.debug(f"Device attributes unavailable ({result.error}), seeding from clock")
            seed = str(self.clock())

        return hash_seed(seed)

    def resolve(self) -> str:
        fingerprint = self.cached()
        if fingerprint:
            return fingerprint

        fingerprint = self.generate()
        try:
            self.storage.set(STORAGE_KEY, fingerprint)
        except OSError as e:
            logger.warning(f"Could not persist device fingerprint: {e}")
        else:
            logger.debug(f"Generated device fingerprint {fingerprint}")

        return fingerprint

    async def resolve_async(self) -> str:
        """resolve() off the event loop; providers may shell out and stores hit disk."""
        return await asyncio.to_thread(self.resolve)
