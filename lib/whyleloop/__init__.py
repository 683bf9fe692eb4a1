"""Whyleloop deferred deep linking: shared library.

Models, errors, storage, device providers and the HTTP client.
Restore/link orchestration lives in services/whyleloop/.
"""

from lib.whyleloop.errors import (
    LinkCreationError,
    LinkResolutionError,
    ParseError,
    RestoreError,
    ServerError,
    TransportError,
    WhyleloopError,
)
from lib.whyleloop.models import CreatedLink, LinkDetails, RestoredLink, RestoreRequest
from lib.whyleloop.storage import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "CreatedLink",
    "LinkDetails",
    "RestoredLink",
    "RestoreRequest",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "WhyleloopError",
    "TransportError",
    "ServerError",
    "ParseError",
    "RestoreError",
    "LinkCreationError",
    "LinkResolutionError",
]
