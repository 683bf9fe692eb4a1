"""Callback-style wrappers over the async operations.

Each wrapper awaits the operation and then calls callback(result, error):
  success -> callback(result, None)
  failure -> callback(default, error)

The default is a structurally valid empty value ([] or an empty model), so
callbacks never need a None check on the first argument. Errors are passed
through as raised.
"""

import inspect
from typing import Any, Awaitable, Callable, Optional

from lib.whyleloop.errors import WhyleloopError
from lib.whyleloop.models import CreatedLink, LinkDetails

Callback = Callable[[Any, Optional[WhyleloopError]], Any]


async def with_callback(
    operation: Callable[[], Awaitable[Any]],
    default: Callable[[], Any],
    callback: Callback,
) -> None:
    """Run operation() and report the outcome to callback. Sync or async callbacks."""
    try:
        result = await operation()
    except WhyleloopError as e:
        outcome = callback(default(), e)
    else:
        outcome = callback(result, None)

    if inspect.isawaitable(outcome):
        await outcome


async def restore_with_callback(sdk, callback: Callback, user_email: Optional[str] = None) -> None:
    await with_callback(lambda: sdk.restore(user_email), list, callback)


async def restore_anonymous_with_callback(sdk, callback: Callback) -> None:
    await with_callback(sdk.restore_anonymous, list, callback)


async def create_link_with_callback(
    sdk,
    callback: Callback,
    destination: str,
    metadata: Optional[dict] = None,
) -> None:
    await with_callback(
        lambda: sdk.create_link(destination, metadata),
        lambda: CreatedLink.empty(destination, metadata),
        callback,
    )


async def resolve_slug_with_callback(
    sdk,
    callback: Callback,
    slug: str,
    hostname: Optional[str] = None,
) -> None:
    await with_callback(lambda: sdk.resolve_slug(slug, hostname), LinkDetails, callback)
