"""Error taxonomy for Whyleloop API calls.

Two axes:
  - kind: TransportError, ServerError, ParseError (what went wrong)
  - operation: RestoreError, LinkCreationError, LinkResolutionError (which call)

Concrete errors inherit from both, so callers can catch either way:

    try:
        links = await sdk.restore()
    except ServerError as e:       # any server rejection
        ...
    except RestoreError as e:      # anything else that broke restore
        ...
"""

from dataclasses import dataclass
from typing import Optional


class WhyleloopError(Exception):
    """Base class for every error raised by the Whyleloop client."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# --- Kinds ---


class TransportError(WhyleloopError):
    """Request could not be sent or the response could not be read."""


class ServerError(WhyleloopError):
    """Non-200 status, or a 200 body with success=false."""


class ParseError(WhyleloopError):
    """Body is not JSON or is missing required top-level fields."""


# --- Operations ---


class RestoreError(WhyleloopError):
    """Restoring pending links failed."""


class LinkCreationError(WhyleloopError):
    """Creating a link failed."""


class LinkResolutionError(WhyleloopError):
    """Resolving a slug failed."""


class RestoreTransportError(RestoreError, TransportError):
    pass


class RestoreServerError(RestoreError, ServerError):
    pass


class RestoreParseError(RestoreError, ParseError):
    pass


class LinkCreationTransportError(LinkCreationError, TransportError):
    pass


class LinkCreationServerError(LinkCreationError, ServerError):
    pass


class LinkCreationParseError(LinkCreationError, ParseError):
    pass


class LinkResolutionTransportError(LinkResolutionError, TransportError):
    pass


class LinkResolutionServerError(LinkResolutionError, ServerError):
    pass


class LinkResolutionParseError(LinkResolutionError, ParseError):
    pass


@dataclass(frozen=True)
class ErrorFamily:
    """The three concrete error classes one operation raises."""

    transport: type
    server: type
    parse: type


RESTORE_ERRORS = ErrorFamily(RestoreTransportError, RestoreServerError, RestoreParseError)
CREATE_ERRORS = ErrorFamily(
    LinkCreationTransportError, LinkCreationServerError, LinkCreationParseError
)
RESOLVE_ERRORS = ErrorFamily(
    LinkResolutionTransportError, LinkResolutionServerError, LinkResolutionParseError
)
