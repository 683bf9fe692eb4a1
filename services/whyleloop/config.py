"""
Whyleloop client configuration.

Values come from explicit arguments first, then environment variables
(a .env file is loaded if present):

    WHYLELOOP_APP_ID        required
    WHYLELOOP_BASE_URL      default https://whyleloop.app
    WHYLELOOP_TIMEOUT       seconds, default 30
    WHYLELOOP_STORAGE_PATH  default ~/.whyleloop/store.json
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from lib.whyleloop.api_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

DEFAULT_STORAGE_PATH = "~/.whyleloop/store.json"


class WhyleloopConfig(BaseModel):
    """Settings for one SDK instance."""

    app_id: str = Field(..., min_length=1, description="Tenant id sent with every request")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Overrides every endpoint host")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds")
    storage_path: str = Field(
        default=DEFAULT_STORAGE_PATH, description="JSON file caching the device fingerprint"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value


def load_config(
    app_id: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    storage_path: Optional[str] = None,
) -> WhyleloopConfig:
    """Build config from arguments, falling back to the environment."""
    load_dotenv()

    app_id = app_id or os.getenv("WHYLELOOP_APP_ID", "")
    if not app_id:
        raise ValueError("Whyleloop app id required. Pass app_id= or set WHYLELOOP_APP_ID.")

    values = {
        "app_id": app_id,
        "base_url": base_url or os.getenv("WHYLELOOP_BASE_URL") or DEFAULT_BASE_URL,
        "storage_path": storage_path or os.getenv("WHYLELOOP_STORAGE_PATH") or DEFAULT_STORAGE_PATH,
    }
    env_timeout = os.getenv("WHYLELOOP_TIMEOUT")
    if timeout is not None:
        values["timeout"] = timeout
    elif env_timeout:
        values["timeout"] = float(env_timeout)

    return WhyleloopConfig(**values)
