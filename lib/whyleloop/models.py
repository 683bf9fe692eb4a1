"""Data models for the Whyleloop link API.

Wire shapes use snake_case keys for link payloads and camelCase keys for the
restore request body. Models are frozen: values returned to callers are
never mutated by the client.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

UTM_KEYS = ("utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content")


def _empty_if_none(value: Any) -> Any:
    """Null or missing string fields collapse to ""."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _dict_if_none(value: Any) -> Any:
    return {} if value is None else value


class UtmMixin:
    """Campaign-tracking accessors over a ``metadata`` dict.

    Each accessor returns the value only when it is a string; missing keys and
    non-string values yield None.
    """

    def _utm(self, key: str) -> Optional[str]:
        value = self.metadata.get(key)
        return value if isinstance(value, str) else None

    @property
    def utm_source(self) -> Optional[str]:
        return self._utm("utm_source")

    @property
    def utm_medium(self) -> Optional[str]:
        return self._utm("utm_medium")

    @property
    def utm_campaign(self) -> Optional[str]:
        return self._utm("utm_campaign")

    @property
    def utm_term(self) -> Optional[str]:
        return self._utm("utm_term")

    @property
    def utm_content(self) -> Optional[str]:
        return self._utm("utm_content")

    @property
    def utm(self) -> dict[str, str]:
        """All string-valued UTM fields present in metadata."""
        return {key: self.metadata[key] for key in UTM_KEYS if self._utm(key) is not None}


class WireModel(BaseModel):
    """Frozen model that ignores unknown server fields."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_wire(cls, data: dict):
        return cls.model_validate(data)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json")


class RestoreRequest(BaseModel):
    """Body of POST /api/deferred-deep-linking/restore.

    Exactly one identity is carried: the account email, or the anonymous
    device fingerprint.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_id: str = Field(..., alias="appId", min_length=1)
    user_email: Optional[str] = Field(default=None, alias="userEmail")
    device_fingerprint: Optional[str] = Field(default=None, alias="deviceFingerprint")

    @model_validator(mode="after")
    def check_one_identity(self):
        has_email = self.user_email is not None
        has_fingerprint = self.device_fingerprint is not None
        if has_email == has_fingerprint:
            raise ValueError("exactly one of userEmail or deviceFingerprint is required")
        return self

    @property
    def is_anonymous(self) -> bool:
        return self.device_fingerprint is not None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class RestoredLink(UtmMixin, WireModel):
    """A pending link restored for this install."""

    pending_link_id: str = ""
    original_url: str = ""
    destination_url: str = ""
    destination_path: Optional[str] = None  # e.g. "/product/123"
    destination: Optional[str] = None  # e.g. "/product/123?utm_source=share"
    parameters: Optional[dict[str, Any]] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    link_id: str = ""

    @field_validator("pending_link_id", "original_url", "destination_url", "link_id", mode="before")
    @classmethod
    def coerce_strings(cls, value):
        return _empty_if_none(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_maps(cls, value):
        return _dict_if_none(value)

    def to_wire(self) -> dict:
        # Omitted optionals stay omitted so "absent" survives a round trip.
        return self.model_dump(mode="json", exclude_none=True)

    def __str__(self) -> str:
        return (
            f"RestoredLink(pending_link_id={self.pending_link_id}, "
            f"destination_url={self.destination_url}, link_id={self.link_id})"
        )


class CreatedLink(UtmMixin, WireModel):
    """A link freshly registered for the current screen."""

    id: str = ""
    slug: str = ""
    url: str = ""
    destination: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", "slug", "url", "destination", mode="before")
    @classmethod
    def coerce_strings(cls, value):
        return _empty_if_none(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def coerce_maps(cls, value):
        return _dict_if_none(value)

    @classmethod
    def empty(cls, destination: str = "", metadata: Optional[dict] = None) -> "CreatedLink":
        """Placeholder returned alongside an error by callback wrappers."""
        return cls(destination=destination, metadata=metadata or {})

    def __str__(self) -> str:
        return f"CreatedLink(id={self.id}, url={self.url}, destination={self.destination})"


class LinkDetails(UtmMixin, WireModel):
    """Resolution of an inbound slug to its configured destination."""

    id: str = ""
    slug: str = ""
    destination_web_url: str = ""
    destination_path: str = ""
    destination: str = ""
    parameters: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator(
        "id", "slug", "destination_web_url", "destination_path", "destination", mode="before"
    )
    @classmethod
    def coerce_strings(cls, value):
        return _empty_if_none(value)

    @field_validator("parameters", "metadata", mode="before")
    @classmethod
    def coerce_maps(cls, value):
        return _dict_if_none(value)

    def __str__(self) -> str:
        return f"LinkDetails(id={self.id}, destination={self.destination})"
