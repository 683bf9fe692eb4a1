"""Base types for device attribute providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

# Attributes combined into the fingerprint seed, per platform.
SEED_FIELDS = {
    "android": ("install_id", "model", "manufacturer", "os_version"),
    "ios": ("install_id", "model", "os_name", "os_version"),
}
DEFAULT_SEED_FIELDS = ("install_id", "model", "manufacturer", "os_name", "os_version")


class DeviceAttributes(BaseModel):
    """Raw, best-effort device attributes. Any field may be missing."""

    model_config = ConfigDict(frozen=True)

    platform: str = "unknown"  # "android", "ios", "linux", "darwin", ...
    install_id: Optional[str] = None  # ANDROID_ID / identifierForVendor / machine id
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None

    def seed(self) -> str:
        """Join the platform's attribute tuple with '_'. Empty if nothing usable."""
        fields = SEED_FIELDS.get(self.platform, DEFAULT_SEED_FIELDS)
        values = [getattr(self, name) for name in fields]
        if not any(values):
            return ""
        return "_".join(v or "" for v in values)


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of reading device attributes. Providers never raise."""

    attributes: Optional[DeviceAttributes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.attributes is not None

    @classmethod
    def success(cls, attributes: DeviceAttributes) -> "ProviderResult":
        return cls(attributes=attributes)

    @classmethod
    def failure(cls, error: str) -> "ProviderResult":
        return cls(error=error)


class AttributeProvider(ABC):
    """Read-only source of device attributes for one platform."""

    platform: str

    @abstractmethod
    def read(self) -> ProviderResult:
        """Collect attributes. Failures come back as ProviderResult.failure()."""
