from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from domain.wishlist.errors import StorageError


@dataclass(frozen=True)
class NotificationConfig:
    """Credentials for outbound email notifications (single record)."""

    account: Optional[str] = None
    credential: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"account": self.account, "credential": self.credential}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "NotificationConfig":
        return cls(
            account=_optional_str(raw, "account"),
            credential=_optional_str(raw, "credential"),
        )


def _optional_str(raw: Mapping[str, Any], field: str) -> Optional[str]:
    value = raw.get(field)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise StorageError(f"notification config field {field!r} must be a string, got {type(value).__name__}")
    return value


def is_configured(config: NotificationConfig) -> bool:
    return bool((config.account or "").strip()) and bool((config.credential or "").strip())
