from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union

from domain.wishlist.errors import BadRequest, StorageError

CatalogId = Union[int, str]


class MediaType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"

    @classmethod
    def parse(cls, raw: Any) -> "MediaType":
        """Parse a media type, accepting the catalog's ``tv`` spelling for series."""
        value = str(raw or "").strip().lower()
        if value == "tv":
            return cls.SERIES
        try:
            return cls(value)
        except ValueError:
            raise BadRequest(f"mediaType must be one of: movie, series (got {raw!r}).") from None


class EntryStatus(str, Enum):
    PENDING = "pending"
    ON_HOLD = "on_hold"
    ADDED = "added"


def normalize_catalog_id(value: CatalogId) -> str:
    """Ids arrive as numbers or strings; compare them in one representation."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: Optional[datetime]) -> Optional[str]:
    if ts is None:
        return None
    # Microsecond precision keeps insertion order recoverable from timestamps.
    return ts.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    ts = datetime.fromisoformat(text)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class NewWishlistEntry:
    """An entry as submitted by a client, before the store stamps it."""

    catalog_id: CatalogId
    title: str
    media_type: MediaType
    external_id: Optional[str] = None


@dataclass(frozen=True)
class WishlistEntry:
    """A saved catalog item. Core fields never change after creation."""

    catalog_id: CatalogId
    title: str
    media_type: MediaType
    created_at: datetime
    external_id: Optional[str] = None
    # Lifecycle timestamps, set by later workflow states.
    on_hold_at: Optional[datetime] = None
    added_at: Optional[datetime] = None

    @property
    def key(self) -> str:
        return normalize_catalog_id(self.catalog_id)

    @property
    def status(self) -> EntryStatus:
        if self.added_at is not None:
            return EntryStatus.ADDED
        if self.on_hold_at is not None:
            return EntryStatus.ON_HOLD
        return EntryStatus.PENDING

    def with_status(self, status: EntryStatus, *, at: datetime) -> "WishlistEntry":
        """Move to a lifecycle state; only the lifecycle timestamps change."""
        if status is EntryStatus.PENDING:
            return replace(self, on_hold_at=None, added_at=None)
        if status is EntryStatus.ON_HOLD:
            return replace(self, on_hold_at=at, added_at=None)
        return replace(self, added_at=at)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "catalogId": self.catalog_id,
            "title": self.title,
            "mediaType": self.media_type.value,
            "externalId": self.external_id,
            "createdAt": format_timestamp(self.created_at),
        }
        if self.on_hold_at is not None:
            data["onHoldAt"] = format_timestamp(self.on_hold_at)
        if self.added_at is not None:
            data["addedAt"] = format_timestamp(self.added_at)
        return data

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "WishlistEntry":
        """Rebuild an entry from its persisted form.

        Records written before the rename use ``tmdbId``/``imdbId``; both
        spellings are accepted.
        """
        if not isinstance(raw, Mapping):
            raise StorageError(f"wishlist record must be an object, got {type(raw).__name__}")
        catalog_id = raw.get("catalogId", raw.get("tmdbId"))
        created_at = raw.get("createdAt")
        if catalog_id is None or not raw.get("title") or created_at is None:
            raise StorageError(f"wishlist record is missing required fields: {dict(raw)!r}")
        try:
            media_type = MediaType.parse(raw.get("mediaType"))
            return cls(
                catalog_id=catalog_id,
                title=str(raw["title"]),
                media_type=media_type,
                created_at=parse_timestamp(created_at),
                external_id=raw.get("externalId", raw.get("imdbId")) or None,
                on_hold_at=parse_timestamp(raw.get("onHoldAt")),
                added_at=parse_timestamp(raw.get("addedAt")),
            )
        except (BadRequest, ValueError) as exc:
            raise StorageError(f"wishlist record is invalid: {exc}") from exc
