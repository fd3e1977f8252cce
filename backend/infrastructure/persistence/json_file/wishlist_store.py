from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from application.ports.wishlist_store_port import WishlistStorePort
from domain.wishlist import (
    BadRequest,
    CatalogId,
    DuplicateEntry,
    EntryStatus,
    NewWishlistEntry,
    StorageError,
    WishlistEntry,
    normalize_catalog_id,
    utcnow,
)
from infrastructure.persistence.json_file.json_document import JsonDocument, finish_in_thread
from infrastructure.utils import format_kv

logger = logging.getLogger(__name__)


class JsonWishlistStore(WishlistStorePort):
    """Wishlist persisted as a JSON array, one object per entry, insertion ordered.

    Every operation re-reads the file, so there is no in-memory cache to go
    stale. ``_lock`` serializes whole read-modify-write cycles: file I/O is
    offloaded to a thread, and without the lock two requests suspended at that
    point could both append to the same snapshot and lose one of the writes.
    """

    def __init__(self, *, path: Path | str) -> None:
        self._doc = JsonDocument(path, default=list)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._doc.path

    def _load(self) -> List[WishlistEntry]:
        data = self._doc.load()
        if not isinstance(data, list):
            raise StorageError(f"wishlist file {self._doc.path} must contain a JSON array")
        return [WishlistEntry.from_dict(item) for item in data]

    def _save(self, entries: List[WishlistEntry]) -> None:
        self._doc.dump([e.to_dict() for e in entries])

    async def list_entries(self) -> List[WishlistEntry]:
        async with self._lock:
            return await finish_in_thread(self._load)

    async def add_entry(self, entry: NewWishlistEntry) -> WishlistEntry:
        key = normalize_catalog_id(entry.catalog_id)
        title = (entry.title or "").strip()
        if not key or not title:
            raise BadRequest("catalogId, title, and mediaType are required.")
        external_id = (entry.external_id or "").strip() or None

        async with self._lock:
            entries = await finish_in_thread(self._load)
            for existing in entries:
                if existing.key == key:
                    raise DuplicateEntry()
                if external_id and existing.external_id == external_id:
                    raise DuplicateEntry()

            created = WishlistEntry(
                catalog_id=entry.catalog_id,
                title=title,
                media_type=entry.media_type,
                created_at=utcnow(),
                external_id=external_id,
            )
            entries.append(created)
            await finish_in_thread(self._save, entries)

        logger.info(
            "wishlist %s",
            format_kv(event="add", catalog_id=key, media_type=created.media_type.value, size=len(entries)),
        )
        return created

    async def remove_many(self, ids: Iterable[CatalogId]) -> int:
        wanted = {normalize_catalog_id(i) for i in ids}
        wanted.discard("")
        if not wanted:
            return 0

        async with self._lock:
            entries = await finish_in_thread(self._load)
            kept = [e for e in entries if e.key not in wanted]
            removed = len(entries) - len(kept)
            if removed:
                await finish_in_thread(self._save, kept)

        logger.info("wishlist %s", format_kv(event="remove", requested=len(wanted), removed=removed))
        return removed

    async def remove(self, catalog_id: CatalogId) -> bool:
        return await self.remove_many([catalog_id]) > 0

    async def clear(self) -> None:
        async with self._lock:
            await finish_in_thread(self._save, [])
        logger.info("wishlist %s", format_kv(event="clear"))

    async def set_status(
        self,
        catalog_id: CatalogId,
        status: EntryStatus,
        *,
        at: datetime,
    ) -> Optional[WishlistEntry]:
        key = normalize_catalog_id(catalog_id)
        async with self._lock:
            entries = await finish_in_thread(self._load)
            for idx, existing in enumerate(entries):
                if existing.key != key:
                    continue
                updated = existing.with_status(status, at=at)
                entries[idx] = updated
                await finish_in_thread(self._save, entries)
                break
            else:
                return None

        logger.info("wishlist %s", format_kv(event="status", catalog_id=key, status=updated.status.value))
        return updated
