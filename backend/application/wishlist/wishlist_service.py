"""
愿望单应用服务。

API 层只做请求解析；校验、管理员鉴权、存储调用以及新增后的通知派发都在这里完成。
所有校验与鉴权都发生在触碰存储之前，被拒绝的请求不会产生任何副作用。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from application.ports.notifier_port import NotifierPort
from application.ports.wishlist_store_port import WishlistStorePort
from application.wishlist.admin_gate import AdminGate
from domain.wishlist import (
    BadRequest,
    CatalogId,
    EntryStatus,
    MediaType,
    NewWishlistEntry,
    NotFound,
    WishlistEntry,
    normalize_catalog_id,
    utcnow,
)

logger = logging.getLogger(__name__)


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class WishlistService:
    def __init__(
        self,
        *,
        store: WishlistStorePort,
        gate: AdminGate,
        notifier: Optional[NotifierPort] = None,
    ) -> None:
        self._store = store
        self._gate = gate
        self._notifier = notifier

    async def list_entries(self) -> List[WishlistEntry]:
        return await self._store.list_entries()

    async def add(
        self,
        *,
        catalog_id: Optional[CatalogId],
        title: Optional[str],
        media_type: Optional[str],
        external_id: Optional[str] = None,
    ) -> WishlistEntry:
        if _blank(catalog_id) or _blank(title) or _blank(media_type):
            raise BadRequest("catalogId, title, and mediaType are required.")

        entry = NewWishlistEntry(
            catalog_id=catalog_id,  # type: ignore[arg-type]
            title=str(title).strip(),
            media_type=MediaType.parse(media_type),
            external_id=(external_id or "").strip() or None,
        )
        created = await self._store.add_entry(entry)

        # Dispatched after the store has committed and released its lock.
        if self._notifier is not None:
            try:
                self._notifier.notify_added(created)
            except Exception:
                logger.exception("failed to dispatch notification (catalog_id=%s)", created.key)
        return created

    async def remove(self, *, catalog_id: CatalogId, password: Optional[str]) -> None:
        self._gate.check(password)
        if _blank(catalog_id):
            raise BadRequest("An id is required.")
        if not await self._store.remove(catalog_id):
            raise NotFound()

    async def remove_many(self, *, ids: Optional[Iterable[CatalogId]], password: Optional[str]) -> int:
        self._gate.check(password)
        id_list = [i for i in (ids or []) if not _blank(i)]
        if not id_list:
            raise BadRequest("ids must be a non-empty list.")

        removed = await self._store.remove_many(id_list)
        if removed == 0:
            raise NotFound("None of the requested items were found.")
        return removed

    async def clear(self, *, password: Optional[str]) -> None:
        self._gate.check(password)
        await self._store.clear()

    async def set_status(
        self,
        *,
        catalog_id: CatalogId,
        status: Optional[str],
        password: Optional[str],
    ) -> WishlistEntry:
        self._gate.check(password)
        try:
            target = EntryStatus(str(status or "").strip().lower())
        except ValueError:
            raise BadRequest("status must be one of: pending, on_hold, added.") from None

        updated = await self._store.set_status(catalog_id, target, at=utcnow())
        if updated is None:
            raise NotFound()
        logger.debug("status changed catalog_id=%s status=%s", normalize_catalog_id(catalog_id), target.value)
        return updated
