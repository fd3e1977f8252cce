from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from domain.wishlist import CatalogId, EntryStatus, NewWishlistEntry, WishlistEntry


class WishlistStorePort(Protocol):
    async def list_entries(self) -> List[WishlistEntry]:
        ...

    async def add_entry(self, entry: NewWishlistEntry) -> WishlistEntry:
        """Append ``entry`` unless its catalog id or external id is already saved."""
        ...

    async def remove_many(self, ids: Iterable[CatalogId]) -> int:
        ...

    async def remove(self, catalog_id: CatalogId) -> bool:
        ...

    async def clear(self) -> None:
        ...

    async def set_status(
        self,
        catalog_id: CatalogId,
        status: EntryStatus,
        *,
        at: datetime,
    ) -> Optional[WishlistEntry]:
        """Change lifecycle timestamps only; None when the id is not saved."""
        ...
