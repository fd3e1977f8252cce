from __future__ import annotations

from typing import Protocol

from domain.wishlist import WishlistEntry


class NotifierPort(Protocol):
    def notify_added(self, entry: WishlistEntry) -> None:
        """Dispatch a best-effort notification; must not block or raise."""
        ...
