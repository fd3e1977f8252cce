from __future__ import annotations

from typing import Protocol

from domain.wishlist import NotificationConfig


class NotificationConfigStorePort(Protocol):
    async def read(self) -> NotificationConfig:
        ...

    async def write(self, *, account: str, credential: str) -> NotificationConfig:
        ...
