from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from application.ports.notification_config_store_port import NotificationConfigStorePort
from domain.wishlist import NotificationConfig, StorageError
from infrastructure.persistence.json_file.json_document import JsonDocument, finish_in_thread

logger = logging.getLogger(__name__)


class JsonNotificationConfigStore(NotificationConfigStorePort):
    """Single JSON object holding the notification account and credential."""

    def __init__(self, *, path: Path | str) -> None:
        self._doc = JsonDocument(path, default=lambda: NotificationConfig().to_dict())
        self._lock = asyncio.Lock()

    def _load(self) -> NotificationConfig:
        data = self._doc.load()
        if not isinstance(data, dict):
            raise StorageError(f"notification config {self._doc.path} must contain a JSON object")
        return NotificationConfig.from_dict(data)

    async def read(self) -> NotificationConfig:
        async with self._lock:
            return await finish_in_thread(self._load)

    async def write(self, *, account: str, credential: str) -> NotificationConfig:
        config = NotificationConfig(account=account, credential=credential)
        async with self._lock:
            await finish_in_thread(self._doc.dump, config.to_dict())
        # Never log the credential.
        logger.info("notification config updated account=%s", account)
        return config
