from __future__ import annotations

from typing import Any, Dict, Optional

from application.ports.notification_config_store_port import NotificationConfigStorePort
from application.wishlist.admin_gate import AdminGate
from domain.wishlist import BadRequest, is_configured


class NotificationSettingsService:
    """Reads and replaces the email notification account.

    The credential is write-only: reads expose the account and whether
    notifications are active, never the secret.
    """

    def __init__(self, *, store: NotificationConfigStorePort, gate: AdminGate) -> None:
        self._store = store
        self._gate = gate

    async def describe(self) -> Dict[str, Any]:
        config = await self._store.read()
        return {"account": config.account, "configured": is_configured(config)}

    async def update(
        self,
        *,
        account: Optional[str],
        credential: Optional[str],
        admin_password: Optional[str],
    ) -> None:
        self._gate.check(admin_password)
        account_s = (account or "").strip()
        credential_s = (credential or "").strip()
        if not account_s or not credential_s:
            raise BadRequest("account and credential are required.")
        await self._store.write(account=account_s, credential=credential_s)
