from __future__ import annotations

import hmac
from typing import Optional

from domain.wishlist import BadRequest, Forbidden, ServerMisconfigured


class AdminGate:
    """Checks the shared admin password before any destructive or config operation.

    Order matters: a server without a password is a misconfiguration (500),
    independent of what the client sent.
    """

    def __init__(self, *, admin_password: Optional[str]) -> None:
        self._admin_password = admin_password or ""

    @property
    def configured(self) -> bool:
        return bool(self._admin_password)

    def check(self, password: Optional[str]) -> None:
        if not self._admin_password:
            raise ServerMisconfigured("ADMIN_PASSWORD is not configured.")
        # Compared as sent, no trimming.
        if not password:
            raise BadRequest("Password is required.")
        if not hmac.compare_digest(password.encode("utf-8"), self._admin_password.encode("utf-8")):
            raise Forbidden()
