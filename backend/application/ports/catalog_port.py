from __future__ import annotations

from typing import Any, Dict, List, Protocol


class CatalogPort(Protocol):
    @property
    def configured(self) -> bool:
        """Whether the server holds credentials for the catalog API."""
        ...

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Return ranked media candidates; raise ``UpstreamFailure`` when unreachable."""
        ...

    async def close(self) -> None:
        ...
