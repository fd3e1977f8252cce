from __future__ import annotations

from typing import Any, Dict, Optional

from application.ports.catalog_port import CatalogPort
from domain.wishlist import BadRequest, ServerMisconfigured


class CatalogSearchService:
    def __init__(self, *, catalog: CatalogPort) -> None:
        self._catalog = catalog

    async def search(self, query: Optional[str]) -> Dict[str, Any]:
        q = (query or "").strip()
        if not q:
            raise BadRequest('Missing search query parameter "q".')
        if not self._catalog.configured:
            raise ServerMisconfigured("TMDB_API_KEY is not configured on the server.")
        results = await self._catalog.search(q)
        return {"query": q, "results": results}
