from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from application.wishlist import CatalogSearchService
from server.api.rest.dependencies import get_search_service

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/search")
async def search(
    q: Optional[str] = Query(default=None, description="搜索关键词"),
    service: CatalogSearchService = Depends(get_search_service),
) -> Dict[str, Any]:
    return await service.search(q)
