from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from application.wishlist import WishlistService
from server.api.rest.dependencies import get_wishlist_service
from server.models.schemas import (
    AdminPasswordRequest,
    MessageResponse,
    RemoveManyResponse,
    WishlistAddRequest,
    WishlistRemoveManyRequest,
    WishlistStatusRequest,
)

router = APIRouter(prefix="/api", tags=["wishlist"])


@router.get("/wishlist")
async def list_wishlist(
    service: WishlistService = Depends(get_wishlist_service),
) -> List[Dict[str, Any]]:
    entries = await service.list_entries()
    return [e.to_dict() for e in entries]


@router.post("/wishlist", status_code=201)
async def add_wishlist_entry(
    req: WishlistAddRequest,
    service: WishlistService = Depends(get_wishlist_service),
) -> Dict[str, Any]:
    entry = await service.add(
        catalog_id=req.catalogId,
        title=req.title,
        media_type=req.mediaType,
        external_id=req.externalId,
    )
    return entry.to_dict()


@router.delete("/wishlist", response_model=RemoveManyResponse)
async def remove_wishlist_entries(
    req: Optional[WishlistRemoveManyRequest] = None,
    service: WishlistService = Depends(get_wishlist_service),
) -> RemoveManyResponse:
    req = req or WishlistRemoveManyRequest()
    removed = await service.remove_many(ids=req.ids, password=req.password)
    return RemoveManyResponse(message="Items removed.", removed=removed)


@router.post("/wishlist/clear", response_model=MessageResponse)
async def clear_wishlist(
    req: Optional[AdminPasswordRequest] = None,
    service: WishlistService = Depends(get_wishlist_service),
) -> MessageResponse:
    await service.clear(password=(req.password if req else None))
    return MessageResponse(message="Wishlist cleared.")


@router.delete("/wishlist/{catalog_id}", response_model=MessageResponse)
async def remove_wishlist_entry(
    catalog_id: str,
    req: Optional[AdminPasswordRequest] = None,
    service: WishlistService = Depends(get_wishlist_service),
) -> MessageResponse:
    await service.remove(catalog_id=catalog_id, password=(req.password if req else None))
    return MessageResponse(message="Item removed.")


@router.post("/wishlist/{catalog_id}/status")
async def set_wishlist_entry_status(
    catalog_id: str,
    req: WishlistStatusRequest,
    service: WishlistService = Depends(get_wishlist_service),
) -> Dict[str, Any]:
    entry = await service.set_status(catalog_id=catalog_id, status=req.status, password=req.password)
    return {**entry.to_dict(), "status": entry.status.value}
