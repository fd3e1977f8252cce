from __future__ import annotations

from fastapi import APIRouter

import server.api.rest.v1.email_config as email_config_v1
import server.api.rest.v1.health as health_v1
import server.api.rest.v1.search as search_v1
import server.api.rest.v1.wishlist as wishlist_v1

# Canonical API router aggregator.
api_router = APIRouter()
api_router.include_router(search_v1.router)
api_router.include_router(wishlist_v1.router)
api_router.include_router(email_config_v1.router)
api_router.include_router(health_v1.router)

__all__ = ["api_router"]
