from domain.wishlist.errors import (
    BadRequest,
    Conflict,
    DuplicateEntry,
    Forbidden,
    NotFound,
    ServerMisconfigured,
    StorageError,
    UpstreamFailure,
    WishlistError,
)
from domain.wishlist.notification_config import NotificationConfig, is_configured
from domain.wishlist.wishlist_entry import (
    CatalogId,
    EntryStatus,
    MediaType,
    NewWishlistEntry,
    WishlistEntry,
    normalize_catalog_id,
    utcnow,
)

__all__ = [
    "BadRequest",
    "CatalogId",
    "Conflict",
    "DuplicateEntry",
    "EntryStatus",
    "Forbidden",
    "MediaType",
    "NewWishlistEntry",
    "NotFound",
    "NotificationConfig",
    "ServerMisconfigured",
    "StorageError",
    "UpstreamFailure",
    "WishlistEntry",
    "WishlistError",
    "is_configured",
    "normalize_catalog_id",
    "utcnow",
]
