from application.wishlist.admin_gate import AdminGate
from application.wishlist.notification_settings_service import NotificationSettingsService
from application.wishlist.search_service import CatalogSearchService
from application.wishlist.wishlist_service import WishlistService

__all__ = [
    "AdminGate",
    "CatalogSearchService",
    "NotificationSettingsService",
    "WishlistService",
]
