from infrastructure.persistence.json_file.notification_config_store import JsonNotificationConfigStore
from infrastructure.persistence.json_file.wishlist_store import JsonWishlistStore

__all__ = ["JsonNotificationConfigStore", "JsonWishlistStore"]
