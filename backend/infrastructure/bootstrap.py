from __future__ import annotations

from application.ports.catalog_port import CatalogPort
from application.ports.notification_config_store_port import NotificationConfigStorePort
from application.ports.notifier_port import NotifierPort
from application.ports.wishlist_store_port import WishlistStorePort
from application.wishlist.admin_gate import AdminGate
from infrastructure.notification.task_manager import BackgroundTaskManager


def build_wishlist_store() -> WishlistStorePort:
    from infrastructure.config.settings import WISHLIST_PATH
    from infrastructure.persistence.json_file import JsonWishlistStore

    return JsonWishlistStore(path=WISHLIST_PATH)


def build_notification_config_store() -> NotificationConfigStorePort:
    from infrastructure.config.settings import EMAIL_CONFIG_PATH
    from infrastructure.persistence.json_file import JsonNotificationConfigStore

    return JsonNotificationConfigStore(path=EMAIL_CONFIG_PATH)


def build_notifier(
    *,
    config_store: NotificationConfigStorePort,
    tasks: BackgroundTaskManager,
) -> NotifierPort:
    from infrastructure.notification.smtp_notifier import SmtpNotifier

    return SmtpNotifier(config_store=config_store, tasks=tasks)


def build_catalog_client() -> CatalogPort:
    from infrastructure.catalog import TMDBClient

    return TMDBClient()


def build_admin_gate() -> AdminGate:
    """Wire the env-configured admin password into the application gate."""
    from infrastructure.config.settings import ADMIN_PASSWORD

    return AdminGate(admin_password=ADMIN_PASSWORD)
