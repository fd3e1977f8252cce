from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from application.ports.catalog_port import CatalogPort
from application.ports.notification_config_store_port import NotificationConfigStorePort
from application.ports.notifier_port import NotifierPort
from application.ports.wishlist_store_port import WishlistStorePort
from application.wishlist import (
    AdminGate,
    CatalogSearchService,
    NotificationSettingsService,
    WishlistService,
)
from infrastructure import bootstrap
from infrastructure.notification.task_manager import BackgroundTaskManager


# One instance per process: each store owns the lock that serializes its writes.
@lru_cache(maxsize=1)
def _build_wishlist_store() -> WishlistStorePort:
    return bootstrap.build_wishlist_store()


@lru_cache(maxsize=1)
def _build_notification_config_store() -> NotificationConfigStorePort:
    return bootstrap.build_notification_config_store()


@lru_cache(maxsize=1)
def _build_task_manager() -> BackgroundTaskManager:
    return BackgroundTaskManager()


@lru_cache(maxsize=1)
def _build_notifier() -> NotifierPort:
    return bootstrap.build_notifier(
        config_store=_build_notification_config_store(),
        tasks=_build_task_manager(),
    )


@lru_cache(maxsize=1)
def _build_catalog_client() -> CatalogPort:
    return bootstrap.build_catalog_client()


@lru_cache(maxsize=1)
def _build_admin_gate() -> AdminGate:
    return bootstrap.build_admin_gate()


def get_wishlist_store() -> WishlistStorePort:
    return _build_wishlist_store()


def get_notification_config_store() -> NotificationConfigStorePort:
    return _build_notification_config_store()


def get_notifier() -> NotifierPort:
    return _build_notifier()


def get_catalog_client() -> CatalogPort:
    return _build_catalog_client()


def get_admin_gate() -> AdminGate:
    return _build_admin_gate()


def get_wishlist_service(
    store: WishlistStorePort = Depends(get_wishlist_store),
    gate: AdminGate = Depends(get_admin_gate),
    notifier: NotifierPort = Depends(get_notifier),
) -> WishlistService:
    return WishlistService(store=store, gate=gate, notifier=notifier)


def get_search_service(catalog: CatalogPort = Depends(get_catalog_client)) -> CatalogSearchService:
    return CatalogSearchService(catalog=catalog)


def get_notification_settings_service(
    store: NotificationConfigStorePort = Depends(get_notification_config_store),
    gate: AdminGate = Depends(get_admin_gate),
) -> NotificationSettingsService:
    return NotificationSettingsService(store=store, gate=gate)


async def shutdown_dependencies() -> None:
    """Best-effort shutdown hooks for long-lived adapters (HTTP session, background tasks)."""
    if _build_catalog_client.cache_info().currsize:
        await _build_catalog_client().close()
    if _build_task_manager.cache_info().currsize:
        await _build_task_manager().shutdown()
