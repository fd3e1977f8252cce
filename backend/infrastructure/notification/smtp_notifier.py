from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from application.ports.notification_config_store_port import NotificationConfigStorePort
from application.ports.notifier_port import NotifierPort
from domain.wishlist import NotificationConfig, WishlistEntry, is_configured
from infrastructure.config.settings import (
    SMTP_HOST,
    SMTP_PORT,
    SMTP_TIMEOUT_S,
    SMTP_USE_SSL,
    SMTP_USE_TLS,
)
from infrastructure.notification.task_manager import BackgroundTaskManager

logger = logging.getLogger(__name__)

_MEDIA_LABELS = {"movie": "电影", "series": "剧集"}


def build_added_message(entry: WishlistEntry, *, account: str) -> EmailMessage:
    label = _MEDIA_LABELS.get(entry.media_type.value, entry.media_type.value)
    msg = EmailMessage()
    msg["Subject"] = f"愿望单新增：{entry.title}"
    msg["From"] = account
    msg["To"] = account
    lines = [
        f"名称：{entry.title}",
        f"类型：{label}",
        f"IMDb：{entry.external_id or '暂无'}",
        f"收藏时间：{entry.created_at.isoformat()}",
    ]
    msg.set_content("\n".join(lines))
    return msg


class SmtpNotifier(NotifierPort):
    """Emails the configured account whenever an entry is added.

    Sending happens in a background task: ``notify_added`` returns
    immediately, and the credentials are read from the config store only when
    the task runs.
    """

    def __init__(
        self,
        *,
        config_store: NotificationConfigStorePort,
        tasks: BackgroundTaskManager,
        host: str | None = None,
        port: int | None = None,
        use_tls: bool | None = None,
        use_ssl: bool | None = None,
        timeout_s: float | None = None,
    ) -> None:
        self._config_store = config_store
        self._tasks = tasks
        self._host = host or SMTP_HOST
        self._port = int(port or SMTP_PORT)
        self._use_tls = SMTP_USE_TLS if use_tls is None else use_tls
        self._use_ssl = SMTP_USE_SSL if use_ssl is None else use_ssl
        self._timeout_s = float(timeout_s or SMTP_TIMEOUT_S)

    def notify_added(self, entry: WishlistEntry) -> None:
        self._tasks.schedule(
            name=f"notify-added-{entry.key}",
            coro_factory=lambda: self.send_added(entry),
        )

    async def send_added(self, entry: WishlistEntry) -> bool:
        config = await self._config_store.read()
        if not is_configured(config):
            logger.debug("notification skipped: email not configured (catalog_id=%s)", entry.key)
            return False
        msg = build_added_message(entry, account=str(config.account))
        try:
            await asyncio.to_thread(self._deliver, msg, config)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Email send failed: %s", exc)
            return False
        logger.info("notification sent catalog_id=%s", entry.key)
        return True

    def _deliver(self, msg: EmailMessage, config: NotificationConfig) -> None:
        smtp_cls = smtplib.SMTP_SSL if self._use_ssl else smtplib.SMTP
        with smtp_cls(self._host, self._port, timeout=self._timeout_s) as smtp:
            if self._use_tls and not self._use_ssl:
                smtp.starttls()
            smtp.login(str(config.account), str(config.credential))
            smtp.send_message(msg)
