from infrastructure.notification.smtp_notifier import SmtpNotifier
from infrastructure.notification.task_manager import BackgroundTaskManager

__all__ = ["BackgroundTaskManager", "SmtpNotifier"]
