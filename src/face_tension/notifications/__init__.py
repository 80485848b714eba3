"""Notification sub-package — alert delivery channels."""

from face_tension.notifications.handlers import (
    AlertDispatcher,
    AlertHandler,
    DispatchResult,
    LogHandler,
    WebhookHandler,
    create_dispatcher,
)

__all__ = [
    "AlertDispatcher",
    "AlertHandler",
    "DispatchResult",
    "LogHandler",
    "WebhookHandler",
    "create_dispatcher",
]
