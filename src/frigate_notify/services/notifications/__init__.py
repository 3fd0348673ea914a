"""Notification service: provider interface, dispatcher, sender, and providers (ntfy, Home Assistant)."""

from frigate_notify.services.notifications.base import (
    BaseNotificationProvider,
    NotificationResult,
)
from frigate_notify.services.notifications.dispatcher import EventDispatcher
from frigate_notify.services.notifications.providers import (
    HomeAssistantProvider,
    NtfyProvider,
)
from frigate_notify.services.notifications.sender import RequestSender

__all__ = [
    "BaseNotificationProvider",
    "EventDispatcher",
    "NotificationResult",
    "HomeAssistantProvider",
    "NtfyProvider",
    "RequestSender",
]
