"""Notification providers (ntfy, Home Assistant notify)."""

from frigate_notify.services.notifications.providers.home_assistant import (
    HomeAssistantProvider,
)
from frigate_notify.services.notifications.providers.ntfy import NtfyProvider

__all__ = ["HomeAssistantProvider", "NtfyProvider"]
