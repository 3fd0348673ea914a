"""ntfy push notification provider.

Publishes one message per event to {ntfy_url}/{ntfy_topic}. Message fields go
in ntfy's HTTP headers (Title, Attach, Click, Tags, Priority); the body is the
camera name.
"""

import base64
import logging

from frigate_notify.constants import (
    DEFAULT_NORMAL_PRIORITY,
    LOGGER_NAME,
)
from frigate_notify.models import DetectionEvent, OutboundRequest
from frigate_notify.services.notifications.base import BaseNotificationProvider
from frigate_notify.services.notifications.formatting import (
    capitalize_first,
    clip_url,
    snapshot_url,
)

logger = logging.getLogger(LOGGER_NAME)


def build_authorization(
    user: str | None, password: str | None, token: str | None
) -> str | None:
    """Basic auth when user and password are both set, else Bearer token, else None."""
    if user and password:
        encoded = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"
    if token:
        return f"Bearer {token}"
    return None


class NtfyProvider(BaseNotificationProvider):
    """Builds ntfy publish requests with snapshot attachment and clip click-through."""

    name = "NTFY"

    def __init__(self, config: dict) -> None:
        self._url = (config.get("NTFY_URL") or "").rstrip("/")
        self._topic = config.get("NTFY_TOPIC") or ""
        self._frigate_url = config.get("FRIGATE_URL") or ""
        self._snapshot_options = dict(config.get("SNAPSHOT_OPTIONS") or {})
        self._tags: dict[str, list[str]] = dict(config.get("NTFY_TAGS") or {})
        self._default_priority = str(config.get("NTFY_NORMAL_PRIORITY", DEFAULT_NORMAL_PRIORITY))
        self._authorization = build_authorization(
            config.get("NTFY_USER"),
            config.get("NTFY_PASSWORD"),
            config.get("NTFY_TOKEN"),
        )

    @property
    def publish_url(self) -> str:
        return f"{self._url}/{self._topic}"

    def build_requests(
        self, event: DetectionEvent, priority: str | None = None
    ) -> list[OutboundRequest]:
        headers = {
            "Title": capitalize_first(event.label),
            "Attach": snapshot_url(self._frigate_url, event.event_id, self._snapshot_options),
            "Click": clip_url(self._frigate_url, event.event_id),
            "Priority": str(priority) if priority is not None else self._default_priority,
        }
        tags = self._tags.get(event.label)
        if tags:
            headers["Tags"] = ",".join(tags)
        if self._authorization:
            headers["Authorization"] = self._authorization

        logger.debug(
            "ntfy request for %s (%s on %s), priority %s",
            event.event_id,
            event.label,
            event.camera,
            headers["Priority"],
        )
        return [
            OutboundRequest(
                provider=self.name,
                method="POST",
                url=self.publish_url,
                headers=headers,
                body=capitalize_first(event.camera),
                description=f"topic {self._topic}",
            )
        ]
