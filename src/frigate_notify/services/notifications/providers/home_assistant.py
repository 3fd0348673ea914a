"""Home Assistant notify provider.

Calls notify.<entity_id> through the Supervisor proxy to the Core REST API, one
request per configured entity id, authenticated with the add-on's supervisor
token. Requests are independent; the sender runs each one separately.
"""

import logging

from frigate_notify.constants import LOGGER_NAME, SUPERVISOR_NOTIFY_URL
from frigate_notify.models import DetectionEvent, OutboundRequest
from frigate_notify.services.notifications.base import BaseNotificationProvider
from frigate_notify.services.notifications.formatting import (
    capitalize_first,
    clip_url,
    snapshot_url,
)

logger = logging.getLogger(LOGGER_NAME)


class HomeAssistantProvider(BaseNotificationProvider):
    """Builds Home Assistant notify service calls with image and clickAction data."""

    name = "HOME_ASSISTANT"

    def __init__(self, config: dict, base_url: str = SUPERVISOR_NOTIFY_URL) -> None:
        self._base_url = base_url.rstrip("/")
        self._entity_ids: list[str] = [e for e in (config.get("HA_ENTITY_IDS") or []) if e]
        self._token = config.get("SUPERVISOR_TOKEN") or ""
        self._frigate_url = config.get("FRIGATE_URL") or ""
        self._snapshot_options = dict(config.get("SNAPSHOT_OPTIONS") or {})

    @property
    def entity_ids(self) -> list[str]:
        return list(self._entity_ids)

    def build_payload(self, event: DetectionEvent) -> dict:
        """JSON body shared by every entity id for this event."""
        return {
            "title": capitalize_first(event.label),
            "message": capitalize_first(event.camera),
            "data": {
                "image": snapshot_url(self._frigate_url, event.event_id, self._snapshot_options),
                "clickAction": clip_url(self._frigate_url, event.event_id),
            },
        }

    def build_requests(
        self, event: DetectionEvent, priority: str | None = None
    ) -> list[OutboundRequest]:
        """One POST per entity id; priority is not used by this channel."""
        payload = self.build_payload(event)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        requests_out = [
            OutboundRequest(
                provider=self.name,
                method="POST",
                url=f"{self._base_url}/{entity_id}",
                headers=dict(headers),
                json=payload,
                description=entity_id,
            )
            for entity_id in self._entity_ids
        ]
        logger.debug(
            "Home Assistant requests for %s: %s", event.event_id, self._entity_ids
        )
        return requests_out
