"""Event dispatcher: notification-worthiness, suppression, grouping, fan-out.

Single entry point for a decoded Frigate event. Asks the suppression and
grouping policies, asks every enabled provider for its requests, and hands
them to the sender. Does not wait for outbound calls.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from frigate_notify.constants import LOGGER_NAME
from frigate_notify.managers.grouping import GroupingPolicy
from frigate_notify.managers.suppression import SuppressionPolicy
from frigate_notify.models import DetectionEvent, OutboundRequest
from frigate_notify.services.notifications.base import BaseNotificationProvider

logger = logging.getLogger(LOGGER_NAME)


class EventDispatcher:
    """Decides whether an event notifies, at what priority, and on which channels."""

    def __init__(
        self,
        suppression: SuppressionPolicy,
        grouping: GroupingPolicy,
        providers: list[BaseNotificationProvider],
        sender: Any,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._suppression = suppression
        self._grouping = grouping
        self._providers = list(providers)
        self._sender = sender
        self._clock = clock

    @property
    def providers(self) -> list[BaseNotificationProvider]:
        return list(self._providers)

    def handle(self, event: DetectionEvent) -> list[OutboundRequest]:
        """Process one event. Returns the requests handed to the sender (empty if none)."""
        if not event.is_notification_worthy:
            return []

        if not event.camera or not event.label or not event.event_id:
            logger.debug(
                "Skipping event %s: missing id, camera or label (camera=%s, label=%s)",
                event.event_id,
                event.camera,
                event.label,
            )
            return []

        if self._suppression.should_suppress(event.camera, event.label):
            logger.debug("Suppressed '%s' on '%s'", event.label, event.camera)
            return []

        priority = self._grouping.decide_priority(self._clock())
        logger.info(
            "Notifying '%s' on '%s' (event %s, priority %s)",
            event.label,
            event.camera,
            event.event_id,
            priority,
        )

        dispatched: list[OutboundRequest] = []
        for provider in self._providers:
            try:
                built = provider.build_requests(event, priority)
            except Exception as e:
                logger.exception(
                    "Provider %s failed to build requests: %s", type(provider).__name__, e
                )
                continue
            for request in built:
                try:
                    self._sender.submit(request)
                except Exception as e:
                    logger.exception(
                        "Failed to submit %s request (%s): %s",
                        request.provider,
                        request.description,
                        e,
                    )
                    continue
                dispatched.append(request)
        return dispatched
