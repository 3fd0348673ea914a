"""
Base interface for notification providers and standard result type.

Providers only compose requests (OutboundRequest); the RequestSender performs
the HTTP calls. This keeps channel payload rules testable without network
access and lets the dispatcher treat every channel the same way.
"""

from abc import ABC, abstractmethod
from typing import NotRequired, TypedDict

from frigate_notify.models import DetectionEvent, OutboundRequest


class NotificationResult(TypedDict):
    """Outcome of one outbound request, used for logging.

    provider and status are always set; status_code and message are optional
    (no status code when the request never reached the server).
    """

    provider: str
    status: str  # "success" or "failure"
    status_code: NotRequired[int]
    message: NotRequired[str | None]


class BaseNotificationProvider(ABC):
    """Abstract base for notification channels (ntfy, Home Assistant)."""

    #: Short identifier used in logs and NotificationResult.provider.
    name: str = ""

    @abstractmethod
    def build_requests(
        self, event: DetectionEvent, priority: str
    ) -> list[OutboundRequest]:
        """Compose the outbound requests for an event that passed suppression.

        Args:
            event: Notification-worthy event with camera, label and event_id set.
            priority: Priority decided by the grouping policy; channels without
                a priority concept ignore it.

        Returns:
            One or more OutboundRequest descriptions. Never performs I/O.
        """
        ...
