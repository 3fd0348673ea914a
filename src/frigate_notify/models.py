"""Event and outbound request models."""

from dataclasses import dataclass, field
from typing import Any


def _as_dict(value: Any) -> dict:
    """Frigate sends objects for before/after; anything else is treated as absent."""
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class DetectionEvent:
    """Single camera/object detection derived from a Frigate before/after transition."""
    camera: str | None
    label: str | None
    had_snapshot_before: bool
    has_snapshot_now: bool
    event_id: str | None

    @property
    def is_notification_worthy(self) -> bool:
        """True on the transition where a snapshot first becomes available."""
        return not self.had_snapshot_before and self.has_snapshot_now

    @classmethod
    def from_payload(cls, payload: Any) -> "DetectionEvent":
        """Build from a decoded frigate/events message. Missing fields become None/False."""
        payload = _as_dict(payload)
        before = _as_dict(payload.get("before"))
        after = _as_dict(payload.get("after"))
        return cls(
            camera=_as_str(after.get("camera")),
            label=_as_str(after.get("label")),
            had_snapshot_before=bool(before.get("has_snapshot")),
            has_snapshot_now=bool(after.get("has_snapshot")),
            event_id=_as_str(after.get("id")),
        )


@dataclass(frozen=True)
class OutboundRequest:
    """Fully-formed HTTP request description produced by a provider. Holds no connection state."""
    provider: str
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None  # Plain-text body (ntfy)
    json: dict[str, Any] | None = None  # JSON body (Home Assistant)
    description: str = ""  # Short label for log lines (e.g. entity id)
