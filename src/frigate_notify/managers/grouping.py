"""Notification grouping: lower the priority of follow-ups within a burst.

The anchor timestamp lives in an explicit GroupingState owned by whoever builds
the policy (the orchestrator in production, the test in tests), so it can be
inspected and reset without restarting the process.
"""

import logging
import threading

from frigate_notify.constants import (
    DEFAULT_GROUPING_MINUTES,
    DEFAULT_LOWER_PRIORITY,
    DEFAULT_NORMAL_PRIORITY,
    LOGGER_NAME,
)

logger = logging.getLogger(LOGGER_NAME)


class GroupingState:
    """Thread-safe holder for the burst anchor (Unix timestamp of the burst's first notification)."""

    def __init__(self, last_notification_time: float | None = None) -> None:
        self._last_notification_time = last_notification_time
        # Reentrant so the policy can hold it across a read and a write.
        self._lock = threading.RLock()

    @property
    def last_notification_time(self) -> float | None:
        with self._lock:
            return self._last_notification_time

    @last_notification_time.setter
    def last_notification_time(self, value: float | None) -> None:
        with self._lock:
            self._last_notification_time = value

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def reset(self) -> None:
        with self._lock:
            self._last_notification_time = None


class GroupingPolicy:
    """Decides the ntfy priority from time since the current burst started.

    First notification of a burst gets the normal priority and sets the anchor.
    Later notifications within GROUPING_MINUTES of the anchor get the lower
    priority and leave the anchor alone (fixed window, not sliding).
    """

    def __init__(self, config: dict, state: GroupingState | None = None) -> None:
        self._enabled = bool(config.get("GROUPING_ENABLED", True))
        self._window_minutes = int(config.get("GROUPING_MINUTES", DEFAULT_GROUPING_MINUTES))
        self._normal_priority = str(config.get("NTFY_NORMAL_PRIORITY", DEFAULT_NORMAL_PRIORITY))
        self._lower_priority = str(config.get("NTFY_LOWER_PRIORITY", DEFAULT_LOWER_PRIORITY))
        self.state = state if state is not None else GroupingState()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def decide_priority(self, now: float) -> str:
        """Return the priority for a notification sent at ``now`` (seconds since epoch)."""
        if not self._enabled:
            return self._normal_priority

        # Read-then-write must be atomic so two events cannot both start a burst.
        with self.state.lock:
            anchor = self.state.last_notification_time
            if anchor is None:
                self.state.last_notification_time = now
                logger.debug("Grouping: first notification, burst anchored at %s", now)
                return self._normal_priority

            elapsed_minutes = int((now - anchor) // 60)
            if elapsed_minutes >= self._window_minutes:
                self.state.last_notification_time = now
                logger.debug(
                    "Grouping: %s min since anchor (window %s), new burst",
                    elapsed_minutes,
                    self._window_minutes,
                )
                return self._normal_priority

        logger.debug(
            "Grouping: %s min since anchor (window %s), lowering priority",
            elapsed_minutes,
            self._window_minutes,
        )
        return self._lower_priority
