"""Fire-and-forget HTTP sender for composed notification requests.

Each OutboundRequest runs as its own task on a small thread pool. The caller
gets a Future back but never waits on it; outcomes are only logged. One
attempt per request, no retries.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor

import requests

from frigate_notify.constants import (
    HTTP_TIMEOUT_SECONDS,
    LOGGER_NAME,
    MAX_CONCURRENT_REQUESTS,
)
from frigate_notify.models import OutboundRequest
from frigate_notify.services.notifications.base import NotificationResult

logger = logging.getLogger(LOGGER_NAME)


class RequestSender:
    """Runs OutboundRequests on a ThreadPoolExecutor and logs each result."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        max_workers: int = MAX_CONCURRENT_REQUESTS,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, int(max_workers)),
            thread_name_prefix="NotificationSender",
        )

    def perform(self, request: OutboundRequest) -> NotificationResult:
        """Execute one request synchronously. Never raises for HTTP or network errors."""
        try:
            resp = self._session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body.encode("utf-8") if request.body is not None else None,
                json=request.json,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "Error sending %s request to %s (%s): %s",
                request.provider,
                request.url,
                request.description,
                e,
            )
            return {"provider": request.provider, "status": "failure", "message": str(e)}

        if not resp.ok:
            logger.error(
                "Non-successful response from %s request (%s): %s %s",
                request.provider,
                request.description,
                resp.status_code,
                resp.reason,
            )
            return {
                "provider": request.provider,
                "status": "failure",
                "status_code": resp.status_code,
                "message": (resp.text or "")[:500],
            }

        logger.info("%s notification sent (%s)", request.provider, request.description)
        return {
            "provider": request.provider,
            "status": "success",
            "status_code": resp.status_code,
        }

    def submit(self, request: OutboundRequest) -> Future:
        """Schedule a request without waiting for it."""
        future = self._executor.submit(self.perform, request)
        future.add_done_callback(self._log_unexpected_failure)
        return future

    @staticmethod
    def _log_unexpected_failure(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Notification request task failed: %s", exc, exc_info=exc)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting new requests; optionally wait for in-flight ones."""
        self._executor.shutdown(wait=wait)
        self._session.close()
