"""
Notify Orchestrator - Main coordinator for Frigate Notify.

Builds the policies, providers, sender and dispatcher from config, and owns
the MQTT client lifecycle.
"""

import logging
import threading
import time

from frigate_notify.constants import (
    DEFAULT_MQTT_TOPIC,
    HTTP_TIMEOUT_SECONDS,
    LOGGER_NAME,
    MAX_CONCURRENT_REQUESTS,
)
from frigate_notify.managers.grouping import GroupingPolicy, GroupingState
from frigate_notify.managers.suppression import SuppressionPolicy
from frigate_notify.services.mqtt_client import MqttClientWrapper
from frigate_notify.services.mqtt_handler import MqttMessageHandler
from frigate_notify.services.notifications import (
    BaseNotificationProvider,
    EventDispatcher,
    HomeAssistantProvider,
    NtfyProvider,
    RequestSender,
)

logger = logging.getLogger(LOGGER_NAME)


class NotifyOrchestrator:
    """Main orchestrator coordinating MQTT intake and notification dispatch."""

    def __init__(self, config: dict, grouping_state: GroupingState | None = None):
        self.config = config
        self._shutdown = threading.Event()
        self._start_time = time.time()

        self.suppression = SuppressionPolicy(config)
        self.grouping_state = grouping_state or GroupingState()
        self.grouping = GroupingPolicy(config, self.grouping_state)
        self.providers = self._create_providers()
        self.sender = RequestSender(
            timeout=config.get("HTTP_TIMEOUT_SECONDS", HTTP_TIMEOUT_SECONDS),
            max_workers=config.get("MAX_CONCURRENT_REQUESTS", MAX_CONCURRENT_REQUESTS),
        )
        self.dispatcher = EventDispatcher(
            self.suppression, self.grouping, self.providers, self.sender
        )
        self.mqtt_handler = MqttMessageHandler(self.dispatcher)
        self.mqtt_wrapper = MqttClientWrapper(
            broker=config["MQTT_ADDRESS"],
            port=config["MQTT_PORT"],
            topics=[(config.get("MQTT_TOPIC") or DEFAULT_MQTT_TOPIC, 0)],
            username=config.get("MQTT_USERNAME"),
            password=config.get("MQTT_PASSWORD"),
            on_message_callback=self.mqtt_handler.on_message,
        )

        logger.debug("Disabled cameras: %s", {
            cam: sorted(objects) for cam, objects in self.suppression.disabled_cameras.items()
        })
        logger.debug("Disabled objects: %s", sorted(self.suppression.disabled_objects))

    def _create_providers(self) -> list[BaseNotificationProvider]:
        providers: list[BaseNotificationProvider] = []
        if self.config.get("NTFY_ENABLED"):
            providers.append(NtfyProvider(self.config))
            logger.info(
                "ntfy notifications enabled (%s/%s)",
                self.config.get("NTFY_URL"),
                self.config.get("NTFY_TOPIC"),
            )
        if self.config.get("HA_ENABLED"):
            providers.append(HomeAssistantProvider(self.config))
            logger.info(
                "Home Assistant notifications enabled for %s",
                self.config.get("HA_ENTITY_IDS"),
            )
        if not providers:
            logger.warning("No notification channels enabled; events will only be logged")
        return providers

    def start(self) -> None:
        """Connect to MQTT and start the network loop (non-blocking)."""
        logger.info(
            "Starting Frigate Notify (grouping %s)",
            f"{self.config.get('GROUPING_MINUTES')} min" if self.grouping.enabled else "disabled",
        )
        self.mqtt_wrapper.start()

    def wait(self) -> None:
        """Block until stop() is called."""
        self._shutdown.wait()

    def stop(self) -> None:
        """Disconnect MQTT and drain in-flight notification requests."""
        if self._shutdown.is_set():
            return
        logger.info("Shutting down...")
        self._shutdown.set()
        try:
            self.mqtt_wrapper.stop()
        except Exception as e:
            logger.error("Error stopping MQTT client: %s", e)
        self.sender.shutdown(wait=True)
        logger.info("Shutdown complete (uptime %.0fs)", time.time() - self._start_time)
