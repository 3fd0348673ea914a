"""
MQTT message parsing for Frigate events.

Decodes the JSON payload into a DetectionEvent and delegates to the
EventDispatcher. Exceptions are logged here so a bad message never stops the
paho network loop.
"""

import json
import logging
from typing import Any

from frigate_notify.constants import LOGGER_NAME
from frigate_notify.models import DetectionEvent

logger = logging.getLogger(LOGGER_NAME)


class MqttMessageHandler:
    """Handles incoming frigate/events messages."""

    def __init__(self, dispatcher: Any) -> None:
        self._dispatcher = dispatcher

    def on_message(self, client: Any, userdata: Any, msg: Any) -> None:
        """Decode and dispatch one message. Called by MqttClientWrapper."""
        logger.debug("MQTT message received: %s (%s bytes)", msg.topic, len(msg.payload))
        try:
            payload = json.loads(msg.payload.decode("utf-8"))
            event = DetectionEvent.from_payload(payload)
            logger.debug("Event: camera=%s, label=%s", event.camera, event.label)
            self._dispatcher.handle(event)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Invalid JSON in %s: %s", msg.topic, e)
        except Exception as e:
            logger.exception("Error processing message from %s: %s", msg.topic, e)
