"""Service modules."""

from frigate_notify.services.mqtt_client import MqttClientWrapper
from frigate_notify.services.mqtt_handler import MqttMessageHandler
from frigate_notify.services.notifications import EventDispatcher, RequestSender

__all__ = [
    "EventDispatcher",
    "MqttClientWrapper",
    "MqttMessageHandler",
    "RequestSender",
]
