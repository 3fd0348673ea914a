"""MQTT client wrapper: connection lifecycle, subscriptions, and message
callback registration."""

import logging
import ssl
from collections.abc import Callable
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import paho.mqtt.client as mqtt

from frigate_notify.constants import (
    DEFAULT_MQTT_PORT,
    DEFAULT_MQTT_TOPIC,
    LOGGER_NAME,
    MQTT_CLIENT_ID,
)

if TYPE_CHECKING:
    from paho.mqtt.client import ConnectFlags, DisconnectFlags
    from paho.mqtt.reasoncodes import ReasonCode

logger = logging.getLogger(LOGGER_NAME)

TLS_PORT = 8883
TLS_SCHEMES = ("mqtts", "ssl", "tls")


def parse_broker_address(address: str, port: int = DEFAULT_MQTT_PORT) -> tuple[str, int, bool]:
    """Split a broker address into (host, port, use_tls).

    Accepts a bare host ("core-mosquitto") or a URL ("mqtt://host:1883",
    "mqtts://host"). A port in the URL wins over ``port``.
    """
    address = (address or "").strip()
    if "://" not in address:
        return address, port, port == TLS_PORT
    parsed = urlparse(address)
    host = parsed.hostname or ""
    resolved_port = parsed.port or port
    use_tls = parsed.scheme.lower() in TLS_SCHEMES or resolved_port == TLS_PORT
    return host, resolved_port, use_tls


class MqttClientWrapper:
    """Wraps Paho MQTT client: setup, on_connect/on_disconnect, start/stop loop.
    Message routing is delegated via callback."""

    def __init__(
        self,
        broker: str,
        port: int = DEFAULT_MQTT_PORT,
        client_id: str = MQTT_CLIENT_ID,
        topics: list[tuple[str, int]] | None = None,
        on_message_callback: Callable[..., Any] | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> None:
        self._broker, self._port, use_tls = parse_broker_address(broker, port)
        self._topics = topics or [(DEFAULT_MQTT_TOPIC, 0)]
        self._on_message_callback = on_message_callback
        self.mqtt_connected = False

        # paho-mqtt 2.x: callback_api_version required; type stubs may not
        # export CallbackAPIVersion
        callback_api_version = getattr(mqtt, "CallbackAPIVersion", None)
        if callback_api_version is not None:
            self._client = mqtt.Client(
                callback_api_version.VERSION2, client_id=client_id
            )
        else:
            self._client = mqtt.Client(client_id=client_id)
        if username:
            self._client.username_pw_set(username, password)
        if use_tls:
            logger.info("Configuring MQTT connection with TLS/SSL")
            self._client.tls_set(
                cert_reqs=ssl.CERT_REQUIRED, tls_version=ssl.PROTOCOL_TLSv1_2
            )
        self._client.on_connect = self._on_connect
        self._client.on_disconnect = self._on_disconnect
        self._client.on_message = self._on_message
        self._client.reconnect_delay_set(min_delay=1, max_delay=120)

    @property
    def broker(self) -> str:
        return self._broker

    @property
    def port(self) -> int:
        return self._port

    def _on_connect(
        self,
        client: mqtt.Client,
        userdata: Any,
        flags: "ConnectFlags",
        reason_code: "ReasonCode",
        properties: Any,
    ) -> None:
        """Handle MQTT connection."""
        rc = getattr(reason_code, "value", reason_code)
        if rc == 0:
            self.mqtt_connected = True
            logger.info(f"Connected to MQTT at '{self._broker}:{self._port}'")

            for topic, qos in self._topics:
                client.subscribe(topic, qos)
                logger.info(f"Subscribed to topic '{topic}'")
        else:
            logger.error(f"MQTT connection failed with code: {rc}")

    def _on_disconnect(
        self,
        client: mqtt.Client,
        userdata: Any,
        flags: "DisconnectFlags",
        reason_code: "ReasonCode",
        properties: Any,
    ) -> None:
        """Handle MQTT disconnection."""
        self.mqtt_connected = False
        rc = getattr(reason_code, "value", reason_code)
        if rc != 0:
            logger.warning(f"Unexpected MQTT disconnect (rc={rc}), reconnecting...")
        else:
            logger.info("MQTT disconnected")

    def _on_message(
        self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage
    ) -> None:
        """Forward messages to the registered callback."""
        if self._on_message_callback:
            self._on_message_callback(client, userdata, msg)

    @property
    def client(self) -> mqtt.Client:
        """Expose the underlying Paho client."""
        return self._client

    def start(self) -> None:
        """Connect and start the network loop. Connection errors are logged, not raised."""
        try:
            self._client.connect_async(
                self._broker,
                self._port,
                keepalive=60,
            )
            self._client.loop_start()
        except Exception as e:
            logger.error(f"Error connecting to MQTT broker at {self._broker}: {e}")

    def stop(self) -> None:
        """Stop the loop and disconnect."""
        self._client.loop_stop()
        self._client.disconnect()
