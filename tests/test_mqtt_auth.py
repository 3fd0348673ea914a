import ssl
import unittest
from unittest.mock import MagicMock, patch

from frigate_notify.services.mqtt_client import MqttClientWrapper, parse_broker_address


class TestMqttAuth(unittest.TestCase):
    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_mqtt_auth_credentials_set(self, MockClient):
        mock_client_instance = MockClient.return_value

        MqttClientWrapper(
            broker="localhost", port=1883, username="user", password="password"
        )

        mock_client_instance.username_pw_set.assert_called_once_with("user", "password")

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_mqtt_auth_no_credentials(self, MockClient):
        mock_client_instance = MockClient.return_value

        MqttClientWrapper(broker="localhost", port=1883)

        mock_client_instance.username_pw_set.assert_not_called()

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_mqtt_port_8883_configures_tls(self, MockClient):
        """When port is 8883, tls_set is called with CERT_REQUIRED and TLS 1.2."""
        mock_client_instance = MockClient.return_value

        MqttClientWrapper(
            broker="mqtt.example.com",
            port=8883,
        )

        mock_client_instance.tls_set.assert_called_once_with(
            cert_reqs=ssl.CERT_REQUIRED,
            tls_version=ssl.PROTOCOL_TLSv1_2,
        )

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_mqtt_port_1883_does_not_call_tls_set(self, MockClient):
        """When port is not 8883, tls_set is not called."""
        mock_client_instance = MockClient.return_value

        MqttClientWrapper(
            broker="localhost",
            port=1883,
        )

        mock_client_instance.tls_set.assert_not_called()

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_url_broker_address(self, MockClient):
        wrapper = MqttClientWrapper(broker="mqtt://core-mosquitto:1884", port=1883)
        self.assertEqual(wrapper.broker, "core-mosquitto")
        self.assertEqual(wrapper.port, 1884)
        wrapper.start()
        MockClient.return_value.connect_async.assert_called_once_with(
            "core-mosquitto", 1884, keepalive=60
        )


class TestMqttConnection(unittest.TestCase):
    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_subscribes_on_connect(self, MockClient):
        wrapper = MqttClientWrapper(broker="localhost", topics=[("frigate/events", 0)])
        client = MagicMock()
        wrapper._on_connect(client, None, None, 0, None)
        client.subscribe.assert_called_once_with("frigate/events", 0)
        self.assertTrue(wrapper.mqtt_connected)

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_failed_connect_does_not_subscribe(self, MockClient):
        wrapper = MqttClientWrapper(broker="localhost")
        client = MagicMock()
        with self.assertLogs("frigate-notify", level="ERROR"):
            wrapper._on_connect(client, None, None, 5, None)
        client.subscribe.assert_not_called()
        self.assertFalse(wrapper.mqtt_connected)

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_start_failure_is_logged(self, MockClient):
        MockClient.return_value.connect_async.side_effect = OSError("unreachable")
        wrapper = MqttClientWrapper(broker="localhost")
        with self.assertLogs("frigate-notify", level="ERROR"):
            wrapper.start()

    @patch("frigate_notify.services.mqtt_client.mqtt.Client")
    def test_message_forwarded_to_callback(self, MockClient):
        callback = MagicMock()
        wrapper = MqttClientWrapper(broker="localhost", on_message_callback=callback)
        msg = MagicMock()
        wrapper._on_message("client", "userdata", msg)
        callback.assert_called_once_with("client", "userdata", msg)


class TestParseBrokerAddress(unittest.TestCase):
    def test_bare_host(self):
        self.assertEqual(parse_broker_address("broker", 1883), ("broker", 1883, False))

    def test_mqtt_url_without_port(self):
        self.assertEqual(parse_broker_address("mqtt://broker", 1883), ("broker", 1883, False))

    def test_mqtts_url(self):
        self.assertEqual(parse_broker_address("mqtts://broker", 8883), ("broker", 8883, True))


if __name__ == "__main__":
    unittest.main()
