"""Tests for NotifyOrchestrator wiring and the end-to-end message path."""

import json
import unittest
from unittest.mock import MagicMock, patch

from frigate_notify.orchestrator import NotifyOrchestrator
from frigate_notify.services.notifications import HomeAssistantProvider, NtfyProvider


def _config(**overrides) -> dict:
    config = {
        "MQTT_ADDRESS": "localhost",
        "MQTT_PORT": 1883,
        "MQTT_USERNAME": None,
        "MQTT_PASSWORD": None,
        "MQTT_TOPIC": "frigate/events",
        "FRIGATE_URL": "http://frigate:5000",
        "NTFY_ENABLED": True,
        "NTFY_URL": "https://ntfy.example",
        "NTFY_TOPIC": "home",
        "NTFY_TAGS": {},
        "NTFY_NORMAL_PRIORITY": "default",
        "NTFY_LOWER_PRIORITY": "low",
        "GROUPING_ENABLED": True,
        "GROUPING_MINUTES": 10,
        "DISABLED_CAMERAS": {},
        "DISABLED_OBJECTS": frozenset(),
        "HA_ENABLED": False,
        "HA_ENTITY_IDS": [],
        "SUPERVISOR_TOKEN": None,
        "SNAPSHOT_OPTIONS": {},
        "HTTP_TIMEOUT_SECONDS": 10,
        "MAX_CONCURRENT_REQUESTS": 2,
    }
    config.update(overrides)
    return config


@patch("frigate_notify.services.mqtt_client.mqtt.Client")
class TestNotifyOrchestrator(unittest.TestCase):
    def test_providers_follow_enable_flags(self, MockClient):
        orch = NotifyOrchestrator(_config(HA_ENABLED=True, HA_ENTITY_IDS=["mobile_app_a"]))
        try:
            self.assertEqual(
                [type(p) for p in orch.providers], [NtfyProvider, HomeAssistantProvider]
            )
        finally:
            orch.sender.shutdown()

    def test_no_channels_warns(self, MockClient):
        with self.assertLogs("frigate-notify", level="WARNING"):
            orch = NotifyOrchestrator(_config(NTFY_ENABLED=False))
        orch.sender.shutdown()
        self.assertEqual(orch.providers, [])

    def test_message_reaches_sender(self, MockClient):
        orch = NotifyOrchestrator(_config())
        orch.sender = MagicMock()
        orch.dispatcher._sender = orch.sender
        msg = MagicMock()
        msg.topic = "frigate/events"
        msg.payload = json.dumps({
            "before": {"has_snapshot": False},
            "after": {"id": "abc", "camera": "driveway", "label": "person", "has_snapshot": True},
        }).encode("utf-8")

        orch.mqtt_wrapper._on_message(None, None, msg)

        orch.sender.submit.assert_called_once()
        req = orch.sender.submit.call_args[0][0]
        self.assertEqual(req.url, "https://ntfy.example/home")
        self.assertEqual(req.headers["Priority"], "default")
        self.assertIsNotNone(orch.grouping_state.last_notification_time)

    def test_start_and_stop(self, MockClient):
        orch = NotifyOrchestrator(_config())
        orch.start()
        MockClient.return_value.connect_async.assert_called_once()
        MockClient.return_value.loop_start.assert_called_once()
        orch.stop()
        orch.stop()
        MockClient.return_value.loop_stop.assert_called_once()
        MockClient.return_value.disconnect.assert_called_once()


if __name__ == "__main__":
    unittest.main()
