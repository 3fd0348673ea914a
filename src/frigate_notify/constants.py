"""
Shared constants for MQTT, outbound HTTP, and notification defaults.

Centralizes the Supervisor API base URL and the Frigate event URL templates so
providers and tests do not duplicate magic strings.
"""

# Name of the single application logger.
LOGGER_NAME: str = "frigate-notify"

# Default Frigate topic carrying before/after event payloads.
DEFAULT_MQTT_TOPIC: str = "frigate/events"
DEFAULT_MQTT_PORT: int = 1883
MQTT_CLIENT_ID: str = "frigate-notify"

# Home Assistant Supervisor proxy to the Core REST API (add-on network only).
SUPERVISOR_NOTIFY_URL: str = "http://supervisor/core/api/services/notify"

# Frigate event media paths, relative to FRIGATE_URL.
SNAPSHOT_PATH_TEMPLATE: str = "/api/events/{event_id}/snapshot.jpg"
CLIP_PATH_TEMPLATE: str = "/api/events/{event_id}/clip.mp4"

# ntfy priorities accept 1-5 or the names min/low/default/high/max.
DEFAULT_NORMAL_PRIORITY: str = "default"
DEFAULT_LOWER_PRIORITY: str = "low"

# Grouping window in whole minutes.
DEFAULT_GROUPING_MINUTES: int = 10

# Outbound HTTP (single attempt, no retry).
HTTP_TIMEOUT_SECONDS: int = 10
MAX_CONCURRENT_REQUESTS: int = 4

# Paths searched for the options document, first match wins. The add-on
# supervisor writes /data/options.json.
CONFIG_PATHS: tuple[str, ...] = (
    "/data/options.json",
    "./data/options.json",
    "/app/config.yaml",
    "./config.yaml",
)
