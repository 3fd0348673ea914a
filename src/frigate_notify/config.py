"""Configuration loading and validation."""

import os
import logging
import sys

import yaml
from voluptuous import Schema, Required, Optional, Any, All, Range, ALLOW_EXTRA, Invalid

from frigate_notify.constants import (
    CONFIG_PATHS,
    DEFAULT_GROUPING_MINUTES,
    DEFAULT_LOWER_PRIORITY,
    DEFAULT_MQTT_PORT,
    DEFAULT_MQTT_TOPIC,
    DEFAULT_NORMAL_PRIORITY,
    HTTP_TIMEOUT_SECONDS,
    LOGGER_NAME,
    MAX_CONCURRENT_REQUESTS,
)

logger = logging.getLogger(LOGGER_NAME)

_OptionalStr = Any(str, None)

# Configuration Schema (flat add-on options document)
CONFIG_SCHEMA = Schema({
    # MQTT broker carrying Frigate events.
    Optional('mqtt_address'): str,           # Broker URL or host (e.g. mqtt://core-mosquitto or 192.168.1.10).
    Optional('mqtt_port'): int,              # Broker port (default 1883; 8883 enables TLS).
    Optional('mqtt_username'): _OptionalStr, # Optional broker username.
    Optional('mqtt_password'): _OptionalStr, # Optional broker password.
    Optional('mqtt_topic'): str,             # Topic with before/after event payloads (default frigate/events).
    # Base URL of Frigate used to build snapshot and clip links.
    Optional('frigate_url'): str,
    # ntfy push channel.
    Optional('ntfy_enabled'): bool,
    Optional('ntfy_url'): _OptionalStr,      # ntfy server base URL (e.g. https://ntfy.sh).
    Optional('ntfy_topic'): _OptionalStr,    # Topic appended to ntfy_url.
    Optional('ntfy_user'): _OptionalStr,     # Basic auth user (used with ntfy_password).
    Optional('ntfy_password'): _OptionalStr, # Basic auth password.
    Optional('ntfy_token'): _OptionalStr,    # Access token (Bearer), used when user/password are unset.
    # Per-label ntfy tags (emoji shortcodes or plain tags); tags may be a list or a comma-separated string.
    Optional('ntfy_tags'): [{
        Required('object'): str,
        Optional('tags'): Any([str], str, None),
    }],
    Optional('ntfy_normal_priority'): Any(int, str),  # Priority for the first notification of a burst.
    Optional('ntfy_lower_priority'): Any(int, str),   # Priority for follow-ups inside the grouping window.
    # Grouping: follow-ups within grouping_minutes of the burst anchor use the lower priority.
    Optional('grouping_enabled'): bool,
    Optional('grouping_minutes'): All(int, Range(min=0)),
    # Suppression: an empty disabled_objects list disables the whole camera.
    Optional('disabled_cameras'): [{
        Required('camera_name'): str,
        Optional('disabled_objects'): Any([str], None),
    }],
    Optional('disabled_objects'): Any([str], None),   # Labels suppressed on every camera.
    # Home Assistant notify services through the Supervisor API.
    Optional('ha_enabled'): bool,
    Optional('ha_entity_ids'): Any([str], None),      # notify service names (e.g. mobile_app_pixel).
    # Query options appended to the snapshot URL (e.g. bbox: 1, crop: 1).
    Optional('snapshot_options'): Any({str: Any(str, int, float, bool)}, None),
    Optional('debug_logging'): bool,
    Optional('log_level'): Any('DEBUG', 'INFO', 'WARNING', 'ERROR'),
    Optional('http_timeout_seconds'): All(int, Range(min=1)),
    Optional('max_concurrent_requests'): All(int, Range(min=1)),
}, extra=ALLOW_EXTRA)


def build_tag_map(entries: list | None) -> dict[str, list[str]]:
    """Map object label -> list of ntfy tags. Later entries for a label win."""
    tag_map: dict[str, list[str]] = {}
    for entry in entries or []:
        tags = entry.get('tags')
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(',')]
        tag_map[entry['object']] = [t for t in (tags or []) if t]
    return tag_map


def build_disabled_cameras(entries: list | None) -> dict[str, frozenset[str]]:
    """Map lowercased camera name -> lowercased disabled labels (empty = whole camera)."""
    cameras: dict[str, frozenset[str]] = {}
    for entry in entries or []:
        objects = entry.get('disabled_objects') or []
        cameras[entry['camera_name'].strip().lower()] = frozenset(
            o.strip().lower() for o in objects if o and o.strip()
        )
    return cameras


def build_disabled_objects(entries: list | None) -> frozenset[str]:
    return frozenset(o.strip().lower() for o in entries or [] if o and o.strip())


def _resolve_paths(path: str | None) -> list[str]:
    if path:
        return [path]
    env_path = os.getenv('FRIGATE_NOTIFY_CONFIG')
    if env_path:
        return [env_path]
    return list(CONFIG_PATHS)


def load_config(path: str | None = None) -> dict:
    """Load configuration from the options document merged with environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Options document (JSON or YAML)
    3. Default values

    Note: MQTT_ADDRESS and FRIGATE_URL are REQUIRED and must be provided via the
    options document or environment variables.
    """
    config = {
        # Network settings - NO DEFAULTS for addresses (required from config)
        'MQTT_ADDRESS': None,
        'MQTT_PORT': DEFAULT_MQTT_PORT,
        'MQTT_USERNAME': None,
        'MQTT_PASSWORD': None,
        'MQTT_TOPIC': DEFAULT_MQTT_TOPIC,
        'FRIGATE_URL': None,

        # ntfy channel (disabled unless configured)
        'NTFY_ENABLED': False,
        'NTFY_URL': None,
        'NTFY_TOPIC': None,
        'NTFY_USER': None,
        'NTFY_PASSWORD': None,
        'NTFY_TOKEN': None,
        'NTFY_TAGS': {},
        'NTFY_NORMAL_PRIORITY': DEFAULT_NORMAL_PRIORITY,
        'NTFY_LOWER_PRIORITY': DEFAULT_LOWER_PRIORITY,

        # Grouping defaults
        'GROUPING_ENABLED': True,
        'GROUPING_MINUTES': DEFAULT_GROUPING_MINUTES,

        # Suppression defaults (empty = notify for everything)
        'DISABLED_CAMERAS': {},
        'DISABLED_OBJECTS': frozenset(),

        # Home Assistant channel
        'HA_ENABLED': False,
        'HA_ENTITY_IDS': [],
        'SUPERVISOR_TOKEN': None,

        'SNAPSHOT_OPTIONS': {},
        'DEBUG_LOGGING': False,
        'LOG_LEVEL': 'INFO',
        'HTTP_TIMEOUT_SECONDS': HTTP_TIMEOUT_SECONDS,
        'MAX_CONCURRENT_REQUESTS': MAX_CONCURRENT_REQUESTS,
    }

    config_loaded = False

    for candidate in _resolve_paths(path):
        if os.path.exists(candidate):
            try:
                logger.info(f"Loading config from {candidate}")
                # safe_load parses the supervisor's options.json as well as YAML.
                with open(candidate, 'r') as f:
                    options = yaml.safe_load(f) or {}

                # Validate schema
                try:
                    options = CONFIG_SCHEMA(options)
                except Invalid as e:
                    logger.error(f"Invalid configuration in {candidate}: {e}")
                    sys.exit(1)

                config['MQTT_ADDRESS'] = options.get('mqtt_address', config['MQTT_ADDRESS'])
                config['MQTT_PORT'] = options.get('mqtt_port', config['MQTT_PORT'])
                config['MQTT_USERNAME'] = options.get('mqtt_username') or config['MQTT_USERNAME']
                config['MQTT_PASSWORD'] = options.get('mqtt_password') or config['MQTT_PASSWORD']
                config['MQTT_TOPIC'] = options.get('mqtt_topic') or config['MQTT_TOPIC']
                config['FRIGATE_URL'] = options.get('frigate_url', config['FRIGATE_URL'])

                config['NTFY_ENABLED'] = options.get('ntfy_enabled', config['NTFY_ENABLED'])
                config['NTFY_URL'] = options.get('ntfy_url') or config['NTFY_URL']
                config['NTFY_TOPIC'] = options.get('ntfy_topic') or config['NTFY_TOPIC']
                config['NTFY_USER'] = options.get('ntfy_user') or config['NTFY_USER']
                config['NTFY_PASSWORD'] = options.get('ntfy_password') or config['NTFY_PASSWORD']
                config['NTFY_TOKEN'] = options.get('ntfy_token') or config['NTFY_TOKEN']
                config['NTFY_TAGS'] = build_tag_map(options.get('ntfy_tags'))
                config['NTFY_NORMAL_PRIORITY'] = str(options.get('ntfy_normal_priority', config['NTFY_NORMAL_PRIORITY']))
                config['NTFY_LOWER_PRIORITY'] = str(options.get('ntfy_lower_priority', config['NTFY_LOWER_PRIORITY']))

                config['GROUPING_ENABLED'] = options.get('grouping_enabled', config['GROUPING_ENABLED'])
                config['GROUPING_MINUTES'] = options.get('grouping_minutes', config['GROUPING_MINUTES'])

                config['DISABLED_CAMERAS'] = build_disabled_cameras(options.get('disabled_cameras'))
                config['DISABLED_OBJECTS'] = build_disabled_objects(options.get('disabled_objects'))

                config['HA_ENABLED'] = options.get('ha_enabled', config['HA_ENABLED'])
                config['HA_ENTITY_IDS'] = list(options.get('ha_entity_ids') or [])

                config['SNAPSHOT_OPTIONS'] = dict(options.get('snapshot_options') or {})
                config['DEBUG_LOGGING'] = options.get('debug_logging', config['DEBUG_LOGGING'])
                config['LOG_LEVEL'] = options.get('log_level', config['LOG_LEVEL'])
                config['HTTP_TIMEOUT_SECONDS'] = options.get('http_timeout_seconds', config['HTTP_TIMEOUT_SECONDS'])
                config['MAX_CONCURRENT_REQUESTS'] = options.get('max_concurrent_requests', config['MAX_CONCURRENT_REQUESTS'])

                config_loaded = True
                break

            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {candidate}: {e}")

    if not config_loaded:
        logger.info("No options file found, using defaults")

    # Environment variables override everything (for secrets/deployment)
    config['MQTT_ADDRESS'] = os.getenv('MQTT_ADDRESS') or config['MQTT_ADDRESS']
    config['MQTT_PORT'] = int(os.getenv('MQTT_PORT', str(config['MQTT_PORT'])))
    config['MQTT_USERNAME'] = os.getenv('MQTT_USERNAME') or config['MQTT_USERNAME']
    config['MQTT_PASSWORD'] = os.getenv('MQTT_PASSWORD') or config['MQTT_PASSWORD']
    frigate_url = os.getenv('FRIGATE_URL') or config['FRIGATE_URL']
    config['FRIGATE_URL'] = frigate_url.rstrip('/') if frigate_url else None
    config['NTFY_URL'] = config['NTFY_URL'].rstrip('/') if config['NTFY_URL'] else None
    config['NTFY_TOKEN'] = os.getenv('NTFY_TOKEN') or config['NTFY_TOKEN']
    config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', config['LOG_LEVEL'])
    # SUPERVISOR_TOKEN is injected into add-on containers; TOKEN is the legacy name.
    config['SUPERVISOR_TOKEN'] = os.getenv('SUPERVISOR_TOKEN') or os.getenv('TOKEN') or None
    if config['DEBUG_LOGGING']:
        config['LOG_LEVEL'] = 'DEBUG'

    # Validate required settings
    missing = []
    if not config['MQTT_ADDRESS']:
        missing.append('MQTT_ADDRESS (mqtt_address)')
    if not config['FRIGATE_URL']:
        missing.append('FRIGATE_URL (frigate_url)')
    if config['NTFY_ENABLED']:
        if not config['NTFY_URL']:
            missing.append('NTFY_URL (ntfy_url)')
        if not config['NTFY_TOPIC']:
            missing.append('NTFY_TOPIC (ntfy_topic)')
    if config['HA_ENABLED'] and not config['HA_ENTITY_IDS']:
        missing.append('HA_ENTITY_IDS (ha_entity_ids)')

    if missing:
        raise ValueError(
            f"Missing required configuration: {', '.join(missing)}. "
            f"Set these in the options file or as environment variables."
        )

    if config['HA_ENABLED'] and not config['SUPERVISOR_TOKEN']:
        logger.warning("Home Assistant notifications enabled but SUPERVISOR_TOKEN is not set")

    return config
