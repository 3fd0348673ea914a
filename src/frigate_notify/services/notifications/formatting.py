"""Text and URL helpers shared by notification providers."""

from typing import Any

from frigate_notify.constants import CLIP_PATH_TEMPLATE, SNAPSHOT_PATH_TEMPLATE


def capitalize_first(value: str | None) -> str:
    """Upper-case the first character only ("front_door" -> "Front_door"); None -> ""."""
    if not value:
        return ""
    return value[0].upper() + value[1:]


def _format_option_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_snapshot_options(options: dict[str, Any] | None) -> str:
    """Query string for the snapshot URL, or "" when there are no options.

    Keys and values are appended verbatim in configured order (no URL encoding),
    e.g. {"bbox": 1, "crop": 1} -> "?bbox=1&crop=1".
    """
    if not options:
        return ""
    return "?" + "&".join(
        f"{key}={_format_option_value(value)}" for key, value in options.items()
    )


def snapshot_url(frigate_url: str, event_id: str, options: dict[str, Any] | None = None) -> str:
    base = (frigate_url or "").rstrip("/")
    path = SNAPSHOT_PATH_TEMPLATE.format(event_id=event_id)
    return f"{base}{path}{format_snapshot_options(options)}"


def clip_url(frigate_url: str, event_id: str) -> str:
    base = (frigate_url or "").rstrip("/")
    return f"{base}{CLIP_PATH_TEMPLATE.format(event_id=event_id)}"
