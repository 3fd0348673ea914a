"""Suppression rules: per-camera disabled objects and globally disabled objects."""

import logging

from frigate_notify.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class SuppressionPolicy:
    """Decides whether a camera/label notification is withheld.

    Uses DISABLED_CAMERAS (lowercased camera -> lowercased labels, empty set
    means every label) and DISABLED_OBJECTS (lowercased labels on any camera).
    Both sources are independent; a match in either one is final.
    """

    def __init__(self, config: dict) -> None:
        self._disabled_cameras: dict[str, frozenset[str]] = {
            str(cam).lower(): frozenset(str(o).lower() for o in objects)
            for cam, objects in (config.get("DISABLED_CAMERAS") or {}).items()
        }
        self._disabled_objects: frozenset[str] = frozenset(
            str(o).lower() for o in config.get("DISABLED_OBJECTS") or ()
        )

    @property
    def disabled_cameras(self) -> dict[str, frozenset[str]]:
        return dict(self._disabled_cameras)

    @property
    def disabled_objects(self) -> frozenset[str]:
        return self._disabled_objects

    def should_suppress(self, camera: str | None, label: str | None) -> bool:
        """Return True to withhold the notification, False to send it.

        Matching is case-insensitive on both camera and label. None is treated
        as an empty string so malformed events never raise here.
        """
        camera_key = (camera or "").lower()
        label_key = (label or "").lower()
        suppressed = False

        objects = self._disabled_cameras.get(camera_key)
        if objects is not None:
            if not objects:
                logger.debug("Camera '%s' is disabled for all objects", camera_key)
                suppressed = True
            elif label_key in objects:
                logger.debug(
                    "Camera '%s' has '%s' disabled (disabled objects: %s)",
                    camera_key,
                    label_key,
                    sorted(objects),
                )
                suppressed = True
            else:
                logger.debug(
                    "Camera '%s' does not have '%s' disabled", camera_key, label_key
                )

        if label_key in self._disabled_objects:
            logger.debug("Object '%s' is disabled on all cameras", label_key)
            suppressed = True

        return suppressed
