"""Frigate Notify: forward Frigate detection events to ntfy and Home Assistant."""
