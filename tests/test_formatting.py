"""Tests for notification formatting helpers (capitalization, snapshot/clip URLs)."""

import unittest

from frigate_notify.services.notifications.formatting import (
    capitalize_first,
    clip_url,
    format_snapshot_options,
    snapshot_url,
)


class TestCapitalizeFirst(unittest.TestCase):
    def test_basic(self):
        self.assertEqual(capitalize_first("person"), "Person")

    def test_empty_and_none(self):
        self.assertEqual(capitalize_first(""), "")
        self.assertEqual(capitalize_first(None), "")

    def test_only_first_character_changes(self):
        self.assertEqual(capitalize_first("front_door camera"), "Front_door camera")
        self.assertEqual(capitalize_first("dRIVEWAY"), "DRIVEWAY")
        self.assertEqual(capitalize_first("Already"), "Already")


class TestSnapshotOptions(unittest.TestCase):
    def test_no_options(self):
        self.assertEqual(format_snapshot_options(None), "")
        self.assertEqual(format_snapshot_options({}), "")

    def test_options_joined_in_order(self):
        self.assertEqual(
            format_snapshot_options({"bbox": 1, "crop": 1, "h": 300}),
            "?bbox=1&crop=1&h=300",
        )

    def test_boolean_values(self):
        self.assertEqual(
            format_snapshot_options({"bbox": True, "timestamp": False}),
            "?bbox=true&timestamp=false",
        )


class TestEventUrls(unittest.TestCase):
    def test_snapshot_url_without_options(self):
        self.assertEqual(
            snapshot_url("http://frigate:5000", "abc"),
            "http://frigate:5000/api/events/abc/snapshot.jpg",
        )

    def test_snapshot_url_with_options(self):
        self.assertEqual(
            snapshot_url("http://frigate:5000/", "abc", {"bbox": 1}),
            "http://frigate:5000/api/events/abc/snapshot.jpg?bbox=1",
        )

    def test_clip_url(self):
        self.assertEqual(
            clip_url("http://frigate:5000", "1700000000.1-xyz"),
            "http://frigate:5000/api/events/1700000000.1-xyz/clip.mp4",
        )


if __name__ == "__main__":
    unittest.main()
