"""Tests for SuppressionPolicy."""

import unittest

from frigate_notify.managers.suppression import SuppressionPolicy


class TestSuppressionPolicy(unittest.TestCase):
    def setUp(self):
        self.config = {
            "DISABLED_CAMERAS": {
                "driveway": frozenset(),
                "backyard": frozenset({"cat", "dog"}),
            },
            "DISABLED_OBJECTS": frozenset({"bird"}),
        }
        self.policy = SuppressionPolicy(self.config)

    def test_no_rules_never_suppresses(self):
        policy = SuppressionPolicy({})
        assert not policy.should_suppress("driveway", "person")
        assert not policy.should_suppress("Garage", "car")

    def test_empty_object_set_suppresses_every_label(self):
        for label in ("person", "car", "cat", "anything"):
            assert self.policy.should_suppress("driveway", label)

    def test_camera_specific_objects(self):
        assert self.policy.should_suppress("backyard", "cat")
        assert self.policy.should_suppress("backyard", "dog")
        assert not self.policy.should_suppress("backyard", "person")

    def test_global_objects_apply_to_every_camera(self):
        assert self.policy.should_suppress("frontdoor", "bird")
        assert self.policy.should_suppress("backyard", "bird")

    def test_camera_rule_does_not_leak_to_other_cameras(self):
        assert not self.policy.should_suppress("frontdoor", "cat")

    def test_case_insensitive(self):
        """Camera and label matching ignore case on both the rule and the event."""
        pairs = [
            ("Driveway", "Person"),
            ("BACKYARD", "Cat"),
            ("Backyard", "DOG"),
            ("FrontDoor", "Bird"),
            ("Backyard", "Person"),
        ]
        for camera, label in pairs:
            self.assertEqual(
                self.policy.should_suppress(camera, label),
                self.policy.should_suppress(camera.lower(), label.lower()),
                msg=f"{camera}/{label}",
            )

    def test_mixed_case_rules_are_normalized(self):
        policy = SuppressionPolicy({
            "DISABLED_CAMERAS": {"Front_Door": frozenset({"Person"})},
            "DISABLED_OBJECTS": frozenset({"Car"}),
        })
        assert policy.should_suppress("front_door", "person")
        assert policy.should_suppress("FRONT_DOOR", "PERSON")
        assert policy.should_suppress("anywhere", "car")

    def test_missing_values_do_not_raise(self):
        assert not self.policy.should_suppress(None, None)
        assert not self.policy.should_suppress("backyard", None)
        assert self.policy.should_suppress("driveway", None)

    def test_properties_expose_rules(self):
        self.assertEqual(self.policy.disabled_objects, frozenset({"bird"}))
        self.assertEqual(self.policy.disabled_cameras["backyard"], frozenset({"cat", "dog"}))


if __name__ == "__main__":
    unittest.main()
