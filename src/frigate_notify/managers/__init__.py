"""Notification policy managers (suppression, grouping)."""

from frigate_notify.managers.grouping import GroupingPolicy, GroupingState
from frigate_notify.managers.suppression import SuppressionPolicy

__all__ = ["GroupingPolicy", "GroupingState", "SuppressionPolicy"]
