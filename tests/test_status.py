#!/usr/bin/env python3
"""Tests for Status enum and progress_status."""
from homeauto import Status, progress_status


class TestStatus:
    """Tests for Status enum ordering."""

    def test_urgency_order(self):
        """Lower value = more urgent."""
        assert Status.OVERDUE.value < Status.DUE_SOON.value
        assert Status.DUE_SOON.value < Status.OK.value
        assert Status.OK.value < Status.UNKNOWN.value


class TestProgressStatus:
    """Tests for progress_status."""

    def test_ok_at_threshold(self):
        """80% exactly is not yet due soon."""
        assert progress_status(80) == Status.OK
        assert progress_status(0) == Status.OK

    def test_due_soon_above_threshold(self):
        assert progress_status(80.1) == Status.DUE_SOON
        assert progress_status(99.9) == Status.DUE_SOON

    def test_overdue_at_100(self):
        assert progress_status(100) == Status.OVERDUE

    def test_custom_threshold(self):
        assert progress_status(60, soon_threshold=50) == Status.DUE_SOON

    def test_unknown_without_schedule(self):
        assert progress_status(0, has_schedule=False) == Status.UNKNOWN
