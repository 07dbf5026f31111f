"""Тесты для ConfirmationTracker.

Coverage:
- Default False
- Signed delta (+1/-1/0)
- Порядок confirmed_by
- snapshot/restore
"""

import pytest

from src.multisig.confirmation_tracker import ConfirmationTracker


@pytest.fixture
def tracker():
    return ConfirmationTracker()


def test_default_false(tracker):
    assert tracker.has_confirmed(0, "A") is False
    assert tracker.count(0) == 0
    assert tracker.confirmed_by(0) == []


def test_set_confirmed_delta(tracker):
    assert tracker.set_confirmed(0, "A", True) == 1
    assert tracker.set_confirmed(0, "A", True) == 0
    assert tracker.set_confirmed(0, "A", False) == -1
    assert tracker.set_confirmed(0, "A", False) == 0


def test_revoke_without_confirmation_is_noop(tracker):
    """False → False: delta 0, счётчик не уходит в минус"""
    assert tracker.set_confirmed(0, "A", False) == 0
    assert tracker.count(0) == 0


def test_rows_are_independent(tracker):
    tracker.set_confirmed(0, "A", True)
    tracker.set_confirmed(1, "B", True)

    assert tracker.has_confirmed(0, "A")
    assert not tracker.has_confirmed(1, "A")
    assert tracker.confirmed_by(1) == ["B"]


def test_confirmed_by_order(tracker):
    for owner in ("C", "A", "B"):
        tracker.set_confirmed(0, owner, True)
    tracker.set_confirmed(0, "A", False)

    assert tracker.confirmed_by(0) == ["C", "B"]
    assert tracker.count(0) == 2


def test_snapshot_restore(tracker):
    tracker.set_confirmed(0, "A", True)
    snapshot = tracker.snapshot(0)

    tracker.set_confirmed(0, "B", True)
    tracker.set_confirmed(0, "A", False)
    tracker.restore(0, snapshot)

    assert tracker.confirmed_by(0) == ["A"]


def test_restore_empty_snapshot(tracker):
    snapshot = tracker.snapshot(0)
    tracker.set_confirmed(0, "A", True)
    tracker.restore(0, snapshot)

    assert tracker.count(0) == 0
