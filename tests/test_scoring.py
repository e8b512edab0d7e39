"""Tests for Smart score computation (deterministic, pure)."""

import pytest
from datetime import datetime, timedelta, timezone
from types import MappingProxyType

from taskmaster.engine.scoring import (
    MAXIMALLY_OVERDUE_MS,
    deadline_ms,
    is_overdue,
    priority_weight,
    read_field,
    smart_score,
    to_epoch_ms,
    urgency,
)
from taskmaster.models.constants import URGENCY_HORIZON_MS
from taskmaster.models.task import Priority


class TestPriorityWeight:
    """Test priority_weight() mapping."""

    def test_weights(self):
        assert priority_weight(Priority.HIGH) == 3
        assert priority_weight("Medium") == 2
        assert priority_weight("Low") == 1

    def test_case_insensitive(self):
        assert priority_weight("high") == 3

    def test_unknown_priority_weighs_as_low(self):
        assert priority_weight("Critical") == 1
        assert priority_weight(None) == 1


class TestDeadlineParsing:
    """Test deadline_ms() normalization of deadline representations."""

    def test_naive_datetime_is_utc(self):
        naive = datetime(2026, 1, 1, 0, 0, 0)
        aware = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert deadline_ms({"deadline": naive}) == deadline_ms({"deadline": aware})

    def test_iso_string_with_z_suffix(self):
        expected = to_epoch_ms(datetime(2026, 2, 25, 23, 59, 59))
        assert deadline_ms({"deadline": "2026-02-25T23:59:59.000Z"}) == expected

    def test_epoch_milliseconds(self):
        assert deadline_ms({"deadline": 1_700_000_000_000}) == 1_700_000_000_000

    def test_missing_deadline_is_maximally_overdue(self):
        assert deadline_ms({"title": "No deadline"}) == MAXIMALLY_OVERDUE_MS

    def test_unparseable_deadline_is_maximally_overdue(self):
        assert deadline_ms({"deadline": "next tuesday"}) == MAXIMALLY_OVERDUE_MS
        assert deadline_ms({"deadline": True}) == MAXIMALLY_OVERDUE_MS
        assert deadline_ms({"deadline": float("nan")}) == MAXIMALLY_OVERDUE_MS


class TestUrgency:
    """Test urgency() clamping over the 7-day horizon."""

    def test_deadline_now_is_fully_urgent(self):
        assert urgency(1000.0, 1000.0) == 1.0

    def test_deadline_beyond_horizon_is_zero(self):
        assert urgency(URGENCY_HORIZON_MS * 2, 0.0) == 0.0

    def test_past_deadline_is_clamped_to_one(self):
        assert urgency(0.0, URGENCY_HORIZON_MS * 3) == 1.0

    def test_halfway(self):
        assert urgency(URGENCY_HORIZON_MS / 2, 0.0) == pytest.approx(0.5)


class TestSmartScore:
    """Test smart_score() against hand-computed values."""

    def test_high_priority_due_in_one_day(self, make_task, now):
        task = make_task(priority=Priority.HIGH, deadline=now + timedelta(days=1))
        # (3/3)*0.5 + (1 - 1/7)*0.35
        assert smart_score(task, now) == pytest.approx(0.8)

    def test_low_priority_far_deadline(self, make_task, now):
        task = make_task(priority=Priority.LOW, deadline=now + timedelta(days=30))
        assert smart_score(task, now) == pytest.approx(0.5 / 3)

    def test_overdue_gets_bonus(self, make_task, now):
        task = make_task(priority=Priority.MEDIUM, deadline=now - timedelta(hours=1))
        # (2/3)*0.5 + 1*0.35 + 0.15
        assert smart_score(task, now) == pytest.approx(1 / 3 + 0.5)

    def test_accepts_epoch_milliseconds_for_now(self, make_task, now):
        task = make_task(priority=Priority.HIGH)
        assert smart_score(task, to_epoch_ms(now)) == smart_score(task, now)

    def test_missing_deadline_scores_as_overdue(self, now):
        task = {"title": "Broken", "priority": "Low"}
        assert smart_score(task, now) == pytest.approx(0.5 / 3 + 0.35 + 0.15)

    def test_monotonic_in_deadline(self, make_task, now):
        """Moving the deadline closer never lowers the score."""
        offsets = [timedelta(days=10), timedelta(days=7), timedelta(days=3),
                   timedelta(hours=5), timedelta(0), -timedelta(hours=1), -timedelta(days=9)]
        scores = [
            smart_score(make_task(priority=Priority.LOW, deadline=now + offset), now)
            for offset in offsets
        ]
        assert scores == sorted(scores)


class TestOverdue:
    """Test is_overdue()."""

    def test_incomplete_past_deadline(self, make_task, now):
        assert is_overdue(make_task(deadline=now - timedelta(minutes=1)), now) is True

    def test_completed_is_never_overdue(self, make_task, now):
        assert is_overdue(make_task(deadline=now - timedelta(days=1), is_completed=True), now) is False

    def test_future_deadline(self, make_task, now):
        assert is_overdue(make_task(deadline=now + timedelta(minutes=1)), now) is False


def test_read_field_handles_models_and_mappings(sample_task):
    assert read_field(sample_task, "title") == "Test Task"
    assert read_field({"title": "Dict"}, "title") == "Dict"
    assert read_field({"tags": None}, "tags", []) == []
    assert read_field(sample_task, "missing", "fallback") == "fallback"
    assert read_field(MappingProxyType({"title": "Proxy"}), "title") == "Proxy"
