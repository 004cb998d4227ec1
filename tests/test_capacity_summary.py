"""
Tests for capacity summary rollups - load status, utilization, team totals.
"""

import pytest

from workload.capacity_truth import (
    WorkloadRow,
    classify_load,
    member_loads,
    summarize_capacity,
    ticket_status_counts,
    urgent_tickets,
    utilization_pct,
)
from workload.constants import LoadStatus


def _row(user_id, capacity, assigned, meetings=0.0):
    return WorkloadRow(
        user_id=user_id,
        full_name=user_id,
        role="READER",
        weekly_capacity=capacity,
        assigned_hours=assigned,
        meeting_hours=meetings,
        remaining=capacity - assigned - meetings,
    )


class TestClassifyLoad:
    def test_overload_when_remaining_negative(self):
        assert classify_load(_row("u1", 10, 8, 5)) == LoadStatus.OVERLOAD

    def test_near_cap_above_ratio(self):
        assert classify_load(_row("u1", 40, 30, 3)) == LoadStatus.NEAR_CAP

    def test_exactly_at_ratio_is_healthy(self):
        # 32 / 40 == 0.8, not above it
        assert classify_load(_row("u1", 40, 32)) == LoadStatus.HEALTHY

    def test_full_but_not_over_is_near_cap(self):
        assert classify_load(_row("u1", 40, 40)) == LoadStatus.NEAR_CAP

    def test_healthy(self):
        assert classify_load(_row("u1", 40, 10, 2)) == LoadStatus.HEALTHY

    def test_zero_capacity_idle_is_healthy(self):
        assert classify_load(_row("u1", 0, 0)) == LoadStatus.HEALTHY

    def test_custom_ratio(self):
        assert classify_load(_row("u1", 40, 25), near_ratio=0.5) == LoadStatus.NEAR_CAP


class TestUtilization:
    def test_clamped_to_100(self):
        assert utilization_pct(60, 40) == 100

    def test_zero_capacity(self):
        assert utilization_pct(5, 0) == 0

    def test_negative_value_clamped(self):
        assert utilization_pct(-4, 40) == 0

    def test_plain_ratio(self):
        assert utilization_pct(10, 40) == pytest.approx(25.0)

    def test_member_loads_use_consumed_hours(self):
        loads = member_loads([_row("u1", 40, 10, 10)])
        assert loads[0].utilization_pct == pytest.approx(50.0)
        assert loads[0].to_dict()["status"] == "HEALTHY"
        assert loads[0].to_dict()["utilizationPct"] == pytest.approx(50.0)


class TestSummarizeCapacity:
    def test_totals(self):
        rows = [_row("u1", 40, 20, 4), _row("u2", 10, 8, 5)]
        summary = summarize_capacity(rows)
        assert summary.weekly_assigned == pytest.approx(28)
        assert summary.weekly_meetings == pytest.approx(9)
        assert summary.weekly_capacity == pytest.approx(50)
        assert summary.capacity_pct == 56
        assert summary.overloaded_count == 1
        assert summary.overloaded_user_ids == ["u2"]

    def test_empty_team(self):
        summary = summarize_capacity([])
        assert summary.capacity_pct == 0
        assert summary.overloaded_count == 0
        assert summary.to_dict()["weeklyCapacity"] == 0


class TestTicketOverview:
    TICKETS = [
        {"id": "t1", "status": "ACTIVE", "priority": "URGENT"},
        {"id": "t2", "status": "DONE", "priority": "URGENT"},
        {"id": "t3", "status": "BUG", "priority": "LOW"},
        {"id": "t4", "status": "ACTIVE", "priority": "HIGH"},
        {"id": "t5", "status": "ARCHIVED", "priority": "URGENT"},
    ]

    def test_status_counts_include_zeroes(self):
        counts = ticket_status_counts(self.TICKETS)
        assert counts == {
            "BACKLOG": 0,
            "ACTIVE": 2,
            "BLOCKED": 0,
            "BUG": 1,
            "DESIGN": 0,
            "DONE": 1,
        }

    def test_urgent_keeps_order_and_limit(self):
        assert [t["id"] for t in urgent_tickets(self.TICKETS, limit=2)] == ["t1", "t2"]

    def test_urgent_zero_limit(self):
        assert urgent_tickets(self.TICKETS, limit=0) == []
