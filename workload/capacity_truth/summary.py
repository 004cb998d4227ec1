"""
Capacity Summary - Dashboard rollups over computed WorkloadRows.

Provides:
- Load classification per member (OVERLOAD / NEAR_CAP / HEALTHY)
- Utilization percentage for progress displays
- Team totals and overload count
- Ticket status overview and urgent shortlist
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from workload.capacity_truth.models import MemberLoad, WorkloadRow
from workload.config import DEFAULT_NEAR_CAPACITY_RATIO, DEFAULT_URGENT_LIMIT
from workload.constants import BOARD_STATUSES, LoadStatus, TicketPriority


@dataclass
class CapacitySummary:
    weekly_assigned: float
    weekly_meetings: float
    weekly_capacity: float
    capacity_pct: int  # assigned / capacity, rounded; meetings excluded
    overloaded_count: int
    overloaded_user_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "weeklyAssigned": self.weekly_assigned,
            "weeklyMeetings": self.weekly_meetings,
            "weeklyCapacity": self.weekly_capacity,
            "capacityPct": self.capacity_pct,
            "overloadedCount": self.overloaded_count,
            "overloadedUserIds": list(self.overloaded_user_ids),
        }


def utilization_pct(value: float, maximum: float) -> float:
    """value / maximum as a percentage clamped to [0, 100]; 0 when maximum <= 0."""
    if maximum <= 0:
        return 0.0
    return min(max(value / maximum * 100, 0.0), 100.0)


def classify_load(row: WorkloadRow, near_ratio: float = DEFAULT_NEAR_CAPACITY_RATIO) -> LoadStatus:
    """
    Classify a member's week.

    OVERLOAD when remaining < 0, NEAR_CAP when consumed/capacity exceeds
    near_ratio, HEALTHY otherwise. A zero-capacity member with any consumed
    hours is already OVERLOAD through remaining.
    """
    if row.is_overloaded:
        return LoadStatus.OVERLOAD
    if row.weekly_capacity <= 0:
        return LoadStatus.NEAR_CAP if row.consumed_hours > 0 else LoadStatus.HEALTHY
    if row.consumed_hours / row.weekly_capacity > near_ratio:
        return LoadStatus.NEAR_CAP
    return LoadStatus.HEALTHY


def member_loads(
    rows: Iterable[WorkloadRow], near_ratio: float = DEFAULT_NEAR_CAPACITY_RATIO
) -> list[MemberLoad]:
    return [
        MemberLoad(
            row=row,
            status=classify_load(row, near_ratio),
            utilization_pct=utilization_pct(row.consumed_hours, row.weekly_capacity),
        )
        for row in rows
    ]


def summarize_capacity(rows: Sequence[WorkloadRow]) -> CapacitySummary:
    weekly_assigned = sum(r.assigned_hours for r in rows)
    weekly_meetings = sum(r.meeting_hours for r in rows)
    weekly_capacity = sum(r.weekly_capacity for r in rows)
    capacity_pct = 0 if weekly_capacity <= 0 else round(weekly_assigned / weekly_capacity * 100)
    overloaded = [r.user_id for r in rows if r.is_overloaded]

    return CapacitySummary(
        weekly_assigned=weekly_assigned,
        weekly_meetings=weekly_meetings,
        weekly_capacity=weekly_capacity,
        capacity_pct=capacity_pct,
        overloaded_count=len(overloaded),
        overloaded_user_ids=overloaded,
    )


def ticket_status_counts(tickets: Iterable[dict]) -> dict[str, int]:
    """Count tickets per board status. Every board status is present, zero included."""
    counts = {status.value: 0 for status in BOARD_STATUSES}
    for ticket in tickets:
        status = ticket.get("status")
        if status in counts:
            counts[status] += 1
    return counts


def urgent_tickets(tickets: Iterable[dict], limit: int = DEFAULT_URGENT_LIMIT) -> list[dict]:
    """First `limit` URGENT tickets, in the order given (callers pass newest first)."""
    urgent = [t for t in tickets if t.get("priority") == TicketPriority.URGENT]
    return urgent[:limit]
