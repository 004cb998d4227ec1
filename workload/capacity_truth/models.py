"""
Capacity tier data model.

Inputs (Member, Assignment, Meeting) arrive already tenant-scoped and filtered
to active memberships / open tickets. WorkloadRow is derived, never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from workload.constants import LoadStatus


@dataclass(frozen=True)
class Member:
    """One active company membership."""

    user_id: str
    full_name: str
    role: str
    weekly_capacity_hours: float | None = None  # None = not set on profile


@dataclass(frozen=True)
class Assignment:
    """An open ticket's hour estimate, shared evenly by its assignees."""

    ticket_id: str
    assignee_user_ids: frozenset[str] = field(default_factory=frozenset)
    estimated_hours: float | None = 0.0

    @property
    def share(self) -> float:
        """Hours attributed to each assignee. Zero when nobody is assigned."""
        if not self.assignee_user_ids:
            return 0.0
        return float(self.estimated_hours or 0) / len(self.assignee_user_ids)


@dataclass(frozen=True)
class Meeting:
    participant_user_ids: tuple[str, ...]
    starts_at: datetime
    ends_at: datetime
    meeting_id: str | None = None
    title: str = ""


@dataclass
class WorkloadRow:
    """Per-member capacity picture for the current week."""

    user_id: str
    full_name: str
    role: str
    weekly_capacity: float
    assigned_hours: float
    meeting_hours: float
    remaining: float  # weekly_capacity - assigned - meetings; negative = overload

    @property
    def consumed_hours(self) -> float:
        return self.assigned_hours + self.meeting_hours

    @property
    def is_overloaded(self) -> bool:
        return self.remaining < 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "fullName": self.full_name,
            "role": str(self.role),
            "weeklyCapacity": self.weekly_capacity,
            "assignedHours": self.assigned_hours,
            "meetingHours": self.meeting_hours,
            "remaining": self.remaining,
        }


@dataclass
class MemberLoad:
    """A WorkloadRow with its dashboard classification."""

    row: WorkloadRow
    status: LoadStatus
    utilization_pct: float

    def to_dict(self) -> dict[str, Any]:
        data = self.row.to_dict()
        data["status"] = self.status.value
        data["utilizationPct"] = self.utilization_pct
        return data
