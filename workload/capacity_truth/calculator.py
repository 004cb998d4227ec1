"""
Capacity Aggregator - Compute per-member weekly workload.

Tracks, for every active member of a company:
- Assigned hours (open ticket estimates, split evenly across co-assignees)
- Meeting hours (meetings starting inside the current Monday-Sunday week)
- Remaining capacity (may go negative; overload is reported, never clamped)
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime

from workload.capacity_truth.models import Assignment, Meeting, Member, WorkloadRow
from workload.config import DEFAULT_WEEKLY_CAPACITY_HOURS
from workload.time_truth.calendar import duration_hours, in_week, week_bounds

logger = logging.getLogger(__name__)


class CapacityAggregator:
    """
    Turns membership, assignment and meeting rows into one WorkloadRow per member.

    Responsibilities:
    - Split each assignment's estimate evenly across all of its assignees
    - Sum meeting durations for known participants within the reference week
    - Preserve input member order; never drop or add a member

    The split denominator is always the full assignee count, including
    assignees that are not in `members` (deactivated or out of scope). Their
    share is simply not reported.
    """

    def __init__(self, default_capacity_hours: float = DEFAULT_WEEKLY_CAPACITY_HOURS):
        self.default_capacity_hours = default_capacity_hours

    def assigned_hours_by_member(self, assignments: Iterable[Assignment]) -> dict[str, float]:
        """Index user_id -> summed hour share over all assignments naming them."""
        assigned: dict[str, float] = defaultdict(float)
        for assignment in assignments:
            if not assignment.assignee_user_ids:
                continue
            share = assignment.share
            for user_id in assignment.assignee_user_ids:
                assigned[user_id] += share
        return dict(assigned)

    def meeting_hours_by_member(
        self,
        meetings: Iterable[Meeting],
        member_ids: set[str],
        now: datetime,
    ) -> dict[str, float]:
        """
        Index user_id -> hours in meetings starting within now's week.

        Participants outside `member_ids` are ignored. An id listed twice in one
        meeting is charged once per listing.
        """
        hours: dict[str, float] = defaultdict(float)
        for meeting in meetings:
            if not in_week(meeting.starts_at, now):
                continue
            duration = duration_hours(meeting.starts_at, meeting.ends_at)
            for user_id in meeting.participant_user_ids:
                if user_id in member_ids:
                    hours[user_id] += duration
        return dict(hours)

    def capacity_for(self, member: Member) -> float:
        if member.weekly_capacity_hours is None:
            return float(self.default_capacity_hours)
        return float(member.weekly_capacity_hours)

    def aggregate(
        self,
        members: Sequence[Member],
        assignments: Iterable[Assignment],
        meetings: Iterable[Meeting],
        now: datetime | None = None,
    ) -> list[WorkloadRow]:
        """
        Compute the workload of every member for the week containing `now`.

        Args:
            members: Active memberships, in display order
            assignments: Open (non-terminal) ticket assignments
            meetings: Company meetings; only those starting this week count
            now: Reference instant (defaults to the system clock)

        Returns:
            One WorkloadRow per member, in input order
        """
        if now is None:
            now = datetime.now()

        assignments = list(assignments)
        meetings = list(meetings)
        member_ids = {m.user_id for m in members}

        assigned = self.assigned_hours_by_member(assignments)
        meeting_hours = self.meeting_hours_by_member(meetings, member_ids, now)

        week_start, week_end = week_bounds(now)
        logger.debug(
            "Aggregating workload",
            extra={
                "members": len(members),
                "assignments": len(assignments),
                "meetings": len(meetings),
                "week_start": week_start.isoformat(),
                "week_end": week_end.isoformat(),
            },
        )

        rows = []
        for member in members:
            capacity = self.capacity_for(member)
            assigned_hours = assigned.get(member.user_id, 0.0)
            in_meetings = meeting_hours.get(member.user_id, 0.0)
            rows.append(
                WorkloadRow(
                    user_id=member.user_id,
                    full_name=member.full_name,
                    role=member.role,
                    weekly_capacity=capacity,
                    assigned_hours=assigned_hours,
                    meeting_hours=in_meetings,
                    remaining=capacity - assigned_hours - in_meetings,
                )
            )

        overloaded = [r.user_id for r in rows if r.is_overloaded]
        if overloaded:
            logger.info("Members over weekly capacity", extra={"overloaded": overloaded})

        return rows


def aggregate_workload(
    members: Sequence[Member],
    assignments: Iterable[Assignment],
    meetings: Iterable[Meeting],
    now: datetime | None = None,
    default_capacity_hours: float = DEFAULT_WEEKLY_CAPACITY_HOURS,
) -> list[WorkloadRow]:
    """Functional shortcut for CapacityAggregator(...).aggregate(...)."""
    return CapacityAggregator(default_capacity_hours).aggregate(members, assignments, meetings, now)
