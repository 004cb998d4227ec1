"""
Row adapters - raw backend rows -> typed core inputs.

The data-access layer returns dict rows shaped by its select clauses. This
module is the only place that knows those shapes:

- membership rows embed the user profile as an object, a one-element list,
  or nothing at all (inner-join misses)
- ticket rows carry assignees twice: the legacy `assigned_to` column and the
  `ticket_assignees` relation; the effective set is their union
- timestamps arrive as ISO-8601 strings, sometimes with a trailing "Z"

Unparseable timestamps raise RowNormalizationError. Everything else is
absorbed with the defaults the core expects.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, tzinfo
from typing import Any

from workload.capacity_truth.models import Assignment, Meeting, Member
from workload.constants import is_terminal
from workload.errors import RowNormalizationError
from workload.time_truth.calendar import as_day
from workload.time_truth.models import TimelineTicket

logger = logging.getLogger(__name__)


# =============================================================================
# SCALAR PARSING
# =============================================================================


def parse_timestamp(value: Any, field: str) -> datetime:
    """
    Parse an ISO-8601 timestamp (or plain date) into a datetime.

    Raises:
        RowNormalizationError: value is missing or not ISO-8601
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise RowNormalizationError(field, value, "missing timestamp")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise RowNormalizationError(field, value) from exc


def parse_date(value: Any, field: str, tz: tzinfo | None = None) -> date:
    """
    Parse a date or timestamp into a calendar day.

    Aware timestamps are shifted into `tz` (local time when None) before
    truncation, so "2024-01-05T23:30:00Z" lands on the viewer's day.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return as_day(parse_timestamp(value, field), tz)


def parse_hours(value: Any) -> float:
    """Numeric hours; None or garbage count as 0."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Non-numeric hours value %r treated as 0", value)
        return 0.0


# =============================================================================
# MEMBERS
# =============================================================================


def _unwrap_profile(profile: Any) -> dict | None:
    if isinstance(profile, list):
        return profile[0] if profile else None
    return profile or None


def member_from_row(row: dict) -> Member | None:
    """
    Adapt a membership row with its embedded `user_profiles`.

    Returns None when the profile is missing; such memberships are not
    reportable.
    """
    profile = _unwrap_profile(row.get("user_profiles"))
    if profile is None:
        return None

    capacity = profile.get("weekly_capacity_hours")
    return Member(
        user_id=row["user_id"],
        full_name=profile.get("full_name") or "",
        role=row.get("role") or "",
        weekly_capacity_hours=None if capacity is None else parse_hours(capacity),
    )


def members_from_rows(rows: Iterable[dict]) -> list[Member]:
    members = []
    dropped = 0
    for row in rows:
        member = member_from_row(row)
        if member is None:
            dropped += 1
            continue
        members.append(member)
    if dropped:
        logger.debug("Dropped %d membership rows without a profile", dropped)
    return members


# =============================================================================
# ASSIGNMENTS
# =============================================================================


def assignee_ids(row: dict) -> frozenset[str]:
    """Union of the `ticket_assignees` relation and the legacy `assigned_to` column."""
    nested = row.get("ticket_assignees") or []
    ids = {item["user_id"] for item in nested if item and item.get("user_id")}
    if row.get("assigned_to"):
        ids.add(row["assigned_to"])
    return frozenset(ids)


def assignment_from_row(row: dict) -> Assignment:
    return Assignment(
        ticket_id=row.get("id") or "",
        assignee_user_ids=assignee_ids(row),
        estimated_hours=parse_hours(row.get("estimated_hours")),
    )


def assignments_from_rows(rows: Iterable[dict]) -> list[Assignment]:
    return [assignment_from_row(row) for row in rows]


# =============================================================================
# MEETINGS
# =============================================================================


def meeting_from_row(row: dict) -> Meeting:
    participants = row.get("participants")
    if not isinstance(participants, list):
        participants = []
    return Meeting(
        participant_user_ids=tuple(participants),
        starts_at=parse_timestamp(row.get("starts_at"), "starts_at"),
        ends_at=parse_timestamp(row.get("ends_at"), "ends_at"),
        meeting_id=row.get("id"),
        title=row.get("title") or "",
    )


def meetings_from_rows(rows: Iterable[dict]) -> list[Meeting]:
    return [meeting_from_row(row) for row in rows]


# =============================================================================
# TIMELINE TICKETS
# =============================================================================


def timeline_ticket_from_row(row: dict, tz: tzinfo | None = None) -> TimelineTicket:
    return TimelineTicket(
        id=row["id"],
        title=row.get("title") or "",
        status=row.get("status") or "",
        priority=row.get("priority") or "",
        created_at=parse_date(row.get("created_at"), "created_at", tz),
        due_date=parse_date(row.get("due_date"), "due_date", tz),
    )


def open_timeline_tickets(rows: Iterable[dict], tz: tzinfo | None = None) -> list[TimelineTicket]:
    """Adapt rows that are not DONE and have a due date; others are skipped."""
    return [
        timeline_ticket_from_row(row, tz)
        for row in rows
        if not is_terminal(row.get("status")) and row.get("due_date")
    ]
