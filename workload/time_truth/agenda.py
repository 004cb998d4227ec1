"""
Agenda - calendar grouping of meetings and ticket due dates by day.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any

from workload.capacity_truth.models import Meeting
from workload.time_truth.calendar import as_day
from workload.time_truth.models import TimelineTicket


@dataclass
class AgendaDay:
    day: date
    meetings: list[Meeting] = field(default_factory=list)
    tickets_due: list[TimelineTicket] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "meetings": [
                {
                    "meetingId": m.meeting_id,
                    "title": m.title,
                    "startsAt": m.starts_at.isoformat(),
                    "endsAt": m.ends_at.isoformat(),
                    "participants": list(m.participant_user_ids),
                }
                for m in self.meetings
            ],
            "ticketsDue": [
                {
                    "ticketId": t.id,
                    "title": t.title,
                    "status": str(t.status),
                    "priority": str(t.priority),
                }
                for t in self.tickets_due
            ],
        }


def meeting_day(meeting: Meeting, tz: tzinfo | None = None) -> date:
    """Calendar day a meeting starts on, in `tz` (local time when None)."""
    return as_day(meeting.starts_at, tz)


def build_agenda(
    meetings: Iterable[Meeting],
    tickets: Iterable[TimelineTicket] = (),
    tz: tzinfo | None = None,
) -> list[AgendaDay]:
    """
    Group meetings by start day and tickets by due day.

    Days appear in ascending order; only days with at least one entry are
    returned. Entries keep their input order within a day.
    """
    days: dict[date, AgendaDay] = {}

    for meeting in meetings:
        day = meeting_day(meeting, tz)
        days.setdefault(day, AgendaDay(day=day)).meetings.append(meeting)

    for ticket in tickets:
        day = as_day(ticket.due_date, tz)
        days.setdefault(day, AgendaDay(day=day)).tickets_due.append(ticket)

    return [days[key] for key in sorted(days)]


def meetings_on(
    meetings: Iterable[Meeting], day: date | datetime | None = None, tz: tzinfo | None = None
) -> list[Meeting]:
    """Meetings starting on `day` (defaults to today)."""
    target = as_day(day, tz) if day is not None else date.today()
    return [m for m in meetings if meeting_day(m, tz) == target]
