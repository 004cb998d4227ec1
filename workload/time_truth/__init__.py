"""
Time Truth Module

Calendar arithmetic, the rolling-window ticket timeline and the agenda.

Objects:
- TimelineTicket (open ticket with created/due dates)
- TimelineWindow (inclusive rolling window anchored at today)
- TimelineBar (clipped left/width percentages)

Invariants:
- A bar exists only if [created, due] intersects the window
- 0 <= left_percent and width_percent >= 100 / window_days
- Week boundary is Monday 00:00 .. Sunday 23:59:59.999999
"""

from .agenda import AgendaDay, build_agenda, meeting_day, meetings_on
from .calendar import (
    align_to_reference,
    as_day,
    days_between,
    duration_hours,
    in_week,
    week_bounds,
)
from .models import TimelineBar, TimelineTicket, TimelineWindow
from .timeline import TimelineProjector, project_timeline

__all__ = [
    "TimelineProjector",
    "project_timeline",
    "TimelineTicket",
    "TimelineWindow",
    "TimelineBar",
    "AgendaDay",
    "build_agenda",
    "meeting_day",
    "meetings_on",
    "week_bounds",
    "in_week",
    "align_to_reference",
    "duration_hours",
    "as_day",
    "days_between",
]
