"""
Time tier data model: timeline inputs and derived bars.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class TimelineTicket:
    id: str
    title: str
    status: str
    priority: str
    created_at: date | datetime
    due_date: date | datetime


@dataclass(frozen=True)
class TimelineWindow:
    """Inclusive rolling window [start, end] of `days` calendar days."""

    start: date
    end: date
    days: int

    @property
    def unit_percent(self) -> float:
        return 100 / self.days

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat(), "days": self.days}


@dataclass
class TimelineBar:
    """Proportional placement of one ticket inside a TimelineWindow."""

    ticket_id: str
    left_percent: float
    width_percent: float
    left_days: int
    span_days: int
    title: str = ""
    status: str = ""
    priority: str = ""
    due_date: date | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticketId": self.ticket_id,
            "title": self.title,
            "status": str(self.status),
            "priority": str(self.priority),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "leftPercent": self.left_percent,
            "widthPercent": self.width_percent,
        }
