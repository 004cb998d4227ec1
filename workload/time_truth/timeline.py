"""
Timeline Projector - Gantt-style placement of open tickets.

Each ticket spans [created_at, due_date]. The span is clipped to a rolling
window of `window_days` calendar days starting today and expressed as a
left offset and width in percent of the window, ready to be drawn as a bar.
"""

import logging
from collections.abc import Iterable
from datetime import date

from workload.config import DEFAULT_TIMELINE_WINDOW_DAYS
from workload.time_truth.calendar import add_days, as_day, days_between
from workload.time_truth.models import TimelineBar, TimelineTicket, TimelineWindow

logger = logging.getLogger(__name__)


class TimelineProjector:
    """
    Projects tickets onto a rolling date window.

    Rules:
    - Tickets entirely outside the window produce no bar
    - Spans are clipped to the window on both sides
    - A bar is never narrower than one day, even for inverted spans
    - Output keeps input order
    """

    def __init__(self, window_days: int = DEFAULT_TIMELINE_WINDOW_DAYS):
        if window_days < 1:
            raise ValueError(f"window_days must be >= 1, got {window_days}")
        self.window_days = window_days

    def window(self, today: date | None = None) -> TimelineWindow:
        start = as_day(today) if today is not None else date.today()
        return TimelineWindow(
            start=start, end=add_days(start, self.window_days - 1), days=self.window_days
        )

    def columns(self, today: date | None = None) -> list[date]:
        """Every day of the window, in order - the timeline header."""
        window = self.window(today)
        return [add_days(window.start, i) for i in range(window.days)]

    def place(self, ticket: TimelineTicket, window: TimelineWindow) -> TimelineBar | None:
        """
        Bar for one ticket, or None when its span misses the window.
        """
        created = as_day(ticket.created_at)
        due = as_day(ticket.due_date)

        bounded_start = max(created, window.start)
        bounded_end = min(due, window.end)

        if bounded_end < window.start or bounded_start > window.end:
            return None

        left_days = days_between(window.start, bounded_start)
        span_days = max(days_between(bounded_start, bounded_end) + 1, 1)
        unit = window.unit_percent

        return TimelineBar(
            ticket_id=ticket.id,
            left_percent=left_days * unit,
            width_percent=max(span_days * unit, unit),
            left_days=left_days,
            span_days=span_days,
            title=ticket.title,
            status=ticket.status,
            priority=ticket.priority,
            due_date=due,
        )

    def project(
        self, tickets: Iterable[TimelineTicket], today: date | None = None
    ) -> list[TimelineBar]:
        """
        Place every ticket against the window starting at `today`.

        Args:
            tickets: Open tickets; terminal ones must be filtered by the caller
            today: Window anchor (defaults to the current local date)

        Returns:
            Bars for tickets intersecting the window, in input order
        """
        window = self.window(today)
        bars = []
        skipped = 0
        for ticket in tickets:
            bar = self.place(ticket, window)
            if bar is None:
                skipped += 1
                continue
            bars.append(bar)

        logger.debug(
            "Projected timeline",
            extra={
                "window_start": window.start.isoformat(),
                "window_days": window.days,
                "bars": len(bars),
                "outside_window": skipped,
            },
        )
        return bars


def project_timeline(
    tickets: Iterable[TimelineTicket],
    window_days: int = DEFAULT_TIMELINE_WINDOW_DAYS,
    today: date | None = None,
) -> list[TimelineBar]:
    """Functional shortcut for TimelineProjector(window_days).project(...)."""
    return TimelineProjector(window_days).project(tickets, today)
