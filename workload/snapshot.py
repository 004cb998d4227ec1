"""
Snapshot Builder - Produces the team dashboard and calendar payloads.

Pipeline:
1. Normalize raw backend rows into core inputs
2. Aggregate workload / project the timeline / group the agenda
3. Validate against the pydantic contracts (hard gate)
4. Emit plain dicts with camelCase keys

Violations RAISE SnapshotContractError - there is no logging-only path.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime

from pydantic import BaseModel, ValidationError

from workload.capacity_truth.calculator import CapacityAggregator
from workload.capacity_truth.summary import (
    member_loads,
    summarize_capacity,
    ticket_status_counts,
    urgent_tickets,
)
from workload.config import Settings, get_settings
from workload.constants import is_terminal
from workload.contracts.schema import (
    SCHEMA_VERSION,
    CalendarSnapshotContract,
    TeamSnapshotContract,
)
from workload.errors import SnapshotContractError
from workload.normalize.rows import (
    assignments_from_rows,
    meetings_from_rows,
    members_from_rows,
    parse_hours,
    timeline_ticket_from_row,
)
from workload.observability.context import get_request_id
from workload.time_truth.agenda import AgendaDay, build_agenda, meetings_on
from workload.time_truth.calendar import as_day, week_bounds
from workload.time_truth.timeline import TimelineProjector

logger = logging.getLogger(__name__)

# Decimal places for presentation percentages
PERCENT_DECIMALS = 2


def _validate(contract: type[BaseModel], payload: dict) -> dict:
    try:
        validated = contract.model_validate(payload)
    except ValidationError as exc:
        logger.error("%s validation failed: %s", contract.__name__, exc)
        raise SnapshotContractError(contract.__name__, exc) from exc
    return validated.model_dump(by_alias=True)


class SnapshotBuilder:
    """
    Builds validated view-model payloads from raw, tenant-scoped rows.

    Rows are expected exactly as the data-access layer selects them; see
    workload.normalize.rows for the accepted shapes.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.aggregator = CapacityAggregator(self.settings.default_weekly_capacity_hours)
        self.projector = TimelineProjector(self.settings.timeline_window_days)

    def _meta(self, generated_at: datetime) -> dict:
        return {
            "generatedAt": generated_at.isoformat(),
            "schemaVersion": SCHEMA_VERSION,
            "requestId": get_request_id(),
        }

    def build_team(
        self,
        member_rows: Iterable[dict],
        ticket_rows: Iterable[dict],
        meeting_rows: Iterable[dict],
        now: datetime | None = None,
    ) -> dict:
        """
        Team workload dashboard.

        Args:
            member_rows: Active membership rows with embedded user_profiles
            ticket_rows: Company tickets, newest first; DONE tickets are
                excluded from workload but still counted in the overview
            meeting_rows: Company meetings (any range; the week filter applies)
            now: Reference instant (defaults to the system clock)
        """
        if now is None:
            now = datetime.now()

        ticket_rows = list(ticket_rows)
        members = members_from_rows(member_rows)
        assignments = assignments_from_rows(
            row for row in ticket_rows if not is_terminal(row.get("status"))
        )
        meetings = meetings_from_rows(meeting_rows)

        rows = self.aggregator.aggregate(members, assignments, meetings, now)
        loads = [load.to_dict() for load in member_loads(rows, self.settings.near_capacity_ratio)]
        week_start, week_end = week_bounds(now)
        today_agenda = AgendaDay(day=now.date(), meetings=meetings_on(meetings, now, now.tzinfo))

        snapshot = {
            "meta": {
                **self._meta(now),
                "weekStart": week_start.isoformat(),
                "weekEnd": week_end.isoformat(),
            },
            "team": loads,
            "preview": loads[: self.settings.team_preview],
            "summary": summarize_capacity(rows).to_dict(),
            "statusCounts": ticket_status_counts(ticket_rows),
            "urgentTickets": [
                {
                    "ticketId": t["id"],
                    "title": t.get("title") or "",
                    "estimatedHours": parse_hours(t.get("estimated_hours")),
                    "dueDate": t.get("due_date"),
                }
                for t in urgent_tickets(ticket_rows, self.settings.urgent_limit)
            ],
            "meetingsToday": today_agenda.to_dict()["meetings"],
        }

        logger.info(
            "Team snapshot built",
            extra={"members": len(rows), "overloaded": snapshot["summary"]["overloadedCount"]},
        )
        return _validate(TeamSnapshotContract, snapshot)

    def build_calendar(
        self,
        ticket_rows: Iterable[dict],
        meeting_rows: Iterable[dict],
        today: date | None = None,
    ) -> dict:
        """
        Calendar page: rolling Gantt timeline and the day-grouped agenda.

        Args:
            ticket_rows: Company tickets with created_at / due_date; DONE
                tickets appear in the agenda but not on the timeline
            meeting_rows: Company meetings
            today: Window anchor (defaults to the current local date)
        """
        today = as_day(today) if today is not None else date.today()

        # agenda shows every dated ticket, the timeline only open ones
        dated = [timeline_ticket_from_row(row) for row in ticket_rows if row.get("due_date")]
        tickets = [t for t in dated if not is_terminal(t.status)]
        meetings = meetings_from_rows(meeting_rows)

        window = self.projector.window(today)
        bars = []
        for bar in self.projector.project(tickets, today):
            data = bar.to_dict()
            data["leftPercent"] = round(bar.left_percent, PERCENT_DECIMALS)
            data["widthPercent"] = round(bar.width_percent, PERCENT_DECIMALS)
            bars.append(data)

        snapshot = {
            "meta": self._meta(datetime.now()),
            "window": window.to_dict(),
            "columns": [day.isoformat() for day in self.projector.columns(today)],
            "timeline": bars,
            "agenda": [day.to_dict() for day in build_agenda(meetings, dated)],
        }

        logger.info(
            "Calendar snapshot built",
            extra={"bars": len(bars), "open_tickets": len(tickets), "meetings": len(meetings)},
        )
        return _validate(CalendarSnapshotContract, snapshot)


def build_team_snapshot(
    member_rows: Iterable[dict],
    ticket_rows: Iterable[dict],
    meeting_rows: Iterable[dict],
    now: datetime | None = None,
    settings: Settings | None = None,
) -> dict:
    return SnapshotBuilder(settings).build_team(member_rows, ticket_rows, meeting_rows, now)


def build_calendar_snapshot(
    ticket_rows: Iterable[dict],
    meeting_rows: Iterable[dict],
    today: date | None = None,
    settings: Settings | None = None,
) -> dict:
    return SnapshotBuilder(settings).build_calendar(ticket_rows, meeting_rows, today)
