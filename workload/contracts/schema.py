"""
Schema Module - Pydantic models for team and calendar snapshot validation.

These models define the REQUIRED shape of every view model the core hands to
the presentation layer. Keys are camelCase on the wire; models accept either
the wire name or the Python field name.

- Schema validation is a HARD GATE: the snapshot builder validates before emit
- Bars must lie inside the window (0 <= left, left + width <= 100)
- remaining is unconstrained: negative means overload
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.2.0"

# rounding slack for two-decimal percentages
_PCT_TOLERANCE = 0.011


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# =============================================================================
# TEAM WORKLOAD
# =============================================================================


class WorkloadRowModel(_WireModel):
    user_id: str
    full_name: str
    role: str
    weekly_capacity: float = Field(ge=0)
    assigned_hours: float
    meeting_hours: float = Field(ge=0)
    remaining: float

    @model_validator(mode="after")
    def _remaining_balances(self):
        expected = self.weekly_capacity - self.assigned_hours - self.meeting_hours
        if abs(self.remaining - expected) > 1e-6:
            raise ValueError(f"remaining {self.remaining} != capacity - assigned - meetings ({expected})")
        return self


class MemberLoadModel(WorkloadRowModel):
    status: Literal["OVERLOAD", "NEAR_CAP", "HEALTHY"]
    utilization_pct: float = Field(ge=0, le=100)


class CapacitySummaryModel(_WireModel):
    weekly_assigned: float
    weekly_meetings: float = Field(ge=0)
    weekly_capacity: float = Field(ge=0)
    capacity_pct: int
    overloaded_count: int = Field(ge=0)
    overloaded_user_ids: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _count_matches_ids(self):
        if self.overloaded_count != len(self.overloaded_user_ids):
            raise ValueError("overloaded_count must equal len(overloaded_user_ids)")
        return self


class UrgentTicketModel(_WireModel):
    ticket_id: str
    title: str
    estimated_hours: float
    due_date: str | None = None


# =============================================================================
# TIMELINE
# =============================================================================


class TimelineWindowModel(_WireModel):
    start: str
    end: str
    days: int = Field(ge=1)


class TimelineBarModel(_WireModel):
    ticket_id: str
    title: str = ""
    status: str = ""
    priority: str = ""
    due_date: str | None = None
    left_percent: float = Field(ge=0, lt=100)
    width_percent: float = Field(gt=0, le=100)

    @model_validator(mode="after")
    def _inside_window(self):
        if self.left_percent + self.width_percent > 100 + _PCT_TOLERANCE:
            raise ValueError("bar extends past the end of the window")
        return self


# =============================================================================
# AGENDA
# =============================================================================


class AgendaMeetingModel(_WireModel):
    meeting_id: str | None = None
    title: str = ""
    starts_at: str
    ends_at: str
    participants: list[str] = Field(default_factory=list)


class AgendaTicketModel(_WireModel):
    ticket_id: str
    title: str = ""
    status: str = ""
    priority: str = ""


class AgendaDayModel(_WireModel):
    day: str
    meetings: list[AgendaMeetingModel] = Field(default_factory=list)
    tickets_due: list[AgendaTicketModel] = Field(default_factory=list)


# =============================================================================
# SNAPSHOTS
# =============================================================================


class SnapshotMeta(_WireModel):
    generated_at: str
    schema_version: Literal["1.2.0"] = SCHEMA_VERSION
    request_id: str | None = None


class TeamMeta(SnapshotMeta):
    week_start: str
    week_end: str


class TeamSnapshotContract(_WireModel):
    """Team workload dashboard payload."""

    meta: TeamMeta
    team: list[MemberLoadModel]
    preview: list[MemberLoadModel]
    summary: CapacitySummaryModel
    status_counts: dict[str, int]
    urgent_tickets: list[UrgentTicketModel]
    meetings_today: list[AgendaMeetingModel]

    @model_validator(mode="after")
    def _preview_is_prefix(self):
        if self.preview != self.team[: len(self.preview)]:
            raise ValueError("preview must be a prefix of team")
        return self


class CalendarSnapshotContract(_WireModel):
    """Calendar page payload: Gantt timeline plus day agenda."""

    meta: SnapshotMeta
    window: TimelineWindowModel
    columns: list[str]
    timeline: list[TimelineBarModel]
    agenda: list[AgendaDayModel]

    @model_validator(mode="after")
    def _columns_cover_window(self):
        if len(self.columns) != self.window.days:
            raise ValueError("columns must list every day of the window")
        if self.columns and (self.columns[0] != self.window.start or self.columns[-1] != self.window.end):
            raise ValueError("columns must start and end with the window bounds")
        return self
