"""
Contracts Module - shape validation for emitted snapshots.

Validation is a hard gate: the snapshot builder raises SnapshotContractError
rather than emit a payload that does not match these models.
"""

from .schema import (
    SCHEMA_VERSION,
    AgendaDayModel,
    AgendaMeetingModel,
    CalendarSnapshotContract,
    CapacitySummaryModel,
    MemberLoadModel,
    TeamSnapshotContract,
    TimelineBarModel,
    TimelineWindowModel,
    UrgentTicketModel,
    WorkloadRowModel,
)

__all__ = [
    "SCHEMA_VERSION",
    "AgendaDayModel",
    "AgendaMeetingModel",
    "CalendarSnapshotContract",
    "CapacitySummaryModel",
    "MemberLoadModel",
    "TeamSnapshotContract",
    "TimelineBarModel",
    "TimelineWindowModel",
    "UrgentTicketModel",
    "WorkloadRowModel",
]
