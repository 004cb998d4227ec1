"""
Capacity Truth Module

Per-member weekly workload and the dashboard rollups built on it.

Objects:
- Member, Assignment, Meeting (inputs, already tenant-scoped)
- WorkloadRow (derived per member)

Invariants:
- One WorkloadRow per input member, input order preserved
- An assignment's hours split evenly over all of its assignees
- Only meetings starting inside the current Monday-Sunday week count
- remaining = capacity - assigned - meetings, never clamped
"""

from .calculator import CapacityAggregator, aggregate_workload
from .models import Assignment, Meeting, Member, MemberLoad, WorkloadRow
from .summary import (
    CapacitySummary,
    classify_load,
    member_loads,
    summarize_capacity,
    ticket_status_counts,
    urgent_tickets,
    utilization_pct,
)

__all__ = [
    "CapacityAggregator",
    "aggregate_workload",
    "Member",
    "Assignment",
    "Meeting",
    "WorkloadRow",
    "MemberLoad",
    "CapacitySummary",
    "classify_load",
    "member_loads",
    "summarize_capacity",
    "ticket_status_counts",
    "urgent_tickets",
    "utilization_pct",
]
