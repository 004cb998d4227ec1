"""
Normalize Module - raw backend rows into core inputs.

Resolution happens HERE, not in aggregation:
- assignee union (legacy assigned_to + ticket_assignees)
- profile unwrapping and capacity defaulting
- timestamp parsing (unparseable values RAISE RowNormalizationError)
"""

from .rows import (
    assignee_ids,
    assignment_from_row,
    assignments_from_rows,
    meeting_from_row,
    meetings_from_rows,
    member_from_row,
    members_from_rows,
    open_timeline_tickets,
    parse_date,
    parse_hours,
    parse_timestamp,
    timeline_ticket_from_row,
)

__all__ = [
    "assignee_ids",
    "assignment_from_row",
    "assignments_from_rows",
    "meeting_from_row",
    "meetings_from_rows",
    "member_from_row",
    "members_from_rows",
    "open_timeline_tickets",
    "parse_date",
    "parse_hours",
    "parse_timestamp",
    "timeline_ticket_from_row",
]
