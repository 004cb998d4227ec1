"""
Domain enumerations shared by the capacity and timeline tiers.
"""

from enum import StrEnum


class TicketStatus(StrEnum):
    BACKLOG = "BACKLOG"
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"
    BUG = "BUG"
    DESIGN = "DESIGN"
    DONE = "DONE"


class TicketPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class LoadStatus(StrEnum):
    """Load classification of a single member's week."""

    OVERLOAD = "OVERLOAD"
    NEAR_CAP = "NEAR_CAP"
    HEALTHY = "HEALTHY"


# Only DONE ends a ticket's lifecycle
TERMINAL_STATUSES = frozenset({TicketStatus.DONE})

# Display order of the dashboard status overview
BOARD_STATUSES = (
    TicketStatus.BACKLOG,
    TicketStatus.ACTIVE,
    TicketStatus.BLOCKED,
    TicketStatus.BUG,
    TicketStatus.DESIGN,
    TicketStatus.DONE,
)


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES
