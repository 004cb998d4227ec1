"""
Error types raised outside the pure capacity/timeline computations.

The aggregator and projector never raise for bad hours or dates; they clamp.
These errors belong to the layers around them: configuration loading, raw row
adaptation, and snapshot contract validation.
"""


class WorkloadError(Exception):
    """Base class for workload core errors."""


class ConfigError(WorkloadError):
    """Raised when a configuration value is missing, malformed or out of range."""


class RowNormalizationError(WorkloadError, ValueError):
    """Raised when a raw backend row cannot be adapted to a core input."""

    def __init__(self, field: str, value, reason: str = "unparseable value"):
        self.field = field
        self.value = value
        super().__init__(f"{field}: {reason} ({value!r})")


class SnapshotContractError(WorkloadError):
    """Raised when a built snapshot does not match its pydantic contract."""

    def __init__(self, contract: str, cause: Exception):
        self.contract = contract
        self.cause = cause
        super().__init__(f"{contract} contract violation: {cause}")
