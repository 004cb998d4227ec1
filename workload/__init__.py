"""
Workload core - capacity aggregation and timeline projection for the ticket tracker.

Tiers:
- capacity_truth: per-member assigned / meeting / remaining hours for the week
- time_truth: rolling-window Gantt bars and the calendar agenda
- normalize: raw backend rows -> typed inputs
- contracts: pydantic shape of every emitted view model

Everything here is recomputed on read. Nothing is persisted.
"""

__version__ = "0.3.0"
