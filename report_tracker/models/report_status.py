"""Report processing status and its transition table.

The workflow is strictly linear:

    UPLOADED -> PROCESSING -> COMPLETED

``is_valid_transition`` is the only place transition legality is decided.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ReportStatus(StrEnum):
    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"


ALLOWED_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.UPLOADED: frozenset({ReportStatus.PROCESSING}),
    ReportStatus.PROCESSING: frozenset({ReportStatus.COMPLETED}),
    ReportStatus.COMPLETED: frozenset(),
}


def _coerce(value: Any) -> ReportStatus | None:
    if isinstance(value, ReportStatus):
        return value
    if isinstance(value, str):
        try:
            return ReportStatus(value)
        except ValueError:
            return None
    return None


def is_valid_transition(current: Any, proposed: Any) -> bool:
    """Return True only for UPLOADED->PROCESSING and PROCESSING->COMPLETED.

    Unknown values and None are never valid on either side.
    """
    current_status = _coerce(current)
    proposed_status = _coerce(proposed)
    if current_status is None or proposed_status is None:
        return False
    return proposed_status in ALLOWED_TRANSITIONS[current_status]


def allowed_transitions(current: Any) -> list[ReportStatus]:
    """List the statuses reachable from ``current`` in one step."""
    current_status = _coerce(current)
    if current_status is None:
        return []
    return sorted(ALLOWED_TRANSITIONS[current_status])
