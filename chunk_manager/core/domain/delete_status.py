"""
Delete result status classification.

A delete service reports one of three statuses. Only a fully completed
delete allows the caller to drop its selection; partial and failed results
keep the selection so the operator can retry or inspect what remains.
"""

from __future__ import annotations

DELETE_COMPLETED = "completed"
DELETE_PARTIAL = "partial"
DELETE_FAILED = "failed"

DELETE_STATUSES: frozenset[str] = frozenset(
    {
        DELETE_COMPLETED,
        DELETE_PARTIAL,
        DELETE_FAILED,
    }
)


def classify_delete(processed: int, failed: int) -> str:
    """Return the status for a delete that processed/failed the given counts."""
    if failed == 0:
        return DELETE_COMPLETED
    if processed == 0:
        return DELETE_FAILED
    return DELETE_PARTIAL


def is_complete(status: str) -> bool:
    """Return True if the status indicates every requested chunk was deleted."""
    return status == DELETE_COMPLETED
