"""Batch-level outcome of a sweep."""

from __future__ import annotations

from typing import Iterable

from .models import BatchResponse, TransferResult


def merge(results: Iterable[TransferResult]) -> BatchResponse:
    # A batch that ran is successful even when some of its transfers failed.
    return BatchResponse(overall_success=True, results=list(results))


def aborted(reason: str) -> BatchResponse:
    """Response for a batch that never started, e.g. because the scan failed."""
    return BatchResponse(overall_success=False, results=[], error=reason)


__all__ = ["aborted", "merge"]
