"""
Part lookup errors.

Each error carries the pipeline stage it belongs to, so the orchestrator can
record it on the bill of materials without inspecting its type.
"""

from __future__ import annotations

from typing import Optional

from ..models import ErrorStage


class PartLookupError(Exception):
    """Base class for failures while resolving, fetching or extracting a part."""

    stage = ErrorStage.RESOLVE

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ResolveError(PartLookupError):
    """No catalogue rule matched the specification."""

    stage = ErrorStage.RESOLVE


class FetchError(PartLookupError):
    """Network error, timeout or non-200 response from the vendor."""

    stage = ErrorStage.FETCH


class ExtractError(PartLookupError):
    """Expected node missing from the vendor page, or malformed price text."""

    stage = ErrorStage.EXTRACT
