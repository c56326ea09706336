"""Shared helpers for tool handlers.

A handler method takes the validated argument model for its tool and
returns either a ready-made string or a JSON-serializable value. Errors
propagate to the dispatcher.
"""

from typing import Any, Dict, List

from ..services.bulk import BulkResult


class BaseHandler:
    """Base class for per-domain tool handlers."""

    @staticmethod
    def _bulk_summary(action: str, result: BulkResult) -> Dict[str, Any]:
        summary = result.to_dict()
        summary["message"] = (
            f"{action}: {result.succeeded} succeeded, {result.failed} failed"
        )
        return summary

    @staticmethod
    def _failure_lines(result: BulkResult) -> List[str]:
        return [
            f"- item {item.index}: {item.error}"
            for item in result.results
            if not item.success
        ]
