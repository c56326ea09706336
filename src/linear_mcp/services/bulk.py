"""Bounded worker pool for bulk operations.

Runs one coroutine per item with at most ``concurrency`` in flight and
records success or failure per item. Items that succeeded are never rolled
back when a sibling fails.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 5

T = TypeVar("T")


@dataclass
class ItemResult:
    index: int
    success: bool
    data: Any = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"index": self.index, "success": self.success}
        if self.success:
            result["data"] = self.data
        else:
            result["error"] = self.error
        return result


@dataclass
class BulkResult:
    results: List[ItemResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @property
    def success(self) -> bool:
        return self.failed == 0

    def successful_data(self) -> List[Any]:
        return [r.data for r in self.results if r.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }


async def run_bounded(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[Any]],
    concurrency: int = DEFAULT_CONCURRENCY,
) -> BulkResult:
    """Apply ``worker`` to every item, ``concurrency`` at a time.

    Results are in the order of ``items``.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")

    semaphore = asyncio.Semaphore(concurrency)

    async def _run(index: int, item: T) -> ItemResult:
        async with semaphore:
            try:
                data = await worker(item)
            except Exception as exc:
                logger.warning("Bulk item %d failed: %s", index, exc)
                return ItemResult(index=index, success=False, error=str(exc))
            return ItemResult(index=index, success=True, data=data)

    results = await asyncio.gather(*(_run(i, item) for i, item in enumerate(items)))
    bulk = BulkResult(results=list(results))
    logger.info("Bulk run finished: %d succeeded, %d failed", bulk.succeeded, bulk.failed)
    return bulk
