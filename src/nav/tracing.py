# src/nav/tracing.py
"""
Tracing and metrics for path searches.

Keeps a rolling buffer of recent searches and emits one structured log
line per search, so callers can see timings without wiring a profiler.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Deque, Dict, List, Optional

from .node import GridCoord, Node

if TYPE_CHECKING:
    from .pathfinder import PathfindingResult


@dataclass
class PathTraceRecord:
    """Structured record of a single search."""

    timestamp: float           # wall-clock time (time.time())
    duration_s: float          # search duration in seconds

    start: GridCoord
    target: GridCoord

    success: bool
    reason: Optional[str]
    path_length: int
    cost: Optional[int]
    expanded: int


class PathTracer:
    """
    In-memory search tracer with logging.

    - Keep a rolling buffer of PathTraceRecord entries.
    - Emit a single info line per search.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        max_records: int = 1_000,
    ) -> None:
        self._logger = logger or logging.getLogger("nav.search")
        self._records: Deque[PathTraceRecord] = deque(maxlen=max_records)

    def record(
        self,
        *,
        start: Node,
        target: Node,
        result: "PathfindingResult",
        duration_s: float,
    ) -> None:
        """Record a finished search, successful or not."""
        try:
            record = PathTraceRecord(
                timestamp=time.time(),
                duration_s=duration_s,
                start=start.coord,
                target=target.coord,
                success=bool(result.success),
                reason=result.reason,
                path_length=len(result.path),
                cost=result.cost,
                expanded=result.expanded,
            )
        except Exception:
            # Tracing must never crash the search.
            self._logger.exception("Failed to build PathTraceRecord")
            return

        self._records.append(record)

        self._logger.info(
            "path_search start=%s target=%s success=%s reason=%s length=%d cost=%s "
            "expanded=%d duration=%.3fms",
            record.start,
            record.target,
            record.success,
            record.reason,
            record.path_length,
            record.cost,
            record.expanded,
            record.duration_s * 1000.0,
        )

    def get_records(self) -> List[PathTraceRecord]:
        return list(self._records)

    def summary(self) -> Dict[str, Any]:
        """Aggregate counts and timings over the buffered records."""
        records = self._records
        total = len(records)
        found = sum(1 for r in records if r.success)
        mean_ms = (sum(r.duration_s for r in records) / total * 1000.0) if total else 0.0
        return {
            "searches": total,
            "found": found,
            "not_found": total - found,
            "success_rate": (found / total) if total else 0.0,
            "mean_duration_ms": mean_ms,
        }

    def clear(self) -> None:
        self._records.clear()
