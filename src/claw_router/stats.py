"""Running routing statistics.

Call counts, tier histogram, override count and an incremental running
average of latency. Shared between concurrent callers, so every update
goes through a single lock.
"""

import logging
import threading

from .router.types import TIER_ORDER, RouteDecision, RouterStats

logger = logging.getLogger(__name__)


class StatsTracker:
    """Thread-safe accumulator of RouteDecision statistics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stats = RouterStats()

    def record(self, decision: RouteDecision) -> None:
        """Fold one routing decision into the statistics.

        Args:
            decision: Decision returned by the engine
        """
        with self._lock:
            stats = self._stats
            stats.total_routed += 1
            stats.tier_counts[decision.tier] += 1
            if decision.score.override_applied:
                stats.override_count += 1
            stats.avg_latency_ms += (
                decision.latency_ms - stats.avg_latency_ms
            ) / stats.total_routed

    def snapshot(self) -> RouterStats:
        """Return a copy of the current statistics."""
        with self._lock:
            return RouterStats(
                total_routed=self._stats.total_routed,
                tier_counts={tier: self._stats.tier_counts[tier] for tier in TIER_ORDER},
                avg_latency_ms=self._stats.avg_latency_ms,
                override_count=self._stats.override_count,
            )

    def reset(self) -> None:
        with self._lock:
            self._stats = RouterStats()
        logger.debug("Routing statistics reset")
