"""Router service: the runtime glue around the scoring core.

Each routed message goes through route -> track -> log -> optional session
persistence. The HTTP server, MCP server and CLI all share this layer.
"""

import logging
import threading
from typing import Any, Dict, Optional

from .decision_log import log_decision
from .router import route
from .router.types import TIER_ORDER, ResolvedConfig, RouteDecision
from .session_store import SessionOverrideStore
from .stats import StatsTracker
from .unified_config import get_config, resolve_config

logger = logging.getLogger(__name__)


class ClawRouter:
    """Routes messages and keeps runtime statistics."""

    def __init__(
        self,
        config: Optional[ResolvedConfig] = None,
        stats: Optional[StatsTracker] = None,
        session_store: Optional[SessionOverrideStore] = None,
    ):
        """Initialize the router service.

        Args:
            config: Resolved configuration (default: from get_config())
            stats: Statistics tracker (default: a fresh tracker)
            session_store: Store for session model overrides. When None,
                session ids are accepted but nothing is persisted.
        """
        self.config = config if config is not None else resolve_config(get_config())
        self.stats = stats if stats is not None else StatsTracker()
        self.session_store = session_store

    def decide(self, message: str, session_id: Optional[str] = None) -> RouteDecision:
        """Route a message and record the decision.

        Args:
            message: Raw user message
            session_id: Optional session to pin to the chosen model

        Returns:
            RouteDecision from the engine
        """
        decision = route(message, self.config)
        self.stats.record(decision)
        log_decision(decision, self.config.logging)

        if session_id and self.session_store is not None:
            self.session_store.set(session_id, decision.model, decision.tier)
        return decision

    def smart_route(self, message: str, session_id: Optional[str] = None) -> Dict[str, Any]:
        """Route a message and return the compact tool payload."""
        decision = self.decide(message, session_id=session_id)
        return {
            "tier": decision.tier.value,
            "model": decision.model,
            "fallback": decision.fallback,
            "score": decision.score.calibrated,
            "override": decision.score.override_applied,
            "latency_ms": decision.latency_ms,
            "dimensions": {
                d.dimension.value: round(d.raw, 4) for d in decision.score.dimensions
            },
        }

    def status(self) -> Dict[str, Any]:
        """Configuration and statistics as a JSON-friendly dict."""
        return {
            "tiers": {tier.value: self.config.tiers[tier].to_dict() for tier in TIER_ORDER},
            "thresholds": list(self.config.thresholds),
            "weights": {d.value: w for d, w in self.config.weights.items()},
            "logging": self.config.logging,
            "stats": self.stats.snapshot().to_dict(),
        }

    def status_text(self) -> str:
        """Human-readable status report."""
        stats = self.stats.snapshot()
        lines = [
            "Claw Router Status",
            "─" * 40,
            f"Thresholds: {', '.join(str(t) for t in self.config.thresholds)}",
            f"Logging:    {self.config.logging}",
            "",
            "Tier Mapping:",
        ]
        for tier in TIER_ORDER:
            tier_config = self.config.tiers[tier]
            line = f"  {tier.value:<10} → {tier_config.primary}"
            if tier_config.fallback:
                line += f" (fallback: {tier_config.fallback})"
            lines.append(line)

        lines += [
            "",
            "Stats:",
            f"  Total routed:  {stats.total_routed}",
            f"  Avg latency:   {stats.avg_latency_ms:.2f} ms",
            f"  Overrides:     {stats.override_count}",
            "",
            "Tier Distribution:",
        ]
        for tier in TIER_ORDER:
            lines.append(f"  {tier.value:<10} {stats.tier_counts[tier]}")
        return "\n".join(lines)


# =============================================================================
# Global Router Instance
# =============================================================================

_global_router: Optional[ClawRouter] = None
_router_lock = threading.Lock()


def get_router() -> ClawRouter:
    """Get the shared router, building it from the effective config on first use."""
    global _global_router
    with _router_lock:
        if _global_router is None:
            _global_router = ClawRouter(session_store=SessionOverrideStore())
            logger.debug("Router service initialized")
        return _global_router


def reset_router() -> None:
    """Drop the shared router (statistics included)."""
    global _global_router
    with _router_lock:
        _global_router = None
