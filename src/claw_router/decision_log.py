"""Routing decision logger.

Formats a RouteDecision breakdown for debugging and emits it through the
standard logging module. Respects the `logging` flag in config.
"""

import logging

from .router.types import RouteDecision

logger = logging.getLogger(__name__)

_RULE = "─" * 36


def format_decision(decision: RouteDecision) -> str:
    """Render a decision as a multi-line human-readable block.

    Only dimensions with a non-zero raw score are listed.
    """
    score = decision.score
    lines = [
        "[claw-router] ─── Route Decision ───",
        f"  Tier:       {decision.tier.value}",
        f"  Model:      {decision.model}",
    ]
    if decision.fallback:
        lines.append(f"  Fallback:   {decision.fallback}")
    lines.append(f"  Score:      {score.calibrated:.4f} (raw sum: {score.raw_sum:.4f})")
    if score.override_applied:
        lines.append(f"  Override:   {score.override_applied}")

    active = [d for d in score.dimensions if d.raw > 0]
    if active:
        lines.append("  Dimensions:")
        for d in active:
            lines.append(
                f"    {d.dimension.value}: {d.raw:.3f} × {d.weight} = {d.weighted:.4f}"
            )

    lines.append(f"  Latency:    {decision.latency_ms} ms")
    lines.append(_RULE)
    return "\n".join(lines)


def log_decision(decision: RouteDecision, enabled: bool) -> None:
    """Log a decision at INFO when verbose routing logs are enabled."""
    if not enabled:
        return
    logger.info(format_decision(decision))
