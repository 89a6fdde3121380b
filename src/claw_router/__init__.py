"""Claw Router - route user messages to model tiers by complexity.

Usage:
    from claw_router import route, resolve_config

    config = resolve_config({"tiers": {"EXPERT": {"primary": "big-model"}}})
    decision = route("请做一个系统设计", config)
    print(decision.tier, decision.model)

For the MCP server:
    pip install "claw-router[mcp]"
    claw-router-mcp
"""

__version__ = "1.0.0"

from claw_router.router import (
    Dimension,
    RouteDecision,
    ScoreResult,
    Tier,
    route,
    score_only,
)
from claw_router.service import ClawRouter, get_router, reset_router
from claw_router.unified_config import RouterConfig, get_config, resolve_config

__all__ = [
    "__version__",
    "route",
    "score_only",
    "resolve_config",
    "get_config",
    "RouterConfig",
    "ClawRouter",
    "get_router",
    "reset_router",
    "Tier",
    "Dimension",
    "RouteDecision",
    "ScoreResult",
]
