"""Message-complexity scoring core.

Pure and synchronous: no I/O, no shared mutable state.
"""

from .engine import build_override_score, calibrate, route, score_only, score_to_tier
from .keywords import KEYWORDS, KeywordTableError, validate_keyword_table
from .overrides import OVERRIDE_RULES, OverrideRule, check_override
from .scorer import score_dimensions, score_length
from .types import (
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    TIER_ORDER,
    Dimension,
    DimensionScore,
    KeywordEntry,
    OverrideResult,
    ResolvedConfig,
    RouteDecision,
    RouterStats,
    ScoreResult,
    Tier,
    TierModelConfig,
)

__all__ = [
    # Engine
    "route",
    "score_only",
    "calibrate",
    "score_to_tier",
    "build_override_score",
    # Scorer
    "score_dimensions",
    "score_length",
    # Overrides
    "check_override",
    "OverrideRule",
    "OVERRIDE_RULES",
    # Keywords
    "KEYWORDS",
    "KeywordTableError",
    "validate_keyword_table",
    # Types
    "Tier",
    "TIER_ORDER",
    "Dimension",
    "DEFAULT_WEIGHTS",
    "DEFAULT_THRESHOLDS",
    "KeywordEntry",
    "DimensionScore",
    "ScoreResult",
    "TierModelConfig",
    "ResolvedConfig",
    "RouteDecision",
    "OverrideResult",
    "RouterStats",
]
