"""Routing engine.

Orchestrates: overrides -> scorer -> calibration -> tier mapping -> model
selection.
"""

import time
from typing import List, Mapping, Optional, Sequence

from .overrides import check_override
from .scorer import score_dimensions
from .types import (
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    Dimension,
    DimensionScore,
    ResolvedConfig,
    RouteDecision,
    ScoreResult,
    Tier,
)

# Raw sums in practice fall in [0, ~0.5]; stretch that to [0, 1]
CALIBRATION_SPAN = 0.50
CALIBRATION_POWER = 0.75


def calibrate(raw_sum: float) -> float:
    """Stretch the raw weighted sum into the full 0-1 range.

    Linear stretch so 0.50 maps to 1.0, then a 0.75 power curve that
    compresses the low end and spreads the middle.
    """
    stretched = min(max(raw_sum, 0.0) / CALIBRATION_SPAN, 1.0)
    return stretched ** CALIBRATION_POWER


def score_to_tier(
    calibrated: float,
    thresholds: Sequence[float] = DEFAULT_THRESHOLDS,
) -> Tier:
    """Map a calibrated score to a tier using 4 ascending thresholds."""
    if calibrated < thresholds[0]:
        return Tier.TRIVIAL
    if calibrated < thresholds[1]:
        return Tier.SIMPLE
    if calibrated < thresholds[2]:
        return Tier.MODERATE
    if calibrated < thresholds[3]:
        return Tier.COMPLEX
    return Tier.EXPERT


def build_override_score(
    tier: Tier,
    rule_id: str,
    weights: Optional[Mapping[Dimension, float]] = None,
) -> ScoreResult:
    """Build a zeroed ScoreResult for a hard-rule override."""
    weights = weights if weights is not None else DEFAULT_WEIGHTS
    dimensions = [
        DimensionScore(
            dimension=dimension,
            raw=0.0,
            weight=weights.get(dimension, DEFAULT_WEIGHTS[dimension]),
            weighted=0.0,
        )
        for dimension in Dimension
    ]
    return ScoreResult(
        dimensions=dimensions,
        raw_sum=0.0,
        calibrated=0.0,
        tier=tier,
        override_applied=rule_id,
    )


def _score(message: str, config: ResolvedConfig) -> ScoreResult:
    override = check_override(message)
    if override is not None:
        return build_override_score(override.tier, override.rule, config.weights)

    dimensions: List[DimensionScore] = score_dimensions(message, config.weights)
    raw_sum = sum(d.weighted for d in dimensions)
    calibrated = calibrate(raw_sum)
    tier = score_to_tier(calibrated, config.thresholds)
    return ScoreResult(
        dimensions=dimensions,
        raw_sum=raw_sum,
        calibrated=calibrated,
        tier=tier,
    )


def score_only(message: str, config: ResolvedConfig) -> ScoreResult:
    """Score a message without model resolution.

    Args:
        message: Raw user message
        config: Resolved router configuration

    Returns:
        ScoreResult with breakdown, calibrated score and tier
    """
    return _score(message, config)


def route(message: str, config: ResolvedConfig) -> RouteDecision:
    """Route a message: determine tier and model.

    Args:
        message: Raw user message
        config: Resolved router configuration

    Returns:
        RouteDecision with tier, model, fallback, score breakdown and latency
    """
    started = time.perf_counter()
    score = _score(message, config)
    tier_config = config.model_for(score.tier)
    latency_ms = round((time.perf_counter() - started) * 1000, 3)
    return RouteDecision(
        tier=score.tier,
        model=tier_config.primary,
        fallback=tier_config.fallback,
        score=score,
        latency_ms=latency_ms,
    )
