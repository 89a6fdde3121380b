"""Core types for the 8-dimension scoring engine and tier routing.

Tiers and dimensions are closed enumerations. Result objects are plain
dataclasses created fresh per call; nothing here is persisted by the core.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Tier(Enum):
    """The five complexity tiers, ordered from simplest to hardest."""

    TRIVIAL = "TRIVIAL"
    SIMPLE = "SIMPLE"
    MODERATE = "MODERATE"
    COMPLEX = "COMPLEX"
    EXPERT = "EXPERT"

    @property
    def rank(self) -> int:
        """Ordinal position of the tier (TRIVIAL = 0)."""
        return TIER_ORDER.index(self)


TIER_ORDER: Tuple[Tier, ...] = (
    Tier.TRIVIAL,
    Tier.SIMPLE,
    Tier.MODERATE,
    Tier.COMPLEX,
    Tier.EXPERT,
)


class Dimension(Enum):
    """The eight scoring dimensions.

    Values double as the configuration keys for per-dimension weights.
    """

    REASONING = "reasoning"
    CODE_TECH = "codeTech"
    TASK_STEPS = "taskSteps"
    DOMAIN_EXPERT = "domainExpert"
    OUTPUT_COMPLEX = "outputComplex"
    CREATIVITY = "creativity"
    CONTEXT_DEPEND = "contextDepend"
    MESSAGE_LENGTH = "messageLength"


# Default weights (sum = 1.0)
DEFAULT_WEIGHTS: Dict[Dimension, float] = {
    Dimension.REASONING: 0.20,
    Dimension.CODE_TECH: 0.18,
    Dimension.TASK_STEPS: 0.15,
    Dimension.DOMAIN_EXPERT: 0.12,
    Dimension.OUTPUT_COMPLEX: 0.10,
    Dimension.CREATIVITY: 0.10,
    Dimension.CONTEXT_DEPEND: 0.08,
    Dimension.MESSAGE_LENGTH: 0.07,
}

# [TRIVIAL→SIMPLE, SIMPLE→MODERATE, MODERATE→COMPLEX, COMPLEX→EXPERT]
DEFAULT_THRESHOLDS: Tuple[float, float, float, float] = (0.15, 0.35, 0.55, 0.75)


@dataclass(frozen=True)
class KeywordEntry:
    """A single keyword or pattern used by the scorer.

    Attributes:
        pattern: Substring (case-insensitive) or regex source
        weight: Evidence contributed when matched, in (0, 1]
        is_regex: Treat pattern as a regular expression
    """

    pattern: str
    weight: float
    is_regex: bool = False


@dataclass
class DimensionScore:
    """Score for a single dimension."""

    dimension: Dimension
    raw: float  # [0, 1]
    weight: float
    weighted: float  # raw × weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimension": self.dimension.value,
            "raw": self.raw,
            "weight": self.weight,
            "weighted": self.weighted,
        }


@dataclass
class ScoreResult:
    """Full scoring breakdown for one message.

    Attributes:
        dimensions: One DimensionScore per Dimension, in Dimension order
        raw_sum: Sum of weighted scores before calibration
        calibrated: Calibrated score in [0, 1]
        tier: Selected tier
        override_applied: Rule id when a hard rule decided the tier
    """

    dimensions: List[DimensionScore]
    raw_sum: float
    calibrated: float
    tier: Tier
    override_applied: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dimensions": [d.to_dict() for d in self.dimensions],
            "raw_sum": self.raw_sum,
            "calibrated": self.calibrated,
            "tier": self.tier.value,
            "override_applied": self.override_applied,
        }


@dataclass(frozen=True)
class TierModelConfig:
    """Model assignment for one tier."""

    primary: str
    fallback: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully resolved configuration consumed by the engine.

    The engine treats this as read-only input. Weights are not renormalized
    and thresholds are not re-sorted here.
    """

    tiers: Dict[Tier, TierModelConfig]
    thresholds: Tuple[float, float, float, float] = DEFAULT_THRESHOLDS
    weights: Dict[Dimension, float] = field(
        default_factory=lambda: dict(DEFAULT_WEIGHTS)
    )
    logging: bool = False

    def model_for(self, tier: Tier) -> TierModelConfig:
        """Look up the model assignment for a tier."""
        return self.tiers[tier]


@dataclass
class RouteDecision:
    """The final routing decision returned to callers."""

    tier: Tier
    model: str
    score: ScoreResult
    latency_ms: float
    fallback: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "model": self.model,
            "fallback": self.fallback,
            "score": self.score.to_dict(),
            "latency_ms": self.latency_ms,
        }


@dataclass(frozen=True)
class OverrideResult:
    """Outcome of a matching hard rule."""

    tier: Tier
    rule: str


@dataclass
class RouterStats:
    """Runtime statistics for the router service."""

    total_routed: int = 0
    tier_counts: Dict[Tier, int] = field(
        default_factory=lambda: {tier: 0 for tier in TIER_ORDER}
    )
    avg_latency_ms: float = 0.0
    override_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_routed": self.total_routed,
            "tier_counts": {t.value: c for t, c in self.tier_counts.items()},
            "avg_latency_ms": self.avg_latency_ms,
            "override_count": self.override_count,
        }
