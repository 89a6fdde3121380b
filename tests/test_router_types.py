"""Tests for core routing types."""

import pytest


class TestTier:
    """Test Tier enum and ordering."""

    def test_tier_has_five_values(self):
        """Tier should have TRIVIAL through EXPERT."""
        from claw_router.router.types import Tier

        assert [t.value for t in Tier] == ["TRIVIAL", "SIMPLE", "MODERATE", "COMPLEX", "EXPERT"]

    def test_tier_rank_follows_tier_order(self):
        """rank should be the position in TIER_ORDER."""
        from claw_router.router.types import TIER_ORDER, Tier

        assert Tier.TRIVIAL.rank == 0
        assert Tier.EXPERT.rank == 4
        assert [t.rank for t in TIER_ORDER] == [0, 1, 2, 3, 4]


class TestDimension:
    """Test Dimension enum and default weights."""

    def test_dimension_values_are_config_keys(self):
        """Dimension values should be the camelCase config keys."""
        from claw_router.router.types import Dimension

        assert Dimension.CODE_TECH.value == "codeTech"
        assert Dimension.MESSAGE_LENGTH.value == "messageLength"
        assert len(list(Dimension)) == 8

    def test_default_weights_cover_every_dimension(self):
        """DEFAULT_WEIGHTS should have one entry per dimension summing to 1.0."""
        from claw_router.router.types import DEFAULT_WEIGHTS, Dimension

        assert set(DEFAULT_WEIGHTS) == set(Dimension)
        assert sum(DEFAULT_WEIGHTS.values()) == pytest.approx(1.0)

    def test_default_thresholds_ascending(self):
        """DEFAULT_THRESHOLDS should be four ascending numbers."""
        from claw_router.router.types import DEFAULT_THRESHOLDS

        assert DEFAULT_THRESHOLDS == (0.15, 0.35, 0.55, 0.75)


class TestSerialization:
    """Test to_dict() on result types."""

    def test_route_decision_to_dict(self):
        """RouteDecision.to_dict should produce JSON-friendly values."""
        from claw_router.router.types import (
            Dimension,
            DimensionScore,
            RouteDecision,
            ScoreResult,
            Tier,
        )

        score = ScoreResult(
            dimensions=[DimensionScore(Dimension.REASONING, 0.5, 0.2, 0.1)],
            raw_sum=0.1,
            calibrated=0.3,
            tier=Tier.SIMPLE,
        )
        decision = RouteDecision(
            tier=Tier.SIMPLE, model="m", score=score, latency_ms=0.123, fallback="f"
        )

        data = decision.to_dict()

        assert data["tier"] == "SIMPLE"
        assert data["model"] == "m"
        assert data["fallback"] == "f"
        assert data["latency_ms"] == 0.123
        assert data["score"]["override_applied"] is None
        assert data["score"]["dimensions"][0] == {
            "dimension": "reasoning",
            "raw": 0.5,
            "weight": 0.2,
            "weighted": 0.1,
        }

    def test_router_stats_defaults(self):
        """RouterStats should start with zero counts for every tier."""
        from claw_router.router.types import RouterStats

        data = RouterStats().to_dict()

        assert data["total_routed"] == 0
        assert data["tier_counts"] == {
            "TRIVIAL": 0,
            "SIMPLE": 0,
            "MODERATE": 0,
            "COMPLEX": 0,
            "EXPERT": 0,
        }

    def test_tier_model_config_is_frozen(self):
        """TierModelConfig should be immutable."""
        from dataclasses import FrozenInstanceError

        from claw_router.router.types import TierModelConfig

        config = TierModelConfig(primary="a")
        with pytest.raises(FrozenInstanceError):
            config.primary = "b"
