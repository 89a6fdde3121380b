"""Shared test configuration and fixtures."""
import os

import pytest

from claw_router.router.types import TIER_ORDER, Tier, TierModelConfig, ResolvedConfig


# =============================================================================
# Environment Reset
# =============================================================================


@pytest.fixture(autouse=True)
def reset_env(monkeypatch, tmp_path):
    """Clear claw-router env vars and cached globals before each test."""
    for name in list(os.environ):
        if name.startswith("CLAW_ROUTER_"):
            monkeypatch.delenv(name, raising=False)

    # Keep the default session store out of the real home directory
    monkeypatch.setenv("CLAW_ROUTER_SESSION_STORE", str(tmp_path / "sessions.json"))
    # Keep config discovery away from any ./claw_router.yaml
    monkeypatch.chdir(tmp_path)

    from claw_router.service import reset_router
    from claw_router.unified_config import reset_config

    reset_config()
    reset_router()
    yield
    reset_config()
    reset_router()


# =============================================================================
# Shared Configs
# =============================================================================


@pytest.fixture
def default_config():
    """Default ResolvedConfig with every tier mapped to 'default'."""
    from claw_router.unified_config import resolve_config

    return resolve_config()


@pytest.fixture
def named_config():
    """ResolvedConfig mapping each tier to '<tier>-model' with a fallback on EXPERT."""
    tiers = {tier: TierModelConfig(primary=f"{tier.value.lower()}-model") for tier in TIER_ORDER}
    tiers[Tier.EXPERT] = TierModelConfig(primary="expert-model", fallback="complex-model")
    return ResolvedConfig(tiers=tiers)
