"""YAML configuration for claw-router.

This module merges user-supplied partial configuration over fixed defaults
and produces the ResolvedConfig consumed by the routing engine.

Configuration Priority: Environment Variables > YAML > Defaults

Example YAML configuration (claw_router.yaml):

    router:
      tiers:
        TRIVIAL:
          primary: openai/gpt-4o-mini
        EXPERT:
          primary: anthropic/claude-opus-4
          fallback: openai/gpt-4o
      thresholds: [0.15, 0.35, 0.55, 0.75]
      scoring:
        weights:
          reasoning: 0.25
          codeTech: 0.13
      logging: true
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .router.types import (
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    TIER_ORDER,
    Dimension,
    ResolvedConfig,
    Tier,
    TierModelConfig,
)

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "default"

_TIER_NAMES = {tier.value for tier in Tier}
_DIMENSION_KEYS = {dimension.value: dimension for dimension in Dimension}


# =============================================================================
# Configuration Models
# =============================================================================


class TierModelEntry(BaseModel):
    """Partial model assignment for one tier; unset fields keep the default."""

    primary: Optional[str] = None
    fallback: Optional[str] = None


class ScoringConfig(BaseModel):
    """Scoring overrides.

    Weight values are checked in resolve_config so a single bad entry is
    ignored instead of rejecting the whole file.
    """

    weights: Dict[str, Any] = Field(default_factory=dict)


class RouterConfig(BaseModel):
    """User-facing (partial) router configuration."""

    tiers: Dict[str, TierModelEntry] = Field(default_factory=dict)
    thresholds: Optional[List[Any]] = None
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    logging: bool = False

    @field_validator("tiers")
    @classmethod
    def validate_tier_names(cls, v: Dict[str, TierModelEntry]) -> Dict[str, TierModelEntry]:
        normalized = {}
        for name, entry in v.items():
            key = name.upper()
            if key not in _TIER_NAMES:
                raise ValueError(f"invalid tier '{name}', must be one of {sorted(_TIER_NAMES)}")
            normalized[key] = entry
        return normalized

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return self.model_dump(exclude_none=True)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump({"router": self.to_dict()}, default_flow_style=False, sort_keys=False)


# =============================================================================
# Resolution
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _resolve_tiers(raw: RouterConfig) -> Dict[Tier, TierModelConfig]:
    tiers = {tier: TierModelConfig(primary=DEFAULT_MODEL) for tier in TIER_ORDER}
    for name, entry in raw.tiers.items():
        tier = Tier(name)
        base = tiers[tier]
        tiers[tier] = TierModelConfig(
            primary=entry.primary or base.primary,
            fallback=entry.fallback if entry.fallback is not None else base.fallback,
        )
    return tiers


def _resolve_thresholds(raw: RouterConfig):
    if raw.thresholds is None:
        return DEFAULT_THRESHOLDS

    if len(raw.thresholds) != 4 or not all(_is_number(t) for t in raw.thresholds):
        logger.warning(
            f"Ignoring thresholds {raw.thresholds!r}: expected exactly 4 numbers"
        )
        return DEFAULT_THRESHOLDS

    thresholds = tuple(float(t) for t in raw.thresholds)
    if any(a >= b for a, b in zip(thresholds, thresholds[1:])):
        logger.warning(f"Thresholds {list(thresholds)} are not strictly ascending")
    return thresholds


def _resolve_weights(raw: RouterConfig) -> Dict[Dimension, float]:
    weights = dict(DEFAULT_WEIGHTS)
    for key, value in raw.scoring.weights.items():
        dimension = _DIMENSION_KEYS.get(key)
        if dimension is None:
            logger.warning(f"Ignoring weight for unknown dimension '{key}'")
            continue
        if not _is_number(value):
            logger.warning(f"Ignoring non-numeric weight for '{key}': {value!r}")
            continue
        weights[dimension] = float(value)

    total = sum(weights.values())
    if abs(total - 1.0) > 1e-6:
        logger.warning(
            f"Dimension weights sum to {total:.4f}, not 1.0; "
            "calibration is tuned for weights summing to 1.0"
        )
    return weights


def resolve_config(raw: Union[RouterConfig, Dict[str, Any], None] = None) -> ResolvedConfig:
    """Merge a partial configuration over the defaults.

    Args:
        raw: RouterConfig, plain dict of the same shape, or None for defaults

    Returns:
        Fully populated ResolvedConfig

    Raises:
        ValueError: If a dict is given that fails model validation
    """
    if raw is None:
        raw = RouterConfig()
    elif isinstance(raw, dict):
        raw = RouterConfig(**raw)

    return ResolvedConfig(
        tiers=_resolve_tiers(raw),
        thresholds=_resolve_thresholds(raw),
        weights=_resolve_weights(raw),
        logging=raw.logging,
    )


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def _substitute_env_vars(value: Any) -> Any:
    """Recursively substitute environment variables in configuration values.

    Supports ${VAR_NAME} syntax.
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}]+)\}"
        for var_name in re.findall(pattern, value):
            value = value.replace(f"${{{var_name}}}", os.getenv(var_name, ""))
        return value
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def _merge_dicts(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def load_config(
    config_path: Optional[Path] = None,
    strict: bool = False,
) -> RouterConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file. If None, uses defaults.
        strict: If True, raise ValueError on invalid configuration. If False,
                log and fall back to defaults.

    Returns:
        RouterConfig object

    Raises:
        ValueError: If strict=True and configuration is invalid
    """
    if config_path is None or not config_path.exists():
        return RouterConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            return RouterConfig()
        if not isinstance(raw_config, dict):
            raise ValueError("top-level YAML must be a mapping")

        raw_config = _substitute_env_vars(raw_config)
        router_config = raw_config.get("router") or {}
        return RouterConfig(**router_config)

    except yaml.YAMLError as e:
        if strict:
            raise ValueError(f"Invalid YAML: {e}") from e
        logger.warning(f"Invalid YAML in {config_path}, using defaults: {e}")
        return RouterConfig()
    except (ValueError, TypeError) as e:
        if strict:
            raise ValueError(f"Configuration error: {e}") from e
        logger.warning(f"Invalid configuration in {config_path}, using defaults: {e}")
        return RouterConfig()


def _find_config_file() -> Optional[Path]:
    """Find configuration file in standard locations.

    Search order:
    1. CLAW_ROUTER_CONFIG environment variable
    2. ./claw_router.yaml (current directory)
    3. ~/.config/claw-router/claw_router.yaml
    """
    env_path = os.getenv("CLAW_ROUTER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path
        logger.warning(f"CLAW_ROUTER_CONFIG points to missing file: {env_path}")

    cwd_path = Path.cwd() / "claw_router.yaml"
    if cwd_path.exists():
        return cwd_path

    home_path = Path.home() / ".config" / "claw-router" / "claw_router.yaml"
    if home_path.exists():
        return home_path

    return None


def _apply_env_overrides(config: RouterConfig) -> RouterConfig:
    """Apply environment variable overrides to configuration.

    Environment variables take precedence over YAML configuration.
    """
    overrides: Dict[str, Any] = {}

    logging_env = os.getenv("CLAW_ROUTER_LOGGING")
    if logging_env:
        overrides["logging"] = logging_env.lower() in ("true", "1", "yes")

    thresholds_env = os.getenv("CLAW_ROUTER_THRESHOLDS")
    if thresholds_env:
        try:
            overrides["thresholds"] = [float(t.strip()) for t in thresholds_env.split(",")]
        except ValueError:
            logger.warning(f"Ignoring malformed CLAW_ROUTER_THRESHOLDS: {thresholds_env!r}")

    for tier in TIER_ORDER:
        model_env = os.getenv(f"CLAW_ROUTER_MODEL_{tier.value}")
        if model_env:
            overrides.setdefault("tiers", {}).setdefault(tier.value, {})["primary"] = model_env
        fallback_env = os.getenv(f"CLAW_ROUTER_FALLBACK_{tier.value}")
        if fallback_env:
            overrides.setdefault("tiers", {}).setdefault(tier.value, {})["fallback"] = fallback_env

    if not overrides:
        return config
    return RouterConfig(**_merge_dicts(config.to_dict(), overrides))


def get_effective_config(config_path: Optional[Path] = None) -> RouterConfig:
    """Get the effective configuration with all overrides applied.

    Priority: Environment Variables > YAML > Defaults

    Args:
        config_path: Optional explicit path to configuration file.
                    If None, searches standard locations.

    Returns:
        RouterConfig with all overrides applied
    """
    if config_path is None:
        config_path = _find_config_file()

    config = load_config(config_path)
    return _apply_env_overrides(config)


# =============================================================================
# Global Configuration Instance
# =============================================================================

_global_config: Optional[RouterConfig] = None


def get_config() -> RouterConfig:
    """Get the global configuration instance.

    This function caches the configuration after first load.
    Use reload_config() to force a reload.
    """
    global _global_config
    if _global_config is None:
        _global_config = get_effective_config()
    return _global_config


def reload_config() -> RouterConfig:
    """Reload the global configuration from disk."""
    global _global_config
    _global_config = get_effective_config()
    return _global_config


def reset_config() -> None:
    """Drop the cached global configuration."""
    global _global_config
    _global_config = None
