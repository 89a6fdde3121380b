"""
claw_router/cli.py

claw-router CLI entry point.

Commands:
  claw-router status              Tier mapping, thresholds and stats
  claw-router test "<message>"    Route a message and show the breakdown
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .router import route
from .router.types import ResolvedConfig, RouteDecision
from .service import ClawRouter
from .unified_config import get_effective_config, resolve_config


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="claw-router", description="Message-complexity model router"
    )
    parser.add_argument("--config", metavar="PATH", help="YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    status_p = sub.add_parser("status", help="Show router configuration and stats")
    status_p.add_argument("--json", action="store_true", help="Print JSON")

    test_p = sub.add_parser("test", help="Test route a message")
    test_p.add_argument("message", help="Message to route")
    test_p.add_argument("--json", action="store_true", help="Print the full decision as JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config and not Path(args.config).exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1

    config_path = Path(args.config) if args.config else None
    config = resolve_config(get_effective_config(config_path))

    if args.command == "status":
        return _cmd_status(config, args.json)
    if args.command == "test":
        return _cmd_test(config, args.message, args.json)
    return 2


def _cmd_status(config: ResolvedConfig, as_json: bool) -> int:
    router = ClawRouter(config=config)
    if as_json:
        print(json.dumps(router.status(), indent=2, ensure_ascii=False))
    else:
        print(router.status_text())
    return 0


def _cmd_test(config: ResolvedConfig, message: str, as_json: bool) -> int:
    decision = route(message, config)
    if as_json:
        print(json.dumps(decision.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_decision(message, decision)
    return 0


def _print_decision(message: str, decision: RouteDecision) -> None:
    score = decision.score
    print(f'Message:  "{message}"')
    print(f"Tier:     {decision.tier.value}")
    print(f"Model:    {decision.model}")
    if decision.fallback:
        print(f"Fallback: {decision.fallback}")
    print(f"Score:    {score.calibrated:.4f}")
    if score.override_applied:
        print(f"Override: {score.override_applied}")
    print(f"Latency:  {decision.latency_ms} ms")
    print("\nDimensions:")
    for d in score.dimensions:
        if d.raw > 0:
            print(f"  {d.dimension.value:<16} {d.raw:.4f} × {d.weight} = {d.weighted:.4f}")


if __name__ == "__main__":
    sys.exit(main())
