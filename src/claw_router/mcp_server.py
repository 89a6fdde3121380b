"""Claw Router MCP Server - recommend a model tier for a user message.

Tools:
- smart_route: analyze a message, return tier, model, score and the
  8-dimension breakdown
- route_status: tier mapping, thresholds and routing statistics
"""
import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from claw_router.service import get_router

mcp = FastMCP("Claw Router")


@mcp.tool()
async def smart_route(message: str, session_id: Optional[str] = None) -> str:
    """
    Analyze a user message and recommend the optimal model tier.

    Returns tier, model, calibrated score, and full dimension breakdown.
    Use this to decide which model to forward a request to.

    Args:
        message: The user message to analyze
        session_id: Optional session id; the chosen model is recorded for it
    """
    payload = get_router().smart_route(message, session_id=session_id)
    return json.dumps(payload, indent=2, ensure_ascii=False)


@mcp.tool()
async def route_status(as_json: bool = False) -> str:
    """
    Show claw-router configuration and statistics.

    Args:
        as_json: Return a JSON document instead of the text report
    """
    router = get_router()
    if as_json:
        return json.dumps(router.status(), indent=2, ensure_ascii=False)
    return router.status_text()


def main():
    """Entry point for the claw-router-mcp command."""
    mcp.run()


if __name__ == "__main__":
    main()
