"""Minimal HTTP server for claw-router.

Exposes the routing decision and runtime statistics over HTTP so that
gateways and agents in other processes can ask which model to use.

Design principles:
- Local, single-tenant: optional bearer token only
- Shares the process-wide router service (and its statistics)
- Logs go to stdout

Usage:
    pip install "claw-router[http]"
    uvicorn claw_router.http_server:app --port 8000
"""

import os
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from claw_router import __version__
from claw_router.service import get_router

# Security scheme for Bearer token authentication
security = HTTPBearer(auto_error=False)


def get_api_token() -> Optional[str]:
    """Get the configured API token from environment.

    Returns None if no token is configured, meaning auth is optional.
    """
    token = os.environ.get("CLAW_ROUTER_API_TOKEN")
    return token if token else None


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> None:
    """Verify the Bearer token if CLAW_ROUTER_API_TOKEN is configured.

    - If CLAW_ROUTER_API_TOKEN is set, all /v1 endpoints require auth
    - If not set, auth is optional
    - Health endpoint bypasses this check entirely

    Raises:
        HTTPException: 401 if token is required but missing/invalid
    """
    api_token = get_api_token()
    if api_token is None:
        return

    if credentials is None or credentials.credentials != api_token:
        raise HTTPException(
            status_code=401,
            detail="Invalid or missing API token. Provide Authorization: Bearer <token>",
        )


# Dependency for protected endpoints
auth_dependency = Depends(verify_token)

app = FastAPI(
    title="Claw Router",
    description="Message-complexity routing to model tiers",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


class DecideRequest(BaseModel):
    """Request body for a routing decision."""

    message: str = Field(..., description="The user message to analyze")
    session_id: Optional[str] = Field(
        default=None, description="Pin this session to the chosen model"
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health() -> HealthResponse:
    """Health check endpoint for load balancers and monitoring."""
    return HealthResponse(status="ok", service="claw-router", version=__version__)


@app.post("/v1/route/decide", tags=["Route"], dependencies=[auth_dependency])
async def route_decide(request: DecideRequest) -> Dict[str, Any]:
    """Route a message and return the full decision.

    The response carries tier, model, fallback, the 8-dimension score
    breakdown and the scoring latency in milliseconds.
    """
    decision = get_router().decide(request.message, session_id=request.session_id)
    return decision.to_dict()


@app.get("/v1/route/stats", tags=["Route"], dependencies=[auth_dependency])
async def route_stats() -> Dict[str, Any]:
    """Routing statistics since the server started."""
    return get_router().stats.snapshot().to_dict()


@app.get("/v1/route/status", tags=["Route"], dependencies=[auth_dependency])
async def route_status() -> Dict[str, Any]:
    """Tier mapping, thresholds, weights and statistics."""
    return get_router().status()
