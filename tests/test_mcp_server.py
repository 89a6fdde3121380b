"""Tests for the claw-router MCP server.

These tests require the optional [mcp] dependencies.
Install with: pip install "claw-router[mcp]"
"""
import json

import pytest

# Skip all tests in this module if MCP is not installed
pytest.importorskip("mcp", reason="MCP dependencies not installed. Install with: pip install 'claw-router[mcp]'")


def test_mcp_server_imports():
    """Test that MCP server can be imported."""
    from claw_router import mcp_server
    assert hasattr(mcp_server, 'mcp')
    assert hasattr(mcp_server, 'smart_route')
    assert hasattr(mcp_server, 'route_status')
    assert hasattr(mcp_server, 'main')


def test_main_entry_point_exists():
    """Test that main() entry point is defined."""
    from claw_router.mcp_server import main
    assert callable(main)


@pytest.mark.asyncio
async def test_smart_route_tool():
    """smart_route returns the JSON tool payload."""
    from claw_router.mcp_server import smart_route

    result = json.loads(await smart_route("请做一个系统设计"))

    assert result["tier"] == "EXPERT"
    assert result["model"] == "default"
    assert result["override"] == 'expert_keyword ("系统设计")'
    assert set(result["dimensions"]) == {
        "reasoning", "codeTech", "taskSteps", "domainExpert",
        "outputComplex", "creativity", "contextDepend", "messageLength",
    }


@pytest.mark.asyncio
async def test_smart_route_records_session():
    """A session id is persisted through the shared router."""
    from claw_router.mcp_server import smart_route
    from claw_router.service import get_router

    await smart_route("hi", session_id="mcp-1")

    assert get_router().session_store.get("mcp-1")["tier"] == "TRIVIAL"


@pytest.mark.asyncio
async def test_route_status_text():
    """route_status returns the text report with counts."""
    from claw_router.mcp_server import route_status, smart_route

    await smart_route("ok")
    result = await route_status()

    assert "Claw Router Status" in result
    assert "Total routed:  1" in result


@pytest.mark.asyncio
async def test_route_status_json():
    """route_status(as_json=True) returns a JSON document."""
    from claw_router.mcp_server import route_status

    result = json.loads(await route_status(as_json=True))

    assert result["stats"]["total_routed"] == 0
    assert result["logging"] is False
