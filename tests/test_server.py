"""End-to-end server tests."""

import json

import pytest

from driver_outline_mcp.server import call_tool, list_tools


@pytest.mark.asyncio
async def test_server_lists_two_tools():
    """Test that server lists all tools."""
    tools = await list_tools()

    names = {t.name for t in tools}
    assert names == {"generate_outline", "get_file_outline"}


@pytest.mark.asyncio
async def test_generate_outline_tool_schema():
    """Test generate_outline tool has correct schema."""
    tools = await list_tools()

    generate = next(t for t in tools if t.name == "generate_outline")

    assert "path" in generate.inputSchema["properties"]
    assert "write_files" in generate.inputSchema["properties"]
    assert generate.inputSchema["required"] == ["path"]


@pytest.mark.asyncio
async def test_call_tool_relative_path():
    """Test that errors come back as JSON text."""
    content = await call_tool("generate_outline", {"path": "relative/dir"})

    result = json.loads(content[0].text)
    assert result["success"] is False
    assert "absolute" in result["error"]


@pytest.mark.asyncio
async def test_call_tool_unknown():
    content = await call_tool("does_not_exist", {})

    assert "Unknown tool" in json.loads(content[0].text)["error"]


@pytest.mark.asyncio
async def test_call_tool_missing_argument():
    content = await call_tool("get_file_outline", {"path": "/tmp"})

    assert "error" in json.loads(content[0].text)
