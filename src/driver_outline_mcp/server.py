"""MCP server for driver-outline-mcp."""

import asyncio
import json
import logging
import sys

from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import OutlineSettings
from .tools.generate_outline import generate_outline
from .tools.get_file_outline import get_file_outline


logger = logging.getLogger(__name__)

# Create server
server = Server("driver-outline-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="generate_outline",
            description="Generate a symbol outline (namespaces, types, functions, variables, macros) of a C/C++ source tree. Scans the folder, outlines every source file, repeats until the symbol count is stable, and writes driver_outline.json/.md/.txt into the folder.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Absolute path to the folder to outline"
                    },
                    "write_files": {
                        "type": "boolean",
                        "description": "Write driver_outline.json, driver_outline.md and driver_outline.txt into the folder.",
                        "default": True
                    }
                },
                "required": ["path"]
            }
        ),
        Tool(
            name="get_file_outline",
            description="Get the symbol tree of one file from a previously generated outline.",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Absolute path of the outlined folder"
                    },
                    "file_path": {
                        "type": "string",
                        "description": "Path to the file within the folder (e.g., 'src/main.c')"
                    }
                },
                "required": ["path", "file_path"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "generate_outline":
            result = await generate_outline(
                path=arguments["path"],
                write_files=arguments.get("write_files", True),
                settings=OutlineSettings.from_env(),
            )
        elif name == "get_file_outline":
            result = get_file_outline(
                path=arguments["path"],
                file_path=arguments["file_path"],
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2, ensure_ascii=False))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def configure_logging(settings: OutlineSettings) -> None:
    """Log to stderr; stdout carries the stdio protocol."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Main entry point."""
    configure_logging(OutlineSettings.from_env())
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
