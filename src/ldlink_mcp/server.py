"""
LDlink MCP Server - Main Entry Point

An MCP server for LD pruning with the LDlink SNPclip service,
compatible with Claude Desktop and other MCP clients.
"""

import asyncio
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool, Resource

# Load environment variables (LDLINK_TOKEN, LOG_LEVEL)
load_dotenv()

# Configure logging; stdout is reserved for the MCP stream
logging.basicConfig(
    level=getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr),
    ]
)
logger = logging.getLogger(__name__)

# Create the MCP server instance
server = Server("ldlink-snpclip")

# Import and register tools
from ldlink_mcp.exceptions import RemoteError
from ldlink_mcp.tools.snpclip_tools import SNPCLIP_TOOLS, handle_snpclip_tool
from ldlink_mcp.resources.ld_resources import RESOURCES, handle_resource


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available LDlink tools."""
    all_tools = []
    all_tools.extend(SNPCLIP_TOOLS)

    logger.info(f"Listing {len(all_tools)} available tools")
    return all_tools


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls by routing to appropriate handler."""
    # Arguments may carry the API token
    logger.info(f"Tool called: {name} with args: {sorted(arguments)}")

    try:
        if name in [t.name for t in SNPCLIP_TOOLS]:
            result = await handle_snpclip_tool(name, arguments)
        else:
            raise ValueError(f"Unknown tool: {name}")

        return [TextContent(type="text", text=result)]

    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return [TextContent(type="text", text=f"Error: Invalid input - {e}")]
    except RemoteError as e:
        logger.error(f"LDlink service error (status={e.status}): {e}")
        return [TextContent(type="text", text=f"Error: LDlink service error - {e}")]
    except Exception as e:
        logger.exception(f"Tool execution failed: {e}")
        return [TextContent(type="text", text=f"Error: {type(e).__name__} - {e}")]


@server.list_resources()
async def list_resources() -> list[Resource]:
    """List available reference resources."""
    logger.info(f"Listing {len(RESOURCES)} available resources")
    return RESOURCES


@server.read_resource()
async def read_resource(uri: str) -> str:
    """Read data from a resource URI."""
    logger.info(f"Reading resource: {uri}")

    try:
        result = await handle_resource(str(uri))
        return result
    except Exception as e:
        logger.exception(f"Resource read failed: {e}")
        raise


async def run_server():
    """Run the MCP server using stdio transport."""
    logger.info("Starting LDlink MCP Server...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    try:
        # Windows-specific fix for asyncio pipes
        if sys.platform == 'win32':
            asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
