"""MCP server for province-map.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.map import register_map_tools
from .tools.query import register_query_tools
from .tools.view import register_view_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "province-map",
    instructions="Load administrative region boundaries, query provinces by point or id, and render map views",
)

# Register all tool groups
register_map_tools(mcp)
register_query_tools(mcp)
register_view_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
