"""Status tool and session resource: get_status, state://session."""

import json
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state


def register_status_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def get_status() -> str:
        """Return a summary of the current session.

        Shows whether a map is loaded, how many provinces it has, and the
        current viewport, camera and colors.
        """
        return json.dumps(state.summary(), indent=2)

    @mcp.resource("state://session")
    def session_state() -> str:
        """Current session summary as JSON."""
        return json.dumps(state.summary(), indent=2)
