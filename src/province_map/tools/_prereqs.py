"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, map_loaded: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, map_loaded=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if map_loaded and not state.map_loaded:
        raise ValueError("Load a map first with load_map.")
