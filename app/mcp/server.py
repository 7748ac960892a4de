"""FastMCP server instance – mounted inside FastAPI."""

from fastmcp import FastMCP

mcp = FastMCP(
    name="TwelveWeekYear",
    instructions=(
        "12 Week Year tools for listing and toggling tasks, reading weekly and "
        "overall weighted progress, and running the recurrence reset pass. "
        "A week is successful at 80% weighted completion."
    ),
)

# Import tool modules to register @mcp.tool decorators
from app.mcp.tools import task_tools, progress_tools  # noqa: E402, F401
