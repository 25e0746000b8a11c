"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def review_corrections(log_path: str, variant: str = "cpu") -> list[dict[str, Any]]:
        """Build a prompt that dry-runs a correction and explains the changes."""
        return [
            {
                "role": "system",
                "content": (
                    "You are reviewing automatic corrections of system-monitoring snapshot logs. "
                    "Each block holds date lines, column headers and numeric sample rows. "
                    "Explain which blocks were malformed, how data rows moved between blocks, "
                    "and whether any block is still short after correction. Be concise."
                ),
            },
            {
                "role": "user",
                "content": (
                    f'Call the correct_log_file tool with log_path="{log_path}", '
                    f'variant="{variant}" and write=false, then summarize the changes. '
                    "Do not write the file unless I ask."
                ),
            },
        ]
