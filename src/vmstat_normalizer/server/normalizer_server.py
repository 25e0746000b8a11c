"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: correct a text buffer, a file, or a whole folder of snapshot logs
- Resources: help text, sample logs and the result schema
- Prompts: a template for reviewing a file's corrections

Run locally (stdio):
    python -m vmstat_normalizer.server.normalizer_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from vmstat_normalizer.core.config import configure_logging
from vmstat_normalizer.prompts.registry import register_prompts
from vmstat_normalizer.resources.registry import register_resources
from vmstat_normalizer.tools.correct import (
    correct_log_file_impl,
    correct_text_impl,
    process_log_folder_impl,
    scan_log_folder_impl,
)

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("vmstat-normalizer", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def correct_text(text: str, variant: str = "cpu") -> dict[str, Any]:
    """Correct a snapshot log passed as text.

    Parameters
    ----------
    text:
        Raw log contents.
    variant:
        "cpu" (vmstat: 2 dates, 2 headers, 3 data rows per block) or
        "memory" (free: 2 dates, 1 header, 2 data rows per block).

    Returns
    -------
    dict:
        {"variant", "corrected_text", "changes": list[dict], "stats": dict}
    """
    return correct_text_impl(text=text, variant=variant)


@mcp.tool()
async def correct_log_file(
    log_path: str,
    variant: str = "cpu",
    write: bool = False,
    replace_original: bool = False,
) -> dict[str, Any]:
    """Correct one log file under the configured base directory.

    write=False only reports changes. With write=True the result goes to
    `<name>_corrected<ext>`, or over the original when replace_original is set.
    """
    return await correct_log_file_impl(
        log_path=log_path,
        variant=variant,
        write=write,
        replace_original=replace_original,
    )


@mcp.tool()
async def scan_log_folder(folder: str, variant: str = "cpu") -> dict[str, Any]:
    """Dry-run every .txt/.log file in a folder and group them by status."""
    return await scan_log_folder_impl(folder=folder, variant=variant)


@mcp.tool()
async def process_log_folder(
    folder: str,
    variant: str = "cpu",
    only_needed: bool = True,
    replace_original: bool = False,
) -> dict[str, Any]:
    """Correct the files in a folder and return per-file outcomes."""
    return await process_log_folder_impl(
        folder=folder,
        variant=variant,
        only_needed=only_needed,
        replace_original=replace_original,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
