"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from vmstat_normalizer.core.config import BASE_DIR_ENV, base_dir, resolve_batch_config, safe_resolve
from vmstat_normalizer.core.models import CorrectionResult
from vmstat_normalizer.core.variants import VARIANTS

SAMPLE_CPU_LOG = (
    "01/01/2024_10:00:00\n"
    "Mon Jan 1 10:00:00 -05 2024\n"
    "procs -----------memory---------- ---swap-- -----io---- -system-- ------cpu-----\n"
    " r  b   swpd   free   buff  cache   si   so    bi    bo   in   cs us sy id wa st\n"
    " 1  0      0 812344  10240 512000    0    0     3     5   40   60  2  1 97  0  0\n"
    " 0  0      0 812100  10240 512010    0    0     0     0   38   55  1  0 99  0  0\n"
    "01/01/2024_10:05:00\n"
    "Mon Jan 1 10:05:00 -05 2024\n"
    " 0  0      0 811900  10240 512020    0    0     0     1   39   57  1  1 98  0  0\n"
    " 2  0      0 811800  10240 512030    0    0     0     0   41   62  3  1 96  0  0\n"
    " 0  0      0 811700  10240 512040    0    0     0     2   37   52  1  0 99  0  0\n"
    " 1  0      0 811600  10240 512050    0    0     0     0   40   58  2  0 98  0  0\n"
)

SAMPLE_MEMORY_LOG = (
    "01/01/2024_10:00:00\n"
    "Mon Jan 1 10:00:00 -05 2024\n"
    "              total        used        free      shared  buff/cache   available\n"
    "Mem:        8000000     2000000     4000000       10000     2000000     5800000\n"
    "Swap:       2000000           0     2000000\n"
    "01/01/2024_10:05:00\n"
    "Mon Jan 1 10:05:00 -05 2024\n"
    "Mem:        8000000     2100000     3900000       10000     2000000     5700000\n"
    "Swap:       2000000           0     2000000\n"
)


def _read_text(path: Path) -> str:
    cfg = resolve_batch_config()
    return path.read_text(encoding=cfg.encoding, errors="replace")


def _resolve_resource_path(path: str) -> Path:
    """Resolve and validate a resource file path."""
    resolved = safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    allowed = resolve_batch_config().allowed_suffixes
    if resolved.suffix.lower() not in allowed:
        raise ValueError(f"File type not allowed. Allowed: {', '.join(sorted(allowed))}.")
    return resolved


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://vmstat-normalizer/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        allowed = ", ".join(sorted(resolve_batch_config().allowed_suffixes))
        return (
            "Resources:\n"
            "- app://vmstat-normalizer/help\n"
            "- app://vmstat-normalizer/config/variants\n"
            "- app://vmstat-normalizer/schemas/correction-result\n"
            "- app://vmstat-normalizer/examples/cpu-log\n"
            "- app://vmstat-normalizer/examples/memory-log\n"
            f"- file://{{path}} (restricted to {BASE_DIR_ENV}; allowed: {allowed})\n"
            f"\nBase directory: {base_dir()}\n"
        )

    @mcp.resource("app://vmstat-normalizer/examples/cpu-log")
    def sample_cpu_log() -> str:
        """Return a small CPU snapshot log with an uneven second block."""
        return SAMPLE_CPU_LOG

    @mcp.resource("app://vmstat-normalizer/examples/memory-log")
    def sample_memory_log() -> str:
        """Return a small memory snapshot log with a missing header."""
        return SAMPLE_MEMORY_LOG

    @mcp.resource("app://vmstat-normalizer/config/variants")
    def variants() -> dict[str, dict[str, int]]:
        """Return the target block shape of each variant."""
        return {
            name: {
                "dates": v.date_target,
                "headers": v.header_target,
                "data": v.data_target,
                "lines": v.block_size,
            }
            for name, v in VARIANTS.items()
        }

    @mcp.resource("app://vmstat-normalizer/schemas/correction-result")
    def correction_schema() -> dict[str, Any]:
        """Return the JSON schema for correction results."""
        return CorrectionResult.model_json_schema()

    @mcp.resource("file://{path}")
    async def read_file(path: str) -> str:
        """Read a log file from within VMSTAT_NORMALIZER_BASE_DIR."""
        p = _resolve_resource_path(path)
        return await asyncio.to_thread(_read_text, p)
