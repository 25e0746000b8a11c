"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any

from vmstat_normalizer.core.batch import (
    correct_file,
    iter_candidates,
    process_batch,
    scan_folder,
)
from vmstat_normalizer.core.config import resolve_batch_config, safe_resolve
from vmstat_normalizer.core.engine import correct_text
from vmstat_normalizer.core.variants import get_variant

MAX_TEXT_CHARS = 5_000_000


def correct_text_impl(*, text: str, variant: str = "cpu") -> dict[str, Any]:
    """Implementation for the `correct_text` MCP tool."""
    if len(text) > MAX_TEXT_CHARS:
        raise ValueError(f"text too large (max {MAX_TEXT_CHARS} characters)")
    return correct_text(text, get_variant(variant)).model_dump(mode="json")


async def correct_log_file_impl(
    *,
    log_path: str,
    variant: str = "cpu",
    write: bool = False,
    replace_original: bool = False,
) -> dict[str, Any]:
    """Implementation for the `correct_log_file` MCP tool.

    Notes
    -----
    - write=False is a dry run: changes are reported, nothing is written.
    - replace_original only applies when write=True.
    """
    v = get_variant(variant)
    path = safe_resolve(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")
    if replace_original and not write:
        raise ValueError("replace_original requires write=True.")

    outcome = await correct_file(
        path,
        v,
        resolve_batch_config(),
        replace_original=replace_original,
        write=write,
    )
    return outcome.model_dump(mode="json")


async def scan_log_folder_impl(*, folder: str, variant: str = "cpu") -> dict[str, Any]:
    """Implementation for the `scan_log_folder` MCP tool."""
    v = get_variant(variant)
    root = safe_resolve(folder)
    report = await scan_folder(root, v, resolve_batch_config())
    out = report.model_dump(mode="json")
    out["total"] = report.total
    return out


async def process_log_folder_impl(
    *,
    folder: str,
    variant: str = "cpu",
    only_needed: bool = True,
    replace_original: bool = False,
) -> dict[str, Any]:
    """Implementation for the `process_log_folder` MCP tool.

    only_needed=True corrects just the files a scan flags; otherwise every
    candidate file is rewritten.
    """
    v = get_variant(variant)
    cfg = resolve_batch_config()
    root = safe_resolve(folder)

    if only_needed:
        scan = await scan_folder(root, v, cfg)
        paths = [f.path for f in scan.needs_correction]
    else:
        paths = [str(p) for p in iter_candidates(root, cfg)]

    report = await process_batch(paths, v, cfg, replace_original=replace_original)
    out = report.model_dump(mode="json")
    out["success_count"] = report.success_count
    out["error_count"] = report.error_count
    out["total_files"] = report.total_files
    return out
