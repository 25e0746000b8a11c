"""Correction entry points.

Pure functions over a text buffer: classify -> segment -> (backfill) ->
(validate) -> redistribute -> render -> report. No I/O and no module state,
so they are safe to call concurrently.
"""

from __future__ import annotations

import logging

from .classify import classify_lines
from .models import ChangeRecord, CorrectionResult
from .redistribute import (
    block_count_change,
    data_changes,
    rebuild_from_pools,
    redistribute_data,
    validate_blocks,
)
from .render import render_blocks
from .report import build_stats
from .segmenter import backfill_headers, segment
from .variants import CPU_VARIANT, MEMORY_VARIANT, VariantDescriptor, get_variant

logger = logging.getLogger(__name__)


def correct_text(raw_text: str, variant: str | VariantDescriptor) -> CorrectionResult:
    """Correct ``raw_text`` for the given variant. Never raises for malformed content."""
    v = get_variant(variant)
    lines = classify_lines(raw_text, v)
    blocks = segment(lines, v)

    if v.backfill_headers:
        backfill_headers(blocks)

    changes: list[ChangeRecord] = []
    if v.validate_structure:
        changes.extend(validate_blocks(blocks, v))

    if v.rebuild_from_pools:
        corrected = rebuild_from_pools(blocks, v)
    else:
        corrected = redistribute_data(blocks, v)
    changes.extend(data_changes(blocks, corrected))
    changes.extend(block_count_change(blocks, corrected))

    out_lines = render_blocks(corrected, v)
    stats = build_stats(
        total_lines=len(lines),
        corrected_lines=len(out_lines),
        original_blocks=blocks,
        corrected_blocks=corrected,
        changes=changes,
    )
    logger.debug(
        "Corrected %s log: %d blocks -> %d, %d change(s)",
        v.name,
        stats.total_blocks,
        stats.final_blocks,
        len(changes),
    )
    return CorrectionResult(
        variant=v.name,
        corrected_text="\n".join(out_lines),
        changes=changes,
        stats=stats,
    )


def correct_cpu_variant(raw_text: str) -> CorrectionResult:
    return correct_text(raw_text, CPU_VARIANT)


def correct_memory_variant(raw_text: str) -> CorrectionResult:
    return correct_text(raw_text, MEMORY_VARIANT)
