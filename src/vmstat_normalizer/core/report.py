"""Summary statistics and human-readable change descriptions."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Block, ChangeKind, ChangeRecord, CorrectionStats


def build_stats(
    *,
    total_lines: int,
    corrected_lines: int,
    original_blocks: Sequence[Block],
    corrected_blocks: Sequence[Block],
    changes: Sequence[ChangeRecord],
) -> CorrectionStats:
    """Derive statistics from the block lists and change records only."""
    # Validation and redistribution records share one numbering; count the union.
    fixed = {c.block_number for c in changes if c.block_number is not None}
    moved = sum(
        abs((c.original_count or 0) - (c.final_count or 0))
        for c in changes
        if c.kind == ChangeKind.DATA_REDISTRIBUTION
    )
    return CorrectionStats(
        total_lines=total_lines,
        corrected_lines=corrected_lines,
        total_blocks=len(original_blocks),
        final_blocks=len(corrected_blocks),
        fixed_blocks=len(fixed),
        data_lines_redistributed=moved,
    )


def format_change(change: ChangeRecord) -> str:
    """One-line description of a change record."""
    where = f"Block {change.block_number}"
    if change.start_line is not None:
        where += f" (line {change.start_line})"

    if change.kind == ChangeKind.DATA_REDISTRIBUTION:
        return (
            f"{where}: data redistributed "
            f"({change.original_count} -> {change.final_count} lines)"
        )
    if change.kind == ChangeKind.INVALID_STRUCTURE:
        return (
            f"{where}: invalid structure "
            f"({change.original_count} lines, expected {change.final_count})"
        )
    if change.kind == ChangeKind.MISSING_DATES:
        return f"{where}: missing date lines"
    if change.kind == ChangeKind.MISSING_HEADER:
        return f"{where}: missing header"
    if change.kind == ChangeKind.INVALID_DATA_COUNT:
        return (
            f"{where}: invalid data count "
            f"({change.original_count} lines, expected {change.final_count})"
        )
    if change.kind == ChangeKind.BLOCKS_REDISTRIBUTED:
        return f"Blocks redistributed: {change.original_count} -> {change.final_count}"
    return f"{where}: {change.kind.value}"
