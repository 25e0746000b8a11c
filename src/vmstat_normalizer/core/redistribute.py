"""Structural validation and global data redistribution.

Redistribution is global: every data line is flattened into one
pool in input order and handed back out in fixed-size chunks, so a block with
a surplus feeds whichever blocks come after it.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence

from .models import Block, ChangeKind, ChangeRecord, Line, LineKind, MovedLine, MovedLines
from .variants import VariantDescriptor, get_variant

logger = logging.getLogger(__name__)


def validate_blocks(
    blocks: Sequence[Block], variant: str | VariantDescriptor
) -> list[ChangeRecord]:
    """Report shape violations of provisional blocks. Does not modify them."""
    v = get_variant(variant)
    changes: list[ChangeRecord] = []

    for b in blocks:
        if b.line_count != v.block_size:
            changes.append(
                ChangeRecord(
                    kind=ChangeKind.INVALID_STRUCTURE,
                    block_number=b.number,
                    start_line=b.start_line,
                    original_count=b.line_count,
                    final_count=v.block_size,
                )
            )
        if not b.dates:
            changes.append(
                ChangeRecord(
                    kind=ChangeKind.MISSING_DATES,
                    block_number=b.number,
                    start_line=b.start_line,
                    original_count=0,
                    final_count=v.date_target,
                )
            )
        if not b.headers:
            changes.append(
                ChangeRecord(
                    kind=ChangeKind.MISSING_HEADER,
                    block_number=b.number,
                    start_line=b.start_line,
                    original_count=0,
                    final_count=v.header_target,
                )
            )
        if len(b.data) != v.data_target:
            changes.append(
                ChangeRecord(
                    kind=ChangeKind.INVALID_DATA_COUNT,
                    block_number=b.number,
                    start_line=b.start_line,
                    original_count=len(b.data),
                    final_count=v.data_target,
                )
            )

    return changes


def _flatten_data(blocks: Sequence[Block]) -> list[Line]:
    return [line for b in blocks for line in b.data]


def redistribute_data(
    blocks: Sequence[Block], variant: str | VariantDescriptor
) -> list[Block]:
    """Hand out exactly ``data_target`` data lines per block, in block order.

    Dates and headers are kept. Blocks past the end of the pool get fewer lines.
    """
    v = get_variant(variant)
    pool = _flatten_data(blocks)
    corrected: list[Block] = []
    idx = 0

    for b in blocks:
        assigned = pool[idx : idx + v.data_target]
        idx += len(assigned)
        corrected.append(
            Block(
                number=b.number,
                start_line=b.start_line,
                dates=list(b.dates),
                headers=list(b.headers),
                data=assigned,
            )
        )

    logger.debug("Redistributed %d data lines across %d blocks", len(pool), len(corrected))
    return corrected


def _pull(pool: deque[Line], n: int) -> list[Line]:
    out: list[Line] = []
    while pool and len(out) < n:
        out.append(pool.popleft())
    return out


def rebuild_from_pools(
    blocks: Sequence[Block], variant: str | VariantDescriptor
) -> list[Block]:
    """Rebuild blocks from per-kind pools; the block count follows the content.

    Each new block pulls up to one Date-A, one Date-B, ``header_target`` headers
    and ``data_target`` data lines until all pools are empty.
    """
    v = get_variant(variant)
    dates_a: deque[Line] = deque()
    dates_b: deque[Line] = deque()
    headers: deque[Line] = deque()
    for b in blocks:
        for d in b.dates:
            (dates_a if d.kind == LineKind.DATE_A else dates_b).append(d)
        headers.extend(b.headers)
    data = deque(_flatten_data(blocks))

    rebuilt: list[Block] = []
    while dates_a or dates_b or headers or data:
        dates = _pull(dates_a, 1) + _pull(dates_b, 1)
        hdrs = _pull(headers, v.header_target)
        rows = _pull(data, v.data_target)
        first = min(line.line_no for line in dates + hdrs + rows)
        rebuilt.append(
            Block(
                number=len(rebuilt) + 1,
                start_line=first,
                dates=dates,
                headers=hdrs,
                data=rows,
            )
        )

    logger.debug("Rebuilt %d blocks into %d", len(blocks), len(rebuilt))
    return rebuilt


def block_count_change(original: Sequence[Block], corrected: Sequence[Block]) -> list[ChangeRecord]:
    if len(original) == len(corrected):
        return []
    return [
        ChangeRecord(
            kind=ChangeKind.BLOCKS_REDISTRIBUTED,
            original_count=len(original),
            final_count=len(corrected),
        )
    ]


def _data_moved(before: Sequence[Line], after: Sequence[Line]) -> bool:
    return [line.line_no for line in before] != [line.line_no for line in after]


def _moved_lines(before: Sequence[Line], after: Sequence[Line]) -> MovedLines:
    before_nos = {line.line_no for line in before}
    after_nos = {line.line_no for line in after}
    return MovedLines(
        added=[MovedLine(line=x.text, line_no=x.line_no) for x in after if x.line_no not in before_nos],
        removed=[MovedLine(line=x.text, line_no=x.line_no) for x in before if x.line_no not in after_nos],
    )


def data_changes(original: Sequence[Block], corrected: Sequence[Block]) -> list[ChangeRecord]:
    """One record per corrected block whose data differs from the same-numbered original."""
    changes: list[ChangeRecord] = []
    for i, b in enumerate(corrected):
        orig = original[i] if i < len(original) else None
        before = orig.data if orig is not None else []
        if not _data_moved(before, b.data):
            continue
        changes.append(
            ChangeRecord(
                kind=ChangeKind.DATA_REDISTRIBUTION,
                block_number=b.number,
                start_line=orig.start_line if orig is not None else b.start_line,
                original_count=len(before),
                final_count=len(b.data),
                moved_lines=_moved_lines(before, b.data),
            )
        )
    return changes
