"""Group classified lines into provisional blocks."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .models import Block, Line, LineKind
from .variants import VariantDescriptor, get_variant

logger = logging.getLogger(__name__)


def _open_block(blocks: list[Block], first: Line) -> Block:
    return Block(number=len(blocks) + 1, start_line=first.line_no)


def _take_lookahead_header(
    block: Block, lines: Sequence[Line], i: int, v: VariantDescriptor
) -> bool:
    """Consume lines[i + 1] into block when it is a second, distinct header.

    Only fires while the block holds exactly one header.
    """
    if not v.header_lookahead or len(block.headers) != 1 or i + 1 >= len(lines):
        return False
    nxt = lines[i + 1]
    if nxt.kind != LineKind.HEADER or nxt.text in block.header_texts():
        return False
    block.headers.append(nxt)
    return True


def segment(lines: Sequence[Line], variant: str | VariantDescriptor) -> list[Block]:
    """Build provisional blocks from classified lines in input order."""
    v = get_variant(variant)
    blocks: list[Block] = []
    current: Block | None = None

    i = 0
    while i < len(lines):
        line = lines[i]

        if line.kind == LineKind.DATE_A:
            if current is not None:
                blocks.append(current)
            current = _open_block(blocks, line)
            current.dates.append(line)

        elif line.kind == LineKind.DATE_B:
            if current is None:
                current = _open_block(blocks, line)
            current.dates.append(line)

        elif line.kind == LineKind.HEADER:
            if current is None:
                current = _open_block(blocks, line)
            if v.dedupe_headers_on_segment and line.text in current.header_texts():
                i += 1
                continue
            current.headers.append(line)
            if _take_lookahead_header(current, lines, i, v):
                i += 1

        elif line.kind == LineKind.DATA:
            if current is None:
                current = _open_block(blocks, line)
            current.data.append(line)

        i += 1

    if current is not None:
        blocks.append(current)

    logger.debug("Segmented %d lines into %d %s blocks", len(lines), len(blocks), v.name)
    return blocks


def backfill_headers(blocks: list[Block]) -> list[Block]:
    """Give header-less blocks a copy of the preceding block's headers (in place)."""
    for prev, block in zip(blocks, blocks[1:]):
        if not block.headers and prev.headers:
            block.headers = list(prev.headers)
    return blocks
