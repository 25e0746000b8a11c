"""Serialize corrected blocks back to text lines."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Block, LineKind
from .variants import VariantDescriptor, get_variant


def render_block(block: Block, variant: str | VariantDescriptor) -> list[str]:
    """Dates, then headers, then data."""
    v = get_variant(variant)
    dates = block.dates
    if v.sort_dates:
        # sorted() is stable; Date-A first.
        dates = sorted(dates, key=lambda d: d.kind != LineKind.DATE_A)

    out = [d.text for d in dates]

    if v.dedupe_headers_on_render:
        seen: set[str] = set()
        for h in block.headers:
            if h.text in seen:
                continue
            seen.add(h.text)
            out.append(h.text)
    else:
        out.extend(h.text for h in block.headers)

    out.extend(d.text for d in block.data)
    return out


def render_blocks(blocks: Sequence[Block], variant: str | VariantDescriptor) -> list[str]:
    v = get_variant(variant)
    return [text for b in blocks for text in render_block(b, v)]
