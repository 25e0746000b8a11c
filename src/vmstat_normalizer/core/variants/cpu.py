"""CPU (``vmstat``) snapshot variant."""

from __future__ import annotations

import re

from .base import VariantDescriptor, is_date

# Substring match, not exact: column alignment varies between hosts.
_HEADER_TOKENS = ("procs", "memory", "swap", "cpu", "r  b")
_DATA_RE = re.compile(r"^\d+(\s+\d+)*$", re.ASCII)


def is_cpu_header(line: str) -> bool:
    trimmed = line.strip()
    return any(tok in trimmed for tok in _HEADER_TOKENS)


def is_cpu_data(line: str) -> bool:
    """A row of unsigned integers that is not also a date or header."""
    trimmed = line.strip()
    return (
        _DATA_RE.match(trimmed) is not None
        and not is_cpu_header(trimmed)
        and not is_date(trimmed)
    )


CPU_VARIANT = VariantDescriptor(
    name="cpu",
    date_target=2,
    header_target=2,
    data_target=3,
    is_header=is_cpu_header,
    is_data=is_cpu_data,
    header_lookahead=True,
    dedupe_headers_on_segment=True,
    backfill_headers=True,
    dedupe_headers_on_render=True,
)
