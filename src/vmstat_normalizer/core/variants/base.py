"""Variant descriptor and predicates shared by every snapshot format."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

# ASCII-only: \d and \s must not match other scripts' digits or separators.
_DATE_A_RE = re.compile(r"^\d{2}/\d{2}/\d{4}_\d{2}:\d{2}:\d{2}$", re.ASCII)
_DATE_B_RE = re.compile(
    r"^(Mon|Tue|Wed|Thu|Fri|Sat|Sun)\s+\w+\s+\d+\s+\d{2}:\d{2}:\d{2}\s+-\d{2}\s+\d{4}$",
    re.ASCII,
)


def is_date_a(line: str) -> bool:
    """Slash date + underscore + time, e.g. ``12/05/2024_14:30:00``."""
    return _DATE_A_RE.match(line.strip()) is not None


def is_date_b(line: str) -> bool:
    """``date(1)`` style, e.g. ``Mon Dec 5 14:30:00 -05 2024``."""
    return _DATE_B_RE.match(line.strip()) is not None


def is_date(line: str) -> bool:
    return is_date_a(line) or is_date_b(line)


@dataclass(frozen=True, slots=True)
class VariantDescriptor:
    """Everything the correction engine needs to know about one record shape."""

    name: str
    date_target: int
    header_target: int
    data_target: int
    is_header: Callable[[str], bool]
    is_data: Callable[[str], bool]

    # Segmentation
    header_lookahead: bool = False  # pull a second distinct header into the block
    dedupe_headers_on_segment: bool = False

    # Correction
    backfill_headers: bool = False  # copy headers from the preceding block
    validate_structure: bool = False  # emit per-block diagnostics before fixing
    rebuild_from_pools: bool = False  # recompute block count from pooled content

    # Rendering
    sort_dates: bool = False  # Date-A before Date-B
    dedupe_headers_on_render: bool = False

    @property
    def block_size(self) -> int:
        return self.date_target + self.header_target + self.data_target
