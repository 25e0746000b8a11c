"""Memory (``free``) snapshot variant."""

from __future__ import annotations

from .base import VariantDescriptor, is_date

_HEADER_COLUMNS = ("total", "used", "free", "available")
_DATA_PREFIXES = ("Mem:", "Swap:")


def is_memory_header(line: str) -> bool:
    trimmed = line.strip()
    if trimmed.startswith(_DATA_PREFIXES):
        return False
    return all(col in trimmed for col in _HEADER_COLUMNS)


def is_memory_data(line: str) -> bool:
    trimmed = line.strip()
    return trimmed.startswith(_DATA_PREFIXES) and not is_date(trimmed)


MEMORY_VARIANT = VariantDescriptor(
    name="memory",
    date_target=2,
    header_target=1,
    data_target=2,
    is_header=is_memory_header,
    is_data=is_memory_data,
    validate_structure=True,
    rebuild_from_pools=True,
    sort_dates=True,
)
