"""Supported snapshot record shapes.

Each variant is a plain ``VariantDescriptor`` value consumed by the single
correction engine.
"""

from __future__ import annotations

from .base import VariantDescriptor, is_date, is_date_a, is_date_b
from .cpu import CPU_VARIANT, is_cpu_data, is_cpu_header
from .memory import MEMORY_VARIANT, is_memory_data, is_memory_header

VARIANTS: dict[str, VariantDescriptor] = {
    CPU_VARIANT.name: CPU_VARIANT,
    MEMORY_VARIANT.name: MEMORY_VARIANT,
}


def get_variant(variant: str | VariantDescriptor) -> VariantDescriptor:
    """Resolve a variant name (case-insensitive) or pass a descriptor through."""
    if isinstance(variant, VariantDescriptor):
        return variant
    name = (variant or "").strip().lower()
    try:
        return VARIANTS[name]
    except KeyError as e:
        valid = ", ".join(sorted(VARIANTS))
        raise ValueError(f"Unknown variant '{variant}'. Valid values: {valid}.") from e


__all__ = [
    "CPU_VARIANT",
    "MEMORY_VARIANT",
    "VARIANTS",
    "VariantDescriptor",
    "get_variant",
    "is_cpu_data",
    "is_cpu_header",
    "is_date",
    "is_date_a",
    "is_date_b",
    "is_memory_data",
    "is_memory_header",
]
