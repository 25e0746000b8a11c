"""Line classification."""

from __future__ import annotations

from .models import Line, LineKind
from .variants import VariantDescriptor, get_variant, is_date_a, is_date_b


def classify(line: str, variant: str | VariantDescriptor) -> LineKind:
    """Tag a single line. Pure and total: anything unrecognized is UNKNOWN."""
    v = get_variant(variant)
    if is_date_a(line):
        return LineKind.DATE_A
    if is_date_b(line):
        return LineKind.DATE_B
    if v.is_header(line):
        return LineKind.HEADER
    if v.is_data(line):
        return LineKind.DATA
    return LineKind.UNKNOWN


def classify_lines(raw_text: str, variant: str | VariantDescriptor) -> list[Line]:
    """Drop blank lines and classify the rest, keeping raw 1-based line numbers.

    Only ``\\n`` ends a line (a trailing ``\\r`` is stripped); form feeds and other
    Unicode line separators stay inside the line they appear on.
    """
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text must be str, not {type(raw_text).__name__}")
    v = get_variant(variant)
    return [
        Line(text=text, line_no=line_no, kind=classify(text, v))
        for line_no, text in enumerate(_physical_lines(raw_text), start=1)
        if text.strip()
    ]


def _physical_lines(raw_text: str) -> list[str]:
    return [text.removesuffix("\r") for text in raw_text.split("\n")]
