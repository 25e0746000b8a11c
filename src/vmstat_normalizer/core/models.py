"""Core data models for snapshot log correction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class LineKind(str, Enum):
    """Classification tag assigned to each non-blank input line."""

    DATE_A = "date_a"  # 12/05/2024_14:30:00
    DATE_B = "date_b"  # Mon Dec 5 14:30:00 -05 2024
    HEADER = "header"
    DATA = "data"
    UNKNOWN = "unknown"


class ChangeKind(str, Enum):
    """Kinds of deviation reported by the correction pipeline."""

    DATA_REDISTRIBUTION = "data_redistribution"
    INVALID_STRUCTURE = "invalid_structure"
    MISSING_DATES = "missing_dates"
    MISSING_HEADER = "missing_header"
    INVALID_DATA_COUNT = "invalid_data_count"
    BLOCKS_REDISTRIBUTED = "blocks_redistributed"


@dataclass(frozen=True, slots=True)
class Line:
    """One classified input line (raw text + 1-based position in the raw input)."""

    text: str
    line_no: int
    kind: LineKind


@dataclass(slots=True)
class Block:
    """A provisional or corrected snapshot block."""

    number: int
    start_line: int
    dates: list[Line] = field(default_factory=list)
    headers: list[Line] = field(default_factory=list)
    data: list[Line] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.dates) + len(self.headers) + len(self.data)

    def header_texts(self) -> list[str]:
        return [h.text for h in self.headers]


class MovedLine(BaseModel):
    line: str = Field(description="Raw text of the data line.")
    line_no: int = Field(description="1-based line number in the original input.")


class MovedLines(BaseModel):
    added: list[MovedLine] = Field(default_factory=list)
    removed: list[MovedLine] = Field(default_factory=list)


class ChangeRecord(BaseModel):
    """One correction applied or anomaly detected."""

    kind: ChangeKind
    block_number: int | None = Field(
        default=None, description="Affected block (None for file-level records)."
    )
    start_line: int | None = Field(default=None, description="First input line of the block.")
    original_count: int | None = Field(default=None, description="Count before correction.")
    final_count: int | None = Field(default=None, description="Count after correction / expected.")
    moved_lines: MovedLines | None = None


class CorrectionStats(BaseModel):
    total_lines: int = Field(description="Non-blank lines in the input.")
    corrected_lines: int = Field(description="Lines in the corrected output.")
    total_blocks: int = Field(description="Provisional blocks found in the input.")
    final_blocks: int = Field(description="Blocks in the corrected output.")
    fixed_blocks: int = Field(
        description=(
            "Distinct block numbers with at least one change record. Validation records "
            "number the provisional (input) blocks and redistribution records number the "
            "corrected blocks; both share one 1-based sequence and the count is over their union."
        )
    )
    data_lines_redistributed: int = Field(
        description="Sum of |original - final| data counts over redistribution records."
    )


class CorrectionResult(BaseModel):
    variant: str
    corrected_text: str
    changes: list[ChangeRecord] = Field(default_factory=list)
    stats: CorrectionStats
