"""File and folder driver around the pure correction engine.

Reads with ``aiofiles``, calls the engine, writes corrected text back. Any
I/O or decode failure is captured per file as an unsuccessful outcome so a
batch never stops on one bad file.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

import aiofiles
from pydantic import BaseModel, Field

from .config import BatchConfig, resolve_batch_config
from .engine import correct_text
from .models import ChangeRecord, CorrectionResult, CorrectionStats
from .report import format_change
from .variants import VariantDescriptor, get_variant

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class ScannedFile(BaseModel):
    name: str
    path: str
    size: int = 0
    total_blocks: int = 0
    issues: int = 0
    error: str | None = None


class ScanReport(BaseModel):
    folder: str
    variant: str
    needs_correction: list[ScannedFile] = Field(default_factory=list)
    already_correct: list[ScannedFile] = Field(default_factory=list)
    has_errors: list[ScannedFile] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.needs_correction) + len(self.already_correct) + len(self.has_errors)


class FileOutcome(BaseModel):
    success: bool
    original_file: str
    corrected_file: str | None = None
    changes: list[ChangeRecord] = Field(default_factory=list)
    stats: CorrectionStats | None = None
    error: str | None = None


class BatchReport(BaseModel):
    variant: str
    processed: list[FileOutcome] = Field(default_factory=list)
    errors: list[FileOutcome] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)  # not reached before cancellation

    @property
    def success_count(self) -> int:
        return len(self.processed)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def total_files(self) -> int:
        return self.success_count + self.error_count


async def read_text(path: Path, cfg: BatchConfig) -> str:
    async with aiofiles.open(path, encoding=cfg.encoding, errors=cfg.decode_errors) as f:
        return await f.read()


async def write_text(path: Path, content: str, cfg: BatchConfig) -> None:
    async with aiofiles.open(path, mode="w", encoding=cfg.encoding) as f:
        await f.write(content)


def iter_candidates(folder: str | Path, cfg: BatchConfig | None = None) -> list[Path]:
    """Input logs in ``folder`` sorted by name."""
    cfg = resolve_batch_config(cfg)
    root = Path(folder)
    if not root.is_dir():
        raise NotADirectoryError(f"Folder not found: {root}")
    entries: Iterable[Path] = root.rglob("*") if cfg.recursive else root.iterdir()
    return sorted(p for p in entries if cfg.is_candidate(p))


async def correct_path(
    path: str | Path,
    variant: str | VariantDescriptor,
    cfg: BatchConfig | None = None,
) -> CorrectionResult:
    """Read ``path`` and correct it without writing anything."""
    cfg = resolve_batch_config(cfg)
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Log file not found: {p}")
    return correct_text(await read_text(p, cfg), variant)


async def scan_folder(
    folder: str | Path,
    variant: str | VariantDescriptor,
    cfg: BatchConfig | None = None,
) -> ScanReport:
    """Dry-run every candidate file and bucket it by whether it needs fixing."""
    cfg = resolve_batch_config(cfg)
    v = get_variant(variant)
    report = ScanReport(folder=str(folder), variant=v.name)

    for path in iter_candidates(folder, cfg):
        item = ScannedFile(name=path.name, path=str(path))
        try:
            item.size = path.stat().st_size
            result = correct_text(await read_text(path, cfg), v)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            item.error = str(exc)
            report.has_errors.append(item)
            continue

        item.total_blocks = result.stats.total_blocks
        item.issues = len(result.changes)
        if result.changes:
            report.needs_correction.append(item)
        else:
            report.already_correct.append(item)

    logger.info(
        "Scanned %s: %d need correction, %d correct, %d unreadable",
        folder,
        len(report.needs_correction),
        len(report.already_correct),
        len(report.has_errors),
    )
    return report


async def correct_file(
    path: str | Path,
    variant: str | VariantDescriptor,
    cfg: BatchConfig | None = None,
    *,
    replace_original: bool = False,
    write: bool = True,
) -> FileOutcome:
    """Correct one file and write the result next to it (or over it)."""
    cfg = resolve_batch_config(cfg)
    p = Path(path)
    target = p if replace_original else cfg.output_path(p)

    try:
        result = correct_text(await read_text(p, cfg), variant)
        if write:
            await write_text(target, result.corrected_text, cfg)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to correct %s: %s", p, exc)
        return FileOutcome(success=False, original_file=p.name, error=str(exc))

    logger.info("Corrected %s -> %s (%d change(s))", p.name, target.name, len(result.changes))
    return FileOutcome(
        success=True,
        original_file=p.name,
        corrected_file=target.name if write else None,
        changes=result.changes,
        stats=result.stats,
    )


async def process_batch(
    paths: Iterable[str | Path],
    variant: str | VariantDescriptor,
    cfg: BatchConfig | None = None,
    *,
    replace_original: bool = False,
    progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> BatchReport:
    """Correct files one after another.

    ``progress(current, total, file_name)`` is called before each file. Once
    ``cancel`` is set the remaining files are listed in ``skipped``.
    """
    cfg = resolve_batch_config(cfg)
    v = get_variant(variant)
    todo = [Path(p) for p in paths]
    report = BatchReport(variant=v.name)

    for i, path in enumerate(todo, start=1):
        if cancel is not None and cancel.is_set():
            report.skipped.extend(str(p) for p in todo[i - 1 :])
            logger.info("Batch cancelled, %d file(s) skipped", len(report.skipped))
            break
        if progress is not None:
            progress(i, len(todo), path.name)

        outcome = await correct_file(path, v, cfg, replace_original=replace_original)
        if outcome.success:
            report.processed.append(outcome)
        else:
            report.errors.append(outcome)

    return report


def format_batch_report(
    report: BatchReport,
    *,
    folder: str | Path | None = None,
    now: datetime | None = None,
) -> str:
    """Plain-text summary of a batch run."""
    now = now or datetime.now()
    rule = "=" * 60
    lines = [
        f"SNAPSHOT LOG CORRECTION REPORT - {report.variant.upper()}",
        f"Generated: {now.isoformat(timespec='seconds')}",
    ]
    if folder is not None:
        lines.append(f"Folder: {folder}")
    lines += [rule, "", "SUMMARY:"]

    total = report.total_files
    rate = (report.success_count / total * 100) if total else 0.0
    lines += [
        f"- Total files: {total}",
        f"- Corrected: {report.success_count}",
        f"- Errors: {report.error_count}",
        f"- Success rate: {rate:.1f}%",
    ]
    if report.skipped:
        lines.append(f"- Skipped (cancelled): {len(report.skipped)}")
    lines.append("")

    if report.processed:
        lines += ["CORRECTED FILES:", "-" * 40]
        for o in report.processed:
            blocks = o.stats.total_blocks if o.stats else 0
            lines.append(f"* {o.original_file} -> {o.corrected_file}")
            lines.append(f"  Blocks: {blocks}, changes: {len(o.changes)}")
            lines.extend(f"    - {format_change(c)}" for c in o.changes)
            lines.append("")

    if report.errors:
        lines += ["FILES WITH ERRORS:", "-" * 20]
        lines.extend(f"* {o.original_file}: {o.error}" for o in report.errors)
        lines.append("")

    return "\n".join(lines)
