from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path

import pytest
from sample_logs import cpu_block, cpu_row

from vmstat_normalizer.core.batch import (
    correct_file,
    correct_path,
    format_batch_report,
    iter_candidates,
    process_batch,
    scan_folder,
)
from vmstat_normalizer.core.config import BatchConfig

GOOD = cpu_block(0, [cpu_row(1), cpu_row(2), cpu_row(3)])
BAD = cpu_block(0, [cpu_row(1), cpu_row(2)]) + cpu_block(5, [cpu_row(3), cpu_row(4), cpu_row(5)])


@pytest.fixture
def log_folder(tmp_path: Path, write_log, write_bytes) -> Path:
    write_log(tmp_path / "good.txt", GOOD)
    write_log(tmp_path / "bad.log", BAD)
    write_bytes(tmp_path / "broken.txt", b"\xff\xfe\xfa not utf-8 \x80\n")
    write_log(tmp_path / "notes.md", BAD)
    write_log(tmp_path / "bad_corrected.log", GOOD)
    return tmp_path


def test_iter_candidates_filters_suffixes_and_outputs(log_folder: Path) -> None:
    names = [p.name for p in iter_candidates(log_folder)]
    assert names == ["bad.log", "broken.txt", "good.txt"]


def test_iter_candidates_missing_folder(tmp_path: Path) -> None:
    with pytest.raises(NotADirectoryError):
        iter_candidates(tmp_path / "nope")


@pytest.mark.asyncio
async def test_scan_folder_buckets_files(log_folder: Path) -> None:
    report = await scan_folder(log_folder, "cpu")

    assert [f.name for f in report.needs_correction] == ["bad.log"]
    assert [f.name for f in report.already_correct] == ["good.txt"]
    assert [f.name for f in report.has_errors] == ["broken.txt"]
    assert report.total == 3

    bad = report.needs_correction[0]
    assert bad.issues == 2
    assert bad.total_blocks == 2
    assert bad.size > 0
    assert report.has_errors[0].error


@pytest.mark.asyncio
async def test_correct_file_writes_sibling_output(log_folder: Path) -> None:
    outcome = await correct_file(log_folder / "bad.log", "cpu")

    assert outcome.success
    assert outcome.corrected_file == "bad_corrected.log"
    assert len(outcome.changes) == 2
    written = (log_folder / "bad_corrected.log").read_text(encoding="utf-8")
    assert written.split("\n")[4:7] == [cpu_row(1), cpu_row(2), cpu_row(3)]
    # Original untouched.
    assert (log_folder / "bad.log").read_text(encoding="utf-8") == "\n".join(BAD) + "\n"


@pytest.mark.asyncio
async def test_correct_file_replace_original(log_folder: Path) -> None:
    outcome = await correct_file(log_folder / "bad.log", "cpu", replace_original=True)
    assert outcome.corrected_file == "bad.log"
    assert (log_folder / "bad.log").read_text(encoding="utf-8").count(cpu_row(3)) == 1


@pytest.mark.asyncio
async def test_correct_file_dry_run_writes_nothing(tmp_path: Path, write_log) -> None:
    write_log(tmp_path / "bad.log", BAD)
    outcome = await correct_file(tmp_path / "bad.log", "cpu", write=False)
    assert outcome.success
    assert outcome.corrected_file is None
    assert not (tmp_path / "bad_corrected.log").exists()


@pytest.mark.asyncio
async def test_correct_file_reports_read_failures(tmp_path: Path) -> None:
    outcome = await correct_file(tmp_path / "missing.log", "cpu")
    assert not outcome.success
    assert outcome.original_file == "missing.log"
    assert outcome.error


@pytest.mark.asyncio
async def test_correct_path_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await correct_path(tmp_path / "missing.log", "cpu")


@pytest.mark.asyncio
async def test_process_batch_progress_and_errors(log_folder: Path) -> None:
    calls: list[tuple[int, int, str]] = []
    paths = [log_folder / "bad.log", log_folder / "broken.txt", log_folder / "good.txt"]

    report = await process_batch(
        paths,
        "cpu",
        progress=lambda cur, total, name: calls.append((cur, total, name)),
    )

    assert calls == [(1, 3, "bad.log"), (2, 3, "broken.txt"), (3, 3, "good.txt")]
    assert report.success_count == 2
    assert report.error_count == 1
    assert report.errors[0].original_file == "broken.txt"
    assert (log_folder / "good_corrected.txt").exists()


@pytest.mark.asyncio
async def test_process_batch_stops_when_cancelled(log_folder: Path) -> None:
    cancel = threading.Event()
    paths = [log_folder / "bad.log", log_folder / "good.txt"]

    report = await process_batch(
        paths,
        "cpu",
        progress=lambda *_: cancel.set(),
        cancel=cancel,
    )

    assert [o.original_file for o in report.processed] == ["bad.log"]
    assert report.skipped == [str(log_folder / "good.txt")]
    assert not (log_folder / "good_corrected.txt").exists()


@pytest.mark.asyncio
async def test_custom_suffix(tmp_path: Path, write_log) -> None:
    write_log(tmp_path / "bad.txt", BAD)
    cfg = BatchConfig(output_suffix=".fixed")
    outcome = await correct_file(tmp_path / "bad.txt", "cpu", cfg)
    assert outcome.corrected_file == "bad.fixed.txt"


@pytest.mark.asyncio
async def test_format_batch_report(log_folder: Path) -> None:
    report = await process_batch([log_folder / "bad.log", log_folder / "broken.txt"], "cpu")
    text = format_batch_report(report, folder=log_folder, now=datetime(2024, 1, 1, 12, 0, 0))

    assert text.startswith("SNAPSHOT LOG CORRECTION REPORT - CPU")
    assert "Generated: 2024-01-01T12:00:00" in text
    assert "- Total files: 2" in text
    assert "- Success rate: 50.0%" in text
    assert "* bad.log -> bad_corrected.log" in text
    assert "Block 1 (line 1): data redistributed (2 -> 3 lines)" in text
    assert "* broken.txt:" in text
