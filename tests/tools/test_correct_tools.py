from __future__ import annotations

from pathlib import Path

import pytest
from sample_logs import cpu_block, cpu_row

from vmstat_normalizer.core.config import BASE_DIR_ENV
from vmstat_normalizer.tools.correct import (
    correct_log_file_impl,
    correct_text_impl,
    process_log_folder_impl,
    scan_log_folder_impl,
)

GOOD = cpu_block(0, [cpu_row(1), cpu_row(2), cpu_row(3)])
BAD = cpu_block(0, [cpu_row(1), cpu_row(2)]) + cpu_block(5, [cpu_row(3), cpu_row(4), cpu_row(5)])


@pytest.fixture
def base(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, write_log) -> Path:
    monkeypatch.setenv(BASE_DIR_ENV, str(tmp_path))
    write_log(tmp_path / "good.txt", GOOD)
    write_log(tmp_path / "bad.txt", BAD)
    return tmp_path


def test_correct_text_impl_returns_plain_dict() -> None:
    out = correct_text_impl(text="\n".join(BAD), variant="CPU")
    assert out["variant"] == "cpu"
    assert out["stats"]["total_blocks"] == 2
    assert [c["kind"] for c in out["changes"]] == ["data_redistribution"] * 2
    assert out["changes"][0]["moved_lines"]["added"][0]["line"] == cpu_row(3)


def test_correct_text_impl_rejects_unknown_variant() -> None:
    with pytest.raises(ValueError, match="Unknown variant"):
        correct_text_impl(text="", variant="disk")


@pytest.mark.asyncio
async def test_correct_log_file_impl_dry_run(base: Path) -> None:
    out = await correct_log_file_impl(log_path="bad.txt")
    assert out["success"] is True
    assert out["corrected_file"] is None
    assert len(out["changes"]) == 2
    assert not (base / "bad_corrected.txt").exists()


@pytest.mark.asyncio
async def test_correct_log_file_impl_write(base: Path) -> None:
    out = await correct_log_file_impl(log_path=str(base / "bad.txt"), write=True)
    assert out["corrected_file"] == "bad_corrected.txt"
    assert (base / "bad_corrected.txt").is_file()


@pytest.mark.asyncio
async def test_correct_log_file_impl_validates_inputs(base: Path) -> None:
    with pytest.raises(ValueError, match="escapes"):
        await correct_log_file_impl(log_path="../elsewhere.txt")
    with pytest.raises(FileNotFoundError):
        await correct_log_file_impl(log_path="missing.txt")
    with pytest.raises(ValueError, match="write=True"):
        await correct_log_file_impl(log_path="bad.txt", replace_original=True)


@pytest.mark.asyncio
async def test_scan_log_folder_impl(base: Path) -> None:
    out = await scan_log_folder_impl(folder=".")
    assert out["total"] == 2
    assert [f["name"] for f in out["needs_correction"]] == ["bad.txt"]
    assert [f["name"] for f in out["already_correct"]] == ["good.txt"]


@pytest.mark.asyncio
async def test_process_log_folder_impl_only_needed(base: Path) -> None:
    out = await process_log_folder_impl(folder=str(base))
    assert out["success_count"] == 1
    assert out["error_count"] == 0
    assert [o["original_file"] for o in out["processed"]] == ["bad.txt"]
    assert not (base / "good_corrected.txt").exists()


@pytest.mark.asyncio
async def test_process_log_folder_impl_all_files(base: Path) -> None:
    out = await process_log_folder_impl(folder=str(base), only_needed=False)
    assert out["total_files"] == 2
    assert (base / "good_corrected.txt").exists()
    assert (base / "bad_corrected.txt").exists()
