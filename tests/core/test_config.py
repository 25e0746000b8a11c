from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from vmstat_normalizer.core.config import (
    BASE_DIR_ENV,
    ENCODING_ENV,
    LOG_LEVEL_ENV,
    SUFFIX_ENV,
    BatchConfig,
    configure_logging,
    resolve_batch_config,
    safe_resolve,
)


def test_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SUFFIX_ENV, raising=False)
    monkeypatch.delenv(ENCODING_ENV, raising=False)
    assert resolve_batch_config() == BatchConfig()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(SUFFIX_ENV, "_fixed")
    monkeypatch.setenv(ENCODING_ENV, "latin-1")
    cfg = resolve_batch_config(BatchConfig(recursive=True))
    assert cfg.output_suffix == "_fixed"
    assert cfg.encoding == "latin-1"
    assert cfg.recursive


def test_invalid_env_values_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENCODING_ENV, "no-such-codec")
    with pytest.raises(ValueError, match=ENCODING_ENV):
        resolve_batch_config()

    monkeypatch.delenv(ENCODING_ENV)
    monkeypatch.setenv(SUFFIX_ENV, "a/b")
    with pytest.raises(ValueError, match=SUFFIX_ENV):
        resolve_batch_config()


def test_output_path_and_candidates(tmp_path: Path) -> None:
    cfg = BatchConfig()
    assert cfg.output_path(tmp_path / "vm.txt") == tmp_path / "vm_corrected.txt"

    (tmp_path / "vm.txt").write_text("x", encoding="utf-8")
    (tmp_path / "vm_corrected.txt").write_text("x", encoding="utf-8")
    (tmp_path / "VM.LOG").write_text("x", encoding="utf-8")
    assert cfg.is_candidate(tmp_path / "vm.txt")
    assert cfg.is_candidate(tmp_path / "VM.LOG")
    assert not cfg.is_candidate(tmp_path / "vm_corrected.txt")
    assert not cfg.is_candidate(tmp_path / "missing.txt")


def test_safe_resolve_stays_under_base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(BASE_DIR_ENV, str(tmp_path))
    assert safe_resolve("logs/a.txt") == tmp_path.resolve() / "logs" / "a.txt"
    with pytest.raises(ValueError, match="escapes"):
        safe_resolve("../outside.txt")


@pytest.mark.parametrize(("env", "expected"), [("debug", logging.DEBUG), ("nonsense", logging.INFO)])
def test_configure_logging_targets_stderr(monkeypatch: pytest.MonkeyPatch, env: str, expected: int) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setenv(LOG_LEVEL_ENV, env)

    configure_logging()

    assert len(calls) == 1
    assert calls[0]["stream"] is sys.stderr
    assert calls[0]["level"] == expected
