"""Batch/file configuration with environment overrides."""

from __future__ import annotations

import codecs
import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path

SUFFIX_ENV = "VMSTAT_NORMALIZER_SUFFIX"
ENCODING_ENV = "VMSTAT_NORMALIZER_ENCODING"
BASE_DIR_ENV = "VMSTAT_NORMALIZER_BASE_DIR"
LOG_LEVEL_ENV = "VMSTAT_NORMALIZER_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class BatchConfig:
    output_suffix: str = "_corrected"
    allowed_suffixes: tuple[str, ...] = (".txt", ".log")
    encoding: str = "utf-8"
    decode_errors: str = "strict"  # unreadable files are reported, not guessed at
    recursive: bool = False

    def output_path(self, path: Path) -> Path:
        """``dir/name.txt`` -> ``dir/name<suffix>.txt``."""
        return path.with_name(f"{path.stem}{self.output_suffix}{path.suffix}")

    def is_candidate(self, path: Path) -> bool:
        """True for input logs (not previously written outputs)."""
        return (
            path.is_file()
            and path.suffix.lower() in self.allowed_suffixes
            and not path.stem.endswith(self.output_suffix)
        )


def resolve_batch_config(cfg: BatchConfig | None = None) -> BatchConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = BatchConfig()

    suffix = os.getenv(SUFFIX_ENV)
    if suffix is not None and suffix != "":
        if os.sep in suffix or "/" in suffix:
            raise ValueError(f"{SUFFIX_ENV} must not contain path separators")
        cfg = replace(cfg, output_suffix=suffix)

    encoding = os.getenv(ENCODING_ENV)
    if encoding is not None and encoding != "":
        try:
            codecs.lookup(encoding)
        except LookupError as exc:
            raise ValueError(f"{ENCODING_ENV} is not a known encoding: {encoding}") from exc
        cfg = replace(cfg, encoding=encoding)

    return cfg


def base_dir() -> Path:
    """Directory the server's file tools and resources are confined to."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def safe_resolve(path: str | Path) -> Path:
    """Resolve a path under the configured base directory."""
    base = base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def configure_logging() -> None:
    """Send log records to stderr at the level named by ``VMSTAT_NORMALIZER_LOG_LEVEL``.

    stdout stays free for CLI output and the stdio MCP transport.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
