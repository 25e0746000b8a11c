from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from vmstat_normalizer.core.batch import (
    correct_file,
    correct_path,
    format_batch_report,
    iter_candidates,
    process_batch,
    scan_folder,
)
from vmstat_normalizer.core.config import configure_logging, resolve_batch_config
from vmstat_normalizer.core.report import format_change
from vmstat_normalizer.core.variants import VARIANTS, get_variant


def _print_progress(current: int, total: int, name: str) -> None:
    print(f"[{current}/{total}] {name}", file=sys.stderr)


def _cmd_correct(args: argparse.Namespace) -> int:
    cfg = resolve_batch_config()
    path = Path(args.log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    if args.output:
        result = asyncio.run(correct_path(path, args.variant, cfg))
        Path(args.output).write_text(result.corrected_text, encoding=cfg.encoding)
        changes, target = result.changes, Path(args.output)
    else:
        outcome = asyncio.run(correct_file(path, args.variant, cfg, replace_original=args.in_place))
        if not outcome.success:
            print(f"Error: {outcome.error}", file=sys.stderr)
            return 2
        changes, target = outcome.changes, path.with_name(outcome.corrected_file)

    if args.show_changes:
        for c in changes:
            print(format_change(c))
    print(f"\nWrote {target} ({len(changes)} change(s)).")
    return 0


def _cmd_scan(args: argparse.Namespace) -> int:
    report = asyncio.run(scan_folder(args.folder, args.variant))
    for f in report.needs_correction:
        print(f"NEEDS CORRECTION  {f.name}  ({f.issues} issue(s), {f.total_blocks} blocks)")
    for f in report.already_correct:
        print(f"OK                {f.name}  ({f.total_blocks} blocks)")
    for f in report.has_errors:
        print(f"ERROR             {f.name}  {f.error}")
    print(
        f"\n{report.total} file(s): {len(report.needs_correction)} need correction, "
        f"{len(report.already_correct)} correct, {len(report.has_errors)} with errors."
    )
    return 0


async def _run_batch(args: argparse.Namespace) -> str:
    cfg = resolve_batch_config()
    if args.all:
        paths = [str(p) for p in iter_candidates(args.folder, cfg)]
    else:
        scan = await scan_folder(args.folder, args.variant, cfg)
        paths = [f.path for f in scan.needs_correction]

    report = await process_batch(
        paths,
        args.variant,
        cfg,
        replace_original=args.replace,
        progress=_print_progress,
    )
    return format_batch_report(report, folder=args.folder)


def _cmd_batch(args: argparse.Namespace) -> int:
    text = asyncio.run(_run_batch(args))
    if args.report:
        Path(args.report).write_text(text + "\n", encoding="utf-8")
        print(f"Report written to {args.report}")
    else:
        print(text)
    return 0


def _variant(s: str) -> str:
    try:
        return get_variant(s).name
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Re-segment vmstat/free snapshot logs into fixed-shape blocks."
    )
    variant_help = f"Record shape: {', '.join(sorted(VARIANTS))} (default: cpu)"
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("correct", help="Correct a single log file")
    c.add_argument("log_path")
    c.add_argument("--variant", type=_variant, default="cpu", help=variant_help)
    out = c.add_mutually_exclusive_group()
    out.add_argument("--output", "-o", default=None, help="Write corrected text to this path")
    out.add_argument("--in-place", action="store_true", help="Overwrite the original file")
    c.add_argument("--show-changes", action="store_true", help="Print every change record")
    c.set_defaults(func=_cmd_correct)

    s = sub.add_parser("scan", help="Report which files in a folder need correction")
    s.add_argument("folder")
    s.add_argument("--variant", type=_variant, default="cpu", help=variant_help)
    s.set_defaults(func=_cmd_scan)

    b = sub.add_parser("batch", help="Correct every file in a folder that needs it")
    b.add_argument("folder")
    b.add_argument("--variant", type=_variant, default="cpu", help=variant_help)
    b.add_argument("--all", action="store_true", help="Rewrite all files, not only flagged ones")
    b.add_argument("--replace", action="store_true", help="Overwrite originals instead of *_corrected")
    b.add_argument("--report", default=None, help="Write the text report to this path")
    b.set_defaults(func=_cmd_batch)

    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        code = args.func(args)
    except (FileNotFoundError, NotADirectoryError) as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    raise SystemExit(code)


if __name__ == "__main__":
    main()
