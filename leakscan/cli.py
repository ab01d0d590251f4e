import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import (
    DEFAULT_ENTROPY_THRESHOLD,
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_LINE_LENGTH,
    DEFAULT_WORKERS,
    LONG_LINE_POLICIES,
    SKIP_LINE,
    ScanConfig,
    split_csv,
)
from .core.errors import LeakscanError
from .core.reporting import Reporter
from .core.scanner import configure_logging, resolve_detectors, scan_path


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="leakscan",
        description="Scan files for committed secrets, tokens and weak password hashes.",
    )
    p.add_argument("path", nargs="?", type=Path, default=Path("."), help="File or directory to scan (default: current directory).")
    p.add_argument("--json", action="store_true", help="Output results as JSON.")
    p.add_argument("--max-size", type=int, default=DEFAULT_MAX_FILE_SIZE, help="Maximum file size to scan in bytes (default: 1MB).")
    p.add_argument("--entropy", type=float, default=DEFAULT_ENTROPY_THRESHOLD, help="Shannon entropy threshold for generic high-entropy strings (default: 4.0).")
    p.add_argument("--max-line-length", type=int, default=DEFAULT_MAX_LINE_LENGTH, help="Longest line, in characters, that is analyzed.")
    p.add_argument("--long-lines", choices=LONG_LINE_POLICIES, default=SKIP_LINE, help="What to do with a line over --max-line-length: skip just that line, or stop scanning the file.")
    p.add_argument("--exclude", default=",".join(DEFAULT_EXCLUDE_DIRS), help="Dir names to exclude, comma-separated.")
    p.add_argument("--include", default="*", help="Glob(s) to include, comma-separated.")
    p.add_argument("--detectors", default="all", help="Comma-delimited detectors to run (aws, github, generic, hash, entropy) or 'all'.")
    p.add_argument("--workers", type=int, default=DEFAULT_WORKERS, help="Number of worker threads for scanning.")
    p.add_argument("--out", type=Path, default=None, help="Write results to this file instead of stdout.")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar during directory scans.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging output; repeat (-vv) for per-file timing.")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logger = configure_logging(verbosity=args.verbose)

    config = ScanConfig(
        entropy_threshold=args.entropy,
        max_file_size=args.max_size,
        max_line_length=args.max_line_length,
        long_line_policy=args.long_lines,
        exclude_dirs=split_csv(args.exclude),
        include_globs=split_csv(args.include) or ("*",),
        workers=args.workers,
        detectors=args.detectors,
        show_progress=not args.no_progress and sys.stderr.isatty(),
    )

    try:
        config.validate()
        detectors = resolve_detectors(config.detectors)
        if not detectors:
            print("No detectors selected. Exiting.", file=sys.stderr)
            return 2
        report = scan_path(args.path, config, detectors, logger=logger)
        Reporter(as_json=args.json, out_path=args.out).write(report.findings)
    except LeakscanError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code

    logger.info(
        "Scanned %d file(s), skipped %d, %d error(s), %d finding(s)",
        report.files_scanned,
        report.files_skipped,
        len(report.errors),
        len(report.findings),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
