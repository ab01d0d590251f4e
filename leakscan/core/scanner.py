from __future__ import annotations

import fnmatch
import logging
import os
import stat
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from tqdm import tqdm

from ..detectors.base import Detector
from .config import STOP_FILE, ScanConfig
from .engine import default_detectors, scan_line
from .errors import TargetPathError
from .loader import select_detectors
from .models import FileScanResult, ScanReport
from .utils import iter_lines, read_text_safely


DEFAULT_LOGGER_NAME = "leakscan"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0
LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def configure_logging(verbosity: int = 0, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return the package logger, attaching a stderr handler on first use.

    ``verbosity`` 0 logs warnings, 1 adds progress notes, 2 and up adds
    per-file timing.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(LOG_LEVELS[max(0, min(verbosity, len(LOG_LEVELS) - 1))])

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


def resolve_detectors(selector: str) -> List[Detector]:
    return select_detectors(default_detectors(), selector)


def scan_file(
    path: Path,
    config: ScanConfig,
    detectors: Sequence[Detector],
    logger: Optional[logging.Logger] = None,
) -> FileScanResult:
    """Scan one file line by line.

    Read failures are returned on the result, never raised. Lines longer than
    ``config.max_line_length`` are skipped, or end the file scan when the
    policy is ``stop-file``; findings from earlier lines are kept either way.
    """
    logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
    display = str(path)
    result = FileScanResult(path=display)

    try:
        content = read_text_safely(path, max_bytes=config.max_file_size)
    except OSError as exc:
        logger.warning("Unable to read %s: %s", display, exc)
        result.error = str(exc)
        return result
    if content is None:
        logger.info("Skipping binary file %s", display)
        result.skipped = "binary content"
        return result

    for line_no, line in enumerate(iter_lines(content), start=1):
        if len(line) > config.max_line_length:
            if config.long_line_policy == STOP_FILE:
                logger.warning(
                    "Line %d of %s exceeds %d characters; skipping rest of file",
                    line_no, display, config.max_line_length,
                )
                result.skipped = f"line {line_no} too long"
                break
            logger.info(
                "Line %d of %s exceeds %d characters; skipping line",
                line_no, display, config.max_line_length,
            )
            continue
        result.lines_scanned += 1
        for finding in scan_line(line, config.entropy_threshold, detectors):
            result.findings.append(finding.located(display, line_no))
    return result


class DirectoryScanner:
    """Walks ``root`` and scans every eligible file on a thread pool."""

    def __init__(
        self,
        root: Path,
        config: ScanConfig,
        detectors: Optional[Sequence[Detector]] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.root = root
        self.config = config
        self.detectors = list(detectors) if detectors is not None else resolve_detectors(config.detectors)
        self.exclude_dirs = frozenset(config.exclude_dirs)
        self.logger = (logger or logging.getLogger(DEFAULT_LOGGER_NAME)).getChild("walk")
        self.slow_file_seconds = SLOW_SCAN_THRESHOLD_SECONDS
        self._walk_errors: List[OSError] = []

    def _on_walk_error(self, exc: OSError) -> None:
        self.logger.warning("Unable to list %s: %s", exc.filename, exc.strerror or exc)
        self._walk_errors.append(exc)

    def _eligible(self, p: Path) -> bool:
        if not any(fnmatch.fnmatch(p.name, pat) for pat in self.config.include_globs):
            return False
        try:
            st = p.lstat()
        except OSError as exc:
            self.logger.warning("Unable to stat %s: %s", p, exc)
            return False
        if not stat.S_ISREG(st.st_mode):
            return False
        if st.st_size > self.config.max_file_size:
            self.logger.info("Skipping %s (%d bytes > %d)", p, st.st_size, self.config.max_file_size)
            return False
        return True

    def _iter_files(self) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_walk_error):
            # pruning in place keeps os.walk out of excluded dirs
            dirnames[:] = sorted(d for d in dirnames if d not in self.exclude_dirs)
            for name in sorted(filenames):
                p = Path(dirpath) / name
                if self._eligible(p):
                    yield p

    def scan(self) -> ScanReport:
        report = ScanReport()
        self._walk_errors = []
        files = list(self._iter_files())
        report.errors.extend((str(e.filename), e.strerror or str(e)) for e in self._walk_errors)
        self.logger.info("Discovered %d file(s) to scan", len(files))
        if not files:
            return report

        bar = None
        if self.config.show_progress:
            bar = tqdm(total=len(files), desc="Scanning files", unit="file", file=sys.stderr)
        executor = ThreadPoolExecutor(max_workers=self.config.workers)
        try:
            pending = {executor.submit(self._timed_scan, path): path for path in files}
            for future in as_completed(pending):
                path = pending[future]
                try:
                    report.add(future.result())
                except Exception as exc:
                    self.logger.warning("Error scanning %s: %s", path, exc)
                    report.errors.append((str(path), str(exc)))
                    report.files_skipped += 1
                if bar is not None:
                    bar.set_postfix_str(self._short_name(path), refresh=False)
                    bar.update(1)
        except KeyboardInterrupt:
            self.logger.info("Scan interrupted; abandoning remaining files")
            raise
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
            if bar is not None:
                bar.close()

        report.sort()
        return report

    def _short_name(self, path: Path) -> str:
        try:
            label = str(path.relative_to(self.root))
        except ValueError:
            label = str(path)
        return label if len(label) <= 60 else f"...{label[-57:]}"

    def _timed_scan(self, path: Path) -> FileScanResult:
        start = time.perf_counter()
        result = scan_file(path, self.config, self.detectors, logger=self.logger)
        elapsed = time.perf_counter() - start
        if elapsed >= self.slow_file_seconds:
            self.logger.debug(
                "Slow scan for %s took %.2fs (lines=%d, findings=%d)",
                self._short_name(path),
                elapsed,
                result.lines_scanned,
                len(result.findings),
            )
        return result


class SingleFileScanner:
    def __init__(
        self,
        file_path: Path,
        config: ScanConfig,
        detectors: Optional[Sequence[Detector]] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.file_path = file_path
        self.config = config
        self.detectors = list(detectors) if detectors is not None else resolve_detectors(config.detectors)
        self.logger = (logger or logging.getLogger(DEFAULT_LOGGER_NAME)).getChild("file")

    def scan(self) -> ScanReport:
        report = ScanReport()
        try:
            size = self.file_path.stat().st_size
        except OSError as exc:
            self.logger.warning("Unable to stat %s: %s", self.file_path, exc)
            report.add(FileScanResult(path=str(self.file_path), error=str(exc)))
            return report
        if size > self.config.max_file_size:
            self.logger.warning(
                "Skipping %s (%d bytes > %d)", self.file_path, size, self.config.max_file_size
            )
            report.add(FileScanResult(path=str(self.file_path), skipped="larger than max file size"))
            return report
        report.add(scan_file(self.file_path, self.config, self.detectors, logger=self.logger))
        report.sort()
        return report


def scan_path(
    target: Path,
    config: ScanConfig,
    detectors: Optional[Sequence[Detector]] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> ScanReport:
    """Scan a file or a directory tree. Raises TargetPathError if ``target`` is unusable."""
    try:
        st = target.stat()
    except OSError as exc:
        raise TargetPathError(str(target), exc.strerror or str(exc)) from exc
    if stat.S_ISDIR(st.st_mode):
        return DirectoryScanner(target, config, detectors, logger=logger).scan()
    return SingleFileScanner(target, config, detectors, logger=logger).scan()
