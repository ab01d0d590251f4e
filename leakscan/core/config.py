"""Scan settings and their defaults."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigError

DEFAULT_MAX_FILE_SIZE = 1 << 20  # 1 MiB
DEFAULT_ENTROPY_THRESHOLD = 4.0  # bits per char
DEFAULT_MAX_LINE_LENGTH = 1 << 20
DEFAULT_WORKERS = 8
DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = (
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    "__pycache__",
)

SKIP_LINE = "skip-line"
STOP_FILE = "stop-file"
LONG_LINE_POLICIES = (SKIP_LINE, STOP_FILE)


@dataclass(frozen=True)
class ScanConfig:
    entropy_threshold: float = DEFAULT_ENTROPY_THRESHOLD
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    long_line_policy: str = SKIP_LINE
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    include_globs: Tuple[str, ...] = ("*",)
    workers: int = DEFAULT_WORKERS
    detectors: str = "all"
    show_progress: bool = False

    def validate(self) -> "ScanConfig":
        if not math.isfinite(self.entropy_threshold) or self.entropy_threshold < 0:
            raise ConfigError(f"entropy threshold must be a finite number >= 0, got {self.entropy_threshold}")
        if self.max_file_size < 0:
            raise ConfigError(f"max file size must be >= 0, got {self.max_file_size}")
        if self.max_line_length < 1:
            raise ConfigError(f"max line length must be >= 1, got {self.max_line_length}")
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.long_line_policy not in LONG_LINE_POLICIES:
            raise ConfigError(
                f"unknown long line policy {self.long_line_policy!r}; "
                f"expected one of {', '.join(LONG_LINE_POLICIES)}"
            )
        return self


def split_csv(value: str) -> Tuple[str, ...]:
    return tuple(v.strip() for v in (value or "").split(",") if v.strip())
