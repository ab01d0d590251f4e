"""Fatal errors. Anything recoverable is recorded on the scan result instead."""

from __future__ import annotations


class LeakscanError(Exception):
    exit_code = 1


class ConfigError(LeakscanError):
    pass


class TargetPathError(LeakscanError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot stat {path}: {reason}")
        self.path = path
        self.reason = reason


class OutputError(LeakscanError):
    pass
