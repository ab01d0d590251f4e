from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

AWS_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
GITHUB_PAT = "GITHUB_PAT"
GENERIC_KV_SECRET = "GENERIC_KV_SECRET"
HASH = "HASH"
HIGH_ENTROPY_STRING = "HIGH_ENTROPY_STRING"

KINDS = (AWS_ACCESS_KEY_ID, GITHUB_PAT, GENERIC_KV_SECRET, HASH, HIGH_ENTROPY_STRING)

SNIPPET_MAX_LENGTH = 200
SNIPPET_ELLIPSIS = "..."


def make_snippet(line: str, max_length: int = SNIPPET_MAX_LENGTH) -> str:
    snippet = line.strip()
    if len(snippet) > max_length:
        snippet = snippet[:max_length] + SNIPPET_ELLIPSIS
    return snippet


@dataclass(frozen=True)
class Detection:
    """What a detector reports for one line, before it becomes a Finding."""
    kind: str
    entropy: Optional[float] = None
    hash_algorithm: Optional[str] = None
    hash_crackability: Optional[str] = None


@dataclass(frozen=True)
class Finding:
    kind: str
    snippet: str
    file: Optional[str] = None  # stamped by the file scan
    line: Optional[int] = None  # 1-based
    entropy: Optional[float] = None
    hash_algorithm: Optional[str] = None
    hash_crackability: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"unknown finding kind: {self.kind!r}")
        has_algo = self.hash_algorithm is not None
        has_crack = self.hash_crackability is not None
        if has_algo != has_crack:
            raise ValueError("hash_algorithm and hash_crackability must be set together")
        if has_algo != (self.kind == HASH):
            raise ValueError("hash fields are required on HASH findings and only there")
        if (self.entropy is not None) != (self.kind == HIGH_ENTROPY_STRING):
            raise ValueError("entropy is required on HIGH_ENTROPY_STRING findings and only there")
        if self.entropy is not None and self.entropy < 0:
            raise ValueError("entropy must be non-negative")

    @classmethod
    def from_detection(cls, detection: Detection, snippet: str) -> "Finding":
        return cls(
            kind=detection.kind,
            snippet=snippet,
            entropy=detection.entropy,
            hash_algorithm=detection.hash_algorithm,
            hash_crackability=detection.hash_crackability,
        )

    def located(self, file: str, line: int) -> "Finding":
        return replace(self, file=file, line=line)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": self.file,
            "line": self.line,
            "kind": self.kind,
            "snippet": self.snippet,
        }
        if self.entropy is not None:
            data["entropy"] = self.entropy
        if self.hash_algorithm is not None:
            data["hash_algorithm"] = self.hash_algorithm
            data["hash_crackability"] = self.hash_crackability
        return data


@dataclass
class FileScanResult:
    """Outcome of scanning one file.

    ``error`` is set when the file could not be read at all, ``skipped``
    when the file (or its tail) was deliberately not scanned. Neither stops
    a directory scan.
    """
    path: str
    findings: List[Finding] = field(default_factory=list)
    lines_scanned: int = 0
    skipped: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScanReport:
    findings: List[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    errors: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, result: FileScanResult) -> None:
        if result.error is not None:
            self.errors.append((result.path, result.error))
            self.files_skipped += 1
            return
        if result.skipped is not None and not result.lines_scanned:
            self.files_skipped += 1
        else:
            self.files_scanned += 1
        self.findings.extend(result.findings)

    def sort(self) -> None:
        # stable: keeps detector order within a line
        self.findings.sort(key=lambda f: (f.file or "", f.line or 0))
