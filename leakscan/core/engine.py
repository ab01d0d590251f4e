from __future__ import annotations
from typing import List, Optional, Sequence

from ..detectors.base import Detector
from .config import DEFAULT_ENTROPY_THRESHOLD
from .loader import discover_detectors
from .models import Finding, make_snippet

_default_detectors: Optional[List[Detector]] = None


def default_detectors() -> List[Detector]:
    """The full detector set, discovered once per process."""
    global _default_detectors
    if _default_detectors is None:
        _default_detectors = discover_detectors()
    return _default_detectors


def scan_line(
    line: str,
    entropy_threshold: float = DEFAULT_ENTROPY_THRESHOLD,
    detectors: Optional[Sequence[Detector]] = None,
) -> List[Finding]:
    """Run every detector over one raw line.

    The returned findings have no file or line number; the file scan stamps
    them. Every detector sees the line regardless of what the others found.
    """
    if detectors is None:
        detectors = default_detectors()
    findings: List[Finding] = []
    snippet = None
    for detector in detectors:
        for detection in detector.apply(line, entropy_threshold):
            if snippet is None:
                snippet = make_snippet(line)
            findings.append(Finding.from_detection(detection, snippet))
    return findings
