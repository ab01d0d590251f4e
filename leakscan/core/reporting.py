from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .errors import OutputError
from .models import Finding


def format_finding(f: Finding) -> str:
    base = f"{f.file}:{f.line} [{f.kind}]"
    if f.hash_algorithm is not None:
        return f"{base} (algo={f.hash_algorithm}, crackability={f.hash_crackability}) {f.snippet}"
    if f.entropy is not None:
        return f"{base} [H={f.entropy:.2f}] {f.snippet}"
    return f"{base} {f.snippet}"


def render_text(findings: List[Finding]) -> str:
    if not findings:
        return "No potential secrets found.\n"
    lines = [f"Found {len(findings)} potential secrets / hashes:", ""]
    lines.extend(format_finding(f) for f in findings)
    return "\n".join(lines) + "\n"


def render_json(findings: List[Finding]) -> str:
    try:
        return json.dumps([f.to_dict() for f in findings], indent=2) + "\n"
    except (TypeError, ValueError) as exc:
        raise OutputError(f"error encoding JSON: {exc}") from exc


class Reporter:
    """Renders findings as JSON or text to a stream or a file."""

    def __init__(self, as_json: bool = False, out_path: Optional[Path] = None, stream: Optional[TextIO] = None) -> None:
        self.as_json = as_json
        self.out_path = out_path
        self.stream = stream

    def render(self, findings: List[Finding]) -> str:
        return render_json(findings) if self.as_json else render_text(findings)

    def write(self, findings: List[Finding]) -> None:
        text = self.render(findings)
        try:
            if self.out_path is not None:
                self.out_path.parent.mkdir(parents=True, exist_ok=True)
                self.out_path.write_text(text, encoding="utf-8")
                return
            stream = self.stream or sys.stdout
            stream.write(text)
            stream.flush()
        except (OSError, UnicodeEncodeError) as exc:
            raise OutputError(f"error writing results: {exc}") from exc
