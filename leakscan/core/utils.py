from __future__ import annotations
import io
import math
import chardet  # type: ignore
from collections import Counter
from pathlib import Path
from typing import Iterator, Optional

BINARY_BYTES = bytes(range(0, 32)) + b"\x7f"
JAVA_SERIAL_MAGIC = b"\xac\xed"
HEAD_BYTES = 4096
# latin-1 maps every byte, so decoding can always fall back to it
FALLBACK_ENCODINGS = ("utf-8", "latin-1")


def is_likely_binary(data: bytes, control_threshold: float = 0.30) -> bool:
    """Structural text/binary check; the encoding is left to chardet."""
    if not data:
        return False
    if 0 in data:
        return True
    if data.startswith(JAVA_SERIAL_MAGIC):
        return True
    control = sum(1 for b in data if b in BINARY_BYTES and b not in (9, 10, 12, 13))
    return (control / len(data)) > control_threshold


def decode_text(data: bytes) -> str:
    enc = chardet.detect(data).get("encoding")
    candidates = [enc] if enc else []
    candidates.extend(FALLBACK_ENCODINGS)
    for candidate in candidates:
        try:
            return data.decode(candidate, errors="strict")
        except (LookupError, UnicodeDecodeError):
            continue
    return data.decode("latin-1")


def read_text_safely(path: Path, max_bytes: int = 1 << 20) -> Optional[str]:
    """Return the decoded text of ``path``, or None for binary content.

    OSError from opening or reading propagates; the caller decides what a
    failed read means for the scan.
    """
    with path.open("rb") as f:
        head = f.read(min(HEAD_BYTES, max_bytes))
        if is_likely_binary(head):
            return None
        rest = f.read(max(max_bytes - len(head), 0))
        data = head + rest
    if is_likely_binary(data):
        return None
    return decode_text(data)


def shannon_entropy(s: str) -> float:
    """Shannon entropy of ``s`` in bits per code point."""
    if not s:
        return 0.0
    count = Counter(s)
    length = len(s)
    return sum((c / length) * math.log2(length / c) for c in count.values())


def iter_lines(text: str) -> Iterator[str]:
    # only "\n" ends a line; a single trailing "\r" is dropped
    buf = io.StringIO(text)
    for line in buf:
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line
