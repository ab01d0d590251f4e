from __future__ import annotations
import string
from typing import Dict, NamedTuple, Optional, Tuple

HEX_DIGITS = frozenset(string.hexdigits)

MIN_HASH_LENGTH = 32
MAX_HASH_LENGTH = 128

# hex length -> (algorithm, crackability)
HASH_TYPES: Dict[int, Tuple[str, str]] = {
    32: ("MD5/NTLM", "weak"),  # fast dictionary / GPU attack
    40: ("SHA-1", "weak"),  # broken, collision-prone
    64: ("SHA-256", "stronger-but-crackable-offline-if-unsalted"),
    128: ("SHA-512", "stronger, depends on salting/KDF"),
}


class HashClassification(NamedTuple):
    algorithm: Optional[str]
    crackability: Optional[str]

    @property
    def classified(self) -> bool:
        return self.algorithm is not None


NOT_CLASSIFIED = HashClassification(None, None)


def is_hex(candidate: str) -> bool:
    return bool(candidate) and all(ch in HEX_DIGITS for ch in candidate)


def classify_hash(candidate: str) -> HashClassification:
    """Guess the hash algorithm behind a hex string from its length alone."""
    if not is_hex(candidate):
        return NOT_CLASSIFIED
    known = HASH_TYPES.get(len(candidate))
    if known is None:
        return NOT_CLASSIFIED
    return HashClassification(*known)
