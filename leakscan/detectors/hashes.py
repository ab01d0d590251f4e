from __future__ import annotations
import re
from typing import List

from ..core.hashes import MAX_HASH_LENGTH, MIN_HASH_LENGTH, classify_hash
from ..core.models import HASH, Detection
from .base import Detector


# ASCII word boundaries so a run touching e.g. "é" is still bounded
HEX_RUN_REGEX = re.compile(
    rf"\b[0-9a-fA-F]{{{MIN_HASH_LENGTH},{MAX_HASH_LENGTH}}}\b", re.ASCII
)


class HashDetector(Detector):
    NAME = "hash"
    KIND = HASH
    ORDER = 40

    def apply(self, line: str, entropy_threshold: float) -> List[Detection]:
        out: List[Detection] = []
        for m in HEX_RUN_REGEX.finditer(line):
            algorithm, crackability = classify_hash(m.group(0))
            if algorithm is None:
                continue
            out.append(
                Detection(
                    kind=self.KIND,
                    hash_algorithm=algorithm,
                    hash_crackability=crackability,
                )
            )
        return out
