from __future__ import annotations
import re
from typing import List

from ..core.models import HIGH_ENTROPY_STRING, Detection
from ..core.utils import shannon_entropy
from .base import Detector


ENTROPY_MIN_LENGTH = 20
CANDIDATE_REGEX = re.compile(r"[A-Za-z0-9/+=]+")


class HighEntropyDetector(Detector):
    NAME = "entropy"
    KIND = HIGH_ENTROPY_STRING
    ORDER = 50
    MIN_LENGTH = ENTROPY_MIN_LENGTH

    def apply(self, line: str, entropy_threshold: float) -> List[Detection]:
        out: List[Detection] = []
        for m in CANDIDATE_REGEX.finditer(line):
            token = m.group(0)
            if len(token) < self.MIN_LENGTH:
                continue
            H = shannon_entropy(token)
            if H >= entropy_threshold:
                out.append(Detection(kind=self.KIND, entropy=H))
        return out
