from __future__ import annotations
import re
from typing import List, Optional

from ..core.models import Detection


class Detector:
    """
    Base class for line detectors. Subclasses set NAME, KIND and ORDER up top
    and implement ``apply``. ORDER fixes where a detector runs in the set and
    therefore where its findings land within a line. A detector must not keep
    state between calls.
    """
    NAME: str = "base"
    KIND: Optional[str] = None  # None marks an abstract detector
    ORDER: int = 0

    def apply(self, line: str, entropy_threshold: float) -> List[Detection]:
        raise NotImplementedError("apply must be implemented in subclasses")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.NAME}>"


class RegexDetector(Detector):
    """Fires once per line when REGEX matches anywhere in it."""
    REGEX: Optional[re.Pattern] = None

    def apply(self, line: str, entropy_threshold: float) -> List[Detection]:
        if self.REGEX is not None and self.REGEX.search(line):
            return [Detection(kind=self.KIND)]
        return []
