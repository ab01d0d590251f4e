from __future__ import annotations
import importlib
import pkgutil
from typing import Dict, List, Type

from ..detectors.base import Detector


def _discover_package_classes(pkg, base_cls) -> Dict[str, Type]:
    discovered: Dict[str, Type] = {}
    for m in pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."):
        module = importlib.import_module(m.name)
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, type) and issubclass(obj, base_cls) and obj is not base_cls:
                if getattr(obj, "KIND", None) is None:
                    continue
                name = getattr(obj, "NAME", obj.__name__).lower()
                discovered[name] = obj
    return discovered


def discover_detectors() -> List[Detector]:
    """Instantiate every detector in ``leakscan.detectors``, in ORDER."""
    from .. import detectors as detectors_pkg  # lazy import
    classes = _discover_package_classes(detectors_pkg, Detector)
    return sorted((cls() for cls in classes.values()), key=lambda d: (d.ORDER, d.NAME))


def select_detectors(all_detectors: List[Detector], selector: str) -> List[Detector]:
    selector = (selector or "").strip().lower()
    if selector == "all" or selector == "*":
        return list(all_detectors)
    wanted = {t.strip() for t in selector.split(",") if t.strip()}
    return [d for d in all_detectors if d.NAME in wanted]
