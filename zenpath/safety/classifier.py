# Local crisis-phrase classifier. Pure and synchronous; never touches the network.

from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, Optional, Tuple

import yaml

PATTERNS_PATH = Path(__file__).resolve().parent / "patterns.yaml"


def load_patterns(path: Optional[str] = None) -> Tuple[str, ...]:
    """Read the `patterns` list from YAML, lower-cased, blanks dropped."""
    path = path or str(PATTERNS_PATH)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Safety patterns not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return _normalize(data.get("patterns", []))


def _normalize(patterns: Iterable[str]) -> Tuple[str, ...]:
    return tuple(p.strip().lower() for p in patterns if p and p.strip())


class SafetyClassifier:
    """
    Substring matcher over a fixed pattern set.
    Deliberately conservative: any occurrence counts, word boundaries are ignored.
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: Tuple[str, ...] = _normalize(patterns) if patterns is not None else load_patterns()

    def first_match(self, text: str) -> Optional[str]:
        lowered = (text or "").lower()
        for p in self.patterns:
            if p in lowered:
                return p
        return None

    def classify(self, text: str) -> bool:
        return self.first_match(text) is not None
