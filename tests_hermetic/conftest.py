import sys
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeAttributes:
    """In-memory stand-in for AttributeStore; records every call."""

    def __init__(self, supported: bool = True, reject_writes: bool = False) -> None:
        self.supported = supported
        self.reject_writes = reject_writes
        self.data: Dict[Tuple[str, str], str] = {}
        self.sets: List[Tuple[str, str, str]] = []
        self.probes: List[str] = []

    def probe_support(self, reference_path: str) -> bool:
        self.probes.append(reference_path)
        return self.supported

    def get(self, path: str, key: str) -> Tuple[str, bool]:
        if (path, key) in self.data:
            return self.data[(path, key)], True
        return "", False

    def set(self, path: str, key: str, value: str) -> bool:
        self.sets.append((path, key, value))
        if not self.supported or self.reject_writes or not value:
            return False
        self.data[(path, key)] = value
        return True


@pytest.fixture
def fake_attributes():
    return FakeAttributes()


@pytest.fixture
def make_attributes():
    return FakeAttributes
