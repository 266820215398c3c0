from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class RecordingStrategy:
    def __init__(self, result: Any = None):
        self.calls: List[tuple] = []
        self.result = result

    def __call__(self, name, template, /, *args, **kwargs):
        self.calls.append((name, template, args, kwargs))
        if self.result is not None:
            return self.result
        return f"{name}:{template}:{args}"


class FakeDataset:
    def __init__(self, result: Any = None):
        self.reads: List[Any] = []
        self.result = result if result is not None else object()

    def read(self, resolved):
        self.reads.append(resolved)
        return self.result


@pytest.fixture
def strategy() -> RecordingStrategy:
    return RecordingStrategy()


@pytest.fixture
def dataset() -> FakeDataset:
    return FakeDataset()
