from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Tuple

import pytest
from PySide6.QtCore import QCoreApplication

# Ensure local "src/" takes precedence over any globally-installed "polyconcrete" package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)

from polyconcrete.app.state import MoldStore  # noqa: E402
from polyconcrete.app.storage import MemoryStorage  # noqa: E402


class FakeScheduler:
    """Collects deferred callbacks so tests decide when timers fire."""

    def __init__(self) -> None:
        self.pending: List[Tuple[int, Callable[[], None]]] = []

    def __call__(self, msec: int, callback: Callable[[], None]) -> None:
        self.pending.append((msec, callback))

    def fire_next(self) -> None:
        _, callback = self.pending.pop(0)
        callback()

    def fire_all(self) -> None:
        while self.pending:
            self.fire_next()


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def store(storage: MemoryStorage, scheduler: FakeScheduler) -> MoldStore:
    return MoldStore(storage=storage, schedule=scheduler)
