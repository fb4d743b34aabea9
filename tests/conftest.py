from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

# Ensure local "src/" takes precedence over any globally-installed "socialnet" package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)

from socialnet.runtime.ledger import SocialLedger  # noqa: E402


class StepClock:
    """Deterministic ms clock: starts at `start`, advances `step` per call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1_000) -> None:
        self.now = int(start)
        self.step = int(step)

    def __call__(self) -> int:
        cur = self.now
        self.now += self.step
        return cur


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def ledger(clock: StepClock) -> SocialLedger:
    return SocialLedger(ledger_id="test-ledger", clock=clock, metrics_on=False)


@pytest.fixture
def make_ledger() -> Callable[..., SocialLedger]:
    def _make(**kw) -> SocialLedger:
        kw.setdefault("ledger_id", "test-ledger")
        kw.setdefault("metrics_on", False)
        return SocialLedger(**kw)

    return _make
