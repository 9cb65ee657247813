import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


class FakeClock:
    """Callable clock that advances by a fixed step on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0), step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def save_dir(tmp_path: Path) -> Path:
    return tmp_path / "saves"


@pytest.fixture()
def make_clock():
    return FakeClock
