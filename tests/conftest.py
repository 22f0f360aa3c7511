from __future__ import annotations

from pathlib import Path
import sys

from loguru import logger
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from cookassist.storage import FileRecipeStore  # noqa: E402
from tests.utils import TickingClock  # noqa: E402


@pytest.fixture(autouse=True)
def _quiet_logging():
    yield
    logger.remove()


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    return tmp_path / "recipes"


@pytest.fixture()
def store(store_root: Path, clock: TickingClock) -> FileRecipeStore:
    return FileRecipeStore(store_root, clock=clock)
