import os
import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure PyQt widgets render without an attached display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if SRC.exists():
    sys.path.insert(0, str(SRC))

# Register shared Hypothesis profiles for deterministic CI runs and fast local loops.
from tests.util import hypothesis_profiles  # noqa: E402,F401  pylint: disable=unused-import
from tests.util.samples import write_documents  # noqa: E402

_ENV_KEYS = (
    "SWEEPSCOPE_CONFIG",
    "SWEEPSCOPE_DATA_DIR",
    "SWEEPSCOPE_TOP_N",
    "SWEEPSCOPE_TRAIN_TICK",
    "SWEEPSCOPE_VALID_TICK",
    "SWEEPSCOPE_HEATMAP_WIDTH",
    "SWEEPSCOPE_HEATMAP_HEIGHT",
    "SWEEPSCOPE_GAP_GOOD",
    "SWEEPSCOPE_GAP_MODERATE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(name="_qt_app")
def _qt_app_fixture(qapp: Any) -> Any:
    """Alias for the QApplication provided by pytest-qt."""

    return qapp


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return write_documents(tmp_path / "data")


def pytest_configure(config: pytest.Config) -> None:
    """Ensure custom marks remain registered even when pyproject isn't picked up."""
    config.addinivalue_line("markers", "qt: Qt / pyqtgraph dependent tests")
