from __future__ import annotations

import pytest

try:
    from sweepscope.explorer import app as explorer_app
except ImportError as exc:  # pragma: no cover - optional dependency
    pytestmark = pytest.mark.skip(reason=f"Explorer app unavailable: {exc}")


def test_run_explorer_requires_pyqt(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(explorer_app, "QT_IMPORT_ERROR", ImportError("missing Qt"))
    with pytest.raises(RuntimeError, match="pip install"):
        explorer_app.run_explorer("data")
