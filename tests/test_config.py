from __future__ import annotations

from pathlib import Path

import pytest

from sweepscope.config import ExplorerConfig, load_explorer_config
from sweepscope.contracts.error import InvalidArgumentError


def test_default_config_validates() -> None:
    cfg = load_explorer_config(None)
    assert cfg.data.directory == "data"
    assert cfg.data.sweep_file == "chapter3_hyperparameter_sweep.json"
    assert cfg.charts.train_tick == pytest.approx(0.10)
    assert cfg.charts.valid_tick == pytest.approx(0.05)
    assert cfg.charts.top_n == 10
    assert cfg.gaps.good_below == pytest.approx(0.25)
    assert cfg.gaps.moderate_below == pytest.approx(0.35)


def test_load_from_toml(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text(
        """
[data]
directory = "exports"
overview_file = "ov.json"

[charts]
top_n = 5
valid_tick = 0.02
heatmap_width = 320

[gaps]
good_below = 0.2
moderate_below = 0.3
""",
        encoding="utf-8",
    )
    cfg = load_explorer_config(str(cfg_path))
    assert cfg.data.directory == "exports"
    assert cfg.data.overview_file == "ov.json"
    assert cfg.data.comparison_file == "chapter2_baseline_vs_model.json"
    assert cfg.charts.top_n == 5
    assert cfg.charts.valid_tick == pytest.approx(0.02)
    assert cfg.charts.heatmap_width == 320
    assert cfg.gaps.good_below == pytest.approx(0.2)


def test_env_overrides_win_over_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text("[charts]\ntop_n = 5\n", encoding="utf-8")
    monkeypatch.setenv("SWEEPSCOPE_TOP_N", "3")
    monkeypatch.setenv("SWEEPSCOPE_DATA_DIR", str(tmp_path))
    cfg = load_explorer_config(str(cfg_path))
    assert cfg.charts.top_n == 3
    assert cfg.data.directory == str(tmp_path)


def test_invalid_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SWEEPSCOPE_TRAIN_TICK", "wide")
    with pytest.raises(InvalidArgumentError, match="SWEEPSCOPE_TRAIN_TICK"):
        load_explorer_config(None)


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="Unknown config key"):
        ExplorerConfig.from_dict({"charts": {"bins": 4}})


def test_section_must_be_table() -> None:
    with pytest.raises(InvalidArgumentError, match=r"\[gaps\]"):
        ExplorerConfig.from_dict({"gaps": 0.3})


@pytest.mark.parametrize(
    ("section", "values", "message"),
    [
        ("charts", {"train_tick": 0.0}, "train_tick"),
        ("charts", {"valid_tick": -0.05}, "valid_tick"),
        ("charts", {"top_n": 0}, "top_n"),
        ("charts", {"tick_precision": -1}, "tick_precision"),
        ("charts", {"heatmap_height": 0}, "heatmap"),
        ("gaps", {"good_below": 0.4, "moderate_below": 0.3}, "good_below"),
        ("data", {"sweep_file": "  "}, "sweep_file"),
    ],
)
def test_validation_rejects_bad_values(
    section: str, values: dict[str, object], message: str
) -> None:
    cfg = ExplorerConfig.from_dict({section: values})
    with pytest.raises(InvalidArgumentError, match=message):
        cfg.validate()


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError, match="not found"):
        load_explorer_config(str(tmp_path / "absent.toml"))


def test_invalid_toml(tmp_path: Path) -> None:
    cfg_path = tmp_path / "broken.toml"
    cfg_path.write_text("[charts\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError, match="Invalid TOML"):
        load_explorer_config(str(cfg_path))


def test_paths_join_directory_and_names(tmp_path: Path) -> None:
    cfg = load_explorer_config(None)
    overview, comparison, sweep = cfg.data.paths(tmp_path)
    assert overview == tmp_path / "overview.json"
    assert comparison.name == "chapter2_baseline_vs_model.json"
    assert sweep.parent == tmp_path


@pytest.mark.parametrize(
    ("values", "message"),
    [
        ({"top_n": 2.5}, "charts.top_n must be an integer"),
        ({"top_n": "10"}, "charts.top_n must be an integer"),
        ({"tick_precision": True}, "charts.tick_precision must be an integer"),
        ({"heatmap_width": 400.0}, "charts.heatmap_width must be an integer"),
        ({"train_tick": "0.1"}, "charts.train_tick must be a number"),
    ],
)
def test_chart_values_must_have_the_right_type(values: dict[str, object], message: str) -> None:
    cfg = ExplorerConfig.from_dict({"charts": values})
    with pytest.raises(InvalidArgumentError, match=message):
        cfg.validate()


def test_non_integer_top_n_in_toml_is_rejected(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.toml"
    cfg_path.write_text("[charts]\ntop_n = 2.5\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError, match="top_n"):
        load_explorer_config(str(cfg_path))


def test_gap_thresholds_must_be_numbers() -> None:
    cfg = ExplorerConfig.from_dict({"gaps": {"good_below": "low"}})
    with pytest.raises(InvalidArgumentError, match="gaps.good_below must be a number"):
        cfg.validate()


def test_integer_ticks_are_accepted() -> None:
    cfg = ExplorerConfig.from_dict({"charts": {"train_tick": 1, "valid_tick": 1}})
    cfg.validate()
    assert cfg.charts.train_tick == 1
