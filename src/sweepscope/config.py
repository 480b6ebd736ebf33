"""Typed configuration loader for SweepScope."""

from __future__ import annotations

import math
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import InvalidArgumentError


def _require_int(section: str, name: str, value: Any) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{section}.{name} must be an integer, got {value!r}")
    return value


def _require_number(section: str, name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{section}.{name} must be a number, got {value!r}")
    return float(value)


@dataclass
class DataSources:
    directory: str = "data"
    overview_file: str = "overview.json"
    comparison_file: str = "chapter2_baseline_vs_model.json"
    sweep_file: str = "chapter3_hyperparameter_sweep.json"

    def validate(self) -> None:
        if not isinstance(self.directory, str):
            raise InvalidArgumentError("data.directory must be a string")
        for name in ("overview_file", "comparison_file", "sweep_file"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidArgumentError(f"data.{name} must be a non-empty file name")

    def paths(self, directory: str | Path | None = None) -> tuple[Path, Path, Path]:
        base = Path(directory) if directory is not None else Path(self.directory)
        return (
            base / self.overview_file,
            base / self.comparison_file,
            base / self.sweep_file,
        )


@dataclass
class ChartPolicy:
    train_tick: float = 0.10
    valid_tick: float = 0.05
    tick_precision: int = 2
    top_n: int = 10
    heatmap_width: int = 400
    heatmap_height: int = 400

    def validate(self) -> None:
        for name in ("train_tick", "valid_tick"):
            value = _require_number("charts", name, getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidArgumentError(f"charts.{name} must be > 0")
        for name in ("tick_precision", "top_n", "heatmap_width", "heatmap_height"):
            _require_int("charts", name, getattr(self, name))
        if self.tick_precision < 0:
            raise InvalidArgumentError("charts.tick_precision must be >= 0")
        if self.top_n <= 0:
            raise InvalidArgumentError("charts.top_n must be > 0")
        if self.heatmap_width <= 0 or self.heatmap_height <= 0:
            raise InvalidArgumentError("charts.heatmap_width/heatmap_height must be > 0")


@dataclass
class GapPolicy:
    good_below: float = 0.25
    moderate_below: float = 0.35

    def validate(self) -> None:
        good = _require_number("gaps", "good_below", self.good_below)
        moderate = _require_number("gaps", "moderate_below", self.moderate_below)
        if not (math.isfinite(good) and math.isfinite(moderate)):
            raise InvalidArgumentError("gaps thresholds must be finite numbers")
        if good > moderate:
            raise InvalidArgumentError("gaps.good_below must be <= gaps.moderate_below")


@dataclass
class ExplorerConfig:
    data: DataSources = field(default_factory=DataSources)
    charts: ChartPolicy = field(default_factory=ChartPolicy)
    gaps: GapPolicy = field(default_factory=GapPolicy)

    @classmethod
    def load(cls, path: Path | None) -> ExplorerConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise InvalidArgumentError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise InvalidArgumentError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExplorerConfig:
        sections: dict[str, dict[str, Any]] = {}
        for name in ("data", "charts", "gaps"):
            section = data.get(name, {})
            if not isinstance(section, dict):
                raise InvalidArgumentError(f"[{name}] section must be a table")
            sections[name] = section
        try:
            return cls(
                data=DataSources(**sections["data"]),
                charts=ChartPolicy(**sections["charts"]),
                gaps=GapPolicy(**sections["gaps"]),
            )
        except TypeError as exc:
            raise InvalidArgumentError(f"Unknown config key: {exc}") from exc

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        mapping: dict[str, tuple[Any, str, Callable[[str], Any]]] = {
            "SWEEPSCOPE_DATA_DIR": (self.data, "directory", str),
            "SWEEPSCOPE_TOP_N": (self.charts, "top_n", int),
            "SWEEPSCOPE_TRAIN_TICK": (self.charts, "train_tick", float),
            "SWEEPSCOPE_VALID_TICK": (self.charts, "valid_tick", float),
            "SWEEPSCOPE_HEATMAP_WIDTH": (self.charts, "heatmap_width", int),
            "SWEEPSCOPE_HEATMAP_HEIGHT": (self.charts, "heatmap_height", int),
            "SWEEPSCOPE_GAP_GOOD": (self.gaps, "good_below", float),
            "SWEEPSCOPE_GAP_MODERATE": (self.gaps, "moderate_below", float),
        }
        for key, (target, attr, caster) in mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise InvalidArgumentError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(target, attr, value)

    def validate(self) -> None:
        self.data.validate()
        self.charts.validate()
        self.gaps.validate()


DEFAULT_CONFIG = ExplorerConfig()


def load_explorer_config(path: str | None) -> ExplorerConfig:
    config_path = Path(path) if path else None
    return ExplorerConfig.load(config_path)


__all__ = [
    "ChartPolicy",
    "DataSources",
    "ExplorerConfig",
    "GapPolicy",
    "DEFAULT_CONFIG",
    "load_explorer_config",
]
