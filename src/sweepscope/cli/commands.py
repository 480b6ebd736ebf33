"""CLI command registration and handlers for SweepScope."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sweepscope.config import ExplorerConfig
from sweepscope.core.axis import AxisScale
from sweepscope.core.heatmap import render_heatmap
from sweepscope.core.state import SweepSession
from sweepscope.core.stats import format_statistics
from sweepscope.core.summaries import format_best_config, format_millions, missing_ratings
from sweepscope.io.documents import ExplorerDocuments, load_documents
from sweepscope.models import SweepResult


@dataclass(frozen=True)
class CLIContext:
    """Runtime hooks supplied by the top-level CLI entrypoint."""

    emit_success: Callable[..., None]
    config: Callable[[], ExplorerConfig]
    logger: logging.Logger
    json_enabled: Callable[[], bool]
    guard: Callable[[Callable[[argparse.Namespace], int]], Callable[[argparse.Namespace], int]]


def register_subcommands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ctx: CLIContext,
) -> dict[str, Callable[[argparse.Namespace], int]]:
    """Define CLI subcommands and return their handlers."""

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {}

    def _register(
        name: str,
        help_text: str | None,
        configure: Callable[[argparse.ArgumentParser], Callable[[argparse.Namespace], int]],
    ) -> None:
        parser = subparsers.add_parser(name, help=help_text)
        handler = configure(parser)
        handlers[name] = ctx.guard(handler)

    _register(
        "validate",
        "Load and validate the three documents in a data directory.",
        lambda parser: _configure_validate(parser, ctx),
    )
    _register(
        "summary",
        "Print sweep statistics, the top-N table and axis ticks.",
        lambda parser: _configure_summary(parser, ctx),
    )
    _register(
        "heatmap",
        "Describe the sparsity heatmap layout for the overview sample.",
        lambda parser: _configure_heatmap(parser, ctx),
    )
    _register(
        "explore",
        "Launch the desktop explorer (PyQt6).",
        lambda parser: _configure_explore(parser, ctx),
    )
    return handlers


def _add_data_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "data_dir",
        nargs="?",
        default=None,
        help="Directory holding the JSON documents (default: [data].directory from config)",
    )


def _load(args: argparse.Namespace, ctx: CLIContext) -> ExplorerDocuments:
    cfg = ctx.config()
    directory = Path(args.data_dir) if args.data_dir else Path(cfg.data.directory)
    ctx.logger.debug("Loading documents from %s", directory)
    return load_documents(directory, cfg.data)


def _configure_validate(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_data_dir(parser)

    def handler(args: argparse.Namespace) -> int:
        documents = _load(args, ctx)
        overview = documents.overview.metadata
        sweep = documents.sweep
        data = {
            "overview": {
                "n_users": overview.n_users,
                "n_movies": overview.n_movies,
                "rating_buckets": len(documents.overview.distributions.rating_counts),
                "missing_ratings": missing_ratings(overview),
            },
            "comparison": {
                "model_k": documents.comparison.model_info.k,
            },
            "sweep": {
                "results": len(sweep.results),
                "declared_combinations": sweep.metadata.total_combinations,
                "k_values": list(sweep.k_options),
            },
        }
        text = "\n".join(
            [
                f"overview: {overview.n_users:,} users x {overview.n_movies:,} movies, "
                f"{format_millions(missing_ratings(overview))} missing ratings",
                f"comparison: model k={documents.comparison.model_info.k}",
                f"sweep: {len(sweep.results)} results "
                f"({sweep.metadata.total_combinations} declared), "
                f"k in {list(sweep.k_options)}",
            ]
        )
        if len(sweep.results) != sweep.metadata.total_combinations:
            ctx.logger.warning(
                "Sweep declares %d combinations but holds %d results",
                sweep.metadata.total_combinations,
                len(sweep.results),
            )
        ctx.emit_success("validate", text=text, data=data)
        return 0

    return handler


def _result_row(rank: int, result: SweepResult) -> dict[str, Any]:
    return {
        "rank": rank,
        "k": result.k,
        "lambda_w": result.lambda_w,
        "lambda_z": result.lambda_z,
        "train_rmse": result.train_rmse,
        "valid_rmse": result.valid_rmse,
        "overfitting_gap": result.overfitting_gap,
    }


def _axis_payload(axis: AxisScale) -> dict[str, Any]:
    return {
        "domain": [axis.domain_min, axis.domain_max],
        "ticks": list(axis.ticks),
        "labels": list(axis.tick_labels()),
    }


def format_frontier_table(rows: list[dict[str, Any]]) -> str:
    header = f"{'#':>3}  {'k':>3}  {'λW':>8}  {'λZ':>8}  {'train':>7}  {'valid':>7}  {'gap':>7}"
    lines = [header]
    for row in rows:
        lines.append(
            f"{row['rank']:>3}  {row['k']:>3}  {row['lambda_w']:>8g}  {row['lambda_z']:>8g}  "
            f"{row['train_rmse']:>7.4f}  {row['valid_rmse']:>7.4f}  {row['overfitting_gap']:>7.4f}"
        )
    return "\n".join(lines)


def _configure_summary(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_data_dir(parser)
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Size of the best-by-validation table (default: [charts].top_n)",
    )

    def handler(args: argparse.Namespace) -> int:
        cfg = ctx.config()
        documents = _load(args, ctx)
        charts = cfg.charts
        if args.top is not None:
            charts = dataclasses.replace(charts, top_n=args.top)
            charts.validate()
        session = SweepSession(documents.sweep, charts, cfg.gaps)
        stats = session.statistics
        rows = [
            _result_row(position, result)
            for position, result in enumerate(session.frontier, start=1)
        ]
        best = documents.sweep.metadata.best_config
        data = {
            "statistics": stats.to_dict(),
            "total": len(session.results),
            "declared_combinations": documents.sweep.metadata.total_combinations,
            "top": rows,
            "best_config": {
                "k": best.k,
                "lambda_w": best.lambda_w,
                "lambda_z": best.lambda_z,
                "valid_rmse": best.valid_rmse,
            },
            "baseline_valid": documents.sweep.metadata.baseline_rmse.valid,
            "x_axis": _axis_payload(session.x_axis),
            "y_axis": _axis_payload(session.y_axis),
        }
        text = "\n\n".join(
            [
                format_best_config(best),
                format_statistics(stats, documents.sweep.metadata.total_combinations),
                format_frontier_table(rows),
                "train ticks: " + ", ".join(session.x_axis.tick_labels()),
                "valid ticks: " + ", ".join(session.y_axis.tick_labels()),
            ]
        )
        ctx.emit_success("summary", text=text, data=data)
        return 0

    return handler


def _configure_heatmap(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_data_dir(parser)
    parser.add_argument("--width", type=float, default=None, help="Canvas width in pixels")
    parser.add_argument("--height", type=float, default=None, help="Canvas height in pixels")

    def handler(args: argparse.Namespace) -> int:
        cfg = ctx.config()
        documents = _load(args, ctx)
        width = args.width if args.width is not None else cfg.charts.heatmap_width
        height = args.height if args.height is not None else cfg.charts.heatmap_height
        render = render_heatmap(documents.overview.sparsity_sample.matrix, width, height)
        missing = sum(1 for cell in render.cells if cell.missing)
        data = {
            "rows": render.rows,
            "cols": render.cols,
            "width": render.width,
            "height": render.height,
            "cell_width": render.cell_width,
            "cell_height": render.cell_height,
            "max_value": render.max_value,
            "missing_cells": missing,
            "placeholder": render.placeholder,
        }
        if render.is_placeholder:
            text = str(render.placeholder)
        else:
            text = (
                f"{render.rows}x{render.cols} cells of {render.cell_width:.2f}x"
                f"{render.cell_height:.2f}px, max {render.max_value:g}, "
                f"{missing} missing"
            )
        ctx.emit_success("heatmap", text=text, data=data)
        return 0

    return handler


def _configure_explore(
    parser: argparse.ArgumentParser, ctx: CLIContext
) -> Callable[[argparse.Namespace], int]:
    _add_data_dir(parser)

    def handler(args: argparse.Namespace) -> int:
        from sweepscope.explorer.app import run_explorer

        return int(run_explorer(args.data_dir, config=ctx.config()))

    return handler


__all__ = ["CLIContext", "format_frontier_table", "register_subcommands"]
