from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from diary_dashboard.config import AppConfig
from diary_dashboard.features.filters import FilterState, apply_filters
from diary_dashboard.features.sorting import SortState
from diary_dashboard.io.write import write_events_csv
from diary_dashboard.paths import build_output_paths
from diary_dashboard.pipeline.dataset import Dataset, load_dataset
from diary_dashboard.preprocess.labels import LabelCatalog
from diary_dashboard.report.render import render_dashboard
from diary_dashboard.report.views import DashboardViews, build_filter_options, build_views
from diary_dashboard.viz.distributions import plot_distribution
from diary_dashboard.viz.time_series import plot_weekly_timeline

LOGGER = logging.getLogger(__name__)

DISTRIBUTION_CHARTS = ("category", "location", "source", "confidence")


def render_figures(views: DashboardViews, figures_dir: Path, figure_suffix: str) -> list[str]:
    suffix = str(figure_suffix or "").strip().lstrip(".") or "png"
    written = [plot_weekly_timeline(views.timeline, figures_dir / f"timeline.{suffix}")]
    for chart_id in DISTRIBUTION_CHARTS:
        written.append(
            plot_distribution(views.charts[chart_id], figures_dir / f"{chart_id}.{suffix}")
        )
    return [path.name for path in written]


def run_report(
    out_dir: Path,
    config: AppConfig,
    filters: FilterState | None = None,
    sort: SortState | None = None,
    *,
    dataset: Dataset | None = None,
) -> Path:
    dataset = dataset if dataset is not None else load_dataset(config)
    filters = filters or FilterState()
    sort = sort or SortState()
    paths = build_output_paths(out_dir)

    views = build_views(dataset, filters, sort, config)
    figure_files: list[str] = []
    if config.outputs.render_figures:
        figure_files = render_figures(views, paths.figures, config.outputs.figures_format)

    labels = LabelCatalog.from_config(config.labels)
    return render_dashboard(
        views=views,
        filter_options=build_filter_options(dataset, labels),
        out_dir=paths.root,
        figure_files=figure_files,
    )


def run_export(
    out_dir: Path,
    config: AppConfig,
    filters: FilterState | None = None,
    *,
    dataset: Dataset | None = None,
    today: date | None = None,
) -> Path | None:
    dataset = dataset if dataset is not None else load_dataset(config)
    filtered = apply_filters(dataset.events, filters or FilterState())
    paths = build_output_paths(out_dir)
    return write_events_csv(
        filtered,
        paths.exports,
        LabelCatalog.from_config(config.labels),
        prefix=config.export.file_prefix,
        today=today,
    )
