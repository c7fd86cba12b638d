from __future__ import annotations

from pathlib import Path

import typer

from diary_dashboard.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from diary_dashboard.features.filters import FilterState, normalize_filters
from diary_dashboard.features.sorting import SortState
from diary_dashboard.io.read import DatasetLoadError
from diary_dashboard.io.schema import SORTABLE_COLUMNS
from diary_dashboard.logging import configure_logging
from diary_dashboard.pipeline.dataset import Dataset, load_dataset
from diary_dashboard.pipeline.run_all import run_export, run_report
from diary_dashboard.preprocess.labels import LabelCatalog
from diary_dashboard.report.views import build_filter_options, event_detail

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _load_dataset_or_exit(cfg: AppConfig) -> Dataset:
    try:
        return load_dataset(cfg)
    except DatasetLoadError as exc:
        typer.echo(f"Ошибка загрузки данных: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _build_filters(
    month: str,
    category: str,
    location: str,
    source: str,
    confidence: str,
    search: str,
) -> FilterState:
    return normalize_filters(
        {
            "month": month,
            "category": category,
            "location": location,
            "source": source,
            "confidence": confidence,
            "search": search,
        }
    )


def _build_sort(column: str, direction: str) -> SortState:
    try:
        return SortState(column=column, direction=direction)  # type: ignore[arg-type]
    except ValueError as exc:
        raise typer.BadParameter(
            f"{exc}. Columns: {', '.join(SORTABLE_COLUMNS)}; directions: asc, desc"
        ) from exc


@app.command()
def report(
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    month: str = typer.Option("", help="Month key, e.g. 1849-03."),
    category: str = typer.Option("", help="Event id prefix with trailing underscore, e.g. RU_."),
    location: str = typer.Option("", help="Exact normalized location."),
    source: str = typer.Option("", help="Exact information source type."),
    confidence: str = typer.Option("", help="High, Medium or Low."),
    search: str = typer.Option("", help="Case-insensitive substring search."),
    sort_column: str = typer.Option("source_date", help="Table sort column."),
    sort_direction: str = typer.Option("asc", help="Table sort direction: asc or desc."),
) -> None:
    """Render the HTML dashboard for the current filter and sort state."""
    configure_logging()
    cfg = _load_app_config(config)
    filters = _build_filters(month, category, location, source, confidence, search)
    sort = _build_sort(sort_column, sort_direction)
    dataset = _load_dataset_or_exit(cfg)
    report_path = run_report(out_dir=out, config=cfg, filters=filters, sort=sort, dataset=dataset)
    typer.echo(f"Dashboard written to: {report_path}")


@app.command()
def export(
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    month: str = typer.Option("", help="Month key, e.g. 1849-03."),
    category: str = typer.Option("", help="Event id prefix with trailing underscore, e.g. RU_."),
    location: str = typer.Option("", help="Exact normalized location."),
    source: str = typer.Option("", help="Exact information source type."),
    confidence: str = typer.Option("", help="High, Medium or Low."),
    search: str = typer.Option("", help="Case-insensitive substring search."),
) -> None:
    """Export the filtered events as a UTF-8 CSV file."""
    configure_logging()
    cfg = _load_app_config(config)
    filters = _build_filters(month, category, location, source, confidence, search)
    dataset = _load_dataset_or_exit(cfg)
    export_path = run_export(out_dir=out, config=cfg, filters=filters, dataset=dataset)
    if export_path is None:
        typer.echo("Нет данных для экспорта")
        return
    typer.echo(f"Export written to: {export_path}")


@app.command()
def event(
    unique_id: str = typer.Argument(..., help="Row identifier shown in the dashboard table."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Show the full details of one event."""
    configure_logging()
    cfg = _load_app_config(config)
    dataset = _load_dataset_or_exit(cfg)
    labels = LabelCatalog.from_config(cfg.labels)
    detail = event_detail(dataset, unique_id, labels)
    if detail is None:
        typer.echo(f"Событие не найдено: {unique_id}", err=True)
        raise typer.Exit(code=1)

    typer.echo(detail.title)
    typer.echo(f"Дата: {detail.date_display}")
    typer.echo(f"Описание: {detail.description}")
    typer.echo(f'Фрагмент текста: "{detail.text_fragment}"')
    typer.echo(f"Локация: {detail.location}")
    typer.echo(f"Источник информации: {detail.source}")
    typer.echo(f"Краткий контекст: {detail.brief_context}")
    typer.echo(f"Ключевые слова: {', '.join(detail.keywords)}")


@app.command()
def filters(
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """List the values available for each filter."""
    configure_logging()
    cfg = _load_app_config(config)
    dataset = _load_dataset_or_exit(cfg)
    labels = LabelCatalog.from_config(cfg.labels)
    options = build_filter_options(dataset, labels)
    for key, values in (
        ("month", options.months),
        ("category", options.categories),
        ("location", options.locations),
        ("source", options.sources),
        ("confidence", options.confidence),
    ):
        typer.echo(f"{labels.filter_name(key)} ({key}):")
        for option in values:
            typer.echo(f"  {option.value}\t{option.label}")


if __name__ == "__main__":
    app()
