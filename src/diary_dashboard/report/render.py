from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict
from datetime import date, datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import Any

import pandas as pd
from jinja2 import Environment, FileSystemLoader, select_autoescape

from diary_dashboard.report.views import DashboardViews, FilterOptions

LOGGER = logging.getLogger(__name__)

TABLE_COLUMNS = [
    ("source_date", "Дата"),
    ("event_name", "Событие"),
    ("location_normalized", "Локация"),
    ("information_source_type", "Источник"),
    ("confidence", "Достоверность"),
    ("description", "Описание"),
]


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if hasattr(value, "item"):
        try:
            value = value.item()
        except (TypeError, ValueError):
            pass
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    return value


def build_payload(views: DashboardViews, filter_options: FilterOptions) -> dict[str, Any]:
    payload = views.as_payload()
    payload["filter_options"] = asdict(filter_options)
    return _json_safe(payload)


def write_views_json(payload: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def render_dashboard(
    views: DashboardViews,
    filter_options: FilterOptions,
    out_dir: Path,
    figure_files: list[str] | None = None,
) -> Path:
    report_started = perf_counter()
    generated_at = datetime.now(timezone.utc).isoformat()
    template = _template_env().get_template("dashboard.html.j2")
    payload = build_payload(views, filter_options)

    max_count = max(views.charts["timeline"].values, default=0)
    rendered = template.render(
        generated_at=generated_at,
        views=views,
        filter_options=filter_options,
        table_columns=TABLE_COLUMNS,
        timeline_max=max(max_count, 1),
        chart_payload=payload["charts"],
        figure_files=sorted(figure_files or []),
    )

    report_path = out_dir / "dashboard.html"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(rendered, encoding="utf-8")
    write_views_json(payload, out_dir / "artifacts" / "views.json")

    runtime_metrics = {
        "generated_at": generated_at,
        "report_total_ms": round((perf_counter() - report_started) * 1000.0, 3),
        "report_html_bytes": int(report_path.stat().st_size),
        "table_rows": len(views.table),
    }
    write_views_json(runtime_metrics, out_dir / "artifacts" / "report_runtime.json")
    LOGGER.info("Dashboard written to %s", report_path)
    return report_path
