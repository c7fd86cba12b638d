from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from diary_dashboard.report.views import ChartSeries
from diary_dashboard.viz.common import empty_placeholder, save_figure

CHART_TITLES = {
    "category": "Категории событий",
    "location": "Топ локаций",
    "source": "Типы источников",
    "confidence": "Достоверность",
}


def plot_distribution(series: ChartSeries, output_path: Path) -> Path:
    height = max(2.5, 0.45 * len(series.labels) + 1.0)
    plt.figure(figsize=(8, height))
    if not series.labels:
        empty_placeholder("Нет данных")
        return save_figure(output_path)

    # first entry on top
    labels = list(reversed(series.labels))
    values = list(reversed(series.values))
    plt.barh(labels, values, color="#2563eb")
    plt.title(CHART_TITLES.get(series.chart_id, series.chart_id))
    plt.xlabel("Событий")
    return save_figure(output_path)
