from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from diary_dashboard.report.views import TimelinePoint
from diary_dashboard.viz.common import empty_placeholder, save_figure

MAX_TICK_LABELS = 15


def plot_weekly_timeline(points: Sequence[TimelinePoint], output_path: Path) -> Path:
    plt.figure(figsize=(12, 4))
    if not points:
        empty_placeholder("Нет данных")
        return save_figure(output_path)

    positions = np.arange(len(points))
    counts = [point.count for point in points]
    plt.plot(positions, counts, color="#2563eb", linewidth=1.5)
    plt.fill_between(positions, counts, color="#2563eb", alpha=0.1)

    step = max(1, int(np.ceil(len(points) / MAX_TICK_LABELS)))
    plt.xticks(
        positions[::step],
        [point.label for point in points][::step],
        rotation=70,
    )
    plt.ylim(bottom=0)
    plt.title("Количество событий по неделям")
    plt.ylabel("Событий")
    return save_figure(output_path)
