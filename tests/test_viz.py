from __future__ import annotations

from datetime import date
from pathlib import Path

from diary_dashboard.report.views import ChartSeries, TimelinePoint
from diary_dashboard.viz.distributions import plot_distribution
from diary_dashboard.viz.time_series import plot_weekly_timeline


def test_plot_weekly_timeline_writes_file(tmp_path: Path) -> None:
    points = [
        TimelinePoint(week_start=date(1849, 1, 1), label="01.01–07.01", count=2),
        TimelinePoint(week_start=date(1849, 1, 8), label="08.01–14.01", count=0),
        TimelinePoint(week_start=date(1849, 1, 15), label="15.01–21.01", count=1),
    ]
    output_path = tmp_path / "timeline.png"
    result = plot_weekly_timeline(points, output_path)
    assert result == output_path
    assert output_path.exists()


def test_plot_distribution_writes_file_for_data_and_empty_series(tmp_path: Path) -> None:
    series = ChartSeries.from_counts("category", {"Революции 1848-49": 2, "Прочее": 1})
    output_path = tmp_path / "category.png"
    assert plot_distribution(series, output_path) == output_path
    assert output_path.exists()

    empty_path = tmp_path / "empty.png"
    assert plot_distribution(ChartSeries.from_counts("source", {}), empty_path) == empty_path
    assert empty_path.exists()


def test_plot_weekly_timeline_handles_empty_dataset(tmp_path: Path) -> None:
    output_path = tmp_path / "nested" / "timeline.png"
    assert plot_weekly_timeline([], output_path) == output_path
    assert output_path.exists()
