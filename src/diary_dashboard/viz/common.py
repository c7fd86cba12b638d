from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

FIGURE_DPI = 120


def save_figure(path: Path, dpi: int = FIGURE_DPI) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=dpi)
    plt.close()
    return path


def empty_placeholder(message: str) -> None:
    plt.text(0.5, 0.5, message, ha="center", va="center")
    plt.axis("off")
