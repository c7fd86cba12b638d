from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    figures: Path
    exports: Path
    artifacts: Path


def build_output_paths(out_dir: Path) -> OutputPaths:
    paths = OutputPaths(
        root=out_dir,
        figures=out_dir / "figures",
        exports=out_dir / "exports",
        artifacts=out_dir / "artifacts",
    )
    for path in (paths.root, paths.figures, paths.exports, paths.artifacts):
        path.mkdir(parents=True, exist_ok=True)
    return paths
