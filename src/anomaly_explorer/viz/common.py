from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

DEFAULT_DPI = 100


def save_figure(path: Path, dpi: int = DEFAULT_DPI) -> Path:
    """Write the current figure to ``path`` and release it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    figure = plt.gcf()
    figure.tight_layout()
    figure.savefig(path, dpi=dpi)
    plt.close(figure)
    return path
