from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from okp.okp.models.geometry import Rect
from okp.okp.models.items import Problem


def render_layout(
    placed: Sequence[Rect],
    problem: Problem,
    out_path: Path,
    title: str = "2D-OKP-R Genetic Algorithm",
    dpi: int = 120,
) -> Path:
    """
    Static image of one decoded layout: grey bin, purple placed rects with a
    dark-blue outline, and the placed/total and bin captions.
    Read-only with respect to its inputs.
    """
    W, H = problem.bin_width, problem.bin_height

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.add_patch(Rectangle((0, 0), W, H, facecolor="lightgray", edgecolor="black", linewidth=3))

    for r in placed:
        ax.add_patch(Rectangle(
            (r.x, r.y), r.width, r.height,
            facecolor="purple", edgecolor="darkblue", linewidth=2,
        ))

    ax.set_xlim(0, W)
    ax.set_ylim(0, H)
    ax.invert_yaxis()          # y grows downwards, like the decoder
    ax.set_aspect("equal")
    ax.set_title(title)

    fig.text(0.01, 0.97, f"Rectangles: {len(placed)}/{len(problem.items)}", fontsize=12)
    fig.text(0.01, 0.94, f"Bin: {W}x{H}", fontsize=12)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    return out_path
