from vedo import Plotter, Rectangle as VedoRect, Text3D

from typing import List, Optional, Sequence, Tuple

from okp.okp.models.geometry import Rect


palette = [
    'darkgreen', 'tomato', 'yellow', 'darkblue', 'darkviolet', 'indianred', 'yellowgreen', 'mediumblue', 'cyan',
    'indigo', 'pink', 'lime', 'sienna', 'plum', 'deepskyblue', 'forestgreen', 'fuchsia', 'brown',
    'turquoise', 'blueviolet', 'rosybrown', 'powderblue', 'steelblue', 'dodgerblue', 'slategray',
    'cornflowerblue', 'royalblue', 'midnightblue', 'navy', 'slateblue', 'mediumpurple', 'darkorchid',
]


def _flip_y(r: Rect, bin_h: float) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Decoder y grows downwards, vedo y grows upwards."""
    return (r.x, bin_h - r.y - r.height), (r.x + r.width, bin_h - r.y)


def plot_layout_debug(
    placed: Sequence[Rect],
    bin_dims: Tuple[int, int],
    free_rects: Optional[List[Rect]] = None,
    title: str = "OKP Debug View",
    show_labels: bool = True,
):
    """
    Visualizes:
      - Bin outline
      - Placed rectangles (cycled palette, optional R<i> labels)
      - Remaining free rectangles as red wireframes
    """
    W, H = bin_dims

    vp = Plotter(title=title, axes=dict(xtitle="Width (X)", ytitle="Height (Y)",
                                        xrange=(0, W), yrange=(0, H)), bg="white")

    vp += VedoRect((0, 0), (W, H), c="lightgray", alpha=0.4)

    for idx, r in enumerate(placed):
        p1, p2 = _flip_y(r, H)
        vp += VedoRect(p1, p2, c=palette[idx % len(palette)], alpha=0.8)
        if show_labels:
            cx = (p1[0] + p2[0]) / 2
            cy = (p1[1] + p2[1]) / 2
            vp += Text3D(f"R{idx}", pos=(cx, cy, 0.1), s=min(r.width, r.height) * 0.2,
                         c="black", justify="center")

    if free_rects:
        for r in free_rects:
            p1, p2 = _flip_y(r, H)
            vp += VedoRect(p1, p2, c="red").wireframe().lw(2)

    vp.show(interactive=True)
