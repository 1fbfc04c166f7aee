from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from okp.okp.models.geometry import Rect, contains_rect, inside_bin, is_feasible
from okp.okp.models.items import Problem


def find_best_area_fit(
    free_rects: Sequence[Rect],
    width: int,
    height: int,
) -> Optional[Tuple[int, Rect]]:
    """
    Best-area-fit over every free rectangle and both orientations.

    Score is (free area - item area); the first strictly smaller score wins,
    so ties go to the earliest free rect and, inside one free rect, to the
    unrotated orientation. The candidate sits at the free rect's origin.
    Returns (free_rect_index, placed_rect) or None if nothing admits the item.
    """
    best: Optional[Tuple[int, Rect]] = None
    best_diff: Optional[int] = None
    item_area = width * height

    for idx, free in enumerate(free_rects):
        diff = free.area() - item_area
        for w, h in ((width, height), (height, width)):
            if not free.fits(w, h):
                continue
            if best_diff is None or diff < best_diff:
                best_diff = diff
                best = (idx, Rect(free.x, free.y, w, h))

    return best


def split_free_rect(
    free_rects: List[Rect],
    used_idx: int,
    placed: Rect,
    bin_width: int,
    bin_height: int,
) -> None:
    """
    Replace free_rects[used_idx] by its leftover strips (in place):
      - right strip: full height of the used rect, right of the placement
      - bottom strip: full width of the used rect, below the placement
    A strip is only kept when it stays inside the bin.
    """
    used = free_rects.pop(used_idx)

    new_rects: List[Rect] = []

    if placed.right < used.right:
        new_rects.append(Rect(placed.right, used.y, used.right - placed.right, used.height))

    if placed.bottom < used.bottom:
        new_rects.append(Rect(used.x, placed.bottom, used.width, used.bottom - placed.bottom))

    free_rects.extend(r for r in new_rects if inside_bin(r, bin_width, bin_height))


def prune_free_rects(free_rects: List[Rect]) -> None:
    """Drop every free rect that is contained in another one (in place)."""
    i = 0
    while i < len(free_rects):
        j = i + 1
        remove_i = False

        while j < len(free_rects):
            if contains_rect(free_rects[j], free_rects[i]):
                remove_i = True
                break
            if contains_rect(free_rects[i], free_rects[j]):
                free_rects.pop(j)
            else:
                j += 1

        if remove_i:
            free_rects.pop(i)
        else:
            i += 1


def utilization(placed: Sequence[Rect], problem: Problem) -> float:
    bin_area = problem.bin_area()
    used = sum(r.area() for r in placed)
    return (used / bin_area) if bin_area > 0 else 0.0


def decode_layout(
    chromosome: Sequence[int],
    problem: Problem,
) -> Tuple[List[Rect], List[int], List[Rect]]:
    """
    Greedy best-area-fit decode.

    Returns (placed, dropped, free_rects):
      placed     - placed rectangles in decode order
      dropped    - item indices that were switched on but did not fit
      free_rects - free list left after the last placement
    Items that do not fit (or fail the bounds/overlap check) are dropped
    silently; the lost area is how the GA learns to avoid them.
    """
    bin_w, bin_h = problem.bin_width, problem.bin_height
    n_items = len(problem.items)

    placed: List[Rect] = []
    dropped: List[int] = []
    free_rects: List[Rect] = [Rect(0, 0, bin_w, bin_h)]

    for i, gene in enumerate(chromosome):
        # genes past the item list are ignored
        if gene == 0 or i >= n_items:
            continue

        item = problem.items[i]
        fit = find_best_area_fit(free_rects, item.width, item.height)
        if fit is None:
            dropped.append(i)
            continue

        best_idx, cand = fit

        # free list is not trusted blindly
        if not is_feasible(cand, placed, bin_w, bin_h):
            dropped.append(i)
            continue

        placed.append(cand)
        split_free_rect(free_rects, best_idx, cand, bin_w, bin_h)
        prune_free_rects(free_rects)

    return placed, dropped, free_rects


def decode_chromosome(chromosome: Sequence[int], problem: Problem) -> Tuple[List[Rect], float]:
    """Pure function of (chromosome, problem): placed rectangles and area utilization."""
    placed, _, _ = decode_layout(chromosome, problem)
    return placed, utilization(placed, problem)
