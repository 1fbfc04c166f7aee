from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, origin at the top-left corner (y grows downwards)."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def area(self) -> int:
        return self.width * self.height

    def fits(self, width: int, height: int) -> bool:
        return self.width >= width and self.height >= height

    def __repr__(self) -> str:
        return f"Rect(pos=({self.x},{self.y}), size={self.width}x{self.height})"


#* Geometry utility functions

def overlaps(a: Rect, b: Rect) -> bool:
    """
    True only if there is positive-area intersection.
    Touching edges/corners is NOT overlap.
    """
    return not (
        a.x + a.width <= b.x or
        b.x + b.width <= a.x or
        a.y + a.height <= b.y or
        b.y + b.height <= a.y
    )


def inside_bin(a: Rect, bin_width: int, bin_height: int) -> bool:
    return (
        a.x >= 0 and a.y >= 0 and
        a.x + a.width <= bin_width and
        a.y + a.height <= bin_height
    )


def contains_rect(outer: Rect, inner: Rect) -> bool:
    """All four edges of inner lie inside-or-on the edges of outer."""
    return (
        inner.x >= outer.x and
        inner.y >= outer.y and
        inner.x + inner.width <= outer.x + outer.width and
        inner.y + inner.height <= outer.y + outer.height
    )


def is_feasible(candidate: Rect, placed: list[Rect], bin_width: int, bin_height: int) -> bool:
    return inside_bin(candidate, bin_width, bin_height) and not any(overlaps(candidate, p) for p in placed)
