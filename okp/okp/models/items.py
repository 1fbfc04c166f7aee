from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Item:
    """One physical rectangle (expanded from demand). Identity is its index in Problem.items."""
    width: int
    height: int

    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class ItemRow:
    """One item record of the problem file, before demand expansion."""
    length: int
    height: int
    demand: int = 1


@dataclass(frozen=True)
class Problem:
    bin_width: int
    bin_height: int
    items: Tuple[Item, ...]
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Freeze items so a shared problem can't be changed under the workers.
        object.__setattr__(self, "items", tuple(self.items))

    def bin_area(self) -> int:
        return self.bin_width * self.bin_height

    def __repr__(self) -> str:
        return (
            "Problem("
            f"name={self.name!r}, "
            f"bin={self.bin_width}x{self.bin_height}, "
            f"items={len(self.items)}"
            ")"
        )


def expand_demands(rows: Sequence[ItemRow]) -> List[Item]:
    items: List[Item] = []
    for row in rows:
        for _ in range(row.demand):
            items.append(Item(width=row.length, height=row.height))
    return items


def build_problem(
    bin_width: int,
    bin_height: int,
    dims: Sequence[Tuple[int, int]],
    name: Optional[str] = None,
) -> Problem:
    """Shortcut for tests/scripts: items given as plain (width, height) pairs."""
    return Problem(
        bin_width=bin_width,
        bin_height=bin_height,
        items=tuple(Item(w, h) for w, h in dims),
        name=name,
    )
