# okp/okp/data/problem_loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from okp.okp.models.items import ItemRow, Problem, expand_demands


class ProblemLoaderError(RuntimeError):
    pass


def _as_int(row: Dict[str, Any], key: str, where: str) -> int:
    if key not in row:
        raise ProblemLoaderError(f"Missing '{key}' in {where}")
    v = row[key]
    # bool is an int subclass; "true" is not a dimension
    if not isinstance(v, int) or isinstance(v, bool):
        raise ProblemLoaderError(f"'{key}' must be int, got {type(v).__name__} in {where}")
    return v


def parse_problem(data: Any, source: str = "<memory>") -> Problem:
    """
    Build a Problem from an already-decoded JSON document:

        {
          "Name": "...",                                  (optional)
          "Objects": [{"Length": W, "Height": H}],        (first entry is the bin)
          "Items":   [{"Length": w, "Height": h, "Demand": d}, ...]
        }

    Demand defaults to 1 and expands into d identical items; Demand 0 adds
    none. A document without "Items" is an empty problem.
    """
    if not isinstance(data, dict):
        raise ProblemLoaderError(f"Expected top-level object in {source}")

    objects = data.get("Objects")
    if not isinstance(objects, list) or not objects or not isinstance(objects[0], dict):
        raise ProblemLoaderError(f"Expected non-empty 'Objects' list in {source}")

    bin_row = objects[0]
    bin_w = _as_int(bin_row, "Length", f"bin of {source}")
    bin_h = _as_int(bin_row, "Height", f"bin of {source}")
    if bin_w <= 0 or bin_h <= 0:
        raise ProblemLoaderError(f"Non-positive bin dims {bin_w}x{bin_h} in {source}")

    items = data.get("Items")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise ProblemLoaderError(f"Expected 'Items' list in {source}")

    rows: List[ItemRow] = []
    for i, row in enumerate(items):
        where = f"item #{i} of {source}"
        if not isinstance(row, dict):
            raise ProblemLoaderError(f"Item #{i} is not an object in {source}")

        L = _as_int(row, "Length", where)
        H = _as_int(row, "Height", where)
        D = _as_int(row, "Demand", where) if "Demand" in row else 1

        if L <= 0 or H <= 0:
            raise ProblemLoaderError(f"Non-positive dims in {where}")
        if D < 0:
            raise ProblemLoaderError(f"Negative demand in {where}")

        rows.append(ItemRow(length=L, height=H, demand=D))

    name = data.get("Name")
    return Problem(
        bin_width=bin_w,
        bin_height=bin_h,
        items=tuple(expand_demands(rows)),
        name=name if isinstance(name, str) else None,
    )


def load_problem(path: str | Path) -> Problem:
    src = Path(path)
    if not src.exists():
        raise ProblemLoaderError(f"File not found: {src}")

    try:
        data = json.loads(src.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProblemLoaderError(f"Invalid JSON: {src} ({e})") from e

    return parse_problem(data, source=str(src))
