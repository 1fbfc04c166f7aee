# okp/okp/results/writer.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from okp.okp.models.geometry import Rect


def read_json(path: Path, expect: Optional[type] = None) -> Any:
    """Load a results file; `expect` checks the top-level JSON type (list / dict)."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if expect is not None and not isinstance(data, expect):
        raise ValueError(f"{path}: expected a JSON {expect.__name__}, got {type(data).__name__}")
    return data


def write_json(obj: Any, path: Path) -> Path:
    # stable, diff-friendly output: sorted keys, 2-space indent, trailing newline
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)
    path.write_text(text + "\n", encoding="utf-8")
    return path


def run_out_path(results_root: Path, instance_id: str, run_id: str) -> Path:
    """<results_root>/<instance_id>/<run_id>.json"""
    return Path(results_root) / instance_id / f"{run_id}.json"


def layout_to_rows(placed: Sequence[Rect]) -> List[Dict[str, int]]:
    return [{"x": r.x, "y": r.y, "w": r.width, "h": r.height} for r in placed]


def write_run(run: Dict[str, Any], out_path: Path) -> Path:
    if not run.get("run_id"):
        raise ValueError("run document has no run_id")
    return write_json(run, out_path)
