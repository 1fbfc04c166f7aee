# okp/okp/results/index.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from .writer import read_json, write_json


def load_index(path: Path) -> List[Dict[str, Any]]:
    """Entries of a run index; a missing or blank file is an empty index."""
    path = Path(path)
    if not path.exists() or not path.read_text(encoding="utf-8").strip():
        return []
    return read_json(path, expect=list)


def append_run(index_path: Path, entry: Dict[str, Any]) -> None:
    entries = load_index(index_path)
    entries.append(entry)
    write_json(entries, index_path)


def index_entry(run: Dict[str, Any], run_path: Path) -> Dict[str, Any]:
    best = run.get("best", {}) or {}
    return {
        "run_id": run.get("run_id", ""),
        "timestamp_utc": run.get("timestamp_utc", ""),
        "instance_id": run.get("dataset", {}).get("instance_id", ""),
        "path": str(run_path),
        "utilization": best.get("fitness"),
    }
