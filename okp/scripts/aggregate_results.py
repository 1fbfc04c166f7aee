from __future__ import annotations

import csv
import json
import sys
from pathlib import Path
from statistics import mean, median, stdev
from typing import Any, Dict, List, Optional, Tuple

from openpyxl import Workbook

from okp.okp.results.writer import write_json
from okp.configurations import RESULTS_DIR_NAME, RESULTS_ROOT

# ---- CONFIG ----
RESULTS_DIR = Path(RESULTS_ROOT) / RESULTS_DIR_NAME
OUT_FILE_NAME = RESULTS_DIR_NAME
SUMMARY_DIR_NAME = "_summary"

FLAT_FIELDS = [
    "instance_id", "run_id", "seed",
    "population_size", "mutation_rate", "elitism_rate", "max_iterations",
    "utilization", "placed", "dropped", "skipped", "generations", "elapsed",
    "timestamp_utc",
]


def _safe_get(d: Dict[str, Any], keys: List[str], default=None):
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def read_run(path: Path) -> Optional[Dict[str, Any]]:
    """
    Read one run json and extract the metrics we care about.
    Returns None if the file is not a run document.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"[read_run] Invalid JSON in {path}: {e}")
        return None

    if not isinstance(data, dict) or "run_id" not in data:
        return None

    try:
        best = data["best"]
        diag = best["diagnostics"]
        params = data["algorithm"]["params"]
        return {
            "instance_id": data["dataset"]["instance_id"],
            "run_id": data["run_id"],
            "seed": _safe_get(data, ["algorithm", "seed"], ""),
            "population_size": int(params["population_size"]),
            "mutation_rate": float(params["mutation_rate"]),
            "elitism_rate": float(params["elitism_rate"]),
            "max_iterations": int(params["max_iterations"]),
            "utilization": float(best["fitness"]),
            "placed": int(diag["placed_count"]),
            "dropped": int(diag["dropped_count"]),
            "skipped": int(diag["skipped_count"]),
            "generations": len(_safe_get(data, ["progress", "per_generation"], []) or []),
            "elapsed": float(diag["elapsed_sec"]),
            "timestamp_utc": data.get("timestamp_utc", ""),
        }
    except KeyError as e:
        print(f"[read_run] Missing key {e} in {path}")
    except (TypeError, ValueError) as e:
        print(f"[read_run] Bad value in {path}: {e}")
    return None


def write_xlsx(path: Path, rows: List[Dict[str, Any]], fieldnames: List[str], sheet_name: str = "data") -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    ws.append(fieldnames)
    for r in rows:
        ws.append([r.get(h, "") for h in fieldnames])

    wb.save(path)


def write_csv(path: Path, rows: List[Dict[str, Any]], fieldnames: List[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in rows:
            w.writerow({k: r.get(k, "") for k in fieldnames})


def std(vals):
    return stdev(vals) if len(vals) > 1 else 0.0


def col(rows, name):
    return [float(r[name]) for r in rows]


def _stats(rows: List[Dict[str, Any]], name: str, label: str, ndigits: int) -> Dict[str, float]:
    vals = col(rows, name)
    return {
        f"mean_{label}": round(mean(vals), ndigits),
        f"median_{label}": round(median(vals), ndigits),
        f"std_{label}": round(std(vals), ndigits),
        f"min_{label}": round(min(vals), ndigits),
        f"max_{label}": round(max(vals), ndigits),
    }


def summary_fields() -> List[str]:
    out = ["instance_id", "n"]
    for label in ("util", "placed", "dropped", "time_sec"):
        out += [f"{s}_{label}" for s in ("mean", "median", "std", "min", "max")]
    return out


def aggregate_results(
    results_root: Path = RESULTS_DIR,
    out_dir: Optional[Path] = None,
    out_name: str = OUT_FILE_NAME,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Produces:
      - flat table: one row per run file
      - summary table: one row per instance with mean/median/std/min/max
    Written as JSON, CSV and XLSX under out_dir (default <results_root>/_summary).
    Returns (flat_rows, summary_rows).
    """
    results_root = Path(results_root)
    out_dir = Path(out_dir) if out_dir is not None else results_root / SUMMARY_DIR_NAME

    flat_rows: List[Dict[str, Any]] = []
    for path in sorted(results_root.rglob("*.json")):
        if SUMMARY_DIR_NAME in path.parts or path.name == "run_index.json":
            continue
        r = read_run(path)
        if r is not None:
            flat_rows.append(r)

    by_instance: Dict[str, List[Dict[str, Any]]] = {}
    for r in flat_rows:
        by_instance.setdefault(r["instance_id"], []).append(r)

    summary_rows: List[Dict[str, Any]] = []
    for instance_id in sorted(by_instance):
        rows = by_instance[instance_id]
        row: Dict[str, Any] = {"instance_id": instance_id, "n": len(rows)}
        row.update(_stats(rows, "utilization", "util", 6))
        row.update(_stats(rows, "placed", "placed", 4))
        row.update(_stats(rows, "dropped", "dropped", 4))
        row.update(_stats(rows, "elapsed", "time_sec", 6))
        summary_rows.append(row)

    # ---- WRITE OUTPUTS ----
    out_dir.mkdir(parents=True, exist_ok=True)

    write_json(flat_rows, out_dir / f"{out_name}_flat.json")
    write_csv(out_dir / f"{out_name}_flat.csv", flat_rows, FLAT_FIELDS)
    write_xlsx(out_dir / f"{out_name}_flat.xlsx", flat_rows, FLAT_FIELDS, sheet_name="flat")

    fields = summary_fields()
    write_json(summary_rows, out_dir / f"{out_name}_summary.json")
    write_csv(out_dir / f"{out_name}_summary.csv", summary_rows, fields)
    write_xlsx(out_dir / f"{out_name}_summary.xlsx", summary_rows, fields, sheet_name="summary")

    print(f"Wrote {len(flat_rows)} runs / {len(summary_rows)} instances to {out_dir}")
    return flat_rows, summary_rows


if __name__ == "__main__":
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else RESULTS_DIR
    aggregate_results(root)
