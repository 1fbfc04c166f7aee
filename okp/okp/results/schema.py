# okp/okp/results/schema.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional


SCHEMA_VERSION = "1.0"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def make_run_id(timestamp_utc: str, seed: Optional[int], instance_id: str) -> str:
    # timestamp_utc like "2026-10-17T17:04:55.123456Z"
    ts = timestamp_utc.replace("-", "").replace(":", "").replace("T", "_").replace(".", "_").replace("Z", "")
    seed_tag = "noseed" if seed is None else f"seed{seed}"
    return f"{ts}_{seed_tag}_{instance_id}"


def run_skeleton(
    *,
    instance_id: str,
    source_path: str,
    seed: Optional[int],
    algo_params: Dict[str, Any],
    bin_dims: Dict[str, int],
    n_items: int,
) -> Dict[str, Any]:
    """Return an empty-but-valid run dict you will populate later."""
    ts = utc_now_iso()

    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": make_run_id(ts, seed, instance_id),
        "timestamp_utc": ts,
        "dataset": {
            "instance_id": instance_id,
            "source": source_path,
            "n_items": n_items,
        },
        "algorithm": {
            "name": "GA",
            "decoder": "best_area_fit",
            "seed": seed,
            "params": algo_params,
        },
        "objectives": {
            "utilization": {"name": "area_utilization", "sense": "max"},
        },
        "progress": {"per_generation": []},   # list[ {gen, gen_best, gen_mean, best_fitness, elapsed_sec} ]
        "best": {},                           # chromosome, fitness, layout, diagnostics
        "meta": {
            "bin": bin_dims,                  # {W,H}
            "notes": "",
        },
    }
