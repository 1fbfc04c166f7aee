# okp/scripts/run_ga.py
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from okp.okp.data.problem_loader import ProblemLoaderError, load_problem
from okp.okp.decoders.best_area_fit import decode_layout
from okp.okp.ga.evaluate import EvalRec, evaluate_chromosome
from okp.okp.ga.genetic import GAParams, genetic_algorithm
from okp.okp.models.items import Problem
from okp.okp.results.index import append_run, index_entry
from okp.okp.results.schema import run_skeleton
from okp.okp.results.writer import layout_to_rows, run_out_path, write_run
from okp.configurations import (
    PLOT_DEBUG_VIEW,
    PLOT_LAYOUT,
    RESULTS_DIR_NAME,
    RESULTS_ROOT,
    SEED,
    WORKERS,
)


def build_parser() -> argparse.ArgumentParser:
    defaults = GAParams.from_config()
    p = argparse.ArgumentParser(description="2D-OKP-R genetic algorithm (single bin, free rotation)")
    p.add_argument("--file", required=True, help="problem JSON (Objects/Items with Length, Height, Demand)")
    p.add_argument("--pop", type=int, default=defaults.population_size, help="population_size")
    p.add_argument("--mutation", type=float, default=defaults.mutation_rate, help="mutation_rate")
    p.add_argument("--elitism", type=float, default=defaults.elitism_rate, help="elitism_rate")
    p.add_argument("--iterations", type=int, default=defaults.max_iterations, help="max_iterations")
    p.add_argument("--seed", type=int, default=SEED)
    p.add_argument("--workers", type=int, default=WORKERS)
    p.add_argument("--results", type=Path, default=Path(RESULTS_ROOT) / RESULTS_DIR_NAME,
                   help="where run JSON / PNG files go")
    p.add_argument("--no-write", action="store_true", help="print only, write nothing")
    p.add_argument("--verbose", action="store_true", help="print every generation")
    return p


def build_run(
    *,
    problem: Problem,
    source: str,
    params: GAParams,
    seed: Optional[int],
    result: Dict[str, Any],
    best: EvalRec,
) -> Dict[str, Any]:
    instance_id = problem.name or Path(source).stem

    run = run_skeleton(
        instance_id=instance_id,
        source_path=source,
        seed=seed,
        algo_params=params.to_dict(),
        bin_dims={"W": problem.bin_width, "H": problem.bin_height},
        n_items=len(problem.items),
    )
    run["progress"]["per_generation"] = [
        {k: (round(v, 6) if isinstance(v, float) else v) for k, v in row.items()}
        for row in result["progress"]
    ]
    run["best"] = {
        "chromosome": "".join(str(g) for g in result["best_chromosome"]),
        "fitness": round(result["best_fitness"], 6),
        "waste": round(1.0 - result["best_fitness"], 6),
        "layout": layout_to_rows(best.placed),
        "diagnostics": {
            "elapsed_sec": round(result["elapsed_sec"], 6),
            "placed_count": len(best.placed),
            "dropped_count": len(best.dropped),
            "skipped_count": best.chrom.count(0),
        },
    }
    return run


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    print(f"Loading problem from file: {args.file}")
    try:
        problem = load_problem(args.file)
    except ProblemLoaderError as e:
        print(f"Error loading JSON file '{args.file}': {e}", file=sys.stderr)
        return 1

    try:
        params = GAParams(
            population_size=args.pop,
            mutation_rate=args.mutation,
            elitism_rate=args.elitism,
            max_iterations=args.iterations,
        )
    except ValueError as e:
        print(f"Invalid GA parameters: {e}", file=sys.stderr)
        return 1

    print(f"Loaded problem: {problem.name or 'Unknown'}")
    print(f"Bin: {problem.bin_width}x{problem.bin_height}")
    print(f"Rectangles to pack: {len(problem.items)}")

    rng = random.Random(args.seed)
    result = genetic_algorithm(problem, params, rng, workers=args.workers, verbose=args.verbose)

    ga_sec = result["elapsed_sec"]
    print("\n=== PERFORMANCE METRICS ===")
    print(f"GA execution time: {ga_sec:.3f}s ({int(ga_sec * 1000)} ms)")

    print("\n=== FINAL RESULT ===")
    print(f"Best fitness: {result['best_fitness'] * 100:.2f}%")
    print(f"Waste percentage: {(1.0 - result['best_fitness']) * 100:.2f}%")

    best = evaluate_chromosome(result["best_chromosome"], problem)
    placed = best.placed
    print(f"Placed {len(placed)} rectangles:")
    for i, r in enumerate(placed):
        print(f"  Rect {i}: pos=({r.x}, {r.y}), size={r.width}x{r.height}")

    if args.no_write:
        return 0

    run = build_run(problem=problem, source=str(args.file), params=params, seed=args.seed,
                    result=result, best=best)
    out_path = run_out_path(args.results, run["dataset"]["instance_id"], run["run_id"])
    write_run(run, out_path)
    append_run(Path(args.results) / "run_index.json", index_entry(run, out_path))
    print(f"✅ run -> {out_path}")

    if PLOT_LAYOUT:
        from okp.okp.viz.render_layout import render_layout

        png = render_layout(placed, problem, out_path.with_suffix(".png"))
        print(f"🖼️ layout -> {png}")

    if PLOT_DEBUG_VIEW:
        from okp.okp.viz.debug_viz import plot_layout_debug

        _, _, free_rects = decode_layout(best.chrom, problem)
        plot_layout_debug(placed, (problem.bin_width, problem.bin_height), free_rects=free_rects)

    return 0


if __name__ == "__main__":
    sys.exit(main())
