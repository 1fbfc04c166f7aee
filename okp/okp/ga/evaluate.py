# okp/okp/ga/evaluate.py
from __future__ import annotations

from concurrent.futures import Executor, ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import List, Optional, Sequence, Tuple

from okp.okp.decoders.best_area_fit import decode_chromosome, decode_layout, utilization
from okp.okp.ga.population import Chromosome
from okp.okp.models.geometry import Rect
from okp.okp.models.items import Problem


# ============================================================
# Evaluated individual record (keeps everything needed for JSON)
# ============================================================
@dataclass
class EvalRec:
    chrom: Chromosome
    fitness: float           # maximize (area utilization)
    placed: List[Rect]
    dropped: List[int]       # item indices switched on but not placed

    def __repr__(self) -> str:
        return (
            "EvalRec("
            f"fitness={self.fitness:.4f}, "
            f"placed={len(self.placed)}, "
            f"dropped={len(self.dropped)}, "
            f"skipped={self.chrom.count(0)}"
            ")"
        )


def evaluate_chromosome(chrom: Sequence[int], problem: Problem) -> EvalRec:
    placed, dropped, _ = decode_layout(chrom, problem)
    return EvalRec(
        chrom=list(chrom),
        fitness=float(utilization(placed, problem)),
        placed=placed,
        dropped=dropped,
    )


def _fitness_only(chrom: Sequence[int], problem: Problem) -> float:
    _, fitness = decode_chromosome(chrom, problem)
    return fitness


def rank_chromosomes(
    population: Sequence[Chromosome],
    problem: Problem,
    workers: int = 1,
    executor: Optional[Executor] = None,
) -> List[Tuple[Chromosome, float]]:
    """
    Decode every individual and sort by fitness, best first.

    Individuals are independent, so they can be scored in a pool: pass a
    long-lived `executor` (one per GA run), or workers > 1 for a throwaway
    process pool. map() keeps population order, so the ranking is identical
    for any worker count.
    """
    score = partial(_fitness_only, problem=problem)
    chunksize = max(1, len(population) // (max(workers, 1) * 4))

    if executor is not None and len(population) > 1:
        fitnesses = list(executor.map(score, population, chunksize=chunksize))
    elif workers > 1 and len(population) > 1:
        with ProcessPoolExecutor(max_workers=workers) as ex:
            fitnesses = list(ex.map(score, population, chunksize=chunksize))
    else:
        fitnesses = [score(c) for c in population]

    ranked = [(list(c), float(f)) for c, f in zip(population, fitnesses)]
    ranked.sort(key=lambda r: r[1], reverse=True)
    return ranked
