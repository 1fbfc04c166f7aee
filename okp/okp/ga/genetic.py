# okp/okp/ga/genetic.py
from __future__ import annotations

import random
from concurrent.futures import ProcessPoolExecutor
from dataclasses import asdict, dataclass
from time import perf_counter
from typing import Any, Dict, List, Optional

from okp.okp.ga.evaluate import rank_chromosomes
from okp.okp.ga.operators import (
    elite_count,
    elitism,
    mutation,
    roulette_selection,
    two_point_crossover,
)
from okp.okp.ga.population import Chromosome, describe_population, init_population
from okp.okp.models.items import Problem
from okp.configurations import (
    ELITISM_RATE,
    MAX_ITERATIONS,
    MUTATION_RATE,
    POP_SIZE,
    debug,
)


@dataclass(frozen=True)
class GAParams:
    population_size: int = POP_SIZE
    mutation_rate: float = MUTATION_RATE
    elitism_rate: float = ELITISM_RATE
    max_iterations: int = MAX_ITERATIONS

    def __post_init__(self) -> None:
        if self.population_size <= 0:
            raise ValueError(f"population_size must be > 0, got {self.population_size}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if not 0.0 <= self.elitism_rate <= 1.0:
            raise ValueError(f"elitism_rate must be in [0, 1], got {self.elitism_rate}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")

        # selection yields population_size // 2 pairs -> 2 children each
        n_children = 2 * (self.population_size // 2)
        if n_children < self.remainder:
            raise ValueError(
                f"population_size={self.population_size} with elitism_rate={self.elitism_rate} "
                f"needs {self.remainder} children but selection only yields {n_children}; "
                "use an even population_size or a non-zero elite count"
            )

    @property
    def n_elite(self) -> int:
        return elite_count(self.population_size, self.elitism_rate)

    @property
    def remainder(self) -> int:
        return self.population_size - self.n_elite

    @classmethod
    def from_config(cls) -> "GAParams":
        return cls(
            population_size=POP_SIZE,
            mutation_rate=MUTATION_RATE,
            elitism_rate=ELITISM_RATE,
            max_iterations=MAX_ITERATIONS,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ============================================================
# Main loop
# ============================================================
def genetic_algorithm(
    problem: Problem,
    params: GAParams,
    rng: Optional[random.Random] = None,
    *,
    workers: int = 1,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Returns:
      best_chromosome: best encoding seen in any generation ([] if none beat 0.0)
      best_fitness:    its utilization
      progress:        per-generation summary list
      elapsed_sec:     wall time of the whole run
    """
    if rng is None:
        rng = random.Random()

    t_run = perf_counter()

    population: List[Chromosome] = init_population(len(problem.items), params.population_size, rng)
    if debug:
        describe_population(population)

    best_chromosome: Chromosome = []
    best_fitness = 0.0
    progress: List[Dict[str, Any]] = []

    # one pool for the whole run, not one per generation
    pool = ProcessPoolExecutor(max_workers=workers) if workers > 1 and params.max_iterations > 0 else None
    try:
        for gen in range(params.max_iterations):
            t0 = perf_counter()

            # population is not touched until ranking returns
            ranked = rank_chromosomes(population, problem, workers=workers, executor=pool)

            gen_best = ranked[0][1]
            if gen_best > best_fitness:
                best_fitness = gen_best
                best_chromosome = list(ranked[0][0])

            parents = [chrom for chrom, _ in ranked]
            pairs = roulette_selection(parents, rng)
            children = two_point_crossover(pairs, rng)
            mutated_children = mutation(children, params.mutation_rate, rng)
            population = elitism(parents, mutated_children, params.elitism_rate, params.population_size)

            elapsed = perf_counter() - t0
            gen_mean = sum(f for _, f in ranked) / len(ranked)
            progress.append({
                "gen": gen,
                "gen_best": gen_best,
                "gen_mean": gen_mean,
                "best_fitness": best_fitness,
                "elapsed_sec": elapsed,
            })

            if debug or verbose:
                print(
                    f"🧬 Generation {gen}: best={gen_best:.4f} mean={gen_mean:.4f} "
                    f"best_ever={best_fitness:.4f} ({elapsed * 1000:.1f} ms)"
                )
    finally:
        if pool is not None:
            pool.shutdown()

    return {
        "best_chromosome": best_chromosome,
        "best_fitness": best_fitness,
        "progress": progress,
        "elapsed_sec": perf_counter() - t_run,
    }
