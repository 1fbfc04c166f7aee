# okp/okp/ga/operators.py
from __future__ import annotations

import math
import random
from typing import List, Sequence, Tuple

from okp.okp.ga.population import Chromosome

Pair = Tuple[Chromosome, Chromosome]


# ============================================================
# Selection: rank-biased stochastic pairing
# ============================================================
def roulette_selection(parents: Sequence[Chromosome], rng: random.Random) -> List[Pair]:
    """
    len(parents) // 2 pairs from a parent list sorted best-first.

    For every pair each parent i gets a fresh weight (i + 1) * U(0,1) and the
    two highest weights form the pair. The weight scale grows with the list
    position, so later (lower-ranked) parents get the larger expected weight;
    elitism is what carries the best ones forward.
    """
    n = len(parents)
    pairs: List[Pair] = []

    for _ in range(n // 2):
        weights = [(i + 1) * rng.random() for i in range(n)]
        order = sorted(range(n), key=lambda i: weights[i], reverse=True)
        pairs.append((list(parents[order[0]]), list(parents[order[1]])))

    return pairs


# ============================================================
# Crossover
# ============================================================
def two_point_crossover(pairs: Sequence[Pair], rng: random.Random) -> List[Chromosome]:
    """Two children per pair; equal cut points swap nothing."""
    children: List[Chromosome] = []

    for p1, p2 in pairs:
        n = len(p1)
        if n == 0:
            children.extend([list(p1), list(p2)])
            continue

        r1 = rng.randrange(n)
        r2 = rng.randrange(n)
        start, end = (r1, r2) if r1 < r2 else (r2, r1)

        children.append(list(p1[:start]) + list(p2[start:end]) + list(p1[end:]))
        children.append(list(p2[:start]) + list(p1[start:end]) + list(p2[end:]))

    return children


# ============================================================
# Mutation
# ============================================================
def mutation(chromosomes: Sequence[Chromosome], rate: float, rng: random.Random) -> List[Chromosome]:
    """Independent bit flip per gene with probability `rate`. Input is not modified."""
    out: List[Chromosome] = []
    for chrom in chromosomes:
        out.append([(1 - g) if rng.random() < rate else g for g in chrom])
    return out


# ============================================================
# Elitism / next generation
# ============================================================
def elite_count(population_size: int, rate: float) -> int:
    # half rounds up (2.5 -> 3), not to even
    return int(math.floor(population_size * rate + 0.5))


def elitism(
    parents: Sequence[Chromosome],
    children: Sequence[Chromosome],
    rate: float,
    population_size: int,
) -> List[Chromosome]:
    """
    Best round(population_size * rate) ranked parents, unchanged, followed by
    the first children up to population_size.
    """
    n_elite = elite_count(population_size, rate)
    remaining = population_size - n_elite

    if n_elite > len(parents):
        raise ValueError(f"elitism needs {n_elite} parents, got {len(parents)}")
    if remaining < 0:
        raise ValueError(f"elite count {n_elite} exceeds population_size={population_size}")
    if remaining > len(children):
        raise ValueError(f"elitism needs {remaining} children, got {len(children)}")

    return [list(c) for c in parents[:n_elite]] + [list(c) for c in children[:remaining]]
