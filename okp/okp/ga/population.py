#
# okp/okp/ga/population.py
from __future__ import annotations

import random
from typing import List

Chromosome = List[int]  # one 0/1 gene per item, positional


def generate_chromosome(length: int, rng: random.Random) -> Chromosome:
    """
    All-ones genome with length // 10 random positions forced to 0
    (positions may repeat, so fewer zeros are possible).
    Starts the search from "pack almost everything".
    """
    chrom = [1] * length
    for _ in range(length // 10):
        chrom[rng.randrange(length)] = 0
    return chrom


def init_population(length: int, pop_size: int, rng: random.Random) -> List[Chromosome]:
    return [generate_chromosome(length, rng) for _ in range(pop_size)]


def describe_population(pop: List[Chromosome], limit: int = 10) -> None:
    """Debug print: genome and number of switched-off items per chromosome."""
    print(f"\n=== Population debug: pop={len(pop)} (printing {min(limit, len(pop))}) ===")
    for i, chrom in enumerate(pop[:limit]):
        off = [idx for idx, g in enumerate(chrom) if g == 0]
        print(f"Chromosome {i:02d}: {''.join(str(g) for g in chrom)}  off={off}")
