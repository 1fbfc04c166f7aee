import random

import pytest

from okp.okp.ga.operators import (
    elite_count,
    elitism,
    mutation,
    roulette_selection,
    two_point_crossover,
)
from okp.okp.ga.population import generate_chromosome, init_population


def _distinct_parents(n, length=6):
    return [[int(b) for b in format(i, f"0{length}b")] for i in range(n)]


def test_generate_chromosome_is_mostly_ones(rng):
    for _ in range(50):
        chrom = generate_chromosome(25, rng)
        assert len(chrom) == 25
        assert set(chrom) <= {0, 1}
        assert 23 <= sum(chrom) <= 25


def test_generate_chromosome_short_is_all_ones(rng):
    assert generate_chromosome(9, rng) == [1] * 9
    assert generate_chromosome(0, rng) == []


def test_init_population_shape(rng):
    pop = init_population(12, 30, rng)
    assert len(pop) == 30
    assert all(len(c) == 12 for c in pop)


def test_selection_pair_count(rng):
    assert len(roulette_selection(_distinct_parents(10), rng)) == 5
    assert len(roulette_selection(_distinct_parents(7), rng)) == 3
    assert roulette_selection(_distinct_parents(1), rng) == []


def test_selection_pairs_two_different_parents(rng):
    parents = _distinct_parents(10)
    for a, b in roulette_selection(parents, rng):
        assert a in parents and b in parents
        assert a != b


class ConstRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_selection_weight_grows_with_list_position():
    parents = [[i] for i in range(6)]
    pairs = roulette_selection(parents, ConstRng(0.5))
    assert pairs == [([5], [4])] * 3


def test_selection_draws_later_positions_more_often():
    rng = random.Random(5)
    parents = _distinct_parents(10)
    hits = [0] * len(parents)
    for _ in range(300):
        for a, b in roulette_selection(parents, rng):
            hits[parents.index(a)] += 1
            hits[parents.index(b)] += 1
    assert hits[-1] > hits[0]
    assert sum(hits[5:]) > sum(hits[:5])


def test_selection_returns_copies(rng):
    parents = _distinct_parents(4)
    pairs = roulette_selection(parents, rng)
    pairs[0][0][0] = 7
    assert all(7 not in p for p in parents)


def test_crossover_swaps_middle_segment(fixed_rng):
    p1, p2 = [0] * 8, [1] * 8
    children = two_point_crossover([(p1, p2)], fixed_rng([5, 2]))
    assert children == [
        [0, 0, 1, 1, 1, 0, 0, 0],
        [1, 1, 0, 0, 0, 1, 1, 1],
    ]


def test_crossover_equal_cut_points_copy_parents(fixed_rng):
    p1, p2 = [0, 1, 0, 1, 1], [1, 1, 0, 0, 0]
    assert two_point_crossover([(p1, p2)], fixed_rng([3, 3])) == [p1, p2]


def test_crossover_two_children_per_pair(rng):
    pop = init_population(15, 10, rng)
    pairs = list(zip(pop[::2], pop[1::2]))
    children = two_point_crossover(pairs, rng)
    assert len(children) == 2 * len(pairs)
    assert all(len(c) == 15 for c in children)


def test_crossover_preserves_gene_positions(rng):
    p1 = [0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    p2 = [1, 1, 1, 1, 1, 1, 1, 1, 1, 1]
    for _ in range(50):
        a, b = two_point_crossover([(p1, p2)], rng)
        # together the two children hold exactly one gene of each parent per locus
        assert all(x + y == 1 for x, y in zip(a, b))


def test_mutation_rate_zero_and_one(rng):
    chroms = [[1, 0, 1, 1], [0, 0, 0, 1]]
    assert mutation(chroms, 0.0, rng) == chroms
    assert mutation(chroms, 1.0, rng) == [[0, 1, 0, 0], [1, 1, 1, 0]]
    assert chroms == [[1, 0, 1, 1], [0, 0, 0, 1]]


def test_mutation_flips_about_rate():
    rng = random.Random(11)
    chroms = [[1] * 100 for _ in range(50)]
    flipped = sum(c.count(0) for c in mutation(chroms, 0.1, rng))
    assert 350 < flipped < 650


def test_elite_count_rounds_half_up():
    assert elite_count(100, 0.1) == 10
    assert elite_count(10, 0.25) == 3
    assert elite_count(5, 0.5) == 3
    assert elite_count(10, 0.0) == 0
    assert elite_count(10, 1.0) == 10


def test_elitism_keeps_best_parents_then_children():
    parents = [[i] for i in range(10)]
    children = [[100 + i] for i in range(10)]
    nxt = elitism(parents, children, 0.2, 10)
    assert len(nxt) == 10
    assert nxt[:2] == [[0], [1]]
    assert nxt[2:] == [[100 + i] for i in range(8)]


def test_elitism_output_length_matches_population(rng):
    for pop_size in (2, 4, 10, 50):
        for rate in (0.0, 0.1, 0.33, 0.5, 1.0):
            parents = init_population(5, pop_size, rng)
            children = init_population(5, pop_size, rng)
            assert len(elitism(parents, children, rate, pop_size)) == pop_size


def test_elitism_rejects_short_children():
    parents = [[1]] * 10
    with pytest.raises(ValueError):
        elitism(parents, [[0]] * 5, 0.1, 10)


def test_elitism_rejects_short_parents():
    with pytest.raises(ValueError):
        elitism([[1]], [[0]] * 10, 0.5, 10)
