import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from okp.okp.decoders.best_area_fit import decode_chromosome
from okp.okp.ga.evaluate import evaluate_chromosome, rank_chromosomes
from okp.okp.ga import genetic
from okp.okp.ga.genetic import GAParams, genetic_algorithm
from okp.okp.ga.population import init_population
from okp.okp.models.items import build_problem
from okp import configurations


SCENARIO = GAParams(population_size=100, mutation_rate=0.05, elitism_rate=0.1, max_iterations=100)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"population_size": 0},
        {"mutation_rate": 1.5},
        {"mutation_rate": -0.1},
        {"elitism_rate": 1.01},
        {"max_iterations": -1},
        # odd population without an elite slot: selection is one child short
        {"population_size": 5, "elitism_rate": 0.0},
    ],
)
def test_params_rejected(kwargs):
    with pytest.raises(ValueError):
        GAParams(**kwargs)


def test_params_odd_population_with_elite_is_accepted():
    params = GAParams(population_size=5, elitism_rate=0.2)
    assert params.n_elite == 1
    assert params.remainder == 4


def test_params_from_config():
    params = GAParams.from_config()
    assert params.population_size == configurations.POP_SIZE
    assert params.mutation_rate == configurations.MUTATION_RATE
    assert params.elitism_rate == configurations.ELITISM_RATE
    assert params.max_iterations == configurations.MAX_ITERATIONS


def test_rank_chromosomes_sorted_best_first(example_problem, rng):
    pop = init_population(len(example_problem.items), 20, rng)
    pop.append([0] * len(example_problem.items))
    ranked = rank_chromosomes(pop, example_problem)
    fitnesses = [f for _, f in ranked]
    assert len(ranked) == len(pop)
    assert fitnesses == sorted(fitnesses, reverse=True)
    assert ranked[-1][1] == 0.0
    for chrom, f in ranked:
        assert decode_chromosome(chrom, example_problem)[1] == f


def test_rank_chromosomes_same_with_process_pool(example_problem, rng):
    pop = init_population(len(example_problem.items), 12, rng)
    assert rank_chromosomes(pop, example_problem, workers=2) == rank_chromosomes(pop, example_problem)


def test_evaluate_chromosome_record(example_problem):
    rec = evaluate_chromosome([1] * len(example_problem.items), example_problem)
    assert rec.fitness == decode_chromosome(rec.chrom, example_problem)[1]
    assert len(rec.placed) + len(rec.dropped) == len(example_problem.items)


def test_scenario_is_deterministic_for_a_seed(example_problem):
    a = genetic_algorithm(example_problem, SCENARIO, random.Random(42))
    b = genetic_algorithm(example_problem, SCENARIO, random.Random(42))
    assert a["best_fitness"] == b["best_fitness"]
    assert a["best_chromosome"] == b["best_chromosome"]
    assert [p["best_fitness"] for p in a["progress"]] == [p["best_fitness"] for p in b["progress"]]


def test_scenario_best_is_monotonic_and_consistent(example_problem):
    result = genetic_algorithm(example_problem, SCENARIO, random.Random(7))
    progress = result["progress"]
    assert len(progress) == SCENARIO.max_iterations

    best_seq = [p["best_fitness"] for p in progress]
    assert all(x <= y for x, y in zip(best_seq, best_seq[1:]))
    assert all(p["gen_best"] <= p["best_fitness"] for p in progress)
    assert best_seq[-1] == result["best_fitness"]

    assert 0.0 < result["best_fitness"] <= 1.0
    assert len(result["best_chromosome"]) == len(example_problem.items)
    _, fitness = decode_chromosome(result["best_chromosome"], example_problem)
    assert fitness == result["best_fitness"]


def test_worker_count_does_not_change_result(example_problem):
    params = GAParams(population_size=20, mutation_rate=0.05, elitism_rate=0.1, max_iterations=5)
    serial = genetic_algorithm(example_problem, params, random.Random(3))
    pooled = genetic_algorithm(example_problem, params, random.Random(3), workers=2)
    assert serial["best_chromosome"] == pooled["best_chromosome"]
    assert serial["best_fitness"] == pooled["best_fitness"]


def test_one_pool_serves_the_whole_run(example_problem, monkeypatch):
    opened = []

    def counting_pool(max_workers):
        opened.append(max_workers)
        return ThreadPoolExecutor(max_workers=max_workers)

    monkeypatch.setattr(genetic, "ProcessPoolExecutor", counting_pool)
    params = GAParams(population_size=20, mutation_rate=0.05, elitism_rate=0.1, max_iterations=6)
    serial = genetic_algorithm(example_problem, params, random.Random(3))
    pooled = genetic_algorithm(example_problem, params, random.Random(3), workers=3)
    assert opened == [3]
    assert serial["best_chromosome"] == pooled["best_chromosome"]
    assert [p["gen_mean"] for p in serial["progress"]] == [p["gen_mean"] for p in pooled["progress"]]


def test_rank_chromosomes_uses_given_executor(example_problem, rng):
    pop = init_population(len(example_problem.items), 12, rng)
    with ThreadPoolExecutor(max_workers=2) as ex:
        assert rank_chromosomes(pop, example_problem, executor=ex) == rank_chromosomes(pop, example_problem)


def test_zero_iterations_returns_empty_best(example_problem):
    params = GAParams(population_size=10, max_iterations=0)
    result = genetic_algorithm(example_problem, params, random.Random(1))
    assert result["best_chromosome"] == []
    assert result["best_fitness"] == 0.0
    assert result["progress"] == []


def test_nothing_fits_keeps_empty_best():
    problem = build_problem(5, 5, [(10, 10), (6, 1)])
    params = GAParams(population_size=10, max_iterations=5)
    result = genetic_algorithm(problem, params, random.Random(1))
    assert result["best_chromosome"] == []
    assert result["best_fitness"] == 0.0


def test_single_item_that_fits_is_found():
    problem = build_problem(10, 10, [(10, 10)])
    params = GAParams(population_size=4, mutation_rate=0.0, elitism_rate=0.5, max_iterations=3)
    result = genetic_algorithm(problem, params, random.Random(0))
    assert result["best_chromosome"] == [1]
    assert result["best_fitness"] == 1.0
