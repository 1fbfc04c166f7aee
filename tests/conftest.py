import random
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

from okp.okp.models.items import build_problem

DATASET = Path(__file__).resolve().parents[1] / "okp" / "datasets" / "example_150x80.json"

EXAMPLE_ITEMS = [(50, 30), (40, 40), (30, 20), (60, 25), (35, 35), (45, 50), (25, 25), (55, 30)]


@pytest.fixture
def example_problem():
    return build_problem(150, 80, EXAMPLE_ITEMS, name="example_150x80")


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def dataset_path():
    return DATASET


class FixedRng:
    """Stands in for random.Random where a test needs exact cut points."""

    def __init__(self, values):
        self.values = list(values)

    def randrange(self, _n):
        return self.values.pop(0)


@pytest.fixture
def fixed_rng():
    return FixedRng
