import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from problems.tsp import Point, Tour, random_points


class ScriptedRNG:
    """Stands in for numpy's Generator and hands out a fixed index sequence."""

    def __init__(self, values):
        self.values = list(values)

    def integers(self, low, high):
        value = self.values.pop(0)
        assert low <= value < high
        return value


@pytest.fixture
def scripted_rng():
    return ScriptedRNG


@pytest.fixture
def crossing_tour():
    return Tour([Point(0, 0), Point(1, 1), Point(1, 0), Point(0, 1)])


@pytest.fixture
def square_tour():
    return Tour([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])


@pytest.fixture
def random_instance():
    rng = np.random.default_rng(2024)
    points = random_points(30, rng)
    return points, rng
