from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Sequence

import numpy as np


class Metrizable(Protocol):
    """Anything with a symmetric, non-negative distance to its own kind."""

    def distance(self, other) -> float:
        ...


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance(self, other: "Point") -> float:
        return float(np.hypot(self.x - other.x, self.y - other.y))


@dataclass(frozen=True)
class MatrixNode:
    """City `index` of a weight matrix; distances are looked up in `D`."""

    index: int
    D: np.ndarray = field(repr=False, compare=False, hash=False)

    def distance(self, other: "MatrixNode") -> float:
        return float(self.D[self.index, other.index])


def read_weight_matrix(path: str) -> np.ndarray:
    """Read a weight matrix from csv."""
    D = np.loadtxt(path, delimiter=',', dtype = float)
    assert D.shape[0] == D.shape[1], "Weight matrix must be square."
    return D


def read_points(path: str) -> List[Point]:
    """Read `x,y` coordinates from csv."""
    xy = np.loadtxt(path, delimiter=',', dtype=float, ndmin=2)
    assert xy.shape[1] == 2, "Point file must have exactly two columns."
    return [Point(float(x), float(y)) for x, y in xy]


def matrix_nodes(D: np.ndarray) -> List[MatrixNode]:
    D = D.astype(float)
    return [MatrixNode(i, D) for i in range(D.shape[0])]


def random_points(n: int, rng: np.random.Generator) -> List[Point]:
    """Uniform points in the unit square."""
    return [Point(float(x), float(y)) for x, y in rng.random((n, 2))]


def tour_length(nodes: Sequence[Metrizable]) -> float:
    """Calculate the length of a closed tour"""
    n = len(nodes)
    length = 0.0
    for i in range(n):
        length += nodes[i].distance(nodes[(i + 1) % n])
    return length


class Tour:
    """Ordered cyclic sequence of nodes; the node after the last is the first."""

    def __init__(self, nodes: Iterable[Metrizable]):
        self._nodes = list(nodes)
        if not self._nodes:
            raise ValueError("A tour needs at least one node.")

    @property
    def nodes(self) -> List[Metrizable]:
        return self._nodes[:]

    def length(self) -> float:
        return tour_length(self._nodes)

    def replace(self, nodes: Iterable[Metrizable]) -> None:
        new_nodes = list(nodes)
        assert len(new_nodes) == len(self._nodes), "Replacement must keep the node count."
        self._nodes = new_nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, idx):
        return self._nodes[idx]

    def __iter__(self):
        return iter(self._nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tour):
            return NotImplemented
        return self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"Tour({self._nodes!r})"


def random_tour(nodes: Sequence[Metrizable], rng: np.random.Generator) -> Tour:
    """Arbitrary starting ordering for the improver."""
    order = list(nodes)
    rng.shuffle(order)
    return Tour(order)
