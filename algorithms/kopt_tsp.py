import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from problems.tsp import Metrizable, Tour

logger = logging.getLogger(__name__)

History = List[float]
IterationCallback = Optional[Callable[[int, float, List[Metrizable], Dict[str, Any]], None]]


class UnsupportedArityError(ValueError):
    """Raised when a k-opt move is requested for k other than 2 or 3."""


@dataclass
class KOptConfig:
    """Hyper-parameters for the escalating 2-opt / 3-opt improver."""

    timeout: float = 1.0                    # seconds of wall-clock budget
    seed: int = 42
    stagnation_limit: Optional[int] = None  # None -> number of nodes

    def __post_init__(self):
        if self.timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {self.timeout}")
        if self.stagnation_limit is not None and self.stagnation_limit < 0:
            raise ValueError(f"stagnation_limit must be non-negative, got {self.stagnation_limit}")


def rand_index(tour: Tour, rng: np.random.Generator) -> int:
    return int(rng.integers(0, len(tour)))


def reverse_segment(nodes: Sequence[Metrizable], i: int, j: int) -> List[Metrizable]:
    """Copy of `nodes` with positions [i, j) reversed."""
    return list(nodes[:i]) + list(nodes[i:j])[::-1] + list(nodes[j:])


def two_opt(i: int, j: int, tour: Tour) -> Optional[float]:
    """Reverse [i, j) and keep it only if the full tour gets strictly shorter."""
    candidate = Tour(reverse_segment(tour, i, j))
    prev_len = tour.length()
    post_len = candidate.length()

    if post_len < prev_len:
        tour.replace(candidate)
        return post_len - prev_len
    return None


def three_opt(i: int, j: int, k: int, tour: Tour) -> Optional[float]:
    """
    Remove edges (a,b), (c,d), (e,f) starting at positions i < j < k and
    reconnect with the first cheaper wiring out of d1, d2, d4, d3.

    Only the six endpoint distances are evaluated; the returned delta is the
    exact change in tour length for a symmetric metric.
    """
    n = len(tour)
    a, b = tour[i % n], tour[(i + 1) % n]
    c, d = tour[j % n], tour[(j + 1) % n]
    e, f = tour[k % n], tour[(k + 1) % n]

    d0 = a.distance(b) + c.distance(d) + e.distance(f)
    d1 = a.distance(c) + b.distance(d) + e.distance(f)
    d2 = a.distance(b) + c.distance(e) + d.distance(f)
    d3 = a.distance(d) + e.distance(b) + c.distance(f)
    d4 = f.distance(b) + c.distance(d) + e.distance(a)

    nodes = tour.nodes
    if d1 < d0:
        # a c..b d
        new_nodes = reverse_segment(nodes, i + 1, j + 1)
        delta = d1 - d0
    elif d2 < d0:
        # c e..d f
        new_nodes = reverse_segment(nodes, j + 1, k + 1)
        delta = d2 - d0
    elif d4 < d0:
        # a e..b f
        new_nodes = reverse_segment(nodes, i + 1, k + 1)
        delta = d4 - d0
    elif d3 < d0:
        # a d..e b..c f
        new_nodes = nodes[:i + 1] + nodes[j + 1:k + 1] + nodes[i + 1:j + 1] + nodes[k + 1:]
        delta = d3 - d0
    else:
        return None

    tour.replace(new_nodes)
    return delta


def k_opt(k: int, tour: Tour, rng: np.random.Generator) -> Optional[float]:
    """Draw a random k-opt candidate and try it. Returns the length delta or None."""
    if k == 2:
        i = rand_index(tour, rng)
        j = rand_index(tour, rng)
        if i == j:
            return None
        i, j = sorted((i, j))
        return two_opt(i, j, tour)

    if k == 3:
        i = rand_index(tour, rng)
        j = rand_index(tour, rng)
        k3 = rand_index(tour, rng)
        if i == j or j == k3 or i == k3:
            return None
        i, j, k3 = sorted((i, j, k3))
        return three_opt(i, j, k3, tour)

    raise UnsupportedArityError(f"{k}-opt is not implemented, use k=2 or k=3")


class KOptTSP:
    """
    Random-sampling local search that escalates from 2-opt to 3-opt when
    2-opt stagnates, and drops back to 2-opt after every improvement.
    The tour is improved in place.
    """

    def __init__(self, tour: Tour, cfg: KOptConfig, rng: Optional[np.random.Generator] = None):
        self.tour = tour
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.max_stagnation = (
            len(tour) if cfg.stagnation_limit is None else int(cfg.stagnation_limit)
        )
        self.k = 2
        self.stagnation = 0

    def step(self) -> Optional[float]:
        delta = k_opt(self.k, self.tour, self.rng)
        if delta is not None:
            self.stagnation = 0
            self.k = 2
        else:
            self.stagnation += 1
            if self.stagnation > self.max_stagnation:
                if self.k == 2:
                    logger.debug("no 2-opt gain in %d tries, escalating to 3-opt", self.stagnation)
                self.k = 3
                self.stagnation = 0
        return delta

    def run(self, on_iter: IterationCallback = None) -> History:
        current_length = self.tour.length()
        initial_length = current_length
        history: History = [current_length]
        iteration = 0

        start = time.perf_counter()
        while True:
            k = self.k
            delta = self.step()
            if delta is not None:
                current_length += delta
                history.append(current_length)
                if on_iter:
                    on_iter(iteration, current_length, self.tour.nodes, {"k": k, "delta": delta})
            iteration += 1
            if time.perf_counter() - start > self.cfg.timeout:
                break

        logger.info(
            "k-opt finished: %d iterations, %d accepted moves, length %.4f -> %.4f",
            iteration, len(history) - 1, initial_length, self.tour.length(),
        )
        return history


def optimize(
    tour: Tour,
    timeout: float,
    rng: Optional[np.random.Generator] = None,
    on_iter: IterationCallback = None,
) -> None:
    """
    Improve `tour` in place for `timeout` seconds.
    """
    cfg = KOptConfig(timeout=timeout)
    KOptTSP(tour, cfg, rng).run(on_iter)
