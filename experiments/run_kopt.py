import logging
import os

import matplotlib.pyplot as plt
import numpy as np

from algorithms.kopt_tsp import KOptConfig, KOptTSP
from common.callbacks import make_logger
from problems.tsp import matrix_nodes, random_points, random_tour, read_weight_matrix
from utils.plot import plot_convergence, plot_tour

WEIGHTS_PATH = "data/weights.csv"


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    rng = np.random.default_rng(7)

    if os.path.exists(WEIGHTS_PATH):
        nodes = matrix_nodes(read_weight_matrix(WEIGHTS_PATH))
    else:
        nodes = random_points(60, rng)

    tour = random_tour(nodes, rng)
    before = tour.length()

    log, cb = make_logger()
    cfg = KOptConfig(timeout=2.0)
    history = KOptTSP(tour, cfg, rng).run(on_iter=cb)

    n_three = sum(1 for e in log["extras"] if e["k"] == 3)
    print("\n=== KẾT QUẢ ===")
    print(f"Ban đầu : {before:.4f}")
    print(f"k-opt   : {tour.length():.4f}")
    print(f"Số bước cải thiện: {len(log['iter'])} (3-opt: {n_three})")

    plot_convergence({"k-opt": history}, show=False)
    if hasattr(tour[0], "x"):
        plot_tour(tour, title="k-opt", show=False)
    plt.show()


if __name__ == "__main__":
    main()
