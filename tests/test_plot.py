from problems.tsp import Point
from utils.plot import plot_convergence, plot_tour


def test_plot_convergence_draws_one_line_per_run():
    ax = plot_convergence({"a": [3.0, 2.0, 1.5], "b": [4.0, 3.0]}, show=False)
    assert len(ax.lines) == 2


def test_plot_tour_closes_the_cycle(square_tour):
    ax = plot_tour(square_tour, show=False)
    xs = list(ax.lines[0].get_xdata())
    assert len(xs) == len(square_tour) + 1
    assert xs[0] == xs[-1]
