import matplotlib.pyplot as plt

def plot_convergence(histories: dict, show: bool = True):
    fig, ax = plt.subplots()
    for name, hist in histories.items():
        ax.plot(hist, label=name)
    ax.set_xlabel("Accepted move")
    ax.set_ylabel("Tour length")
    ax.legend()
    ax.set_title("k-opt convergence")
    if show:
        plt.show()
    return ax

def plot_tour(tour, title: str = "Tour", show: bool = True):
    """Draw a closed tour of nodes that carry x/y coordinates."""
    xs = [p.x for p in tour] + [tour[0].x]
    ys = [p.y for p in tour] + [tour[0].y]
    fig, ax = plt.subplots()
    ax.plot(xs, ys, "o-")
    ax.set_title(title)
    ax.set_aspect("equal")
    if show:
        plt.show()
    return ax
