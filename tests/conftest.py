import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def linear_samples():
    """Four points whose least-squares line is y = 1.1 x + 0.5."""
    return [(1, 2), (2, 2), (3, 4), (4, 5)]


@pytest.fixture
def quadratic_samples():
    return [(0, 1.2), (1, 2.0), (2, 2.9), (3, 4.1), (4, 5.8), (5, 8.2)]
