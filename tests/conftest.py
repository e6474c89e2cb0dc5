import logging

import pytest

from agglomerate import Point
from agglomerate.logger import PACKAGE_LOGGER


@pytest.fixture
def square():
    """Corners of a square with side 5, in the order A, B, C, D."""
    return [
        Point("A", 0.5, 0.5),
        Point("B", 5.5, 0.5),
        Point("C", 5.5, 5.5),
        Point("D", 0.5, 5.5),
    ]


@pytest.fixture
def random_points():
    import numpy as np

    rng = np.random.default_rng(0)
    A = rng.normal(loc=0.0, scale=0.3, size=(7, 2))
    B = rng.normal(loc=3.0, scale=0.3, size=(6, 2))
    X = np.vstack([A, B])
    return [Point(f"p{i}", float(x), float(y)) for i, (x, y) in enumerate(X)]


@pytest.fixture(autouse=True)
def reset_package_logger():
    # handlers installed by setup_logging hold on to the captured stderr
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
