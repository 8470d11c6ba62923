import numpy as np
import pytest


@pytest.fixture(scope="session")
def X():
    """Random walks with values rounded to a single decimal."""
    random_state = np.random.RandomState(123)
    return np.round(np.cumsum(random_state.normal(size=(20, 30)), axis=1), 1)


@pytest.fixture(scope="session")
def X_discrete():
    """Time series over a small alphabet, with many equally distant pairs."""
    random_state = np.random.RandomState(42)
    return random_state.randint(0, 4, size=(15, 12)).astype(float)
