import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def seq() -> list:
    """1.0..20.0 with positions 1, 2 and 6 missing (15% missing)."""
    a = [float(i) for i in range(1, 21)]
    for i in (1, 2, 6):
        a[i] = None
    return a


@pytest.fixture
def frame() -> pd.DataFrame:
    return pd.DataFrame({
        "a": [1.0, np.nan, 3.0, 4.0, 5.0],
        "b": [np.nan, 20.0, 30.0, np.nan, 50.0],
        "c": [100.0, 200.0, 300.0, 400.0, 500.0],
    })


@pytest.fixture
def matrix() -> np.ndarray:
    return np.array([
        [1.0, 2.0, np.nan],
        [4.0, np.nan, 6.0],
        [7.0, 8.0, 9.0],
        [10.0, 11.0, 12.0],
    ])
