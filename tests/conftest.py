import numpy as np
import pytest


@pytest.fixture
def metastasis():
    # lung metastases per mouse, CMT cell lines 64, 167, 170, 175, 181
    d = np.array([
        0, 0, 1, 1, 2, 2, 4, 9,
        0, 0, 5, 7, 8, 11, 13, 23, 25, 97,
        2, 3, 6, 9, 10, 11, 11, 12, 21,
        0, 3, 5, 6, 10, 19, 56, 100, 132,
        2, 4, 6, 6, 6, 7, 18, 39, 60,
    ], dtype=float)
    g = np.repeat([1, 2, 3, 4, 5], [8, 10, 9, 9, 9]).astype(float)
    return np.column_stack([d, g])


@pytest.fixture
def metastasis_uxy():
    return {
        "1-2": 63.0, "1-3": 65.5, "1-4": 61.0, "1-5": 63.5,
        "2-3": 41.0, "2-4": 49.5, "2-5": 41.5,
        "3-4": 45.5, "3-5": 39.0,
        "4-5": 35.5,
    }
