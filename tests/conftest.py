import pytest
import numpy as np
from fractions import Fraction
from densematrix import Matrix
from densematrix.names import *

# Every scalar type the generic properties are checked against
scalar_types = [int, float, Fraction] + list(FIXED_WIDTH_DTYPES)

# Scalar types with exact division, used for inversion
field_types = [float, Fraction] + list(FLOAT_DTYPES)


@pytest.fixture(params=scalar_types, scope="session", ids=lambda t: getattr(t, '__name__', t))
def scalar_type(request: pytest.FixtureRequest):
    """Provide session-level fixture for parametrized scalar types."""
    return request.param


@pytest.fixture(params=field_types, scope="session", ids=lambda t: getattr(t, '__name__', t))
def field_type(request: pytest.FixtureRequest):
    """Provide session-level fixture for field scalar types."""
    return request.param


@pytest.fixture
def make_matrix():
    """Factory for reproducible random matrices with small non-negative entries.

    Entries stay in 0..2 so products of the shapes used in the tests fit into
    every fixed-width type, including int8 and uint8.
    """
    rng = np.random.default_rng(20221019)

    def _make(rows, cols, scalar_type=int, high=2):
        values = rng.integers(0, high + 1, size=(rows, cols)).tolist()
        return Matrix.from_rows(values, scalar_type)

    return _make
