import jax.numpy as jnp
import pytest

from kepjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Reference values are tabulated to double precision.  Tests that exercise
    the float32 default (test_config.py) override this with their own
    autouse fixture.
    """
    set_dtype(jnp.float64)
