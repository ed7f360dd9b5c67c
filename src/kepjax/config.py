"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout kepjax.  The default is ``jnp.float32``.  Switching to
``jnp.float64`` automatically enables JAX's 64-bit mode
(``jax_enable_x64``).

The default tolerances used by the anomaly conversions, the Kepler solver
and the state conversions all derive from the machine epsilon of the
active dtype, so they tighten automatically under ``float64``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32

# Eccentricities above 1 - NEAR_PARABOLIC_GUARD are rejected by the Kepler
# solver: Newton-Raphson is unreliable that close to a parabola.
NEAR_PARABOLIC_GUARD = 1.0e-11


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for kepjax.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float32``).
    """
    return _dtype


def get_machine_epsilon() -> float:
    """Return the machine epsilon of the active float dtype.

    Returns:
        float: ``jnp.finfo(get_dtype()).eps``.
    """
    return float(jnp.finfo(_dtype).eps)


def get_default_tolerance() -> float:
    """Return the tolerance used to detect singular orbit geometries.

    Eccentricities and inclinations closer than this value to their limit
    cases (circular, parabolic, equatorial) are treated as exactly singular
    by the Cartesian/Keplerian conversions.

    Returns:
        float: Ten times the machine epsilon of the active dtype.
    """
    return 10.0 * get_machine_epsilon()


def get_root_finding_tolerance() -> float:
    """Return the default stopping tolerance of the Kepler solver.

    Returns:
        float: ``1e-3`` times the machine epsilon of the active dtype.
    """
    return 1.0e-3 * get_machine_epsilon()
