"""Atmospheric drag acceleration model.

Computes the non-conservative acceleration due to atmospheric drag from
the velocity of the spacecraft relative to the atmosphere.  Any
co-rotation of the atmosphere has to be removed from the velocity by
the caller.

All inputs and outputs use SI base units (metres/second, metres/second
squared, kg, kg/m^3).

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, Sec. 3.5.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_dtype


def accel_drag(
    cd: float,
    density: float,
    v_rel: ArrayLike,
    area: float,
    mass: float,
) -> Array:
    """Acceleration due to atmospheric drag.

    Args:
        cd: Coefficient of drag [dimensionless].
        density: Atmospheric density [kg/m^3].
        v_rel: Velocity relative to the atmosphere [m/s], shape ``(3,)``.
        area: Wind-facing cross-sectional area [m^2].
        mass: Spacecraft mass [kg].

    Returns:
        Drag acceleration ``-0.5 cd rho |v| (A/m) v`` [m/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from kepjax.orbit_dynamics import accel_drag
        a = accel_drag(2.2, 2.0e-11, jnp.array([7000.0, 0.0, 10.0]), 5.0, 500.0)
        ```
    """
    _float = get_dtype()
    v = jnp.asarray(v_rel, dtype=_float)
    v_abs = jnp.linalg.norm(v)

    return _float(-0.5) * _float(cd) * _float(density) * (_float(area) / _float(mass)) * v_abs * v
