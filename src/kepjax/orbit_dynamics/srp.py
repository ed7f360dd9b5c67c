"""Solar radiation pressure acceleration model.

Cannonball model: the spacecraft is treated as a sphere so that the
acceleration acts along the line to the radiation source.

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, Sec. 3.4.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_dtype


def accel_srp(
    p: float,
    cr: float,
    u_source: ArrayLike,
    area: float,
    mass: float,
) -> Array:
    """Acceleration due to solar radiation pressure.

    Args:
        p: Radiation pressure at the spacecraft [N/m^2].  Scale
            :data:`kepjax.constants.P_SUN` by ``(AU / d)^2`` for a distance
            ``d`` to the Sun.
        cr: Coefficient of reflectivity [dimensionless].
        u_source: Unit vector from the spacecraft to the source, shape ``(3,)``.
        area: Source-facing cross-sectional area [m^2].
        mass: Spacecraft mass [kg].

    Returns:
        SRP acceleration ``-p cr (A/m) u`` [m/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from kepjax.constants import P_SUN
        from kepjax.orbit_dynamics import accel_srp
        a = accel_srp(P_SUN, 1.3, jnp.array([1.0, 0.0, 0.0]), 2.0, 4.0)
        ```
    """
    _float = get_dtype()
    u = jnp.asarray(u_source, dtype=_float)
    return -_float(p) * _float(cr) * (_float(area) / _float(mass)) * u
