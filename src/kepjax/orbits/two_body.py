"""Two-body relations between semi-major axis, mean motion and period.

Unlike the conversion engine these helpers accept the mass of the orbiting
body, which is added to the central body's gravitational parameter through
the Newtonian constant of gravitation.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_dtype, get_machine_epsilon
from kepjax.constants import GRAVITATIONAL_CONSTANT
from kepjax.errors import InvalidArgumentError
from kepjax.utils import concrete_float, from_radians


def mean_motion(
    a: ArrayLike,
    gm: ArrayLike,
    mass: ArrayLike = 0.0,
    use_degrees: bool = False,
) -> Array:
    """Compute the Keplerian mean motion.

    Args:
        a: Semi-major axis. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        mass: Mass of the orbiting body. Units: *kg*
        use_degrees: If ``True``, return mean motion in degrees per second.

    Returns:
        Mean motion ``sqrt((G m + gm) / a^3)``. Units: *rad/s* or *deg/s*

    Examples:
        ```python
        from kepjax.constants import GM_EARTH
        from kepjax.orbits import mean_motion
        n = mean_motion(4.2164e7, GM_EARTH)
        ```
    """
    _float = get_dtype()
    a = jnp.asarray(a, dtype=_float)
    gm = jnp.asarray(gm, dtype=_float)
    mass = jnp.asarray(mass, dtype=_float)
    n = jnp.sqrt((GRAVITATIONAL_CONSTANT * mass + gm) / (a * a * a))
    return from_radians(n, use_degrees)


def orbital_period(a: ArrayLike, gm: ArrayLike, mass: ArrayLike = 0.0) -> Array:
    """Compute the Keplerian orbital period.

    Args:
        a: Semi-major axis. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        mass: Mass of the orbiting body. Units: *kg*

    Returns:
        Orbital period ``2 pi sqrt(a^3 / (G m + gm))``. Units: *s*

    Examples:
        ```python
        from kepjax.constants import GM_EARTH
        from kepjax.orbits import orbital_period
        T = orbital_period(4.2164e7, GM_EARTH)
        ```
    """
    return 2.0 * jnp.pi / mean_motion(a, gm, mass)


def circular_velocity(a: ArrayLike, gm: ArrayLike) -> Array:
    """Compute the velocity on a circular orbit.

    Args:
        a: Orbital radius. Units: *m*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*

    Returns:
        Circular velocity ``sqrt(gm / a)``. Units: *m/s*

    Raises:
        InvalidArgumentError: If *a* is zero to within machine epsilon.
    """
    if abs(concrete_float(a, "a")) <= get_machine_epsilon():
        raise InvalidArgumentError("Semi-major axis must be non-zero for a circular velocity")
    _float = get_dtype()
    a = jnp.asarray(a, dtype=_float)
    gm = jnp.asarray(gm, dtype=_float)
    return jnp.sqrt(gm / a)
