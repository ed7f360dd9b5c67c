"""Gravity force models: central body and J2 zonal harmonic.

All inputs and outputs use SI base units (metres, metres/second squared).

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, 2012, p. 56-68.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_dtype


def accel_central_body(gm: float, r_object: ArrayLike) -> Array:
    """Acceleration due to point-mass gravity of a body at the origin.

    Args:
        gm: Gravitational parameter of the central body [m^3/s^2].
        r_object: Position of the object [m].  Shape ``(3,)`` or ``(6,)``
            (only first 3 elements used).

    Returns:
        Acceleration vector ``-gm * r / |r|^3`` [m/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from kepjax.constants import R_EARTH, GM_EARTH
        from kepjax.orbit_dynamics import accel_central_body
        a = accel_central_body(GM_EARTH, jnp.array([R_EARTH, 0.0, 0.0]))
        ```
    """
    _float = get_dtype()
    r = jnp.asarray(r_object, dtype=_float)[:3]
    r_norm = jnp.linalg.norm(r)
    return -_float(gm) * r / r_norm**3


def accel_j2(gm: float, r_object: ArrayLike, r_eq: float, j2: float) -> Array:
    """Perturbing acceleration due to the J2 zonal harmonic.

    Only the perturbation is returned; add :func:`accel_central_body` for
    the total gravitational acceleration.  The position must be expressed
    in a body-fixed frame whose z-axis is the body's rotation axis.

    Args:
        gm: Gravitational parameter of the central body [m^3/s^2].
        r_object: Position of the object [m].  Shape ``(3,)`` or ``(6,)``
            (only first 3 elements used).
        r_eq: Equatorial radius of the central body [m].
        j2: Unnormalized J2 coefficient [dimensionless].

    Returns:
        J2 acceleration [m/s^2], shape ``(3,)``.

    Examples:
        ```python
        import jax.numpy as jnp
        from kepjax.constants import GM_EARTH, J2_EARTH, R_EARTH
        from kepjax.orbit_dynamics import accel_j2
        r = jnp.array([R_EARTH + 500e3, 0.0, 1000e3])
        a = accel_j2(GM_EARTH, r, R_EARTH, J2_EARTH)
        ```
    """
    _float = get_dtype()
    r = jnp.asarray(r_object, dtype=_float)[:3]
    r_sq = jnp.dot(r, r)
    r_norm = jnp.sqrt(r_sq)
    z_sq = r[2] * r[2] / r_sq

    pre = -1.5 * _float(gm) * _float(j2) * _float(r_eq) ** 2 / (r_sq * r_sq * r_norm)

    return pre * r * jnp.array([1.0 - 5.0 * z_sq, 1.0 - 5.0 * z_sq, 3.0 - 5.0 * z_sq])
