"""Keplerian orbital element ↔ inertial Cartesian state vector conversions.

Converts between osculating Keplerian orbital elements
``[a, e, i, omega, RAAN, nu]`` and inertial Cartesian state vectors
``[x, y, z, vx, vy, vz]`` for an arbitrary central body.

Element ordering:

| Index | Element                                   | Units         |
|-------|-------------------------------------------|---------------|
| 0     | *a* (semi-latus rectum *p* if parabolic)  | m             |
| 1     | *e*: eccentricity                         | dimensionless |
| 2     | *i*: inclination                          | rad           |
| 3     | *ω*: argument of periapsis                | rad           |
| 4     | *Ω*: longitude of the ascending node      | rad           |
| 5     | *ν*: true anomaly                         | rad           |

Singular geometries are flagged with NaN in the undefined slots:

- circular inclined: *ω* is NaN, slot 5 holds the argument of latitude.
- eccentric equatorial: *Ω* is NaN, slot 3 holds the true longitude of
  periapsis.
- circular equatorial: *ω* and *Ω* are NaN, slot 5 holds the true
  longitude.

Angles measured in the equatorial plane of a retrograde equatorial orbit
run in the direction of motion.  :func:`state_koe_to_cartesian` reads NaN
angles as zero, which reproduces the position from the composite angle.

References:
    1. D. A. Vallado, *Fundamentals of Astrodynamics and Applications*,
       4th ed., Microcosm Press, 2013, Alg. 9 and 10.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 2.2.
"""

from __future__ import annotations

import logging
import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_default_tolerance, get_dtype
from kepjax.coordinates._types import (
    CartesianState,
    KeplerianElements,
    OrbitType,
    classify_orbit,
)
from kepjax.utils import (
    from_radians,
    to_radians,
    validate_gravitational_parameter,
    validate_state_vector,
)

logger = logging.getLogger(__name__)

_TWO_PI = 2.0 * math.pi


def _quadrant_corrected(cos_angle: Array, discriminant: Array) -> float:
    angle = float(jnp.arccos(jnp.clip(cos_angle, -1.0, 1.0)))
    if float(discriminant) < 0.0:
        angle = _TWO_PI - angle
    return math.fmod(angle, _TWO_PI)


def _cartesian_to_koe(x_cart: ArrayLike, gm: ArrayLike, tol: float | None):
    x_cart = validate_state_vector(x_cart, "x_cart")
    gm = validate_gravitational_parameter(gm)
    if tol is None:
        tol = get_default_tolerance()

    r = x_cart[:3]
    v = x_cart[3:6]
    r_norm = jnp.linalg.norm(r)
    r_hat = r / r_norm

    h = jnp.cross(r, v)
    h_norm = jnp.linalg.norm(h)

    e_vec = jnp.cross(v, h) / gm - r_hat
    ecc = float(jnp.linalg.norm(e_vec))

    if abs(ecc - 1.0) < tol:
        slot0 = float(h_norm * h_norm / gm)
    else:
        slot0 = float(1.0 / (2.0 / r_norm - jnp.dot(v, v) / gm))

    inc = float(jnp.arccos(jnp.clip(h[2] / h_norm, -1.0, 1.0)))
    orbit_type = classify_orbit(ecc, inc, tol)
    circular = ecc < tol
    equatorial = inc < tol or abs(inc - math.pi) < tol

    # Sense of rotation about z, so that equatorial angles follow the motion.
    direction = 1.0 if float(h[2]) >= 0.0 else -1.0

    if equatorial:
        n_hat = jnp.array([1.0, 0.0, 0.0], dtype=x_cart.dtype)
        aop_discriminant = direction * e_vec[1]
    else:
        n_vec = jnp.cross(jnp.array([0.0, 0.0, 1.0], dtype=x_cart.dtype), h / h_norm)
        n_hat = n_vec / jnp.linalg.norm(n_vec)
        aop_discriminant = e_vec[2]

    raan = _quadrant_corrected(n_hat[0], n_hat[1])

    if circular:
        e_hat = n_hat
        aop = 0.0
        nu_discriminant = direction * r[1] if equatorial else r[2]
    else:
        e_hat = e_vec / ecc
        aop = _quadrant_corrected(jnp.dot(e_hat, n_hat), aop_discriminant)
        nu_discriminant = jnp.dot(r, v)

    cos_nu = jnp.dot(r_hat, e_hat)
    cos_nu = jnp.where(jnp.abs(1.0 - cos_nu) < tol, 1.0, cos_nu)
    cos_nu = jnp.where(jnp.abs(cos_nu) < tol, 0.0, cos_nu)
    nu = _quadrant_corrected(cos_nu, nu_discriminant)

    nan = float("nan")
    if circular and equatorial:
        logger.debug("Circular equatorial orbit: true anomaly slot holds the true longitude")
        aop, raan = nan, nan
    elif circular:
        logger.debug("Circular inclined orbit: true anomaly slot holds the argument of latitude")
        aop = nan
    elif equatorial:
        logger.debug(
            "Equatorial orbit: argument of periapsis slot holds the true longitude of periapsis"
        )
        raan = nan

    return [slot0, ecc, inc, aop, raan, nu], orbit_type


def state_cartesian_to_koe(
    x_cart: ArrayLike,
    gm: ArrayLike,
    tol: float | None = None,
    use_degrees: bool = False,
) -> Array:
    """Convert an inertial Cartesian state to Keplerian orbital elements.

    Works for circular, elliptical, parabolic and hyperbolic orbits,
    including the equatorial cases.  The angular elements are returned in
    ``[0, 2pi)``; undefined angles are NaN (see the module docstring for
    the composite angles stored in their place).

    Args:
        x_cart: Cartesian state ``[x, y, z, vx, vy, vz]``. Units: *m*, *m/s*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        tol: Tolerance below which the eccentricity, the inclination and
            ``|e - 1|`` are treated as zero. Defaults to
            :func:`kepjax.config.get_default_tolerance`.
        use_degrees: If ``True``, return angular elements in degrees.

    Returns:
        Orbital elements ``[a, e, i, omega, RAAN, nu]``.  For parabolic
        orbits slot 0 holds the semi-latus rectum.

    Raises:
        InvalidArgumentError: If *x_cart* does not hold six elements or
            *gm* is not positive.

    Examples:
        ```python
        from kepjax.constants import GM_EARTH
        from kepjax.coordinates import state_cartesian_to_koe
        x = [3.75e6, 4.24e6, -1.39e6, -4.65e3, -2.21e3, 1.66e3]
        oe = state_cartesian_to_koe(x, GM_EARTH)
        ```
    """
    values, _ = _cartesian_to_koe(x_cart, gm, tol)
    x_oe = jnp.array(values, dtype=get_dtype())
    return x_oe.at[2:].set(from_radians(x_oe[2:], use_degrees))


def state_koe_to_cartesian(
    x_oe: ArrayLike,
    gm: ArrayLike,
    tol: float | None = None,
    use_degrees: bool = False,
) -> Array:
    """Convert Keplerian orbital elements to an inertial Cartesian state.

    Computes the state in the perifocal frame from the semi-latus rectum
    and the true anomaly, then rotates it by ``R3(-RAAN) R1(-i) R3(-omega)``.
    NaN angles in slots 3 and 4 are read as zero.

    The conversion is branch-free and can be traced by ``jax.jit`` and
    ``jax.vmap``.  Inconsistent elements (for example a positive
    semi-major axis with ``e > 1``) yield NaN or Inf components rather
    than an error.

    Args:
        x_oe: Orbital elements ``[a, e, i, omega, RAAN, nu]``; slot 0 is
            the semi-latus rectum when ``|e - 1| < tol``. Units: *m*, *rad*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        tol: Tolerance on ``|e - 1|`` for the parabolic case. Defaults to
            :func:`kepjax.config.get_default_tolerance`.
        use_degrees: If ``True``, interpret angular elements as degrees.

    Returns:
        Cartesian state ``[x, y, z, vx, vy, vz]``. Units: *m*, *m/s*

    Raises:
        InvalidArgumentError: If *x_oe* does not hold six elements.

    Examples:
        ```python
        from kepjax.constants import GM_EARTH
        from kepjax.coordinates import state_koe_to_cartesian
        oe = [8.0e6, 0.23, 20.6, 274.78, 108.77, 46.11]
        x = state_koe_to_cartesian(oe, GM_EARTH, use_degrees=True)
        ```
    """
    x_oe = validate_state_vector(x_oe, "x_oe")
    if tol is None:
        tol = get_default_tolerance()
    gm = jnp.asarray(gm, dtype=x_oe.dtype)

    e = x_oe[1]
    i = to_radians(x_oe[2], use_degrees)
    omega = to_radians(jnp.where(jnp.isnan(x_oe[3]), 0.0, x_oe[3]), use_degrees)
    raan = to_radians(jnp.where(jnp.isnan(x_oe[4]), 0.0, x_oe[4]), use_degrees)
    nu = to_radians(x_oe[5], use_degrees)

    p = jnp.where(jnp.abs(e - 1.0) < tol, x_oe[0], x_oe[0] * (1.0 - e * e))

    cos_nu = jnp.cos(nu)
    sin_nu = jnp.sin(nu)
    r = p / (1.0 + e * cos_nu)
    pos_pf = jnp.array([r * cos_nu, r * sin_nu])
    vel_pf = jnp.sqrt(gm / p) * jnp.array([-sin_nu, e + cos_nu])

    cO, sO = jnp.cos(raan), jnp.sin(raan)
    cw, sw = jnp.cos(omega), jnp.sin(omega)
    ci, si = jnp.cos(i), jnp.sin(i)

    # First two columns of R3(-RAAN) R1(-i) R3(-omega)
    rot = jnp.array(
        [
            [cO * cw - sO * sw * ci, -cO * sw - sO * cw * ci],
            [sO * cw + cO * sw * ci, -sO * sw + cO * cw * ci],
            [sw * si, cw * si],
        ]
    )

    return jnp.concatenate([rot @ pos_pf, rot @ vel_pf])


def cartesian_to_keplerian(
    state: CartesianState | ArrayLike,
    gm: ArrayLike,
    tol: float | None = None,
) -> KeplerianElements:
    """Convert a Cartesian state to typed Keplerian elements.

    Same algorithm as :func:`state_cartesian_to_koe`, but undefined angles
    are ``None`` and the orbit geometry is reported in
    :attr:`KeplerianElements.orbit_type`.

    Args:
        state: A :class:`CartesianState` or a flat 6-vector. Units: *m*, *m/s*
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        tol: Singular-case tolerance. Defaults to
            :func:`kepjax.config.get_default_tolerance`.

    Returns:
        KeplerianElements: The orbital elements, angles in radians.
    """
    if isinstance(state, CartesianState):
        state = state.to_array()
    values, orbit_type = _cartesian_to_koe(state, gm, tol)
    a_or_p, ecc, inc, aop, raan, nu = values
    return KeplerianElements(
        semi_major_axis_or_semi_latus_rectum=a_or_p,
        eccentricity=ecc,
        inclination=inc,
        argument_of_periapsis=None if math.isnan(aop) else aop,
        longitude_of_ascending_node=None if math.isnan(raan) else raan,
        true_anomaly=nu,
        orbit_type=orbit_type,
    )


def keplerian_to_cartesian(
    elements: KeplerianElements,
    gm: ArrayLike,
    tol: float | None = None,
) -> CartesianState:
    """Convert typed Keplerian elements to a :class:`CartesianState`.

    Args:
        elements: Orbital elements, angles in radians.
        gm: Gravitational parameter of the central body. Units: *m^3/s^2*
        tol: Tolerance on ``|e - 1|``. Defaults to
            :func:`kepjax.config.get_default_tolerance`.

    Returns:
        CartesianState: Position and velocity. Units: *m*, *m/s*
    """
    if elements.orbit_type is OrbitType.PARABOLIC and tol is None:
        # Keep slot 0 read as p even if e drifted outside the default tolerance.
        tol = max(get_default_tolerance(), 2.0 * abs(elements.eccentricity - 1.0))
    return CartesianState.from_array(state_koe_to_cartesian(elements.to_array(), gm, tol))
