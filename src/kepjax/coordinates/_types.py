"""Value types for Cartesian states and Keplerian elements.

The conversion functions in :mod:`kepjax.coordinates.keplerian` work on
flat 6-vectors, where undefined angles are NaN and slot 0 holds either
the semi-major axis or, for parabolic orbits, the semi-latus rectum.
The types here give those arrays named fields:

- :class:`CartesianState`: position and velocity 3-vectors.
- :class:`KeplerianElements`: classical elements with an
  :class:`OrbitType` tag and ``None`` for undefined angles.

Both are :class:`~typing.NamedTuple` instances.
"""

from __future__ import annotations

import enum
import math
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_default_tolerance, get_dtype
from kepjax.utils import validate_state_vector


class OrbitType(enum.Enum):
    """Geometry class of an orbit, deciding which angles are defined.

    Attributes:
        CIRCULAR_EQUATORIAL: Argument of periapsis and longitude of the
            ascending node are undefined; the true-anomaly slot holds the
            true longitude.
        CIRCULAR_INCLINED: Argument of periapsis is undefined; the
            true-anomaly slot holds the argument of latitude.
        EQUATORIAL: Non-circular equatorial orbit. Longitude of the
            ascending node is undefined; the argument-of-periapsis slot
            holds the true longitude of periapsis.
        INCLINED: Non-circular inclined orbit. All angles are defined.
        PARABOLIC: Eccentricity is 1; slot 0 holds the semi-latus rectum.
    """

    CIRCULAR_EQUATORIAL = "circular_equatorial"
    CIRCULAR_INCLINED = "circular_inclined"
    EQUATORIAL = "equatorial"
    INCLINED = "inclined"
    PARABOLIC = "parabolic"


def classify_orbit(e: float, i: float, tol: float | None = None) -> OrbitType:
    """Classify an orbit from its eccentricity and inclination.

    Args:
        e: Eccentricity. Dimensionless.
        i: Inclination. Units: *rad*
        tol: Tolerance on the limit cases. Defaults to
            :func:`kepjax.config.get_default_tolerance`.

    Returns:
        OrbitType: The geometry class.
    """
    if tol is None:
        tol = get_default_tolerance()
    if abs(e - 1.0) < tol:
        return OrbitType.PARABOLIC
    circular = abs(e) < tol
    equatorial = abs(i) < tol or abs(i - math.pi) < tol
    if circular and equatorial:
        return OrbitType.CIRCULAR_EQUATORIAL
    if circular:
        return OrbitType.CIRCULAR_INCLINED
    if equatorial:
        return OrbitType.EQUATORIAL
    return OrbitType.INCLINED


class CartesianState(NamedTuple):
    """Inertial position and velocity of an orbiting body.

    Attributes:
        position: Position ``[x, y, z]``. Units: *m*
        velocity: Velocity ``[vx, vy, vz]``. Units: *m/s*
    """

    position: Array
    velocity: Array

    @classmethod
    def from_array(cls, x: ArrayLike) -> CartesianState:
        """Split a flat ``[x, y, z, vx, vy, vz]`` vector.

        Raises:
            InvalidArgumentError: If *x* does not hold exactly six elements.
        """
        x = validate_state_vector(x, "x_cart")
        return cls(x[:3], x[3:6])

    def to_array(self) -> Array:
        """Return the flat ``[x, y, z, vx, vy, vz]`` vector."""
        _float = get_dtype()
        return jnp.concatenate(
            [jnp.asarray(self.position, dtype=_float), jnp.asarray(self.velocity, dtype=_float)]
        )

    @property
    def x(self) -> Array:
        return self.position[0]

    @property
    def y(self) -> Array:
        return self.position[1]

    @property
    def z(self) -> Array:
        return self.position[2]

    @property
    def vx(self) -> Array:
        return self.velocity[0]

    @property
    def vy(self) -> Array:
        return self.velocity[1]

    @property
    def vz(self) -> Array:
        return self.velocity[2]


def _optional(value: float) -> float | None:
    return None if math.isnan(value) else value


class KeplerianElements(NamedTuple):
    """Classical (osculating) Keplerian elements.

    Angles that are undefined for the orbit geometry are ``None``.  For
    the singular geometries the slot of an undefined angle's neighbour
    holds a composite angle instead (see :class:`OrbitType`).

    Attributes:
        semi_major_axis_or_semi_latus_rectum: Semi-major axis, or the
            semi-latus rectum when the orbit is parabolic. Units: *m*
        eccentricity: Eccentricity. Dimensionless.
        inclination: Inclination. Units: *rad*
        argument_of_periapsis: Argument of periapsis, or the true
            longitude of periapsis for equatorial orbits. Units: *rad*
        longitude_of_ascending_node: Longitude of the ascending node.
            Units: *rad*
        true_anomaly: True anomaly, argument of latitude or true
            longitude depending on the orbit type. Units: *rad*
        orbit_type: Geometry class of the orbit.
    """

    semi_major_axis_or_semi_latus_rectum: float
    eccentricity: float
    inclination: float
    argument_of_periapsis: float | None
    longitude_of_ascending_node: float | None
    true_anomaly: float
    orbit_type: OrbitType

    @property
    def is_parabolic(self) -> bool:
        return self.orbit_type is OrbitType.PARABOLIC

    @property
    def semi_major_axis(self) -> float | None:
        """Semi-major axis, or ``None`` for a parabolic orbit."""
        if self.is_parabolic:
            return None
        return self.semi_major_axis_or_semi_latus_rectum

    @property
    def semi_latus_rectum(self) -> float:
        if self.is_parabolic:
            return self.semi_major_axis_or_semi_latus_rectum
        e = self.eccentricity
        return self.semi_major_axis_or_semi_latus_rectum * (1.0 - e * e)

    @classmethod
    def from_array(cls, x_oe: ArrayLike, tol: float | None = None) -> KeplerianElements:
        """Build elements from a flat ``[a|p, e, i, omega, RAAN, nu]`` vector.

        NaN angles become ``None``.  The orbit type is derived from the
        eccentricity and inclination.

        Args:
            x_oe: Flat element vector, angles in radians.
            tol: Tolerance on the limit cases. Defaults to
                :func:`kepjax.config.get_default_tolerance`.

        Raises:
            InvalidArgumentError: If *x_oe* does not hold exactly six elements.
        """
        values = [float(v) for v in validate_state_vector(x_oe, "x_oe")]
        return cls(
            semi_major_axis_or_semi_latus_rectum=values[0],
            eccentricity=values[1],
            inclination=values[2],
            argument_of_periapsis=_optional(values[3]),
            longitude_of_ascending_node=_optional(values[4]),
            true_anomaly=values[5],
            orbit_type=classify_orbit(values[1], values[2], tol),
        )

    def to_array(self) -> Array:
        """Return the flat element vector, with NaN for undefined angles."""
        nan = float("nan")
        return jnp.array(
            [
                self.semi_major_axis_or_semi_latus_rectum,
                self.eccentricity,
                self.inclination,
                nan if self.argument_of_periapsis is None else self.argument_of_periapsis,
                nan
                if self.longitude_of_ascending_node is None
                else self.longitude_of_ascending_node,
                self.true_anomaly,
            ],
            dtype=get_dtype(),
        )
