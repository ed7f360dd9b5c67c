"""Conversions between true, eccentric and mean anomaly.

Each conversion exists in three flavours:

- an elliptical-only function (``*_elliptic``), valid for ``0 <= e < 1``;
- a hyperbolic-only function (``*_hyperbolic``), valid for ``e > 1``;
- a dispatching function that inspects the eccentricity (or an explicit
  :class:`Regime`) and routes to one of the two.

Eccentricity checks always run in the same order: negative eccentricity,
then parabolic eccentricity (within machine epsilon of 1), then the
elliptical/hyperbolic split.  Parabolic orbits are not supported.

The checks need concrete values, so the public functions run eagerly.
The regime kernels themselves are plain ``jax.numpy`` expressions.

Angles are not wrapped: results come straight from ``atan2`` (or the
closed-form expression) and callers normalise them if required.

References:
    1. V. A. Chobotov, *Orbital Mechanics (3rd Ed.)*, AIAA Education
       Series, 2002.
"""

from __future__ import annotations

import enum
import math
from typing import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_dtype, get_machine_epsilon
from kepjax.errors import (
    InvalidArgumentError,
    NegativeEccentricityError,
    ParabolicOrbitError,
    WrongRegimeError,
)
from kepjax.utils import concrete_float, from_radians, to_radians


class Regime(enum.Enum):
    """Conic regime of an orbit."""

    ELLIPTIC = "elliptic"
    HYPERBOLIC = "hyperbolic"


def classify_eccentricity(e: ArrayLike) -> Regime:
    """Return the conic regime of an eccentricity.

    Args:
        e: Eccentricity. Dimensionless.

    Returns:
        Regime: ``Regime.ELLIPTIC`` for ``0 <= e < 1``,
            ``Regime.HYPERBOLIC`` for ``e > 1``.

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        InvalidArgumentError: If ``e`` is NaN.
    """
    e_value = concrete_float(e, "eccentricity")
    if math.isnan(e_value):
        raise InvalidArgumentError("Eccentricity is NaN")
    if e_value < 0.0:
        raise NegativeEccentricityError(f"Eccentricity is negative: {e_value}", e_value)
    if abs(e_value - 1.0) < get_machine_epsilon():
        raise ParabolicOrbitError(
            f"Parabolic orbits are not supported (eccentricity {e_value})", e_value
        )
    if e_value < 1.0:
        return Regime.ELLIPTIC
    return Regime.HYPERBOLIC


def _require_regime(e: ArrayLike, regime: Regime) -> None:
    found = classify_eccentricity(e)
    if found is not regime:
        e_value = float(e)
        raise WrongRegimeError(
            f"Eccentricity {e_value} is {found.value}, expected a {regime.value} orbit",
            e_value,
        )


# ──────────────────────────────────────────────
# Regime kernels
# ──────────────────────────────────────────────


def _true_to_eccentric_elliptic(nu: Array, e: Array) -> Array:
    denominator = 1.0 + e * jnp.cos(nu)
    sin_E = jnp.sqrt(1.0 - e * e) * jnp.sin(nu) / denominator
    cos_E = (e + jnp.cos(nu)) / denominator
    return jnp.arctan2(sin_E, cos_E)


def _true_to_eccentric_hyperbolic(nu: Array, e: Array) -> Array:
    denominator = 1.0 + e * jnp.cos(nu)
    sinh_H = jnp.sqrt(e * e - 1.0) * jnp.sin(nu) / denominator
    cosh_H = (e + jnp.cos(nu)) / denominator
    # atanh written out through logarithms
    tanh_H = sinh_H / cosh_H
    return 0.5 * (jnp.log(1.0 + tanh_H) - jnp.log(1.0 - tanh_H))


def _eccentric_to_mean_elliptic(E: Array, e: Array) -> Array:
    return E - e * jnp.sin(E)


def _eccentric_to_mean_hyperbolic(H: Array, e: Array) -> Array:
    return e * jnp.sinh(H) - H


def _eccentric_to_true_elliptic(E: Array, e: Array) -> Array:
    denominator = 1.0 - e * jnp.cos(E)
    sin_nu = jnp.sqrt(1.0 - e * e) * jnp.sin(E) / denominator
    cos_nu = (jnp.cos(E) - e) / denominator
    return jnp.arctan2(sin_nu, cos_nu)


def _eccentric_to_true_hyperbolic(H: Array, e: Array) -> Array:
    denominator = e * jnp.cosh(H) - 1.0
    sin_nu = jnp.sqrt(e * e - 1.0) * jnp.sinh(H) / denominator
    cos_nu = (e - jnp.cosh(H)) / denominator
    return jnp.arctan2(sin_nu, cos_nu)


_Kernel = Callable[[Array, Array], Array]


def _convert(
    anomaly: ArrayLike,
    e: ArrayLike,
    regime: Regime | None,
    kernels: dict[Regime, _Kernel],
    use_degrees: bool,
) -> Array:
    if regime is None:
        regime = classify_eccentricity(e)
    else:
        _require_regime(e, regime)

    anomaly = jnp.asarray(anomaly, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())

    result = kernels[regime](to_radians(anomaly, use_degrees), e)
    return from_radians(result, use_degrees)


_TRUE_TO_ECCENTRIC = {
    Regime.ELLIPTIC: _true_to_eccentric_elliptic,
    Regime.HYPERBOLIC: _true_to_eccentric_hyperbolic,
}
_ECCENTRIC_TO_MEAN = {
    Regime.ELLIPTIC: _eccentric_to_mean_elliptic,
    Regime.HYPERBOLIC: _eccentric_to_mean_hyperbolic,
}
_ECCENTRIC_TO_TRUE = {
    Regime.ELLIPTIC: _eccentric_to_true_elliptic,
    Regime.HYPERBOLIC: _eccentric_to_true_hyperbolic,
}


# ──────────────────────────────────────────────
# True -> eccentric
# ──────────────────────────────────────────────


def anomaly_true_to_eccentric(
    anm_true: ArrayLike,
    e: ArrayLike,
    regime: Regime | None = None,
    use_degrees: bool = False,
) -> Array:
    """Convert true anomaly to (elliptical or hyperbolic) eccentric anomaly.

    Use this function when the eccentricity of the orbit is not known in
    advance.  Without an explicit *regime* the eccentricity selects the
    elliptical or hyperbolic conversion.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        regime: Force a regime. The eccentricity must still belong to it.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly, or hyperbolic eccentric anomaly for ``e > 1``.
            Units: *rad* or *deg*

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If *regime* is given and ``e`` belongs to the
            other regime.

    Examples:
        ```python
        from kepjax.orbits import anomaly_true_to_eccentric
        E = anomaly_true_to_eccentric(82.16, 0.146, use_degrees=True)
        H = anomaly_true_to_eccentric(0.5291, 3.0)
        ```
    """
    return _convert(anm_true, e, regime, _TRUE_TO_ECCENTRIC, use_degrees)


def anomaly_true_to_eccentric_elliptic(
    anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert true anomaly to eccentric anomaly for elliptical orbits.

    Computes ``sin E = sqrt(1 - e^2) sin(nu) / (1 + e cos(nu))`` and
    ``cos E = (e + cos(nu)) / (1 + e cos(nu))`` and returns their
    ``atan2``.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If ``e > 1``.
    """
    return _convert(anm_true, e, Regime.ELLIPTIC, _TRUE_TO_ECCENTRIC, use_degrees)


def anomaly_true_to_eccentric_hyperbolic(
    anm_true: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert true anomaly to hyperbolic eccentric anomaly.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``e > 1``. Dimensionless.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Hyperbolic eccentric anomaly. Units: *rad* or *deg*

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If ``e < 1``.
    """
    return _convert(anm_true, e, Regime.HYPERBOLIC, _TRUE_TO_ECCENTRIC, use_degrees)


# ──────────────────────────────────────────────
# Eccentric -> mean
# ──────────────────────────────────────────────


def anomaly_eccentric_to_mean(
    anm_ecc: ArrayLike,
    e: ArrayLike,
    regime: Regime | None = None,
    use_degrees: bool = False,
) -> Array:
    """Convert eccentric anomaly to mean anomaly.

    Applies Kepler's equation ``M = E - e sin(E)`` for elliptical orbits
    and ``M = e sinh(H) - H`` for hyperbolic orbits.

    Args:
        anm_ecc: Eccentric (or hyperbolic eccentric) anomaly.
            Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        regime: Force a regime. The eccentricity must still belong to it.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If *regime* is given and ``e`` belongs to the
            other regime.

    References:
        O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
        Applications*, 2012. Eq. 2.65.

    Examples:
        ```python
        from kepjax.orbits import anomaly_eccentric_to_mean
        M = anomaly_eccentric_to_mean(90.0, 0.1, use_degrees=True)
        ```
    """
    return _convert(anm_ecc, e, regime, _ECCENTRIC_TO_MEAN, use_degrees)


def anomaly_eccentric_to_mean_elliptic(
    anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert elliptical eccentric anomaly to mean anomaly (``M = E - e sin E``).

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If ``e > 1``.
    """
    return _convert(anm_ecc, e, Regime.ELLIPTIC, _ECCENTRIC_TO_MEAN, use_degrees)


def anomaly_eccentric_to_mean_hyperbolic(
    anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert hyperbolic eccentric anomaly to mean anomaly (``M = e sinh H - H``).

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If ``e < 1``.
    """
    return _convert(anm_ecc, e, Regime.HYPERBOLIC, _ECCENTRIC_TO_MEAN, use_degrees)


# ──────────────────────────────────────────────
# Eccentric -> true
# ──────────────────────────────────────────────


def anomaly_eccentric_to_true(
    anm_ecc: ArrayLike,
    e: ArrayLike,
    regime: Regime | None = None,
    use_degrees: bool = False,
) -> Array:
    """Convert eccentric (or hyperbolic eccentric) anomaly to true anomaly.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        regime: Force a regime. The eccentricity must still belong to it.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``(-pi, pi]``. Units: *rad* or *deg*

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If *regime* is given and ``e`` belongs to the
            other regime.

    References:
        D. Vallado, *Fundamentals of Astrodynamics and Applications
        (4th Ed.)*, pp. 47, eq. 2-9, 2010.

    Examples:
        ```python
        from kepjax.orbits import anomaly_eccentric_to_true
        nu = anomaly_eccentric_to_true(0.3879, 3.0)
        ```
    """
    return _convert(anm_ecc, e, regime, _ECCENTRIC_TO_TRUE, use_degrees)


def anomaly_eccentric_to_true_elliptic(
    anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert elliptical eccentric anomaly to true anomaly.

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If ``e > 1``.
    """
    return _convert(anm_ecc, e, Regime.ELLIPTIC, _ECCENTRIC_TO_TRUE, use_degrees)


def anomaly_eccentric_to_true_hyperbolic(
    anm_ecc: ArrayLike, e: ArrayLike, use_degrees: bool = False
) -> Array:
    """Convert hyperbolic eccentric anomaly to true anomaly.

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        ParabolicOrbitError: If ``e`` is within machine epsilon of 1.
        WrongRegimeError: If ``e < 1``.
    """
    return _convert(anm_ecc, e, Regime.HYPERBOLIC, _ECCENTRIC_TO_TRUE, use_degrees)


def anomaly_true_to_mean(
    anm_true: ArrayLike,
    e: ArrayLike,
    regime: Regime | None = None,
    use_degrees: bool = False,
) -> Array:
    """Convert true anomaly to mean anomaly.

    Composite conversion: true -> eccentric -> mean.

    Args:
        anm_true: True anomaly. Units: *rad* or *deg*
        e: Eccentricity. Dimensionless.
        regime: Force a regime. The eccentricity must still belong to it.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Mean anomaly. Units: *rad* or *deg*
    """
    return anomaly_eccentric_to_mean(
        anomaly_true_to_eccentric(anm_true, e, regime, use_degrees),
        e,
        regime,
        use_degrees,
    )
