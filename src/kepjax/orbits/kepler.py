"""Newton-Raphson solver for the elliptical Kepler equation.

Inverts ``M = E - e sin(E)`` for the eccentric anomaly ``E``.  The
iteration itself runs in ``jax.lax.while_loop``; eccentricity checks and
the iteration-limit check run eagerly around it so that failures surface
as Python exceptions.

The initial guess ``E0 = M + e`` for ``M <= pi`` and ``E0 = M - e``
otherwise was found to converge for every tested (e, M) pair in large
random sweeps (Musegaas, 2013).  Do not replace it with the more common
``E0 = M`` or ``E0 = pi`` guesses.

References:
    1. P. Musegaas, *Optimization of Space Trajectories Including Multiple
       Gravity Assists and Deep Space Maneuvers*, MSc thesis, Delft
       University of Technology, 2013.
"""

from __future__ import annotations

import logging
import math
from functools import partial

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import (
    NEAR_PARABOLIC_GUARD,
    get_dtype,
    get_machine_epsilon,
    get_root_finding_tolerance,
)
from kepjax.errors import (
    InvalidArgumentError,
    IterationLimitExceededError,
    NegativeEccentricityError,
    NonEllipticalOrbitError,
)
from kepjax.orbits.anomaly import anomaly_eccentric_to_true
from kepjax.utils import concrete_float, from_radians, to_radians

logger = logging.getLogger(__name__)


def kepler_function_elliptic(anm_ecc: ArrayLike, e: ArrayLike, anm_mean: ArrayLike) -> Array:
    """Evaluate the elliptical Kepler function ``f(E) = E - e sin(E) - M``.

    Its root in ``E`` is the eccentric anomaly corresponding to the mean
    anomaly ``M``.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.
        anm_mean: Mean anomaly. Units: *rad*

    Returns:
        Value of the Kepler function. Units: *rad*
    """
    E = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    M = jnp.asarray(anm_mean, dtype=get_dtype())
    return E - e * jnp.sin(E) - M


def kepler_function_elliptic_derivative(anm_ecc: ArrayLike, e: ArrayLike) -> Array:
    """Evaluate ``df/dE = 1 - e cos(E)`` of the elliptical Kepler function.

    Args:
        anm_ecc: Eccentric anomaly. Units: *rad*
        e: Eccentricity, ``0 <= e < 1``. Dimensionless.

    Returns:
        First derivative of the Kepler function. Dimensionless.
    """
    E = jnp.asarray(anm_ecc, dtype=get_dtype())
    e = jnp.asarray(e, dtype=get_dtype())
    return 1.0 - e * jnp.cos(E)


@partial(jax.jit, static_argnames=("max_iter",))
def _newton_elliptic(M: Array, e: Array, tol: Array, eps: Array, max_iter: int):
    E0 = jnp.where(M > jnp.pi, M - e, M + e)

    def threshold(E):
        # Rounding in f(E) is amplified by 1/f'(E); updates below that noise
        # floor cannot shrink further.
        noise = 4.0 * eps * (jnp.abs(E) + jnp.abs(M) + 1.0) / (1.0 - e * jnp.cos(E))
        return jnp.maximum(tol, noise)

    def cond(carry):
        k, _, _, done = carry
        return (k < max_iter) & ~done

    def body(carry):
        k, E_prev, E, _ = carry
        f = E - e * jnp.sin(E) - M
        E_next = E - f / (1.0 - e * jnp.cos(E))
        # A repeated iterate means a rounding cycle around the root.
        done = (jnp.abs(E - E_next) < threshold(E_next)) | (E_next == E_prev)
        return k + 1, E, E_next, done

    init = (
        jnp.asarray(0, dtype=jnp.int32),
        jnp.asarray(jnp.nan, dtype=E0.dtype),
        E0,
        jnp.asarray(False),
    )
    k, _, E, converged = jax.lax.while_loop(cond, body, init)
    return E, k, converged


def anomaly_mean_to_eccentric(
    anm_mean: ArrayLike,
    e: ArrayLike,
    tol: float | None = None,
    max_iter: int = 100,
    use_degrees: bool = False,
) -> Array:
    """Convert mean anomaly to eccentric anomaly for elliptical orbits.

    The mean anomaly is first reduced into ``[0, 2pi)``.  Kepler's equation
    is then solved with Newton-Raphson until the absolute update falls
    below *tol*, floored at the rounding noise of the Kepler function
    divided by its slope.  A repeated iterate also ends the iteration.  The
    returned eccentric anomaly is not wrapped and may lie outside
    ``[0, 2pi)`` by a multiple of ``2pi``.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1 - 1e-11``. Dimensionless.
        tol: Stopping tolerance on the Newton update. Units: *rad*.
            Defaults to :func:`kepjax.config.get_root_finding_tolerance`.
        max_iter: Maximum number of Newton-Raphson iterations.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        Eccentric anomaly. Units: *rad* or *deg*

    Raises:
        NegativeEccentricityError: If ``e < 0``.
        NonEllipticalOrbitError: If ``e > 1 - 1e-11``.
        IterationLimitExceededError: If the iteration has not converged
            after *max_iter* steps.

    Examples:
        ```python
        from kepjax.orbits import anomaly_mean_to_eccentric
        E = anomaly_mean_to_eccentric(60.0, 0.01671, use_degrees=True)
        ```
    """
    e_value = concrete_float(e, "eccentricity")
    if math.isnan(e_value):
        raise InvalidArgumentError("Eccentricity is NaN")
    if e_value < 0.0:
        raise NegativeEccentricityError(f"Eccentricity is negative: {e_value}", e_value)
    if e_value > 1.0 - NEAR_PARABOLIC_GUARD:
        raise NonEllipticalOrbitError(
            f"Eccentricity {e_value} is non-elliptical or too close to parabolic "
            f"for the Kepler solver",
            e_value,
        )
    if max_iter < 0:
        raise InvalidArgumentError(f"max_iter must be non-negative, got {max_iter}")
    if tol is None:
        tol = get_root_finding_tolerance()

    _float = get_dtype()
    anm_mean = jnp.asarray(anm_mean, dtype=_float)
    if anm_mean.shape != ():
        raise InvalidArgumentError(f"Mean anomaly must be a scalar, got shape {anm_mean.shape}")
    M = jnp.mod(to_radians(anm_mean, use_degrees), 2.0 * jnp.pi)

    E, iterations, converged = _newton_elliptic(
        M,
        jnp.asarray(e_value, dtype=_float),
        jnp.asarray(tol, dtype=_float),
        jnp.asarray(get_machine_epsilon(), dtype=_float),
        int(max_iter),
    )

    if not bool(converged):
        raise IterationLimitExceededError(
            f"Maximum iterations ({max_iter}) for Newton-Raphson root-finding exceeded "
            f"(eccentricity {e_value}, mean anomaly {float(M)})",
            iterations=int(iterations),
            last_iterate=float(E),
        )

    logger.debug("Kepler equation converged in %d iterations", int(iterations))
    return from_radians(E, use_degrees)


def anomaly_mean_to_true(
    anm_mean: ArrayLike,
    e: ArrayLike,
    tol: float | None = None,
    max_iter: int = 100,
    use_degrees: bool = False,
) -> Array:
    """Convert mean anomaly to true anomaly for elliptical orbits.

    Composite conversion: mean -> eccentric (Newton-Raphson) -> true.

    Args:
        anm_mean: Mean anomaly. Units: *rad* or *deg*
        e: Eccentricity, ``0 <= e < 1 - 1e-11``. Dimensionless.
        tol: Stopping tolerance forwarded to :func:`anomaly_mean_to_eccentric`.
        max_iter: Iteration cap forwarded to :func:`anomaly_mean_to_eccentric`.
        use_degrees: If ``True``, input and output are in degrees.

    Returns:
        True anomaly in ``(-pi, pi]``. Units: *rad* or *deg*

    Examples:
        ```python
        from kepjax.orbits import anomaly_mean_to_true
        nu = anomaly_mean_to_true(90.0, 0.1, use_degrees=True)
        ```
    """
    return anomaly_eccentric_to_true(
        anomaly_mean_to_eccentric(anm_mean, e, tol, max_iter, use_degrees),
        e,
        use_degrees=use_degrees,
    )
