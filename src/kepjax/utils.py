"""Shared helpers for angle handling and eager argument validation.

The angle helpers follow the ``use_degrees`` convention used throughout
kepjax.  The validation helpers pull concrete Python floats out of JAX
arrays so that domain checks can raise ordinary Python exceptions; they
cannot be used on values traced by ``jax.jit``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from kepjax.config import get_dtype
from kepjax.errors import InvalidArgumentError


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def wrap_to_2pi(angle: ArrayLike) -> Array:
    """Reduce an angle into ``[0, 2pi)`` with a floored modulo.

    Args:
        angle (ArrayLike): Angle in radians.

    Returns:
        Equivalent angle in ``[0, 2pi)``.
    """
    angle = jnp.asarray(angle, dtype=get_dtype())
    return jnp.mod(angle, 2.0 * jnp.pi)


def concrete_float(value: ArrayLike, name: str) -> float:
    """Return *value* as a Python float for eager validation.

    Args:
        value: Scalar value, either a Python number or a 0-d array.
        name: Argument name used in error messages.

    Returns:
        float: The concrete value.

    Raises:
        InvalidArgumentError: If *value* is not a scalar or is a traced
            value without a concrete counterpart.
    """
    try:
        return float(value)
    except jax.errors.ConcretizationTypeError as err:
        raise InvalidArgumentError(
            f"{name} must be concrete to be validated; it cannot be traced by jax.jit"
        ) from err
    except TypeError as err:
        raise InvalidArgumentError(f"{name} must be a scalar, got {value!r}") from err


def validate_gravitational_parameter(gm: ArrayLike) -> float:
    """Check that a gravitational parameter is strictly positive.

    Args:
        gm: Gravitational parameter. Units: *m^3/s^2*

    Returns:
        float: The validated gravitational parameter.

    Raises:
        InvalidArgumentError: If *gm* is not strictly positive.
    """
    gm_value = concrete_float(gm, "gm")
    if not gm_value > 0.0:
        raise InvalidArgumentError(f"Gravitational parameter must be positive, got {gm_value}")
    return gm_value


def validate_state_vector(x: ArrayLike, name: str) -> Array:
    """Coerce a 6-element state vector to the configured dtype.

    Args:
        x: Six-element vector.
        name: Argument name used in error messages.

    Returns:
        The vector as a ``(6,)`` array of the configured dtype.

    Raises:
        InvalidArgumentError: If *x* does not hold exactly six elements.
    """
    x = jnp.asarray(x, dtype=get_dtype())
    if x.shape != (6,):
        raise InvalidArgumentError(
            f"{name} must have exactly 6 elements, got shape {x.shape}"
        )
    return x
