"""
kepjax is a small two-body orbital mechanics library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    JULIAN_DAY,
    JULIAN_YEAR_DAYS,
    JULIAN_YEAR,
    GRAVITATIONAL_CONSTANT,
    C_LIGHT,
    AU,
    R_EARTH,
    GM_EARTH,
    J2_EARTH,
    GM_VENUS,
    GM_SUN,
    P_SUN,
    GM_MOON
)

from .config import set_dtype, get_dtype

from .errors import (
    KepjaxError,
    InvalidArgumentError,
    DomainError,
    NegativeEccentricityError,
    ParabolicOrbitError,
    WrongRegimeError,
    NonEllipticalOrbitError,
    IterationLimitExceededError,
)

from .orbits import (
    Regime,
    anomaly_true_to_eccentric,
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_true,
    anomaly_true_to_mean,
    anomaly_mean_to_eccentric,
    anomaly_mean_to_true,
    kepler_function_elliptic,
    kepler_function_elliptic_derivative,
    mean_motion,
    orbital_period,
    circular_velocity,
)

from .coordinates import (
    CartesianState,
    KeplerianElements,
    OrbitType,
    state_cartesian_to_koe,
    state_koe_to_cartesian,
    cartesian_to_keplerian,
    keplerian_to_cartesian,
)

from .orbit_dynamics import (
    accel_central_body,
    accel_j2,
    accel_drag,
    accel_srp,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "JULIAN_DAY",
    "JULIAN_YEAR_DAYS",
    "JULIAN_YEAR",
    "GRAVITATIONAL_CONSTANT",
    "C_LIGHT",
    "AU",
    "R_EARTH",
    "GM_EARTH",
    "J2_EARTH",
    "GM_VENUS",
    "GM_SUN",
    "P_SUN",
    "GM_MOON",
    # Config
    "set_dtype",
    "get_dtype",
    # Errors
    "KepjaxError",
    "InvalidArgumentError",
    "DomainError",
    "NegativeEccentricityError",
    "ParabolicOrbitError",
    "WrongRegimeError",
    "NonEllipticalOrbitError",
    "IterationLimitExceededError",
    # Orbits
    "Regime",
    "anomaly_true_to_eccentric",
    "anomaly_eccentric_to_mean",
    "anomaly_eccentric_to_true",
    "anomaly_true_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_mean_to_true",
    "kepler_function_elliptic",
    "kepler_function_elliptic_derivative",
    "mean_motion",
    "orbital_period",
    "circular_velocity",
    # Coordinates
    "CartesianState",
    "KeplerianElements",
    "OrbitType",
    "state_cartesian_to_koe",
    "state_koe_to_cartesian",
    "cartesian_to_keplerian",
    "keplerian_to_cartesian",
    # Orbit Dynamics
    "accel_central_body",
    "accel_j2",
    "accel_drag",
    "accel_srp",
]
