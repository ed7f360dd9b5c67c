"""Keplerian orbital mechanics functions.

This sub-module provides functions for:

- **Anomaly conversions**: converting between true, eccentric and mean
  anomalies for elliptical and hyperbolic orbits, with eccentricity-based
  dispatch and a typed error for every unsupported regime.
- **Kepler equation**: the elliptical Kepler function, its derivative,
  and a Newton-Raphson solver for mean-to-eccentric anomaly conversion.
- **Two-body relations**: mean motion, orbital period and circular
  velocity.
"""

from .anomaly import (
    Regime,
    anomaly_eccentric_to_mean,
    anomaly_eccentric_to_mean_elliptic,
    anomaly_eccentric_to_mean_hyperbolic,
    anomaly_eccentric_to_true,
    anomaly_eccentric_to_true_elliptic,
    anomaly_eccentric_to_true_hyperbolic,
    anomaly_true_to_eccentric,
    anomaly_true_to_eccentric_elliptic,
    anomaly_true_to_eccentric_hyperbolic,
    anomaly_true_to_mean,
    classify_eccentricity,
)
from .kepler import (
    anomaly_mean_to_eccentric,
    anomaly_mean_to_true,
    kepler_function_elliptic,
    kepler_function_elliptic_derivative,
)
from .two_body import (
    circular_velocity,
    mean_motion,
    orbital_period,
)

__all__ = [
    "Regime",
    "classify_eccentricity",
    "anomaly_true_to_eccentric",
    "anomaly_true_to_eccentric_elliptic",
    "anomaly_true_to_eccentric_hyperbolic",
    "anomaly_eccentric_to_mean",
    "anomaly_eccentric_to_mean_elliptic",
    "anomaly_eccentric_to_mean_hyperbolic",
    "anomaly_eccentric_to_true",
    "anomaly_eccentric_to_true_elliptic",
    "anomaly_eccentric_to_true_hyperbolic",
    "anomaly_true_to_mean",
    "anomaly_mean_to_eccentric",
    "anomaly_mean_to_true",
    "kepler_function_elliptic",
    "kepler_function_elliptic_derivative",
    "mean_motion",
    "orbital_period",
    "circular_velocity",
]
