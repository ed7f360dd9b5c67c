"""Cartesian and Keplerian state representations.

This sub-module provides:

- **Flat conversions**: ``[x, y, z, vx, vy, vz]`` ↔ ``[a, e, i, ω, Ω, ν]``
  for any central body, with NaN marking undefined angles
- **Typed conversions**: :class:`CartesianState` ↔ :class:`KeplerianElements`,
  with ``None`` for undefined angles and an :class:`OrbitType` tag
"""

from ._types import (
    CartesianState,
    KeplerianElements,
    OrbitType,
    classify_orbit,
)
from .keplerian import (
    cartesian_to_keplerian,
    keplerian_to_cartesian,
    state_cartesian_to_koe,
    state_koe_to_cartesian,
)

__all__ = [
    "CartesianState",
    "KeplerianElements",
    "OrbitType",
    "classify_orbit",
    "state_cartesian_to_koe",
    "state_koe_to_cartesian",
    "cartesian_to_keplerian",
    "keplerian_to_cartesian",
]
