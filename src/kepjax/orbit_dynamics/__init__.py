"""Perturbing and central force models for two-body motion.

- **Gravity**: Point-mass central body and J2 zonal harmonic
- **Drag**: Atmospheric drag acceleration
- **SRP**: Cannonball solar radiation pressure
"""

from .drag import accel_drag
from .gravity import accel_central_body, accel_j2
from .srp import accel_srp

__all__ = [
    "accel_central_body",
    "accel_j2",
    "accel_drag",
    "accel_srp",
]
