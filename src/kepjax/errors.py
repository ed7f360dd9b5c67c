"""Exception hierarchy for kepjax.

All errors raised by the package derive from :class:`KepjaxError`.  Each
concrete error also derives from the closest built-in exception, so
callers that only catch ``ValueError`` or ``RuntimeError`` keep working.

Undefined angles of degenerate orbits are *not* errors: they are reported
as NaN in flat element arrays and as ``None`` in
:class:`~kepjax.coordinates.KeplerianElements`.
"""

from __future__ import annotations


class KepjaxError(Exception):
    """Base class for all kepjax errors."""


class InvalidArgumentError(KepjaxError, ValueError):
    """An argument has the wrong shape or a non-physical value.

    Raised for state vectors that do not hold exactly six elements and for
    non-positive gravitational parameters.
    """


class DomainError(KepjaxError, ValueError):
    """An eccentricity lies outside the domain of the requested function."""

    def __init__(self, message: str, eccentricity: float):
        super().__init__(message)
        self.eccentricity = eccentricity


class NegativeEccentricityError(DomainError):
    """Eccentricity is negative."""


class ParabolicOrbitError(DomainError):
    """Eccentricity is within machine epsilon of 1.0.

    Parabolic anomalies are not implemented.
    """


class WrongRegimeError(DomainError):
    """Eccentricity belongs to the other conic regime.

    Raised when a hyperbolic eccentricity is passed to an elliptical-only
    function, or the reverse.
    """


class NonEllipticalOrbitError(DomainError):
    """Eccentricity is too close to (or above) 1.0 for the Kepler solver."""


class IterationLimitExceededError(KepjaxError, RuntimeError):
    """Newton-Raphson iteration did not converge.

    Attributes:
        iterations: Number of iterations performed.
        last_iterate: Value of the iterate when the limit was hit.
    """

    def __init__(self, message: str, iterations: int, last_iterate: float):
        super().__init__(message)
        self.iterations = iterations
        self.last_iterate = last_iterate
