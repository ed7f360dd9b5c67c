"""Tests for the kepjax.coordinates module.

Covers Cartesian ↔ Keplerian conversions against published reference
states, the singular geometries (circular, equatorial, parabolic),
round-trip validation on random states, the typed element API and JAX
compatibility (jit, vmap).
"""

import logging
import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from kepjax.config import get_default_tolerance
from kepjax.constants import DEG2RAD, GM_EARTH, GM_VENUS
from kepjax.coordinates import (
    CartesianState,
    KeplerianElements,
    OrbitType,
    cartesian_to_keplerian,
    classify_orbit,
    keplerian_to_cartesian,
    state_cartesian_to_koe,
    state_koe_to_cartesian,
)
from kepjax.errors import InvalidArgumentError

# ──────────────────────────────────────────────
# Reference states
# ──────────────────────────────────────────────

_EARTH_STATE = np.array([3.75e6, 4.24e6, -1.39e6, -4.65e3, -2.21e3, 1.66e3])
_EARTH_KOE = np.array(
    [
        3.707478199246163e6,
        0.949175203660321,
        0.334622356632438,
        2.168430616511167,
        1.630852596545341,
        3.302032232567084,
    ]
)

_VENUS_STATE = np.array(
    [
        5.580537430785387e6,
        2.816487703435473e6,
        0.0,
        -3.248092722413634e3,
        6.435711753323540e3,
        0.0,
    ]
)

# States rebuilt from singular elements carry rounding in the eccentricity
# and inclination that can exceed the default tolerance.
_SINGULAR_TOL = 1e-10

_TWO_PI = 2.0 * math.pi


def _random_elements(key, n):
    """Non-degenerate elliptical elements away from every singularity."""
    lo = jnp.array([7.0e6, 0.01, 0.1, 0.1, 0.1, 0.1])
    hi = jnp.array([4.0e7, 0.9, 3.0, 6.1, 6.1, 6.1])
    return jax.random.uniform(key, (n, 6), minval=lo, maxval=hi, dtype=jnp.float64)


# ──────────────────────────────────────────────
# Cartesian -> Keplerian
# ──────────────────────────────────────────────


class TestCartesianToKeplerian:
    def test_earth_reference(self):
        oe = state_cartesian_to_koe(_EARTH_STATE, GM_EARTH)
        np.testing.assert_allclose(np.asarray(oe), _EARTH_KOE, rtol=1e-14)

    def test_true_anomaly_past_apoapsis(self):
        """Inbound states (r . v < 0) have true anomaly above pi."""
        oe = state_cartesian_to_koe(_EARTH_STATE, GM_EARTH)
        assert math.pi < float(oe[5]) < _TWO_PI

    def test_degrees(self):
        oe = state_cartesian_to_koe(_EARTH_STATE, GM_EARTH, use_degrees=True)
        expected = _EARTH_KOE.copy()
        expected[2:] = np.rad2deg(expected[2:])
        np.testing.assert_allclose(np.asarray(oe), expected, rtol=1e-14)

    def test_angles_in_range(self):
        keys = jax.random.split(jax.random.PRNGKey(7), 10)
        for key in keys:
            x = state_koe_to_cartesian(_random_elements(key, 1)[0], GM_EARTH)
            oe = state_cartesian_to_koe(x, GM_EARTH)
            for angle in oe[2:]:
                assert 0.0 <= float(angle) < _TWO_PI

    def test_hyperbolic(self):
        oe_in = jnp.array([-2.0e7, 1.5, 0.5, 1.0, 2.0, 0.8])
        oe = state_cartesian_to_koe(state_koe_to_cartesian(oe_in, GM_EARTH), GM_EARTH)
        np.testing.assert_allclose(np.asarray(oe), np.asarray(oe_in), rtol=1e-10)
        assert float(oe[0]) < 0.0

    def test_wrong_size_raises(self):
        with pytest.raises(InvalidArgumentError, match="6 elements"):
            state_cartesian_to_koe(jnp.zeros(5), GM_EARTH)

    @pytest.mark.parametrize("gm", [0.0, -3.986e14])
    def test_non_positive_gm_raises(self, gm):
        with pytest.raises(InvalidArgumentError, match="Gravitational parameter"):
            state_cartesian_to_koe(_EARTH_STATE, gm)


class TestSingularGeometries:
    def test_venus_circular_equatorial(self):
        oe = state_cartesian_to_koe(_VENUS_STATE, GM_VENUS, tol=_SINGULAR_TOL)
        assert float(oe[0]) == pytest.approx(6.251e6, rel=1e-12)
        assert abs(float(oe[1])) < 1e-14
        assert abs(float(oe[2])) < 1e-14
        assert math.isnan(float(oe[3]))
        assert math.isnan(float(oe[4]))
        assert float(oe[5]) == pytest.approx(26.78 * DEG2RAD, rel=1e-12)

    def test_venus_default_tolerance(self):
        oe = state_cartesian_to_koe(_VENUS_STATE, GM_VENUS)
        assert abs(float(oe[1])) < get_default_tolerance()
        assert abs(float(oe[2])) < get_default_tolerance()
        assert math.isnan(float(oe[3]))
        assert math.isnan(float(oe[4]))
        assert float(oe[5]) == pytest.approx(26.78 * DEG2RAD, rel=1e-12)

    @pytest.mark.parametrize("u", [2.0, 4.0])
    def test_circular_inclined(self, u):
        """Slot 5 holds the argument of latitude."""
        x = state_koe_to_cartesian(jnp.array([7.0e6, 0.0, 0.5, 0.0, 1.0, u]), GM_EARTH)
        oe = state_cartesian_to_koe(x, GM_EARTH, tol=_SINGULAR_TOL)
        assert math.isnan(float(oe[3]))
        assert float(oe[2]) == pytest.approx(0.5, rel=1e-12)
        assert float(oe[4]) == pytest.approx(1.0, rel=1e-12)
        assert float(oe[5]) == pytest.approx(u, rel=1e-12)

    def test_eccentric_equatorial(self):
        """Slot 3 holds the true longitude of periapsis."""
        x = state_koe_to_cartesian(jnp.array([1.0e7, 0.3, 0.0, 1.2, 0.0, 2.5]), GM_EARTH)
        oe = state_cartesian_to_koe(x, GM_EARTH)
        assert math.isnan(float(oe[4]))
        assert abs(float(oe[2])) < 1e-14
        assert float(oe[3]) == pytest.approx(1.2, rel=1e-12)
        assert float(oe[5]) == pytest.approx(2.5, rel=1e-12)

    def test_retrograde_equatorial(self):
        x = state_koe_to_cartesian(jnp.array([1.0e7, 0.3, math.pi, 1.2, 0.0, 2.5]), GM_EARTH)
        oe = state_cartesian_to_koe(x, GM_EARTH, tol=_SINGULAR_TOL)
        assert float(oe[2]) == pytest.approx(math.pi, abs=1e-12)
        assert math.isnan(float(oe[4]))
        assert float(oe[3]) == pytest.approx(1.2, rel=1e-12)
        assert float(oe[5]) == pytest.approx(2.5, rel=1e-12)

    def test_parabolic_slot_holds_semi_latus_rectum(self):
        x = state_koe_to_cartesian(jnp.array([1.0e7, 1.0, 0.4, 0.3, 0.2, 0.5]), GM_EARTH)
        oe = state_cartesian_to_koe(x, GM_EARTH, tol=_SINGULAR_TOL)
        assert float(oe[0]) == pytest.approx(1.0e7, rel=1e-12)
        assert float(oe[1]) == pytest.approx(1.0, abs=1e-12)

    def test_debug_logging(self, caplog):
        caplog.set_level(logging.DEBUG, logger="kepjax.coordinates.keplerian")
        state_cartesian_to_koe(_VENUS_STATE, GM_VENUS, tol=_SINGULAR_TOL)
        assert "Circular equatorial" in caplog.text


# ──────────────────────────────────────────────
# Keplerian -> Cartesian
# ──────────────────────────────────────────────


class TestKeplerianToCartesian:
    def test_odtbx_reference(self):
        oe = jnp.array(
            [
                8000.0e3,
                0.23,
                20.6 * DEG2RAD,
                274.78 * DEG2RAD,
                108.77 * DEG2RAD,
                46.11 * DEG2RAD,
            ]
        )
        expected = np.array(
            [
                2.021874804243437e6,
                6.042523817035284e6,
                -1.450371183512575e6,
                -7.118283509842652e3,
                4.169050171542199e3,
                2.029066072016241e3,
            ]
        )
        x = state_koe_to_cartesian(oe, 3.986004415e14)
        np.testing.assert_allclose(np.asarray(x), expected, rtol=1e-12)

    def test_degrees(self):
        oe_deg = jnp.array([8000.0e3, 0.23, 20.6, 274.78, 108.77, 46.11])
        oe_rad = oe_deg.at[2:].multiply(DEG2RAD)
        np.testing.assert_allclose(
            np.asarray(state_koe_to_cartesian(oe_deg, GM_EARTH, use_degrees=True)),
            np.asarray(state_koe_to_cartesian(oe_rad, GM_EARTH)),
            rtol=1e-13,
        )

    def test_tu_delft_example_1(self):
        oe = jnp.array(
            [
                6787746.891,
                0.000731104,
                51.68714486 * DEG2RAD,
                74.21987137 * DEG2RAD,
                127.5486706 * DEG2RAD,
                24.10027677 * DEG2RAD,
            ]
        )
        expected = np.array(
            [-2700816.14, -3314092.80, 5266346.42, 5168.606550, -5597.546618, -868.878445]
        )
        x = state_koe_to_cartesian(oe, 3.98600441e14)
        np.testing.assert_allclose(np.asarray(x), expected, rtol=1e-8)

    def test_tu_delft_example_2(self):
        oe = jnp.array(
            [
                7096137.00,
                0.0011219,
                92.0316 * DEG2RAD,
                120.6878 * DEG2RAD,
                296.1384 * DEG2RAD,
                239.5437 * DEG2RAD,
            ]
        )
        expected = np.array(
            [3126974.99, -6374445.74, 28673.59, -254.91197, -83.30107, 7485.70674]
        )
        x = state_koe_to_cartesian(oe, 3.98600441e14)
        np.testing.assert_allclose(np.asarray(x), expected, rtol=1e-3)

    def test_nan_angles_read_as_zero(self):
        oe_nan = jnp.array([7.0e6, 0.0, 0.0, jnp.nan, jnp.nan, 1.0])
        oe_zero = jnp.array([7.0e6, 0.0, 0.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_equal(
            np.asarray(state_koe_to_cartesian(oe_nan, GM_EARTH)),
            np.asarray(state_koe_to_cartesian(oe_zero, GM_EARTH)),
        )

    def test_inconsistent_elements_give_nan(self):
        x = state_koe_to_cartesian(jnp.array([1.0e7, 1.5, 0.1, 0.2, 0.3, 0.4]), GM_EARTH)
        assert bool(jnp.any(jnp.isnan(x)))

    def test_wrong_size_raises(self):
        with pytest.raises(InvalidArgumentError, match="6 elements"):
            state_koe_to_cartesian(jnp.zeros(7), GM_EARTH)

    def test_jit(self):
        oe = jnp.array([8.0e6, 0.23, 0.36, 4.8, 1.9, 0.8])
        jitted = jax.jit(lambda x: state_koe_to_cartesian(x, GM_EARTH))
        np.testing.assert_allclose(
            np.asarray(jitted(oe)),
            np.asarray(state_koe_to_cartesian(oe, GM_EARTH)),
            rtol=1e-12,
            atol=1e-6,
        )

    def test_vmap(self):
        oe = _random_elements(jax.random.PRNGKey(3), 8)
        batched = jax.vmap(lambda x: state_koe_to_cartesian(x, GM_EARTH))(oe)
        assert batched.shape == (8, 6)
        np.testing.assert_allclose(
            np.asarray(batched[5]),
            np.asarray(state_koe_to_cartesian(oe[5], GM_EARTH)),
            rtol=1e-12,
            atol=1e-6,
        )


# ──────────────────────────────────────────────
# Round trips
# ──────────────────────────────────────────────


class TestRoundTrip:
    @pytest.mark.parametrize("seed", range(5))
    def test_koe_cartesian_koe(self, seed):
        for oe in _random_elements(jax.random.PRNGKey(seed), 4):
            oe_back = state_cartesian_to_koe(state_koe_to_cartesian(oe, GM_EARTH), GM_EARTH)
            np.testing.assert_allclose(np.asarray(oe_back), np.asarray(oe), rtol=1e-9)

    @pytest.mark.parametrize("seed", range(5))
    def test_cartesian_koe_cartesian(self, seed):
        for oe in _random_elements(jax.random.PRNGKey(100 + seed), 4):
            x = state_koe_to_cartesian(oe, GM_EARTH)
            x_back = state_koe_to_cartesian(state_cartesian_to_koe(x, GM_EARTH), GM_EARTH)
            np.testing.assert_allclose(np.asarray(x_back), np.asarray(x), rtol=1e-9, atol=1e-6)

    def test_venus_typed_round_trip(self):
        elements = cartesian_to_keplerian(_VENUS_STATE, GM_VENUS, tol=_SINGULAR_TOL)
        state = keplerian_to_cartesian(elements, GM_VENUS)
        np.testing.assert_allclose(
            np.asarray(state.to_array()), np.asarray(_VENUS_STATE), rtol=1e-12, atol=1e-6
        )


# ──────────────────────────────────────────────
# Typed API
# ──────────────────────────────────────────────


class TestCartesianState:
    def test_from_array_accessors(self):
        state = CartesianState.from_array(_EARTH_STATE)
        assert float(state.x) == 3.75e6
        assert float(state.y) == 4.24e6
        assert float(state.z) == -1.39e6
        assert float(state.vx) == -4.65e3
        assert float(state.vy) == -2.21e3
        assert float(state.vz) == 1.66e3

    def test_to_array(self):
        state = CartesianState(jnp.array([1.0, 2.0, 3.0]), jnp.array([4.0, 5.0, 6.0]))
        np.testing.assert_array_equal(np.asarray(state.to_array()), np.arange(1.0, 7.0))

    def test_from_array_wrong_size(self):
        with pytest.raises(InvalidArgumentError):
            CartesianState.from_array(jnp.zeros(3))


class TestKeplerianElements:
    def test_inclined(self):
        elements = cartesian_to_keplerian(CartesianState.from_array(_EARTH_STATE), GM_EARTH)
        assert elements.orbit_type is OrbitType.INCLINED
        assert elements.semi_major_axis == pytest.approx(_EARTH_KOE[0], rel=1e-14)
        assert elements.argument_of_periapsis == pytest.approx(_EARTH_KOE[3], rel=1e-14)
        assert elements.longitude_of_ascending_node == pytest.approx(_EARTH_KOE[4], rel=1e-14)
        np.testing.assert_allclose(np.asarray(elements.to_array()), _EARTH_KOE, rtol=1e-14)

    def test_circular_equatorial(self):
        elements = cartesian_to_keplerian(_VENUS_STATE, GM_VENUS, tol=_SINGULAR_TOL)
        assert elements.orbit_type is OrbitType.CIRCULAR_EQUATORIAL
        assert elements.argument_of_periapsis is None
        assert elements.longitude_of_ascending_node is None
        assert elements.true_anomaly == pytest.approx(26.78 * DEG2RAD, rel=1e-12)

    def test_parabolic(self):
        x = state_koe_to_cartesian(jnp.array([1.0e7, 1.0, 0.4, 0.3, 0.2, 0.5]), GM_EARTH)
        elements = cartesian_to_keplerian(x, GM_EARTH, tol=_SINGULAR_TOL)
        assert elements.is_parabolic
        assert elements.semi_major_axis is None
        assert elements.semi_latus_rectum == pytest.approx(1.0e7, rel=1e-12)
        np.testing.assert_allclose(
            np.asarray(keplerian_to_cartesian(elements, GM_EARTH).to_array()),
            np.asarray(x),
            rtol=1e-9,
            atol=1e-6,
        )

    def test_semi_latus_rectum_elliptic(self):
        elements = KeplerianElements.from_array(jnp.array([1.0e7, 0.5, 0.3, 0.2, 0.1, 0.0]))
        assert elements.semi_latus_rectum == pytest.approx(0.75e7)

    def test_from_array_nan_becomes_none(self):
        elements = KeplerianElements.from_array(jnp.array([7.0e6, 0.0, 0.5, jnp.nan, 1.0, 2.0]))
        assert elements.orbit_type is OrbitType.CIRCULAR_INCLINED
        assert elements.argument_of_periapsis is None
        assert elements.longitude_of_ascending_node == 1.0
        assert math.isnan(float(elements.to_array()[3]))

    @pytest.mark.parametrize(
        "e, i, expected",
        [
            (0.0, 0.0, OrbitType.CIRCULAR_EQUATORIAL),
            (0.0, math.pi, OrbitType.CIRCULAR_EQUATORIAL),
            (0.0, 0.7, OrbitType.CIRCULAR_INCLINED),
            (0.4, 0.0, OrbitType.EQUATORIAL),
            (0.4, 0.7, OrbitType.INCLINED),
            (1.0, 0.7, OrbitType.PARABOLIC),
            (2.0, 0.7, OrbitType.INCLINED),
        ],
    )
    def test_classify_orbit(self, e, i, expected):
        assert classify_orbit(e, i) is expected
