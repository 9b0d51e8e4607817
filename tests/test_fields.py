"""Demonstration fields: Lorenz 96, relaxation, noise source."""

import math

import numpy as np
import pytest

from odesolve.fields import (
    lorenz96,
    lorenz96_initial_state,
    LORENZ96_MIN_DIMENSION,
    relaxation,
    relaxation_vector,
    linear_decay,
    seed_noise,
)
from odesolve.solver import integrate, integrate_scalar, check_min_dimension, TrajectoryBuffer


def lorenz96_reference(x, F):
    """Per-component Lorenz 96 with cyclic indices, plain Python floats."""
    N = len(x)
    return [(x[(i + 1) % N] - x[(i - 2) % N]) * x[(i - 1) % N] - x[i] + F for i in range(N)]


def euler_reference(x, F, h):
    xdot = lorenz96_reference(x, F)
    return [x[i] + xdot[i] * h for i in range(len(x))]


def rk4_reference(x, F, h):
    N = len(x)
    h2, h6 = h / 2.0, h / 6.0
    k1 = lorenz96_reference(x, F)
    k2 = lorenz96_reference([x[i] + k1[i] * h2 for i in range(N)], F)
    k3 = lorenz96_reference([x[i] + k2[i] * h2 for i in range(N)], F)
    k4 = lorenz96_reference([x[i] + k3[i] * h for i in range(N)], F)
    return [x[i] + (k1[i] + k2[i] * 2.0 + k3[i] * 2.0 + k4[i]) * h6 for i in range(N)]


# ---------------------------------------------------------------------------
# Lorenz 96
# ---------------------------------------------------------------------------

def test_lorenz96_derivative_at_unit_vector():
    x = np.array([1.0, 0.0, 0.0, 0.0])
    xdot = np.empty(4)
    lorenz96(xdot, x, 4, 8.0)
    np.testing.assert_array_equal(xdot, [7.0, 8.0, 8.0, 8.0])


@pytest.mark.parametrize("N", [4, 5, 10, 37])
def test_lorenz96_matches_cyclic_formula(N):
    x = np.random.default_rng(N).normal(size=N)
    xdot = np.empty(N)
    lorenz96(xdot, x, N, 8.0)
    np.testing.assert_array_equal(xdot, lorenz96_reference(list(x), 8.0))


def test_lorenz96_euler_two_steps():
    N, n, F, h = 4, 3, 8.0, 0.01
    x = np.zeros(N * n)
    x[:N] = [1.0, 0.0, 0.0, 0.0]
    integrate("euler", lorenz96, x, N, n, h, F)
    states = x.reshape(n, N)

    np.testing.assert_allclose(states[1], [1.07, 0.08, 0.08, 0.08], rtol=1e-14)
    row1 = euler_reference([1.0, 0.0, 0.0, 0.0], F, h)
    np.testing.assert_array_equal(states[1], row1)
    np.testing.assert_array_equal(states[2], euler_reference(row1, F, h))


def test_lorenz96_rk4_matches_reference():
    N, n, F, h = 6, 5, 8.0, 0.05
    x = np.zeros(N * n)
    x[:N] = [1.0, 0.5, -0.25, 2.0, 0.0, -1.5]
    integrate("rk4", lorenz96, x, N, n, h, F)
    states = x.reshape(n, N)

    expected = list(states[0])
    for k in range(1, n):
        expected = rk4_reference(expected, F, h)
        np.testing.assert_array_equal(states[k], expected)


@pytest.mark.parametrize("scheme", ["euler", "heun", "rk4"])
def test_equilibrium_is_a_fixed_point(scheme):
    N, n, F = 8, 50, 8.0
    x = np.zeros(N * n)
    x[:N] = F
    integrate(scheme, lorenz96, x, N, n, 0.01, F)
    assert np.all(x == F)


def test_chaotic_run_stays_bounded():
    N, n = 40, 2000
    x = np.zeros(N * n)
    x[:N] = lorenz96_initial_state(N, 8.0)
    integrate("rk4", lorenz96, x, N, n, 0.01, 8.0)
    assert np.all(np.isfinite(x))
    assert np.max(np.abs(x)) < 30.0
    # the perturbation has spread away from equilibrium
    assert np.std(x[-N:]) > 0.5


def test_initial_state():
    x0 = lorenz96_initial_state(5, F=8.0, perturbation=0.01)
    assert x0[0] == 8.0 + 0.01
    np.testing.assert_array_equal(x0[1:], 8.0)
    assert x0.dtype == np.float64


def test_field_rejects_small_dimension_before_any_write():
    x = np.zeros(9)
    x[:3] = [1.0, 2.0, 3.0]
    with pytest.raises(ValueError, match="dimension >= 4"):
        integrate("euler", lorenz96, x, 3, 3, 0.01, 8.0)
    np.testing.assert_array_equal(x, [1.0, 2.0, 3.0, 0, 0, 0, 0, 0, 0])


def test_field_rejects_mismatched_state():
    with pytest.raises(ValueError, match="components"):
        lorenz96(np.empty(5), np.zeros(5), 4, 8.0)


def test_minimum_dimension():
    assert LORENZ96_MIN_DIMENSION == 4
    with pytest.raises(ValueError):
        lorenz96_initial_state(3)
    with pytest.raises(ValueError):
        check_min_dimension(3, LORENZ96_MIN_DIMENSION, name="lorenz96")


# ---------------------------------------------------------------------------
# Relaxation
# ---------------------------------------------------------------------------

def test_relaxation_values():
    assert relaxation(2.0, 0.5, 1.0) == -0.5
    assert relaxation(2.0, 0.5) == -1.0
    assert linear_decay(3.0) == -3.0


def test_relaxation_vector_matches_scalar():
    x = np.array([-1.0, 0.0, 2.5])
    xdot = np.empty(3)
    relaxation_vector(xdot, x, 3, 0.8, 0.5)
    np.testing.assert_allclose(xdot, [relaxation(v, 0.8, 0.5) for v in x], rtol=1e-15)


def test_relaxation_converges_to_target():
    n = 2001
    x = np.zeros(n)
    x[0] = 5.0
    integrate_scalar("rk4", relaxation, x, n, 0.01, 2.0, 1.0)
    assert abs(x[-1] - 1.0) < 1e-6


# ---------------------------------------------------------------------------
# Noise source
# ---------------------------------------------------------------------------

def test_seed_noise_leaves_initial_slot():
    x = np.zeros(1000)
    x[0] = 3.0
    seed_noise(x, 0.2, 0.01, key=0)
    assert x[0] == 3.0
    assert np.all(x[1:] != 0.0)


def test_seed_noise_scale():
    sigma, h = 0.5, 0.04
    x = np.zeros(20001)
    seed_noise(x, sigma, h, key=1)
    assert np.std(x[1:]) == pytest.approx(sigma * math.sqrt(h), rel=0.03)
    assert abs(np.mean(x[1:])) < 0.005


def test_seed_noise_is_reproducible():
    a = seed_noise(np.zeros(50), 1.0, 0.1, key=9)
    b = seed_noise(np.zeros(50), 1.0, 0.1, key=9)
    c = seed_noise(np.zeros(50), 1.0, 0.1, key=10)
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)


def test_seed_noise_on_trajectory_buffer():
    buf = TrajectoryBuffer.from_initial([1.0, 2.0], 10, h=0.1)
    seed_noise(buf, 0.3, 0.1, key=4)
    np.testing.assert_array_equal(buf.state(0), [1.0, 2.0])
    assert np.all(buf.states[1:] != 0.0)


def test_seed_noise_rejects_bad_buffers():
    with pytest.raises(TypeError):
        seed_noise(np.zeros(4, dtype=np.float32), 1.0, 0.1)
    with pytest.raises(ValueError):
        seed_noise(np.zeros(5), 1.0, 0.1, N=2)
    with pytest.raises(ValueError):
        seed_noise(np.zeros(5), 1.0, -0.1)


def test_accumulate_euler_realises_euler_maruyama():
    lam, mu, h, n = 1.5, 0.2, 0.01, 300
    x = np.zeros(n)
    x[0] = 1.0
    seed_noise(x, 0.4, h, key=11)
    dW = x.copy()

    integrate_scalar("euler", relaxation, x, n, h, lam, mu, accumulate=True)

    u = dW[0]
    for k in range(1, n):
        u = dW[k] + (u + h * relaxation(u, lam, mu))
        assert x[k] == u
