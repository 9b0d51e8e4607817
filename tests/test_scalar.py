"""Scalar stepper and its equivalence with the N=1 vector stepper."""

import math

import numpy as np
import pytest

from odesolve.integrators import as_vector_field
from odesolve.fields import relaxation, linear_decay, seed_noise
from odesolve.solver import integrate, integrate_scalar

SCHEMES = ["euler", "heun", "rk4"]


def logistic(x, r):
    return r * x * (1.0 - x)


def forced(x, a, w):
    return -a * x + math.sin(w * x)


@pytest.mark.parametrize("scheme", SCHEMES)
@pytest.mark.parametrize("field, params, x0", [
    (linear_decay, (), 1.0),
    (relaxation, (0.7, 0.3), -2.5),
    (logistic, (2.3,), 0.01),
    (forced, (0.4, 3.0), 1.2),
])
def test_scalar_matches_vector_bit_for_bit(scheme, field, params, x0):
    n, h = 200, 0.037
    xs = np.zeros(n)
    xv = np.zeros(n)
    xs[0] = xv[0] = x0
    integrate_scalar(scheme, field, xs, n, h, *params)
    integrate(scheme, as_vector_field(field), xv, 1, n, h, *params)
    np.testing.assert_array_equal(xs, xv)


@pytest.mark.parametrize("scheme", SCHEMES)
def test_scalar_matches_vector_in_accumulate_mode(scheme):
    n, h = 100, 0.01
    xs = np.zeros(n)
    xs[0] = 1.0
    seed_noise(xs, 0.5, h, key=3)
    xv = xs.copy()
    integrate_scalar(scheme, relaxation, xs, n, h, 1.5, accumulate=True)
    integrate(scheme, as_vector_field(relaxation), xv, 1, n, h, 1.5, accumulate=True)
    np.testing.assert_array_equal(xs, xv)


def test_euler_decay_closed_form():
    n, h = 11, 0.1
    x = np.zeros(n)
    x[0] = 1.0
    integrate_scalar("euler", linear_decay, x, n, h)
    np.testing.assert_allclose(x, (1.0 - h) ** np.arange(n), rtol=1e-12)


def test_rk4_decay_is_close_to_exponential():
    n, h = 11, 0.1
    x = np.zeros(n)
    x[0] = 1.0
    integrate_scalar("RK4", linear_decay, x, n, h)
    assert abs(x[-1] - math.exp(-1.0)) < 1e-6


@pytest.mark.parametrize("scheme", SCHEMES)
def test_single_slot_untouched(scheme):
    x = np.array([4.0])
    integrate_scalar(scheme, linear_decay, x, 1, 0.1)
    assert x[0] == 4.0


def test_zero_field_is_constant():
    x = np.zeros(50)
    x[0] = 3.5
    integrate_scalar("heun", lambda u: 0.0, x, 50, 0.2)
    assert np.all(x == 3.5)


def test_accumulate_adds_into_next_slot():
    x = np.array([1.0, 0.25, -0.5])
    integrate_scalar("euler", lambda u: 0.0, x, 3, 0.1, accumulate=True)
    np.testing.assert_array_equal(x, [1.0, 1.25, 0.75])


def test_unknown_scheme_rejected():
    x = np.array([1.0, 7.0])
    with pytest.raises(ValueError, match="Unknown ODE scheme"):
        integrate_scalar("adams", linear_decay, x, 2, 0.1)
    assert x[1] == 7.0


def test_size_mismatch_rejected():
    with pytest.raises(ValueError):
        integrate_scalar("euler", linear_decay, np.zeros(4), 5, 0.1)


def test_two_dimensional_buffer_of_right_size_is_accepted():
    x = np.zeros((5, 1))
    x[0, 0] = 1.0
    integrate_scalar("euler", linear_decay, x, 5, 0.5)
    np.testing.assert_allclose(x[:, 0], 0.5 ** np.arange(5))
