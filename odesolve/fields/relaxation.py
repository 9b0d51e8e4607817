# odesolve/fields/relaxation.py
"""
Linear relaxation fields and the noise source for stochastic runs.

The stochastic relaxation (Ornstein-Uhlenbeck) process

    dx = -lam * (x - mu) dt + sigma dW

is integrated by pre-loading slots 1..n-1 of a zero buffer with the
Wiener increments sigma * sqrt(h) * Z_k and then running Euler with
``accumulate=True``: every step adds u_k + h*f(u_k) onto the increment
already sitting in slot k+1, which is the Euler-Maruyama update.
"""

from __future__ import annotations
from typing import Optional, Union
import math
import numpy as np

from ..utils.random import KeyLike, normal, rng_key


def relaxation(x: float, lam: float, mu: float = 0.0) -> float:
    """Scalar relaxation towards ``mu`` at rate ``lam``."""
    return -lam * (x - mu)


def linear_decay(x: float) -> float:
    """dx/dt = -x."""
    return -x


def relaxation_vector(xdot: np.ndarray, x: np.ndarray, N: int, lam: float, mu: float = 0.0) -> None:
    """Componentwise relaxation, N independent copies of :func:`relaxation`."""
    np.subtract(x, mu, out=xdot)
    np.multiply(xdot, -lam, out=xdot)


def seed_noise(
    x: Union[np.ndarray, "TrajectoryBuffer"],  # noqa: F821
    sigma: float,
    h: float,
    key: Optional[KeyLike] = None,
    N: int = 1,
) -> np.ndarray:
    """
    Pre-load Wiener increments into slots 1..n-1 of a trajectory buffer.

    Parameters
    ----------
    x : np.ndarray or TrajectoryBuffer
        Flat float64 buffer of N*n elements (slot 0 is left untouched)
    sigma : float
        Noise amplitude
    h : float
        Step size; increments have standard deviation ``sigma * sqrt(h)``
    key : int or np.random.Generator, optional
        Seed or generator; defaults to seed 42
    N : int
        State dimension when ``x`` is a bare array

    Returns
    -------
    np.ndarray
        The flat buffer
    """
    data = getattr(x, "data", x)
    N = getattr(x, "N", N)
    if not isinstance(data, np.ndarray) or data.dtype != np.float64:
        raise TypeError("Buffer must be a float64 numpy array")
    if h < 0:
        raise ValueError(f"Step size must be non-negative for noise scaling, got {h}")
    if data.size % N:
        raise ValueError(f"Buffer size {data.size} is not a multiple of N={N}")

    tail = data.size - N
    if tail <= 0:
        return data
    gen = rng_key() if key is None else key
    data[N:] = normal(gen, tail, std=sigma * math.sqrt(h))
    return data
