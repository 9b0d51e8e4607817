# odesolve/fields/lorenz96.py
"""
The Lorenz 96 system.

    dx_i/dt = (x_{i+1} - x_{i-2}) * x_{i-1} - x_i + F

with cyclic indices. Chaotic for F around 8 and N >= 4.
"""

from __future__ import annotations
import numpy as np

LORENZ96_MIN_DIMENSION = 4


def lorenz96(xdot: np.ndarray, x: np.ndarray, N: int, F: float) -> None:
    """
    Lorenz 96 vector field.

    Parameters
    ----------
    xdot : np.ndarray
        Destination, shape (N,)
    x : np.ndarray
        State, shape (N,)
    N : int
        Dimension, at least 4
    F : float
        Forcing
    """
    if N < LORENZ96_MIN_DIMENSION:
        raise ValueError(f"Lorenz 96 needs dimension >= {LORENZ96_MIN_DIMENSION}, got {N}")
    if x.shape[0] != N:
        raise ValueError(f"State has {x.shape[0]} components, N={N}")
    xdot[0] = (x[1] - x[N - 2]) * x[N - 1] - x[0] + F
    xdot[1] = (x[2] - x[N - 1]) * x[0] - x[1] + F
    xdot[2:N - 1] = (x[3:N] - x[0:N - 3]) * x[1:N - 2] - x[2:N - 1] + F
    xdot[N - 1] = (x[0] - x[N - 3]) * x[N - 2] - x[N - 1] + F


def lorenz96_initial_state(N: int, F: float = 8.0, perturbation: float = 0.01) -> np.ndarray:
    """Equilibrium x_i = F with the first component nudged by ``perturbation``."""
    if N < LORENZ96_MIN_DIMENSION:
        raise ValueError(f"Lorenz 96 needs dimension >= {LORENZ96_MIN_DIMENSION}, got {N}")
    x0 = np.full(N, F, dtype=np.float64)
    x0[0] += perturbation
    return x0
