# odesolve/integrators/heun.py
"""
Heun's method (improved Euler, explicit trapezoidal RK2).

Performs: u_{k+1} = u_k + h/2 * (f(u_k) + f(u_k + h * f(u_k)))

Second order accurate with two field evaluations per step. The predictor
stage is a full Euler step; the corrector averages the slopes at both ends.
"""

from __future__ import annotations
from typing import Callable
import numpy as np

from .base import StageWorkspace, Params
from .euler import write_target


def heun_step(
    field_fn: Callable,
    u: np.ndarray,
    u1: np.ndarray,
    h: float,
    params: Params,
    work: StageWorkspace,
    accumulate: bool = False,
) -> None:
    """
    Heun step on a dense state block.

    Parameters
    ----------
    field_fn : VectorField
        ``field_fn(xdot, x, N, *params)``
    u : np.ndarray
        Current state, shape (N,)
    u1 : np.ndarray
        Next state slot, shape (N,), written in place
    h : float
        Step size
    params : tuple
        Extra field parameters
    work : StageWorkspace
        Scratch arena; uses ``udot1``, ``udot2``, ``v`` and ``acc``
    accumulate : bool
        Additive write into ``u1``

    Notes
    -----
    Stage order: f(u), then f(v) with v = u + h * f(u).
    """
    N = u.shape[0]
    h2 = h / 2.0
    udot1, udot2, v, acc = work.udot1, work.udot2, work.v, work.acc

    # Predictor
    field_fn(udot1, u, N, *params)
    np.multiply(udot1, h, out=v)
    np.add(u, v, out=v)

    # Corrector
    field_fn(udot2, v, N, *params)
    np.add(udot1, udot2, out=acc)
    np.multiply(acc, h2, out=acc)
    np.add(u, acc, out=acc)
    write_target(u1, acc, accumulate)


def heun_step_scalar(field_fn: Callable, u: float, h: float, params: Params) -> float:
    """Heun step for a single float."""
    h2 = h / 2.0
    udot1 = field_fn(u, *params)
    v = u + h * udot1
    udot2 = field_fn(v, *params)
    return u + h2 * (udot1 + udot2)
