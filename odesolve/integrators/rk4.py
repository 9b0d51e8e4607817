# odesolve/integrators/rk4.py

from __future__ import annotations
from typing import Callable
import numpy as np

from .base import StageWorkspace, Params
from .euler import write_target


def rk4_step(
    field_fn: Callable,
    u: np.ndarray,
    u1: np.ndarray,
    h: float,
    params: Params,
    work: StageWorkspace,
    accumulate: bool = False,
) -> None:
    """
    Classical Runge-Kutta 4 step.

    Parameters
    ----------
    field_fn : callable(xdot, x, N, *params)
    u : (N,) current state
    u1 : (N,) next state slot, written in place
    h : step size
    params : extra field parameters
    work : scratch arena with all four stage buffers
    accumulate : add onto ``u1`` instead of overwriting
    """
    N = u.shape[0]
    h2 = h / 2.0
    h6 = h / 6.0
    udot1, udot2, udot3, udot4 = work.udot1, work.udot2, work.udot3, work.udot4
    v, acc = work.v, work.acc

    field_fn(udot1, u, N, *params)

    np.multiply(udot1, h2, out=v)
    np.add(u, v, out=v)
    field_fn(udot2, v, N, *params)

    np.multiply(udot2, h2, out=v)
    np.add(u, v, out=v)
    field_fn(udot3, v, N, *params)

    np.multiply(udot3, h, out=v)
    np.add(u, v, out=v)
    field_fn(udot4, v, N, *params)

    # ((udot1 + 2*udot2) + 2*udot3) + udot4, left to right like the scalar kernel
    np.multiply(udot2, 2.0, out=acc)
    np.add(udot1, acc, out=acc)
    np.multiply(udot3, 2.0, out=v)
    np.add(acc, v, out=acc)
    np.add(acc, udot4, out=acc)
    np.multiply(acc, h6, out=acc)
    np.add(u, acc, out=acc)
    write_target(u1, acc, accumulate)


def rk4_step_scalar(field_fn: Callable, u: float, h: float, params: Params) -> float:
    h2 = h / 2.0
    h6 = h / 6.0
    udot1 = field_fn(u, *params)
    udot2 = field_fn(u + h2 * udot1, *params)
    udot3 = field_fn(u + h2 * udot2, *params)
    udot4 = field_fn(u + h * udot3, *params)
    return u + h6 * (udot1 + 2.0 * udot2 + 2.0 * udot3 + udot4)
