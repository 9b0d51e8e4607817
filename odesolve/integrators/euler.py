# odesolve/integrators/euler.py
"""
Forward Euler integration.

Provides the single-stage update u_{k+1} = u_k + h * f(u_k) for a dense
state block (vector kernel) and for a single float (scalar kernel). Both
kernels perform the same floating-point operations in the same order, so an
N=1 vector run reproduces a scalar run bit for bit.
"""

from __future__ import annotations
from typing import Callable
import numpy as np

from .base import StageWorkspace, Params


def write_target(u1: np.ndarray, target: np.ndarray, accumulate: bool) -> None:
    """
    Store a combined step result into the next trajectory slot.

    Parameters
    ----------
    u1 : np.ndarray
        Next state block, a view into the trajectory buffer
    target : np.ndarray
        Combined result ``u + h * (...)``
    accumulate : bool
        If True, add onto the existing contents of ``u1`` instead of
        overwriting them
    """
    if accumulate:
        np.add(u1, target, out=u1)
    else:
        u1[...] = target


def euler_step(
    field_fn: Callable,
    u: np.ndarray,
    u1: np.ndarray,
    h: float,
    params: Params,
    work: StageWorkspace,
    accumulate: bool = False,
) -> None:
    """
    Forward Euler step: u1 = u + h * f(u).

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
        Scratch arena; uses ``udot1`` and ``acc``
    accumulate : bool
        Additive write into ``u1`` (see :func:`write_target`)
    """
    udot, acc = work.udot1, work.acc

    field_fn(udot, u, u.shape[0], *params)

    np.multiply(udot, h, out=acc)
    np.add(u, acc, out=acc)
    write_target(u1, acc, accumulate)


def euler_step_scalar(field_fn: Callable, u: float, h: float, params: Params) -> float:
    """Forward Euler step for a single float; returns u + h * f(u)."""
    udot = field_fn(u, *params)
    return u + h * udot
