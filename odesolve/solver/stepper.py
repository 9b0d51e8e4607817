# odesolve/solver/stepper.py
"""
Fixed-step integration over caller-owned trajectory buffers.

- ``integrate``: dense N-dimensional state, flat time-major buffer of N*n floats
- ``integrate_scalar``: N=1 fast path on a buffer of n floats, no per-step
  array work

Both validate every precondition before the first step, resolve the scheme
once per call and then run a plain loop over the n-1 transitions. Slot 0 must
hold the initial state; slots 1..n-1 are written in place.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional
import math
import numpy as np

from ..integrators import (
    Scheme,
    StageWorkspace,
    resolve_scheme,
    scheme_name,
    SCHEME_STAGES,
    euler_step,
    euler_step_scalar,
    heun_step,
    heun_step_scalar,
    rk4_step,
    rk4_step_scalar,
)
from ..utils.config import get_config

_VECTOR_KERNELS: Dict[Scheme, Callable] = {
    Scheme.EULER: euler_step,
    Scheme.HEUN: heun_step,
    Scheme.RK4: rk4_step,
}

_SCALAR_KERNELS: Dict[Scheme, Callable] = {
    Scheme.EULER: euler_step_scalar,
    Scheme.HEUN: heun_step_scalar,
    Scheme.RK4: rk4_step_scalar,
}

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _check_count(value, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    value = int(value)
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _check_step_size(h) -> float:
    h = float(h)
    if not math.isfinite(h):
        raise ValueError(f"Step size must be finite, got {h}")
    return h


def _check_buffer(x, size: int) -> np.ndarray:
    """Ensure the trajectory buffer can be stepped in place."""
    if not isinstance(x, np.ndarray):
        raise TypeError(f"Trajectory buffer must be a numpy.ndarray, got {type(x).__name__}")
    if x.dtype != np.float64:
        raise ValueError(f"Trajectory buffer must have dtype float64, got {x.dtype}")
    if not x.flags.c_contiguous:
        raise ValueError("Trajectory buffer must be C-contiguous")
    if not x.flags.writeable:
        raise ValueError("Trajectory buffer is read-only")
    if x.size != size:
        raise ValueError(f"Trajectory buffer holds {x.size} elements, expected {size}")
    return x


def _check_field(field_fn) -> None:
    if not callable(field_fn):
        raise TypeError("field_fn must be callable")


def _field_label(field_fn) -> str:
    return getattr(field_fn, "__name__", type(field_fn).__name__)


def _announce(scheme: Scheme, field_fn) -> None:
    if get_config().verbose:
        print(f"{scheme_name(scheme).upper()} : {_field_label(field_fn)}")


def check_min_dimension(N: int, minimum: int, name: str = "vector field") -> int:
    """
    Reject state dimensions below what a vector field supports.

    Raises
    ------
    ValueError
        If ``N < minimum``
    """
    N = _check_count(N, "Dimension", 1)
    if N < minimum:
        raise ValueError(f"{name} needs dimension >= {minimum}, got {N}")
    return N

# ---------------------------------------------------------------------------
# Steppers
# ---------------------------------------------------------------------------

def integrate(
    scheme,
    field_fn: Callable,
    x: np.ndarray,
    N: int,
    n: int,
    h: float,
    *params,
    accumulate: Optional[bool] = None,
    announce: bool = True,
) -> np.ndarray:
    """
    Advance an N-dimensional trajectory buffer in place.

    Parameters
    ----------
    scheme : Scheme, str or int
        Integration scheme; unknown values raise before any work is done
    field_fn : VectorField
        ``field_fn(xdot, x, N, *params)`` writing N derivatives into ``xdot``
    x : np.ndarray
        C-contiguous float64 buffer of exactly N*n elements, time-major
        (state k occupies ``x[k*N:(k+1)*N]``). Slot 0 holds the initial state.
    N : int
        State dimension, >= 1
    n : int
        Number of trajectory slots. ``n <= 1`` performs no steps.
    h : float
        Step size
    *params
        Extra parameters forwarded to ``field_fn``
    accumulate : bool, optional
        If True, each step adds its result onto the existing contents of the
        next slot (the buffer must then be zero-initialised, or pre-loaded
        with increments). Defaults to ``get_config().accumulate``.
    announce : bool
        Print the scheme label when ``get_config().verbose`` is set

    Returns
    -------
    np.ndarray
        The same buffer ``x``
    """
    scheme = resolve_scheme(scheme)
    _check_field(field_fn)
    N = _check_count(N, "Dimension", 1)
    n = _check_count(n, "Step count", 0)
    h = _check_step_size(h)
    _check_buffer(x, N * n)
    if accumulate is None:
        accumulate = get_config().accumulate

    if announce:
        _announce(scheme, field_fn)
    if n <= 1:
        return x

    states = x.reshape(n, N)
    work = StageWorkspace.allocate(N, SCHEME_STAGES[scheme])
    step = _VECTOR_KERNELS[scheme]

    for k in range(n - 1):
        step(field_fn, states[k], states[k + 1], h, params, work, accumulate)

    return x


def integrate_scalar(
    scheme,
    field_fn: Callable,
    x: np.ndarray,
    n: int,
    h: float,
    *params,
    accumulate: Optional[bool] = None,
    announce: bool = True,
) -> np.ndarray:
    """
    Advance a scalar (N=1) trajectory buffer in place.

    Same contract as :func:`integrate` with ``field_fn(x, *params) -> float``.
    Produces exactly the values ``integrate`` gives for N=1 with the field
    wrapped by :func:`odesolve.integrators.as_vector_field`.
    """
    scheme = resolve_scheme(scheme)
    _check_field(field_fn)
    n = _check_count(n, "Step count", 0)
    h = _check_step_size(h)
    _check_buffer(x, n)
    if accumulate is None:
        accumulate = get_config().accumulate

    if announce:
        _announce(scheme, field_fn)
    if n <= 1:
        return x

    u = x.reshape(n)
    step = _SCALAR_KERNELS[scheme]

    for k in range(1, n):
        target = step(field_fn, u[k - 1], h, params)
        if accumulate:
            u[k] += target
        else:
            u[k] = target

    return x
