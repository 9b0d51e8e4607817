# odesolve/integrators/base.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Protocol, Tuple
import numpy as np


class VectorField(Protocol):
    """
    Vector-field protocol for the N-dimensional stepper.

    Parameters
    ----------
    xdot : np.ndarray
        Destination derivative buffer, shape (N,), float64. Must be fully
        written by the call.
    x : np.ndarray
        Current state, shape (N,). Read-only for the field.
    N : int
        State dimension
    *params
        Extra parameters, passed through unchanged on every call

    Fields keep no state between calls: evaluating twice at the same state
    within one step gives identical results. Explicit time dependence has to
    come in through ``params``.
    """

    def __call__(self, xdot: np.ndarray, x: np.ndarray, N: int, *params) -> None:
        ...


ScalarField = Callable[..., float]
"""
Scalar field signature for the N=1 stepper: ``field_fn(x, *params) -> float``.
"""

Params = Tuple
"""Extra vector-field parameters, forwarded positionally."""


@dataclass
class StageWorkspace:
    """
    Scratch arena for one integration call.

    Holds the stage derivatives ``udot1``..``udot4``, the trial state ``v``
    and the combination accumulator ``acc``. Arrays are allocated once per
    call, sized to the state dimension, and fully overwritten before use in
    every step. None of them may alias the trajectory buffer.
    """
    udot1: np.ndarray
    udot2: np.ndarray
    udot3: np.ndarray
    udot4: np.ndarray
    v: np.ndarray
    acc: np.ndarray

    @classmethod
    def allocate(cls, N: int, n_stages: int = 4) -> "StageWorkspace":
        """Allocate scratch for ``n_stages`` derivative evaluations of size N."""
        if N < 1:
            raise ValueError(f"Dimension must be >= 1, got {N}")
        if not 1 <= n_stages <= 4:
            raise ValueError(f"n_stages must be in [1, 4], got {n_stages}")
        empty = np.empty(0, dtype=np.float64)
        stages = [np.empty(N, dtype=np.float64) if i < n_stages else empty
                  for i in range(4)]
        return cls(
            udot1=stages[0],
            udot2=stages[1],
            udot3=stages[2],
            udot4=stages[3],
            v=np.empty(N, dtype=np.float64),
            acc=np.empty(N, dtype=np.float64),
        )

    @property
    def N(self) -> int:
        return int(self.v.shape[0])

    @property
    def nbytes(self) -> int:
        return sum(a.nbytes for a in (self.udot1, self.udot2, self.udot3,
                                      self.udot4, self.v, self.acc))


def as_vector_field(scalar_fn: ScalarField) -> VectorField:
    """
    Wrap a scalar field ``f(x, *params)`` as a one-component vector field.

    The wrapped field evaluates ``f`` on ``x[0]`` and stores the result in
    ``xdot[0]``, so the N-dimensional stepper with N=1 reproduces the scalar
    stepper exactly.
    """
    def field_fn(xdot, x, N, *params):
        xdot[0] = scalar_fn(x[0], *params)

    field_fn.__name__ = getattr(scalar_fn, "__name__", "scalar_field")
    return field_fn
