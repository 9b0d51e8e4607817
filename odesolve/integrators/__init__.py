"""
odesolve Integrators

Explicit single-step kernels for fixed-step ODE integration. Each vector
kernel follows the signature:

    <scheme>_step(field_fn, u, u1, h, params, work, accumulate=False)

where:
- field_fn: callable (xdot, x, N, *params) -> None, writes N derivatives
- u: (N,) current state block
- u1: (N,) next state block, written in place
- h: scalar step size
- work: StageWorkspace with preallocated scratch

Scalar kernels take (field_fn, u, h, params) and return the next value.
"""

from .base import VectorField, ScalarField, StageWorkspace, as_vector_field
from .schemes import (
    Scheme,
    scheme_from_name,
    scheme_name,
    resolve_scheme,
    available_schemes,
    SCHEME_ORDER,
    SCHEME_STAGES,
)
from .euler import euler_step, euler_step_scalar
from .heun import heun_step, heun_step_scalar
from .rk4 import rk4_step, rk4_step_scalar

__all__ = [
    "VectorField",
    "ScalarField",
    "StageWorkspace",
    "as_vector_field",
    "Scheme",
    "scheme_from_name",
    "scheme_name",
    "resolve_scheme",
    "available_schemes",
    "SCHEME_ORDER",
    "SCHEME_STAGES",
    "euler_step",
    "euler_step_scalar",
    "heun_step",
    "heun_step_scalar",
    "rk4_step",
    "rk4_step_scalar",
]
