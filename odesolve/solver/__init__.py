"""
odesolve Solver

Steppers that advance caller-owned trajectory buffers, the trajectory
container itself, and a simulation front end with named-scheme factories.
"""

from .stepper import integrate, integrate_scalar, check_min_dimension
from .trajectory import TrajectoryBuffer, estimate_memory_usage
from .simulation import (
    Simulation,
    SimulationOptions,
    create_simulation,
    compare_schemes,
    convergence_order,
)

__all__ = [
    "integrate",
    "integrate_scalar",
    "check_min_dimension",
    "TrajectoryBuffer",
    "estimate_memory_usage",
    "Simulation",
    "SimulationOptions",
    "create_simulation",
    "compare_schemes",
    "convergence_order",
]
