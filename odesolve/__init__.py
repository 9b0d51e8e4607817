"""
odesolve: fixed-step ODE integration over caller-owned trajectory buffers.

Explicit single-step schemes (Euler, Heun, classical RK4) for:
- Dense N-dimensional vector fields, f(xdot, x, N, *params)
- Scalar fields, f(x, *params), through an allocation-free fast path

Core workflow:
1. Pick a scheme by name → scheme_from_name / resolve_scheme
2. Allocate a trajectory → TrajectoryBuffer.from_initial
3. Step it in place → integrate / integrate_scalar (or Simulation.run)
4. Export → write_trajectory, save_trajectory_hdf5, write_gnuplot_script
5. Plot → plot_trajectory, plot_phase
"""

from __future__ import annotations

# Version info
__version__ = "0.1.0"
__author__ = "odesolve Contributors"

# Integrators - schemes and kernels
from .integrators import (
    Scheme,
    scheme_from_name,
    scheme_name,
    resolve_scheme,
    available_schemes,
    StageWorkspace,
    as_vector_field,
)

# Solver - steppers, trajectory storage, simulation front end
from .solver import (
    integrate,
    integrate_scalar,
    check_min_dimension,
    TrajectoryBuffer,
    Simulation,
    SimulationOptions,
    create_simulation,
    compare_schemes,
    convergence_order,
)

# Demonstration fields
from .fields import lorenz96, relaxation, linear_decay, seed_noise

# I/O
from .io import write_trajectory, read_trajectory, write_gnuplot_script

# Visualization
from .visualization import plot_trajectory, plot_phase

# Configuration
from .utils.config import configure, get_config, reset_config

__all__ = [
    # Version
    "__version__",
    # Schemes
    "Scheme",
    "scheme_from_name",
    "scheme_name",
    "resolve_scheme",
    "available_schemes",
    "StageWorkspace",
    "as_vector_field",
    # Steppers
    "integrate",
    "integrate_scalar",
    "check_min_dimension",
    "TrajectoryBuffer",
    "Simulation",
    "SimulationOptions",
    "create_simulation",
    "compare_schemes",
    "convergence_order",
    # Fields
    "lorenz96",
    "relaxation",
    "linear_decay",
    "seed_noise",
    # I/O
    "write_trajectory",
    "read_trajectory",
    "write_gnuplot_script",
    # Visualization
    "plot_trajectory",
    "plot_phase",
    # Configuration
    "configure",
    "get_config",
    "reset_config",
]
