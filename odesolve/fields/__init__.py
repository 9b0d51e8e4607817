"""
Demonstration vector fields.

- lorenz96: chaotic coupled system, N >= 4
- relaxation: linear relaxation fields and the Wiener-increment noise source
  used for the stochastic relaxation process
"""

from .lorenz96 import lorenz96, lorenz96_initial_state, LORENZ96_MIN_DIMENSION
from .relaxation import relaxation, linear_decay, relaxation_vector, seed_noise

__all__ = [
    "lorenz96",
    "lorenz96_initial_state",
    "LORENZ96_MIN_DIMENSION",
    "relaxation",
    "linear_decay",
    "relaxation_vector",
    "seed_noise",
]
