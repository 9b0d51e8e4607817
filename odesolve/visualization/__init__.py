"""
Static trajectory plots with matplotlib.
"""

from .static import plot_trajectory, plot_phase, MPL_AVAILABLE

__all__ = [
    "plot_trajectory",
    "plot_phase",
    "MPL_AVAILABLE",
]
