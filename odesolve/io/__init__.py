"""
odesolve I/O

- Fixed-width text trajectories (one row per step)
- HDF5 trajectory storage (requires h5py)
- Gnuplot command files
"""

from .text_writer import write_trajectory, read_trajectory
from .gnuplot import write_gnuplot_script, run_gnuplot
from .hdf5_io import save_trajectory_hdf5, load_trajectory_hdf5, HDF5_AVAILABLE

__all__ = [
    "write_trajectory",
    "read_trajectory",
    "write_gnuplot_script",
    "run_gnuplot",
    "save_trajectory_hdf5",
    "load_trajectory_hdf5",
    "HDF5_AVAILABLE",
]
