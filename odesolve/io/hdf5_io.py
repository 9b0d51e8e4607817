# odesolve/io/hdf5_io.py
"""
HDF5 trajectory storage.

Writes a trajectory buffer as an (n, N) float64 dataset with chunking and
compression, plus the time axis and run metadata, and reads it back into a
TrajectoryBuffer.
"""

from __future__ import annotations
import warnings
from typing import Optional, Tuple
import numpy as np

from ..solver.trajectory import TrajectoryBuffer

try:
    import h5py
    HDF5_AVAILABLE = True
except Exception:
    HDF5_AVAILABLE = False
    warnings.warn("h5py not available. HDF5 I/O will be disabled", stacklevel=2)


def save_trajectory_hdf5(
    path: str,
    trajectory: TrajectoryBuffer,
    group: str = "trajectory",
    chunks: Optional[Tuple[int, int]] = None,
    compression: Optional[str] = "gzip",
    compression_opts: int = 4,
) -> str:
    """
    Write a trajectory buffer to an HDF5 file.

    Parameters
    ----------
    path : str
        Output filename
    trajectory : TrajectoryBuffer
        Integrated trajectory
    group : str
        HDF5 group name
    chunks : tuple, optional
        Chunk shape (n_chunk, N_chunk). If None, auto-determined.
    compression : str, optional
        Compression algorithm ('gzip', 'lzf')
    compression_opts : int
        Compression level (0-9 for gzip)

    Returns
    -------
    str
        Path to written file
    """
    if not HDF5_AVAILABLE:
        raise RuntimeError("h5py not available; cannot write HDF5 files")

    n, N = trajectory.n, trajectory.N
    if chunks is None:
        chunks = (max(1, min(n, 1024)), max(1, min(N, 4096)))

    try:
        with h5py.File(path, "w") as f:
            grp = f.require_group(group)
            ds = grp.create_dataset(
                "states",
                data=trajectory.states,
                dtype="f8",
                chunks=chunks if n else None,
                compression=compression if n else None,
                compression_opts=compression_opts if (n and compression == "gzip") else None,
            )
            ds.attrs["description"] = "Time-major ODE states"
            grp.create_dataset("times", data=trajectory.times)

            grp.attrs["N"] = N
            grp.attrs["n"] = n
            grp.attrs["h"] = trajectory.h
            grp.attrs["t0"] = trajectory.t0
            grp.attrs["format_version"] = "1.0"
            for key in ("scheme", "field"):
                if key in trajectory.metadata:
                    grp.attrs[key] = str(trajectory.metadata[key])
    except Exception as e:
        raise RuntimeError(f"Failed to write HDF5 file {path}: {e}") from e

    return path


def load_trajectory_hdf5(path: str, group: str = "trajectory") -> TrajectoryBuffer:
    """Read a trajectory written by :func:`save_trajectory_hdf5`."""
    if not HDF5_AVAILABLE:
        raise RuntimeError("h5py not available; cannot open HDF5 files")

    with h5py.File(path, "r") as f:
        if group not in f:
            raise ValueError(f"Group '{group}' not found in {path}")
        grp = f[group]
        states = np.asarray(grp["states"][...], dtype=np.float64)
        N, n = int(grp.attrs["N"]), int(grp.attrs["n"])
        metadata = {key: str(grp.attrs[key]) for key in ("scheme", "field") if key in grp.attrs}
        return TrajectoryBuffer(
            data=np.ascontiguousarray(states).reshape(N * n),
            N=N,
            n=n,
            h=float(grp.attrs["h"]),
            t0=float(grp.attrs["t0"]),
            metadata=metadata,
        )
