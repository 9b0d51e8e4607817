# odesolve/io/text_writer.py
"""
Plain-text trajectory output.

One row per time step, whitespace-delimited fixed-width floats, columns are
the state components. Scalar (N=1) trajectories get a leading time column by
default so that the file can be plotted directly.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union
import numpy as np

from ..solver.trajectory import TrajectoryBuffer

PathLike = Union[str, Path]

DEFAULT_FORMAT = "%23.16f"


def _as_rows(trajectory, N: Optional[int]):
    """Return (rows, N, h, t0) for a TrajectoryBuffer or a flat/2-D array."""
    if isinstance(trajectory, TrajectoryBuffer):
        return trajectory.states, trajectory.N, trajectory.h, trajectory.t0

    data = np.asarray(trajectory, dtype=np.float64)
    if data.ndim == 2:
        if N is not None and data.shape[1] != N:
            raise ValueError(f"Array has {data.shape[1]} columns, N={N}")
        return data, data.shape[1], None, None
    if data.ndim != 1:
        raise ValueError(f"Trajectory must be 1-D or 2-D, got {data.ndim}-D")
    N = 1 if N is None else int(N)
    if N < 1 or data.size % N:
        raise ValueError(f"Buffer of {data.size} elements cannot hold states of dimension {N}")
    return data.reshape(-1, N), N, None, None


def write_trajectory(
    path: PathLike,
    trajectory: Union[TrajectoryBuffer, np.ndarray],
    N: Optional[int] = None,
    h: Optional[float] = None,
    t0: Optional[float] = None,
    time_column: Optional[bool] = None,
    fmt: str = DEFAULT_FORMAT,
) -> Path:
    """
    Write a trajectory as fixed-width text.

    Parameters
    ----------
    path : str or Path
        Output file; parent directories are created
    trajectory : TrajectoryBuffer or np.ndarray
        Buffer object, flat time-major array (with ``N``), or (n, N) array
    N : int, optional
        State dimension for flat arrays
    h : float, optional
        Step size for the time column; overrides the buffer's step size
    t0 : float, optional
        Start time for the time column; overrides the buffer's start time,
        0.0 for bare arrays
    time_column : bool, optional
        Prepend ``t0 + k*h``. Defaults to True for N == 1.
    fmt : str
        printf-style format applied to every column

    Returns
    -------
    Path
        Path to the written file
    """
    rows, N, buf_h, buf_t0 = _as_rows(trajectory, N)
    if time_column is None:
        time_column = N == 1

    if time_column:
        step = buf_h if h is None else h
        start = t0 if t0 is not None else buf_t0
        if start is None:
            start = 0.0
        if step is None:
            raise ValueError("A time column needs the step size h")
        times = start + step * np.arange(rows.shape[0], dtype=np.float64)
        rows = np.column_stack([times, rows])

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(path, rows, fmt=fmt, delimiter=" ")
    return path


def read_trajectory(path: PathLike) -> np.ndarray:
    """Load a text trajectory as an (n, columns) float64 array."""
    return np.loadtxt(Path(path), dtype=np.float64, ndmin=2)
