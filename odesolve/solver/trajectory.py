# odesolve/solver/trajectory.py
"""
Trajectory buffer with a fixed, time-major float64 layout.

The buffer is a flat array of N*n doubles; state k occupies
``data[k*N:(k+1)*N]``. Steppers write into it in place and never resize it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import warnings
import numpy as np

from ..utils.config import get_config


def estimate_memory_usage(N: int, n: int, n_stages: int = 4) -> float:
    """Estimate memory usage in GB for a trajectory buffer plus scratch."""
    buffer_size = N * n * 8
    # udot1..udot4, v, acc
    workspace_size = N * (n_stages + 2) * 8
    return (buffer_size + workspace_size) / (1024**3)


@dataclass
class TrajectoryBuffer:
    """
    Container for an integrated trajectory.

    Attributes
    ----------
    data : np.ndarray
        Flat time-major states, shape (N*n,), dtype float64
    N : int
        State dimension
    n : int
        Number of trajectory slots (time steps including the initial state)
    h : float
        Step size used to build the time axis
    t0 : float
        Time of slot 0
    metadata : dict
        Additional run information (scheme, field, timing)
    """
    data: np.ndarray
    N: int
    n: int
    h: float = 1.0
    t0: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.N < 1:
            raise ValueError(f"Dimension must be >= 1, got {self.N}")
        if self.n < 0:
            raise ValueError(f"Step count must be >= 0, got {self.n}")
        if not isinstance(self.data, np.ndarray) or self.data.dtype != np.float64:
            raise TypeError("data must be a float64 numpy array")
        if self.data.ndim != 1 or self.data.size != self.N * self.n:
            raise ValueError(
                f"data must be flat with {self.N * self.n} elements, got shape {self.data.shape}"
            )

    # ---------- Construction ----------

    @classmethod
    def allocate(cls, N: int, n: int, h: float = 1.0, t0: float = 0.0) -> "TrajectoryBuffer":
        """
        Allocate a zero-initialised buffer for ``n`` states of dimension ``N``.

        Zero initialisation makes the buffer valid for accumulate-mode
        stepping as well as for the default overwrite mode.
        """
        limit = get_config().memory_limit_gb
        needed = estimate_memory_usage(N, n)
        if needed > limit:
            warnings.warn(
                f"Trajectory needs ~{needed:.2f}GB, above the configured limit of {limit}GB"
            )
        return cls(data=np.zeros(N * n, dtype=np.float64), N=N, n=n, h=h, t0=t0)

    @classmethod
    def from_initial(cls, x0, n: int, h: float = 1.0, t0: float = 0.0) -> "TrajectoryBuffer":
        """Allocate a buffer and write ``x0`` into slot 0."""
        x0 = np.atleast_1d(np.asarray(x0, dtype=np.float64))
        if x0.ndim != 1:
            raise ValueError(f"Initial state must be 1-D, got shape {x0.shape}")
        if n < 1:
            raise ValueError(f"A trajectory with an initial state needs n >= 1, got {n}")
        buf = cls.allocate(x0.shape[0], n, h=h, t0=t0)
        buf.set_initial(x0)
        return buf

    # ---------- Views ----------

    @property
    def states(self) -> np.ndarray:
        """(n, N) view onto the buffer; writes go through to ``data``."""
        return self.data.reshape(self.n, self.N)

    @property
    def times(self) -> np.ndarray:
        """Time of each slot, ``t0 + k*h``."""
        return self.t0 + self.h * np.arange(self.n, dtype=np.float64)

    @property
    def final_state(self) -> np.ndarray:
        if self.n == 0:
            raise IndexError("Empty trajectory has no final state")
        return self.states[-1]

    @property
    def nbytes(self) -> int:
        return int(self.data.nbytes)

    def __len__(self) -> int:
        return self.n

    def state(self, k: int) -> np.ndarray:
        """State at slot ``k`` (view)."""
        if not (-self.n <= k < self.n):
            raise IndexError(f"Slot {k} out of range [0, {self.n})")
        return self.states[k]

    def set_initial(self, x0) -> None:
        """Write the initial condition into slot 0."""
        if self.n == 0:
            raise IndexError("Empty trajectory has no slot 0")
        x0 = np.atleast_1d(np.asarray(x0, dtype=np.float64))
        if x0.shape != (self.N,):
            raise ValueError(f"Initial state must have shape ({self.N},), got {x0.shape}")
        self.data[:self.N] = x0

    def copy(self) -> "TrajectoryBuffer":
        return TrajectoryBuffer(
            data=self.data.copy(), N=self.N, n=self.n, h=self.h, t0=self.t0,
            metadata=dict(self.metadata),
        )

    def __repr__(self) -> str:
        return f"TrajectoryBuffer(N={self.N}, n={self.n}, h={self.h:g}, t0={self.t0:g})"

    def summary(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "N": self.N,
            "n": self.n,
            "h": self.h,
            "t_span": (self.t0, self.t0 + self.h * max(self.n - 1, 0)),
            "memory_mb": self.nbytes / (1024**2),
        }
        if self.n:
            info["final_state_norm"] = float(np.linalg.norm(self.final_state))
        info.update(self.metadata)
        return info
