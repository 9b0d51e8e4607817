# odesolve/visualization/static.py
from __future__ import annotations
from typing import Optional, Sequence, Tuple, Any
import numpy as np

try:
    import matplotlib.pyplot as plt
    MPL_AVAILABLE = True
except Exception:
    MPL_AVAILABLE = False

from ..solver.trajectory import TrajectoryBuffer


def _ensure_mpl():
    if not MPL_AVAILABLE:
        raise RuntimeError("Matplotlib is required (pip install matplotlib)")


def _states_and_times(trajectory: Any, h: Optional[float] = None) -> Tuple[np.ndarray, np.ndarray, str]:
    """(n, N) states, time axis and x-label for a buffer or an (n, N) array."""
    if isinstance(trajectory, TrajectoryBuffer):
        return trajectory.states, trajectory.times, "t"
    arr = np.asarray(trajectory, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr[:, None]
    if arr.ndim != 2:
        raise ValueError("trajectory must be a TrajectoryBuffer or an (n, N) array")
    if h is None:
        return arr, np.arange(arr.shape[0], dtype=np.float64), "step"
    return arr, h * np.arange(arr.shape[0], dtype=np.float64), "t"


def _finish(fig, ax, title, save_path, show):
    if title:
        ax.set_title(title)
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight")
    if show:
        plt.show()
    return fig, ax


def plot_trajectory(
    trajectory: Any,
    components: Optional[Sequence[int]] = None,
    h: Optional[float] = None,
    max_components: int = 8,
    linewidth: float = 1.0,
    title: Optional[str] = None,
    ax: Optional["plt.Axes"] = None,
    show: bool = False,
    save_path: Optional[str] = None,
):
    """
    Plot state components against time.

    trajectory: TrajectoryBuffer, or (n, N) / (n,) array
    components: zero-based components; defaults to the first max_components
    h: step size for bare arrays (otherwise the x-axis is the step index)
    """
    _ensure_mpl()
    states, times, xlabel = _states_and_times(trajectory, h)
    N = states.shape[1]
    if components is None:
        components = range(min(N, max_components))
    components = list(components)
    for c in components:
        if not 0 <= c < N:
            raise ValueError(f"Component {c} out of range [0, {N})")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4.5), dpi=120)
    else:
        fig = ax.figure

    for c in components:
        ax.plot(times, states[:, c], linewidth=linewidth, label=f"x{c + 1}")
    ax.set_xlabel(xlabel)
    ax.set_ylabel("x")
    if len(components) > 1:
        ax.legend(loc="best", fontsize="small")
    ax.grid(True, alpha=0.3)

    if title is None and isinstance(trajectory, TrajectoryBuffer) and "scheme" in trajectory.metadata:
        title = f"{trajectory.metadata.get('field', 'trajectory')} ({trajectory.metadata['scheme']})"
    return _finish(fig, ax, title, save_path, show)


def plot_phase(
    trajectory: Any,
    i: int = 0,
    j: int = 1,
    linewidth: float = 0.6,
    alpha: float = 0.9,
    title: Optional[str] = None,
    ax: Optional["plt.Axes"] = None,
    show: bool = False,
    save_path: Optional[str] = None,
):
    """
    Phase portrait of component j against component i.
    """
    _ensure_mpl()
    states, _, _ = _states_and_times(trajectory)
    N = states.shape[1]
    if not (0 <= i < N and 0 <= j < N):
        raise ValueError(f"Components ({i}, {j}) out of range [0, {N})")

    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 5), dpi=120)
    else:
        fig = ax.figure

    ax.plot(states[:, i], states[:, j], linewidth=linewidth, alpha=alpha)
    ax.plot(states[0, i], states[0, j], "o", color="tab:green", label="start")
    ax.plot(states[-1, i], states[-1, j], "o", color="tab:red", label="end")
    ax.set_xlabel(f"x{i + 1}")
    ax.set_ylabel(f"x{j + 1}")
    ax.legend(loc="best", fontsize="small")
    return _finish(fig, ax, title, save_path, show)
