# odesolve/utils/logging.py
"""
Run reporting: integration timers, single-line progress and parameter
reports.

Everything here prints to stdout; nothing is buffered or routed through a
logging framework. Process memory comes from psutil.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Protocol, Sequence, Tuple
import time

import psutil


class ProgressCallback(Protocol):
    """Called with the number of completed steps out of ``total``."""
    def __call__(self, step: int, total: int, **kwargs: Any) -> None:
        ...


def memory_info() -> Dict[str, float]:
    """Resident and available memory of the current process, in MB."""
    rss = psutil.Process().memory_info().rss
    available = psutil.virtual_memory().available
    return {"rss_mb": rss / 1024**2, "available_mb": available / 1024**2}


class Timer:
    """
    Wall-clock timer for one integration run.

    Use as a context manager around the stepping loop. With ``steps`` the
    report includes the stepping rate; with ``track_memory`` the change in
    resident memory across the run is available as :attr:`memory_delta_mb`.
    """

    def __init__(
        self,
        name: str = "Timer",
        steps: Optional[int] = None,
        track_memory: bool = False,
        verbose: bool = True,
    ):
        self.name = name
        self.steps = steps
        self.track_memory = track_memory
        self.verbose = verbose
        self._t0: Optional[float] = None
        self._t1: Optional[float] = None
        self._rss0: Optional[float] = None
        self._rss1: Optional[float] = None

    def __enter__(self) -> "Timer":
        if self.track_memory:
            self._rss0 = memory_info()["rss_mb"]
        self._t1 = None
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._t1 = time.perf_counter()
        if self.track_memory:
            self._rss1 = memory_info()["rss_mb"]
        if self.verbose and exc_type is None:
            self.report()

    @property
    def elapsed(self) -> float:
        """Seconds since entry (or between entry and exit)."""
        if self._t0 is None:
            return 0.0
        end = self._t1 if self._t1 is not None else time.perf_counter()
        return end - self._t0

    @property
    def rate(self) -> Optional[float]:
        """Steps per second, when the step count is known."""
        if not self.steps or self.elapsed <= 0.0:
            return None
        return self.steps / self.elapsed

    @property
    def memory_delta_mb(self) -> Optional[float]:
        """Change in resident memory across the run."""
        if self._rss0 is None or self._rss1 is None:
            return None
        return self._rss1 - self._rss0

    def report(self) -> None:
        msg = f"{self.name}: {self.elapsed:.6f}s"
        if self.rate is not None:
            msg += f" ({self.steps} steps, {self.rate:.0f} steps/s)"
        print(msg)
        if self.memory_delta_mb is not None:
            print(f"  Memory delta: {self.memory_delta_mb:+.1f} MB")


def create_progress_callback(name: str = "Progress", show_rate: bool = True) -> ProgressCallback:
    """
    Single-line progress report, redrawn in place on every call.

    The line is terminated once ``step == total``.
    """
    start = time.perf_counter()

    def callback(step: int, total: int, **kwargs: Any) -> None:
        elapsed = time.perf_counter() - start
        msg = f"{name}: {step}/{total} steps ({100.0 * step / max(1, total):.1f}%)"
        if show_rate and elapsed > 0:
            msg += f", {step / elapsed:.0f} steps/s"
        if 0 < step < total and elapsed > 1:
            msg += f", ETA {elapsed * (total - step) / step:.1f}s"
        print(f"\r{msg}", end="", flush=True)
        if step >= total:
            print()

    return callback


def format_parameters(params: Sequence[Tuple[str, Any]], width: Optional[int] = None) -> str:
    """
    Format (label, value) pairs as an aligned parameter report.

    >>> print(format_parameters([("step size", 0.01), ("steps", 3)]))
    step size =  0.01
    steps     =  3
    """
    if not params:
        return ""
    width = width or max(len(label) for label, _ in params)
    lines = []
    for label, value in params:
        if isinstance(value, float):
            value = f"{value:g}"
        lines.append(f"{label:<{width}} =  {value}")
    return "\n".join(lines)
