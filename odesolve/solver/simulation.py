# odesolve/solver/simulation.py
"""
Simulation front end over the fixed-step steppers.

- Named-scheme factory with validation at construction time
- Buffer allocation, initial condition and time axis handled in one place
- Optional chunked execution with a single-line progress report
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, List, Dict, Any, Sequence, Tuple
import math
import numpy as np

from ..integrators import Scheme, resolve_scheme, scheme_name
from ..utils.config import get_config
from ..utils.logging import Timer, create_progress_callback
from .stepper import integrate, integrate_scalar
from .trajectory import TrajectoryBuffer

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass
class SimulationOptions:
    """
    Execution options for a simulation run.

    ``accumulate`` and ``progress`` default to the package configuration
    when left as None.
    """
    accumulate: Optional[bool] = None     # additive write into the next slot
    progress: Optional[bool] = None       # single-line progress report
    progress_every: int = 10_000          # steps per progress chunk
    verbose: Optional[bool] = None        # print scheme label and timing
    record_timing: bool = True
    track_memory: bool = False            # record the resident-memory change of a run

    def __post_init__(self):
        if self.progress_every < 1:
            raise ValueError(f"progress_every must be >= 1, got {self.progress_every}")

    def resolved(self) -> "SimulationOptions":
        cfg = get_config()
        return SimulationOptions(
            accumulate=cfg.accumulate if self.accumulate is None else self.accumulate,
            progress=cfg.show_progress if self.progress is None else self.progress,
            progress_every=self.progress_every,
            verbose=cfg.verbose if self.verbose is None else self.verbose,
            record_timing=self.record_timing,
            track_memory=self.track_memory,
        )

# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

@dataclass
class Simulation:
    """
    A vector field bound to a scheme and its extra parameters.

    ``scalar=True`` selects the N=1 stepper and a field of the form
    ``f(x, *params) -> float``; otherwise the field is
    ``f(xdot, x, N, *params)``.
    """
    scheme: Scheme
    field_fn: Callable
    params: Tuple = ()
    scalar: bool = False
    options: SimulationOptions = field(default_factory=SimulationOptions)

    def __post_init__(self):
        self.scheme = resolve_scheme(self.scheme)
        if not callable(self.field_fn):
            raise TypeError("field_fn must be callable")
        self.params = tuple(self.params)

    @property
    def name(self) -> str:
        return scheme_name(self.scheme)

    def _prepare_buffer(self, x0, h: float, n: int, t0: float,
                        buffer: Optional[TrajectoryBuffer]) -> TrajectoryBuffer:
        if buffer is None:
            if x0 is None:
                raise ValueError("x0 is required when no buffer is supplied")
            buf = TrajectoryBuffer.from_initial(x0, n, h=h, t0=t0)
        else:
            if buffer.n != n:
                raise ValueError(f"Buffer holds {buffer.n} slots, run asked for {n}")
            buf = buffer
            buf.h, buf.t0 = h, t0
            if x0 is not None:
                buf.set_initial(x0)

        if self.scalar and buf.N != 1:
            raise ValueError(f"Scalar simulation needs a 1-dimensional state, got N={buf.N}")
        return buf

    def _step_range(self, buf: TrajectoryBuffer, start: int, stop: int,
                    accumulate: bool, announce: bool) -> None:
        """Integrate slots start..stop (inclusive) of ``buf``."""
        N = buf.N
        count = max(stop - start + 1, 0)
        view = buf.data[start * N:(start + count) * N]
        if self.scalar:
            integrate_scalar(self.scheme, self.field_fn, view, count, buf.h,
                             *self.params, accumulate=accumulate, announce=announce)
        else:
            integrate(self.scheme, self.field_fn, view, N, count, buf.h,
                      *self.params, accumulate=accumulate, announce=announce)

    def run(
        self,
        x0,
        h: float,
        n: int,
        t0: float = 0.0,
        buffer: Optional[TrajectoryBuffer] = None,
    ) -> TrajectoryBuffer:
        """
        Integrate ``n`` slots from ``x0`` with step ``h``.

        Parameters
        ----------
        x0 : array_like or float, optional
            Initial state. May be None when ``buffer`` already holds slot 0.
        h : float
            Step size
        n : int
            Number of trajectory slots (n-1 steps)
        t0 : float
            Time of slot 0
        buffer : TrajectoryBuffer, optional
            Pre-allocated (possibly pre-loaded) buffer to integrate into

        Returns
        -------
        TrajectoryBuffer
        """
        opts = self.options.resolved()
        buf = self._prepare_buffer(x0, h, n, t0, buffer)
        steps = max(buf.n - 1, 0)

        timer = Timer(f"{self.name} integration", steps=steps,
                      track_memory=opts.track_memory, verbose=bool(opts.verbose))
        with timer:
            if not opts.progress or steps <= opts.progress_every:
                self._step_range(buf, 0, buf.n - 1, opts.accumulate, True)
            else:
                # Each chunk starts from the last state of the previous one,
                # so the result equals a single call.
                progress = create_progress_callback(self.name)
                for start in range(0, steps, opts.progress_every):
                    stop = min(start + opts.progress_every, steps)
                    self._step_range(buf, start, stop, opts.accumulate, start == 0)
                    progress(stop, steps)

        buf.metadata.update({
            "scheme": self.name,
            "field": getattr(self.field_fn, "__name__", type(self.field_fn).__name__),
            "params": self.params,
            "N": buf.N,
            "n": buf.n,
            "h": buf.h,
            "accumulate": bool(opts.accumulate),
        })
        if opts.record_timing:
            buf.metadata["elapsed_s"] = timer.elapsed
        if opts.track_memory:
            buf.metadata["memory_delta_mb"] = timer.memory_delta_mb
        return buf

# ---------------------------------------------------------------------------
# Factory and convenience functions
# ---------------------------------------------------------------------------

def create_simulation(
    scheme_name_or_value,
    field_fn: Callable,
    *params,
    scalar: bool = False,
    **options
) -> Simulation:
    """
    Factory for Simulation with a named scheme.

    scheme_name_or_value: 'euler', 'heun' or 'rk4' (case-insensitive), or a Scheme
    field_fn: vector field ``f(xdot, x, N, *params)`` or, with scalar=True,
              scalar field ``f(x, *params)``
    options: forwarded to SimulationOptions
    """
    scheme = resolve_scheme(scheme_name_or_value)
    return Simulation(
        scheme=scheme,
        field_fn=field_fn,
        params=params,
        scalar=scalar,
        options=SimulationOptions(**options),
    )


def compare_schemes(
    field_fn: Callable,
    x0,
    h: float,
    n: int,
    *params,
    schemes: Sequence[str] = ("euler", "heun", "rk4"),
    reference: Optional[Callable[[float], Any]] = None,
    scalar: bool = False,
    verbose: bool = False,
    **options
) -> Dict[str, Any]:
    """
    Run several schemes on the same problem.

    If ``reference`` is given, it maps a time to the exact state and the
    final-state error of each scheme is reported; otherwise final states are
    compared against the first scheme.
    """
    results: Dict[str, Any] = {
        'schemes': list(schemes),
        'trajectories': {},
        'timing': {},
        'errors': {},
        'comparison': {},
    }

    for name in schemes:
        if verbose:
            print(f"Testing {name} scheme...")
        sim = create_simulation(name, field_fn, *params, scalar=scalar, **options)
        traj = sim.run(x0, h, n)
        results['trajectories'][name] = traj
        results['timing'][name] = traj.metadata.get("elapsed_s")
        if verbose and results["timing"][name] is not None:
            print(f"  Completed in {results['timing'][name]:.3f}s")

    if reference is not None:
        for name, traj in results['trajectories'].items():
            t_end = traj.times[-1]
            exact = np.atleast_1d(np.asarray(reference(t_end), dtype=np.float64))
            results['errors'][name] = float(np.max(np.abs(traj.final_state - exact)))
    else:
        names = list(results['trajectories'].keys())
        if len(names) >= 2:
            ref = names[0]
            ref_final = results['trajectories'][ref].final_state
            for name in names[1:]:
                diff = np.abs(results['trajectories'][name].final_state - ref_final)
                results['comparison'][f'{name}_vs_{ref}'] = {
                    'max_difference': float(np.max(diff)),
                    'mean_difference': float(np.mean(diff)),
                }
    return results


def convergence_order(
    scheme,
    field_fn: Callable,
    x0,
    T: float,
    n_steps: int,
    exact: Callable[[float], Any],
    *params,
    scalar: bool = False,
) -> float:
    """
    Observed order of accuracy from two runs over [0, T].

    Runs with ``n_steps`` steps of size ``T/n_steps`` and again with half the
    step size, then returns ``log2(err_coarse / err_fine)`` of the final
    state error against ``exact(T)``.
    """
    if n_steps < 1:
        raise ValueError(f"n_steps must be >= 1, got {n_steps}")
    target = np.atleast_1d(np.asarray(exact(T), dtype=np.float64))
    errs: List[float] = []
    for steps in (n_steps, 2 * n_steps):
        sim = create_simulation(scheme, field_fn, *params, scalar=scalar, progress=False,
                                verbose=False)
        traj = sim.run(x0, T / steps, steps + 1)
        errs.append(float(np.max(np.abs(traj.final_state - target))))
    if errs[1] == 0.0:
        return math.inf
    return math.log2(errs[0] / errs[1])


__all__ = [
    'Simulation',
    'SimulationOptions',
    'create_simulation',
    'compare_schemes',
    'convergence_order',
]
