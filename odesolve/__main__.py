#!/usr/bin/env python3
"""
odesolve command-line interface.

Usage:
    python -m odesolve lorenz96 [F] [N] [h] [n] [scheme] [out]
    python -m odesolve relaxation [lam] [sigma] [h] [n] [scheme] [out] [--seed S]
    python -m odesolve --version
"""

import argparse
import sys
from pathlib import Path


def get_version():
    """Get odesolve version."""
    from . import __version__
    return __version__


def _build_parser():
    parser = argparse.ArgumentParser(
        prog='odesolve',
        description='odesolve - fixed-step ODE integration (Euler, Heun, RK4)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m odesolve lorenz96 8.0 40 0.01 2000 rk4 l96.txt
  python -m odesolve lorenz96 8 40 0.01 2000 heun l96.txt --gnuplot l96.gp
  python -m odesolve relaxation 1.0 0.3 0.01 1000 euler ou.txt --seed 7
"""
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'odesolve {get_version()}'
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--gnuplot', metavar='SCRIPT', default=None,
                        help='Write a gnuplot script for the output file')
    common.add_argument('--plot', metavar='PNG', default=None,
                        help='Save a matplotlib plot of the trajectory')
    common.add_argument('--quiet', action='store_true',
                        help='Suppress the parameter report and scheme label')

    sub = parser.add_subparsers(dest='system', metavar='SYSTEM')
    sub.required = True

    l96 = sub.add_parser('lorenz96', parents=[common],
                         help='Lorenz 96 system from a perturbed equilibrium')
    l96.add_argument('F', nargs='?', type=float, default=8.0, help='Forcing (default: 8.0)')
    l96.add_argument('N', nargs='?', type=int, default=10000, help='Dimension (default: 10000)')
    l96.add_argument('h', nargs='?', type=float, default=0.001, help='Step size (default: 0.001)')
    l96.add_argument('n', nargs='?', type=int, default=10000, help='Trajectory slots (default: 10000)')
    l96.add_argument('scheme', nargs='?', default=None,
                     help='euler | heun | rk4 (default: configured scheme)')
    l96.add_argument('out', nargs='?', default=None, help='Output text file')
    l96.add_argument('--perturbation', type=float, default=0.01,
                     help='Offset added to the first component (default: 0.01)')

    rel = sub.add_parser('relaxation', parents=[common],
                         help='Scalar relaxation, optionally with additive noise')
    rel.add_argument('lam', nargs='?', type=float, default=1.0, help='Relaxation rate (default: 1.0)')
    rel.add_argument('sigma', nargs='?', type=float, default=0.0, help='Noise amplitude (default: 0.0)')
    rel.add_argument('h', nargs='?', type=float, default=0.01, help='Step size (default: 0.01)')
    rel.add_argument('n', nargs='?', type=int, default=1000, help='Trajectory slots (default: 1000)')
    rel.add_argument('scheme', nargs='?', default=None,
                     help='euler | heun | rk4 (default: configured scheme)')
    rel.add_argument('out', nargs='?', default=None, help='Output text file')
    rel.add_argument('--x0', type=float, default=1.0, help='Initial value (default: 1.0)')
    rel.add_argument('--mu', type=float, default=0.0, help='Relaxation target (default: 0.0)')
    rel.add_argument('--seed', type=int, default=42, help='Noise seed (default: 42)')
    return parser


def _run_lorenz96(args, scheme, verbose):
    from .fields import lorenz96, lorenz96_initial_state, LORENZ96_MIN_DIMENSION
    from .solver import check_min_dimension, create_simulation

    check_min_dimension(args.N, LORENZ96_MIN_DIMENSION, name="lorenz96")
    if args.n < 1:
        raise ValueError(f"Step count must be >= 1, got {args.n}")

    report = [
        ("forcing F", args.F),
        ("dimension N", args.N),
        ("step size h", args.h),
        ("steps n", args.n),
        ("scheme", scheme),
    ]
    x0 = lorenz96_initial_state(args.N, args.F, args.perturbation)
    sim = create_simulation(scheme, lorenz96, args.F, verbose=verbose)
    return report, lambda: sim.run(x0, args.h, args.n)


def _run_relaxation(args, scheme, verbose):
    from .fields import relaxation, seed_noise
    from .solver import TrajectoryBuffer, create_simulation
    from .utils.random import rng_key

    if args.n < 1:
        raise ValueError(f"Step count must be >= 1, got {args.n}")

    report = [
        ("rate lam", args.lam),
        ("target mu", args.mu),
        ("noise sigma", args.sigma),
        ("initial x0", args.x0),
        ("step size h", args.h),
        ("steps n", args.n),
        ("scheme", scheme),
    ]
    stochastic = args.sigma != 0.0
    if stochastic:
        report.append(("seed", args.seed))

    sim = create_simulation(scheme, relaxation, args.lam, args.mu, scalar=True,
                            accumulate=stochastic, verbose=verbose)

    def run():
        buf = TrajectoryBuffer.from_initial([args.x0], args.n, h=args.h)
        if stochastic:
            seed_noise(buf, args.sigma, args.h, key=rng_key(args.seed))
        return sim.run(None, args.h, args.n, buffer=buf)

    return report, run


def _write_outputs(args, buf, scheme):
    from .io import write_trajectory, write_gnuplot_script

    if args.out is not None:
        path = write_trajectory(args.out, buf)
        if not args.quiet:
            print(f"Trajectory written to {path}")
        if args.gnuplot is not None:
            script = write_gnuplot_script(
                args.gnuplot, path, scheme, buf.N, time_column=buf.N == 1,
            )
            if not args.quiet:
                print(f"Gnuplot script written to {script}")
    elif args.gnuplot is not None:
        raise ValueError("--gnuplot needs an output file")

    if args.plot is not None:
        from .visualization import plot_trajectory
        import matplotlib.pyplot as plt

        Path(args.plot).parent.mkdir(parents=True, exist_ok=True)
        fig, _ = plot_trajectory(buf, save_path=args.plot)
        plt.close(fig)
        if not args.quiet:
            print(f"Plot saved to {args.plot}")


def main(argv=None):
    """Command-line interface for odesolve. Returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from .integrators import scheme_from_name, scheme_name, Scheme, available_schemes
    from .utils.config import configure, get_config
    from .utils.logging import format_parameters

    requested = args.scheme if args.scheme is not None else get_config().default_scheme
    if scheme_from_name(requested) == Scheme.UNKNOWN:
        print(f"odesolve: unknown ODE scheme '{requested}'. Available: {available_schemes()}",
              file=sys.stderr)
        return 1
    scheme = scheme_name(scheme_from_name(requested)).lower()

    runners = {
        'lorenz96': _run_lorenz96,
        'relaxation': _run_relaxation,
    }
    verbose = not args.quiet
    # The stepper reads the scheme label flag from the package config
    previous = get_config().verbose
    configure(verbose=verbose)
    try:
        report, run = runners[args.system](args, scheme, verbose)
        if verbose:
            print(format_parameters(report))
        buf = run()
        _write_outputs(args, buf, scheme)
    except (ValueError, TypeError, RuntimeError) as e:
        print(f"odesolve: {e}", file=sys.stderr)
        return 1
    finally:
        configure(verbose=previous)

    if verbose:
        print(f"Final state norm: {buf.summary()['final_state_norm']:.6g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
