#!/usr/bin/env python3
"""
odesolve Smoke Test

Quick import and basic functionality test to ensure the package is working.
Runs under pytest or directly: python tests/test_smoke.py
"""

import sys
import traceback
from pathlib import Path

# Add project root to path for direct runs
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def test_core_imports():
    """Core odesolve modules import and expose the public API."""
    print("Testing core imports...")

    import odesolve as ode
    print(f"✅ odesolve {ode.__version__}")

    from odesolve.integrators import Scheme, scheme_from_name
    from odesolve.solver import integrate, integrate_scalar, TrajectoryBuffer
    from odesolve.fields import lorenz96, relaxation
    from odesolve.io import write_trajectory, HDF5_AVAILABLE

    print(f"✅ HDF5 available: {HDF5_AVAILABLE}")
    for name in ode.__all__:
        assert hasattr(ode, name), name
    print("✅ Core modules imported successfully")


def test_basic_functionality():
    """A short Lorenz 96 run through the public API."""
    print("\nTesting basic functionality...")

    import numpy as np
    import odesolve as ode
    from odesolve.fields import lorenz96_initial_state

    sim = ode.create_simulation("rk4", ode.lorenz96, 8.0)
    traj = sim.run(lorenz96_initial_state(8), h=0.01, n=10)
    assert traj.states.shape == (10, 8)
    assert np.all(np.isfinite(traj.data))
    print("✅ Simulation ran")

    x = np.array([1.0, 0.0])
    ode.integrate_scalar("heun", ode.linear_decay, x, 2, 0.1)
    assert abs(x[1] - 0.905) < 1e-12
    print("✅ Scalar stepper works")


def test_system_info():
    """Configuration reports system resources."""
    print("\nTesting system information...")

    import odesolve as ode

    info = ode.get_config().get_system_info()
    assert info["system_memory_gb"] > 0
    print(f"✅ System memory: {info['system_memory_gb']:.1f} GB")


def main():
    """Run all smoke tests."""
    print("odesolve Smoke Test")
    print("=" * 50)

    tests = [
        ("Core Imports", test_core_imports),
        ("Basic Functionality", test_basic_functionality),
        ("System Info", test_system_info),
    ]

    passed = 0
    total = len(tests)

    for name, test_func in tests:
        print(f"\n🧪 Running: {name}")
        try:
            test_func()
            passed += 1
            print(f"✅ {name}: PASSED")
        except Exception as e:
            print(f"❌ {name}: ERROR - {e}")
            traceback.print_exc()

    print(f"\n📊 Results: {passed}/{total} tests passed")

    if passed == total:
        print("🎉 All smoke tests PASSED!")
        return 0
    else:
        print("💥 Some smoke tests FAILED!")
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
