"""Shared fixtures for the odesolve test suite."""

import sys
from pathlib import Path

# Add project root to path for uninstalled runs
sys.path.insert(0, str(Path(__file__).parent.parent))

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from odesolve.utils.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts and ends with default configuration."""
    monkeypatch.delenv("ODESOLVE_VERBOSE", raising=False)
    monkeypatch.delenv("ODESOLVE_SCHEME", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def decay():
    """dx/dt = -x as an N-dimensional field."""
    def field(xdot, x, N):
        np.negative(x, out=xdot)
    return field


@pytest.fixture
def zero_field():
    def field(xdot, x, N, *params):
        xdot[:] = 0.0
    return field
