"""Static matplotlib plots."""

import numpy as np
import pytest
import matplotlib.pyplot as plt

from odesolve.fields import lorenz96, lorenz96_initial_state
from odesolve.solver import create_simulation
from odesolve.visualization import plot_trajectory, plot_phase


@pytest.fixture
def traj():
    return create_simulation("rk4", lorenz96, 8.0).run(lorenz96_initial_state(6), 0.01, 30)


def test_plot_trajectory_lines_and_title(traj):
    fig, ax = plot_trajectory(traj, components=[0, 2])
    assert len(ax.get_lines()) == 2
    assert ax.get_title() == "lorenz96 (RK4)"
    np.testing.assert_allclose(ax.get_lines()[0].get_xdata(), traj.times)
    plt.close(fig)


def test_plot_trajectory_default_components(traj):
    fig, ax = plot_trajectory(traj, max_components=4)
    assert len(ax.get_lines()) == 4
    plt.close(fig)


def test_plot_bare_array_uses_step_axis():
    states = np.linspace(0.0, 1.0, 10)
    fig, ax = plot_trajectory(states)
    assert ax.get_xlabel() == "step"
    fig2, ax2 = plot_trajectory(states, h=0.5)
    assert ax2.get_xlabel() == "t"
    assert ax2.get_lines()[0].get_xdata()[-1] == pytest.approx(4.5)
    plt.close(fig)
    plt.close(fig2)


def test_plot_component_out_of_range(traj):
    with pytest.raises(ValueError):
        plot_trajectory(traj, components=[6])
    with pytest.raises(ValueError):
        plot_phase(traj, 0, 9)


def test_plot_phase_saves(tmp_path, traj):
    path = tmp_path / "phase.png"
    fig, ax = plot_phase(traj, 0, 1, save_path=str(path), title="phase")
    assert path.exists()
    assert ax.get_xlabel() == "x1" and ax.get_ylabel() == "x2"
    plt.close(fig)
