# odesolve/io/gnuplot.py
"""
Gnuplot command files for text trajectories.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Sequence, Union
import shutil
import subprocess

PathLike = Union[str, Path]


def write_gnuplot_script(
    script_path: PathLike,
    data_path: PathLike,
    scheme: str,
    N: int,
    time_column: bool = False,
    components: Optional[Sequence[int]] = None,
    title: Optional[str] = None,
    output: Optional[PathLike] = None,
    max_components: int = 8,
) -> Path:
    """
    Write a gnuplot script plotting state components of a text trajectory.

    Parameters
    ----------
    script_path : str or Path
        Script to write
    data_path : str or Path
        Trajectory file produced by :func:`odesolve.io.write_trajectory`
    scheme : str
        Scheme name shown in the title
    N : int
        State dimension of the data file
    time_column : bool
        Whether the data file starts with a time column
    components : sequence of int, optional
        Zero-based components to plot; defaults to the first ``max_components``
    title : str, optional
        Plot title; defaults to the data file name and scheme
    output : str or Path, optional
        If given, render to this PNG instead of an interactive window
    """
    if components is None:
        components = range(min(N, max_components))
    components = list(components)
    for c in components:
        if not 0 <= c < N:
            raise ValueError(f"Component {c} out of range [0, {N})")

    data_path = Path(data_path)
    title = title or f"{data_path.name} ({scheme})"
    offset = 2 if time_column else 1
    xcol = "1" if time_column else "0"

    lines = []
    if output is not None:
        lines.append("set terminal pngcairo size 1024,768")
        lines.append(f'set output "{Path(output)}"')
    lines.append(f'set title "{title}"')
    lines.append(f'set xlabel "{"t" if time_column else "step"}"')
    lines.append('set ylabel "x"')
    lines.append("set key outside right")
    plots = [
        f'"{data_path}" using {xcol}:{c + offset} with lines title "x{c + 1}"'
        for c in components
    ]
    lines.append("plot " + ", \\\n     ".join(plots))

    script_path = Path(script_path)
    script_path.parent.mkdir(parents=True, exist_ok=True)
    script_path.write_text("\n".join(lines) + "\n")
    return script_path


def run_gnuplot(script_path: PathLike, persist: bool = True) -> None:
    """Run gnuplot on a script; requires the ``gnuplot`` executable on PATH."""
    exe = shutil.which("gnuplot")
    if exe is None:
        raise RuntimeError("gnuplot executable not found on PATH")
    cmd = [exe]
    if persist:
        cmd.append("-p")
    cmd.append(str(script_path))
    subprocess.run(cmd, check=True)
