# odesolve/utils/random.py
"""
Random number generation utilities.

Thin seeded wrappers around NumPy's Generator API. Used by the noise source
that pre-loads stochastic trajectories; the steppers never draw random
numbers themselves.
"""

from __future__ import annotations
from typing import Union, Tuple, Sequence
import numpy as np

KeyLike = Union[int, np.random.Generator]
Shape = Union[int, Sequence[int]]


def rng_key(seed: int = 42) -> np.random.Generator:
    """
    Create a random generator from a seed.

    Parameters
    ----------
    seed : int
        Random seed

    Returns
    -------
    np.random.Generator
        PCG64-backed generator
    """
    return np.random.Generator(np.random.PCG64(seed))


def _as_generator(key: KeyLike) -> np.random.Generator:
    if isinstance(key, np.random.Generator):
        return key
    return rng_key(int(key))


def split_keys(key: KeyLike, num: int = 2) -> Tuple[np.random.Generator, ...]:
    """
    Split a key into independent generators.

    Child streams are spawned from the parent's seed sequence, so results do
    not depend on how many numbers the parent has already produced.
    """
    return tuple(_as_generator(key).spawn(num))


def normal(
    key: KeyLike,
    shape: Shape = (),
    mean: float = 0.0,
    std: float = 1.0,
) -> np.ndarray:
    """
    Sample from a normal distribution as float64.

    Parameters
    ----------
    key : KeyLike
        Generator or integer seed
    shape : Shape
        Output shape
    mean, std : float
        Distribution parameters
    """
    shape_tuple = (shape,) if isinstance(shape, int) else tuple(shape)
    gen = _as_generator(key)
    return gen.normal(mean, std, shape_tuple).astype(np.float64, copy=False)
