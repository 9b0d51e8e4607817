# odesolve/integrators/schemes.py
"""
Scheme selection.

The set of integration schemes is closed: Euler, Heun and classical RK4.
``Scheme.UNKNOWN`` exists only so that name parsing is total; it is never a
valid argument to a stepper and is rejected by :func:`resolve_scheme`.
"""

from __future__ import annotations
from enum import IntEnum
import numbers
from typing import Any, Dict, List, Optional


class Scheme(IntEnum):
    """Explicit single-step integration schemes."""
    EULER = 0
    HEUN = 1
    RK4 = 2
    UNKNOWN = 3


_DISPLAY_NAMES: Dict[Scheme, str] = {
    Scheme.EULER: "Euler",
    Scheme.HEUN: "Heun",
    Scheme.RK4: "RK4",
}

_NAME_LOOKUP: Dict[str, Scheme] = {
    "euler": Scheme.EULER,
    "heun": Scheme.HEUN,
    "rk2": Scheme.HEUN,
    "improved-euler": Scheme.HEUN,
    "rk4": Scheme.RK4,
    "rungekutta4": Scheme.RK4,
}

# Formal order of accuracy and field evaluations per step
SCHEME_ORDER: Dict[Scheme, int] = {Scheme.EULER: 1, Scheme.HEUN: 2, Scheme.RK4: 4}
SCHEME_STAGES: Dict[Scheme, int] = {Scheme.EULER: 1, Scheme.HEUN: 2, Scheme.RK4: 4}


def scheme_from_name(name: Any) -> Scheme:
    """
    Map a case-insensitive scheme name to a :class:`Scheme`.

    Unrecognized names, and anything that is not a string, map to
    ``Scheme.UNKNOWN``.

    >>> scheme_from_name("euler") is scheme_from_name("EULER")
    True
    >>> scheme_from_name("leapfrog")
    <Scheme.UNKNOWN: 3>
    """
    if not isinstance(name, str):
        return Scheme.UNKNOWN
    return _NAME_LOOKUP.get(name.strip().lower(), Scheme.UNKNOWN)


def scheme_name(scheme: Any) -> Optional[str]:
    """
    Canonical display name of a live scheme, or None.

    Accepts a :class:`Scheme` or its integer value (Python or NumPy integer). ``UNKNOWN`` and values
    outside the enumeration return None.
    """
    if isinstance(scheme, bool) or not isinstance(scheme, numbers.Integral):
        return None
    try:
        return _DISPLAY_NAMES.get(Scheme(int(scheme)))
    except ValueError:
        return None


def available_schemes() -> List[str]:
    """Lower-case names of the live schemes, in enumeration order."""
    return [name.lower() for name in _DISPLAY_NAMES.values()]


def resolve_scheme(value: Any) -> Scheme:
    """
    Validate a scheme argument at the stepping boundary.

    Parameters
    ----------
    value : Scheme, str or int
        Scheme member, scheme name, or enumeration value

    Returns
    -------
    Scheme
        One of EULER, HEUN, RK4

    Raises
    ------
    ValueError
        If ``value`` does not identify a live scheme
    """
    if isinstance(value, str):
        scheme = scheme_from_name(value)
    elif scheme_name(value) is not None:
        scheme = Scheme(int(value))
    else:
        scheme = Scheme.UNKNOWN

    if scheme is Scheme.UNKNOWN:
        raise ValueError(
            f"Unknown ODE scheme: {value!r}. Available: {available_schemes()}"
        )
    return scheme
