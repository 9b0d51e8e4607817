# odesolve/utils/__init__.py
"""
Utilities for odesolve.

Contains:
- config: package-wide settings (default scheme, write mode, memory budget)
- logging: timers, memory monitoring, progress tracking, parameter reports
- random: seeded NumPy generators for noise sources
"""

from .config import (
    PackageConfig,
    get_config,
    configure,
    reset_config,
)

from .logging import (
    Timer,
    memory_info,
    create_progress_callback,
    format_parameters,
    ProgressCallback,
)

from .random import (
    rng_key,
    split_keys,
    normal,
    KeyLike,
    Shape,
)

__all__ = [
    # config
    "PackageConfig",
    "get_config",
    "configure",
    "reset_config",
    # logging
    "Timer",
    "memory_info",
    "create_progress_callback",
    "format_parameters",
    "ProgressCallback",
    # random
    "rng_key",
    "split_keys",
    "normal",
    "KeyLike",
    "Shape",
]
