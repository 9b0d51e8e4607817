# odesolve/utils/config.py
"""
Global package configuration.

Provides centralized settings for the default integration scheme, the
trajectory write mode, diagnostics and the memory budget used when
trajectory buffers are allocated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any
import copy
import os
import warnings
import psutil


_TRUE_STRINGS = ("1", "true", "yes", "on")


@dataclass
class PackageConfig:
    """
    Global configuration for the odesolve package.

    Controls the default scheme used by the driver layer, whether steppers
    overwrite or accumulate into the next trajectory slot, diagnostics, and
    the memory budget checked before a trajectory buffer is allocated.
    """
    # Numerics
    dtype: str = "float64"              # stepping is defined on IEEE doubles only

    # Integration defaults
    default_scheme: str = "heun"        # 'euler' | 'heun' | 'rk4'
    accumulate: bool = False            # additive write into the next slot

    # Diagnostics
    verbose: bool = False               # print scheme labels and reports
    show_progress: bool = False         # progress line for long simulations

    # Memory management
    memory_limit_gb: float = 8.0        # warn when a trajectory exceeds this

    # Output
    output_dir: str = "."

    # Environment settings
    _system_memory_gb: float = field(init=False, default=8.0)

    def __post_init__(self):
        self._detect_system_resources()
        self._apply_environment()
        self._validate_config()

    def _detect_system_resources(self):
        """Detect available system memory."""
        try:
            self._system_memory_gb = psutil.virtual_memory().total / (1024**3)
        except Exception:
            self._system_memory_gb = 8.0  # Conservative default

    def _apply_environment(self):
        """Apply ODESOLVE_* environment overrides."""
        verbose = os.environ.get("ODESOLVE_VERBOSE")
        if verbose is not None:
            self.verbose = verbose.strip().lower() in _TRUE_STRINGS
        scheme = os.environ.get("ODESOLVE_SCHEME")
        if scheme:
            from ..integrators.schemes import Scheme, scheme_from_name
            if scheme_from_name(scheme) is Scheme.UNKNOWN:
                warnings.warn(
                    f"Ignoring ODESOLVE_SCHEME='{scheme}': unknown scheme, "
                    f"keeping '{self.default_scheme}'"
                )
            else:
                self.default_scheme = scheme.strip()

    def _validate_config(self):
        """Validate configuration settings."""
        if self.dtype != "float64":
            raise ValueError(f"dtype must be 'float64', got '{self.dtype}'")

        # Imported lazily: integrators import this module for the verbose flag
        from ..integrators.schemes import Scheme, scheme_from_name
        if scheme_from_name(self.default_scheme) is Scheme.UNKNOWN:
            raise ValueError(f"Unknown default scheme '{self.default_scheme}'")

        if self.memory_limit_gb <= 0:
            self.memory_limit_gb = max(self._system_memory_gb * 0.5, 2.0)

        if self.memory_limit_gb > self._system_memory_gb * 0.8:
            warnings.warn(
                f"Memory limit {self.memory_limit_gb}GB exceeds 80% of system "
                f"memory {self._system_memory_gb:.1f}GB"
            )

    # ---------- Configuration methods ----------

    def set_memory_limit(self, limit_gb: float) -> None:
        """Set memory usage limit."""
        if limit_gb <= 0:
            raise ValueError("Memory limit must be positive")
        self.memory_limit_gb = limit_gb

    def get_system_info(self) -> Dict[str, Any]:
        """Get system resource information."""
        return {
            "system_memory_gb": self._system_memory_gb,
            "memory_limit_gb": self.memory_limit_gb,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dtype": self.dtype,
            "default_scheme": self.default_scheme,
            "accumulate": self.accumulate,
            "verbose": self.verbose,
            "show_progress": self.show_progress,
            "memory_limit_gb": self.memory_limit_gb,
            "output_dir": self.output_dir,
        }


# Global configuration instance
_global_config = PackageConfig()


def get_config() -> PackageConfig:
    """Get global package configuration."""
    return _global_config


def configure(**kwargs) -> None:
    """
    Configure package settings.

    Parameters
    ----------
    **kwargs : dict
        Configuration parameters to update. Unknown names are ignored with
        a warning.

    Raises
    ------
    ValueError
        If the updated settings are invalid; the configuration is then left
        unchanged.
    """
    candidate = copy.copy(_global_config)
    for key, value in kwargs.items():
        if hasattr(candidate, key) and not key.startswith("_"):
            setattr(candidate, key, value)
        else:
            warnings.warn(f"Unknown configuration parameter: {key}")

    # Validate before anything reaches the live configuration
    candidate._validate_config()
    vars(_global_config).update(vars(candidate))


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _global_config
    _global_config = PackageConfig()
