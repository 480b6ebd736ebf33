"""SweepScope: explore matrix-factorization hyperparameter sweeps."""

from . import config, contracts, core, io, models

__version__ = "0.1.0"

__all__ = [
    "config",
    "contracts",
    "core",
    "io",
    "models",
    "__version__",
]
