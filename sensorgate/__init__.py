"""Applicability checks deciding which analysis sensors run."""

from .models import ConfigError, RepoManifest, SensorDescriptor, SkipReason
from .optimizer import SensorOptimizer

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "RepoManifest",
    "SensorDescriptor",
    "SensorOptimizer",
    "SkipReason",
]
