"""Operator configuration with platform auto-detection."""

from operator_config.config import Config, new
from operator_config.platform import Platform

__all__ = [
    "Config",
    "Platform",
    "new",
]
