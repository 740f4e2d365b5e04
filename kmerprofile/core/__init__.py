# core/__init__.py
from __future__ import annotations

from .config import get_config, set_cache_root, set_valid_nucleotides, temporary_cache_root
from .errors import InvalidArgumentError, IOFailureError, OutOfRangeError, ProfileError

__all__ = [
    # config
    "get_config",
    "set_cache_root",
    "set_valid_nucleotides",
    "temporary_cache_root",
    # errors
    "ProfileError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "IOFailureError",
]
