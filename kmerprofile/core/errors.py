# core/errors.py
from __future__ import annotations

# ----------------------------
# Exceptions
# ----------------------------


class ProfileError(Exception):
    """Base error for k-mer and profile operations."""


class OutOfRangeError(ProfileError, IndexError):
    """
    Raised for an index outside ``[0, size)``, a capacity request beyond the
    maximum dimension, or a negative/over-limit count read from a file.
    """


class InvalidArgumentError(ProfileError, ValueError):
    """
    Raised for arguments that make an operation meaningless, such as a
    distance query against an empty profile or an unknown magic string.
    """


class IOFailureError(ProfileError, OSError):
    """Raised when a profile file cannot be opened, read or written."""


__all__ = ["ProfileError", "OutOfRangeError", "InvalidArgumentError", "IOFailureError"]
