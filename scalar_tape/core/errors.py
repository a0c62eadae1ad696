# scalar_tape/core/errors.py
"""
Exceptions raised by the tape engine.

All of them derive from ADError so callers can catch the whole family at once.
"""
import numpy as np


class ADError(Exception):
    """Base class for tape/engine errors."""


class TraceError(ADError):
    """Malformed or incomplete trace (empty trace, double seal, foreign placeholder)."""


class DimensionMismatch(ADError, ValueError):
    """A vector argument disagrees with the tape's input or node count."""


class UnsupportedOperation(ADError, TypeError):
    """An operation outside the supported elementary set was requested."""


def check_length(what: str, got: int, expected: int):
    if got != expected:
        raise DimensionMismatch(f"{what} has length {got}, expected {expected}")


def as_vector(what: str, v, n: int):
    """float64 copy of a 1-D argument; wrong rank or length is an error, never padded."""
    arr = np.array(v, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatch(f"{what} must be one-dimensional, got shape {arr.shape}")
    check_length(what, arr.shape[0], n)
    return arr
