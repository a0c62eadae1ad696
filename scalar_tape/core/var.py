# scalar_tape/core/var.py
from __future__ import annotations
import numpy as np
from typing import Any

from .errors import UnsupportedOperation


class ADVar:
    """
    Placeholder for a value inside a trace.

    Every operation on an ADVar appends exactly one node to the recorder that
    produced it and returns a new ADVar pointing at that node. Operations are
    available as named methods (`x.mul(y)`, `x.powi(2)`) and as Python/NumPy
    operators, so the traced function reads like plain arithmetic.

    Attributes
    ----------
    recorder : Recorder
        The trace this placeholder belongs to.
    index : int
        Position of the node on the tape.
    val : float
        Value recorded for the node during the trace pass.
    """

    __slots__ = ("recorder", "index", "val")
    __array_priority__ = 1000  # ensures NumPy ufuncs prefer ADVar.__array_ufunc__

    def __init__(self, recorder, index: int, val: Any):
        self.recorder = recorder
        self.index = index
        self.val = float(val)

    def __repr__(self):
        return f"ADVar(node={self.index}, val={self.val!r})"

    # Named operations
    def add(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def sub(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def mul(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def div(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def neg(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def powi(self, k):
        from ..ops.arithmetic import powi
        return powi(self, k)

    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def log(self):
        from ..ops.transcendental import log
        return log(self)

    def sqrt(self):
        from ..ops.transcendental import sqrt
        return sqrt(self)

    def erf(self):
        from ..ops.transcendental import erf
        return erf(self)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        return self.mul(other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        return self.div(other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        raise UnsupportedOperation("a traced value cannot be used as an exponent")

    # Anything that would let the traced value steer control flow is rejected:
    # the tape only records straight-line arithmetic.
    def __bool__(self):
        raise UnsupportedOperation("branching on a traced value is not supported")

    def __float__(self):
        raise UnsupportedOperation("converting a traced value to float is not supported")

    def __abs__(self):
        raise UnsupportedOperation("abs() is not a supported operation")

    def _compare(self, other):
        raise UnsupportedOperation("comparisons of traced values are not supported")

    __lt__ = __le__ = __gt__ = __ge__ = __eq__ = __ne__ = _compare
    __hash__ = object.__hash__

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        from ..ops import UFUNC_TABLE
        op = UFUNC_TABLE.get(ufunc)
        if method != "__call__" or kwargs or op is None:
            raise UnsupportedOperation(f"numpy.{ufunc.__name__} ({method}) is not a supported operation")
        return op(*inputs)


def as_scalar(x) -> float:
    """Validate a plain number mixed into a trace and return it as float."""
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, (int, float, np.integer, np.floating)):
        raise UnsupportedOperation(f"cannot mix {type(x).__name__} into a traced expression")
    return float(x)
