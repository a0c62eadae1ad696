# scalar_tape/ops/arithmetic.py
import numbers
from ..core.errors import UnsupportedOperation
from ..core.registry import register_op
from ..core.var import ADVar

# Rules: value(v, arg) and local partials(v, out, arg) -> (∂out/∂v[0], ∂out/∂v[1], ...)
register_op("const", 0, lambda v, c: c,           lambda v, out, c: ())
register_op("add",   2, lambda v, _: v[0] + v[1], lambda v, out, _: (1.0, 1.0))
register_op("sub",   2, lambda v, _: v[0] - v[1], lambda v, out, _: (1.0, -1.0))
register_op("mul",   2, lambda v, _: v[0] * v[1], lambda v, out, _: (v[1], v[0]))
register_op("div",   2, lambda v, _: v[0] / v[1], lambda v, out, _: (1.0 / v[1], -out / v[1]))
register_op("neg",   1, lambda v, _: -v[0],       lambda v, out, _: (-1.0,))


def _powi_partials(v, out, k):
    # d(x^k)/dx = k x^(k-1); for k == 0 the result is constant
    if k == 0:
        return (0.0,)
    return (k * v[0] ** (k - 1),)


register_op("powi", 1, lambda v, k: v[0] ** k, _powi_partials)


def _recorder_of(*xs):
    """Recorder of the first traced operand."""
    for x in xs:
        if isinstance(x, ADVar):
            return x.recorder
    raise UnsupportedOperation("at least one operand must be a traced value")


def _binary(tag, x, y):
    return _recorder_of(x, y).push(tag, (x, y))


def add(x, y): return _binary("add", x, y)
def sub(x, y): return _binary("sub", x, y)
def mul(x, y): return _binary("mul", x, y)
def div(x, y): return _binary("div", x, y)


def neg(x):
    return _recorder_of(x).push("neg", (x,))


def powi(x, k):
    """
    Power by a non-negative integer constant:
      out.val = x.val ** k
      ∂out/∂x = k * x^(k-1)     (0 when k == 0)
    """
    if isinstance(k, ADVar):
        raise UnsupportedOperation("the exponent of powi must be a constant")
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k < 0:
        raise UnsupportedOperation(f"powi needs a non-negative integer exponent, got {k!r}")
    return _recorder_of(x).push("powi", (x,), arg=int(k))


def pow(x, y):
    """`x ** y`: only integral, non-negative constant exponents are supported."""
    if isinstance(y, ADVar):
        raise UnsupportedOperation("a traced value cannot be used as an exponent")
    if isinstance(y, numbers.Real) and not isinstance(y, bool) and float(y).is_integer():
        y = int(y)
    return powi(x, y)


def square(x):
    return powi(x, 2)
