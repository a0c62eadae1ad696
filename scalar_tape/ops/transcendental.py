# scalar_tape/ops/transcendental.py
import numpy as np
from scipy.special import erf as scipy_erf

from ..core.registry import register_op
from .arithmetic import _recorder_of

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)

register_op("exp",  1, lambda v, _: np.exp(v[0]),  lambda v, out, _: (out,))
register_op("log",  1, lambda v, _: np.log(v[0]),  lambda v, out, _: (1.0 / v[0],))
register_op("sqrt", 1, lambda v, _: np.sqrt(v[0]), lambda v, out, _: (0.5 / out,))


def _erf_partials(v, out, _):
    # d/dx erf(x) = (2/√π) * e^(-x²)
    return (TWO_OVER_SQRT_PI * np.exp(-v[0] * v[0]),)


register_op("erf", 1, lambda v, _: scipy_erf(v[0]), _erf_partials)


def exp(x):
    return _recorder_of(x).push("exp", (x,))

def log(x):
    return _recorder_of(x).push("log", (x,))

def sqrt(x):
    return _recorder_of(x).push("sqrt", (x,))

def erf(x):
    """Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt"""
    return _recorder_of(x).push("erf", (x,))
