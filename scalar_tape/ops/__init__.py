# scalar_tape/ops/__init__.py

# Importing the modules registers their rules with the engine
from . import arithmetic
from . import transcendental

# Convenience re-exports so users can do: from scalar_tape.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow, powi, square
from .transcendental import exp, log, sqrt, erf

import numpy as np

# NumPy ufuncs accepted on traced values (see ADVar.__array_ufunc__)
UFUNC_TABLE = {
    np.add: add,
    np.subtract: sub,
    np.multiply: mul,
    np.true_divide: div,
    np.negative: neg,
    np.power: pow,
    np.square: square,
    np.exp: exp,
    np.log: log,
    np.sqrt: sqrt,
}

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "powi", "square",
    "exp", "log", "sqrt", "erf",
]
