# scalar_tape/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Callable, List, Sequence, Tuple
import numpy as np

from .engine import evaluate, forward, reverse
from .recorder import trace
from .tape import Tape
from .var import ADVar


def gradient(tape: Tape, input_values: Sequence[float]) -> np.ndarray:
    """
    Full gradient of the traced function at `input_values`:
    one evaluation plus one reverse sweep, whatever the number of inputs.
    """
    _, vals = evaluate(tape, input_values)
    return reverse(tape, vals, 1.0)


def value_and_gradient(tape: Tape, input_values: Sequence[float]) -> Tuple[float, np.ndarray]:
    y, vals = evaluate(tape, input_values)
    return y, reverse(tape, vals, 1.0)


def forward_gradient(tape: Tape, input_values: Sequence[float]) -> np.ndarray:
    """Same gradient as `gradient`, assembled from one forward sweep per basis direction."""
    n = tape.input_count
    g = np.empty(n, dtype=np.float64)
    for i in range(n):
        e = np.zeros(n)
        e[i] = 1.0
        _, g[i] = forward(tape, input_values, e)
    return g


def grads_list(f: Callable[[List[ADVar]], ADVar],
               x0_list: Sequence[float]) -> List[float]:
    """
    Trace `f` at `x0_list` and return its partials in input order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    x0 = list(x0_list)
    tape = trace(f, len(x0), x0)
    return gradient(tape, x0).tolist()
