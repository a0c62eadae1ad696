# scalar_tape/core/__init__.py

"""
Core public API for the tape engine.

Exports:
    ADVar              : Placeholder recorded on a trace.
    Tape, TapeNode     : The sealed record of a trace and its nodes.
    begin_trace        : Open a trace, get one placeholder per input.
    end_trace          : Seal the trace and return its Tape.
    trace              : begin_trace + f(xs) + end_trace in one call.
    evaluate           : Replay a tape, returning the output and all node values.
    forward            : First-order forward sweep along a tangent direction.
    reverse            : First-order reverse sweep from the output weight.
    gradient           : evaluate + reverse with weight 1.
"""

from .errors import ADError, TraceError, DimensionMismatch, UnsupportedOperation
from .node import TapeNode
from .tape import Tape
from .var import ADVar
from .recorder import Recorder, begin_trace, end_trace, trace
from .engine import evaluate, forward, reverse
from .seeds import gradient, value_and_gradient, forward_gradient, grads_list

__all__ = [
    "ADError", "TraceError", "DimensionMismatch", "UnsupportedOperation",
    "TapeNode", "Tape", "ADVar",
    "Recorder", "begin_trace", "end_trace", "trace",
    "evaluate", "forward", "reverse",
    "gradient", "value_and_gradient", "forward_gradient", "grads_list",
]
