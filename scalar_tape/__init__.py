# scalar_tape/__init__.py
# Scalar tape automatic differentiation (forward and reverse first-order modes)

# Registers the elementary operation rules
from . import ops

from .core.errors import ADError, TraceError, DimensionMismatch, UnsupportedOperation
from .core.node import TapeNode
from .core.tape import Tape
from .core.var import ADVar
from .core.recorder import Recorder, begin_trace, end_trace, trace
from .core.engine import evaluate, forward, reverse
from .core.seeds import gradient, value_and_gradient, forward_gradient, grads_list
from .core.graph_utils import tape_summary, format_tape

__version__ = "0.1.0"

__all__ = [
    # Errors
    'ADError',
    'TraceError',
    'DimensionMismatch',
    'UnsupportedOperation',
    # Tracing
    'TapeNode',
    'Tape',
    'ADVar',
    'Recorder',
    'begin_trace',
    'end_trace',
    'trace',
    # Engine
    'evaluate',
    'forward',
    'reverse',
    # Wrappers
    'gradient',
    'value_and_gradient',
    'forward_gradient',
    'grads_list',
    # Inspection
    'tape_summary',
    'format_tape',
    'ops',
]
