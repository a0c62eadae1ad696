# scalar_tape/core/recorder.py
from __future__ import annotations
import logging
import numpy as np
from typing import Callable, List, Optional, Sequence

from .errors import TraceError, as_vector
from .node import TapeNode
from .registry import INPUT, get_rule
from .tape import Tape
from .var import ADVar, as_scalar

logger = logging.getLogger(__name__)


class Recorder:
    """
    An open trace. Owned by the caller; there is no process-wide active tape.

    Typical use goes through `begin_trace` / `end_trace`:

        xs = begin_trace(3, values=[1.0, 1.0, 1.0])
        y = xs[0] * xs[1] + xs[2]
        tape = end_trace(y)
    """

    def __init__(self, n_inputs: int, values: Optional[Sequence[float]] = None):
        if n_inputs < 1:
            raise TraceError(f"a trace needs at least one input, got {n_inputs}")
        if values is None:
            values = np.zeros(n_inputs)
        values = as_vector("trace values", values, n_inputs)

        self.n_inputs = int(n_inputs)
        self.sealed = False
        self._nodes: List[TapeNode] = []
        self.inputs: List[ADVar] = []
        for slot, v in enumerate(values):
            self._nodes.append(TapeNode(op_tag=INPUT, operands=(), value=float(v), arg=slot))
            self.inputs.append(ADVar(self, slot, v))

    def __len__(self):
        return len(self._nodes)

    def _check_open(self):
        if self.sealed:
            raise TraceError("this trace has already been sealed by end_trace()")

    def _own(self, v: ADVar) -> ADVar:
        if v.recorder is not self:
            raise TraceError(f"{v!r} was not produced by this trace")
        return v

    def constant(self, c) -> ADVar:
        """Record a literal as a "const" node."""
        c = as_scalar(c)
        return self.push("const", (), arg=c)

    def push(self, op_tag: str, operands: Sequence, arg=None) -> ADVar:
        """
        Append one node for `op_tag` applied to `operands` and return its placeholder.
        Plain numbers among the operands are recorded as constants first.
        """
        self._check_open()
        rule = get_rule(op_tag)
        for o in operands:
            if isinstance(o, ADVar):
                self._own(o)
        args = [o if isinstance(o, ADVar) else self.constant(o) for o in operands]

        vals = [np.float64(a.val) for a in args]
        # Trace-time values are only informative, so domain warnings are muted here.
        with np.errstate(all="ignore"):
            out_val = float(rule.value(vals, arg))

        idx = len(self._nodes)
        self._nodes.append(TapeNode(op_tag=op_tag, operands=tuple(a.index for a in args),
                                    value=out_val, arg=arg))
        return ADVar(self, idx, out_val)

    def end_trace(self, output: ADVar) -> Tape:
        self._check_open()
        if not isinstance(output, ADVar):
            raise TraceError(f"the output must be a traced value, got {type(output).__name__}")
        self._own(output)
        tape = Tape(self._nodes, self.n_inputs, output.index)
        self.sealed = True
        logger.debug("sealed tape: %d nodes, %d inputs, output node %d",
                     len(tape), tape.input_count, tape.output_index)
        return tape


def begin_trace(n_inputs: int, values: Optional[Sequence[float]] = None) -> List[ADVar]:
    """Open a new trace and return one placeholder per input slot."""
    return list(Recorder(n_inputs, values).inputs)


def end_trace(output: ADVar) -> Tape:
    """Seal the trace that produced `output` and return its tape."""
    if not isinstance(output, ADVar):
        raise TraceError(f"the output must be a traced value, got {type(output).__name__}")
    return output.recorder.end_trace(output)


def trace(f: Callable[[List[ADVar]], ADVar], n_inputs: int,
          values: Optional[Sequence[float]] = None) -> Tape:
    """
    Record `f` once and return the sealed tape.

    Example
    -------
    tape = trace(lambda xs: xs[0]*xs[0] + 3*xs[1], 2)
    """
    xs = begin_trace(n_inputs, values)
    return end_trace(f(xs))
