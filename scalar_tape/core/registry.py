# scalar_tape/core/registry.py

#-----------------------------------------------------------------------------
# Rule table shared by the recorder and the sweeps. Each elementary op
# registers how to compute its value and its local partials ∂out/∂operand;
# the tangent and adjoint rules are built from those partials.
#-----------------------------------------------------------------------------
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .errors import UnsupportedOperation

# Leaf kind that is substituted from the input vector rather than computed.
INPUT = "input"

ValueFn = Callable[[Sequence[float], Any], float]
PartialsFn = Callable[[Sequence[float], float, Any], Tuple[float, ...]]


@dataclass(frozen=True)
class OpRule:
    """
    Value and derivative rules of one elementary operation.

    Attributes
    ----------
    tag      : str
        Operation name stored in TapeNode.op_tag.
    arity    : int
        Number of node operands (0 for constants).
    value    : (operand_values, arg) -> float
    partials : (operand_values, out_value, arg) -> tuple of ∂out/∂operand_k
    """
    tag: str
    arity: int
    value: ValueFn
    partials: PartialsFn

    def tangent(self, vals, out, arg, dots):
        # out.dot = Σ_k (∂out/∂operand_k) * operand_k.dot
        total = 0.0
        for a, d in zip(self.partials(vals, out, arg), dots):
            total = total + a * d
        return total

    def adjoint(self, vals, out, arg, bar):
        # operand_k.adj += out.adj * (∂out/∂operand_k)
        return tuple(bar * a for a in self.partials(vals, out, arg))


_rules: Dict[str, OpRule] = {}


def register_op(tag: str, arity: int, value: ValueFn, partials: PartialsFn) -> OpRule:
    if tag == INPUT or tag in _rules:
        raise ValueError(f"operation {tag!r} is already registered")
    rule = OpRule(tag=tag, arity=arity, value=value, partials=partials)
    _rules[tag] = rule
    return rule


def get_rule(tag: str) -> OpRule:
    rule: Optional[OpRule] = _rules.get(tag)
    if rule is None:
        raise UnsupportedOperation(f"no rule registered for operation {tag!r}")
    return rule


def registered_ops():
    """Names of all ops the engine can replay (the input leaf included)."""
    return (INPUT,) + tuple(_rules)
