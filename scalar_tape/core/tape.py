# scalar_tape/core/tape.py
from __future__ import annotations
import numbers
from typing import Iterable, Iterator, Tuple

from .errors import TraceError
from .node import TapeNode
from .registry import INPUT, get_rule


class Tape:
    """
    Sealed record of one trace: nodes in forward order, the input slots and the output node.

    Input nodes occupy indices 0..input_count-1 in slot order. Every operand index is
    smaller than the index of the node reading it, so a single forward walk (or a
    single backward walk) over `nodes` visits operands before (after) their readers.
    The object is read-only; derivative calls allocate their own buffers.
    """
    __slots__ = ("_nodes", "_input_count", "_output_index")

    def __init__(self, nodes: Iterable[TapeNode], input_count: int, output_index: int):
        nodes = tuple(nodes)
        _validate(nodes, input_count, output_index)
        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_input_count", int(input_count))
        object.__setattr__(self, "_output_index", int(output_index))

    def __setattr__(self, name, value):
        raise AttributeError("Tape is immutable")

    @property
    def nodes(self) -> Tuple[TapeNode, ...]:
        return self._nodes

    @property
    def input_count(self) -> int:
        return self._input_count

    @property
    def output_index(self) -> int:
        return self._output_index

    @property
    def output(self) -> TapeNode:
        return self._nodes[self._output_index]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TapeNode]:
        return iter(self._nodes)

    def __getitem__(self, idx) -> TapeNode:
        return self._nodes[idx]

    def __repr__(self):
        return (f"Tape(nodes={len(self._nodes)}, inputs={self._input_count}, "
                f"output={self._output_index})")


def _validate(nodes, input_count, output_index):
    if input_count < 1:
        raise TraceError(f"a tape needs at least one input, got {input_count}")
    if len(nodes) < input_count:
        raise TraceError(f"tape has {len(nodes)} nodes but declares {input_count} inputs")
    if len(nodes) == input_count:
        raise TraceError("no operations were recorded before the output was designated")
    if not 0 <= output_index < len(nodes):
        raise TraceError(f"output index {output_index} is outside the tape (0..{len(nodes) - 1})")

    for i, node in enumerate(nodes):
        if i < input_count:
            if node.op_tag != INPUT or node.arg != i:
                raise TraceError(f"node {i} must be the input node for slot {i}, got {node.op_tag!r}")
            continue
        if node.op_tag == INPUT:
            raise TraceError(f"input node found at index {i}, after the input slots")
        rule = get_rule(node.op_tag)
        if len(node.operands) != rule.arity:
            raise TraceError(
                f"node {i} ({node.op_tag}) has {len(node.operands)} operands, expected {rule.arity}"
            )
        _check_arg(i, node)
        for j in node.operands:
            if not 0 <= j < i:
                raise TraceError(f"node {i} ({node.op_tag}) refers to node {j}, which does not precede it")


def _check_arg(i, node):
    arg = node.arg
    if node.op_tag == "const":
        if isinstance(arg, bool) or not isinstance(arg, numbers.Real):
            raise TraceError(f"const node {i} needs a real literal, got {arg!r}")
    elif node.op_tag == "powi":
        if isinstance(arg, bool) or not isinstance(arg, numbers.Integral) or arg < 0:
            raise TraceError(f"powi node {i} needs a non-negative integer exponent, got {arg!r}")
