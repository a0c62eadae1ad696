# scalar_tape/core/engine.py
from __future__ import annotations
import logging
import numpy as np
from typing import Sequence, Tuple

from .errors import DimensionMismatch, as_vector, check_length
from .registry import INPUT, get_rule
from .tape import Tape

logger = logging.getLogger(__name__)


def evaluate(tape: Tape, input_values: Sequence[float]) -> Tuple[float, np.ndarray]:
    """
    Replay the tape at `input_values`.

    Returns
    -------
    (output value, per-node values). The per-node array is what `reverse` needs;
    it belongs to the caller and is never cached on the tape.
    """
    x = as_vector("input_values", input_values, tape.input_count)
    vals = np.empty(len(tape), dtype=np.float64)

    for i, node in enumerate(tape.nodes):
        if node.op_tag == INPUT:
            vals[i] = x[node.arg]
            continue
        rule = get_rule(node.op_tag)
        vals[i] = rule.value([vals[j] for j in node.operands], node.arg)

    return float(vals[tape.output_index]), vals


def forward(tape: Tape, input_values: Sequence[float],
            tangent: Sequence[float]) -> Tuple[float, float]:
    """
    First-order forward (tangent) sweep: value and directional derivative along `tangent`.

    Seeding `tangent` with the i-th basis vector yields ∂f/∂x_i, so a full gradient
    takes one call per input.
    """
    x = as_vector("input_values", input_values, tape.input_count)
    xd = as_vector("tangent", tangent, tape.input_count)
    vals = np.empty(len(tape), dtype=np.float64)
    dots = np.empty(len(tape), dtype=np.float64)

    for i, node in enumerate(tape.nodes):
        if node.op_tag == INPUT:
            vals[i] = x[node.arg]
            dots[i] = xd[node.arg]
            continue
        rule = get_rule(node.op_tag)
        v = [vals[j] for j in node.operands]
        vals[i] = rule.value(v, node.arg)
        dots[i] = rule.tangent(v, vals[i], node.arg, [dots[j] for j in node.operands])

    k = tape.output_index
    return float(vals[k]), float(dots[k])


def reverse(tape: Tape, per_node_values: Sequence[float], output_weight: float = 1.0) -> np.ndarray:
    """
    First-order reverse (adjoint) sweep.

    Args:
        tape: sealed tape.
        per_node_values: values from a prior `evaluate` on the same tape. They are
            used as given; the sweep does not re-evaluate anything.
        output_weight: adjoint seed of the output node (1.0 for the gradient).

    Returns:
        Adjoints of the input nodes, i.e. output_weight * ∇f.

    Notes:
        For each node, walking backwards: operand.adj += node.adj * (∂node/∂operand).
        When a node is reached, every reader of it has a larger index and has
        already been processed, so its adjoint is final.
    """
    vals = np.asarray(per_node_values, dtype=np.float64)
    if vals.ndim != 1:
        raise DimensionMismatch(f"per_node_values must be one-dimensional, got shape {vals.shape}")
    check_length("per_node_values", vals.shape[0], len(tape))

    adj = np.zeros(len(tape), dtype=np.float64)
    adj[tape.output_index] = output_weight

    # Backward sweep
    for i in range(len(tape) - 1, tape.input_count - 1, -1):
        bar = adj[i]
        if bar == 0.0:
            continue  # nothing to propagate
        node = tape.nodes[i]
        rule = get_rule(node.op_tag)
        contribs = rule.adjoint([vals[j] for j in node.operands], vals[i], node.arg, bar)
        for j, c in zip(node.operands, contribs):
            adj[j] += c

    logger.debug("reverse sweep over %d nodes, output weight %r", len(tape), output_weight)
    return adj[:tape.input_count].copy()
