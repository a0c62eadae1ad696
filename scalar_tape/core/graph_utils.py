"""
Tape inspection helpers.
Used to print and analyse the structure of a recorded tape.
"""

import numpy as np
from typing import Dict
from collections import Counter

from .tape import Tape


def tape_summary(tape: Tape) -> Dict:
    """
    Structural statistics of a tape.

    Args:
        tape: sealed Tape

    Returns:
        dict with node/edge counts, fan-in/fan-out statistics and op counts
    """
    n_nodes = len(tape)
    fan_ins = [len(node.operands) for node in tape]
    fan_outs = [0] * n_nodes
    for node in tape:
        for j in node.operands:
            fan_outs[j] += 1

    return {
        'nodes': n_nodes,
        'inputs': tape.input_count,
        'output': tape.output_index,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(Counter(node.op_tag for node in tape)),
    }


def format_tape(tape: Tape, max_nodes: int = 20) -> str:
    """
    One line per node, e.g. `Node   4: mul          <- [Node0, Node3]  val=1.000000`.
    At most `max_nodes` nodes are listed.
    """
    lines = []
    for i, node in enumerate(tape.nodes[:max_nodes]):
        parent_info = ", ".join(f"Node{j}" for j in node.operands)
        extra = "" if node.arg is None else f" arg={node.arg!r}"
        marker = "  <- output" if i == tape.output_index else ""
        lines.append(f"Node {i:3d}: {node.op_tag:12s} <- [{parent_info}]  val={node.value:.6f}{extra}{marker}")
    if len(tape) > max_nodes:
        lines.append(f"... ({len(tape) - max_nodes} more nodes)")
    return "\n".join(lines)
