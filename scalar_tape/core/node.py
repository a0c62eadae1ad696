# scalar_tape/core/node.py
from dataclasses import dataclass
from typing import Optional, Tuple, Union

@dataclass(frozen=True)
class TapeNode:
    """
    One node on the tape produced by an elementary operation.

    Attributes
    ----------
    op_tag   : str
        Operation kind (e.g., "input", "const", "add", "mul", "powi").
    operands : Tuple[int, ...]
        Indices of the nodes this one reads. Always smaller than the node's own index.
    value    : float
        Value recorded during the trace pass.
    arg      : int | float | None
        Non-differentiable parameter: input slot for "input", literal for "const",
        exponent for "powi". None for the other ops.
    """
    op_tag: str
    operands: Tuple[int, ...]
    value: float
    arg: Optional[Union[int, float]] = None
