"""
Multiple-input single-output demo.

Differentiates the quadratic form f(x,y,z) = x^2 + z^2 + 2*x*y + z three ways:
1. forward scalar mode: one tangent sweep per direction
2. reverse scalar mode: one evaluation plus one adjoint sweep with weight 1
3. gradient API: the same, through the convenience wrapper
and compares each derivative against the hand-derived one.

Usage:
    python -m scalar_tape.demos.miso_scalar --point 2 -1 3
"""

import argparse
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..core.engine import evaluate, forward, reverse
from ..core.graph_utils import format_tape
from ..core.recorder import trace
from ..core.seeds import gradient
from ..core.tape import Tape

DIRECTIONS = ("dfdx", "dfdy", "dfdz")


@dataclass
class DemoConfig:
    """Settings for one demo run."""
    point: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    precision: int = 8
    show_tape: bool = False


@dataclass
class DemoReport:
    """Tables (Direction | AD derivative | Analytic derivative) and timings in milliseconds."""
    tape: Tape
    value: float
    forward: pd.DataFrame
    reverse: pd.DataFrame
    gradient: pd.DataFrame
    elapsed_ms: Dict[str, float] = field(default_factory=dict)


def reference_function(xs):
    """f(x,y,z) = x^2 + z^2 + 2*x*y + z"""
    x, y, z = xs
    return x*x + z*z + 2*x*y + z


def analytic_gradient(point: Sequence[float]) -> np.ndarray:
    """(df/dx, df/dy, df/dz) = (2(x+y), 2x, 2z+1)"""
    x, y, z = (float(p) for p in point)
    return np.array([2.0 * (x + y), 2.0 * x, 2.0 * z + 1.0])


def _table(ad_values, exact) -> pd.DataFrame:
    return pd.DataFrame({
        "Direction": list(DIRECTIONS),
        "AD derivative": np.asarray(ad_values, dtype=float),
        "Analytic derivative": exact,
    })


def run_demo(config: Optional[DemoConfig] = None) -> DemoReport:
    config = config or DemoConfig()
    xp = np.asarray(config.point, dtype=float)
    exact = analytic_gradient(xp)

    tape = trace(reference_function, 3, xp)
    elapsed = {}

    # Forward scalar mode: one sweep per basis direction
    t0 = time.perf_counter()
    fwd = []
    for i in range(3):
        x1 = np.zeros(3)
        x1[i] = 1.0
        _, y1 = forward(tape, xp, x1)
        fwd.append(y1)
    elapsed["forward"] = (time.perf_counter() - t0) * 1000.0

    # Reverse scalar mode: weight u = 1 on the single output
    t0 = time.perf_counter()
    value, vals = evaluate(tape, xp)
    rev = reverse(tape, vals, 1.0)
    elapsed["reverse"] = (time.perf_counter() - t0) * 1000.0

    # Gradient API
    t0 = time.perf_counter()
    grad = gradient(tape, xp)
    elapsed["gradient"] = (time.perf_counter() - t0) * 1000.0

    return DemoReport(
        tape=tape,
        value=value,
        forward=_table(fwd, exact),
        reverse=_table(rev, exact),
        gradient=_table(grad, exact),
        elapsed_ms=elapsed,
    )


def format_report(report: DemoReport, precision: int = 8) -> str:
    float_format = f"{{:.{precision}f}}".format
    sections = [
        ("Derivative computation in forward mode", report.forward, "forward"),
        ("Derivative computation in reverse mode", report.reverse, "reverse"),
        ("Derivative computation using the gradient API", report.gradient, "gradient"),
    ]
    lines: List[str] = []
    for title, table, key in sections:
        lines.append(title)
        lines.append(table.to_string(index=False, float_format=float_format))
        lines.append("")
        lines.append(f"The elapsed time was {report.elapsed_ms[key]:.{precision}f} milliseconds")
        lines.append("")
        lines.append("")
    return "\n".join(lines)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Forward, reverse and gradient-API derivatives of x^2 + z^2 + 2xy + z',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--point', type=float, nargs=3, default=[1.0, 1.0, 1.0],
                        metavar=('X', 'Y', 'Z'), help='Point at which to differentiate')
    parser.add_argument('--precision', type=int, default=8,
                        help='Digits printed after the decimal point')
    parser.add_argument('--show-tape', action='store_true',
                        help='Print the recorded tape before the results')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging from the engine')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = DemoConfig(point=tuple(args.point), precision=args.precision, show_tape=args.show_tape)
    report = run_demo(config)

    if config.show_tape:
        print(format_tape(report.tape))
        print()
    print(format_report(report, config.precision))
    return report


if __name__ == "__main__":
    main()
