"""
Demo harness and tape inspection helpers.
"""

import numpy as np

from scalar_tape import format_tape, tape_summary, trace
from scalar_tape.demos.miso_scalar import DemoConfig, main, reference_function, run_demo


def test_run_demo_default_point():
    report = run_demo()
    assert report.value == 5.0
    for table in (report.forward, report.reverse, report.gradient):
        assert list(table["Direction"]) == ["dfdx", "dfdy", "dfdz"]
        np.testing.assert_allclose(table["AD derivative"], [4.0, 2.0, 3.0])
        np.testing.assert_allclose(table["AD derivative"], table["Analytic derivative"])
    assert set(report.elapsed_ms) == {"forward", "reverse", "gradient"}


def test_run_demo_other_point():
    report = run_demo(DemoConfig(point=(2.0, -1.0, 3.0)))
    np.testing.assert_allclose(report.gradient["AD derivative"], [2.0, 4.0, 7.0])
    np.testing.assert_allclose(report.forward["AD derivative"], report.reverse["AD derivative"])


def test_main_prints_three_sections(capsys):
    main(["--point", "0", "0", "0", "--precision", "3", "--show-tape"])
    out = capsys.readouterr().out
    assert "Derivative computation in forward mode" in out
    assert "Derivative computation in reverse mode" in out
    assert "Derivative computation using the gradient API" in out
    assert "<- output" in out
    assert "milliseconds" in out


def test_tape_summary_of_reference_function():
    tape = trace(reference_function, 3)
    stats = tape_summary(tape)
    assert stats["nodes"] == 11
    assert stats["inputs"] == 3
    assert stats["output"] == 10
    assert stats["edges"] == 14
    assert stats["operations"] == {"input": 3, "mul": 4, "add": 3, "const": 1}
    assert stats["max_fan_out"] == 3  # x is read by x*x (twice) and 2*x


def test_format_tape_truncates():
    tape = trace(reference_function, 3)
    text = format_tape(tape, max_nodes=4)
    assert text.splitlines()[0].startswith("Node   0: input")
    assert text.splitlines()[-1] == "... (7 more nodes)"
