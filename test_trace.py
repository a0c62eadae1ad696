"""
Recording rules and structural errors: empty traces, double sealing,
foreign placeholders, unsupported operations and dimension checks.
"""

import dataclasses

import numpy as np
import pytest

from scalar_tape import (
    ADError,
    DimensionMismatch,
    Recorder,
    Tape,
    TapeNode,
    TraceError,
    UnsupportedOperation,
    begin_trace,
    end_trace,
    evaluate,
    forward,
    gradient,
    reverse,
    trace,
)
from scalar_tape.demos.miso_scalar import reference_function


def _simple_tape():
    xs = begin_trace(2, [3.0, 4.0])
    return end_trace(xs[0] * xs[1] + xs[0])


class TestRecording:

    def test_each_operation_appends_one_node(self):
        r = Recorder(2)
        x, y = r.inputs
        assert len(r) == 2
        z = x.add(y)
        assert len(r) == 3 and z.index == 2
        w = z.mul(x)
        assert len(r) == 4 and w.index == 3
        tape = r.end_trace(w)
        assert [n.op_tag for n in tape] == ["input", "input", "add", "mul"]
        assert tape.output_index == 3

    def test_literals_become_const_nodes(self):
        xs = begin_trace(1, [5.0])
        tape = end_trace(2 * xs[0])
        assert [n.op_tag for n in tape] == ["input", "const", "mul"]
        assert tape[1].arg == 2.0
        assert tape.output.value == 10.0

    def test_recorded_values_follow_trace_point(self):
        tape = trace(reference_function, 3, [1.0, 1.0, 1.0])
        assert tape.output.value == 5.0
        assert [n.value for n in tape.nodes[:3]] == [1.0, 1.0, 1.0]

    def test_operands_precede_their_node(self):
        tape = trace(reference_function, 3)
        for i, node in enumerate(tape):
            assert all(j < i for j in node.operands)

    def test_independent_traces_do_not_interfere(self):
        a = begin_trace(1, [2.0])
        b = begin_trace(1, [3.0])
        ya = a[0] * a[0]
        yb = b[0] + 1.0
        ta, tb = end_trace(ya), end_trace(yb)
        assert len(ta) == 2 and len(tb) == 3


class TestTraceErrors:

    def test_empty_trace(self):
        xs = begin_trace(2)
        with pytest.raises(TraceError):
            end_trace(xs[0])

    def test_empty_trace_through_trace_helper(self):
        with pytest.raises(TraceError):
            trace(lambda xs: xs[1], 2)

    def test_second_output_designation(self):
        xs = begin_trace(1)
        y1 = xs[0] * 2
        y2 = y1 + 1
        end_trace(y2)
        with pytest.raises(TraceError):
            end_trace(y1)
        with pytest.raises(TraceError):
            end_trace(y2)

    def test_recording_after_seal(self):
        xs = begin_trace(1)
        end_trace(xs[0] * 3)
        with pytest.raises(TraceError):
            xs[0] + 1

    def test_mixing_placeholders_from_two_traces(self):
        a = begin_trace(1)
        b = begin_trace(1)
        with pytest.raises(TraceError):
            a[0] * b[0]

    def test_output_from_another_trace(self):
        r1, r2 = Recorder(1), Recorder(1)
        y = r2.inputs[0] * 2
        r1.inputs[0] * 2
        with pytest.raises(TraceError):
            r1.end_trace(y)

    def test_output_must_be_a_placeholder(self):
        with pytest.raises(TraceError):
            end_trace(3.0)

    def test_no_inputs(self):
        with pytest.raises(TraceError):
            begin_trace(0)

    def test_trace_values_length(self):
        with pytest.raises(DimensionMismatch):
            begin_trace(3, [1.0, 2.0])

    def test_trace_values_must_be_one_dimensional(self):
        with pytest.raises(DimensionMismatch):
            Recorder(3, [[1.0, 2.0, 3.0]])
        with pytest.raises(DimensionMismatch):
            begin_trace(1, 2.0)

    def test_errors_share_a_base_class(self):
        assert issubclass(TraceError, ADError)
        assert issubclass(DimensionMismatch, ValueError)
        assert issubclass(UnsupportedOperation, TypeError)


class TestUnsupportedOperations:

    @pytest.mark.parametrize("build", [
        lambda x, y: x ** 0.5,
        lambda x, y: x ** -1,
        lambda x, y: x ** y,
        lambda x, y: 2 ** x,
        lambda x, y: x.powi(2.5),
        lambda x, y: abs(x),
        lambda x, y: float(x),
        lambda x, y: x if x > y else y,
        lambda x, y: x == y,
        lambda x, y: x != 0,
        lambda x, y: x * 2 if x == 0.0 else x * 3,
        lambda x, y: bool(x),
        lambda x, y: np.sin(x),
        lambda x, y: x * "a",
    ])
    def test_rejected(self, build):
        x, y = begin_trace(2, [1.0, 2.0])
        with pytest.raises(UnsupportedOperation):
            build(x, y)

    def test_placeholders_stay_hashable(self):
        x, y = begin_trace(2, [1.0, 2.0])
        seen = {x, y}
        assert len(seen) == 2 and x in seen

    def test_unknown_op_tag_in_hand_built_tape(self):
        nodes = [TapeNode("input", (), 0.0, 0), TapeNode("tanh", (0,), 0.0)]
        with pytest.raises(UnsupportedOperation):
            Tape(nodes, 1, 1)

    def test_integral_float_exponent_and_numpy_ufuncs(self):
        x, y = begin_trace(2, [3.0, 2.0])
        tape = end_trace(np.add(x ** 2.0, np.multiply(2.0, np.square(y))))
        assert tape.output.value == 17.0
        np.testing.assert_allclose(gradient(tape, [3.0, 2.0]), [6.0, 8.0])


class TestTapeStructure:

    def test_tape_is_immutable(self):
        tape = _simple_tape()
        with pytest.raises(AttributeError):
            tape.input_count = 5
        with pytest.raises(AttributeError):
            tape.output_index = 0
        with pytest.raises(dataclasses.FrozenInstanceError):
            tape[2].value = 0.0
        assert isinstance(tape.nodes, tuple)

    def test_forward_reference_rejected(self):
        nodes = [TapeNode("input", (), 0.0, 0), TapeNode("add", (0, 2), 0.0), TapeNode("neg", (0,), 0.0)]
        with pytest.raises(TraceError):
            Tape(nodes, 1, 2)

    def test_output_index_out_of_range(self):
        nodes = [TapeNode("input", (), 0.0, 0), TapeNode("neg", (0,), 0.0)]
        with pytest.raises(TraceError):
            Tape(nodes, 1, 2)

    def test_inputs_must_lead_the_tape(self):
        nodes = [TapeNode("const", (), 1.0, 1.0), TapeNode("input", (), 0.0, 0), TapeNode("neg", (1,), 0.0)]
        with pytest.raises(TraceError):
            Tape(nodes, 1, 2)

    def test_wrong_arity(self):
        nodes = [TapeNode("input", (), 0.0, 0), TapeNode("mul", (0,), 0.0)]
        with pytest.raises(TraceError):
            Tape(nodes, 1, 1)

    @pytest.mark.parametrize("node", [
        TapeNode("powi", (0,), 0.0),
        TapeNode("powi", (0,), 0.0, -1),
        TapeNode("powi", (0,), 0.0, 2.5),
        TapeNode("const", (), 0.0),
        TapeNode("const", (), 0.0, "1"),
    ])
    def test_missing_or_bad_arg(self, node):
        nodes = [TapeNode("input", (), 0.0, 0), node, TapeNode("add", (0, 1), 0.0)]
        with pytest.raises(TraceError):
            Tape(nodes, 1, 2)

    def test_hand_built_tape_evaluates(self):
        nodes = [
            TapeNode("input", (), 0.0, 0),
            TapeNode("input", (), 0.0, 1),
            TapeNode("mul", (0, 1), 0.0),
            TapeNode("powi", (2,), 0.0, 2),
        ]
        tape = Tape(nodes, 2, 3)
        y, _ = evaluate(tape, [2.0, 3.0])
        assert y == 36.0
        np.testing.assert_allclose(gradient(tape, [2.0, 3.0]), [36.0, 24.0])


class TestDimensionMismatch:

    @pytest.mark.parametrize("bad", [[1.0], [1.0, 2.0, 3.0], [], [[1.0, 2.0]]])
    def test_evaluate(self, bad):
        tape = _simple_tape()
        with pytest.raises(DimensionMismatch):
            evaluate(tape, bad)

    def test_forward_inputs_and_tangent(self):
        tape = _simple_tape()
        with pytest.raises(DimensionMismatch):
            forward(tape, [1.0], [1.0, 0.0])
        with pytest.raises(DimensionMismatch):
            forward(tape, [1.0, 2.0], [1.0])
        with pytest.raises(DimensionMismatch):
            forward(tape, [1.0, 2.0], [1.0, 0.0, 0.0])

    def test_reverse_node_values(self):
        tape = _simple_tape()
        _, vals = evaluate(tape, [1.0, 2.0])
        with pytest.raises(DimensionMismatch):
            reverse(tape, vals[:-1])
        with pytest.raises(DimensionMismatch):
            reverse(tape, np.append(vals, 0.0))

    def test_gradient(self):
        tape = _simple_tape()
        with pytest.raises(DimensionMismatch):
            gradient(tape, [1.0])


def test_tracing_at_a_singular_point_still_records():
    xs = begin_trace(1)
    tape = end_trace(1.0 / xs[0] + xs[0].log())
    assert np.isinf(tape.output.value) or np.isnan(tape.output.value)
    np.testing.assert_allclose(gradient(tape, [2.0]), [-0.25 + 0.5])
