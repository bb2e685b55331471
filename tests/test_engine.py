from __future__ import annotations

import threading

import pytest

from bfvm.api import compile_source
from bfvm.channels import BufferSink, BytesSource
from bfvm.config import EngineSettings, EOFPolicy
from bfvm.engine import Engine
from bfvm.errors import InputExhausted, IOFailure


class FailingSource:
    def read_byte(self) -> int | None:
        raise OSError("device gone")


class RecordingSink:
    def __init__(self) -> None:
        self.values: list[int] = []

    def write_byte(self, value: int) -> None:
        self.values.append(value)


def _run(src: str, *, data: bytes = b"", settings: EngineSettings | None = None):
    sink = BufferSink()
    result = Engine(settings).run(compile_source(src=src), source=BytesSource(data), sink=sink)
    return result, sink.getvalue()


def test_read_then_write_is_identity():
    _, out = _run(",.", data=b"A")
    assert out == b"\x41"


def test_loop_multiplies():
    result, out = _run("++++[>++++<-]>.", settings=EngineSettings(tape_size=2))
    assert out == bytes([16])
    assert result.tape == bytes([0, 16])
    assert result.pointer == 1


def test_loop_skipped_when_cell_is_zero():
    result, out = _run("[-]")
    assert out == b""
    assert result.tape[0] == 0
    # only the '[' is evaluated
    assert result.steps == 1


def test_empty_program():
    result, out = _run("")
    assert out == b""
    assert result.steps == 0
    assert result.pointer == 0


def test_nested_loops():
    # 3 * 3 * 3 = 27
    result, _ = _run("+++[>+++[>+++<-]<-]", settings=EngineSettings(tape_size=3))
    assert result.tape == bytes([0, 0, 27])


def test_hello_world():
    src = (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>."
        ">---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    )
    _, out = _run(src)
    assert out == b"Hello World!\n"


def test_pointer_wraps_during_run():
    result, out = _run("<+.", settings=EngineSettings(tape_size=4))
    assert result.pointer == 3
    assert result.tape == bytes([0, 0, 0, 1])
    assert out == b"\x01"


def test_pointer_wraps_right_during_run():
    result, _ = _run(">>>>+", settings=EngineSettings(tape_size=4))
    assert result.pointer == 0
    assert result.tape[0] == 1


def test_cell_wraps_during_run():
    _, out = _run("-.+.")
    assert out == bytes([255, 0])


def test_echo_until_eof_with_zero_policy():
    _, out = _run(",[.,]", data=b"abc", settings=EngineSettings(eof=EOFPolicy.ZERO))
    assert out == b"abc"


def test_eof_leaves_cell_unchanged_by_default():
    result, out = _run("+++++,.", data=b"")
    assert out == bytes([5])
    assert result.input_exhausted == 1


def test_eof_zero_and_max_policies():
    _, out = _run("+++++,.", settings=EngineSettings(eof=EOFPolicy.ZERO))
    assert out == bytes([0])
    _, out = _run("+++++,.", settings=EngineSettings(eof=EOFPolicy.MAX))
    assert out == bytes([255])


def test_eof_error_policy_raises():
    with pytest.raises(InputExhausted) as exc:
        _run(">,", settings=EngineSettings(eof=EOFPolicy.ERROR))
    assert exc.value.pc == 1
    assert exc.value.pointer == 1


def test_input_exhausted_hook_is_called():
    events: list[tuple[int, int]] = []
    program = compile_source(src=",>,,")
    result = Engine().run(
        program,
        source=BytesSource(b"x"),
        on_input_exhausted=lambda pc, ptr: events.append((pc, ptr)),
    )
    assert events == [(2, 1), (3, 1)]
    assert result.input_exhausted == 2
    assert result.tape[0] == ord("x")


def test_rejected_write_is_io_failure():
    sink = BufferSink(limit=2)
    with pytest.raises(IOFailure) as exc:
        Engine().run(compile_source(src="+.+.+.+."), sink=sink)
    assert exc.value.pc == 5
    assert isinstance(exc.value.__cause__, OSError)
    assert sink.getvalue() == bytes([1, 2])


def test_failing_source_is_io_failure():
    with pytest.raises(IOFailure):
        Engine().run(compile_source(src="+,"), source=FailingSource())


def test_runs_do_not_share_state():
    engine = Engine(EngineSettings(tape_size=8))
    program = compile_source(src="+++>")
    first = engine.run(program)
    second = engine.run(program)
    assert first.tape == second.tape == bytes([3, 0, 0, 0, 0, 0, 0, 0])
    assert second.pointer == 1


def test_parallel_engines_are_independent():
    program = compile_source(src="++++++++[>++++++++<-]>+.")
    sinks = [RecordingSink() for _ in range(4)]

    def work(sink: RecordingSink) -> None:
        Engine().run(program, sink=sink)

    threads = [threading.Thread(target=work, args=(s,)) for s in sinks]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(s.values == [65] for s in sinks)


def test_without_sink_output_is_discarded():
    result = Engine().run(compile_source(src="+."))
    assert result.steps == 2
