from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from bfvm.channels import ByteSink, ByteSource, NullSource
from bfvm.config import EngineSettings, EOFPolicy
from bfvm.errors import InputExhausted, IOFailure
from bfvm.instructions import Op, Program
from bfvm.tape import Tape

InputExhaustedHook = Callable[[int, int], None]


@dataclass(frozen=True)
class RunResult:
    steps: int
    pointer: int
    input_exhausted: int
    tape: bytes


class _DiscardSink:
    def write_byte(self, value: int) -> None:
        _ = value


class Engine:
    """Executes resolved programs on a fresh tape per run.

    The engine holds only its settings, so one instance can run programs
    back to back and separate instances can run on separate threads.
    Nothing is logged; every failure reaches the caller as an exception.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    @property
    def tape_size(self) -> int:
        return self.settings.tape_size

    def run(
        self,
        program: Program,
        *,
        source: ByteSource | None = None,
        sink: ByteSink | None = None,
        on_input_exhausted: InputExhaustedHook | None = None,
    ) -> RunResult:
        if source is None:
            source = NullSource()
        if sink is None:
            sink = _DiscardSink()
        eof = self.settings.eof

        tape = Tape(self.settings.tape_size)
        instructions = program.instructions
        jumps = program.jumps
        end = len(instructions)
        pc = 0
        steps = 0
        exhausted = 0

        while pc < end:
            op = instructions[pc].op
            steps += 1

            if op is Op.MOVE_RIGHT:
                tape.move_right()
            elif op is Op.MOVE_LEFT:
                tape.move_left()
            elif op is Op.INCREMENT:
                tape.increment()
            elif op is Op.DECREMENT:
                tape.decrement()
            elif op is Op.LOOP_START:
                if tape.read() == 0:
                    pc = jumps[pc] + 1
                    continue
            elif op is Op.LOOP_END:
                if tape.read() != 0:
                    pc = jumps[pc] + 1
                    continue
            elif op is Op.READ:
                try:
                    value = source.read_byte()
                except OSError as exc:
                    raise IOFailure(f"input read failed: {exc}", pc=pc) from exc
                if value is None:
                    exhausted += 1
                    if eof is EOFPolicy.ERROR:
                        raise InputExhausted(pc=pc, pointer=tape.pointer)
                    if on_input_exhausted is not None:
                        on_input_exhausted(pc, tape.pointer)
                    if eof is EOFPolicy.ZERO:
                        tape.write(0)
                    elif eof is EOFPolicy.MAX:
                        tape.write(255)
                else:
                    tape.write(value)
            elif op is Op.WRITE:
                try:
                    sink.write_byte(tape.read())
                except OSError as exc:
                    raise IOFailure(f"output write failed: {exc}", pc=pc) from exc
            else:
                raise AssertionError(f"unhandled op: {op!r}")

            pc += 1

        return RunResult(
            steps=steps,
            pointer=tape.pointer,
            input_exhausted=exhausted,
            tape=tape.snapshot(),
        )
