from __future__ import annotations

from bfvm.channels import BufferSink, BytesSource
from bfvm.config import EngineSettings
from bfvm.engine import Engine
from bfvm.instructions import Program
from bfvm.lexer import tokenize
from bfvm.resolver import resolve


def compile_source(*, src: str) -> Program:
    return resolve(tokenize(src))


def run_source(
    *,
    src: str,
    data: bytes | str = b"",
    settings: EngineSettings | None = None,
) -> bytes:
    program = compile_source(src=src)
    sink = BufferSink()
    Engine(settings).run(program, source=BytesSource(data), sink=sink)
    return sink.getvalue()
