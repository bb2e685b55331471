from __future__ import annotations

from bfvm.api import compile_source, run_source
from bfvm.channels import BufferSink, ByteSink, ByteSource, BytesSource, StreamSink, StreamSource
from bfvm.config import EngineSettings, EOFPolicy, load_settings
from bfvm.engine import Engine, RunResult
from bfvm.errors import (
    BFError,
    BracketError,
    InputExhausted,
    IOFailure,
    UnmatchedLoopEnd,
    UnmatchedLoopStart,
    VMError,
)
from bfvm.instructions import Instruction, Op, Program
from bfvm.lexer import Token, lex, tokenize
from bfvm.resolver import resolve
from bfvm.tape import Tape

__all__ = [
    "__version__",
    # Pipeline
    "compile_source",
    "run_source",
    "tokenize",
    "lex",
    "resolve",
    "Engine",
    "RunResult",
    # Data model
    "Op",
    "Instruction",
    "Program",
    "Token",
    "Tape",
    # Channels
    "ByteSource",
    "ByteSink",
    "BytesSource",
    "BufferSink",
    "StreamSource",
    "StreamSink",
    # Config
    "EngineSettings",
    "EOFPolicy",
    "load_settings",
    # Errors
    "BFError",
    "BracketError",
    "UnmatchedLoopStart",
    "UnmatchedLoopEnd",
    "VMError",
    "IOFailure",
    "InputExhausted",
]

__version__ = "0.1.0"
