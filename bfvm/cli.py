from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from bfvm.api import compile_source
from bfvm.channels import StreamSink, StreamSource
from bfvm.config import EOFPolicy, load_settings
from bfvm.engine import Engine
from bfvm.errors import BracketError, IOFailure, VMError


def _existing_path(value: str) -> Path:
    p = Path(value)
    if not p.exists():
        raise argparse.ArgumentTypeError(f"path not found: {value}")
    return p


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from None
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return n


def _add_source_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("file", nargs="?", type=_existing_path, default=None, help="program file")
    g.add_argument("-e", "--eval", dest="code", default=None, help="program text")


def _read_source(args: argparse.Namespace) -> str:
    if args.code is not None:
        return args.code
    return args.file.read_text(encoding="utf-8")


def _discard_stdout() -> None:
    # The failed bytes stay in the stdout buffer; point fd 1 at devnull so the
    # interpreter's final flush does not fail again.
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="bfvm")
    sub = parser.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="run a program against stdin/stdout")
    _add_source_args(run_p)
    run_p.add_argument("--tape-size", type=_positive_int, default=None)
    run_p.add_argument(
        "--eof",
        choices=[p.value for p in EOFPolicy],
        default=None,
        help="what a read does once stdin is exhausted (default: unchanged)",
    )

    check_p = sub.add_parser("check", help="validate brackets without running")
    _add_source_args(check_p)

    args = parser.parse_args(argv)

    try:
        src = _read_source(args)
    except UnicodeDecodeError:
        print(f"bfvm: {args.file}: not valid UTF-8", file=sys.stderr)
        return 2

    try:
        program = compile_source(src=src)
    except BracketError as exc:
        print(f"bfvm: {exc}", file=sys.stderr)
        return 2

    if args.cmd == "check":
        print(len(program))
        return 0

    if args.cmd == "run":
        try:
            settings = load_settings()
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            print(f"bfvm: invalid BFVM_* settings: {fields}", file=sys.stderr)
            return 2
        overrides: dict[str, object] = {}
        if args.tape_size is not None:
            overrides["tape_size"] = args.tape_size
        if args.eof is not None:
            overrides["eof"] = EOFPolicy(args.eof)
        if overrides:
            settings = settings.model_copy(update=overrides)

        engine = Engine(settings)
        try:
            engine.run(
                program,
                source=StreamSource(sys.stdin.buffer),
                sink=StreamSink(sys.stdout.buffer),
            )
        except IOFailure as exc:
            print(f"bfvm: {exc}", file=sys.stderr)
            _discard_stdout()
            return 1
        except VMError as exc:
            print(f"bfvm: {exc}", file=sys.stderr)
            return 1
        return 0

    raise AssertionError(f"unhandled cmd: {args.cmd}")
