from __future__ import annotations

from collections.abc import Sequence

from bfvm.errors import UnmatchedLoopEnd, UnmatchedLoopStart
from bfvm.instructions import Instruction, Op, Program
from bfvm.lexer import Token


def _position(item: Token | Op) -> tuple[int | None, int | None]:
    if isinstance(item, Token):
        return item.line, item.col
    return None, None


def resolve(items: Sequence[Token | Op]) -> Program:
    """Pair every ``[`` with its ``]`` in one pass and build the jump table.

    Raises ``UnmatchedLoopEnd`` at the first ``]`` with nothing open, or
    ``UnmatchedLoopStart`` at the earliest ``[`` still open at the end.
    """
    ops = [item.op if isinstance(item, Token) else Op(item) for item in items]

    jumps: dict[int, int] = {}
    stack: list[int] = []
    for i, op in enumerate(ops):
        if op is Op.LOOP_START:
            stack.append(i)
        elif op is Op.LOOP_END:
            if not stack:
                line, col = _position(items[i])
                raise UnmatchedLoopEnd(i, line=line, col=col)
            start = stack.pop()
            jumps[start] = i
            jumps[i] = start

    if stack:
        first = stack[0]
        line, col = _position(items[first])
        raise UnmatchedLoopStart(first, line=line, col=col)

    instructions = tuple(Instruction(op=op, target=jumps.get(i)) for i, op in enumerate(ops))
    return Program(instructions=instructions, jumps=jumps)
