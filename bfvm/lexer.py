from __future__ import annotations

from dataclasses import dataclass

from bfvm.instructions import SYMBOLS, Op


@dataclass(frozen=True, slots=True)
class Token:
    op: Op
    offset: int
    line: int
    col: int


def tokenize(src: str) -> list[Token]:
    """Scan ``src`` for the eight command symbols.

    Every other character is a comment and produces no token.
    """
    tokens: list[Token] = []
    line = 1
    col = 1
    for offset, ch in enumerate(src):
        op = SYMBOLS.get(ch)
        if op is not None:
            tokens.append(Token(op=op, offset=offset, line=line, col=col))
        if ch == "\n":
            line += 1
            col = 1
        else:
            col += 1
    return tokens


def lex(src: str) -> list[Op]:
    return [SYMBOLS[ch] for ch in src if ch in SYMBOLS]
