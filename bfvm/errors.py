from __future__ import annotations


class BFError(Exception):
    pass


class BracketError(BFError):
    def __init__(
        self,
        message: str,
        *,
        index: int,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.index = index
        self.line = line
        self.col = col
        prefix = ""
        if line is not None and col is not None:
            prefix = f"line {line} col {col}: "
        super().__init__(prefix + str(message))


class UnmatchedLoopStart(BracketError):
    def __init__(self, index: int, *, line: int | None = None, col: int | None = None) -> None:
        super().__init__(
            f"unmatched '[' at instruction {index}", index=index, line=line, col=col
        )


class UnmatchedLoopEnd(BracketError):
    def __init__(self, index: int, *, line: int | None = None, col: int | None = None) -> None:
        super().__init__(
            f"unmatched ']' at instruction {index}", index=index, line=line, col=col
        )


class VMError(BFError):
    pass


class IOFailure(VMError):
    """An input or output channel failed; the run is aborted.

    The underlying ``OSError`` is available as ``__cause__``.
    """

    def __init__(self, message: str, *, pc: int) -> None:
        self.pc = pc
        super().__init__(f"pc {pc}: {message}")


class InputExhausted(VMError):
    def __init__(self, *, pc: int, pointer: int) -> None:
        self.pc = pc
        self.pointer = pointer
        super().__init__(f"pc {pc}: input exhausted (cell {pointer})")
