from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Op(str, Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    LOOP_START = "["
    LOOP_END = "]"
    READ = ","
    WRITE = "."


SYMBOLS: dict[str, Op] = {op.value: op for op in Op}


@dataclass(frozen=True, slots=True)
class Instruction:
    op: Op
    # Partner index; only set on LOOP_START / LOOP_END.
    target: int | None = None


@dataclass(frozen=True, slots=True)
class Program:
    """A resolved, read-only instruction sequence.

    ``jumps`` maps every loop instruction index to its partner's index, so
    ``program.match(program.match(i)) == i`` for every loop index ``i``.
    The table is stored as a read-only mapping.
    """

    instructions: tuple[Instruction, ...]
    # Not hashed; instruction targets carry the same pairs.
    jumps: Mapping[int, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "jumps", MappingProxyType(dict(self.jumps)))

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def match(self, index: int) -> int:
        return self.jumps[index]

    @property
    def source(self) -> str:
        return "".join(ins.op.value for ins in self.instructions)
