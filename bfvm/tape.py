from __future__ import annotations

DEFAULT_TAPE_SIZE = 30_000


class Tape:
    """Fixed-length circular memory of unsigned 8-bit cells."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ValueError(f"tape size must be a positive integer, got {size!r}")
        self._cells = bytearray(size)
        self.pointer = 0

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> int:
        return self._cells[index]

    def move_right(self, n: int = 1) -> None:
        self.pointer = (self.pointer + n) % len(self._cells)

    def move_left(self, n: int = 1) -> None:
        self.pointer = (self.pointer - n) % len(self._cells)

    def increment(self, n: int = 1) -> None:
        self._cells[self.pointer] = (self._cells[self.pointer] + n) % 256

    def decrement(self, n: int = 1) -> None:
        self._cells[self.pointer] = (self._cells[self.pointer] - n) % 256

    def read(self) -> int:
        return self._cells[self.pointer]

    def write(self, value: int) -> None:
        self._cells[self.pointer] = value & 0xFF

    def snapshot(self) -> bytes:
        return bytes(self._cells)
