from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Single-byte input. ``None`` means exhausted; read errors raise ``OSError``."""

    def read_byte(self) -> int | None: ...


@runtime_checkable
class ByteSink(Protocol):
    """Single-byte output. A rejected write raises ``OSError``."""

    def write_byte(self, value: int) -> None: ...


class NullSource:
    def read_byte(self) -> int | None:
        return None


class BytesSource:
    def __init__(self, data: bytes | bytearray | str = b"") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)
        self._pos = 0

    def read_byte(self) -> int | None:
        if self._pos >= len(self._data):
            return None
        value = self._data[self._pos]
        self._pos += 1
        return value


class StreamSource:
    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def read_byte(self) -> int | None:
        try:
            chunk = self._stream.read(1)
        except ValueError as exc:
            # closed stream
            raise OSError(str(exc)) from exc
        if not chunk:
            return None
        return chunk[0]


class BufferSink:
    """Collects output in memory.

    With ``limit`` set, writes beyond that many bytes are rejected with
    ``OSError``, as a full or closed device would.
    """

    def __init__(self, *, limit: int | None = None) -> None:
        self._buf = bytearray()
        self._limit = limit

    def write_byte(self, value: int) -> None:
        if self._limit is not None and len(self._buf) >= self._limit:
            raise OSError(f"output buffer full ({self._limit} bytes)")
        self._buf.append(value)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class StreamSink:
    def __init__(self, stream: BinaryIO, *, flush: bool = True) -> None:
        self._stream = stream
        self._flush = flush

    def write_byte(self, value: int) -> None:
        try:
            written = self._stream.write(bytes((value,)))
            if self._flush:
                self._stream.flush()
        except ValueError as exc:
            raise OSError(str(exc)) from exc
        if written == 0:
            raise OSError("stream accepted no bytes")
