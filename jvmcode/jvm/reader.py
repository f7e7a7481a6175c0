"""
jvmcode.jvm.reader

A big-endian cursor over a code array. The cursor never moves backwards
and never reads past the declared length: a read that does not fit
raises `TruncatedStream` without consuming anything.
"""

from dataclasses import dataclass

import struct

from .errors import TruncatedStream

_U2 = struct.Struct(">H")
_S2 = struct.Struct(">h")
_S4 = struct.Struct(">i")


@dataclass
class CodeReader:
    code: bytes
    length: int
    position: int = 0
    start: int = 0

    @classmethod
    def over(cls, code: bytes, length: int | None = None) -> "CodeReader":
        if length is None:
            length = len(code)
        if not 0 <= length <= len(code):
            raise ValueError(
                f"declared length {length} does not fit a code array of {len(code)} bytes"
            )
        return cls(bytes(code), length)

    @property
    def at_end(self) -> bool:
        return self.position >= self.length

    @property
    def remaining(self) -> int:
        return self.length - self.position

    def begin(self) -> int:
        """Mark the start of a new instruction, and return its offset."""
        self.start = self.position
        return self.start

    def require(self, count: int) -> None:
        if count > self.remaining:
            raise TruncatedStream(self.start, count, self.remaining)

    def take(self, count: int) -> bytes:
        self.require(count)
        data = self.code[self.position : self.position + count]
        self.position += count
        return data

    def skip(self, count: int) -> None:
        self.require(count)
        self.position += count

    def align(self, boundary: int = 4) -> int:
        """Skip padding up to the next multiple of `boundary` from the start of the code."""
        padding = -self.position % boundary
        self.skip(padding)
        return padding

    def read_u1(self) -> int:
        return self.take(1)[0]

    def read_s1(self) -> int:
        value = self.read_u1()
        return value - 0x100 if value & 0x80 else value

    def read_u2(self) -> int:
        return _U2.unpack(self.take(2))[0]

    def read_s2(self) -> int:
        return _S2.unpack(self.take(2))[0]

    def read_s4(self) -> int:
        return _S4.unpack(self.take(4))[0]
