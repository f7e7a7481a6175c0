"""
jvmcode.model

This module provides the basic data model of the decoder: the operands
read for a single instruction, the decoded instructions themselves, the
report of a whole decode, and the boundary to the constant pool.

"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol
import json

from jvmcode.jvm.errors import DecodeError, TruncatedStream


@dataclass(frozen=True)
class Operands:
    """The rendered operands of one instruction, as read by the operand codec.

    `values` holds the numeric operands in stream order, `constant_pool_index`
    is set only when the instruction references the constant pool.
    """

    text: str
    constant_pool_index: int | None = None
    values: tuple[int, ...] = ()


@dataclass(frozen=True, order=True)
class DecodedInstruction:
    """A single instruction, decoded from a code array.

    Opcodes with no catalog entry are kept as well, their text is the
    unknown opcode marker and they are one byte long.
    """

    offset: int
    opcode: int
    text: str
    constant_pool_index: int | None = None
    values: tuple[int, ...] = ()
    length: int = 1

    @property
    def end(self) -> int:
        """The offset of the next instruction."""
        return self.offset + self.length

    @property
    def references_constant_pool(self) -> bool:
        return self.constant_pool_index is not None

    def __str__(self):
        line = f"Offset {self.offset:04d}: opcode [{self.opcode:02X}] {self.text}"
        if self.constant_pool_index is not None:
            line += f" {self.constant_pool_index}"
        return line


@dataclass(frozen=True, eq=False)
class DecodeReport:
    """Everything a decode produced.

    If decoding stopped early `failure` holds the reason, and
    `instructions` holds what was decoded before that point. Two reports
    are equal when their failures have the same type and message.
    """

    instructions: tuple[DecodedInstruction, ...] = ()
    failure: DecodeError | None = None
    length: int = 0

    @property
    def complete(self) -> bool:
        return self.failure is None

    @property
    def truncated(self) -> bool:
        return isinstance(self.failure, TruncatedStream)

    @property
    def covered(self) -> int:
        """The number of bytes covered by the decoded instructions."""
        if not self.instructions:
            return 0
        return self.instructions[-1].end

    def __len__(self):
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)

    def _key(self):
        failure = None if self.failure is None else (type(self.failure), str(self.failure))
        return (self.instructions, failure, self.length)

    def __eq__(self, other):
        if not isinstance(other, DecodeReport):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())


class ConstantPool(Protocol):
    """Anything that can describe an entry of a class' constant pool."""

    def describe(self, index: int) -> str: ...


@dataclass(frozen=True)
class JsonConstantPool:
    """A constant pool read from a JSON object mapping indices to descriptions.

    The class file parser owns the real constant pool; this stands in for
    it when decoding a bare code array from the command line.
    """

    entries: dict[int, str] = field(default_factory=dict)

    @staticmethod
    def decode(input: str) -> "JsonConstantPool":
        raw = json.loads(input)
        if isinstance(raw, list):
            # a list is indexed from 1, like the constant pool itself
            raw = {i: v for i, v in enumerate(raw, start=1)}
        if not isinstance(raw, dict):
            raise ValueError(f"Expected a JSON object or list, but got {type(raw).__name__}")
        return JsonConstantPool({int(k): str(v) for k, v in raw.items()})

    @staticmethod
    def load(path: Path) -> "JsonConstantPool":
        with open(path) as fp:
            return JsonConstantPool.decode(fp.read())

    def describe(self, index: int) -> str:
        try:
            return self.entries[index]
        except KeyError:
            return f"[Invalid constant pool index {index}]"
