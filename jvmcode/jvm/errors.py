"""
jvmcode.jvm.errors

The ways decoding a code array can go wrong. Only `TruncatedStream` and,
in strict mode, `UnknownOpcode` stop the decoder; the other problems are
rendered as markers in the instruction text.
"""

UNKNOWN_OPCODE = "[Unknown opcode]"
UNKNOWN_WIDE_OPCODE = "wide [Unknown opcode]"


class DecodeError(ValueError):
    """Base class of the errors produced while decoding a code array."""

    offset: int

    def __init__(self, offset: int, message: str):
        super().__init__(f"offset {offset}: {message}")
        self.offset = offset


class TruncatedStream(DecodeError):
    """A read ran past the end of the code array in the middle of an instruction."""

    def __init__(self, offset: int, needed: int, available: int):
        super().__init__(
            offset,
            f"truncated stream, needed {needed} byte(s) but only {available} left",
        )
        self.needed = needed
        self.available = available


class UnknownOpcode(DecodeError):
    """The opcode byte has no entry in the catalog."""

    def __init__(self, offset: int, opcode: int):
        super().__init__(offset, f"unknown opcode 0x{opcode:02X}")
        self.opcode = opcode
