"""
jvmcode.jvm.wide

Decoding of the `wide` prefix, which widens the local variable index of
the following load, store or `ret` to 16 bits, and for `iinc` also
widens the constant to a signed 16 bit value.

docs: https://docs.oracle.com/javase/specs/jvms/se23/html/jvms-6.html#jvms-6.5.wide
"""

from loguru import logger

from jvmcode.model import Operands

from .errors import UNKNOWN_WIDE_OPCODE
from .opcode import Instruction, OperandShape, lookup
from .reader import CodeReader

WIDENABLE = frozenset(
    [
        "iload",
        "lload",
        "fload",
        "dload",
        "aload",
        "istore",
        "lstore",
        "fstore",
        "dstore",
        "astore",
        "ret",
        "iinc",
    ]
)


def widened(ins: Instruction | None) -> bool:
    """Check if `ins` may follow the wide prefix."""
    return ins is not None and ins.mnemonic in WIDENABLE


def decode_wide(ins: Instruction, reader: CodeReader) -> Operands:
    """Read the modified instruction and its widened operands.

    The first value is always the opcode of the modified instruction. If it
    may not be widened, nothing more is read.
    """
    code = reader.read_u1()
    inner = lookup(code)

    if not widened(inner):
        logger.warning(f"Unknown wide opcode 0x{code:02X} at offset {reader.start}")
        return Operands(UNKNOWN_WIDE_OPCODE, values=(code,))

    assert inner is not None
    name = f"{ins.name} {inner.name}"
    index = reader.read_u2()

    if inner.shape is OperandShape.IINC:
        const = reader.read_s2()
        return Operands(
            f"{name} index = {index} const = {const}",
            values=(code, index, const),
        )

    return Operands(f"{name} {index}", values=(code, index))
