"""
jvmcode.jvm.switch

Decoding of the two variable length jump tables, `tableswitch` and
`lookupswitch`. Both start with 0-3 bytes of padding, so the table begins
at a multiple of four from the start of the code array. All jump offsets
are relative to the switch instruction, and are kept as they are.

"""

from loguru import logger

from jvmcode.model import Operands

from .opcode import Instruction
from .reader import CodeReader

INDENT = "    "


def decode_tableswitch(ins: Instruction, reader: CodeReader) -> Operands:
    """
    tableswitch:
     - <0-3 byte pad>
     - default, low, high as signed 32 bit values
     - high - low + 1 signed 32 bit jump offsets, for the cases low..high

    docs: https://docs.oracle.com/javase/specs/jvms/se23/html/jvms-6.html#jvms-6.5.tableswitch
    """
    padding = reader.align(4)
    default = reader.read_s4()
    low = reader.read_s4()
    high = reader.read_s4()

    # a table with high < low is empty
    count = max(high - low + 1, 0)
    reader.require(4 * count)
    jumps = tuple(reader.read_s4() for _ in range(count))

    logger.trace(
        f"tableswitch at {reader.start}: {padding} byte(s) padding, {count} entries"
    )

    lines = [f"{ins.name} {low} to {high}: default={default}"]
    lines.extend(f"{INDENT}{jump}" for jump in jumps)

    return Operands("\n".join(lines), values=(default, low, high) + jumps)


def decode_lookupswitch(ins: Instruction, reader: CodeReader) -> Operands:
    """
    lookupswitch:
     - <0-3 byte pad>
     - default and npairs as signed 32 bit values
     - npairs pairs of a signed 32 bit match and a signed 32 bit jump offset

    The matches should be sorted, but that is for a verifier to check.

    docs: https://docs.oracle.com/javase/specs/jvms/se23/html/jvms-6.html#jvms-6.5.lookupswitch
    """
    padding = reader.align(4)
    default = reader.read_s4()
    npairs = reader.read_s4()

    count = max(npairs, 0)
    reader.require(8 * count)

    lines = [f"{ins.name}: default={default}"]
    values = [default, npairs]
    for _ in range(count):
        key = reader.read_s4()
        jump = reader.read_s4()
        lines.append(f"{INDENT}case {key}: {jump}")
        values.extend((key, jump))

    logger.trace(
        f"lookupswitch at {reader.start}: {padding} byte(s) padding, {count} pairs"
    )

    return Operands("\n".join(lines), values=tuple(values))
