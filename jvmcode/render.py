"""
jvmcode.render

Turns decoded instructions into text, one line per instruction,
optionally describing the referenced constant pool entries.

"""

from typing import Iterable

from jvmcode.jvm import lookup
from jvmcode.model import ConstantPool, DecodedInstruction, DecodeReport

MAX_DESCRIPTION = 1000


def describe(ins: DecodedInstruction, pool: ConstantPool | None) -> str | None:
    """The description of the constant pool entry `ins` refers to, if any."""
    if pool is None or not ins.references_constant_pool:
        return None
    description = pool.describe(ins.constant_pool_index)
    if len(description) > MAX_DESCRIPTION:
        description = description[:MAX_DESCRIPTION]
    return description


def format_instruction(ins: DecodedInstruction, pool: ConstantPool | None = None) -> str:
    """
    Format an instruction as `Offset 0012: opcode [B6] invokevirtual 7`, where
    the last number is the constant pool index. With a pool, the description
    of the entry is added as ` - <description>`.
    """
    line = str(ins)
    if (description := describe(ins, pool)) is not None:
        line += f" - {description}"
    return line


def format_listing(
    instructions: Iterable[DecodedInstruction], pool: ConstantPool | None = None
) -> str:
    return "\n".join(format_instruction(ins, pool) for ins in instructions)


def as_json(ins: DecodedInstruction, pool: ConstantPool | None = None) -> dict:
    entry = lookup(ins.opcode)
    return {
        "offset": ins.offset,
        "opcode": ins.opcode,
        "mnemonic": entry.mnemonic if entry else None,
        "text": ins.text,
        "constant_pool_index": ins.constant_pool_index,
        "description": describe(ins, pool),
        "values": list(ins.values),
        "length": ins.length,
    }


def report_as_json(report: DecodeReport, pool: ConstantPool | None = None) -> dict:
    return {
        "instructions": [as_json(ins, pool) for ins in report.instructions],
        "length": report.length,
        "complete": report.complete,
        "failure": str(report.failure) if report.failure else None,
    }
