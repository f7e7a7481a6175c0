"""
jvmcode.decoder

The instruction stream driver: walks a code array from the first byte to
the declared length and decodes one instruction at a time.

A truncated instruction stops the decode. The instructions before it are
returned and the failure is logged and kept in the `DecodeReport`, so a
short result might mean that the code array was cut off.

An opcode byte without a catalog entry is kept as an unknown instruction
one byte long, and decoding resumes at the next byte. As the real width
of such an instruction is unknown, the offsets after it might be off;
pass `strict=True` to stop at the first unknown opcode instead.
"""

from loguru import logger

from jvmcode.jvm import UNKNOWN_OPCODE, CodeReader, DecodeError, UnknownOpcode, lookup
from jvmcode.jvm.operand import decode_operands
from jvmcode.model import DecodedInstruction, DecodeReport


def decode_instruction(reader: CodeReader, strict: bool = False) -> DecodedInstruction:
    """Decode the instruction at the position of the reader."""
    offset = reader.begin()
    opcode = reader.read_u1()

    if (ins := lookup(opcode)) is None:
        if strict:
            raise UnknownOpcode(offset, opcode)
        logger.warning(f"Unknown opcode 0x{opcode:02X} at offset {offset}")
        return DecodedInstruction(offset, opcode, UNKNOWN_OPCODE)

    operands = decode_operands(ins, reader)
    return DecodedInstruction(
        offset=offset,
        opcode=opcode,
        text=operands.text,
        constant_pool_index=operands.constant_pool_index,
        values=operands.values,
        length=reader.position - offset,
    )


def decode_report(
    code: bytes | None, length: int | None = None, *, strict: bool = False
) -> DecodeReport:
    """Decode the code array, and report if it was decoded all the way through."""
    if code is None:
        return DecodeReport()

    reader = CodeReader.over(code, length)
    instructions = []
    failure = None

    while not reader.at_end:
        try:
            instructions.append(decode_instruction(reader, strict))
        except DecodeError as e:
            logger.error(f"Stopped decoding code of length {reader.length}: {e}")
            failure = e
            break

    logger.debug(
        f"Decoded {len(instructions)} instruction(s) from {reader.length} byte(s)"
    )
    return DecodeReport(tuple(instructions), failure, reader.length)


def decode(
    code: bytes | None, length: int | None = None, *, strict: bool = False
) -> list[DecodedInstruction]:
    """Decode the code array into a list of instructions, in the order they appear.

    Only the first `length` bytes are looked at, if it is given. Truncation
    is not raised, see `decode_report` to find out if everything was decoded.
    """
    return list(decode_report(code, length, strict=strict).instructions)
