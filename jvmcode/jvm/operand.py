"""
jvmcode.jvm.operand

The operand codec: reads the bytes following an opcode, as described by
the operand shape in the catalog, and renders them next to the mnemonic.

"""

from loguru import logger

from jvmcode.model import Operands

from . import switch, wide
from .opcode import Instruction, OperandShape, UNKNOWN_ARRAY_TYPE, array_type_name
from .reader import CodeReader

FORMAT_LOCAL = "{} {}"
FORMAT_IINC = "{} index = {} const = {}"


def decode_operands(ins: Instruction, reader: CodeReader) -> Operands:
    """Read the operands of `ins`, the reader must be just after the opcode byte.

    Exactly the bytes of the operand shape are consumed, or `TruncatedStream`
    is raised if they are not all there.
    """
    match ins.shape:
        case OperandShape.NONE:
            return Operands(ins.name)

        case OperandShape.U1:
            value = reader.read_u1()
            return Operands(FORMAT_LOCAL.format(ins.name, value), values=(value,))

        case OperandShape.U2:
            value = reader.read_u2()
            return Operands(FORMAT_LOCAL.format(ins.name, value), values=(value,))

        case OperandShape.S2:
            branch = reader.read_s2()
            return Operands(FORMAT_LOCAL.format(ins.name, branch), values=(branch,))

        case OperandShape.S4:
            branch = reader.read_s4()
            return Operands(FORMAT_LOCAL.format(ins.name, branch), values=(branch,))

        case OperandShape.IINC:
            index = reader.read_u1()
            const = reader.read_s1()
            return Operands(
                FORMAT_IINC.format(ins.name, index, const),
                values=(index, const),
            )

        case OperandShape.CP_U1:
            index = reader.read_u1()
            return Operands(ins.name, constant_pool_index=index, values=(index,))

        case OperandShape.CP_U2:
            index = reader.read_u2()
            return Operands(ins.name, constant_pool_index=index, values=(index,))

        case OperandShape.INVOKE_INTERFACE:
            index = reader.read_u2()
            count = reader.read_u1()
            reader.skip(1)
            return Operands(
                f"{ins.name} interface={index}, nargs={count}",
                constant_pool_index=index,
                values=(index, count),
            )

        case OperandShape.INVOKE_DYNAMIC:
            index = reader.read_u2()
            reader.skip(2)
            return Operands(ins.name, constant_pool_index=index, values=(index,))

        case OperandShape.NEWARRAY:
            atype = reader.read_u1()
            name = array_type_name(atype)
            if name == UNKNOWN_ARRAY_TYPE:
                logger.warning(f"Unknown array type {atype} at offset {reader.start}")
            return Operands(f"{ins.name} {name}", values=(atype,))

        case OperandShape.MULTIANEWARRAY:
            index = reader.read_u2()
            dimensions = reader.read_u1()
            return Operands(
                f"{ins.name} type={index} dimensions={dimensions}",
                constant_pool_index=index,
                values=(index, dimensions),
            )

        case OperandShape.TABLESWITCH:
            return switch.decode_tableswitch(ins, reader)

        case OperandShape.LOOKUPSWITCH:
            return switch.decode_lookupswitch(ins, reader)

        case OperandShape.WIDE:
            return wide.decode_wide(ins, reader)

    raise NotImplementedError(f"Unhandled operand shape {ins.shape!r}")
