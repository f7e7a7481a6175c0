"""
jvmcode.jvm.opcode

This module contains the catalog of every instruction of the java virtual
machine, indexed by its opcode byte, together with the shape of the
operands that follow the opcode in a code array.

"""

from dataclasses import dataclass

import enum


class OperandShape(enum.Enum):
    """The layout of the bytes following an opcode."""

    NONE = enum.auto()
    U1 = enum.auto()
    U2 = enum.auto()
    S2 = enum.auto()
    S4 = enum.auto()
    IINC = enum.auto()
    CP_U1 = enum.auto()
    CP_U2 = enum.auto()
    INVOKE_INTERFACE = enum.auto()
    INVOKE_DYNAMIC = enum.auto()
    NEWARRAY = enum.auto()
    MULTIANEWARRAY = enum.auto()
    TABLESWITCH = enum.auto()
    LOOKUPSWITCH = enum.auto()
    WIDE = enum.auto()

    @property
    def width(self) -> int | None:
        """The number of operand bytes, or None if it depends on the stream."""
        match self:
            case OperandShape.NONE:
                return 0
            case OperandShape.U1 | OperandShape.CP_U1 | OperandShape.NEWARRAY:
                return 1
            case OperandShape.U2 | OperandShape.S2 | OperandShape.IINC | OperandShape.CP_U2:
                return 2
            case OperandShape.MULTIANEWARRAY:
                return 3
            case OperandShape.S4 | OperandShape.INVOKE_INTERFACE | OperandShape.INVOKE_DYNAMIC:
                return 4
        return None

    def __str__(self):
        return self.name.lower()


RESERVED_PREFIX = "[Reserved] "


@dataclass(frozen=True, order=True)
class Instruction:
    """An entry in the instruction catalog."""

    opcode: int
    mnemonic: str
    shape: OperandShape = OperandShape.NONE
    reserved: bool = False

    @property
    def name(self) -> str:
        """The name used when rendering the instruction."""
        if self.reserved:
            return RESERVED_PREFIX + self.mnemonic
        return self.mnemonic

    @property
    def docs(self) -> str:
        if self.reserved:
            return "https://docs.oracle.com/javase/specs/jvms/se23/html/jvms-6.html#jvms-6.2"
        return f"https://docs.oracle.com/javase/specs/jvms/se23/html/jvms-6.html#jvms-6.5.{self.mnemonic}"

    def __str__(self):
        return self.name


INSTRUCTIONS: tuple[Instruction, ...] = (
    # Constants
    Instruction(0x00, "nop"),
    Instruction(0x01, "aconst_null"),
    Instruction(0x02, "iconst_m1"),
    Instruction(0x03, "iconst_0"),
    Instruction(0x04, "iconst_1"),
    Instruction(0x05, "iconst_2"),
    Instruction(0x06, "iconst_3"),
    Instruction(0x07, "iconst_4"),
    Instruction(0x08, "iconst_5"),
    Instruction(0x09, "lconst_0"),
    Instruction(0x0A, "lconst_1"),
    Instruction(0x0B, "fconst_0"),
    Instruction(0x0C, "fconst_1"),
    Instruction(0x0D, "fconst_2"),
    Instruction(0x0E, "dconst_0"),
    Instruction(0x0F, "dconst_1"),
    Instruction(0x10, "bipush", OperandShape.U1),
    Instruction(0x11, "sipush", OperandShape.U2),
    Instruction(0x12, "ldc", OperandShape.CP_U1),
    Instruction(0x13, "ldc_w", OperandShape.CP_U2),
    Instruction(0x14, "ldc2_w", OperandShape.CP_U2),
    # Loads
    Instruction(0x15, "iload", OperandShape.U1),
    Instruction(0x16, "lload", OperandShape.U1),
    Instruction(0x17, "fload", OperandShape.U1),
    Instruction(0x18, "dload", OperandShape.U1),
    Instruction(0x19, "aload", OperandShape.U1),
    Instruction(0x1A, "iload_0"),
    Instruction(0x1B, "iload_1"),
    Instruction(0x1C, "iload_2"),
    Instruction(0x1D, "iload_3"),
    Instruction(0x1E, "lload_0"),
    Instruction(0x1F, "lload_1"),
    Instruction(0x20, "lload_2"),
    Instruction(0x21, "lload_3"),
    Instruction(0x22, "fload_0"),
    Instruction(0x23, "fload_1"),
    Instruction(0x24, "fload_2"),
    Instruction(0x25, "fload_3"),
    Instruction(0x26, "dload_0"),
    Instruction(0x27, "dload_1"),
    Instruction(0x28, "dload_2"),
    Instruction(0x29, "dload_3"),
    Instruction(0x2A, "aload_0"),
    Instruction(0x2B, "aload_1"),
    Instruction(0x2C, "aload_2"),
    Instruction(0x2D, "aload_3"),
    Instruction(0x2E, "iaload"),
    Instruction(0x2F, "laload"),
    Instruction(0x30, "faload"),
    Instruction(0x31, "daload"),
    Instruction(0x32, "aaload"),
    Instruction(0x33, "baload"),
    Instruction(0x34, "caload"),
    Instruction(0x35, "saload"),
    # Stores
    Instruction(0x36, "istore", OperandShape.U1),
    Instruction(0x37, "lstore", OperandShape.U1),
    Instruction(0x38, "fstore", OperandShape.U1),
    Instruction(0x39, "dstore", OperandShape.U1),
    Instruction(0x3A, "astore", OperandShape.U1),
    Instruction(0x3B, "istore_0"),
    Instruction(0x3C, "istore_1"),
    Instruction(0x3D, "istore_2"),
    Instruction(0x3E, "istore_3"),
    Instruction(0x3F, "lstore_0"),
    Instruction(0x40, "lstore_1"),
    Instruction(0x41, "lstore_2"),
    Instruction(0x42, "lstore_3"),
    Instruction(0x43, "fstore_0"),
    Instruction(0x44, "fstore_1"),
    Instruction(0x45, "fstore_2"),
    Instruction(0x46, "fstore_3"),
    Instruction(0x47, "dstore_0"),
    Instruction(0x48, "dstore_1"),
    Instruction(0x49, "dstore_2"),
    Instruction(0x4A, "dstore_3"),
    Instruction(0x4B, "astore_0"),
    Instruction(0x4C, "astore_1"),
    Instruction(0x4D, "astore_2"),
    Instruction(0x4E, "astore_3"),
    Instruction(0x4F, "iastore"),
    Instruction(0x50, "lastore"),
    Instruction(0x51, "fastore"),
    Instruction(0x52, "dastore"),
    Instruction(0x53, "aastore"),
    Instruction(0x54, "bastore"),
    Instruction(0x55, "castore"),
    Instruction(0x56, "sastore"),
    # Stack
    Instruction(0x57, "pop"),
    Instruction(0x58, "pop2"),
    Instruction(0x59, "dup"),
    Instruction(0x5A, "dup_x1"),
    Instruction(0x5B, "dup_x2"),
    Instruction(0x5C, "dup2"),
    Instruction(0x5D, "dup2_x1"),
    Instruction(0x5E, "dup2_x2"),
    Instruction(0x5F, "swap"),
    # Math
    Instruction(0x60, "iadd"),
    Instruction(0x61, "ladd"),
    Instruction(0x62, "fadd"),
    Instruction(0x63, "dadd"),
    Instruction(0x64, "isub"),
    Instruction(0x65, "lsub"),
    Instruction(0x66, "fsub"),
    Instruction(0x67, "dsub"),
    Instruction(0x68, "imul"),
    Instruction(0x69, "lmul"),
    Instruction(0x6A, "fmul"),
    Instruction(0x6B, "dmul"),
    Instruction(0x6C, "idiv"),
    Instruction(0x6D, "ldiv"),
    Instruction(0x6E, "fdiv"),
    Instruction(0x6F, "ddiv"),
    Instruction(0x70, "irem"),
    Instruction(0x71, "lrem"),
    Instruction(0x72, "frem"),
    Instruction(0x73, "drem"),
    Instruction(0x74, "ineg"),
    Instruction(0x75, "lneg"),
    Instruction(0x76, "fneg"),
    Instruction(0x77, "dneg"),
    Instruction(0x78, "ishl"),
    Instruction(0x79, "lshl"),
    Instruction(0x7A, "ishr"),
    Instruction(0x7B, "lshr"),
    Instruction(0x7C, "iushr"),
    Instruction(0x7D, "lushr"),
    Instruction(0x7E, "iand"),
    Instruction(0x7F, "land"),
    Instruction(0x80, "ior"),
    Instruction(0x81, "lor"),
    Instruction(0x82, "ixor"),
    Instruction(0x83, "lxor"),
    Instruction(0x84, "iinc", OperandShape.IINC),
    # Conversions
    Instruction(0x85, "i2l"),
    Instruction(0x86, "i2f"),
    Instruction(0x87, "i2d"),
    Instruction(0x88, "l2i"),
    Instruction(0x89, "l2f"),
    Instruction(0x8A, "l2d"),
    Instruction(0x8B, "f2i"),
    Instruction(0x8C, "f2l"),
    Instruction(0x8D, "f2d"),
    Instruction(0x8E, "d2i"),
    Instruction(0x8F, "d2l"),
    Instruction(0x90, "d2f"),
    Instruction(0x91, "i2b"),
    Instruction(0x92, "i2c"),
    Instruction(0x93, "i2s"),
    # Comparisons
    Instruction(0x94, "lcmp"),
    Instruction(0x95, "fcmpl"),
    Instruction(0x96, "fcmpg"),
    Instruction(0x97, "dcmpl"),
    Instruction(0x98, "dcmpg"),
    Instruction(0x99, "ifeq", OperandShape.S2),
    Instruction(0x9A, "ifne", OperandShape.S2),
    Instruction(0x9B, "iflt", OperandShape.S2),
    Instruction(0x9C, "ifge", OperandShape.S2),
    Instruction(0x9D, "ifgt", OperandShape.S2),
    Instruction(0x9E, "ifle", OperandShape.S2),
    Instruction(0x9F, "if_icmpeq", OperandShape.S2),
    Instruction(0xA0, "if_icmpne", OperandShape.S2),
    Instruction(0xA1, "if_icmplt", OperandShape.S2),
    Instruction(0xA2, "if_icmpge", OperandShape.S2),
    Instruction(0xA3, "if_icmpgt", OperandShape.S2),
    Instruction(0xA4, "if_icmple", OperandShape.S2),
    Instruction(0xA5, "if_acmpeq", OperandShape.S2),
    Instruction(0xA6, "if_acmpne", OperandShape.S2),
    # Control
    Instruction(0xA7, "goto", OperandShape.S2),
    Instruction(0xA8, "jsr", OperandShape.S2),
    Instruction(0xA9, "ret", OperandShape.U1),
    Instruction(0xAA, "tableswitch", OperandShape.TABLESWITCH),
    Instruction(0xAB, "lookupswitch", OperandShape.LOOKUPSWITCH),
    Instruction(0xAC, "ireturn"),
    Instruction(0xAD, "lreturn"),
    Instruction(0xAE, "freturn"),
    Instruction(0xAF, "dreturn"),
    Instruction(0xB0, "areturn"),
    Instruction(0xB1, "return"),
    # References
    Instruction(0xB2, "getstatic", OperandShape.CP_U2),
    Instruction(0xB3, "putstatic", OperandShape.CP_U2),
    Instruction(0xB4, "getfield", OperandShape.CP_U2),
    Instruction(0xB5, "putfield", OperandShape.CP_U2),
    Instruction(0xB6, "invokevirtual", OperandShape.CP_U2),
    Instruction(0xB7, "invokespecial", OperandShape.CP_U2),
    Instruction(0xB8, "invokestatic", OperandShape.CP_U2),
    Instruction(0xB9, "invokeinterface", OperandShape.INVOKE_INTERFACE),
    Instruction(0xBA, "invokedynamic", OperandShape.INVOKE_DYNAMIC),
    Instruction(0xBB, "new", OperandShape.CP_U2),
    Instruction(0xBC, "newarray", OperandShape.NEWARRAY),
    Instruction(0xBD, "anewarray", OperandShape.CP_U2),
    Instruction(0xBE, "arraylength"),
    Instruction(0xBF, "athrow"),
    Instruction(0xC0, "checkcast", OperandShape.CP_U2),
    Instruction(0xC1, "instanceof", OperandShape.CP_U2),
    Instruction(0xC2, "monitorenter"),
    Instruction(0xC3, "monitorexit"),
    # Extended
    Instruction(0xC4, "wide", OperandShape.WIDE),
    Instruction(0xC5, "multianewarray", OperandShape.MULTIANEWARRAY),
    Instruction(0xC6, "ifnull", OperandShape.S2),
    Instruction(0xC7, "ifnonnull", OperandShape.S2),
    Instruction(0xC8, "goto_w", OperandShape.S4),
    Instruction(0xC9, "jsr_w", OperandShape.S4),
    # Reserved
    Instruction(0xCA, "breakpoint", reserved=True),
    Instruction(0xFE, "impdep1", reserved=True),
    Instruction(0xFF, "impdep2", reserved=True),
)

_BY_OPCODE: dict[int, Instruction] = {i.opcode: i for i in INSTRUCTIONS}
_BY_MNEMONIC: dict[str, Instruction] = {i.mnemonic: i for i in INSTRUCTIONS}

assert len(_BY_OPCODE) == len(INSTRUCTIONS), "opcodes must be unique"
assert len(_BY_MNEMONIC) == len(INSTRUCTIONS), "mnemonics must be unique"


def lookup(opcode: int) -> Instruction | None:
    """Find the catalog entry of an opcode byte, None if it is undefined."""
    return _BY_OPCODE.get(opcode)


def by_mnemonic(mnemonic: str) -> Instruction | None:
    return _BY_MNEMONIC.get(mnemonic)


# https://docs.oracle.com/javase/specs/jvms/se23/html/jvms-6.html#jvms-6.5.newarray
ARRAY_TYPES: dict[int, str] = {
    4: "boolean",
    5: "char",
    6: "float",
    7: "double",
    8: "byte",
    9: "short",
    10: "int",
    11: "long",
}

UNKNOWN_ARRAY_TYPE = "[ERROR: Unknown type]"


def array_type_name(atype: int) -> str:
    """The element type of a `newarray`, or an error marker for bad codes."""
    return ARRAY_TYPES.get(atype, UNKNOWN_ARRAY_TYPE)
