"""
jvmcode.jvm

The instruction set of the java virtual machine, and the primitives to
read it from a code array.

"""

from .opcode import (
    ARRAY_TYPES,
    INSTRUCTIONS,
    RESERVED_PREFIX,
    UNKNOWN_ARRAY_TYPE,
    Instruction,
    OperandShape,
    array_type_name,
    by_mnemonic,
    lookup,
)
from .errors import (
    UNKNOWN_OPCODE,
    UNKNOWN_WIDE_OPCODE,
    DecodeError,
    TruncatedStream,
    UnknownOpcode,
)
from .reader import CodeReader
