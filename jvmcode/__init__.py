from jvmcode import jvm
from jvmcode.decoder import decode, decode_instruction, decode_report
from jvmcode.model import ConstantPool, DecodedInstruction, DecodeReport, JsonConstantPool
from jvmcode.render import format_instruction, format_listing

__version__ = "0.1.0"
