import pytest

from jvmcode import decode, decode_report
from jvmcode.jvm import UNKNOWN_OPCODE, TruncatedStream, UnknownOpcode
from jvmcode.model import DecodedInstruction

from assembler import assemble


def texts(code, **kwargs):
    return [ins.text for ins in decode(code, **kwargs)]


@pytest.mark.parametrize("code", [None, b""])
def test_empty(code):
    assert decode(code) == []
    report = decode_report(code)
    assert report.complete
    assert len(report) == 0


def test_return():
    assert decode(bytes([0xB1])) == [DecodedInstruction(0, 0xB1, "return")]


def test_bipush():
    (ins,) = decode(bytes([0x10, 0x64]))
    assert ins.offset == 0
    assert ins.text == "bipush 100"
    assert ins.constant_pool_index is None
    assert ins.length == 2


@pytest.mark.parametrize(
    "program, expected",
    [
        ([("sipush", 1000)], "sipush 1000"),
        ([("iload", 4)], "iload 4"),
        ([("astore", 255)], "astore 255"),
        ([("ret", 3)], "ret 3"),
        ([("ifeq", -3)], "ifeq -3"),
        ([("ifnonnull", -8)], "ifnonnull -8"),
        ([("goto", 32767)], "goto 32767"),
        ([("goto_w", -70000)], "goto_w -70000"),
        ([("jsr_w", 70000)], "jsr_w 70000"),
        ([("iinc", 2, -1)], "iinc index = 2 const = -1"),
        ([("newarray", 10)], "newarray int"),
        ([("newarray", 4)], "newarray boolean"),
        ([("invokeinterface", 12, 3)], "invokeinterface interface=12, nargs=3"),
        ([("multianewarray", 9, 2)], "multianewarray type=9 dimensions=2"),
        ([("breakpoint",)], "[Reserved] breakpoint"),
        ([("impdep2",)], "[Reserved] impdep2"),
    ],
)
def test_operand_text(program, expected):
    code, _ = assemble(program)
    (ins,) = decode(code)
    assert ins.text == expected
    assert ins.length == len(code)


@pytest.mark.parametrize(
    "program, index",
    [
        ([("ldc", 200)], 200),
        ([("ldc_w", 300)], 300),
        ([("getstatic", 65535)], 65535),
        ([("invokevirtual", 7)], 7),
        ([("invokedynamic", 42)], 42),
        ([("new", 5)], 5),
        ([("checkcast", 6)], 6),
    ],
)
def test_constant_pool_index(program, index):
    code, _ = assemble(program)
    (ins,) = decode(code)
    assert ins.constant_pool_index == index
    assert ins.text == program[0][0]
    assert ins.length == len(code)


@pytest.mark.parametrize(
    "program, index, text",
    [
        ([("invokeinterface", 12, 3)], 12, "invokeinterface interface=12, nargs=3"),
        ([("multianewarray", 9, 2)], 9, "multianewarray type=9 dimensions=2"),
    ],
)
def test_inline_constant_pool_index(program, index, text):
    code, _ = assemble(program)
    (ins,) = decode(code)
    assert ins.constant_pool_index == index
    assert ins.text == text
    assert ins.length == len(code)
    assert str(ins).endswith(f"{text} {index}")


def test_unknown_array_type(logs):
    (ins,) = decode(bytes([0xBC, 0x02]))
    assert ins.text == "newarray [ERROR: Unknown type]"
    assert ins.length == 2
    assert any(level == "WARNING" for level, _ in logs)


def test_method_body():
    code, expected = assemble(
        [
            ("aload_0",),
            ("invokespecial", 1),
            ("iconst_0",),
            ("istore_1",),
            ("iload_1",),
            ("bipush", 10),
            ("if_icmpge", 9),
            ("iinc", 1, 1),
            ("goto", -9),
            ("return",),
        ]
    )
    result = decode(code)
    assert [(i.offset, i.opcode, i.values) for i in result] == expected
    assert [i.offset for i in result] == [0, 1, 4, 5, 6, 7, 9, 12, 15, 18]
    assert result[1].constant_pool_index == 1
    assert all(i.constant_pool_index is None for i in result if i.offset != 1)


def test_offsets_are_contiguous():
    code, _ = assemble(
        [("iconst_1",), ("tableswitch", 0, 0, 1, 10, 20), ("wide", "aload", 300), ("areturn",)]
    )
    result = decode(code)
    assert result[0].offset == 0
    for prev, ins in zip(result, result[1:]):
        assert ins.offset == prev.end
    assert result[-1].end == len(code)


def test_unknown_opcode_resumes_at_next_byte(logs):
    result = decode(bytes([0xCB, 0x10, 0x05, 0xB1]))
    assert [(i.offset, i.text) for i in result] == [
        (0, UNKNOWN_OPCODE),
        (1, "bipush 5"),
        (3, "return"),
    ]
    assert result[0].constant_pool_index is None
    assert result[0].length == 1
    assert ("WARNING", "Unknown opcode 0xCB at offset 0") in logs


def test_unknown_opcode_strict():
    report = decode_report(bytes([0x03, 0xFD, 0xB1]), strict=True)
    assert [i.text for i in report] == ["iconst_0"]
    assert isinstance(report.failure, UnknownOpcode)
    assert report.failure.offset == 1
    assert report.failure.opcode == 0xFD
    assert not report.complete
    assert not report.truncated


def test_truncated_operand(logs):
    report = decode_report(bytes([0x04, 0x3C, 0x11]))
    assert [i.text for i in report] == ["iconst_1", "istore_1"]
    assert isinstance(report.failure, TruncatedStream)
    assert report.failure.offset == 2
    assert report.truncated
    assert report.covered == 2
    assert any(level == "ERROR" for level, _ in logs)


def test_truncated_is_not_raised():
    assert texts(bytes([0x04, 0x11, 0x00])) == ["iconst_1"]


def test_declared_length():
    code = bytes([0x04, 0xB1, 0x11, 0x00])
    assert texts(code, length=2) == ["iconst_1", "return"]
    report = decode_report(code, length=3)
    assert report.truncated
    assert len(report) == 2


def test_declared_length_too_long():
    with pytest.raises(ValueError):
        decode(b"\xb1", length=2)


def test_idempotent():
    code, _ = assemble(
        [("lookupswitch", 0, 1, 10, 2, 20), ("wide", "iinc", 5, -2), ("return",)]
    )
    assert decode(code) == decode(code)
    assert decode_report(code) == decode_report(code)


def test_idempotent_with_failure():
    assert decode_report(b"\x11") == decode_report(b"\x11")
    assert decode_report(b"\xfd", strict=True) == decode_report(b"\xfd", strict=True)
    assert decode_report(b"\xfd", strict=True) != decode_report(b"\xfd")
    assert decode_report(b"\x11") != decode_report(b"\x11\x00")
