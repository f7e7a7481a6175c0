import pytest

from jvmcode import decode, decode_report
from jvmcode.jvm import UNKNOWN_WIDE_OPCODE
from jvmcode.jvm.wide import WIDENABLE

from assembler import assemble


def test_wide_iinc():
    (ins,) = decode(bytes([196, 132, 0x00, 0x05, 0xFF, 0xFE]))
    assert ins.opcode == 196
    assert ins.text == "wide iinc index = 5 const = -2"
    assert ins.values == (132, 5, -2)
    assert ins.length == 6
    assert ins.constant_pool_index is None


@pytest.mark.parametrize("mnemonic", sorted(WIDENABLE - {"iinc"}))
def test_wide_index(mnemonic):
    code, _ = assemble([("wide", mnemonic, 0x1234), ("return",)])
    ins, ret = decode(code)
    assert ins.text == f"wide {mnemonic} {0x1234}"
    assert ins.length == 4
    assert ret.offset == 4


def test_widenable_count():
    assert len(WIDENABLE) == 12


@pytest.mark.parametrize("inner", [0x10, 0x1A, 0xB1, 0xC4, 0xCB])
def test_unknown_wide_opcode(inner, logs):
    code = bytes([0xC4, inner, 0x00, 0xB1])
    result = decode(code)
    assert result[0].text == UNKNOWN_WIDE_OPCODE
    assert result[0].length == 2
    assert result[0].offset == 0
    # the stream goes on right after the unknown opcode
    assert result[1].offset == 2
    assert any(level == "WARNING" for level, _ in logs)


def test_wide_truncated():
    report = decode_report(bytes([0x00, 0xC4, 0x84, 0x00, 0x05, 0xFF]))
    assert [i.text for i in report] == ["nop"]
    assert report.truncated
    assert report.failure.offset == 1
