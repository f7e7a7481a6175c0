import pytest

from jvmcode.jvm import CodeReader, TruncatedStream


def test_reads_big_endian():
    reader = CodeReader.over(bytes.fromhex("ff fffe 8000 fffffffe 7f"))
    assert reader.read_s1() == -1
    assert reader.read_u2() == 0xFFFE
    assert reader.read_s2() == -32768
    assert reader.read_s4() == -2
    assert reader.read_u1() == 0x7F
    assert reader.at_end


def test_declared_length_limits_reads():
    reader = CodeReader.over(b"\x01\x02\x03\x04", length=2)
    assert reader.read_u2() == 0x0102
    assert reader.at_end
    with pytest.raises(TruncatedStream):
        reader.read_u1()


def test_truncated_read_consumes_nothing():
    reader = CodeReader.over(b"\x11\x00")
    reader.begin()
    reader.read_u1()
    with pytest.raises(TruncatedStream) as e:
        reader.read_u2()
    assert e.value.offset == 0
    assert e.value.needed == 2
    assert e.value.available == 1
    assert reader.position == 1


@pytest.mark.parametrize("position, padding", [(0, 0), (1, 3), (2, 2), (3, 1), (4, 0)])
def test_align(position, padding):
    reader = CodeReader.over(bytes(16))
    reader.skip(position)
    assert reader.align(4) == padding
    assert reader.position % 4 == 0


@pytest.mark.parametrize("length", [-1, 5])
def test_bad_length(length):
    with pytest.raises(ValueError):
        CodeReader.over(b"\x00\x00", length)
