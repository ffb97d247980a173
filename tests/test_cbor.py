import pytest
from hypothesis import given, strategies as st

from cardanokit.cbor import CborError, DataType, Decoder, Encoder, decode, encode

UINTS = st.integers(min_value=0, max_value=2**64 - 1)
INTS = st.integers(min_value=-(2**64), max_value=2**64 - 1)


@given(UINTS)
def test_uint_round_trip(value):
    assert decode(encode(value), Decoder.uint) == value


@given(INTS)
def test_int_round_trip(value):
    assert decode(encode(value), Decoder.int) == value


@given(st.binary())
def test_bytes_round_trip(value):
    assert decode(encode(value), Decoder.bytes) == value


@given(st.text())
def test_text_round_trip(value):
    assert decode(encode(value), Decoder.text) == value


def test_wire_format_of_small_values():
    assert encode(23) == b"\x17"
    assert encode(24) == b"\x18\x18"
    assert encode(None) == b"\xf6"


@given(UINTS)
def test_unsigned_datatype_matches_width(value):
    kind = decode(encode(value), Decoder.datatype)
    if value < 1 << 8:
        assert kind is DataType.U8
    elif value < 1 << 16:
        assert kind is DataType.U16
    elif value < 1 << 32:
        assert kind is DataType.U32
    else:
        assert kind is DataType.U64


def test_big_negative_is_int_datatype():
    assert decode(encode(-(2**64)), Decoder.datatype) is DataType.INT
    assert decode(encode(-(2**63)), Decoder.datatype) is DataType.I64


@pytest.mark.parametrize("value", [2**64, -(2**64) - 1])
def test_out_of_range_integers_raise(value):
    with pytest.raises(CborError):
        encode(value)


@pytest.mark.parametrize(
    "reader, value",
    [(Decoder.u8, 2**8), (Decoder.u16, 2**16), (Decoder.u32, 2**32)],
)
def test_sized_readers_detect_overflow(reader, value):
    decoder = Decoder(encode(value))
    with pytest.raises(CborError):
        reader(decoder)
    assert decoder.position == 0


@given(st.integers(min_value=0, max_value=255))
def test_u8_accepts_fitting_values(value):
    assert decode(encode(value), Decoder.u8) == value


def test_type_mismatch_leaves_position():
    decoder = Decoder(encode("x"))
    with pytest.raises(CborError):
        decoder.uint()
    assert decoder.position == 0
    assert decoder.text() == "x"


def test_truncated_input_raises():
    with pytest.raises(CborError):
        decode(encode(b"abc")[:-1], Decoder.bytes)


def test_invalid_utf8_raises():
    data = Encoder().bytes(b"\xff").getvalue()
    data = bytes([data[0] | 0x20]) + data[1:]
    with pytest.raises(CborError):
        decode(data, Decoder.text)


def test_definite_containers():
    data = Encoder().array(2).uint(1).map(1).text("k").bool(True).getvalue()
    decoder = Decoder(data)
    assert decoder.array() == 2
    assert decoder.uint() == 1
    assert decoder.map() == 1
    assert decoder.text() == "k"
    assert decoder.bool() is True
    assert decoder.position == len(data)


def test_indefinite_array():
    data = Encoder().begin_array().uint(1).uint(2).end().getvalue()
    decoder = Decoder(data)
    assert decoder.datatype() is DataType.ARRAY_INDEF
    assert decoder.array() is None
    items = []
    while not decoder.at_break():
        items.append(decoder.uint())
    assert items == [1, 2]
    assert decoder.position == len(data)


def test_indefinite_bytes_are_joined():
    data = Encoder().raw(b"\x5f").bytes(b"ab").bytes(b"c").end().uint(9).getvalue()
    assert decode(data, Decoder.bytes) == b"abc"
    decoder = Decoder(data)
    decoder.skip()
    assert decoder.uint() == 9


def test_skip_complex_items():
    data = (
        Encoder()
        .encode([1, {"a": [b"x", None]}, True, -5, "text"])
        .begin_map()
        .text("k")
        .undefined()
        .end()
        .tag(24)
        .bytes(b"z")
        .uint(7)
        .getvalue()
    )
    decoder = Decoder(data)
    decoder.skip()
    decoder.skip()
    decoder.skip()
    assert decoder.uint() == 7
    assert decoder.position == len(data)


def test_skip_lone_break_raises():
    with pytest.raises(CborError):
        Decoder(Encoder().end().getvalue()).skip()


def test_generic_structure_encoding():
    decoder = Decoder(encode({"a": [1, -2]}))
    assert decoder.map() == 1
    assert decoder.text() == "a"
    assert decoder.array() == 2
    assert decoder.int() == 1
    assert decoder.int() == -2


def test_unsupported_value_raises():
    with pytest.raises(CborError):
        encode(1.5)


def test_tag_round_trip():
    decoder = Decoder(Encoder().tag(24).bytes(b"x").getvalue())
    assert decoder.datatype() is DataType.TAG
    assert decoder.tag() == 24
    assert decoder.bytes() == b"x"


def test_simple_values():
    assert decode(encode(None), Decoder.datatype) is DataType.NULL
    assert decode(Encoder().undefined().getvalue(), Decoder.datatype) is DataType.UNDEFINED
    assert decode(encode(False), Decoder.bool) is False
    decoder = Decoder(Encoder().null().undefined().getvalue())
    decoder.null()
    decoder.undefined()
    assert decoder.position == 2


def test_null_mismatch_raises():
    with pytest.raises(CborError):
        decode(encode(0), Decoder.null)


def test_read_uses_reader():
    assert Decoder(encode(5)).read(Decoder.uint) == 5


def test_objects_with_hook_are_encoded_by_hook():
    class Point:
        def encode_cbor(self, encoder):
            encoder.array(2).uint(3).uint(4)

    assert encode(Point()) == encode([3, 4])