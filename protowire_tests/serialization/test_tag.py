import pytest

FIELD_NUMBERS = [1, 2, 15, 16, 2047, 2048, 2**28, 2**29 - 1]


@pytest.mark.parametrize('field_number', FIELD_NUMBERS)
def test_tag_round_trip(field_number):
    from protowire.serialization import Deserializer, Serializer
    from protowire.serialization.encoding.tag import WireType, decode_tag, encode_tag
    for wire_type in WireType:
        se = Serializer.build_bytes_serializer()
        encode_tag(se, field_number, wire_type)
        de = Deserializer.build_bytes_deserializer(bytes(se.finalize()))
        assert decode_tag(de) == (field_number, wire_type)
        de.finalize()


def test_tag_layout() -> None:
    from protowire.serialization import Serializer
    from protowire.serialization.encoding.tag import WireType, encode_tag
    se = Serializer.build_bytes_serializer()
    encode_tag(se, 1, WireType.VARINT)
    encode_tag(se, 15, WireType.LEN)
    encode_tag(se, 16, WireType.I64)
    assert bytes(se.finalize()).hex() == '087a8101'


@pytest.mark.parametrize('field_number', [0, -1, 2**29])
def test_invalid_field_number_on_write(field_number):
    from protowire.exception import OutOfRangeError
    from protowire.serialization import Serializer
    from protowire.serialization.encoding.tag import WireType, encode_tag
    se = Serializer.build_bytes_serializer()
    with pytest.raises(OutOfRangeError):
        encode_tag(se, field_number, WireType.VARINT)


@pytest.mark.parametrize('data', [
    b'\x00',  # field number 0
    b'\x0e',  # wire type 6
    b'\x0f',  # wire type 7
    bytes.fromhex('8080808010'),  # field number 2**29
])
def test_invalid_tag_on_read(data):
    from protowire.serialization import BadDataError, Deserializer
    from protowire.serialization.encoding.tag import decode_tag
    de = Deserializer.build_bytes_deserializer(data)
    with pytest.raises(BadDataError):
        decode_tag(de)


@pytest.mark.parametrize('field_hex, wire_type', [
    ('9601', 0),
    ('0102030405060708', 1),
    ('03616263', 2),
    ('01020304', 5),
])
def test_skip_field(field_hex, wire_type):
    from protowire.serialization import Deserializer
    from protowire.serialization.encoding.tag import WireType, skip_field
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(field_hex) + b'next')
    skip_field(de, 7, WireType(wire_type))
    assert bytes(de.read_all()) == b'next'


def test_skip_nested_groups() -> None:
    from protowire.serialization import Deserializer
    from protowire.serialization.encoding.tag import WireType, decode_tag, skip_field
    # group 1 { field 2 = 5; group 3 { field 4 = "ab" } } then field 5 = 1
    data = bytes.fromhex('0b 1005 1b 22026162 1c 0c 2801')
    de = Deserializer.build_bytes_deserializer(data)
    assert decode_tag(de) == (1, WireType.SGROUP)
    skip_field(de, 1, WireType.SGROUP)
    assert decode_tag(de) == (5, WireType.VARINT)


def test_skip_group_mismatched_end() -> None:
    from protowire.serialization import BadDataError, Deserializer
    from protowire.serialization.encoding.tag import WireType, skip_field
    # end group for field 2 closing group 1
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('1005 14'))
    with pytest.raises(BadDataError):
        skip_field(de, 1, WireType.SGROUP)


def test_skip_stray_end_group() -> None:
    from protowire.serialization import BadDataError, Deserializer
    from protowire.serialization.encoding.tag import WireType, skip_field
    de = Deserializer.build_bytes_deserializer(b'')
    with pytest.raises(BadDataError):
        skip_field(de, 1, WireType.EGROUP)


def test_skip_unterminated_group() -> None:
    from protowire.serialization import Deserializer, OutOfDataError
    from protowire.serialization.encoding.tag import WireType, skip_field
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('1005'))
    with pytest.raises(OutOfDataError):
        skip_field(de, 1, WireType.SGROUP)


def test_skip_groups_nested_too_deep(shallow_settings) -> None:
    from protowire.serialization import BadDataError, Deserializer
    from protowire.serialization.encoding.tag import WireType, skip_field
    depth = shallow_settings.MAX_RECURSION_DEPTH + 1
    data = b'\x0b' * depth + b'\x0c' * depth
    de = Deserializer.build_bytes_deserializer(data)
    with pytest.raises(BadDataError):
        skip_field(de, 1, WireType.SGROUP, settings=shallow_settings)


def test_skip_truncated_payload() -> None:
    from protowire.serialization import Deserializer, OutOfDataError
    from protowire.serialization.encoding.tag import WireType, skip_field
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('05616263'))
    with pytest.raises(OutOfDataError):
        skip_field(de, 1, WireType.LEN)


def test_skip_is_logged(caplog) -> None:
    import logging

    from protowire.serialization import Deserializer
    from protowire.serialization.encoding.tag import decode_tag, skip_field
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('2801'))
    with caplog.at_level(logging.DEBUG):
        skip_field(de, *decode_tag(de))
    assert "event='skip field'" in caplog.text
    assert 'field_number=5' in caplog.text


@pytest.mark.parametrize('wire_type', [6, 7, -1, 8])
def test_invalid_wire_type_on_write(wire_type):
    from protowire.exception import OutOfRangeError
    from protowire.serialization import Serializer
    from protowire.serialization.encoding.tag import encode_tag
    se = Serializer.build_bytes_serializer()
    with pytest.raises(OutOfRangeError):
        encode_tag(se, 1, wire_type)
    assert se.cur_pos() == 0
