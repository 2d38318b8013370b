import pytest


def _do_round_trip_test_with_size(n: int, encoded_size: int, signed: bool) -> None:
    from protowire.serialization import Deserializer, Serializer
    from protowire.serialization.encoding.varint import decode_varint, encode_varint, varint_size
    se = Serializer.build_bytes_serializer()
    encode_varint(se, n)
    encoded_n = bytes(se.finalize())
    assert len(encoded_n) == encoded_size
    assert varint_size(n) == encoded_size
    de = Deserializer.build_bytes_deserializer(encoded_n)
    assert decode_varint(de, signed=signed) == n
    de.finalize()


EXAMPLES_UNSIGNED_BY_SIZE = {
    1: [
        0,
        1,
        2,
        63,
        64,
        126,
        127,
    ],
    2: [
        128,
        129,
        150,
        300,
        8191,
        16383,
    ],
    3: [
        16384,
        100000,
        2097151,
    ],
}


def gen_unsigned_test_cases():
    test_cases = []
    # convert example to test cases
    for size, examples in EXAMPLES_UNSIGNED_BY_SIZE.items():
        for example in examples:
            test_cases.append((example, size))
    # generate additional test cases, up to the end of the 64-bit domain
    for size in range(4, 11):
        n_lo = 1 << (7 * (size - 1))
        n_hi = min((1 << (7 * size)) - 1, 2**64 - 1)
        test_cases.append((n_lo, size))
        test_cases.append((n_hi, size))
    # the old 2**53 precision boundary is not special anymore
    test_cases.append((2**53 - 1, 8))
    test_cases.append((2**53, 8))
    test_cases.append((2**53 + 1, 8))
    return test_cases


@pytest.mark.parametrize('n, encoded_size', gen_unsigned_test_cases())
def test_unsigned_round_trip_with_size(n, encoded_size):
    _do_round_trip_test_with_size(n, encoded_size, False)


@pytest.mark.parametrize('n', [-1, -2, -64, -150, -2**31, -2**53, -2**53 - 1, -2**63])
def test_negative_round_trip_uses_10_bytes(n):
    _do_round_trip_test_with_size(n, 10, True)


@pytest.mark.parametrize('n', [0, 1, 300, 2**31, 2**63 - 1])
def test_signed_positive_round_trip(n):
    from protowire.serialization.encoding.varint import varint_size
    _do_round_trip_test_with_size(n, varint_size(n), True)


def test_negative_encoding_layout() -> None:
    from protowire.serialization import Serializer
    from protowire.serialization.encoding.varint import encode_varint
    se = Serializer.build_bytes_serializer()
    encode_varint(se, -2)
    encoded = bytes(se.finalize())
    assert encoded == bytes.fromhex('feffffffffffffffff01')
    # continuation bit on every byte but the last, which holds the sign extension
    assert all(byte & 0x80 for byte in encoded[:9])
    assert encoded[9] == 0b0000_0001


def test_unsigned_view_of_negative_encoding() -> None:
    from protowire.serialization import Deserializer
    from protowire.serialization.encoding.varint import decode_varint
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('feffffffffffffffff01'))
    assert decode_varint(de, signed=False) == 2**64 - 2


@pytest.mark.parametrize('n', [2**64, 2**70, -2**63 - 1])
def test_out_of_range(n):
    from protowire.exception import OutOfRangeError
    from protowire.serialization import Serializer
    from protowire.serialization.encoding.varint import encode_varint
    se = Serializer.build_bytes_serializer()
    with pytest.raises(OutOfRangeError):
        encode_varint(se, n)


@pytest.mark.parametrize('data', [b'', b'\x80', b'\xff\xff', b'\x80' * 9])
def test_unterminated(data):
    from protowire.exception import MalformedInputError
    from protowire.serialization import Deserializer, OutOfDataError
    from protowire.serialization.encoding.varint import decode_varint
    de = Deserializer.build_bytes_deserializer(data)
    with pytest.raises(OutOfDataError):
        decode_varint(de, signed=False)
    de = Deserializer.build_bytes_deserializer(data)
    with pytest.raises(MalformedInputError):
        decode_varint(de, signed=True)


def test_too_long() -> None:
    from protowire.serialization import BadDataError, Deserializer, OutOfDataError
    from protowire.serialization.encoding.varint import decode_varint
    de = Deserializer.build_bytes_deserializer(b'\x80' * 10 + b'\x01')
    with pytest.raises(BadDataError) as exc_info:
        decode_varint(de, signed=False)
    assert not isinstance(exc_info.value, OutOfDataError)


def test_decoding_stops_at_last_byte() -> None:
    from protowire.serialization import Deserializer
    from protowire.serialization.encoding.varint import decode_varint
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('ac02') + b'rest')
    assert decode_varint(de, signed=False) == 300
    assert de.cur_pos() == 2
    assert bytes(de.read_all()) == b'rest'
