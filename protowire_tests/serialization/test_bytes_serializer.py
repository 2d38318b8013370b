import pytest


def _is_power_of_3(n: int) -> bool:
    while n > 1 and n % 3 == 0:
        n //= 3
    return n == 1


def test_reserve_returns_same_buffer_when_it_fits() -> None:
    from protowire.serialization.bytes_serializer import reserve
    buf = bytearray(9)
    assert reserve(buf, 0, 9) is buf
    assert reserve(buf, 4, 5) is buf
    assert reserve(buf, 9, 0) is buf


@pytest.mark.parametrize('capacity, cursor, amount, expected_capacity', [
    (0, 0, 1, 1),
    (0, 0, 2, 3),
    (1, 1, 1, 3),
    (3, 3, 1, 9),
    (9, 5, 10, 27),
    (10, 10, 100, 243),
])
def test_reserve_grows_to_power_of_3(capacity, cursor, amount, expected_capacity):
    from protowire.serialization.bytes_serializer import reserve
    buf = bytearray(range(capacity))
    grown = reserve(buf, cursor, amount)
    assert grown is not buf
    assert len(grown) == expected_capacity
    assert _is_power_of_3(len(grown))
    assert len(grown) - cursor >= amount
    assert grown[:cursor] == buf[:cursor]


def test_reserve_rejects_negative() -> None:
    from protowire.serialization.bytes_serializer import reserve
    with pytest.raises(ValueError):
        reserve(bytearray(), 0, -1)
    with pytest.raises(ValueError):
        reserve(bytearray(), -1, 1)


def test_growth_keeps_written_bytes() -> None:
    from protowire.serialization import Serializer
    se = Serializer.build_bytes_serializer()
    expected = bytearray()
    for i in range(1000):
        byte = (i * 7) % 256
        se.write_byte(byte)
        expected.append(byte)
        assert se.buffer[:se.cur_pos()] == expected
        assert _is_power_of_3(len(se.buffer))
    assert bytes(se.finalize()) == bytes(expected)


def test_write_at_cursor_of_caller_buffer() -> None:
    from protowire.serialization import Serializer
    buf = bytearray(b'head----')
    se = Serializer.build_bytes_serializer(buf, 4)
    se.write_bytes(b'tail')
    # fits in place, no reallocation
    assert se.buffer is buf
    assert buf == bytearray(b'headtail')
    se.write_bytes(b'!')
    assert se.buffer is not buf
    assert se.buffer[:se.cur_pos()] == bytearray(b'headtail!')
    # the previous buffer is left untouched
    assert buf == bytearray(b'headtail')


def test_invalid_cursor() -> None:
    from protowire.serialization import Serializer
    with pytest.raises(ValueError):
        Serializer.build_bytes_serializer(bytearray(2), 3)
    with pytest.raises(ValueError):
        Serializer.build_bytes_serializer(bytearray(2), -1)


def test_write_byte_range() -> None:
    from protowire.serialization import Serializer
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        se.write_byte(256)
    with pytest.raises(ValueError):
        se.write_byte(-1)
    assert se.cur_pos() == 0


def test_initial_capacity_from_settings() -> None:
    from protowire.conf import ProtowireSettings
    from protowire.serialization.bytes_serializer import BytesSerializer
    se = BytesSerializer(settings=ProtowireSettings(INITIAL_BUFFER_CAPACITY=27))
    assert len(se.buffer) == 27
    se.write_bytes(b'x' * 27)
    assert len(se.buffer) == 27
    se.write_byte(0)
    assert len(se.buffer) == 81


def test_deserializer_tracks_position() -> None:
    from protowire.serialization import BadDataError, Deserializer
    de = Deserializer.build_bytes_deserializer(b'abcdef')
    assert de.cur_pos() == 0
    assert de.read_byte() == ord('a')
    assert bytes(de.read_bytes(2)) == b'bc'
    assert de.cur_pos() == 3
    assert bytes(de.peek_bytes(2)) == b'de'
    assert de.cur_pos() == 3
    with pytest.raises(BadDataError):
        de.finalize()


def test_growth_is_logged(caplog) -> None:
    import logging

    from protowire.serialization.bytes_serializer import reserve
    with caplog.at_level(logging.DEBUG):
        reserve(bytearray(3), 3, 1)
    assert "event='buffer grown'" in caplog.text
    assert 'new_capacity=9' in caplog.text
