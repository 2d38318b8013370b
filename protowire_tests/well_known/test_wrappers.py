import math

import pytest


def test_bool_value() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import BoolValue
    assert BoolValue(True).to_json() is True
    assert BoolValue.from_json(True) == BoolValue(True)
    assert BoolValue.from_json(False) == BoolValue()
    for data in ['true', 1, None]:
        with pytest.raises(MalformedInputError):
            BoolValue.from_json(data)


def test_string_value() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import StringValue
    assert StringValue('héllo').to_json() == 'héllo'
    assert StringValue.from_json('') == StringValue()
    with pytest.raises(MalformedInputError):
        StringValue.from_json(1)


def test_bytes_value() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import BytesValue
    assert BytesValue(b'\x00\xff').to_json() == 'AP8='
    assert BytesValue(b'').to_json() == ''
    assert BytesValue.from_json('AP8=') == BytesValue(b'\x00\xff')
    # unpadded and url-safe alphabets are accepted too
    assert BytesValue.from_json('AP8') == BytesValue(b'\x00\xff')
    assert BytesValue.from_json('-_8') == BytesValue.from_json('+/8=')
    for data in ['!!', 'A', b'AP8=']:
        with pytest.raises(MalformedInputError):
            BytesValue.from_json(data)


@pytest.mark.parametrize('cls_name', ['DoubleValue', 'FloatValue'])
def test_floating_point_values(cls_name):
    import protowire.well_known as wk
    cls = getattr(wk, cls_name)
    assert cls(1.5).to_json() == 1.5
    assert cls(math.nan).to_json() == 'NaN'
    assert cls(math.inf).to_json() == 'Infinity'
    assert cls(-math.inf).to_json() == '-Infinity'
    assert math.isnan(cls.from_json('NaN').value)
    assert cls.from_json('Infinity').value == math.inf
    assert cls.from_json('-Infinity').value == -math.inf
    assert cls.from_json('1.25').value == 1.25
    assert cls.from_json('-2e3').value == -2000.0
    assert cls.from_json(3).value == 3.0


@pytest.mark.parametrize('data', ['nan', 'inf', '1.5x', '', True, None, [1.0]])
def test_floating_point_malformed(data):
    from protowire.exception import MalformedInputError
    from protowire.well_known import DoubleValue
    with pytest.raises(MalformedInputError):
        DoubleValue.from_json(data)


def test_floating_point_out_of_range() -> None:
    from protowire.exception import OutOfRangeError
    from protowire.well_known import DoubleValue, FloatValue
    with pytest.raises(OutOfRangeError):
        DoubleValue.from_json('1e400')
    with pytest.raises(OutOfRangeError):
        DoubleValue.from_json(10**400)
    with pytest.raises(OutOfRangeError):
        FloatValue.from_json(1e39)
    assert FloatValue.from_json(3.4e38).value == 3.4e38
    assert DoubleValue.from_json(1e39).value == 1e39


def test_integer_values() -> None:
    from protowire.well_known import Int32Value, Int64Value, UInt32Value, UInt64Value
    assert Int32Value.from_json(-5) == Int32Value(-5)
    assert Int32Value.from_json('-5') == Int32Value(-5)
    assert Int32Value.from_json(7.0) == Int32Value(7)
    assert UInt32Value.from_json('4294967295') == UInt32Value(2**32 - 1)
    assert Int64Value.from_json('-9223372036854775808') == Int64Value(-2**63)
    assert UInt64Value.from_json('18446744073709551615') == UInt64Value(2**64 - 1)
    # 64-bit values are written as exact JSON numbers
    assert UInt64Value(2**64 - 1).to_json() == 18446744073709551615
    assert Int64Value(2**53 + 1).to_json() == 2**53 + 1


def test_int32_value_wraps() -> None:
    from protowire.well_known import Int32Value
    assert Int32Value.from_json(2**31) == Int32Value(-2**31)
    assert Int32Value.from_json(2**32 + 3) == Int32Value(3)


@pytest.mark.parametrize('cls_name, data', [
    ('UInt32Value', -1),
    ('UInt32Value', 2**32),
    ('Int64Value', 2**63),
    ('Int64Value', '-9223372036854775809'),
    ('UInt64Value', -1),
    ('UInt64Value', 2**64),
])
def test_integer_out_of_range(cls_name, data):
    import protowire.well_known as wk
    from protowire.exception import OutOfRangeError
    with pytest.raises(OutOfRangeError):
        getattr(wk, cls_name).from_json(data)


@pytest.mark.parametrize('data', [1.5, '1.0', '0x10', ' 1', True, None, math.nan])
def test_integer_malformed(data):
    from protowire.exception import MalformedInputError
    from protowire.well_known import Int64Value
    with pytest.raises(MalformedInputError):
        Int64Value.from_json(data)


def test_null_value() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import NullValue
    assert NullValue.NULL_VALUE == 0
    assert NullValue.NULL_VALUE.to_json() is None
    assert NullValue.from_json(None) is NullValue.NULL_VALUE
    assert NullValue.from_json('NULL_VALUE') is NullValue.NULL_VALUE
    for data in [0, 'null', False]:
        with pytest.raises(MalformedInputError):
            NullValue.from_json(data)
