import math

import pytest


def test_document_round_trip() -> None:
    from protowire.well_known import Struct, Value, ValueKind
    doc = {'a': 1, 'b': [True, None, 'x'], 'c': {'d': -2.5, 'e': {}}}
    struct = Struct.from_json(doc)
    assert struct.fields['a'] == Value.number_value(1.0)
    assert struct.fields['b'].kind is ValueKind.LIST
    assert struct.fields['c'].kind is ValueKind.STRUCT
    assert struct.to_json() == doc
    assert Value.from_json(doc).to_json() == doc


def test_struct_to_json_writes_its_fields() -> None:
    from protowire.well_known import ListValue, Struct, Value
    struct = Struct({
        'name': Value.string_value('protowire'),
        'tags': Value.list_value(ListValue([Value.string_value('a'), Value.null_value()])),
        'ok': Value.bool_value(False),
    })
    assert struct.to_json() == {'name': 'protowire', 'tags': ['a', None], 'ok': False}


def test_empty_collections() -> None:
    from protowire.well_known import ListValue, Struct, Value, ValueKind
    assert Value.from_json([]).kind is ValueKind.LIST
    assert Value.from_json({}).kind is ValueKind.STRUCT
    assert Value.from_json([]).to_json() == []
    assert Value.from_json({}).to_json() == {}
    assert Struct().to_json() == {}
    assert ListValue().to_json() == []


def test_scalars() -> None:
    from protowire.well_known import Value, ValueKind
    assert Value.from_json(None) == Value.null_value() == Value()
    assert Value.from_json(True) == Value.bool_value(True)
    assert Value.from_json('1') == Value.string_value('1')
    number = Value.from_json(3)
    assert number.kind is ValueKind.NUMBER
    assert isinstance(number.payload, float)
    # integral numbers are written back as JSON integers
    assert number.to_json() == 3 and isinstance(number.to_json(), int)
    assert Value.from_json(0.25).to_json() == 0.25
    assert Value.from_json(2**53).to_json() == 2**53


def test_tuples_are_lists() -> None:
    from protowire.well_known import ListValue, Value
    assert Value.from_json((1, 'a')).to_json() == [1, 'a']
    list_value = ListValue([Value.null_value()])
    assert isinstance(list_value.values, tuple)


@pytest.mark.parametrize('data', [b'bytes', bytearray(b'x'), object(), {1: 'a'}, {'a': {'b': set()}}, math.nan, math.inf])
def test_value_malformed(data):
    from protowire.exception import MalformedInputError
    from protowire.well_known import Value
    with pytest.raises(MalformedInputError):
        Value.from_json(data)


def test_value_number_too_large() -> None:
    from protowire.exception import OutOfRangeError
    from protowire.well_known import Value
    with pytest.raises(OutOfRangeError):
        Value.from_json(10**400)


def test_non_finite_number_cannot_be_written() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import Value
    for number in [math.nan, math.inf, -math.inf]:
        with pytest.raises(MalformedInputError):
            Value.number_value(number).to_json()


def test_container_type_checks() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import ListValue, Struct
    for data in [[], 'x', None, 1]:
        with pytest.raises(MalformedInputError):
            Struct.from_json(data)
    for data in [{}, 'abc', b'abc', None]:
        with pytest.raises(MalformedInputError):
            ListValue.from_json(data)


def test_payload_must_match_kind() -> None:
    from protowire.well_known import Struct, Value, ValueKind
    with pytest.raises(TypeError):
        Value(ValueKind.STRING, 1)
    with pytest.raises(TypeError):
        Value(ValueKind.NUMBER, True)
    with pytest.raises(TypeError):
        Value(ValueKind.LIST, Struct())
    with pytest.raises(TypeError):
        Value(ValueKind.NULL, 0)


def test_depth_limit(shallow_settings) -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import Value
    assert Value.from_json([[1]], settings=shallow_settings).to_json(settings=shallow_settings) == [[1]]
    with pytest.raises(MalformedInputError):
        Value.from_json([[[1]]], settings=shallow_settings)
    deep = Value.from_json([[[1]]])
    with pytest.raises(MalformedInputError):
        deep.to_json(settings=shallow_settings)


def test_default_depth_limit() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import Value
    doc: list = []
    for _ in range(200):
        doc = [doc]
    with pytest.raises(MalformedInputError):
        Value.from_json(doc)


def test_built_nesting_beyond_the_default_limit() -> None:
    from protowire.exception import MalformedInputError
    from protowire.well_known import ListValue, Value
    value = Value.number_value(1)
    for _ in range(300):
        value = Value.list_value(ListValue((value,)))
    with pytest.raises(MalformedInputError):
        value.to_json()


def test_values_holding_structs_are_hashable() -> None:
    from protowire.well_known import Struct, Value
    first = Value.struct_value(Struct.from_json({'a': [1, {'b': None}]}))
    second = Value.struct_value(Struct.from_json({'a': [1, {'b': None}]}))
    assert hash(first) == hash(second)
    assert second in {first}
    assert Value.struct_value(Struct()) in {Value.struct_value(Struct())}
    assert Value.struct_value(Struct.from_json({'a': 2})) not in {first}


def test_negative_zero_keeps_its_sign() -> None:
    from protowire.well_known import Value, to_json_text
    data = Value.number_value(-0.0).to_json()
    assert isinstance(data, float)
    assert math.copysign(1.0, data) < 0
    assert to_json_text(Value.number_value(-0.0)) == '-0.0'
    assert Value.number_value(0.0).to_json() == 0
    assert isinstance(Value.number_value(0.0).to_json(), int)
