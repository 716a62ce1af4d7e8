import logging

import pytest

from a2lgen.comment import CharacteristicType
from a2lgen.generator import (
    A2lCommentGenerator,
    Characteristic,
    DataType,
    Measurement,
    c_type_to_data_type,
)


@pytest.mark.parametrize(
    ("c_type", "expected"),
    [
        ("uint8_t", DataType.UBYTE),
        ("int8_t", DataType.SBYTE),
        ("unsigned char", DataType.UBYTE),
        ("char", DataType.SBYTE),
        ("unsigned short", DataType.UWORD),
        ("int16_t", DataType.SWORD),
        ("int", DataType.SLONG),
        ("unsigned int", DataType.ULONG),
        ("uint32", DataType.ULONG),
        ("long long", DataType.A_INT64),
        ("unsigned long long", DataType.A_UINT64),
        ("uint64_t", DataType.A_UINT64),
        ("float", DataType.FLOAT32_IEEE),
        ("double", DataType.FLOAT64_IEEE),
        ("long", DataType.SLONG),
    ],
)
def test_c_type_mapping(c_type, expected):
    assert c_type_to_data_type(c_type) == expected


def test_mapping_ignores_case():
    assert c_type_to_data_type("UINT16_T") == DataType.UWORD
    assert c_type_to_data_type("Double") == DataType.FLOAT64_IEEE


def test_unknown_type_defaults_to_ubyte(caplog):
    with caplog.at_level(logging.WARNING):
        result = c_type_to_data_type("struct foo")
    assert result == DataType.UBYTE
    assert "struct foo" in caplog.text


def test_method_matches_function():
    generator = A2lCommentGenerator()
    for c_type in ("int8", "short", "int32_t", "int64", "float"):
        assert generator.match_c_type_to_a2l_type(c_type) == c_type_to_data_type(c_type)


def test_create_characteristic():
    generator = A2lCommentGenerator()
    result = generator.create_characteristic(
        "speed", "vehicle speed", CharacteristicType.VALUE, "RL_VALU8", "NO_COMPU_METHOD", -10.5, 1000.0
    )
    assert result == Characteristic(
        name="speed",
        long_identifier="vehicle speed",
        characteristic_type=CharacteristicType.VALUE,
        address=0,
        deposit="RL_VALU8",
        max_diff=0.0,
        conversion="NO_COMPU_METHOD",
        lower_limit=-10.5,
        upper_limit=1000.0,
    )


def test_create_measurement():
    generator = A2lCommentGenerator()
    result = generator.create_measurement(
        "temp", "engine temperature", DataType.SWORD, "NO_COMPU_METHOD", 1, -40.0, 150.0
    )
    assert result.name == "temp"
    assert result.long_identifier == "engine temperature"
    assert result.datatype == DataType.SWORD
    assert result.conversion == "NO_COMPU_METHOD"
    assert result.resolution == 1
    assert result.accuracy == 0.0
    assert (result.lower_limit, result.upper_limit) == (-40.0, 150.0)


@pytest.mark.parametrize("resolution", [-1, 65536])
def test_measurement_resolution_out_of_range(resolution):
    with pytest.raises(ValueError):
        Measurement("m", "", DataType.UBYTE, "NO_COMPU_METHOD", resolution, 0.0, 0.0, 1.0)


def test_characteristic_negative_address_rejected():
    with pytest.raises(ValueError):
        Characteristic("c", "", CharacteristicType.VALUE, -1, "d", 0.0, "NO_COMPU_METHOD", 0.0, 1.0)


def test_data_type_keywords():
    assert c_type_to_data_type("uint64_t").value == "A_UINT64"
    assert c_type_to_data_type("float").value == "FLOAT32_IEEE"