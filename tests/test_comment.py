import pytest

from a2lgen.comment import A2lCodeComment, A2lType, CharacteristicType


def test_from_comment():
    comment = """
        a2l on
        a2l-type Measurement
        a2l-characteristic-type Ascii
        a2l-description This is a test description
        a2l-min -10.5
        a2l-max 1000
        a2l-linear-coeffs 1.23
        a2l-rat-func-coeffs 4.56
        a2l-display-identifier TestIdentifier
        a2l-group TestGroup
        a2l-max-refresh 50ms
        a2l-read-only
        a2l-unit m/s
        """
    parsed = A2lCodeComment.from_comment(comment)

    assert parsed.on
    assert parsed.a2l_type == A2lType.MEASUREMENT
    assert parsed.characteristic_type == CharacteristicType.ASCII
    assert parsed.description == "This is a test description"
    assert parsed.min_value == -10.5
    assert parsed.max_value == 1000.0
    assert parsed.linear_coeffs == "1.23"
    assert parsed.rat_func_coeffs == "4.56"
    assert parsed.display_identifier == "TestIdentifier"
    assert parsed.group == "TestGroup"
    assert parsed.max_refresh == "50ms"
    assert parsed.read_only
    assert not parsed.read_write
    assert parsed.unit == "m/s"


def test_from_comment_invalid():
    comment = """
        a2l on
        a2l-type InvalidType
        a2l-characteristic-type InvalidType
        a2l-description This is a test description
        a2l-min invalid_value
        a2l-max invalid_value
        a2l-linear-coeffs invalid_value
        a2l-rat-func-coeffs invalid_value
        a2l-display-identifier TestIdentifier
        a2l-group TestGroup
        a2l-max-refresh 50ms
        a2l-read-only
        a2l-unit °C
        """
    parsed = A2lCodeComment.from_comment(comment)

    assert parsed.a2l_type == A2lType.UNKNOWN
    assert parsed.characteristic_type == CharacteristicType.VALUE
    assert parsed.on
    assert parsed.description == "This is a test description"
    assert parsed.min_value == 0.0
    assert parsed.max_value == 0.0
    assert parsed.linear_coeffs == "invalid_value"
    assert parsed.rat_func_coeffs == "invalid_value"
    assert parsed.display_identifier == "TestIdentifier"
    assert parsed.group == "TestGroup"
    assert parsed.max_refresh == "50ms"
    assert parsed.read_only
    assert not parsed.read_write
    assert parsed.unit == "°C"


def test_defaults():
    parsed = A2lCodeComment()

    assert not parsed.on
    assert parsed.a2l_type == A2lType.UNKNOWN
    assert parsed.characteristic_type == CharacteristicType.VALUE
    assert parsed.description == ""
    assert parsed.min_value == 0.0
    assert parsed.max_value == 0.0
    assert parsed.linear_coeffs == ""
    assert parsed.rat_func_coeffs == ""
    assert parsed.display_identifier == ""
    assert parsed.group == ""
    assert parsed.max_refresh == ""
    assert not parsed.read_only
    assert not parsed.read_write
    assert parsed.unit == ""


def test_scientific_notation():
    comment = """
        a2l on
        a2l-type Measurement
        a2l-min -1.23e4
        a2l-max 5.67E-3
        """
    parsed = A2lCodeComment.from_comment(comment)

    assert parsed.on
    assert parsed.a2l_type == A2lType.MEASUREMENT
    assert parsed.min_value == -12300.0
    assert parsed.max_value == 0.00567


def test_empty_comment_equals_defaults():
    assert A2lCodeComment.from_comment("") == A2lCodeComment()


def test_off_after_on_disables():
    parsed = A2lCodeComment.from_comment("a2l on\na2l off\n")
    assert not parsed.on


def test_read_write_flag():
    parsed = A2lCodeComment.from_comment("a2l-read-write\n")
    assert parsed.read_write
    assert not parsed.read_only


def test_max_refresh_does_not_set_max():
    parsed = A2lCodeComment.from_comment("a2l-max-refresh 50ms\n")
    assert parsed.max_refresh == "50ms"
    assert parsed.max_value == 0.0


def test_carriage_returns_are_stripped():
    parsed = A2lCodeComment.from_comment("a2l-unit m/s\r\na2l-group TestGroup\r\n")
    assert parsed.unit == "m/s"
    assert parsed.group == "TestGroup"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a2l-characteristic-type ascii", CharacteristicType.ASCII),
        ("a2l-characteristic-type VALUE", CharacteristicType.VALUE),
        ("a2l-characteristic-type ValBlk", CharacteristicType.VAL_BLK),
        ("a2l-characteristic-type InvalidType", CharacteristicType.VALUE),
    ],
)
def test_characteristic_type_names(text, expected):
    assert A2lCodeComment.from_comment(text).characteristic_type == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a2l-type Measurement", A2lType.MEASUREMENT),
        ("a2l-type CHARACTERISTIC", A2lType.CHARACTERISTIC),
        ("a2l-type InvalidType", A2lType.UNKNOWN),
    ],
)
def test_a2l_type_from_str(text, expected):
    assert A2lType.from_str(text) == expected