import pytest

from licensefeatures import FeatureKind, UnknownTypeCodeError

WIRE_CODES = {
    FeatureKind.BINARY: 1,
    FeatureKind.STRING: 2,
    FeatureKind.BYTE: 3,
    FeatureKind.SHORT: 4,
    FeatureKind.INT: 5,
    FeatureKind.LONG: 6,
    FeatureKind.FLOAT: 7,
    FeatureKind.DOUBLE: 8,
    FeatureKind.BIG_INTEGER: 9,
    FeatureKind.BIG_DECIMAL: 10,
    FeatureKind.TIMESTAMP: 11,
}

FIXED_WIDTHS = {
    FeatureKind.BINARY: None,
    FeatureKind.STRING: None,
    FeatureKind.BYTE: 1,
    FeatureKind.SHORT: 2,
    FeatureKind.INT: 4,
    FeatureKind.LONG: 8,
    FeatureKind.FLOAT: 4,
    FeatureKind.DOUBLE: 8,
    FeatureKind.BIG_INTEGER: None,
    FeatureKind.BIG_DECIMAL: None,
    FeatureKind.TIMESTAMP: 8,
}


def test_every_kind_has_a_wire_code() -> None:
    assert set(FeatureKind) == set(WIRE_CODES)


@pytest.mark.parametrize('kind,code', WIRE_CODES.items())
def test_wire_codes_are_stable(kind: FeatureKind, code: int) -> None:
    assert kind.code == code
    assert FeatureKind.from_code(code) is kind


@pytest.mark.parametrize('kind,width', FIXED_WIDTHS.items())
def test_fixed_widths(kind: FeatureKind, width: int | None) -> None:
    assert kind.fixed_width == width
    assert kind.is_variable_length == (width is None)


@pytest.mark.parametrize('code', [0, 12, 255, -1, 2 ** 31 - 1])
def test_unknown_code(code: int) -> None:
    with pytest.raises(UnknownTypeCodeError) as e:
        FeatureKind.from_code(code)
    assert e.value.code == code
    assert str(code) in str(e.value)
