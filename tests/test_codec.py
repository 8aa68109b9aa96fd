import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest
from structlog.testing import capture_logs

from licensefeatures import (
    DecodeError,
    Feature,
    FeatureCodec,
    FeatureKind,
    FeatureTooLargeError,
    InvalidEncodingError,
    LengthMismatchError,
    TruncatedInputError,
    UnknownTypeCodeError,
    decode,
    encode,
)
from licensefeatures.codec import decode_feature, encode_feature, get_default_codec, header_length
from licensefeatures.conf import CodecSettings, get_settings, loader
from licensefeatures.serialization import Deserializer, MaxBytesExceededError, Serializer, TooLongError
from licensefeatures.utils.result import Err, Ok, is_err, is_ok


def _word(value: int) -> bytes:
    return value.to_bytes(4, 'big', signed=True)


ROUND_TRIP_CASES: list[tuple[Callable[[str, Any], Feature], Any, Callable[[Feature], Any]]] = [
    (Feature.from_binary, b'\x00\x00binary\x00', Feature.as_binary),
    (Feature.from_string, 'Ünïcödé ✓', Feature.as_string),
    (Feature.from_byte, -100, Feature.as_byte),
    (Feature.from_short, -2, Feature.as_short),
    (Feature.from_int, 2 ** 31 - 1, Feature.as_int),
    (Feature.from_long, -2 ** 63, Feature.as_long),
    (Feature.from_float, -1.25, Feature.as_float),
    (Feature.from_double, math.e, Feature.as_double),
    (Feature.from_big_integer, 2 ** 200 + 1, Feature.as_big_integer),
    (Feature.from_big_decimal, Decimal('-0.000123'), Feature.as_big_decimal),
    (Feature.from_timestamp, datetime(2030, 5, 17, 8, 0, 1, 500000, tzinfo=timezone.utc), Feature.as_timestamp),
]


@pytest.mark.parametrize('constructor,value,accessor', ROUND_TRIP_CASES)
def test_round_trip(constructor: Callable[[str, Any], Feature], value: Any,
                    accessor: Callable[[Feature], Any]) -> None:
    feature = constructor('some.feature', value)
    result = decode(encode(feature))
    assert is_ok(result)
    decoded = result.unwrap()
    assert decoded == feature
    assert accessor(decoded) == value


@pytest.mark.parametrize('constructor,value,accessor', ROUND_TRIP_CASES)
def test_round_trip_legacy_framing(constructor: Callable[[str, Any], Feature], value: Any,
                                   accessor: Callable[[Feature], Any]) -> None:
    codec = FeatureCodec(CodecSettings(legacy_framing=True))
    feature = constructor('some.feature', value)
    assert accessor(codec.decode(codec.encode(feature)).unwrap()) == value


def test_fixed_width_layout() -> None:
    data = encode(Feature.from_int('n', 7))
    assert data == _word(5) + _word(1) + b'n' + _word(7)
    assert len(data) == header_length(FeatureKind.INT) + 1 + 4


def test_variable_length_layout() -> None:
    payload = b'\x00' * 3 + b'\x01' + b'\x00' * 3
    data = encode(Feature.from_binary('key', payload))
    assert data == _word(1) + _word(3) + _word(len(payload)) + b'key' + payload
    assert len(data) == 12 + 3 + len(payload)
    assert decode(data).unwrap().as_binary() == payload


def test_name_length_counts_utf8_bytes() -> None:
    name = 'naïve'
    data = encode(Feature.from_string(name, ''))
    assert int.from_bytes(data[4:8], 'big') == len(name.encode('utf-8')) == 6
    assert decode(data).unwrap().name == name


def test_encode_is_deterministic() -> None:
    first = encode(Feature.from_big_decimal('d', Decimal('1.10')))
    second = encode(Feature.from_big_decimal('d', Decimal('1.10')))
    assert first == second
    assert first != encode(Feature.from_big_decimal('d', Decimal('1.1')))


def test_encode_method_and_decode_classmethod() -> None:
    feature = Feature.from_long('expires', 1234)
    assert feature.encode() == encode(feature)
    assert Feature.decode(feature.encode()) == feature


def test_decode_accepts_buffers() -> None:
    data = encode(Feature.from_string('s', 'value'))
    assert decode(bytearray(data)).unwrap() == decode(memoryview(data)).unwrap()


@pytest.mark.parametrize('data,minimum', [
    (b'', 8),
    (b'\x00\x00\x00', 8),
    (_word(5) + b'\x00\x00\x00', 8),
    # a variable-length kind needs the third word
    (_word(2) + _word(0) + b'\x00\x00', 12),
])
def test_truncated_input(data: bytes, minimum: int) -> None:
    result = decode(data)
    assert is_err(result)
    error = result.unwrap_err()
    assert isinstance(error, TruncatedInputError)
    assert error.actual == len(data)
    assert error.minimum == minimum


def test_unknown_type_code() -> None:
    result = decode(_word(255) + _word(0) + _word(0))
    error = result.unwrap_err()
    assert isinstance(error, UnknownTypeCodeError)
    assert error.code == 255


def test_length_mismatch_short_payload() -> None:
    data = _word(2) + _word(0) + _word(10) + b'abcdef'
    error = decode(data).unwrap_err()
    assert isinstance(error, LengthMismatchError)
    assert error.expected == 22
    assert error.actual == 18


@pytest.mark.parametrize('data', [
    encode(Feature.from_int('n', 1)) + b'\x00',
    encode(Feature.from_string('s', 'abc'))[:-1],
    _word(5) + _word(-1) + _word(1),
    _word(1) + _word(0) + _word(-4),
    _word(1) + _word(2 ** 31 - 1) + _word(0) + b'x',
])
def test_length_mismatch(data: bytes) -> None:
    assert isinstance(decode(data).unwrap_err(), LengthMismatchError)


def test_invalid_name_encoding() -> None:
    data = _word(1) + _word(2) + _word(0) + b'\xc3\x28'
    error = decode(data).unwrap_err()
    assert isinstance(error, InvalidEncodingError)


def test_payload_content_is_not_validated() -> None:
    data = _word(10) + _word(1) + _word(2) + b'd' + b'\x00\x01'
    feature = decode(data).unwrap()
    assert feature.kind is FeatureKind.BIG_DECIMAL
    assert feature.payload == b'\x00\x01'


@pytest.mark.parametrize('data', [
    b'\xff' * 7,
    b'\xff' * 12,
    b'\x00' * 12,
    b'\x00' * 100,
    _word(11) + _word(0) + b'\x00' * 7,
])
def test_decode_never_raises(data: bytes) -> None:
    result = decode(data)
    assert isinstance(result, Err)
    assert isinstance(result.unwrap_err(), DecodeError)


def test_feature_decode_raises() -> None:
    with pytest.raises(UnknownTypeCodeError):
        Feature.decode(_word(0) + _word(0) + _word(0))


def test_decode_returns_ok() -> None:
    feature = Feature.from_byte('b', 1)
    assert decode(encode(feature)) == Ok(feature)


def test_legacy_framing_layout() -> None:
    feature = Feature.from_int('n', 7)
    legacy = FeatureCodec(CodecSettings(legacy_framing=True))
    data = legacy.encode(feature)
    assert data == encode(feature) + b'\x00' * 4
    assert legacy.decode(data).unwrap() == feature
    # the strict layout does not expect the trailing word
    error = decode(data).unwrap_err()
    assert isinstance(error, LengthMismatchError)
    assert (error.expected, error.actual) == (13, 17)


def test_legacy_framing_variable_length_is_unchanged() -> None:
    feature = Feature.from_string('s', 'abc')
    legacy = FeatureCodec(CodecSettings(legacy_framing=True))
    assert legacy.encode(feature) == encode(feature)


def test_legacy_framing_minimum_length() -> None:
    legacy = FeatureCodec(CodecSettings(legacy_framing=True))
    # 8 bytes are enough for a fixed-width header, but the legacy check asks for 12
    error = legacy.decode(_word(3) + _word(0)).unwrap_err()
    assert isinstance(error, TruncatedInputError)
    assert error.minimum == 12


def test_max_feature_size() -> None:
    codec = FeatureCodec(CodecSettings(max_feature_size=16))
    small = Feature.from_int('n', 1)
    big = Feature.from_string('s', 'x' * 10)
    assert codec.decode(codec.encode(small)).unwrap() == small
    with pytest.raises(MaxBytesExceededError):
        codec.encode(big)
    error = codec.decode(encode(big)).unwrap_err()
    assert isinstance(error, FeatureTooLargeError)
    assert error.limit == 16


def test_max_name_length() -> None:
    codec = FeatureCodec(CodecSettings(max_name_length=4))
    feature = Feature.from_byte('longer', 1)
    with pytest.raises(TooLongError):
        codec.encode(feature)
    error = codec.decode(encode(feature)).unwrap_err()
    assert isinstance(error, FeatureTooLargeError)
    assert error.size == 6


def test_module_level_codec_uses_global_settings(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / 'legacy.yml'
    config.write_text('legacy_framing: true\n')
    monkeypatch.setenv('LICENSEFEATURES_CONFIG_YAML', str(config))
    assert encode(Feature.from_byte('b', 1)).endswith(b'\x00' * 4)


def test_feature_functions_on_serializers() -> None:
    features = [Feature.from_string('a', 'x'), Feature.from_short('b', 2)]
    serializer = Serializer.build_bytes_serializer()
    for feature in features:
        encode_feature(serializer, feature)
    data = bytes(serializer.finalize())
    first_length = len(encode(features[0]))
    decoded = [
        decode_feature(Deserializer.build_bytes_deserializer(data[:first_length])),
        decode_feature(Deserializer.build_bytes_deserializer(data[first_length:])),
    ]
    assert decoded == features


def test_decode_failure_is_logged() -> None:
    with capture_logs() as logs:
        codec = FeatureCodec(CodecSettings())
        codec.decode(b'\x00')
    assert len(logs) == 1
    assert logs[0]['event'] == 'feature decode failed'
    assert logs[0]['log_level'] == 'debug'
    assert logs[0]['size'] == 1


def test_long_name_round_trip() -> None:
    feature = Feature.from_int('n' * 2000, 1)
    assert decode(encode(feature)).unwrap() == feature


def test_long_name_in_legacy_layout() -> None:
    name = 'é' * 1500
    data = _word(5) + _word(3000) + name.encode('utf-8') + _word(1) + bytes(4)
    legacy = FeatureCodec(CodecSettings(legacy_framing=True))
    assert legacy.decode(data) == Ok(Feature.from_int(name, 1))


@pytest.mark.parametrize('feature', [
    Feature.from_big_decimal('d', Decimal('9' * 5000 + '.25')),
    Feature.from_big_decimal('d', Decimal('-' + '3' * 4500 + 'E-7')),
    Feature.from_big_integer('n', 7 ** 6000),
])
def test_huge_numbers_round_trip(feature: Feature) -> None:
    decoded = decode(encode(feature)).unwrap()
    assert decoded == feature
    assert decoded.value() == feature.value()


def test_default_codec_is_reused() -> None:
    codec = get_default_codec()
    assert get_default_codec() is codec
    assert codec.settings is get_settings()


def test_default_codec_follows_reloaded_settings(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    codec = get_default_codec()
    config = tmp_path / 'legacy.yml'
    config.write_text('legacy_framing: true\n')
    monkeypatch.setenv('LICENSEFEATURES_CONFIG_YAML', str(config))
    loader._settings_singleton = None
    reloaded = get_default_codec()
    assert reloaded is not codec
    assert reloaded.settings.legacy_framing is True
