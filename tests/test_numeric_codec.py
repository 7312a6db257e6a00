from datetime import date
from decimal import Decimal

import pytest

from spisu.codec.numeric import (
    SignMode,
    decode_digits,
    decode_numeric,
    encode_numeric,
    to_decimal,
)
from spisu.errors import InvalidNumericField, UnsupportedValue, ValueTooWide


def test_zero_pads_to_width():
    assert encode_numeric(120, 11) == "00000000120"


def test_empty_values_encode_as_zero():
    assert encode_numeric("", 4) == "0000"
    assert encode_numeric(None, 4) == "0000"


def test_scale_truncates_extra_decimals():
    assert encode_numeric(Decimal("12.349"), 6, scale=2) == "001234"
    assert encode_numeric(Decimal("-0.009"), 4, scale=2, sign=SignMode.TRAILING) == "0000"


def test_float_amounts_keep_their_decimals():
    assert encode_numeric(1_189_104.93, 13, scale=2) == "0000118910493"
    assert encode_numeric(99.90, 11, scale=2) == "00000009990"


def test_too_many_digits_is_rejected():
    with pytest.raises(ValueTooWide) as excinfo:
        encode_numeric(123456, 5)
    assert excinfo.value.width == 5


def test_trailing_sign_overpunches_negative_values():
    assert encode_numeric(-100.45, 12, scale=2, sign=SignMode.TRAILING) == "00000001004N"
    assert encode_numeric(-10.58, 15, scale=2, sign=SignMode.TRAILING) == "00000000000105Q"
    assert encode_numeric(-10, 4, sign=SignMode.TRAILING) == "001-"
    assert encode_numeric(100.45, 12, scale=2, sign=SignMode.TRAILING) == "000000010045"


def test_trailing_sign_decodes_back():
    assert decode_numeric("00000001004N", scale=2, sign=SignMode.TRAILING) == Decimal("-100.45")
    assert decode_numeric("001-", sign=SignMode.TRAILING) == Decimal(-10)
    assert decode_numeric("001}", sign=SignMode.TRAILING) == Decimal(-10)
    assert decode_numeric("000000010045", scale=2, sign=SignMode.TRAILING) == Decimal("100.45")


def test_credit_marks_regardless_of_sign():
    positive = encode_numeric(99.90, 11, scale=2, sign=SignMode.CREDIT)
    negative = encode_numeric(-99.90, 11, scale=2, sign=SignMode.CREDIT)
    assert positive == negative == "0000000999-"
    assert encode_numeric(10.54, 13, scale=2, sign=SignMode.CREDIT) == "000000000105M"
    assert decode_numeric("000000000105M", scale=2, sign=SignMode.CREDIT) == Decimal("10.54")


def test_credit_requires_the_mark():
    with pytest.raises(InvalidNumericField):
        decode_numeric("00000009990", scale=2, sign=SignMode.CREDIT)


def test_zoned_overpunches_both_signs():
    assert encode_numeric(123, 4, sign=SignMode.ZONED) == "012C"
    assert encode_numeric(-123, 4, sign=SignMode.ZONED) == "012L"
    assert encode_numeric(120, 4, sign=SignMode.ZONED) == "012{"
    assert decode_numeric("012C", sign=SignMode.ZONED) == 123
    assert decode_numeric("012L", sign=SignMode.ZONED) == -123


@pytest.mark.parametrize(
    "field,sign",
    [
        ("12A4", SignMode.NONE),
        ("012N", SignMode.NONE),
        ("012C", SignMode.TRAILING),
        ("01 2", SignMode.NONE),
        ("012?", SignMode.ZONED),
    ],
)
def test_invalid_numeric_fields(field, sign):
    with pytest.raises(InvalidNumericField):
        decode_numeric(field, sign=sign)


def test_blank_field_decodes_to_none():
    assert decode_numeric("      ") is None
    assert decode_digits("      ") is None


@pytest.mark.parametrize("value", [0, 1, 7, 120, 99999])
def test_unsigned_round_trip(value):
    assert decode_numeric(encode_numeric(value, 5)) == value


def test_scaled_round_trip():
    assert decode_numeric(encode_numeric(Decimal("100.45"), 12, scale=2), scale=2) == Decimal(
        "100.45"
    )


def test_dates_render_as_yymmdd():
    assert encode_numeric(date(2016, 8, 5), 6) == "160805"
    assert decode_digits("160805") == "160805"
    with pytest.raises(InvalidNumericField):
        decode_digits("16O805")


@pytest.mark.parametrize(
    "value",
    [object(), "abc", True, "NaN", float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity")],
)
def test_unsupported_values(value):
    with pytest.raises(UnsupportedValue):
        to_decimal(value)
