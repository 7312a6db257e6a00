"""Zero-padded numeric fields with optional trailing overpunch signs.

Amounts are carried with an implied number of decimals (``scale``): ``100.45``
in a scale-2 field is written as the digits ``10045``. Digits beyond the scale
are dropped, never rounded. The sign, when a field carries one, replaces the
last digit with a letter from the zoned overpunch alphabets below.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from enum import Enum

from spisu.errors import InvalidNumericField, UnsupportedValue, ValueTooWide

DIGITS_RE = re.compile(r"[0-9]*")

# This format writes negative zero as "-" instead of the EBCDIC "}".
NEGATIVE_OVERPUNCH = {
    "0": "-",
    "1": "J",
    "2": "K",
    "3": "L",
    "4": "M",
    "5": "N",
    "6": "O",
    "7": "P",
    "8": "Q",
    "9": "R",
}
POSITIVE_OVERPUNCH = {
    "0": "{",
    "1": "A",
    "2": "B",
    "3": "C",
    "4": "D",
    "5": "E",
    "6": "F",
    "7": "G",
    "8": "H",
    "9": "I",
}
_NEGATIVE_DIGITS = {v: k for k, v in NEGATIVE_OVERPUNCH.items()} | {"}": "0"}
_POSITIVE_DIGITS = {v: k for k, v in POSITIVE_OVERPUNCH.items()}


class SignMode(str, Enum):
    """How a numeric field records the sign of its value."""

    NONE = "none"  # unsigned, negative input is written as its magnitude
    TRAILING = "trailing"  # negative values overpunch the last digit
    ZONED = "zoned"  # both signs overpunch the last digit
    CREDIT = "credit"  # always marked negative, input sign ignored


def to_decimal(value: object) -> Decimal:
    """Coerce a field value into a ``Decimal``.

    Floats go through ``str`` so ``1189104.93`` keeps its two decimals.
    ``None`` and the empty string mean zero. NaN and infinities are rejected.
    """
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, bool):
        raise UnsupportedValue(f"Booleans are not numeric field values: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(int(value))
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise UnsupportedValue(f"Not a number: {value!r}") from exc
    else:
        raise UnsupportedValue(f"Cannot write {type(value).__name__} to a numeric field")
    if not result.is_finite():
        raise UnsupportedValue(f"Not a finite number: {value!r}")
    return result


def scale_to_int(amount: Decimal, scale: int) -> int:
    """Shift ``amount`` left by ``scale`` decimals, truncating the remainder."""
    return int(amount.scaleb(scale).to_integral_value(rounding=ROUND_DOWN))


def _overpunch(digits: str, negative: bool, sign: SignMode) -> str:
    if sign is SignMode.NONE:
        return digits
    if sign is SignMode.CREDIT:
        negative = True
    if negative:
        return digits[:-1] + NEGATIVE_OVERPUNCH[digits[-1]]
    if sign is SignMode.ZONED:
        return digits[:-1] + POSITIVE_OVERPUNCH[digits[-1]]
    return digits


def encode_numeric(
    value: object, width: int, *, scale: int = 0, sign: SignMode = SignMode.NONE
) -> str:
    """Render ``value`` as exactly ``width`` characters.

    Dates render as ``yymmdd``. Values needing more than ``width`` digits raise
    ``ValueTooWide``; a financial value is never cut short.
    """
    if isinstance(value, date):
        digits = value.strftime("%y%m%d")
        if len(digits) > width:
            raise ValueTooWide(value, digits, width)
        return digits.rjust(width, "0")

    amount = to_decimal(value)
    magnitude = scale_to_int(abs(amount), scale)
    digits = str(magnitude)
    if len(digits) > width:
        raise ValueTooWide(value, digits, width)
    digits = digits.rjust(width, "0")
    return _overpunch(digits, amount < 0 and magnitude != 0, sign)


def _split_sign(field: str, sign: SignMode) -> tuple[str, bool]:
    last = field[-1]
    if last.isascii() and last.isdigit():
        if sign is SignMode.CREDIT:
            raise InvalidNumericField(field, "credit field is missing its sign mark")
        return last, False
    if sign in (SignMode.TRAILING, SignMode.ZONED, SignMode.CREDIT) and last in _NEGATIVE_DIGITS:
        return _NEGATIVE_DIGITS[last], True
    if sign is SignMode.ZONED and last in _POSITIVE_DIGITS:
        return _POSITIVE_DIGITS[last], False
    raise InvalidNumericField(field, f"unexpected trailing character {last!r}")


def decode_numeric(
    field: str, *, scale: int = 0, sign: SignMode = SignMode.NONE
) -> Decimal | None:
    """Parse a numeric field back into a ``Decimal``; blank fields are ``None``.

    Credit fields decode to their magnitude since the mark is not a sign of
    the value itself.
    """
    if not field.strip():
        return None
    if not DIGITS_RE.fullmatch(field[:-1]):
        raise InvalidNumericField(field, "non-digit before the last position")
    last_digit, negative = _split_sign(field, sign)
    amount = Decimal(int(field[:-1] + last_digit)).scaleb(-scale)
    if negative and sign is not SignMode.CREDIT:
        amount = -amount
    return amount


def decode_digits(field: str) -> str | None:
    """Validate a digits-only field (dates, identifiers) and return it as text."""
    if not field.strip():
        return None
    if not DIGITS_RE.fullmatch(field):
        raise InvalidNumericField(field, "expected digits only")
    return field
