"""Exception taxonomy for record schemas, codecs and parsing."""

from __future__ import annotations


class SpisuError(Exception):
    """Base class for every error raised by the package."""


class MalformedSchema(SpisuError, ValueError):
    """A field descriptor or record schema is structurally invalid."""


class UnknownField(SpisuError, LookupError):
    def __init__(self, schema: str, name: str) -> None:
        super().__init__(f"Record shape '{schema}' has no field '{name}'")
        self.schema = schema
        self.name = name


class UnknownRecordType(SpisuError, LookupError):
    def __init__(self, registry: str, key: str) -> None:
        super().__init__(f"No record shape '{key}' in the {registry} layouts")
        self.registry = registry
        self.key = key


class ValueTooWide(SpisuError, ValueError):
    """An encoded numeric value needs more digits than the field holds."""

    def __init__(self, value: object, digits: str, width: int) -> None:
        super().__init__(f"{value!r} needs {len(digits)} digits but the field holds {width}")
        self.value = value
        self.digits = digits
        self.width = width


class InvalidNumericField(SpisuError, ValueError):
    """Raw field text does not match the digit/sign layout of its field."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid numeric field {field!r}: {reason}")
        self.field = field
        self.reason = reason


class LengthMismatch(SpisuError, ValueError):
    def __init__(self, length: int, expected: int) -> None:
        super().__init__(f"Record line is {length} characters, expected {expected}")
        self.length = length
        self.expected = expected


class UnsupportedValue(SpisuError, TypeError):
    """A value cannot be converted for a numeric field."""


class BatchError(SpisuError, ValueError):
    """A batch description file is missing required structure."""
