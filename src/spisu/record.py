"""Generic fixed-width record driven by a ``RecordSchema``.

A record is nothing but its character buffer. Setters encode straight into
the buffer and getters decode straight out of it, so what ``get`` returns is
always what ``render`` would put on the wire. Only fields declared in the
schema are reachable; there is no raw column access.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal

from spisu.codec.numeric import (
    SignMode,
    decode_digits,
    decode_numeric,
    encode_numeric,
    to_decimal,
)
from spisu.codec.text import decode_text, encode_text
from spisu.errors import LengthMismatch, UnsupportedValue
from spisu.logging_setup import get_logger
from spisu.schema.descriptor import FieldDescriptor
from spisu.schema.layout import RecordSchema

logger = get_logger(__name__)


class Record:
    __slots__ = ("schema", "_buffer")

    def __init__(self, schema: RecordSchema, values: Mapping[str, object] | None = None) -> None:
        self.schema = schema
        self._buffer = [" "] * schema.record_width
        self._buffer[0] = schema.type_code
        for name, descriptor in schema.fields.items():
            if descriptor.is_numeric:
                self._write(descriptor, self._encode(name, descriptor, 0))
        if values:
            self.update(values)

    @classmethod
    def from_string(cls, schema: RecordSchema, line: str) -> Record:
        """Load an existing line; fields are only validated when read."""
        if len(line) != schema.record_width:
            raise LengthMismatch(len(line), schema.record_width)
        record = cls.__new__(cls)
        record.schema = schema
        record._buffer = list(line)
        return record

    @property
    def type_code(self) -> str:
        return self._buffer[0]

    def _write(self, descriptor: FieldDescriptor, text: str) -> None:
        self._buffer[descriptor.span] = list(text)

    def _encode(self, name: str, descriptor: FieldDescriptor, value: object) -> str:
        if not descriptor.is_numeric:
            return encode_text(value, descriptor.width)
        if isinstance(value, date):
            if not descriptor.date:
                raise UnsupportedValue(f"{self.schema.name}.{name} is not a date field")
        elif descriptor.sign in (SignMode.NONE, SignMode.CREDIT):
            # TODO: settle whether payment and credit memo amounts should carry the sign
            if to_decimal(value) < 0:
                logger.warning(
                    "%s.%s does not record a sign; writing the magnitude of %s",
                    self.schema.name,
                    name,
                    value,
                )
        return encode_numeric(
            value, descriptor.width, scale=descriptor.scale, sign=descriptor.sign
        )

    def set(self, name: str, value: object) -> None:
        descriptor = self.schema.descriptor_for(name)
        self._write(descriptor, self._encode(name, descriptor, value))

    def get(self, name: str) -> Decimal | str | None:
        descriptor = self.schema.descriptor_for(name)
        raw = "".join(self._buffer[descriptor.span])
        if not descriptor.is_numeric:
            return decode_text(raw)
        if descriptor.date:
            return decode_digits(raw)
        return decode_numeric(raw, scale=descriptor.scale, sign=descriptor.sign)

    def update(self, values: Mapping[str, object]) -> None:
        """Set several fields at once; nothing is written if any of them fails."""
        encoded: list[tuple[FieldDescriptor, str]] = []
        for name, value in values.items():
            descriptor = self.schema.descriptor_for(name)
            encoded.append((descriptor, self._encode(name, descriptor, value)))
        for descriptor, text in encoded:
            self._write(descriptor, text)

    def to_dict(self, strip: bool = True) -> dict[str, Decimal | str | None]:
        """Decode every declared field, trimming text padding when ``strip``."""
        result: dict[str, Decimal | str | None] = {}
        for name in self.schema:
            value = self.get(name)
            if strip and isinstance(value, str):
                value = value.strip()
            result[name] = value
        return result

    def render(self) -> str:
        return "".join(self._buffer)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Record({self.schema.name}, {self.render()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.schema is other.schema and self._buffer == other._buffer

    __hash__ = None  # type: ignore[assignment]
