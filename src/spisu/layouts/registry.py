"""Lookup of record shapes by type code, and line dispatch."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from spisu.errors import LengthMismatch, MalformedSchema, UnknownRecordType
from spisu.layouts import export, returns
from spisu.record import Record
from spisu.schema.layout import RECORD_WIDTH, RecordSchema


class SchemaRegistry:
    """A closed family of record shapes sharing one record width."""

    def __init__(self, name: str, schemas: Iterable[RecordSchema]) -> None:
        self.name = name
        self._by_code: dict[str, RecordSchema] = {}
        self._by_name: dict[str, RecordSchema] = {}
        for schema in schemas:
            if schema.type_code in self._by_code:
                raise MalformedSchema(f"{name}: duplicate type code {schema.type_code!r}")
            if schema.name in self._by_name:
                raise MalformedSchema(f"{name}: duplicate shape name {schema.name!r}")
            self._by_code[schema.type_code] = schema
            self._by_name[schema.name] = schema
        widths = {schema.record_width for schema in self._by_code.values()}
        if len(widths) > 1:
            raise MalformedSchema(f"{name}: shapes disagree on record width {sorted(widths)}")
        self.record_width = widths.pop() if widths else RECORD_WIDTH

    def schema_for(self, type_code: str) -> RecordSchema:
        try:
            return self._by_code[type_code]
        except KeyError:
            raise UnknownRecordType(self.name, type_code) from None

    def by_name(self, name: str) -> RecordSchema:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownRecordType(self.name, name) from None

    def __iter__(self) -> Iterator[RecordSchema]:
        return iter(self._by_code.values())

    def __len__(self) -> int:
        return len(self._by_code)


EXPORT = SchemaRegistry("export", export.SCHEMAS)
RETURNS = SchemaRegistry("returns", returns.SCHEMAS)
REGISTRIES = {EXPORT.name: EXPORT, RETURNS.name: RETURNS}


def parse_record(line: str, registry: SchemaRegistry = EXPORT) -> Record:
    """Pick the shape from column 1 and load ``line`` into a record."""
    if len(line) != registry.record_width:
        raise LengthMismatch(len(line), registry.record_width)
    return Record.from_string(registry.schema_for(line[0]), line)
