"""Record schemas: one immutable field table per record shape."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from spisu.errors import MalformedSchema, UnknownField
from spisu.logging_setup import get_logger
from spisu.schema.descriptor import FieldDescriptor, parse_descriptor

RECORD_WIDTH = 80
TYPE_CODE_COLUMN = 1

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class RecordSchema:
    name: str
    type_code: str
    fields: Mapping[str, FieldDescriptor] = field(repr=False)
    record_width: int = RECORD_WIDTH

    def descriptor_for(self, name: str) -> FieldDescriptor:
        try:
            return self.fields[name]
        except KeyError:
            raise UnknownField(self.name, name) from None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def _check_layout(name: str, fields: dict[str, FieldDescriptor], record_width: int) -> None:
    taken: list[tuple[int, int, str]] = []
    for field_name, descriptor in fields.items():
        if not field_name.isidentifier() or field_name == "type_code":
            raise MalformedSchema(f"{name}: invalid field name {field_name!r}")
        if descriptor.end > record_width:
            raise MalformedSchema(
                f"{name}.{field_name} ends at column {descriptor.end}, "
                f"past the record width {record_width}"
            )
        if descriptor.start <= TYPE_CODE_COLUMN:
            raise MalformedSchema(f"{name}.{field_name} overlaps the type code column")
        for start, end, other in taken:
            if descriptor.start <= end and start <= descriptor.end:
                raise MalformedSchema(f"{name}.{field_name} overlaps {name}.{other}")
        taken.append((descriptor.start, descriptor.end, field_name))


def define_schema(
    name: str,
    type_code: str,
    fields: Mapping[str, str | FieldDescriptor],
    *,
    record_width: int = RECORD_WIDTH,
) -> RecordSchema:
    """Build the schema of a record shape from ``name -> descriptor`` pairs.

    Descriptors may be compact strings (``"2:8:N"``) or the result of
    ``declare`` when a field needs a scale, sign mode or date flag.
    """
    if len(type_code) != 1:
        raise MalformedSchema(f"{name}: type code must be a single character, got {type_code!r}")
    parsed = {
        field_name: spec if isinstance(spec, FieldDescriptor) else parse_descriptor(spec)
        for field_name, spec in fields.items()
    }
    _check_layout(name, parsed, record_width)
    logger.debug("Declared record shape %s (type %s, %d fields)", name, type_code, len(parsed))
    return RecordSchema(
        name=name,
        type_code=type_code,
        fields=MappingProxyType(parsed),
        record_width=record_width,
    )
