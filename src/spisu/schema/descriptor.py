"""Field descriptors in the compact ``start:end:type`` notation.

Columns are 1-based and inclusive, as printed in the bank's format manual:
``"9:73:AN"`` is a 65 character alphanumeric field starting at column 9.
Type tags:
- ``N``  zero-padded numeric
- ``AN`` space-padded, uppercased text
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from spisu.codec.numeric import SignMode
from spisu.errors import MalformedSchema

COLUMN_RE = re.compile(r"[0-9]+")


class FieldKind(str, Enum):
    NUMERIC = "N"
    ALPHANUMERIC = "AN"


@dataclass(frozen=True)
class FieldDescriptor:
    start: int
    end: int
    kind: FieldKind
    scale: int = 0
    sign: SignMode = SignMode.NONE
    date: bool = False

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    @property
    def span(self) -> slice:
        """0-based slice of the field inside a record line."""
        return slice(self.start - 1, self.end)

    @property
    def is_numeric(self) -> bool:
        return self.kind is FieldKind.NUMERIC

    def __str__(self) -> str:
        return f"{self.start}:{self.end}:{self.kind.value}"


def parse_descriptor(spec: str) -> FieldDescriptor:
    tokens = spec.strip().split(":")
    if len(tokens) != 3:
        raise MalformedSchema(f"Descriptor {spec!r} must have the form start:end:type")
    start_tok, end_tok, kind_tok = tokens
    if not COLUMN_RE.fullmatch(start_tok) or not COLUMN_RE.fullmatch(end_tok):
        raise MalformedSchema(f"Descriptor {spec!r} has a non-integer column")
    try:
        kind = FieldKind(kind_tok.upper())
    except ValueError as exc:
        raise MalformedSchema(f"Descriptor {spec!r} has unknown type tag {kind_tok!r}") from exc
    start, end = int(start_tok), int(end_tok)
    if start < 1:
        raise MalformedSchema(f"Descriptor {spec!r} starts before column 1")
    if start > end:
        raise MalformedSchema(f"Descriptor {spec!r} ends before it starts")
    return FieldDescriptor(start=start, end=end, kind=kind)


def declare(
    spec: str, *, scale: int = 0, sign: SignMode = SignMode.NONE, date: bool = False
) -> FieldDescriptor:
    """Parse ``spec`` and attach the numeric options it cannot express."""
    descriptor = parse_descriptor(spec)
    has_options = scale != 0 or sign is not SignMode.NONE or date
    if has_options and not descriptor.is_numeric:
        raise MalformedSchema(f"Descriptor {spec!r}: only numeric fields take options")
    if scale < 0:
        raise MalformedSchema(f"Descriptor {spec!r}: scale must not be negative")
    if date and (scale or sign is not SignMode.NONE):
        raise MalformedSchema(f"Descriptor {spec!r}: date fields are unsigned and unscaled")
    if date and descriptor.width < 6:
        raise MalformedSchema(f"Descriptor {spec!r}: a yymmdd date needs 6 columns")
    return FieldDescriptor(
        start=descriptor.start,
        end=descriptor.end,
        kind=descriptor.kind,
        scale=scale,
        sign=SignMode(sign),
        date=date,
    )
