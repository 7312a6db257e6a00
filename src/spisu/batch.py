"""Batch descriptions: records to encode, read from YAML or JSON.

Example::

    family: export
    records:
      - layout: name
        fields: {serial_number: 1, name: Abo OY}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

import orjson
import yaml

from spisu.errors import BatchError
from spisu.layouts.registry import EXPORT, REGISTRIES, SchemaRegistry
from spisu.record import Record


@dataclass
class BatchEntry:
    layout: str
    fields: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_mapping(payload: Any) -> BatchEntry:
        if not isinstance(payload, dict) or "layout" not in payload:
            raise BatchError(f"Batch entry needs a 'layout' key: {payload!r}")
        fields = payload.get("fields") or {}
        if not isinstance(fields, dict):
            raise BatchError(f"Batch entry fields must be a mapping: {fields!r}")
        return BatchEntry(layout=str(payload["layout"]), fields=dict(fields))


@dataclass
class Batch:
    family: str = EXPORT.name
    records: list[BatchEntry] = field(default_factory=list)

    @property
    def registry(self) -> SchemaRegistry:
        try:
            return REGISTRIES[self.family]
        except KeyError:
            raise BatchError(
                f"Unknown layout family '{self.family}'. Choose from {sorted(REGISTRIES)}."
            ) from None

    @staticmethod
    def from_mapping(payload: Any) -> Batch:
        if not isinstance(payload, dict):
            raise BatchError("Batch file must contain a mapping at the top level")
        entries = payload.get("records")
        if not isinstance(entries, list):
            raise BatchError("Batch file needs a 'records' list")
        return Batch(
            family=str(payload.get("family", EXPORT.name)),
            records=[BatchEntry.from_mapping(entry) for entry in entries],
        )


def load_batch(path: Path) -> Batch:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    else:
        payload = orjson.loads(path.read_bytes())
    return Batch.from_mapping(payload)


def _coerce(value: Any, is_date: bool) -> Any:
    # JSON has no date type; YAML already yields ``date`` for ISO dates
    if is_date and isinstance(value, str) and "-" in value:
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise BatchError(f"Invalid ISO date {value!r}") from exc
    return value


def build_records(batch: Batch) -> list[Record]:
    """Instantiate and fill one record per batch entry."""
    registry = batch.registry
    records: list[Record] = []
    for entry in batch.records:
        schema = registry.by_name(entry.layout)
        record = Record(schema)
        for name, value in entry.fields.items():
            descriptor = schema.descriptor_for(name)
            record.set(name, _coerce(value, descriptor.date))
        records.append(record)
    return records
