import pytest

from spisu.errors import LengthMismatch, MalformedSchema, UnknownRecordType
from spisu.layouts.export import NAME, PAYMENT
from spisu.layouts.registry import EXPORT, REGISTRIES, RETURNS, SchemaRegistry, parse_record
from spisu.schema.layout import define_schema


def test_registries_cover_both_families():
    assert set(REGISTRIES) == {"export", "returns"}
    assert len(EXPORT) == 8
    assert [schema.type_code for schema in RETURNS] == ["1"]


def test_lookup_by_code_and_name():
    assert EXPORT.schema_for("6") is PAYMENT
    assert EXPORT.by_name("name") is NAME
    with pytest.raises(UnknownRecordType):
        EXPORT.schema_for("1")
    with pytest.raises(UnknownRecordType):
        EXPORT.by_name("account")


def test_parse_record_dispatches_on_type_code():
    record = parse_record("20000001ABO OY" + " " * 66)
    assert record.schema is NAME
    assert record.get("name").strip() == "ABO OY"


def test_parse_record_with_returns_family():
    record = parse_record("100012345678160805" + " " * 62, RETURNS)
    assert record.get("transaction_date") == "160805"


def test_parse_record_checks_length_first():
    with pytest.raises(LengthMismatch):
        parse_record("")
    with pytest.raises(LengthMismatch):
        parse_record("20000001ABO OY")


def test_parse_record_unknown_type():
    with pytest.raises(UnknownRecordType) as excinfo:
        parse_record("8" * 80)
    assert excinfo.value.key == "8"


def test_duplicate_type_codes_are_rejected():
    clash = define_schema("other_name", "2", {"a": "2:5:N"})
    with pytest.raises(MalformedSchema):
        SchemaRegistry("broken", [NAME, clash])


def test_mixed_widths_are_rejected():
    short = define_schema("short", "S", {"a": "2:5:N"}, record_width=40)
    with pytest.raises(MalformedSchema):
        SchemaRegistry("broken", [NAME, short])
