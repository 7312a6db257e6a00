"""Record shapes of files the bank sends back."""

from __future__ import annotations

from spisu.schema.descriptor import declare
from spisu.schema.layout import define_schema

ACCOUNT = define_schema(
    "account",
    "1",
    {
        "debit_account": "2:12:N",
        "transaction_date": declare("13:18:N", date=True),
    },
)

SCHEMAS = (ACCOUNT,)
