"""Record shapes of the outgoing foreign payment file.

A file is an opening record (0), then per payment a name (2), address (3),
bank (4), payment (6) or credit memo (5) and optional reason (7) record, and
a closing reconciliation record (9). Each shape is data only; all behaviour
comes from ``spisu.record.Record``.
"""

from __future__ import annotations

from enum import IntEnum

from spisu.codec.numeric import SignMode
from spisu.schema.descriptor import declare
from spisu.schema.layout import define_schema


class AccountType(IntEnum):
    DEPOSIT_ACCOUNT = 0
    CURRENT_ACCOUNT = 1


class CostResponsibility(IntEnum):
    SHARED = 0
    ALL_EXPENSES = 1
    OWN_EXPENSES = 2


class Priority(IntEnum):
    NORMAL = 0
    EXPRESS = 1


OPENING = define_schema(
    "opening",
    "0",
    {
        "account": "2:9:N",
        "creation_date": declare("10:15:N", date=True),
        "name": "16:37:AN",
        "address": "38:72:AN",
        "pay_date": declare("73:78:N", date=True),
    },
)

NAME = define_schema(
    "name",
    "2",
    {
        "serial_number": "2:8:N",
        "name": "9:73:AN",
    },
)

ADDRESS = define_schema(
    "address",
    "3",
    {
        "serial_number": "2:8:N",
        "address": "9:73:AN",
        "account_type": "74:74:N",
        "country_code": "75:76:AN",
        "cost_carrier": "78:78:N",
        "priority": "80:80:N",
    },
)

BANK = define_schema(
    "bank",
    "4",
    {
        "serial_number": "2:8:N",
        "bank_id": "9:20:AN",  # BIC
        "account": "21:50:AN",  # IBAN or local account number
        "name": "51:80:AN",
    },
)

CREDIT_MEMO = define_schema(
    "credit_memo",
    "5",
    {
        "serial_number": "2:8:N",
        "reference_msg": "9:33:AN",
        "amount_sek": declare("34:44:N", scale=2, sign=SignMode.CREDIT),
        "currency_code": "55:57:AN",
        "date": declare("58:63:N", date=True),
        "amount_foreign": declare("66:78:N", scale=2, sign=SignMode.CREDIT),
    },
)

PAYMENT = define_schema(
    "payment",
    "6",
    {
        "serial_number": "2:8:N",
        "reference_msg": "9:33:AN",
        "amount_sek": declare("34:44:N", scale=2),
        "currency_code": "55:57:AN",
        "date": declare("58:63:N", date=True),
        "amount_foreign": declare("66:78:N", scale=2),
    },
)

REASON = define_schema(
    "reason",
    "7",
    {
        "serial_number": "2:8:N",
        "code": "9:11:N",  # national bank reporting code
    },
)

RECONCILIATION = define_schema(
    "reconciliation",
    "9",
    {
        "account": "2:9:N",
        "sum_amount_sek": declare("10:21:N", scale=2, sign=SignMode.TRAILING),
        "total_beneficiaries": "32:43:N",
        "total_records": "44:55:N",
        "sum_amount_foreign": declare("64:78:N", scale=2, sign=SignMode.TRAILING),
    },
)

SCHEMAS = (OPENING, NAME, ADDRESS, BANK, CREDIT_MEMO, PAYMENT, REASON, RECONCILIATION)
